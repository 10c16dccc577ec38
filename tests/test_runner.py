"""
Tests for executing a dispatched ArgumentList.

subprocess.run and os.execvp are patched; no command really runs.
"""

import subprocess
from io import StringIO
from unittest.mock import Mock, patch

import pytest
from rich.console import Console

from hubwrap.core.args import ArgumentList
from hubwrap.core.errors import ToolNotFoundError
from hubwrap.core.runner import Runner, format_command


@pytest.fixture
def runner() -> Runner:
    return Runner(Console(file=StringIO(), width=200))


def printed(runner: Runner) -> str:
    return runner.console.file.getvalue()  # type: ignore[attr-defined]


def exited(returncode: int) -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=[], returncode=returncode)


class TestFormatCommand:
    def test_plain(self):
        assert format_command(["git", "push", "origin"]) == "git push origin"

    def test_quotes_spaces_and_empty(self):
        assert format_command(["echo", "created repository:", ""]) == "echo 'created repository:' ''"


@patch("hubwrap.core.runner.os.execvp")
@patch("hubwrap.core.runner.subprocess.run")
class TestRunner:
    """Dry runs, skipped lists, exec and chains."""

    def test_noop_prints_every_command(self, mock_run: Mock, mock_exec: Mock, runner: Runner):
        args = ArgumentList(["push", "origin", "feature"])
        args.schedule_after(None, ["push", "staging", "feature"])
        args.noop()

        assert runner.execute(args) == 0
        assert printed(runner) == "git push origin feature\ngit push staging feature\n"
        mock_run.assert_not_called()
        mock_exec.assert_not_called()

    def test_skipped_runs_nothing(self, mock_run: Mock, mock_exec: Mock, runner: Runner):
        args = ArgumentList(["alias", "bash"])
        args.skip()

        assert runner.execute(args) == 0
        assert printed(runner) == ""
        mock_run.assert_not_called()
        mock_exec.assert_not_called()

    def test_single_command_is_exec(self, mock_run: Mock, mock_exec: Mock, runner: Runner):
        runner.execute(ArgumentList(["status"]))

        mock_run.assert_not_called()
        mock_exec.assert_called_once_with("git", ["git", "status"])

    def test_chain_runs_children_then_execs_last(
        self, mock_run: Mock, mock_exec: Mock, runner: Runner
    ):
        mock_run.return_value = exited(0)
        args = ArgumentList(["fetch", "mislav"])
        args.schedule_before(["remote", "add", "mislav", "git://github.com/mislav/hub.git"])
        args.schedule_after("echo", ["done"])

        runner.execute(args)

        assert [c[0][0] for c in mock_run.call_args_list] == [
            ["git", "remote", "add", "mislav", "git://github.com/mislav/hub.git"],
            ["git", "fetch", "mislav"],
        ]
        mock_exec.assert_called_once_with("echo", ["echo", "done"])

    def test_failure_stops_the_chain(self, mock_run: Mock, mock_exec: Mock, runner: Runner):
        mock_run.return_value = exited(128)
        args = ArgumentList(["push", "origin", "feature"])
        args.schedule_after(None, ["push", "staging", "feature"])

        assert runner.execute(args) == 128
        assert mock_run.call_count == 1
        mock_exec.assert_not_called()

    def test_missing_child_executable(self, mock_run: Mock, mock_exec: Mock, runner: Runner):
        mock_run.side_effect = FileNotFoundError("curl")
        args = ArgumentList(["am", "/tmp/55.patch"])
        args.schedule_before(["-#LA", "hub", "url"], "curl")

        with pytest.raises(ToolNotFoundError, match="`curl` command not found"):
            runner.execute(args)
        mock_exec.assert_not_called()

    def test_missing_final_executable(self, mock_run: Mock, mock_exec: Mock, runner: Runner):
        mock_exec.side_effect = FileNotFoundError("git")

        with pytest.raises(ToolNotFoundError) as exc_info:
            runner.execute(ArgumentList(["status"]))
        assert exc_info.value.executable == "git"
