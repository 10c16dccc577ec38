"""
Tests for the ArgumentList command-line model.
"""

import pytest

from hubwrap.core.args import ArgumentList, default_executable


class TestSequenceProtocol:
    """Indexing and lookup."""

    def test_indexing(self):
        args = ArgumentList(["push", "origin", "master"])
        assert len(args) == 3
        assert args[0] == "push"
        assert args[-1] == "master"
        assert list(args) == ["push", "origin", "master"]
        assert "origin" in args

    def test_get_out_of_range(self):
        args = ArgumentList(["push"])
        assert args.get(1) is None
        assert args.get(0) == "push"

    def test_setitem(self):
        args = ArgumentList(["push", "origin,staging"])
        args[1] = "origin"
        assert args.tokens == ["push", "origin"]


class TestMutation:
    """Insertion, removal and replacement."""

    def test_insert_shifts_later_tokens(self):
        args = ArgumentList(["checkout", "URL"])
        args.insert_at(1, "--track", "-B", "feature")
        assert args.tokens == ["checkout", "--track", "-B", "feature", "URL"]
        assert args.index("URL") == 4

    def test_remove_at(self):
        args = ArgumentList(["clone", "-p", "tilt"])
        assert args.remove_at(1) == "-p"
        assert args.tokens == ["clone", "tilt"]

    def test_remove_at_out_of_range_is_noop(self):
        args = ArgumentList(["clone"])
        assert args.remove_at(5) is None
        assert args.tokens == ["clone"]

    def test_remove_value(self):
        args = ArgumentList(["clone", "-p", "tilt", "-p"])
        assert args.remove_value("-p") is True
        assert args.tokens == ["clone", "tilt", "-p"]

    def test_remove_missing_value_is_noop(self):
        args = ArgumentList(["clone", "tilt"])
        assert args.remove_value("-p") is False
        assert args.remove_value(None) is False
        assert args.tokens == ["clone", "tilt"]

    def test_replace_all(self):
        args = ArgumentList(["create", "-p"])
        args.replace_all(["remote", "add", "-f", "origin", "URL"])
        assert args.tokens == ["remote", "add", "-f", "origin", "URL"]

    def test_shift_and_pop(self):
        args = ArgumentList(["compare", "user", "a...b"])
        assert args.shift() == "compare"
        assert args.pop() == "a...b"
        assert args.pop() == "user"
        assert args.pop() is None
        assert args.is_empty()


class TestQueries:
    """words(), has_flag() and change detection."""

    def test_words(self):
        args = ArgumentList(["remote", "add", "-f", "-p", "jdoe"])
        assert args.words() == ["remote", "add", "jdoe"]

    def test_has_flag(self):
        args = ArgumentList(["help", "--all"])
        assert args.has_flag("-a", "--all")
        assert not args.has_flag("-p", "--paginate")

    def test_has_flag_with_value(self):
        args = ArgumentList(["cherry-pick", "--mainline=1", "sha"])
        assert args.has_flag("-m", "--mainline")

    def test_has_flag_does_not_match_prefix(self):
        args = ArgumentList(["log", "--all-match"])
        assert not args.has_flag("--all")

    def test_is_changed(self):
        args = ArgumentList(["push", "origin"])
        assert not args.is_changed()
        args[1] = "staging"
        assert args.is_changed()

    def test_scheduling_counts_as_change(self):
        args = ArgumentList(["fetch", "mislav"])
        args.schedule_before(["remote", "add", "mislav", "URL"])
        assert args.is_changed()


class TestExecution:
    """Executable, exec flags and command scheduling."""

    def test_default_executable(self):
        assert ArgumentList(["status"]).to_exec() == ["git", "status"]

    def test_git_env_overrides_executable(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("GIT", "/opt/git/bin/git")
        assert default_executable() == "/opt/git/bin/git"
        assert ArgumentList(["status"]).executable == "/opt/git/bin/git"

    def test_exec_flags_placed_after_executable(self):
        args = ArgumentList(["status"])
        args.add_exec_flags(["--git-dir=/tmp/repo.git", "--bare"])
        assert args.to_exec() == ["git", "--git-dir=/tmp/repo.git", "--bare", "status"]

    def test_changing_executable_drops_exec_flags(self):
        args = ArgumentList(["browse"])
        args.add_exec_flags(["--git-dir=x"])
        args.executable = "echo"
        assert args.to_exec() == ["echo", "browse"]

    def test_commands_order(self):
        args = ArgumentList(["push", "origin", "feature"])
        args.schedule_before(["fetch", "origin"])
        args.schedule_after(None, ["push", "staging", "feature"])
        args.schedule_after("echo", ["done"])
        assert args.commands() == [
            ["git", "fetch", "origin"],
            ["git", "push", "origin", "feature"],
            ["git", "push", "staging", "feature"],
            ["echo", "done"],
        ]
        assert args.is_chained()

    def test_scheduled_git_commands_receive_exec_flags(self):
        args = ArgumentList(["push", "origin,staging"])
        args.add_exec_flags(["--work-tree=/src"])
        args.schedule_after(None, ["push", "staging"])
        args.schedule_before(["-s", "url"], "curl")
        assert args.followup_commands == [["git", "--work-tree=/src", "push", "staging"]]
        assert args.prior_commands == [["curl", "-s", "url"]]

    def test_not_chained_by_default(self):
        args = ArgumentList(["status"])
        assert not args.is_chained()
        assert args.commands() == [["git", "status"]]

    def test_noop_and_skip_markers(self):
        args = ArgumentList(["status"])
        assert not args.is_dry_run()
        assert not args.is_skipped()
        args.noop()
        args.skip()
        assert args.is_dry_run()
        assert args.is_skipped()
