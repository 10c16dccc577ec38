"""
Pytest configuration and shared fixtures.

Provides a git reader that never runs git (every query answers None
unless stubbed), a fake GitHub API, and a CommandContext wired to both,
so rewrite rules can be tested without git or network access.
"""

from __future__ import annotations

from collections.abc import Callable
from io import StringIO
from pathlib import Path

import pytest
from rich.console import Console

from hubwrap.core.args import ArgumentList
from hubwrap.core.commands import CommandContext
from hubwrap.core.config import HubConfig, clear_cache
from hubwrap.core.context import GitReader
from hubwrap.core.dispatcher import Dispatcher
from hubwrap.core.github import PullRequest
from hubwrap.core.references import RepositoryReference

HUB_ENV_VARS = [
    "GITHUB_HOST",
    "GITHUB_USER",
    "GITHUB_TOKEN",
    "HUB_PROTOCOL",
    "HUB_DEBUG",
    "BROWSER",
    "GIT",
    "GIT_PAGER",
    "PAGER",
    "TMPDIR",
    "SHELL",
]


# ==============================================================================
# Environment Isolation
# ==============================================================================


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Keep the user's environment and config files out of every test."""
    for name in HUB_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    clear_cache()
    yield
    clear_cache()


# ==============================================================================
# Git and API Fakes
# ==============================================================================


class FakeGitReader(GitReader):
    """GitReader whose unstubbed queries return None instead of running git."""

    def __init__(self) -> None:
        super().__init__("git")
        self.calls: list[list[str]] = []

    def _run(self, cmd: list[str]) -> str | None:
        self.calls.append(cmd)
        return None


class FakeGitHubAPI:
    """In-memory stand-in for GitHubAPI."""

    def __init__(self) -> None:
        self.existing: set[str] = set()
        self.pulls: dict[tuple[str, str], PullRequest] = {}
        self.forked: list[RepositoryReference] = []
        self.created: list[tuple[RepositoryReference, dict[str, object]]] = []
        self.pull_requests: list[tuple[RepositoryReference, dict[str, object]]] = []

    def project_exists(self, project: RepositoryReference) -> bool:
        return project.name_with_owner in self.existing

    def fetch_pull_request(self, project: RepositoryReference, number: str | int) -> PullRequest:
        return self.pulls[(project.name_with_owner, str(number))]

    def fork_project(self, project: RepositoryReference) -> None:
        self.forked.append(project)

    def create_project(self, project: RepositoryReference, **options: object) -> None:
        self.created.append((project, options))

    def create_pull_request(self, project: RepositoryReference, **options: object) -> PullRequest:
        self.pull_requests.append((project, options))
        number = len(self.pull_requests)
        return PullRequest(
            number=number,
            html_url=f"https://{project.host}/{project.name_with_owner}/pull/{number}",
        )


def stub_repo(
    reader: GitReader,
    remotes: dict[str, str] | None = None,
    branch: str | None = "refs/heads/master",
    upstream: str | None = None,
) -> None:
    """
    Make ``reader`` answer like a git repository.

    Args:
        reader: Reader to stub
        remotes: Remote name to URL (defaults to origin = defunkt/hub)
        branch: Full ref of HEAD, or None for a detached HEAD
        upstream: Full ref the current branch tracks
    """
    if remotes is None:
        remotes = {"origin": "git://github.com/defunkt/hub.git"}

    reader.stub_command_output(["rev-parse", "-q", "--git-dir"], ".git")
    reader.stub_command_output(["remote"], "\n".join(remotes))
    for name, url in remotes.items():
        reader.stub_config_value(f"remote.{name}.url", url, get="--get-all")
    reader.stub_command_output(["symbolic-ref", "-q", "HEAD"], branch)
    if branch and upstream:
        short_name = branch.rsplit("/", 1)[-1]
        reader.stub_command_output(
            ["rev-parse", "--symbolic-full-name", f"{short_name}@{{upstream}}"], upstream
        )


# ==============================================================================
# Fixtures
# ==============================================================================


@pytest.fixture
def reader() -> FakeGitReader:
    """A reader with github.user = tpw and nothing else configured."""
    fake = FakeGitReader()
    fake.stub_config_value("github.user", "tpw")
    return fake


@pytest.fixture
def api() -> FakeGitHubAPI:
    return FakeGitHubAPI()


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A working directory named ``myproj``; also the process cwd."""
    path = tmp_path / "myproj"
    path.mkdir()
    monkeypatch.chdir(path)
    return path


@pytest.fixture
def ctx(reader: FakeGitReader, api: FakeGitHubAPI, workdir: Path) -> CommandContext:
    """CommandContext over the fake reader and API, capturing console output."""
    return CommandContext(
        reader=reader,
        config=HubConfig(browser="open"),
        cwd=workdir,
        api=api,  # type: ignore[arg-type]
        console=Console(file=StringIO(), width=200),
        err_console=Console(file=StringIO(), width=200),
    )


@pytest.fixture
def hub(ctx: CommandContext) -> Callable[..., ArgumentList]:
    """Dispatch a command line: ``hub("clone", "rtomayko/tilt")``."""

    def run(*argv: str) -> ArgumentList:
        return Dispatcher(ctx).dispatch(list(argv))

    return run


@pytest.fixture
def git_repo(reader: FakeGitReader) -> Callable[..., None]:
    """Make the fake reader answer like a repository: ``git_repo(remotes=..., branch=...)``."""

    def stub(**kwargs: object) -> None:
        stub_repo(reader, **kwargs)  # type: ignore[arg-type]

    return stub


def output(console: Console) -> str:
    """Text written to a console created with ``file=StringIO()``."""
    return console.file.getvalue()  # type: ignore[attr-defined]


@pytest.fixture
def stdout(ctx: CommandContext) -> Callable[[], str]:
    return lambda: output(ctx.console)


@pytest.fixture
def stderr(ctx: CommandContext) -> Callable[[], str]:
    return lambda: output(ctx.err_console)
