"""
Read-only queries about local git state.

Rewrite rules never shell out to git directly. They ask a GitContext for
the current branch, configured remotes, the repository's main project,
the authenticated user and similar values. All git output is read
through a caching GitReader, which tests (and ``-c name=value`` global
flags) can stub.

Example:
    >>> reader = GitReader()
    >>> reader.stub_config_value("github.user", "mislav")
    >>> GitContext(reader).github_user()
    'mislav'
"""

from __future__ import annotations

import logging
import os
import re
import shlex
import shutil
import subprocess
import sys
from dataclasses import dataclass, field
from pathlib import Path

from hubwrap.core.config import HubConfig, load_config
from hubwrap.core.errors import DomainError, ToolNotFoundError
from hubwrap.core.references import (
    ParsedHostedUrl,
    RepositoryReference,
    build_remote_url,
    default_host,
    parse_hosted_url,
    reference_from_remote_url,
)

logger = logging.getLogger(__name__)

BROWSER_CANDIDATES = ["xdg-open", "cygstart", "x-www-browser", "firefox", "opera", "mozilla", "netscape"]

USER_HELP = "Set GITHUB_USER or run `git config --global github.user <login>`"
TOKEN_HELP = "Set GITHUB_TOKEN or run `git config --global github.token <token>`"


class GitReader:
    """
    Runs git queries and caches their output.

    A query that fails or prints nothing is cached as None.

    Attributes:
        executable: git command prefix, including global flags that must
            reach every query (``--git-dir=...``, ``-c name=value``)
    """

    def __init__(self, executable: str | None = None) -> None:
        self.executable: list[str] = [executable or os.environ.get("GIT") or "git"]
        self._cache: dict[tuple[str, ...], str | None] = {}

    def add_exec_flags(self, flags: list[str]) -> None:
        self.executable.extend(flags)

    def read(self, cmd: list[str] | tuple[str, ...]) -> str | None:
        """Output of ``git <cmd>`` with the trailing newline removed, or None."""
        key = tuple(cmd)
        if key not in self._cache:
            self._cache[key] = self._run(list(cmd))
        return self._cache[key]

    def read_config(self, key: str, all: bool = False, bool_type: bool = False) -> str | None:
        """Value of a git config key (every value, newline-separated, with ``all``)."""
        cmd = ["config", "--get-all" if all else "--get"]
        if bool_type:
            cmd.append("--bool")
        cmd.append(key)
        return self.read(cmd)

    def stub_config_value(self, key: str, value: str | None, get: str = "--get") -> None:
        self.stub_command_output(["config", get, key], value)

    def stub_command_output(self, cmd: list[str], value: str | None) -> None:
        self._cache[tuple(cmd)] = None if value is None else str(value)

    def _run(self, cmd: list[str]) -> str | None:
        full = [*self.executable, *cmd]
        try:
            result = subprocess.run(
                full,
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError as e:
            raise ToolNotFoundError(self.executable[0]) from e

        output = result.stdout.rstrip("\n")
        logger.debug("git %s -> %s", " ".join(cmd), result.returncode)
        if result.returncode != 0 or not output:
            return None
        return output


@dataclass
class Branch:
    """A ref such as ``refs/heads/feature`` or ``refs/remotes/origin/master``."""

    repo: LocalRepo
    name: str

    def __str__(self) -> str:
        return self.name

    @property
    def short_name(self) -> str:
        return re.sub(r"^refs/(remotes/)?.+?/", "", self.name)

    def is_master(self) -> bool:
        return self.short_name == "master"

    def is_remote(self) -> bool:
        return self.name.startswith("refs/remotes/")

    @property
    def remote_name(self) -> str:
        match = re.match(r"^refs/remotes/([^/]+)", self.name)
        if not match:
            raise DomainError(f"can't get remote name from {self.name!r}")
        return match.group(1)

    def upstream(self) -> Branch | None:
        """The branch this one tracks, if any."""
        ref = self.repo.reader.read(
            ["rev-parse", "--symbolic-full-name", f"{self.short_name}@{{upstream}}"]
        )
        return Branch(self.repo, ref) if ref else None


@dataclass
class Remote:
    """A configured git remote."""

    repo: LocalRepo
    name: str

    def __str__(self) -> str:
        return self.name

    @property
    def urls(self) -> list[str]:
        value = self.repo.reader.read_config(f"remote.{self.name}.url", all=True)
        return value.splitlines() if value else []

    @property
    def project(self) -> RepositoryReference | None:
        """The hosted repository behind the first recognizable URL."""
        for url in self.urls:
            if project := reference_from_remote_url(url, self.repo.known_hosts):
                return project
        return None


@dataclass
class LocalRepo:
    """The git repository in the working directory."""

    reader: GitReader
    dir: Path
    _remotes: list[Remote] | None = field(default=None, repr=False)

    @property
    def name(self) -> str:
        if project := self.main_project:
            return project.name
        return self.dir.name

    @property
    def known_hosts(self) -> list[str]:
        hosts = (self.reader.read_config("hub.host", all=True) or "").splitlines()
        host = default_host()
        return [*hosts, host, f"ssh.{host}"]

    @property
    def remotes(self) -> list[Remote]:
        """Configured remotes, with ``origin`` first."""
        if self._remotes is None:
            names = (self.reader.read(["remote"]) or "").splitlines()
            if "origin" in names:
                names.remove("origin")
                names.insert(0, "origin")
            self._remotes = [Remote(self, name) for name in names]
        return self._remotes

    @property
    def remote_names(self) -> list[str]:
        return [remote.name for remote in self.remotes]

    def remotes_group(self, name: str) -> str | None:
        return self.reader.read_config(f"remotes.{name}")

    @property
    def origin_remote(self) -> Remote | None:
        return self.remotes[0] if self.remotes else None

    def remote_by_name(self, name: str) -> Remote | None:
        return next((r for r in self.remotes if r.name == name), None)

    def remote_for(self, project: RepositoryReference) -> Remote | None:
        """The remote whose URL points at ``project``."""
        for remote in self.remotes:
            remote_project = remote.project
            if remote_project and remote_project.name_with_owner == project.name_with_owner:
                return remote
        return None

    @property
    def main_project(self) -> RepositoryReference | None:
        """The hosted repository behind the ``origin`` (first) remote."""
        remote = self.origin_remote
        return remote.project if remote else None

    @property
    def upstream_project(self) -> RepositoryReference | None:
        branch = self.current_branch
        upstream = branch.upstream() if branch else None
        if upstream and upstream.is_remote():
            remote = self.remote_by_name(upstream.remote_name)
            return remote.project if remote else None
        return None

    @property
    def current_project(self) -> RepositoryReference | None:
        return self.upstream_project or self.main_project

    @property
    def current_branch(self) -> Branch | None:
        ref = self.reader.read(["symbolic-ref", "-q", "HEAD"])
        return Branch(self, ref) if ref else None

    @property
    def master_branch(self) -> Branch:
        return Branch(self, "refs/heads/master")


class GitContext:
    """
    Query surface used by rewrite rules.

    Wraps a GitReader and the loaded configuration; every method is a
    pure query apart from the cached git calls it makes.
    """

    def __init__(
        self,
        reader: GitReader | None = None,
        config: HubConfig | None = None,
        cwd: Path | None = None,
    ) -> None:
        self.reader = reader or GitReader()
        self._config = config
        self.cwd = cwd or Path.cwd()
        self._local_repo: LocalRepo | None = None

    @property
    def config(self) -> HubConfig:
        if self._config is None:
            self._config = load_config()
        return self._config

    # ------------------------------------------------------------------
    # Repository
    # ------------------------------------------------------------------

    def git_dir(self) -> str | None:
        return self.reader.read(["rev-parse", "-q", "--git-dir"])

    def is_repo(self) -> bool:
        return self.git_dir() is not None

    def local_repo(self, fatal: bool = True) -> LocalRepo | None:
        if self._local_repo is None:
            if self.is_repo():
                self._local_repo = LocalRepo(self.reader, self.cwd)
            elif fatal:
                raise DomainError("fatal: Not a git repository")
        return self._local_repo

    def _repo(self) -> LocalRepo:
        repo = self.local_repo()
        assert repo is not None
        return repo

    @property
    def repo_name(self) -> str:
        return self._repo().name

    def current_branch(self) -> Branch | None:
        return self._repo().current_branch

    def master_branch(self) -> Branch:
        # browse works outside a repository too
        repo = self.local_repo(fatal=False) or LocalRepo(self.reader, self.cwd)
        return repo.master_branch

    def current_project(self) -> RepositoryReference | None:
        return self._repo().current_project

    def main_project(self) -> RepositoryReference | None:
        return self._repo().main_project

    def remotes(self) -> list[str]:
        return self._repo().remote_names

    def remotes_group(self, name: str) -> str | None:
        return self._repo().remotes_group(name)

    def remote_for(self, project: RepositoryReference) -> Remote | None:
        return self._repo().remote_for(project)

    def known_hosts(self) -> list[str]:
        if repo := self.local_repo(fatal=False):
            return repo.known_hosts
        host = default_host()
        return [host, f"ssh.{host}"]

    def github_project(self, name: str | None = None, owner: str | None = None) -> RepositoryReference:
        """
        Build a reference from optional name/owner parts.

        ``owner`` or ``name`` may themselves be ``owner/name``. Missing parts
        default to the current repository name and the authenticated user.
        The host follows the main project when there is one.
        """
        if owner and "/" in owner:
            owner, name = owner.split("/", 1)
        elif name and "/" in name:
            owner, name = name.split("/", 1)
        else:
            name = name or self.repo_name
            owner = owner or self.github_user()

        repo = self.local_repo(fatal=False)
        main_project = repo.main_project if repo else None
        if main_project:
            return main_project.owned_by(owner).renamed(name)
        return RepositoryReference(owner=owner, name=name, host=default_host())

    def git_url(
        self, owner: str | None = None, name: str | None = None, private: bool = False
    ) -> str:
        """Clone URL for ``owner/name`` honoring the protocol preference."""
        return self.project_url(self.github_project(name, owner), private=private)

    def project_url(self, project: RepositoryReference, private: bool = False) -> str:
        """Clone URL for a reference; non-default hosts are always private."""
        return build_remote_url(
            project,
            private=private or not project.is_main_host,
            https=self.https_protocol(),
        )

    def resolve_github_url(self, url: str | None) -> ParsedHostedUrl | None:
        if not url:
            return None
        return parse_hosted_url(url, self.known_hosts())

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    def https_protocol(self) -> bool:
        if self.config.protocol:
            return self.config.prefers_https
        if self.reader.read_config("hub.protocol") == "https":
            return True
        # legacy setting
        return self.reader.read_config("hub.http-clone", bool_type=True) == "true"

    def github_user(self, fatal: bool = True) -> str | None:
        user = self.config.user or self.reader.read_config("github.user")
        if not user and fatal:
            raise DomainError(f"** No GitHub user set. {USER_HELP}")
        return user

    def github_token(self, fatal: bool = True) -> str | None:
        token = self.config.token or self.reader.read_config("github.token")
        if not token and fatal:
            raise DomainError(f"** No GitHub token set. {TOKEN_HELP}")
        return token

    def git_alias_for(self, name: str) -> str | None:
        return self.reader.read_config(f"alias.{name}")

    def rev_list(self, a: str, b: str | None) -> str | None:
        """Commits reachable from ``b`` but not from ``a``, one per line."""
        return self.reader.read(
            ["rev-list", "--cherry-pick", "--right-only", "--no-merges", f"{a}...{b or ''}"]
        )

    def git_command(self, cmd: list[str]) -> str | None:
        return self.reader.read(cmd)

    def git_editor(self) -> list[str]:
        """The user's editor command as an argument vector."""
        editor = self.reader.read(["var", "GIT_EDITOR"]) or os.environ.get("EDITOR") or "vi"
        if match := re.match(r"^\$(\w+)$", editor):
            editor = os.environ.get(match.group(1), "")
        if (editor.startswith(("~", ".")) or "/" in editor) and not re.search(r"[\"']", editor):
            editor = os.path.abspath(os.path.expanduser(editor))
        return shlex.split(editor)

    def browser_launcher(self) -> list[str]:
        """Command that opens a URL in the user's browser."""
        browser = self.config.browser
        if not browser:
            if sys.platform == "darwin":
                browser = "open"
            elif sys.platform.startswith(("win", "cygwin")):
                browser = "start"
            else:
                browser = next((c for c in BROWSER_CANDIDATES if shutil.which(c)), None)
        if not browser:
            raise DomainError("Please set $BROWSER to a web launcher to use this command.")
        return shlex.split(browser)


__all__ = [
    "Branch",
    "GitContext",
    "GitReader",
    "LocalRepo",
    "Remote",
]
