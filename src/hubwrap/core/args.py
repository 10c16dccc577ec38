"""
Mutable command-line model shared by the dispatcher and rewrite rules.

An ArgumentList holds the tokens of the git invocation being rewritten
(index 0 is the subcommand) together with scheduling metadata: commands
queued to run before or after it, flags that every git command must
receive, the executable to launch and the dry-run/skip markers.

Rules mutate the list in place. Insertions shift later tokens, so rules
re-locate tokens by value after earlier mutations instead of caching an
index.

Example:
    >>> args = ArgumentList(["push", "origin,staging", "feature"])
    >>> args[1] = "origin"
    >>> args.schedule_after(None, ["push", "staging", "feature"])
    >>> args.commands()
    [['git', 'push', 'origin', 'feature'], ['git', 'push', 'staging', 'feature']]
"""

from __future__ import annotations

import os
import re
from collections.abc import Iterable, Iterator

DEFAULT_EXECUTABLE = "git"


def default_executable() -> str:
    """Return the wrapped tool, honoring the GIT environment variable."""
    return os.environ.get("GIT") or DEFAULT_EXECUTABLE


class ArgumentList:
    """
    Ordered token sequence plus scheduling metadata.

    Attributes:
        executable: Program that runs the main command. Assigning a new
            executable drops the exec flags, which only apply to git.
        exec_flags: Flags placed between the executable and the tokens of
            every git command (e.g. ``--git-dir=...``)
    """

    def __init__(self, tokens: Iterable[str] = (), executable: str | None = None) -> None:
        self.tokens: list[str] = list(tokens)
        self._original = list(self.tokens)
        self._executable = executable or default_executable()
        self.exec_flags: list[str] = []
        self._before: list[list[str]] = []
        self._after: list[list[str]] = []
        self._noop = False
        self._skip = False

    # ------------------------------------------------------------------
    # Sequence protocol
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self) -> Iterator[str]:
        return iter(self.tokens)

    def __contains__(self, token: object) -> bool:
        return token in self.tokens

    def __getitem__(self, index: int) -> str:
        return self.tokens[index]

    def __setitem__(self, index: int, token: str) -> None:
        self.tokens[index] = token

    def __repr__(self) -> str:
        return f"ArgumentList({self.tokens!r}, executable={self._executable!r})"

    def get(self, index: int) -> str | None:
        """Return the token at ``index`` or None when out of range."""
        try:
            return self.tokens[index]
        except IndexError:
            return None

    def index(self, token: str) -> int:
        """Position of the first token equal to ``token`` (ValueError if absent)."""
        return self.tokens.index(token)

    def is_empty(self) -> bool:
        return not self.tokens

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def insert_at(self, index: int, *tokens: str) -> None:
        """Insert tokens at ``index``, shifting later tokens right."""
        self.tokens[index:index] = list(tokens)

    def remove_at(self, index: int) -> str | None:
        """Remove and return the token at ``index``; no-op when out of range."""
        if -len(self.tokens) <= index < len(self.tokens):
            return self.tokens.pop(index)
        return None

    def remove_value(self, token: str | None) -> bool:
        """Remove the first token equal to ``token``. Returns whether one was found."""
        if token is None or token not in self.tokens:
            return False
        self.tokens.remove(token)
        return True

    def replace_all(self, tokens: Iterable[str]) -> None:
        """Discard the current tokens and install a new sequence."""
        self.tokens = list(tokens)

    def append(self, *tokens: str) -> None:
        self.tokens.extend(tokens)

    def prepend(self, *tokens: str) -> None:
        self.insert_at(0, *tokens)

    def shift(self) -> str | None:
        """Remove and return the first token (None when empty)."""
        return self.remove_at(0)

    def pop(self) -> str | None:
        """Remove and return the last token (None when empty)."""
        return self.remove_at(-1)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def words(self) -> list[str]:
        """Tokens that are not flags (do not start with a dash)."""
        return [token for token in self.tokens if not token.startswith("-")]

    def has_flag(self, *names: str) -> bool:
        """Whether any of ``names`` is present, alone or as ``--name=value``."""
        pattern = re.compile(
            "^(?:" + "|".join(re.escape(name) for name in names) + ")(?:=|$)"
        )
        return any(pattern.match(token) for token in self.tokens)

    def is_changed(self) -> bool:
        """Whether a rule rewrote the tokens or scheduled extra commands."""
        return self.is_chained() or self.tokens != self._original

    # ------------------------------------------------------------------
    # Execution metadata
    # ------------------------------------------------------------------

    @property
    def executable(self) -> str:
        return self._executable

    @executable.setter
    def executable(self, value: str) -> None:
        self._executable = value
        self.exec_flags = []

    def add_exec_flags(self, flags: Iterable[str]) -> None:
        """Append flags that every git command launched for this list receives."""
        self.exec_flags.extend(flags)

    def to_exec(self, tokens: Iterable[str] | None = None) -> list[str]:
        """Full command vector for ``tokens`` (defaults to the main command)."""
        body = self.tokens if tokens is None else list(tokens)
        return [self._executable, *self.exec_flags, *body]

    def schedule_before(self, tokens: Iterable[str], executable: str | None = None) -> None:
        """
        Queue a command to run before the main command.

        Without an explicit executable the command runs through the current
        executable and exec flags (i.e. it is a git command).
        """
        self._before.append(self._build_command(tokens, executable))

    def schedule_after(self, executable: str | None, tokens: Iterable[str]) -> None:
        """Queue a command to run after the main command succeeds."""
        self._after.append(self._build_command(tokens, executable))

    def _build_command(self, tokens: Iterable[str], executable: str | None) -> list[str]:
        if executable is None:
            return self.to_exec(tokens)
        return [executable, *tokens]

    @property
    def prior_commands(self) -> list[list[str]]:
        return [list(cmd) for cmd in self._before]

    @property
    def followup_commands(self) -> list[list[str]]:
        return [list(cmd) for cmd in self._after]

    def is_chained(self) -> bool:
        """Whether any command was scheduled before or after the main one."""
        return bool(self._before or self._after)

    def commands(self) -> list[list[str]]:
        """Every command in execution order: prior, main, follow-ups."""
        return [*self.prior_commands, self.to_exec(), *self.followup_commands]

    def noop(self) -> None:
        """Mark the invocation as a dry run."""
        self._noop = True

    def is_dry_run(self) -> bool:
        return self._noop

    def skip(self) -> None:
        """Mark that nothing should be executed (output already produced)."""
        self._skip = True

    def is_skipped(self) -> bool:
        return self._skip


__all__ = ["ArgumentList", "DEFAULT_EXECUTABLE", "default_executable"]
