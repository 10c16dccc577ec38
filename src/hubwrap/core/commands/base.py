"""
Rewrite rule registry and the context rules run against.

A rule is a plain function ``rule(args, ctx)`` that mutates an
ArgumentList in place. Rules are registered under the subcommand names
they handle:

    @register_rule("push")
    def push(args: ArgumentList, ctx: CommandContext) -> None:
        ...

The dispatcher looks a rule up once per invocation with ``get_rule``.
Dashed subcommands (``pull-request``, ``cherry-pick``) are registered
under their dashed name and found through ``rule_key``.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path

from rich.console import Console

from hubwrap.core.args import ArgumentList
from hubwrap.core.config import HubConfig
from hubwrap.core.context import GitContext, GitReader
from hubwrap.core.errors import GitHubAPIError, TransportError
from hubwrap.core.github import GitHubAPI
from hubwrap.core.pager import page_text, resolve_pager

logger = logging.getLogger(__name__)

# Commands hub adds on top of git. Aliases never shadow these.
CUSTOM_COMMANDS = ["alias", "create", "browse", "compare", "fork", "pull-request"]


class CommandContext(GitContext):
    """
    GitContext plus the collaborators rules need beyond local git state:
    the API client and the consoles used for user-facing output.
    """

    def __init__(
        self,
        reader: GitReader | None = None,
        config: HubConfig | None = None,
        cwd: Path | None = None,
        api: GitHubAPI | None = None,
        console: Console | None = None,
        err_console: Console | None = None,
    ) -> None:
        super().__init__(reader, config, cwd)
        self._api = api
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)

    @property
    def api(self) -> GitHubAPI:
        if self._api is None:
            self._api = GitHubAPI(token=self.github_token(fatal=False))
        return self._api

    def warn(self, message: str) -> None:
        """Print a warning to stderr."""
        self.err_console.print(message, style="yellow", markup=False, highlight=False, soft_wrap=True)

    def puts(self, text: str, paginate: bool = False) -> None:
        """Print text to stdout, through the pager when ``paginate`` is set."""
        if paginate:
            page_text(text, pager=resolve_pager(self.reader), stream=self.console.file)
        else:
            self.console.out(text.rstrip("\n"), highlight=False)


Rule = Callable[[ArgumentList, CommandContext], None]

# Rule registry
_rules: dict[str, Rule] = {}


def register_rule(*names: str) -> Callable[[Rule], Rule]:
    """
    Decorator to register a rewrite rule under one or more subcommand names.

    Args:
        names: Subcommand names (e.g. 'am', 'apply')

    Raises:
        ValueError: If a name is already registered
    """

    def decorator(rule: Rule) -> Rule:
        for name in names:
            key = rule_key(name)
            if key in _rules:
                raise ValueError(
                    f"Rule '{name}' is already registered. "
                    f"Available rules: {', '.join(list_rules())}"
                )
            _rules[key] = rule
        return rule

    return decorator


def rule_key(command: str) -> str:
    """Normalize a subcommand name: the first dash after a word character becomes '_'."""
    return re.sub(r"(\w)-", r"\1_", command, count=1)


def get_rule(command: str) -> Rule | None:
    """Return the rule for ``command``, or None when git handles it unchanged."""
    return _rules.get(rule_key(command))


def list_rules() -> list[str]:
    """Registered rule keys in alphabetical order."""
    return sorted(_rules)


def is_custom_command(command: str) -> bool:
    return command in CUSTOM_COMMANDS


@contextmanager
def api_errors(action: str) -> Iterator[None]:
    """
    Convert API failures inside the block into a TransportError.

    Example:
        >>> with api_errors("creating fork"):
        ...     ctx.api.fork_project(project)
    """
    try:
        yield
    except GitHubAPIError as e:
        logger.debug("API error while %s: %s", action, e)
        raise TransportError.from_api_error(action, e) from e


__all__ = [
    "CUSTOM_COMMANDS",
    "CommandContext",
    "Rule",
    "api_errors",
    "get_rule",
    "is_custom_command",
    "list_rules",
    "register_rule",
    "rule_key",
]
