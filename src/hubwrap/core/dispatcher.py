"""
Turn a raw argument vector into a finished ArgumentList.

Dispatch runs three phases, in order and exactly once each:

1. Global flags: leading git options (``--git-dir=...``, ``-c k=v``,
   ``--noop``, ...) are consumed. Those that every git command needs are
   propagated to scheduled commands and to the git reader.
2. Alias expansion: ``alias.<cmd>`` from git config is expanded so
   ``git co <pull-url>`` reaches the checkout rule.
3. Rule dispatch: the matching rewrite rule mutates the list.

Any HubError aborts dispatch. Nothing is executed here; the Runner only
ever sees a list that made it through all three phases.
"""

from __future__ import annotations

import logging
import shlex
from collections.abc import Iterable

from hubwrap.core.args import ArgumentList
from hubwrap.core.commands import CommandContext, get_rule, is_custom_command
from hubwrap.core.errors import UsageError
from hubwrap.core.help import HUB_MANUAL, usage_for

logger = logging.getLogger(__name__)

GLOBAL_FLAGS = {
    "--noop",
    "-c",
    "-p",
    "--paginate",
    "--no-pager",
    "--no-replace-objects",
    "--bare",
    "--version",
    "--help",
}
GLOBAL_PREFIX_FLAGS = ("--exec-path=", "--git-dir=", "--work-tree=", "--namespace=")

# flags that apply to the main command only
LOCAL_FLAGS = {"-p", "--paginate", "--no-pager"}


def is_global_flag(token: str) -> bool:
    return token in GLOBAL_FLAGS or token.startswith(GLOBAL_PREFIX_FLAGS)


class Dispatcher:
    """
    Runs the dispatch phases against a CommandContext.

    Example:
        >>> dispatcher = Dispatcher(CommandContext())
        >>> args = dispatcher.dispatch(["clone", "rtomayko/tilt"])
        >>> args.to_exec()
        ['git', 'clone', 'git://github.com/rtomayko/tilt.git']
    """

    def __init__(self, context: CommandContext) -> None:
        self.context = context

    def dispatch(self, argv: Iterable[str]) -> ArgumentList:
        args = ArgumentList(argv)
        self.slurp_global_flags(args)
        if args.is_empty():
            args.prepend("help")

        command = args[0]
        expanded = self.expand_alias(command)
        if expanded:
            expanded = [*expanded, *args.tokens[1:]]
            command = expanded[0]
            logger.debug("expanded alias %r to %s", args[0], expanded)

        if is_custom_command(command) and self.respect_help_flags(expanded or args.tokens, args):
            return args

        rule = get_rule(command)
        if rule is None:
            logger.debug("no rule for %r, passing through", command)
            return args

        if expanded:
            args.replace_all(expanded)
        logger.debug("applying %s rule", command)
        rule(args, self.context)

        if not args.is_changed():
            logger.debug("%s rule left the command line unchanged", command)
        for cmd in args.commands():
            logger.debug("scheduled: %s", cmd)
        return args

    def slurp_global_flags(self, args: ArgumentList) -> None:
        """Consume leading global flags; ``--version``/``--help`` become subcommands."""
        global_flags: list[str] = []
        local_flags: list[str] = []

        while not args.is_empty() and is_global_flag(args[0]):
            flag = args.shift()
            assert flag is not None
            if flag == "--noop":
                args.noop()
            elif flag in ("--version", "--help"):
                args.prepend(flag[2:])
            elif flag == "-c":
                config_pair = args.shift()
                if config_pair is None:
                    raise UsageError("error: switch `c' requires a value")
                key, _, value = config_pair.partition("=")
                self.context.reader.stub_config_value(key, value)
                global_flags += [flag, config_pair]
            elif flag in LOCAL_FLAGS:
                local_flags.append(flag)
            else:
                global_flags.append(flag)

        if global_flags or local_flags:
            logger.debug("global flags %s, local flags %s", global_flags, local_flags)
        self.context.reader.add_exec_flags(global_flags)
        args.add_exec_flags(global_flags)
        args.add_exec_flags(local_flags)

    def expand_alias(self, command: str) -> list[str] | None:
        """Tokens of ``alias.<command>``, unless it is a shell alias or shadows a hub command."""
        if is_custom_command(command):
            return None
        expanded = self.context.git_alias_for(command)
        if not expanded or expanded.startswith("!"):
            return None
        return shlex.split(expanded)

    def respect_help_flags(self, tokens: list[str], args: ArgumentList) -> bool:
        """
        Handle ``hub <custom-command> -h|--help``.

        ``-h`` aborts with the usage line; ``--help`` prints the manual and
        marks the list skipped. Returns whether the flag was handled.
        """
        if len(tokens) != 2:
            return False

        command, flag = tokens[0], tokens[1]
        if flag == "-h":
            usage = usage_for(command)
            if usage is None:
                raise UsageError(f"Error finding usage for {command}")
            raise UsageError(f"Usage: {usage}")
        if flag == "--help":
            self.context.puts(HUB_MANUAL, paginate=True)
            args.skip()
            return True
        return False


__all__ = ["Dispatcher", "GLOBAL_FLAGS", "GLOBAL_PREFIX_FLAGS", "LOCAL_FLAGS", "is_global_flag"]
