"""
Commands about hub itself: version, help, hub and alias.

These print text and mark the command line as skipped, except ``version``
(which lets git print its own version first) and ``help`` for a git
subcommand (which git handles).
"""

from __future__ import annotations

import os

from hubwrap import __version__
from hubwrap.core.args import ArgumentList
from hubwrap.core.commands.base import CommandContext, register_rule
from hubwrap.core.errors import DomainError, UsageError
from hubwrap.core.help import HUB_MANUAL, IMPROVED_HELP_TEXT

SHELLS = ["bash", "zsh", "sh", "ksh", "csh", "fish"]

SHELL_PROFILES = {
    "bash": "~/.bash_profile",
    "zsh": "~/.zshrc",
    "ksh": "~/.profile",
}


def wants_pager(args: ArgumentList) -> bool:
    """Whether ``-p``/``--paginate`` was given, as a global or a local flag."""
    return args.has_flag("-p", "--paginate") or any(
        flag in ("-p", "--paginate") for flag in args.exec_flags
    )


@register_rule("version")
def version(args: ArgumentList, ctx: CommandContext) -> None:
    args.schedule_after("echo", ["hub version", __version__])


@register_rule("help")
def help_command(args: ArgumentList, ctx: CommandContext) -> None:
    words = args.words()
    command = words[1] if len(words) > 1 else None

    if command == "hub":
        ctx.puts(HUB_MANUAL, paginate=True)
        args.skip()
    elif command is None and not args.has_flag("-a", "--all"):
        ctx.puts(IMPROVED_HELP_TEXT, paginate=wants_pager(args))
        args.skip()


@register_rule("hub")
def hub(args: ArgumentList, ctx: CommandContext) -> None:
    if args.get(1) == "standalone":
        raise DomainError("hub is already running in standalone mode.")
    help_command(args, ctx)


@register_rule("alias")
def alias(args: ArgumentList, ctx: CommandContext) -> None:
    """
    Print shell code that wraps git with hub.

    ``hub alias -s zsh`` prints the script itself (for ``eval``); without
    ``-s`` it prints instructions for the shell's profile.
    """
    script = args.remove_value("-s")
    shell = args.get(1) or os.environ.get("SHELL")
    if not shell:
        raise UsageError("hub alias: unknown shell")

    shell = os.path.basename(shell)
    if shell not in SHELLS:
        raise UsageError("hub alias: unsupported shell", usage=f"supported shells: {' '.join(SHELLS)}")

    if script:
        lines = ["alias git=hub"]
        if shell == "zsh":
            lines += ["if type compdef >/dev/null; then", "   compdef hub=git", "fi"]
    else:
        profile = SHELL_PROFILES.get(shell, "your profile")
        lines = [
            f"# Wrap git automatically by adding the following to {profile}:",
            "",
            'eval "$(hub alias -s)"',
        ]

    ctx.puts("\n".join(lines))
    args.skip()
