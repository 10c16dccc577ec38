"""
``git push`` to several remotes at once.

    $ hub push origin,staging,qa bert_timeout
    > git push origin bert_timeout
    > git push staging bert_timeout
    > git push qa bert_timeout

Without an explicit ref the current branch is pushed.
"""

from __future__ import annotations

from hubwrap.core.args import ArgumentList
from hubwrap.core.commands.base import CommandContext, register_rule
from hubwrap.core.errors import DomainError


@register_rule("push")
def push(args: ArgumentList, ctx: CommandContext) -> None:
    target = args.get(1)
    if not target or "," not in target:
        return

    refs = args.words()[2:]
    remotes = target.split(",")
    args[1] = remotes.pop(0)

    if not refs:
        branch = ctx.current_branch()
        if branch is None:
            raise DomainError("Aborted: not currently on any branch")
        refs = [branch.short_name]
        args.append(*refs)

    for name in remotes:
        args.schedule_after(None, ["push", name, *refs])
