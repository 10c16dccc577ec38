"""
``git init -g``: also add an origin remote under your account.

    $ hub init -g
    > git init
    > git remote add origin git@github.com:YOUR_USER/CURRENT_DIR.git
"""

from __future__ import annotations

from hubwrap.core.args import ArgumentList
from hubwrap.core.commands.base import CommandContext, register_rule
from hubwrap.core.references import RepositoryReference, default_host


@register_rule("init")
def init(args: ArgumentList, ctx: CommandContext) -> None:
    if not args.remove_value("-g"):
        return

    project = RepositoryReference(owner=ctx.github_user(), name=ctx.cwd.name, host=default_host())
    args.schedule_after(None, ["remote", "add", "origin", ctx.project_url(project, private=True)])
