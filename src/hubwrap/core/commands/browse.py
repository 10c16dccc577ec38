"""
``hub browse`` and ``hub compare``: open GitHub pages in a browser.

    $ hub browse
    > open https://github.com/YOUR_USER/CURRENT_REPO

    $ hub browse -u pjhyett/github-services wiki
    > echo https://github.com/pjhyett/github-services/wiki

    $ hub compare refactor
    > open https://github.com/CURRENT_REPO/compare/refactor

    $ hub compare 1.0..fix
    > open https://github.com/CURRENT_REPO/compare/1.0...fix
"""

from __future__ import annotations

import re
from collections.abc import Callable

from hubwrap.core.args import ArgumentList
from hubwrap.core.commands.base import CommandContext, register_rule
from hubwrap.core.errors import UsageError

SHA_OR_TAG = r"(\w{1,2}|\w[\w.-]+\w)"
TWO_DOT_RANGE = re.compile(rf"^{SHA_OR_TAG}\.\.{SHA_OR_TAG}$")


def browse_command(args: ArgumentList, ctx: CommandContext, build_url: Callable[[], str]) -> None:
    """Run ``build_url`` and point the command at the browser (or echo with ``-u``)."""
    url_only = args.remove_value("-u")
    if args.remove_value("-p"):
        ctx.warn("Warning: the `-p` flag has no effect anymore")

    url = build_url()

    if url_only:
        args.executable = "echo"
    else:
        launcher = ctx.browser_launcher()
        args.executable = launcher[0]
        args.prepend(*launcher[1:])
    args.append(url)


@register_rule("browse")
def browse(args: ArgumentList, ctx: CommandContext) -> None:
    args.shift()

    def build_url() -> str:
        dest = args.shift()
        if dest == "--":
            dest = None

        if dest:
            project = ctx.github_project(dest)
            branch = ctx.master_branch()
        else:
            project = ctx.current_project()
            current = ctx.current_branch()
            branch = (current.upstream() if current else None) or ctx.master_branch()

        if project is None:
            raise UsageError("Usage: hub browse [<USER>/]<REPOSITORY>")

        subpage = args.shift()
        if subpage == "commits":
            path = f"/commits/{branch.short_name}"
        elif subpage in ("tree", None):
            path = f"/tree/{branch.short_name}" if not branch.is_master() else None
        else:
            path = f"/{subpage}"
        return project.web_url(path)

    browse_command(args, ctx, build_url)


@register_rule("compare")
def compare(args: ArgumentList, ctx: CommandContext) -> None:
    args.shift()

    def build_url() -> str:
        if args.is_empty():
            current = ctx.current_branch()
            branch = current.upstream() if current else None
            project = ctx.current_project()
            if branch is None or branch.is_master() or project is None:
                raise UsageError("Usage: hub compare [USER] [<START>...]<END>")
            range_ = branch.short_name
        else:
            last = args.pop()
            assert last is not None
            range_ = TWO_DOT_RANGE.sub(r"\1...\2", last)
            owner = args.pop()
            project = ctx.github_project(None, owner) if owner else ctx.current_project()
            if project is None:
                raise UsageError("Usage: hub compare [USER] [<START>...]<END>")
        return project.web_url(f"/compare/{range_}")

    browse_command(args, ctx, build_url)
