"""
``git clone`` and ``git submodule add`` with repository shorthand.

    $ hub clone rtomayko/tilt
    > git clone git://github.com/rtomayko/tilt.git

    $ hub clone -p tilt
    > git clone git@github.com:YOUR_USER/tilt.git

Only the first non-flag argument is considered, and only when it is not
an existing directory.
"""

from __future__ import annotations

import logging
import re

from hubwrap.core.args import ArgumentList
from hubwrap.core.commands.base import CommandContext, register_rule
from hubwrap.core.references import default_host, parse_shorthand

logger = logging.getLogger(__name__)

# clone flags that consume the following token
VALUE_FLAGS = re.compile(r"^(--(upload-pack|template|depth|origin|branch|reference)|-[ubo])$")


def resolve_clone_target(args: ArgumentList, ctx: CommandContext, ssh: bool) -> None:
    """Replace the repository argument (scanning from index 1) with a clone URL."""
    idx = 1
    while idx < len(args):
        arg = args[idx]
        if arg.startswith("-"):
            if VALUE_FLAGS.match(arg):
                idx += 1
            idx += 1
            continue

        user = ctx.github_user(fatal=False)
        # the current repository never decides the host of a new clone
        project = parse_shorthand(arg, default_owner=user, host=default_host())
        if project is not None:
            if args[0] != "submodule" and project.owner == user:
                # your own repositories are always cloned over SSH
                ssh = True
            args[idx] = ctx.project_url(project, private=ssh)
            logger.debug("%s target %s -> %s", args[0], arg, args[idx])
        break


@register_rule("clone")
def clone(args: ArgumentList, ctx: CommandContext) -> None:
    ssh = args.remove_value("-p")
    resolve_clone_target(args, ctx, ssh)


@register_rule("submodule")
def submodule(args: ArgumentList, ctx: CommandContext) -> None:
    if "add" not in args:
        return

    index = args.index("add")
    args.remove_at(index)

    # -b takes a branch name that must not be mistaken for the repository
    branch_index = None
    branch_name = None
    for flag in ("-b", "--branch"):
        if flag in args:
            branch_index = args.index(flag)
            args.remove_at(branch_index)
            branch_name = args.remove_at(branch_index)
            break

    ssh = args.remove_value("-p")
    resolve_clone_target(args, ctx, ssh)

    if branch_index is not None and branch_name is not None:
        args.insert_at(branch_index, "-b", branch_name)
    args.insert_at(index, "add")
