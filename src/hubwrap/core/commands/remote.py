"""
``git remote add|set-url`` with owner or owner/name shorthand.

    $ hub remote add rtomayko
    > git remote add rtomayko git://github.com/rtomayko/CURRENT_REPO.git

    $ hub remote add -p rtomayko
    > git remote add rtomayko git@github.com:rtomayko/CURRENT_REPO.git

    $ hub remote add origin
    > git remote add origin git://github.com/YOUR_USER/CURRENT_REPO.git
"""

from __future__ import annotations

import logging

from hubwrap.core.args import ArgumentList
from hubwrap.core.commands.base import CommandContext, register_rule
from hubwrap.core.references import parse_shorthand

logger = logging.getLogger(__name__)


@register_rule("remote")
def remote(args: ArgumentList, ctx: CommandContext) -> None:
    if args.get(1) not in ("add", "set-url") or len(args) < 3:
        return

    name = args[-1]
    project = parse_shorthand(name, bare="owner", default_name=ctx.repo_name, allow_local_dir=True)
    if project is None:
        # already a URL or a path
        return
    user, repo = project.owner, project.name

    ssh = args.remove_value("-p")
    words = args.words()

    if len(words) == 3 and words[2] == "origin":
        # "origin" means your own fork of the current project
        user, repo = ctx.github_user(), ctx.repo_name
    elif words[-2] == words[1]:
        # rtomayko/tilt => rtomayko, keeping flags in place
        args[args.index(words[-1])] = user
    else:
        # remote name given explicitly: `remote add blah rtomayko/tilt`
        args.pop()

    url = ctx.git_url(user, repo, private=ssh)
    logger.debug("remote %s -> %s", name, url)
    args.append(url)
