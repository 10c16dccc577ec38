"""
``git fetch`` from remotes that don't exist yet.

    $ hub fetch mislav
    > git remote add mislav git://github.com/mislav/REPO.git
    > git fetch mislav

    $ hub fetch mislav,xoebus
    > git remote add mislav ...
    > git remote add xoebus ...
    > git fetch --multiple mislav xoebus
"""

from __future__ import annotations

import logging
import re

from hubwrap.core.args import ArgumentList
from hubwrap.core.commands.base import CommandContext, api_errors, register_rule
from hubwrap.core.references import is_owner

logger = logging.getLogger(__name__)

_NAME_LIST = re.compile(r"^\w+(,\w+)+$")


def _names_to_fetch(args: ArgumentList) -> list[str]:
    """Remote names on the command line, normalizing ``a,b`` into ``--multiple a b``."""
    words = args.words()
    if "--multiple" in args:
        return words[1:]
    if len(words) < 2:
        return []

    remote_name = words[1]
    if _NAME_LIST.match(remote_name):
        names = remote_name.split(",")
        index = args.index(remote_name)
        args.remove_at(index)
        args.insert_at(index, "--multiple", *names)
        return names
    return [remote_name]


@register_rule("fetch")
def fetch(args: ArgumentList, ctx: CommandContext) -> None:
    names = _names_to_fetch(args)
    if not names:
        return

    remotes = ctx.remotes()
    for name in names:
        if not is_owner(name) or name in remotes or ctx.remotes_group(name):
            continue
        project = ctx.github_project(None, name)
        with api_errors("fetching repository info"):
            exists = ctx.api.project_exists(project)
        if not exists:
            logger.debug("no repository %s, leaving %r alone", project.name_with_owner, name)
            continue
        args.schedule_before(["remote", "add", project.owner, ctx.project_url(project)])
