"""
``hub create``: create the current repository on GitHub.

    $ hub create
    ... create repo on github ...
    > git remote add -f origin git@github.com:YOUR_USER/CURRENT_REPO.git

    $ hub create -p -d "My project" -h https://example.com my-org/project
"""

from __future__ import annotations

import logging

from hubwrap.core.args import ArgumentList
from hubwrap.core.commands.base import CommandContext, api_errors, register_rule
from hubwrap.core.errors import DomainError, UsageError
from hubwrap.core.help import usage_for

logger = logging.getLogger(__name__)


@register_rule("create")
def create(args: ArgumentList, ctx: CommandContext) -> None:
    if not ctx.is_repo():
        raise DomainError("'create' must be run from inside a git repository")

    owner = ctx.github_user()
    args.shift()
    private = args.remove_value("-p")
    description = None
    homepage = None
    new_repo_name = None

    while not args.is_empty():
        arg = args.shift()
        assert arg is not None
        if arg == "-d":
            description = args.shift()
        elif arg == "-h":
            homepage = args.shift()
        elif not arg.startswith("-") and new_repo_name is None:
            new_repo_name = arg
            if "/" in new_repo_name:
                owner, new_repo_name = new_repo_name.split("/", 1)
        else:
            raise UsageError(f"invalid argument: {arg}", usage=usage_for("create"))

    project = ctx.github_project(new_repo_name or ctx.repo_name, owner)

    with api_errors("creating repository"):
        if ctx.api.project_exists(project):
            ctx.warn(f"{project.name_with_owner} already exists on {project.host}")
            action = "set remote origin"
        else:
            action = "created repository"
            if not args.is_dry_run():
                ctx.api.create_project(
                    project,
                    organization=project.owner != ctx.github_user(),
                    private=private,
                    description=description,
                    homepage=homepage,
                )
                logger.debug("created %s", project.name_with_owner)

    url = ctx.project_url(project, private=True)
    remotes = ctx.remotes()
    if not remotes or remotes[0] != "origin":
        args.replace_all(["remote", "add", "-f", "origin", url])
    else:
        args.replace_all(["remote", "-v"])

    args.schedule_after("echo", [f"{action}:", project.name_with_owner])
