"""
``hub fork``: fork the origin project and add a remote for the fork.

    $ hub fork
    ... hardcore forking action ...
    > git remote add -f YOUR_USER git@github.com:YOUR_USER/CURRENT_REPO.git

    $ hub fork --no-remote
"""

from __future__ import annotations

from hubwrap.core.args import ArgumentList
from hubwrap.core.commands.base import CommandContext, api_errors, register_rule
from hubwrap.core.errors import DomainError


@register_rule("fork")
def fork(args: ArgumentList, ctx: CommandContext) -> None:
    project = ctx.main_project()
    if project is None:
        raise DomainError("Error: repository under 'origin' remote is not a GitHub project")

    user = ctx.github_user()
    assert user is not None
    forked = project.owned_by(user)

    with api_errors("creating fork"):
        if ctx.api.project_exists(forked):
            raise DomainError(
                f"Error creating fork: {forked.name_with_owner} already exists on {forked.host}"
            )
        if not args.is_dry_run():
            ctx.api.fork_project(project)

    if "--no-remote" in args:
        args.skip()
        return

    url = ctx.project_url(forked, private=True)
    args.replace_all(["remote", "add", "-f", forked.owner, url])
    args.schedule_after("echo", ["new remote:", forked.owner])
