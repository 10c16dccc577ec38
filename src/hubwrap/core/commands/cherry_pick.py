"""
``git cherry-pick`` of a commit URL or ``owner@sha`` reference.

    $ hub cherry-pick https://github.com/mislav/hub/commit/a319d88
    > git remote add -f mislav git://github.com/mislav/hub.git
    > git cherry-pick a319d88

    $ hub cherry-pick mislav@a319d88
    > git fetch mislav          (when the remote already exists)
    > git cherry-pick a319d88
"""

from __future__ import annotations

from hubwrap.core.args import ArgumentList
from hubwrap.core.commands.base import CommandContext, register_rule
from hubwrap.core.errors import DomainError
from hubwrap.core.references import OWNER_SHA_PATTERN, RepositoryReference

COMMIT_PATH = r"^commit/([a-f0-9]{7,40})"


@register_rule("cherry-pick")
def cherry_pick(args: ArgumentList, ctx: CommandContext) -> None:
    if args.has_flag("-m", "--mainline"):
        return

    ref = args.words()[-1]
    project: RepositoryReference | None = None
    sha = None

    url = ctx.resolve_github_url(ref)
    if url is not None and (match := url.match_path(COMMIT_PATH)):
        sha = match.group(1)
        project = url.reference
    elif match := OWNER_SHA_PATTERN.match(ref):
        owner, sha = match.group(1), match.group(2)
        main_project = ctx.main_project()
        if main_project is None:
            raise DomainError("Aborted: the origin remote doesn't point to a GitHub repository.")
        project = main_project.owned_by(owner)

    if project is None or sha is None:
        return

    args[args.index(ref)] = sha

    remote = ctx.remote_for(project)
    if remote is not None:
        args.schedule_before(["fetch", remote.name])
    else:
        args.schedule_before(["remote", "add", "-f", project.owner, ctx.project_url(project)])
