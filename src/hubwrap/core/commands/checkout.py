"""
``git checkout`` of a pull request URL.

    $ hub checkout https://github.com/defunkt/hub/pull/73
    > git remote add -f -t feature mislav git://github.com/mislav/hub.git
    > git checkout --track -B mislav-feature mislav/feature

    $ hub checkout https://github.com/defunkt/hub/pull/73 custom-branch-name
"""

from __future__ import annotations

import logging

from hubwrap.core.args import ArgumentList
from hubwrap.core.commands.base import CommandContext, api_errors, register_rule
from hubwrap.core.errors import DomainError

logger = logging.getLogger(__name__)

PULL_PATH = r"^pull/(\d+)"


@register_rule("checkout")
def checkout(args: ArgumentList, ctx: CommandContext) -> None:
    words = args.words()
    url_arg = words[1] if len(words) > 1 else None
    new_branch = words[2] if len(words) > 2 else None

    url = ctx.resolve_github_url(url_arg)
    if url is None or not (match := url.match_path(PULL_PATH)):
        return

    with api_errors("fetching pull request"):
        pull = ctx.api.fetch_pull_request(url.reference, match.group(1))

    args.remove_value(new_branch)
    user, branch = pull.head_user, pull.head_branch
    if not pull.head_repo_present:
        raise DomainError(f"Error: {user}'s fork is not available anymore")
    new_branch = new_branch or f"{user}-{branch}"

    if user in ctx.remotes():
        args.schedule_before(["remote", "set-branches", "--add", user, branch])
        args.schedule_before(["fetch", user, f"+refs/heads/{branch}:refs/remotes/{user}/{branch}"])
    else:
        fork_url = ctx.project_url(url.reference.owned_by(user), private=pull.head_repo_private)
        args.schedule_before(["remote", "add", "-f", "-t", branch, user, fork_url])

    assert url_arg is not None
    idx = args.index(url_arg)
    args.remove_at(idx)
    args.insert_at(idx, "--track", "-B", new_branch, f"{user}/{branch}")
    logger.debug("checking out pull request %s as %s", match.group(1), new_branch)
