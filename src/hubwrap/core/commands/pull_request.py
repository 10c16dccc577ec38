"""
``hub pull-request``: open a pull request for the current branch.

    $ hub pull-request "My title"
    $ hub pull-request -b upstream:master -h me:feature
    $ hub pull-request -i 123
    $ hub pull-request https://github.com/defunkt/hub/issues/123

Without a title or issue the message is composed in the user's editor,
the same way as a commit message: the first line is the title and the
rest is the body. Lines starting with '#' are dropped.
"""

from __future__ import annotations

import logging
import re
import subprocess
from dataclasses import dataclass
from pathlib import Path

from hubwrap.core.args import ArgumentList
from hubwrap.core.commands.base import CommandContext, api_errors, register_rule
from hubwrap.core.errors import DomainError, UsageError
from hubwrap.core.help import usage_for
from hubwrap.core.references import RepositoryReference

logger = logging.getLogger(__name__)

ISSUE_PATH = r"^issues/(\d+)"
COMMENT_CHAR = "#"

SINGLE_COMMIT_FORMAT = "%w(78,0,0)%s%n%+b"
COMMIT_SUMMARY_FORMAT = "%h (%aN, %ar)%n%w(78,3,3)%s%n%+b"


@dataclass
class PullRequestOptions:
    """What to submit, collected from the command line."""

    base_project: RepositoryReference
    head_project: RepositoryReference | None
    base: str | None = None
    head: str | None = None
    title: str | None = None
    body: str | None = None
    issue: str | None = None
    force: bool = False
    explicit_owner: bool = False


def _from_github_ref(
    ctx: CommandContext, ref: str | None, context_project: RepositoryReference | None
) -> tuple[RepositoryReference | None, str | None]:
    """Split ``[owner:]branch`` into a project and a branch name."""
    if ref is None:
        raise UsageError("missing branch argument", usage=usage_for("pull-request"))
    if ":" in ref:
        owner, ref = ref.split(":", 1)
        name = context_project.name if context_project else None
        return ctx.github_project(name, owner), ref
    return context_project, ref


def parse_options(args: ArgumentList, ctx: CommandContext) -> PullRequestOptions:
    base_project = ctx.main_project()
    if base_project is None:
        raise DomainError("Aborted: the origin remote doesn't point to a GitHub repository.")
    options = PullRequestOptions(base_project=base_project, head_project=ctx.current_project())

    args.shift()
    while not args.is_empty():
        arg = args.shift()
        assert arg is not None
        if arg == "-f":
            options.force = True
        elif arg == "-b":
            project, options.base = _from_github_ref(ctx, args.shift(), options.base_project)
            assert project is not None
            options.base_project = project
        elif arg == "-h":
            head = args.shift()
            options.explicit_owner = head is not None and ":" in head
            options.head_project, options.head = _from_github_ref(ctx, head, options.head_project)
        elif arg == "-i":
            options.issue = args.shift()
        else:
            url = ctx.resolve_github_url(arg)
            if url is not None and (match := url.match_path(ISSUE_PATH)):
                options.issue = match.group(1)
                options.base_project = url.reference
            elif options.title is None:
                options.title = arg
            else:
                raise UsageError(f"invalid argument: {arg}", usage=usage_for("pull-request"))
    return options


def read_editmsg(path: Path) -> tuple[str | None, str | None]:
    """
    Split an edited message into title and body.

    Comment lines are skipped. The first non-blank line is the title;
    everything after it is the body.
    """
    title = ""
    body = ""
    with path.open() as f:
        for line in f:
            if line.startswith(COMMENT_CHAR):
                continue
            if not title and line.strip():
                title += line
            else:
                body += line
    title = title.replace("\n", " ").strip()
    body = body.strip()
    return title or None, body or None


def edit_message(ctx: CommandContext, path: Path, message: str) -> tuple[str, str | None]:
    """Write ``message`` to ``path``, open the editor on it and read the result back."""
    path.write_text(message)

    edit_cmd = ctx.git_editor()
    if edit_cmd and re.match(r"^[mg]?vim$", Path(edit_cmd[0]).name):
        edit_cmd += ["-c", "set ft=gitcommit"]
    edit_cmd.append(str(path))

    logger.debug("editing pull request message: %s", edit_cmd)
    try:
        result = subprocess.run(edit_cmd, check=False)
    except OSError as e:
        raise DomainError("can't open text editor for pull request message") from e
    if result.returncode != 0:
        raise DomainError("can't open text editor for pull request message")

    title, body = read_editmsg(path)
    if not title:
        raise DomainError("Aborting due to empty pull request title")
    return title, body


def _initial_message(
    ctx: CommandContext, base_branch: str, remote_branch: str
) -> tuple[str | None, str | None]:
    """Default message and commit summary for the commits being submitted."""
    commits = (ctx.rev_list(base_branch, remote_branch) or "").splitlines()
    if len(commits) == 1:
        message = ctx.git_command(
            ["show", "-s", f"--format={SINGLE_COMMIT_FORMAT}", commits[0]]
        )
        return message, None
    if len(commits) > 1:
        summary = ctx.git_command(
            [
                "log",
                "--no-color",
                f"--format={COMMIT_SUMMARY_FORMAT}",
                "--cherry",
                f"{base_branch}...{remote_branch}",
            ]
        )
        return None, summary
    return None, None


def compose_message(
    ctx: CommandContext,
    options: PullRequestOptions,
    base_branch: str,
    remote_branch: str,
) -> tuple[str, str | None]:
    default_message, commit_summary = _initial_message(ctx, base_branch, remote_branch)
    cc = COMMENT_CHAR

    lines = []
    if default_message:
        lines.append(default_message)
    lines += [
        "",
        f"{cc} Requesting a pull to {options.base_project.owner}:{options.base} from {options.head}",
        cc,
        f"{cc} Write a message for this pull request. The first block",
        f"{cc} of text is the title and the rest is the description.",
    ]
    if commit_summary:
        lines += [cc, f"{cc} Changes:", cc]
        lines += [f"{cc} {line}".rstrip() for line in commit_summary.splitlines()]

    git_dir = ctx.git_dir() or ".git"
    path = Path(git_dir)
    if not path.is_absolute():
        path = ctx.cwd / path
    message_file = path / "PULLREQ_EDITMSG"

    title, body = edit_message(ctx, message_file, "\n".join(lines) + "\n")
    message_file.unlink(missing_ok=True)
    return title, body


def _remote_name(ctx: CommandContext, project: RepositoryReference) -> str:
    remote = ctx.remote_for(project)
    return remote.name if remote else project.remote_slug


@register_rule("pull-request")
def pull_request(args: ArgumentList, ctx: CommandContext) -> None:
    options = parse_options(args, ctx)
    base_project = options.base_project
    head_project = options.head_project or base_project

    options.base = options.base or ctx.master_branch().short_name

    tracked_branch = None
    if options.head is None:
        current = ctx.current_branch()
        tracked_branch = current.upstream() if current else None
        if tracked_branch is not None and not tracked_branch.is_remote():
            # tracking a local branch counts as no upstream at all
            tracked_branch = None
        elif (
            tracked_branch is not None
            and base_project == head_project
            and tracked_branch.short_name == options.base
        ):
            raise DomainError(
                f"Aborted: head branch is the same as base (\"{options.base}\")\n"
                "(use `-h <branch>` to specify an explicit pull request head)"
            )

    if options.head is None:
        branch = tracked_branch or ctx.current_branch()
        if branch is None:
            raise DomainError("Aborted: not currently on any branch")
        options.head = branch.short_name

    user = ctx.github_user()
    assert user is not None
    if head_project.owner != user and tracked_branch is None and not options.explicit_owner:
        head_project = head_project.owned_by(user)

    remote_branch = f"{_remote_name(ctx, head_project)}/{options.head}"
    options.head = f"{head_project.owner}:{options.head}"

    if not options.force and tracked_branch is not None:
        if local_commits := ctx.rev_list(remote_branch, None):
            count = len(local_commits.splitlines())
            raise DomainError(
                f"Aborted: {count} commits are not yet pushed to {remote_branch}\n"
                "(use `-f` to force submit a pull request anyway)"
            )

    if args.is_dry_run():
        ctx.puts(f"Would request a pull to {base_project.owner}:{options.base} from {options.head}")
        args.skip()
        return

    if not options.title and not options.issue:
        base_branch = f"{_remote_name(ctx, base_project)}/{options.base}"
        options.title, options.body = compose_message(ctx, options, base_branch, remote_branch)

    with api_errors("creating pull request"):
        pull = ctx.api.create_pull_request(
            base_project,
            base=options.base,
            head=options.head,
            title=options.title,
            body=options.body,
            issue=options.issue,
        )

    args.executable = "echo"
    args.replace_all([pull.html_url])
