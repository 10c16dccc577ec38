"""
``git am`` and ``git apply`` of a pull request, commit or gist URL.

    $ hub am https://github.com/defunkt/hub/pull/55
    > curl -#LA 'hub <version>' https://github.com/defunkt/hub/pull/55.patch -o /tmp/55.patch
    > git am /tmp/55.patch

The download is scheduled ahead of the git command, so ``--noop`` shows
it without fetching anything.
"""

from __future__ import annotations

import os
import re

from hubwrap import __version__
from hubwrap.core.args import ArgumentList
from hubwrap.core.commands.base import CommandContext, register_rule


def patch_url(url: str, gist: bool) -> str:
    """Raw patch URL for a web URL: fragment and /files-style suffixes removed."""
    url = re.sub(r"#.+", "", url)
    if not gist:
        # pull/42/files, pull/42/commits
        url = re.sub(r"(/pull/\d+)/\w*$", r"\1", url)
    ext = ".txt" if gist else ".patch"
    if os.path.splitext(url)[1] != ext:
        url += ext
    return url


def patch_file_path(url: str, gist: bool) -> str:
    """Temporary file the patch is downloaded to (honors TMPDIR)."""
    tmpdir = os.environ.get("TMPDIR") or "/tmp"
    prefix = "gist-" if gist else ""
    return os.path.join(tmpdir, prefix + os.path.basename(url))


@register_rule("am", "apply")
def am(args: ArgumentList, ctx: CommandContext) -> None:
    for idx, arg in enumerate(args):
        if not re.match(r"^https?://", arg):
            continue
        hosted = ctx.resolve_github_url(arg)
        if hosted is None:
            continue

        url = patch_url(arg, hosted.gist)
        patch_file = patch_file_path(url, hosted.gist)
        args.schedule_before(["-#LA", f"hub {__version__}", url, "-o", patch_file], "curl")
        args[idx] = patch_file
        break
