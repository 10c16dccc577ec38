"""
Git-style paging for long output (help text, the hub manual).

Output is piped through the user's pager only when stdout is a terminal.
The pager is chosen like git does: GIT_PAGER, then ``core.pager``, then
PAGER, then ``less -isr``. An empty pager setting disables paging.
"""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from typing import TextIO

from hubwrap.core.context import GitReader

logger = logging.getLogger(__name__)

DEFAULT_PAGER = "less -isr"


def resolve_pager(reader: GitReader | None = None) -> str:
    """Pager command line, or an empty string when paging is disabled."""
    if (pager := os.environ.get("GIT_PAGER")) is not None:
        return pager.strip()
    if reader is not None and (configured := reader.read_config("core.pager")):
        return configured.strip()
    if (pager := os.environ.get("PAGER")) is not None:
        return pager.strip()
    return DEFAULT_PAGER


def page_text(text: str, pager: str | None = None, stream: TextIO | None = None) -> None:
    """
    Write ``text``, through a pager when attached to a terminal.

    The pipe to the pager is closed and the pager awaited on every path,
    including a pager that exits early or fails to start.
    """
    stream = stream or sys.stdout
    if not text.endswith("\n"):
        text += "\n"

    if pager is None:
        pager = resolve_pager()
    if not pager or pager == "cat" or not stream.isatty() or sys.platform.startswith("win"):
        stream.write(text)
        stream.flush()
        return

    env = os.environ.copy()
    # quit if one screen, keep colors, no init
    env["LESS"] = "FSRX"
    stream.flush()
    try:
        proc = subprocess.Popen(pager, shell=True, stdin=subprocess.PIPE, text=True, env=env)
    except OSError as e:
        logger.debug("pager %r failed to start: %s", pager, e)
        stream.write(text)
        stream.flush()
        return

    assert proc.stdin is not None
    try:
        proc.stdin.write(text)
    except BrokenPipeError:
        pass
    finally:
        try:
            proc.stdin.close()
        except BrokenPipeError:
            pass
        proc.wait()


__all__ = ["DEFAULT_PAGER", "page_text", "resolve_pager"]
