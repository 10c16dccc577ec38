"""
Launch strategies for a dispatched ArgumentList.

- dry run (``--noop``): print each command, run nothing
- skipped: nothing to run, output was already produced
- single command: replace the hub process with it (exec)
- chain: run every command but the last as a supervised child, stopping
  at the first failure; exec the last one
"""

from __future__ import annotations

import logging
import os
import subprocess
import sys

from rich.console import Console

from hubwrap.core.args import ArgumentList
from hubwrap.core.errors import ToolNotFoundError

logger = logging.getLogger(__name__)


def format_command(cmd: list[str]) -> str:
    """Display form of a command: arguments with spaces (or empty) are single-quoted."""
    return " ".join(f"'{arg}'" if " " in arg or not arg else arg for arg in cmd)


class Runner:
    """Executes the commands of a finished ArgumentList."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def execute(self, args: ArgumentList) -> int:
        """
        Run the command line.

        Returns:
            Exit status: 0 for dry runs and skipped lists, otherwise the
            status of the first failing child. A successful chain ends in
            exec and does not return.

        Raises:
            ToolNotFoundError: If a command's executable does not exist
        """
        if args.is_skipped():
            logger.debug("nothing to execute")
            return 0

        commands = args.commands()
        if args.is_dry_run():
            for cmd in commands:
                self.console.out(format_command(cmd), highlight=False)
            return 0

        *children, last = commands
        for cmd in children:
            status = self.run_child(cmd)
            if status != 0:
                logger.debug("%s exited with %d, stopping", cmd[0], status)
                return status

        self.launch(last)
        return 0

    def run_child(self, cmd: list[str]) -> int:
        """Run ``cmd`` to completion and return its exit status."""
        logger.debug("running %s", cmd)
        try:
            result = subprocess.run(cmd, check=False)
        except FileNotFoundError as e:
            raise ToolNotFoundError(cmd[0]) from e
        return result.returncode

    def launch(self, cmd: list[str]) -> None:
        """
        Replace the current process with ``cmd``.

        Buffered output is flushed first since nothing of this process
        runs after a successful exec.
        """
        logger.debug("exec %s", cmd)
        sys.stdout.flush()
        sys.stderr.flush()
        try:
            os.execvp(cmd[0], cmd)
        except FileNotFoundError as e:
            raise ToolNotFoundError(cmd[0]) from e


__all__ = ["Runner", "format_command"]
