"""
hub CLI - Main application entry point.

A single Typer command receives the raw git arguments, runs them through
the Dispatcher and hands the result to the Runner.
"""

import logging
import sys
import typer

from hubwrap.cli.argv import preprocess_argv
from hubwrap.cli.errors import ExitCode, print_hub_error
from hubwrap.core.commands import CommandContext
from hubwrap.core.config import load_config, load_layered_env
from hubwrap.core.dispatcher import Dispatcher
from hubwrap.core.errors import HubError
from hubwrap.core.runner import Runner

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="hub",
    help="git + hub = github",
    add_completion=False,
    context_settings={"help_option_names": []},
)


def setup_logging(debug: bool = False) -> None:
    """
    Configure logging for hub.

    Args:
        debug: If True, enable DEBUG level logging on stderr
    """
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


@app.command()
def main(
    argv: list[str] | None = typer.Argument(
        None,
        metavar="[GIT-OPTIONS] COMMAND [ARGS]...",
        help="git command line to expand and run",
    ),
) -> None:
    """
    Run git with GitHub-aware argument expansion.

    Examples:
        hub clone rtomayko/tilt
        hub fetch mislav,xoebus
        hub checkout https://github.com/defunkt/hub/pull/73
        hub pull-request -b master
    """
    # Precedence: OS env > project .env > user .env
    load_layered_env()
    config = load_config()
    setup_logging(config.debug)

    context = CommandContext(config=config)
    try:
        args = Dispatcher(context).dispatch(argv or [])
        status = Runner().execute(args)
    except HubError as e:
        logger.debug("aborted: %r", e)
        print_hub_error(e)
        raise typer.Exit(ExitCode.GENERAL_ERROR) from e
    except KeyboardInterrupt:
        raise typer.Exit(ExitCode.SIGINT) from None

    raise typer.Exit(status)


def cli_main() -> None:
    """
    Main CLI entry point.

    The argv preprocessor keeps Typer from interpreting git's options.
    """
    sys.argv[1:] = preprocess_argv(sys.argv[1:])
    app()


__all__ = ["app", "cli_main", "main"]
