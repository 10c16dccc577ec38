"""Allow running hub as ``python -m hubwrap``."""

from hubwrap.cli import cli_main

if __name__ == "__main__":
    cli_main()
