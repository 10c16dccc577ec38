"""
Argv preprocessor for passing git arguments through Typer untouched.

hub accepts the whole git grammar, so Typer must not interpret any option
(``-p``, ``--help``, ``-h``) or swallow a ``--`` separator that git needs
(``git checkout -- file``). Prefixing ``--`` makes every token positional.
"""


def preprocess_argv(argv: list[str]) -> list[str]:
    """Mark every token as positional.

    Click drops only the first ``--``, so separators the user typed survive.
    """
    return ["--", *argv]
