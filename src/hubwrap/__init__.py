"""
hub - git + hub = github

A command-line wrapper for git that expands GitHub repository shorthand,
pull request and commit URLs, and adds GitHub-specific commands.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
