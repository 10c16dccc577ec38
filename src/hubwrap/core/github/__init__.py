"""
GitHub API integration for hub.

Provides the HTTP client used by fork, create, checkout, fetch and
pull-request.
"""

from hubwrap.core.github.client import GitHubAPI, api_base_url
from hubwrap.core.github.models import PullRequest

__all__ = [
    "GitHubAPI",
    "PullRequest",
    "api_base_url",
]
