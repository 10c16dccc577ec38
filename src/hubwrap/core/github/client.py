"""
Hosted-service API client for hub.

Talks to the GitHub REST API (or a GitHub Enterprise host) with httpx.
Proxy settings come from HTTP_PROXY/HTTPS_PROXY (any case), which httpx
honors through ``trust_env``.

Example:
    >>> api = GitHubAPI(token="...")
    >>> api.project_exists(RepositoryReference(owner="mislav", name="hub"))
    True
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from hubwrap import __version__
from hubwrap.core.errors import DomainError, GitHubAPIError
from hubwrap.core.github.models import PullRequest
from hubwrap.core.references import MAIN_HOST, RepositoryReference

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


def api_base_url(host: str) -> str:
    """REST endpoint root for a host: api.github.com or <host>/api/v3."""
    if host == MAIN_HOST:
        return "https://api.github.com"
    return f"https://{host}/api/v3"


class GitHubAPI:
    """
    Synchronous client for the handful of API calls hub makes.

    Every call blocks; a non-success response raises GitHubAPIError with
    the status, reason and body so the caller can report it.

    Attributes:
        token: API token; required for requests that modify anything
    """

    def __init__(
        self,
        token: str | None = None,
        transport: httpx.BaseTransport | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.token = token
        self._transport = transport
        self._timeout = timeout

    def _headers(self, auth_required: bool) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": f"hub/{__version__}",
        }
        if self.token:
            headers["Authorization"] = f"token {self.token}"
        elif auth_required:
            raise DomainError(
                "** No GitHub token set. "
                "Set GITHUB_TOKEN or run `git config --global github.token <token>`"
            )
        return headers

    def _request(
        self,
        method: str,
        host: str,
        path: str,
        payload: dict[str, Any] | None = None,
    ) -> httpx.Response:
        url = api_base_url(host) + path
        headers = self._headers(auth_required=method != "GET")
        logger.debug("%s %s", method, url)
        try:
            with httpx.Client(
                transport=self._transport,
                timeout=self._timeout,
                trust_env=True,
            ) as client:
                response = client.request(method, url, headers=headers, json=payload)
        except httpx.HTTPError as e:
            raise GitHubAPIError(0, str(e) or e.__class__.__name__) from e
        logger.debug("%s %s -> %s", method, url, response.status_code)
        return response

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        if response.is_success:
            return
        raise GitHubAPIError(
            response.status_code,
            response.reason_phrase or "Unknown error",
            body=response.text,
            content_type=response.headers.get("content-type", ""),
        )

    def project_exists(self, project: RepositoryReference) -> bool:
        """Whether ``project`` exists (and is visible to the token)."""
        response = self._request("GET", project.host, f"/repos/{project.name_with_owner}")
        return response.is_success

    def fetch_pull_request(self, project: RepositoryReference, number: str | int) -> PullRequest:
        """
        Fetch pull request metadata.

        Raises:
            GitHubAPIError: If the pull request could not be fetched
        """
        response = self._request(
            "GET", project.host, f"/repos/{project.name_with_owner}/pulls/{number}"
        )
        self._raise_for_status(response)
        return PullRequest.from_api(response.json())

    def fork_project(self, project: RepositoryReference) -> None:
        """Fork ``project`` into the authenticated user's account."""
        response = self._request("POST", project.host, f"/repos/{project.name_with_owner}/forks")
        self._raise_for_status(response)

    def create_project(
        self,
        project: RepositoryReference,
        *,
        organization: bool = False,
        private: bool = False,
        description: str | None = None,
        homepage: str | None = None,
    ) -> None:
        """
        Create a repository.

        Args:
            project: Repository to create
            organization: Create under ``project.owner`` as an organization
                instead of under the authenticated user
            private: Create a private repository
            description: Optional description
            homepage: Optional homepage URL
        """
        payload: dict[str, Any] = {"name": project.name}
        if private:
            payload["private"] = True
        if description:
            payload["description"] = description
        if homepage:
            payload["homepage"] = homepage

        path = f"/orgs/{project.owner}/repos" if organization else "/user/repos"
        response = self._request("POST", project.host, path, payload)
        self._raise_for_status(response)

    def create_pull_request(
        self,
        project: RepositoryReference,
        *,
        base: str,
        head: str,
        title: str | None = None,
        body: str | None = None,
        issue: str | None = None,
    ) -> PullRequest:
        """
        Open a pull request against ``project``.

        Either ``title`` or ``issue`` (an issue number to convert) is needed.
        """
        payload: dict[str, Any] = {"base": base, "head": head}
        if issue:
            payload["issue"] = int(issue)
        if title:
            payload["title"] = title
        if body:
            payload["body"] = body

        response = self._request(
            "POST", project.host, f"/repos/{project.name_with_owner}/pulls", payload
        )
        self._raise_for_status(response)
        return PullRequest.from_api(response.json())
