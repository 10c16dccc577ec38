"""
GitHub data models for hub.

Defines Pydantic models for the API responses hub consumes.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, computed_field


class PullRequest(BaseModel):
    """
    A pull request, reduced to the fields the rewrite rules need.

    ``head_label`` is ``user:branch``. ``head_repo_present`` is False when
    the fork the pull request came from has been deleted.
    """

    number: int = Field(default=0, description="Pull request number")
    html_url: str = Field(default="", description="Browser URL")
    head_label: str = Field(default="", description="user:branch of the head")
    head_repo_present: bool = Field(default=True, description="Head fork still exists")
    head_repo_private: bool = Field(default=False, description="Head fork is private")

    @computed_field
    @property
    def head_user(self) -> str:
        return self.head_label.split(":", 1)[0]

    @computed_field
    @property
    def head_branch(self) -> str:
        parts = self.head_label.split(":", 1)
        return parts[1] if len(parts) > 1 else ""

    @classmethod
    def from_api(cls, data: dict[str, object]) -> PullRequest:
        """
        Create PullRequest from a REST API response.

        Args:
            data: JSON body of ``GET /repos/{owner}/{repo}/pulls/{number}``

        Returns:
            PullRequest instance
        """
        head = data.get("head")
        label = ""
        repo_present = False
        repo_private = False
        if isinstance(head, dict):
            label = str(head.get("label") or "")
            repo = head.get("repo")
            if isinstance(repo, dict):
                repo_present = True
                repo_private = bool(repo.get("private", False))

        number = data.get("number", 0)
        url = data.get("html_url", "")

        return cls(
            number=int(number) if isinstance(number, (int, float)) else 0,
            html_url=str(url) if url else "",
            head_label=label,
            head_repo_present=repo_present,
            head_repo_private=repo_private,
        )
