"""
Repository reference recognition and URL construction.

All rewrite rules share the grammars defined here, so that "what counts as
a repository shorthand" and "how a reference becomes a clone URL" have one
definition:

- ``OWNER_RE``  account names (``mislav``, ``my-org``)
- ``NAME_RE``   repository names (``hub``, ``dotfiles.vim``)
- ``NAME_WITH_OWNER_RE``  ``name`` or ``owner/name``
- hosted URLs  ``https://<known host>/<owner>/<name>/<project path>``

Example:
    >>> ref = RepositoryReference(owner="rtomayko", name="tilt")
    >>> build_remote_url(ref)
    'git://github.com/rtomayko/tilt.git'
    >>> build_remote_url(ref, private=True)
    'git@github.com:rtomayko/tilt.git'
"""

from __future__ import annotations

import os
import re
from collections.abc import Iterable
from typing import Literal
from urllib.parse import urlsplit

from pydantic import BaseModel, Field, computed_field, field_validator

from hubwrap.core.config import load_config

MAIN_HOST = "github.com"

NAME_RE = r"\w[\w.-]*"
OWNER_RE = r"[a-zA-Z0-9-]+"

OWNER_PATTERN = re.compile(rf"^({OWNER_RE})$", re.ASCII)
OWNER_NAME_PATTERN = re.compile(rf"^({OWNER_RE})/({NAME_RE})$", re.ASCII)
NAME_PATTERN = re.compile(rf"^({NAME_RE})$", re.ASCII)
NAME_WITH_OWNER_RE = re.compile(rf"^(?:{NAME_RE}|{OWNER_RE}/{NAME_RE})$", re.ASCII)
OWNER_SHA_PATTERN = re.compile(rf"^({OWNER_RE})@([a-f0-9]{{7,40}})$", re.ASCII)

_SCP_URL_PATTERN = re.compile(r"^(?:[^@/]+@)?([\w.-]+):(?!//)(.+)$")


def default_host() -> str:
    """The service host: GITHUB_HOST (or configured host), else github.com."""
    return load_config().host or MAIN_HOST


def normalize_host(host: str) -> str:
    """Map ``ssh.github.com`` to ``github.com``; lowercase everything."""
    host = host.lower()
    if host == f"ssh.{MAIN_HOST}":
        return MAIN_HOST
    return host


def is_owner(token: str) -> bool:
    """Whether ``token`` matches the account-name grammar."""
    return OWNER_PATTERN.match(token) is not None


def is_name_with_owner(token: str) -> bool:
    """Whether ``token`` is ``name`` or ``owner/name`` shorthand."""
    return NAME_WITH_OWNER_RE.match(token) is not None


class RepositoryReference(BaseModel):
    """
    A hosted repository: owner, name and host.

    Spaces in names are replaced by dashes, matching how the service
    normalizes repository names.
    """

    owner: str = Field(..., description="Account that owns the repository")
    name: str = Field(..., description="Repository name")
    host: str = Field(default=MAIN_HOST, description="Service hostname")

    @field_validator("name")
    @classmethod
    def _dasherize(cls, value: str) -> str:
        return value.replace(" ", "-")

    @field_validator("host")
    @classmethod
    def _normalize_host(cls, value: str) -> str:
        return normalize_host(value)

    @computed_field
    @property
    def name_with_owner(self) -> str:
        """Full repository name (owner/name)."""
        return f"{self.owner}/{self.name}"

    @computed_field
    @property
    def remote_slug(self) -> str:
        """Local remote name used when adding a remote for this repository."""
        return self.owner

    @property
    def is_main_host(self) -> bool:
        return self.host == MAIN_HOST

    def owned_by(self, owner: str) -> RepositoryReference:
        """Same repository name and host under a different owner."""
        return self.model_copy(update={"owner": owner})

    def renamed(self, name: str) -> RepositoryReference:
        return self.model_copy(update={"name": name.replace(" ", "-")})

    def web_url(self, path: str | None = None) -> str:
        """
        Browser URL for the repository, optionally with a sub-path.

        Wiki repositories (``name.wiki``) map onto the parent's wiki pages.
        """
        project_name = self.name_with_owner
        path = path or ""
        if project_name.endswith(".wiki"):
            project_name = project_name[: -len(".wiki")]
            if path != "/wiki":
                if path.startswith("/commits/"):
                    path = "/_history"
                else:
                    path = re.sub(r"\w+", lambda m: "_" + m.group(0), path, count=1)
                path = "/wiki" + path
        return f"https://{self.host}/{project_name}{path}"


class ParsedHostedUrl(BaseModel):
    """
    Components of a URL that points into the hosted service.

    ``project_path`` is everything after ``owner/repo/`` (``pull/42``,
    ``commit/<sha>``, ``issues/7``), or None when the URL stops at the
    repository.
    """

    scheme: str
    host: str
    owner: str
    name: str
    project_path: str | None = None
    gist: bool = False

    @computed_field
    @property
    def owner_and_repo(self) -> str:
        return f"{self.owner}/{self.name}"

    @property
    def reference(self) -> RepositoryReference:
        return RepositoryReference(owner=self.owner, name=self.name, host=self.host)

    def match_path(self, pattern: str) -> re.Match[str] | None:
        """Match ``pattern`` against the start of the project path."""
        if self.project_path is None:
            return None
        return re.match(pattern, self.project_path)


def parse_shorthand(
    token: str,
    *,
    bare: Literal["owner", "name"] = "name",
    default_owner: str | None = None,
    default_name: str | None = None,
    host: str | None = None,
    allow_local_dir: bool = False,
) -> RepositoryReference | None:
    """
    Recognize repository shorthand.

    Grammars, in priority order:
        1. ``owner/name``
        2. bare ``owner`` (``bare="owner"``), paired with ``default_name``;
           used when guessing a remote from its name
        3. bare ``name`` (``bare="name"``), paired with ``default_owner``

    Args:
        token: Command-line token
        bare: How to interpret a token without a slash
        default_owner: Owner for bare names (usually the authenticated user)
        default_name: Name for bare owners (usually the current repository)
        host: Service host (defaults to the configured host)
        allow_local_dir: Accept tokens that name an existing directory

    Returns:
        RepositoryReference, or None when the token is not shorthand, names a
        local directory, or a needed default is missing
    """
    if not allow_local_dir and os.path.isdir(token):
        return None

    host = host or default_host()

    if match := OWNER_NAME_PATTERN.match(token):
        return RepositoryReference(owner=match.group(1), name=match.group(2), host=host)

    if bare == "owner":
        if OWNER_PATTERN.match(token) and default_name:
            return RepositoryReference(owner=token, name=default_name, host=host)
        return None

    if NAME_PATTERN.match(token) and default_owner:
        return RepositoryReference(owner=default_owner, name=token, host=host)
    return None


def parse_hosted_url(
    text: str | None, known_hosts: Iterable[str] | None = None
) -> ParsedHostedUrl | None:
    """
    Parse an absolute http(s) URL that points into the hosted service.

    Args:
        text: Candidate URL
        known_hosts: Hosts that count as the service (defaults to the
            configured host); gist subdomains of these hosts are accepted

    Returns:
        ParsedHostedUrl, or None for anything else
    """
    if not text or not re.match(r"^https?:", text):
        return None
    try:
        parts = urlsplit(text)
        hostname = parts.hostname
    except ValueError:
        return None
    if parts.scheme not in ("http", "https") or not hostname:
        return None

    hosts = {normalize_host(h) for h in (known_hosts or [default_host()])}
    host = normalize_host(hostname)
    gist = False
    if host not in hosts:
        if host.startswith("gist.") and host[len("gist."):] in hosts:
            gist = True
        else:
            return None

    segments = parts.path.split("/", 3)
    owner = segments[1] if len(segments) > 1 else ""
    name = segments[2] if len(segments) > 2 else ""
    if gist:
        # gist.github.com/<id> or gist.github.com/<owner>/<id>
        if not owner:
            return None
        if not name:
            owner, name = "", owner
    elif not owner or not name:
        return None

    name = re.sub(r"\.git$", "", name)
    project_path = segments[3] if len(segments) > 3 and segments[3] else None
    return ParsedHostedUrl(
        scheme=parts.scheme,
        host=host,
        owner=owner,
        name=name,
        project_path=project_path,
        gist=gist,
    )


def reference_from_remote_url(
    url: str, known_hosts: Iterable[str]
) -> RepositoryReference | None:
    """
    Map a configured remote URL onto a repository on a known host.

    Handles ``git@host:owner/name.git``, ``ssh://git@host/owner/name.git``,
    ``git://host/owner/name.git`` and ``https://host/owner/name``.
    """
    hosts = {normalize_host(h) for h in known_hosts}

    if (match := _SCP_URL_PATTERN.match(url)) and not url.startswith("/"):
        host, path = match.group(1), "/" + match.group(2)
    else:
        try:
            parts = urlsplit(url)
        except ValueError:
            return None
        if parts.scheme not in ("ssh", "git", "http", "https") or not parts.hostname:
            return None
        host, path = parts.hostname, parts.path

    host = normalize_host(host)
    if host not in hosts:
        return None

    segments = path.split("/", 3)
    if len(segments) < 3 or not segments[1] or not segments[2]:
        return None
    name = re.sub(r"\.git$", "", segments[2].rstrip("/"))
    return RepositoryReference(owner=segments[1], name=name, host=host)


def build_remote_url(
    reference: RepositoryReference, *, private: bool = False, https: bool = False
) -> str:
    """
    Clone URL for a reference.

    - https mode: ``https://host/owner/name.git``
    - private (SSH): ``git@host:owner/name.git``
    - otherwise: ``git://host/owner/name.git``
    """
    if https:
        prefix = f"https://{reference.host}/"
    elif private:
        prefix = f"git@{reference.host}:"
    else:
        prefix = f"git://{reference.host}/"
    return f"{prefix}{reference.name_with_owner}.git"


__all__ = [
    "MAIN_HOST",
    "NAME_RE",
    "OWNER_RE",
    "NAME_WITH_OWNER_RE",
    "OWNER_SHA_PATTERN",
    "ParsedHostedUrl",
    "RepositoryReference",
    "build_remote_url",
    "default_host",
    "is_name_with_owner",
    "is_owner",
    "normalize_host",
    "parse_hosted_url",
    "parse_shorthand",
    "reference_from_remote_url",
]
