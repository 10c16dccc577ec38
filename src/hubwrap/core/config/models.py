"""
Configuration data model for hub.

Defines the structure of ~/.config/hubwrap/config.json, with validation
and type safety via Pydantic. Values left unset here fall back to git
configuration (github.user, github.token, hub.protocol) at lookup time.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class HubConfig(BaseModel):
    """
    Top-level hub configuration.

    Example:
        >>> config = HubConfig(host="github.example.com", protocol="https")
        >>> config.prefers_https
        True
    """

    model_config = ConfigDict(extra="ignore")

    host: Optional[str] = Field(
        default=None,
        description="Hosted-service hostname (defaults to github.com)"
    )
    user: Optional[str] = Field(
        default=None,
        description="Account name used for shorthand without an owner"
    )
    token: Optional[str] = Field(
        default=None,
        description="API token for authenticated requests"
    )
    protocol: Optional[Literal["git", "https"]] = Field(
        default=None,
        description="Preferred clone protocol for generated remote URLs"
    )
    browser: Optional[str] = Field(
        default=None,
        description="Command used by browse/compare to open URLs"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug logging to stderr"
    )

    @field_validator("host", "user", "token", "browser")
    @classmethod
    def blank_is_unset(cls, v: Optional[str]) -> Optional[str]:
        """Treat empty strings (e.g. GITHUB_HOST=) as unset."""
        if v is not None and not v.strip():
            return None
        return v

    @property
    def prefers_https(self) -> bool:
        return self.protocol == "https"
