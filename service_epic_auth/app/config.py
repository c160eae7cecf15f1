"""
Configuration for the Epic auth bridge service.
"""

from typing import List, Optional

from pydantic import AliasChoices, Field

from shared.config import BaseConfig

DEFAULT_AUTHORIZE_URL = "https://www.epicgames.com/id/authorize"
DEFAULT_TOKEN_URL = "https://api.epicgames.dev/epic/oauth/v1/token"
DEFAULT_JWKS_URL = "https://api.epicgames.dev/epic/oauth/v1/.well-known/jwks.json"


class EpicAuthConfig(BaseConfig):
    """Settings for the Epic OAuth bridge.

    The four credentials and URLs below have no defaults. They are allowed to
    be absent at load time so the service can start and report the problem on
    each request instead of crashing.
    """

    # Required
    epic_client_id: Optional[str] = Field(default=None, validation_alias=AliasChoices("EPIC_CLIENT_ID", "epic_client_id"))
    epic_client_secret: Optional[str] = Field(default=None, validation_alias=AliasChoices("EPIC_CLIENT_SECRET", "epic_client_secret"))
    redirect_uri: Optional[str] = Field(default=None, validation_alias=AliasChoices("REDIRECT_URI", "redirect_uri"))
    frontend_url: Optional[str] = Field(default=None, validation_alias=AliasChoices("FRONTEND_URL", "frontend_url"))

    # Provider endpoints
    authorize_url: str = Field(default=DEFAULT_AUTHORIZE_URL, validation_alias=AliasChoices("EPIC_AUTHORIZE_URL", "authorize_url"))
    token_url: str = Field(default=DEFAULT_TOKEN_URL, validation_alias=AliasChoices("EPIC_TOKEN_URL", "token_url"))
    jwks_url: str = Field(default=DEFAULT_JWKS_URL, validation_alias=AliasChoices("EPIC_JWKS_URL", "jwks_url"))

    def missing_settings(self) -> List[str]:
        """Return the environment names of required settings that are unset or empty."""
        required = {
            "EPIC_CLIENT_ID": self.epic_client_id,
            "EPIC_CLIENT_SECRET": self.epic_client_secret,
            "REDIRECT_URI": self.redirect_uri,
            "FRONTEND_URL": self.frontend_url,
        }
        return [name for name, value in required.items() if not value]


def get_config() -> EpicAuthConfig:
    """Load configuration from the environment and ``.env``."""
    return EpicAuthConfig()
