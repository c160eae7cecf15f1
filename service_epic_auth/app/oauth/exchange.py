"""
Authorization-code exchange against the Epic token endpoint.
"""

from typing import Optional

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError

from shared.logging import get_logger
from ..callback.errors import MissingToken, UpstreamExchangeFailed


class TokenExchangeResponse(BaseModel):
    """Token endpoint response body. Only ``access_token`` is used."""

    model_config = ConfigDict(extra="allow")

    access_token: Optional[str] = None


class TokenExchangeClient:
    """Exchanges a single-use authorization code for a token."""

    def __init__(
        self,
        token_url: str,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        http_client: httpx.AsyncClient,
    ):
        self.token_url = token_url
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.http_client = http_client
        self.logger = get_logger("epic_auth.exchange")

    async def exchange_code(self, code: str) -> str:
        """POST the code to the token endpoint and return the access token.

        Raises:
            UpstreamExchangeFailed: non-2xx response.
            MissingToken: the body carries no non-empty ``access_token``.
        """
        self.logger.info("Exchanging authorization code for token")

        response = await self.http_client.post(
            self.token_url,
            auth=(self.client_id, self.client_secret),
            data={
                "grant_type": "authorization_code",
                "code": code,
                "redirect_uri": self.redirect_uri,
            },
        )

        if not response.is_success:
            self.logger.error("Token exchange failed", status_code=response.status_code)
            self.logger.debug("Token exchange error body", body=response.text[:500])
            raise UpstreamExchangeFailed(response.status_code)

        try:
            token_data = TokenExchangeResponse.model_validate_json(response.content)
        except ValidationError as e:
            self.logger.error("Token response is not a JSON object", errors=e.error_count())
            raise MissingToken(details={"errors": e.error_count()}) from e

        if not token_data.access_token:
            self.logger.error("Token response missing access_token")
            raise MissingToken()

        self.logger.info(
            "Token exchange succeeded",
            token_type=(token_data.model_extra or {}).get("token_type"),
            expires_in=(token_data.model_extra or {}).get("expires_in")
        )
        return token_data.access_token
