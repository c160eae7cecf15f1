"""
JWKS client for the Epic identity provider.
"""

from typing import List, Optional

import httpx
from pydantic import BaseModel, ConfigDict, StrictStr, ValidationError

from shared.logging import get_logger
from ..callback.errors import InvalidJwksFormat, KeyNotFound, UpstreamJwksFailed


class JsonWebKey(BaseModel):
    """One entry of a key set. Only ``kid`` and ``kty`` are required here;
    algorithm-specific members are checked when the key is imported."""

    model_config = ConfigDict(extra="allow")

    kid: StrictStr
    kty: StrictStr
    alg: Optional[str] = None
    use: Optional[str] = None
    n: Optional[str] = None
    e: Optional[str] = None

    def to_jwk(self) -> dict:
        """Key as a plain JWK dict, without unset optional members."""
        return self.model_dump(exclude_none=True)


class JsonWebKeySet(BaseModel):
    """A JWKS document."""

    model_config = ConfigDict(extra="allow")

    keys: List[JsonWebKey]

    def find(self, kid: str) -> Optional[JsonWebKey]:
        for key in self.keys:
            if key.kid == kid:
                return key
        return None


class JWKSClient:
    """Fetches the provider's key set. Every call goes to the network."""

    def __init__(self, jwks_url: str, http_client: httpx.AsyncClient):
        self.jwks_url = jwks_url
        self.http_client = http_client
        self.logger = get_logger("epic_auth.jwks")

    async def get_jwks(self) -> JsonWebKeySet:
        """Fetch and deserialize the key set.

        Raises:
            UpstreamJwksFailed: non-2xx response.
            InvalidJwksFormat: body is not a JWKS document.
        """
        response = await self.http_client.get(self.jwks_url)

        if not response.is_success:
            self.logger.error(
                "Failed to fetch JWKS",
                status_code=response.status_code,
                url=self.jwks_url
            )
            raise UpstreamJwksFailed(response.status_code)

        try:
            jwks = JsonWebKeySet.model_validate_json(response.content)
        except ValidationError as e:
            self.logger.error("Invalid JWKS format received", errors=e.error_count())
            raise InvalidJwksFormat(details={"errors": e.error_count()}) from e

        self.logger.info("JWKS fetched", keys_count=len(jwks.keys))
        return jwks

    async def get_key(self, kid: str) -> JsonWebKey:
        """Fetch the key set and return the key with the given kid.

        Raises:
            KeyNotFound: no key in the fresh key set has this kid.
        """
        jwks = await self.get_jwks()
        key = jwks.find(kid)
        if key is None:
            self.logger.warning("Public key not found in JWKS", kid=kid)
            raise KeyNotFound(kid)
        return key
