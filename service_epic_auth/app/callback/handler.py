"""
OAuth callback handler.

Turns the provider's redirect (carrying an authorization code) into a
VerificationResult: the verified token, or the reason the login failed.
The stages run strictly in order and the first failure ends the request.
"""

from typing import Optional

import httpx
from pydantic import BaseModel

from shared.logging import get_logger
from ..config import EpicAuthConfig
from ..jwks.client import JWKSClient
from ..oauth.exchange import TokenExchangeClient
from ..oauth.redirects import build_error_redirect, build_success_redirect
from ..tokens.decoder import decode_token
from ..validation.signature import verify_signature
from .errors import CallbackError, MissingCode, UnexpectedServerError


class VerificationResult(BaseModel):
    """Outcome of one callback."""
    valid: bool
    token: Optional[str] = None
    code: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, token: str) -> "VerificationResult":
        return cls(valid=True, token=token)

    @classmethod
    def failure(cls, error: CallbackError) -> "VerificationResult":
        return cls(valid=False, code=error.code, error=error.message)


class CallbackHandler:
    """Runs the callback pipeline for one request at a time, holding no state
    between requests."""

    def __init__(self, config: EpicAuthConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self.transport = transport
        self.logger = get_logger("epic_auth.callback")

    async def handle(self, code: Optional[str]) -> VerificationResult:
        """Run the callback flow for ``code``.

        Every failure is mapped to a failed VerificationResult here; nothing
        raised by a stage leaves this method.
        """
        try:
            token = await self._verify_code(code)
        except CallbackError as e:
            self.logger.warning("Callback failed", code=e.code, reason=e.message, details=e.details)
            return VerificationResult.failure(e)
        except httpx.HTTPError as e:
            self.logger.error("Upstream request failed", error=str(e), error_type=type(e).__name__)
            return VerificationResult.failure(UnexpectedServerError(type(e).__name__))
        except Exception as e:
            self.logger.error("Unexpected error during callback", error=str(e), exc_info=True)
            return VerificationResult.failure(UnexpectedServerError("Unexpected error"))

        return VerificationResult.success(token)

    def redirect_url(self, result: VerificationResult) -> str:
        """Front-end URL for a callback outcome."""
        if result.valid and result.token:
            return build_success_redirect(self.config.frontend_url, result.token)
        return build_error_redirect(self.config.frontend_url, result.error or UnexpectedServerError("Unknown error").message)

    async def _verify_code(self, code: Optional[str]) -> str:
        if not code:
            raise MissingCode()

        async with httpx.AsyncClient(timeout=self.config.http_timeout, transport=self.transport) as client:
            exchange = TokenExchangeClient(
                token_url=self.config.token_url,
                client_id=self.config.epic_client_id,
                client_secret=self.config.epic_client_secret,
                redirect_uri=self.config.redirect_uri,
                http_client=client,
            )
            token = await exchange.exchange_code(code)

            decoded = decode_token(token)

            jwks_client = JWKSClient(self.config.jwks_url, client)
            key = await jwks_client.get_key(decoded.kid)

        verify_signature(decoded, key)

        claims = decoded.claims()
        if claims is None:
            self.logger.warning("Verified token payload is not a JSON object", kid=decoded.kid)
        else:
            self.logger.info(
                "Token verified",
                kid=decoded.kid,
                sub=claims.get("sub"),
                iss=claims.get("iss"),
                exp=claims.get("exp")
            )
            self.logger.debug("Decoded JWT payload", claims=claims)

        return token
