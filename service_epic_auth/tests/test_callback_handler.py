"""
Unit tests for CallbackHandler.
"""

import httpx
import pytest
from unittest.mock import patch

from service_epic_auth.app.callback.handler import CallbackHandler, VerificationResult
from service_epic_auth.app.config import EpicAuthConfig
from shared.test_helpers import (
    FRONTEND_URL,
    JWKS_URL,
    TOKEN_URL,
    MockProvider,
    flip_signature_byte,
    make_jwks,
    mock_config_kwargs,
)


@pytest.fixture
def config():
    return EpicAuthConfig(**mock_config_kwargs())


def make_handler(config: EpicAuthConfig, provider: MockProvider) -> CallbackHandler:
    return CallbackHandler(config, transport=provider.transport)


class TestCallbackHandler:
    """Test cases for the callback pipeline."""

    @pytest.mark.asyncio
    async def test_valid_token_is_returned_unmodified(self, config, signing_key):
        token = signing_key.sign()
        provider = MockProvider.issuing(token, make_jwks(signing_key))

        result = await make_handler(config, provider).handle("auth-code-123")

        assert result.valid is True
        assert result.token == token
        assert result.error is None
        assert len(provider.calls_to(TOKEN_URL)) == 1
        assert len(provider.calls_to(JWKS_URL)) == 1

    @pytest.mark.asyncio
    async def test_key_selected_by_kid_among_several(self, config, signing_key, other_signing_key):
        token = other_signing_key.sign()
        provider = MockProvider.issuing(token, make_jwks(signing_key, other_signing_key))

        result = await make_handler(config, provider).handle("auth-code-123")

        assert result.valid is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize("code", [None, ""])
    async def test_missing_code_never_reaches_token_endpoint(self, config, code):
        provider = MockProvider()

        result = await make_handler(config, provider).handle(code)

        assert result.valid is False
        assert result.code == "MISSING_CODE"
        assert result.error == "Missing authorization code"
        assert provider.requests == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [400, 401, 500])
    async def test_exchange_failure_skips_jwks(self, config, status_code):
        provider = MockProvider(token_status=status_code, token_body={"error": "invalid_grant"})

        result = await make_handler(config, provider).handle("auth-code-123")

        assert result.error == f"Token exchange failed: {status_code}"
        assert provider.calls_to(JWKS_URL) == []

    @pytest.mark.asyncio
    async def test_missing_token(self, config):
        provider = MockProvider(token_body={"token_type": "bearer"})

        result = await make_handler(config, provider).handle("auth-code-123")

        assert result.error == "Missing token in response"
        assert provider.calls_to(JWKS_URL) == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("token", ["opaque-access-token", "a.b", "a.b.c.d"])
    async def test_malformed_token_skips_jwks(self, config, token):
        provider = MockProvider(token_body={"access_token": token})

        result = await make_handler(config, provider).handle("auth-code-123")

        assert result.code == "INVALID_TOKEN_FORMAT"
        assert result.error == "Invalid JWT format"
        assert provider.calls_to(JWKS_URL) == []

    @pytest.mark.asyncio
    async def test_invalid_base64_segment(self, config):
        provider = MockProvider(token_body={"access_token": "a.b.c"})

        result = await make_handler(config, provider).handle("auth-code-123")

        assert result.error == "Invalid base64url data"
        assert provider.calls_to(JWKS_URL) == []

    @pytest.mark.asyncio
    async def test_jwks_upstream_failure(self, config, signing_key):
        provider = MockProvider(token_body={"access_token": signing_key.sign()}, jwks_status=503)

        result = await make_handler(config, provider).handle("auth-code-123")

        assert result.code == "UPSTREAM_JWKS_FAILED"
        assert result.error == "Failed to fetch JWKS: 503"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("jwks_body", [[], {"keys": "none"}, b"oops"])
    async def test_invalid_jwks_format(self, config, signing_key, jwks_body):
        provider = MockProvider(token_body={"access_token": signing_key.sign()}, jwks_body=jwks_body)

        result = await make_handler(config, provider).handle("auth-code-123")

        assert result.error == "Invalid JWKS format"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("claims", [{"sub": "a"}, {}, {"admin": True, "sub": "b"}])
    async def test_key_not_found_regardless_of_payload(self, config, signing_key, other_signing_key, claims):
        provider = MockProvider.issuing(signing_key.sign(claims), make_jwks(other_signing_key))

        result = await make_handler(config, provider).handle("auth-code-123")

        assert result.code == "KEY_NOT_FOUND"
        assert result.error == "Public key not found"

    @pytest.mark.asyncio
    async def test_flipped_signature_rejected(self, config, signing_key):
        provider = MockProvider.issuing(flip_signature_byte(signing_key.sign()), make_jwks(signing_key))

        result = await make_handler(config, provider).handle("auth-code-123")

        assert result.valid is False
        assert result.token is None
        assert result.error == "JWT verification failed"

    @pytest.mark.asyncio
    async def test_key_published_under_wrong_kid_rejected(self, config, signing_key, other_signing_key):
        # Provider publishes other_signing_key's material under signing_key's kid
        impostor = other_signing_key.public_jwk()
        impostor["kid"] = signing_key.kid
        provider = MockProvider.issuing(signing_key.sign(), {"keys": [impostor]})

        result = await make_handler(config, provider).handle("auth-code-123")

        assert result.error == "JWT verification failed"

    @pytest.mark.asyncio
    async def test_non_json_payload_still_verifies(self, config, signing_key):
        """The payload is only decoded for logging."""
        token = signing_key.sign_with_header({"alg": "RS256", "kid": signing_key.kid}, claims=["not", "an", "object"])
        provider = MockProvider.issuing(token, make_jwks(signing_key))

        result = await make_handler(config, provider).handle("auth-code-123")

        assert result.valid is True

    @pytest.mark.asyncio
    async def test_transport_error_becomes_server_error(self, config):
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        handler = CallbackHandler(config, transport=httpx.MockTransport(refuse))

        result = await handler.handle("auth-code-123")

        assert result.code == "UNEXPECTED_SERVER_ERROR"
        assert result.error == "Server error: ConnectError"

    @pytest.mark.asyncio
    async def test_unexpected_error_becomes_server_error(self, config, signing_key):
        provider = MockProvider.issuing(signing_key.sign(), make_jwks(signing_key))

        with patch(
            "service_epic_auth.app.callback.handler.verify_signature",
            side_effect=RuntimeError("backend exploded"),
        ):
            result = await make_handler(config, provider).handle("auth-code-123")

        assert result.valid is False
        assert result.error == "Server error: Unexpected error"
        # Raw exception text stays server-side
        assert "exploded" not in result.error


class TestRedirectUrl:
    """Test cases for mapping results to front-end URLs."""

    def test_success_uses_fragment(self, config):
        handler = CallbackHandler(config)

        url = handler.redirect_url(VerificationResult.success("h.p.s"))

        assert url == f"{FRONTEND_URL}#epic_jwt=h.p.s"

    def test_failure_uses_query(self, config):
        handler = CallbackHandler(config)

        url = handler.redirect_url(VerificationResult(valid=False, code="KEY_NOT_FOUND", error="Public key not found"))

        assert url == f"{FRONTEND_URL}?epic_login_error=Public%20key%20not%20found"
