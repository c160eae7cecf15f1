"""
Failure variants of the OAuth callback flow.

Each stage of the callback raises exactly one of these. ``message`` is the
reason shown to the front end in ``epic_login_error``; ``details`` is for
server logs only.
"""

from typing import Any, Dict, Optional

from shared.errors import AuthBridgeException


class CallbackError(AuthBridgeException):
    """Base class for a failed callback stage."""

    code = "CALLBACK_ERROR"
    reason = "Login failed"

    def __init__(self, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(self.code, message or self.reason, details)


class MissingCode(CallbackError):
    code = "MISSING_CODE"
    reason = "Missing authorization code"


class MissingToken(CallbackError):
    code = "MISSING_TOKEN"
    reason = "Missing token in response"


class InvalidTokenFormat(CallbackError):
    code = "INVALID_TOKEN_FORMAT"
    reason = "Invalid JWT format"


class InvalidBase64Url(CallbackError):
    code = "INVALID_BASE64URL"
    reason = "Invalid base64url data"


class UpstreamExchangeFailed(CallbackError):
    code = "UPSTREAM_EXCHANGE_FAILED"

    def __init__(self, status_code: int, details: Optional[Dict[str, Any]] = None):
        self.status_code = status_code
        super().__init__(f"Token exchange failed: {status_code}", {"status_code": status_code, **(details or {})})


class UpstreamJwksFailed(CallbackError):
    code = "UPSTREAM_JWKS_FAILED"

    def __init__(self, status_code: int, details: Optional[Dict[str, Any]] = None):
        self.status_code = status_code
        super().__init__(f"Failed to fetch JWKS: {status_code}", {"status_code": status_code, **(details or {})})


class InvalidJwksFormat(CallbackError):
    code = "INVALID_JWKS_FORMAT"
    reason = "Invalid JWKS format"


class KeyNotFound(CallbackError):
    code = "KEY_NOT_FOUND"
    reason = "Public key not found"

    def __init__(self, kid: str):
        self.kid = kid
        super().__init__(details={"kid": kid})


class SignatureInvalid(CallbackError):
    code = "SIGNATURE_INVALID"
    reason = "JWT verification failed"


class UnexpectedServerError(CallbackError):
    code = "UNEXPECTED_SERVER_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(f"Server error: {message}", details)
