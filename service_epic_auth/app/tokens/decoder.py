"""
Structural decoding of compact JWTs.

Nothing here checks a signature. The decoder splits the token, decodes the
header and payload segments and keeps the exact signing input so the
signature can be verified over the original encoded text.
"""

import base64
import json
from dataclasses import dataclass
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, StrictStr, ValidationError

from shared.logging import get_logger
from ..callback.errors import InvalidBase64Url, InvalidTokenFormat

logger = get_logger("epic_auth.tokens")


class JwtHeader(BaseModel):
    """JOSE header of a signed token."""

    model_config = ConfigDict(extra="allow")

    alg: StrictStr
    kid: StrictStr
    typ: Optional[str] = None


@dataclass(frozen=True)
class DecodedToken:
    """A token split into its parts, signature not yet verified."""

    raw: str
    header: JwtHeader
    payload_bytes: bytes
    signature: bytes
    signing_input: bytes

    @property
    def kid(self) -> str:
        return self.header.kid

    def claims(self) -> Optional[Dict[str, Any]]:
        """Payload claims for diagnostics, or None if the payload is not a JSON object."""
        try:
            claims = json.loads(self.payload_bytes)
        except ValueError:
            return None
        return claims if isinstance(claims, dict) else None


def base64url_decode(segment: str) -> bytes:
    """Decode a base64url segment, restoring any stripped padding."""
    data = segment.replace("-", "+").replace("_", "/")
    while len(data) % 4:
        data += "="
    try:
        return base64.b64decode(data, validate=True)
    except ValueError as e:
        # binascii.Error is a ValueError, as is non-ASCII input
        raise InvalidBase64Url(details={"error": str(e), "segment_length": len(segment)}) from e


def decode_token(token: str) -> DecodedToken:
    """Split and decode a compact JWT.

    Raises:
        InvalidTokenFormat: not three segments, or the header is not a JSON
            object with string ``alg`` and ``kid``.
        InvalidBase64Url: a segment is not valid base64url.
    """
    parts = token.split(".")
    if len(parts) != 3:
        raise InvalidTokenFormat(details={"segments": len(parts)})

    header_b64, payload_b64, signature_b64 = parts

    header_bytes = base64url_decode(header_b64)
    payload_bytes = base64url_decode(payload_b64)
    signature = base64url_decode(signature_b64)

    try:
        header = JwtHeader.model_validate_json(header_bytes)
    except ValidationError as e:
        raise InvalidTokenFormat(details={"error": "invalid header", "errors": e.error_count()}) from e

    logger.debug("Token decoded", kid=header.kid, alg=header.alg)

    return DecodedToken(
        raw=token,
        header=header,
        payload_bytes=payload_bytes,
        signature=signature,
        signing_input=f"{header_b64}.{payload_b64}".encode("ascii"),
    )
