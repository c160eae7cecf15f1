"""
RS256 signature verification.
"""

from jose import jwk
from jose.constants import ALGORITHMS
from jose.exceptions import JWKError

from shared.logging import get_logger
from ..callback.errors import SignatureInvalid
from ..jwks.client import JsonWebKey
from ..tokens.decoder import DecodedToken

logger = get_logger("epic_auth.validation")

# Epic signs with RSASSA-PKCS1-v1_5 / SHA-256. The header alg is not trusted.
SIGNING_ALGORITHM = ALGORITHMS.RS256


def verify_signature(token: DecodedToken, key: JsonWebKey) -> None:
    """Verify ``token``'s signature over its signing input with ``key``.

    Raises:
        SignatureInvalid: the key is not a usable RSA key, or the signature
            does not match.
    """
    if key.kty != "RSA" or not key.n or not key.e:
        logger.warning("JWK is not an RSA public key", kid=key.kid, kty=key.kty)
        raise SignatureInvalid(details={"kid": key.kid, "kty": key.kty})

    try:
        public_key = jwk.construct(key.to_jwk(), algorithm=SIGNING_ALGORITHM)
    except (JWKError, ValueError) as e:
        logger.warning("JWK could not be imported", kid=key.kid, kty=key.kty, error=str(e))
        raise SignatureInvalid(details={"kid": key.kid, "error": str(e)}) from e

    try:
        valid = public_key.verify(token.signing_input, token.signature)
    except (JWKError, ValueError) as e:
        logger.warning("Signature check raised", kid=key.kid, error=str(e))
        raise SignatureInvalid(details={"kid": key.kid, "error": str(e)}) from e

    if not valid:
        logger.warning("JWT signature verification failed", kid=key.kid)
        raise SignatureInvalid(details={"kid": key.kid})

    logger.info("JWT signature verified", kid=key.kid)
