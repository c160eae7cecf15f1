"""
JWKS client package.

Contains logic for retrieving JSON Web Key Sets (JWKS) used to verify JWT
signatures in the callback flow.

Key points:
- Fetch fresh on every callback; there is no cache to go stale.
- Deserialize through a strict schema; any shape mismatch is a format error.
- Select keys by kid only.
"""
