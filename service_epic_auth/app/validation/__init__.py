"""
Signature validation package.

Verifies RS256 signatures of tokens issued by Epic against a single JWK
already selected by key id. Key selection lives in app.jwks.
"""
