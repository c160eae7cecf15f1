"""
Epic auth bridge service package.

This package exposes the FastAPI application that completes the Epic Games
OAuth authorization-code flow on behalf of the wallet front end:

- app.main: Application entrypoint that wires routes.
- app.callback: The callback pipeline and its failure variants.
- app.oauth: Authorize URL, code exchange and client redirects.
- app.tokens: JWT structural decoding.
- app.jwks: JWKS retrieval and schema.
- app.validation: Signature verification.

Design notes:
- Module import must not perform network calls. All IO happens in the
  callback handler, one fresh HTTP client per request.
- Nothing is cached between requests; keys are fetched on every callback.
"""
