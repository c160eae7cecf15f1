"""
Shared utilities for the Epic auth bridge.

This package aggregates common building blocks consumed by the service:

- config: Service configuration via pydantic-settings
- logging: Structured logging with request correlation
- errors: Canonical error types
- base_service: FastAPI application scaffolding

Do not import from service packages into shared/.
"""
