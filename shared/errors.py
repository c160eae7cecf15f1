"""
Shared error handling for the Epic auth bridge.
"""

from typing import Dict, Any, Optional


class AuthBridgeException(Exception):
    """Base exception for auth bridge services.

    ``message`` is safe to show to the end user. Anything diagnostic
    (upstream status codes, raw bodies, exception text) goes in ``details``,
    which is only ever logged.
    """

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(AuthBridgeException):
    """Required configuration is absent."""

    def __init__(self, missing: list, details: Optional[Dict[str, Any]] = None):
        self.missing = list(missing)
        message = f"Server configuration error: Missing {', '.join(self.missing)}."
        super().__init__("CONFIGURATION_MISSING", message, details)
