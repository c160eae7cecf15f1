"""
URLs the service redirects browsers to.
"""

from urllib.parse import parse_qsl, quote, urlencode, urlsplit, urlunsplit

LOGIN_ERROR_PARAM = "epic_login_error"
TOKEN_FRAGMENT_KEY = "epic_jwt"


def build_authorize_url(authorize_url: str, client_id: str, redirect_uri: str) -> str:
    """Provider authorize URL for the authorization-code flow."""
    query = urlencode(
        [
            ("client_id", client_id),
            ("response_type", "code"),
            ("redirect_uri", redirect_uri),
        ],
        quote_via=quote,
    )
    return f"{authorize_url}?{query}"


def build_success_redirect(frontend_url: str, token: str) -> str:
    """Front-end URL carrying the verified token in the fragment.

    A fragment is never sent to a server on subsequent navigation, unlike a
    query parameter.
    """
    scheme, netloc, path, query, _ = urlsplit(frontend_url)
    return urlunsplit((scheme, netloc, path, query, f"{TOKEN_FRAGMENT_KEY}={token}"))


def build_error_redirect(frontend_url: str, reason: str) -> str:
    """Front-end URL carrying a login error reason as a query parameter."""
    scheme, netloc, path, query, fragment = urlsplit(frontend_url)
    params = [(k, v) for k, v in parse_qsl(query, keep_blank_values=True) if k != LOGIN_ERROR_PARAM]
    params.append((LOGIN_ERROR_PARAM, reason))
    return urlunsplit((scheme, netloc, path, urlencode(params, quote_via=quote), fragment))
