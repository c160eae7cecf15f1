"""
Epic auth bridge service.

Serves the login entry point and the OAuth callback for the Epic Games
authorization-code flow and hands the verified token to the wallet front end.
"""

from typing import List, Optional

import httpx
from fastapi import Query
from fastapi.responses import HTMLResponse, RedirectResponse

from shared.base_service import BaseService
from .callback.handler import CallbackHandler
from .config import EpicAuthConfig, get_config
from .oauth.redirects import build_authorize_url

ROOT_PAGE = 'Ready to authenticate with Epic Games. Go to <a href="/login">/login</a>'


class EpicAuthService(BaseService):
    """Epic auth bridge service implementation."""

    def __init__(self, config: Optional[EpicAuthConfig] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        super().__init__("epic_auth", config or get_config())
        self.callback_handler = CallbackHandler(self.config, transport=transport)

        self._setup_auth_routes()

        missing = self.missing_configuration()
        if missing:
            self.logger.error("Service started without required configuration", missing=missing)

    def missing_configuration(self) -> List[str]:
        return self.config.missing_settings()

    def _setup_auth_routes(self):
        """Set up login and callback routes."""

        @self.app.get("/", response_class=HTMLResponse)
        async def root():
            """Informational page linking to the login route."""
            return HTMLResponse(content=ROOT_PAGE)

        @self.app.get("/login")
        async def login():
            """Send the browser to the Epic authorize endpoint."""
            auth_url = build_authorize_url(
                self.config.authorize_url,
                client_id=self.config.epic_client_id,
                redirect_uri=self.config.redirect_uri,
            )
            self.logger.info("Redirecting user to Epic Games authorization")
            return RedirectResponse(auth_url, status_code=302)

        @self.app.get("/callback")
        async def callback(code: Optional[str] = Query(default=None, description="OAuth authorization code")):
            """Complete the login and redirect back to the front end."""
            result = await self.callback_handler.handle(code)

            if result.valid:
                self.logger.info("Redirecting back to frontend with verified token")
            else:
                self.logger.info("Redirecting back to frontend with login error", code=result.code)

            return RedirectResponse(self.callback_handler.redirect_url(result), status_code=302)


def create_app(config: Optional[EpicAuthConfig] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
    """Create FastAPI application."""
    service = EpicAuthService(config, transport=transport)
    return service.app


def run():
    """Run the service with settings from the environment."""
    service = EpicAuthService()
    service.run()


if __name__ == "__main__":
    run()
