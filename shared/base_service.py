"""
Base service class for Epic auth bridge services.
"""

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import List
import time

from shared.config import BaseConfig
from shared.errors import ConfigurationError
from shared.logging import configure_logging, get_logger, set_request_id, clear_context


class BaseService:
    """Base service class with common functionality."""

    def __init__(self, service_name: str, config: BaseConfig):
        self.service_name = service_name
        self.config = config
        self.logger = get_logger(f"{service_name}.service")

        # Configure logging
        configure_logging(service_name, self.config.log_level)

        # Create FastAPI app
        self.app = self._create_app()

        # Set up middleware
        self._setup_middleware()

        # Set up routes
        self._setup_routes()

    def _create_app(self) -> FastAPI:
        """Create FastAPI application."""
        return FastAPI(
            title=f"{self.service_name.title()} Service",
            description=f"Epic Auth Bridge - {self.service_name.title()} Service",
            version="1.0.0",
            # Every unrouted path answers 404, docs included
            docs_url=None,
            redoc_url=None,
            openapi_url=None,
        )

    def _setup_middleware(self):
        """Set up middleware."""

        @self.app.middleware("http")
        async def add_request_context(request: Request, call_next):
            start_time = time.time()
            request_id = set_request_id(request.headers.get("X-Request-ID"))

            try:
                missing = self.missing_configuration()
                if missing:
                    error = ConfigurationError(missing)
                    self.logger.error(
                        "Configuration missing",
                        code=error.code,
                        missing=error.missing,
                        path=request.url.path
                    )
                    response = PlainTextResponse(error.message, status_code=500)
                else:
                    response = await call_next(request)

                duration = time.time() - start_time
                response.headers["X-Request-ID"] = request_id

                self.logger.info(
                    "HTTP request",
                    method=request.method,
                    path=request.url.path,
                    status_code=response.status_code,
                    duration_ms=round(duration * 1000, 2)
                )

                return response
            finally:
                clear_context()

    def _setup_routes(self):
        """Set up common routes and error handlers."""

        @self.app.exception_handler(StarletteHTTPException)
        async def http_exception_handler(request: Request, exc: StarletteHTTPException):
            """Answer routing errors with a plain-text body."""
            if exc.status_code == 404:
                return PlainTextResponse("Not Found", status_code=404)
            return PlainTextResponse(str(exc.detail), status_code=exc.status_code)

        @self.app.exception_handler(Exception)
        async def general_exception_handler(request: Request, exc: Exception):
            """Handle general exceptions."""
            self.logger.error("Unhandled exception", error=str(exc), exc_info=True)
            return PlainTextResponse("Internal Server Error", status_code=500)

    def missing_configuration(self) -> List[str]:
        """Names of required settings that are absent. Override in subclasses."""
        return []

    def run(self):
        """Run the service."""
        import uvicorn
        uvicorn.run(
            self.app,
            host=self.config.host,
            port=self.config.port,
            log_level=self.config.log_level.lower()
        )
