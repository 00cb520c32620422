from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from staffdesk.app import App
from staffdesk.config import Config
from staffdesk.errors import UserError
from staffdesk.web.error_handlers import general_exception_handler, user_error_handler
from staffdesk.web.openapi import set_custom_openapi
from staffdesk.web.routers import (
    exports_router,
    fields_router,
    forms_router,
    imports_router,
    metadata_router,
    records_router,
)


def create_fastapi_app(app_instance: App, config: Config) -> FastAPI:
    """Create and configure FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        """FastAPI application lifespan management."""
        app.state.app = app_instance
        app.state.config = config
        async with app_instance.lifespan():
            yield

    app = FastAPI(
        title="staffdesk API",
        lifespan=lifespan,
        openapi_tags=[],  # Tags will be added by custom OpenAPI function
    )

    # Add CORS middleware for frontend development
    if config.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Health check endpoint (at root level, not versioned)
    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    # API v1 routes
    app.include_router(fields_router, prefix="/api/v1")
    app.include_router(forms_router, prefix="/api/v1")
    app.include_router(records_router, prefix="/api/v1")
    app.include_router(imports_router, prefix="/api/v1")
    app.include_router(exports_router, prefix="/api/v1")
    app.include_router(metadata_router, prefix="/api/v1")

    # Register error handlers
    app.add_exception_handler(UserError, user_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    set_custom_openapi(app, app_instance.get_version()["version"])

    return app
