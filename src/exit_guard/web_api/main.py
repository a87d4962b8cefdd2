"""
FastAPI Application
==================
Application factory for the demo server.

Run with:
    uvicorn exit_guard.web_api.main:app --reload
"""
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from exit_guard import __version__
from exit_guard.core.config import ServerConfig
from exit_guard.guard import ExitGuard
from exit_guard.web_api.routers import guard, health


def create_app(
    config: Optional[ServerConfig] = None,
    exit_guard: Optional[ExitGuard] = None,
) -> FastAPI:
    """Build the app for *config*; *exit_guard* is exposed under ``/guard``."""
    config = config or ServerConfig.from_settings()

    app = FastAPI(
        title=config.name,
        description="Exit guard demo server",
        version=__version__,
        docs_url="/docs" if config.debug else None,
        redoc_url="/redoc" if config.debug else None,
    )
    app.state.config = config
    app.state.guard = exit_guard

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(health.router, tags=["Health"])
    app.include_router(guard.router, prefix="/guard", tags=["Guard"])

    @app.get("/")
    async def root():
        """Root endpoint - API info"""
        return {
            "name": config.name,
            "version": __version__,
            "docs": "/docs" if config.debug else "disabled",
        }

    return app


app = create_app()


# For running directly: python -m exit_guard.web_api.main
if __name__ == "__main__":
    import uvicorn
    from exit_guard.core.settings import settings

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
