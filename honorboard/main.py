"""
Honor Board API

FastAPI application serving profile honor boards: per-user counts of posts,
comments, reactions and accepted friendships gathered from Supabase, plus the
fixed reward figure. Demo boards are served without a database.
"""

import logging
import traceback

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from honorboard.api.routes_health import router as health_router
from honorboard.api.routes_profiles import router as profiles_router
from honorboard.api.routes_stats import router as stats_router
from honorboard.core.config import settings

# =============================================================================
# CORS Configuration
# =============================================================================

ALLOWED_ORIGINS = [
    # Local development
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://localhost:8080",
    "http://127.0.0.1:8080",
]


# =============================================================================
# Application Factory
# =============================================================================

def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="Honor Board API",
        description="Profile honor stats aggregated from Supabase",
        version="1.0.0",
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routers
    app.include_router(health_router)
    app.include_router(stats_router)
    app.include_router(profiles_router)

    # =========================================================================
    # Global Exception Handler
    # =========================================================================

    @app.exception_handler(Exception)
    async def generic_exception_handler(request, exc: Exception):
        """Catch-all handler to prevent exposing internal errors to clients."""
        logging.error("Unhandled exception: %s", exc)
        logging.error("Traceback:\n%s", "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        ))

        response = JSONResponse(
            status_code=500,
            content={
                "error": {
                    "code": "INTERNAL",
                    "message": "Unexpected error",
                    "details": {"type": exc.__class__.__name__},
                }
            },
        )

        origin = request.headers.get("origin", "")
        if origin in ALLOWED_ORIGINS or "localhost" in origin:
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Access-Control-Allow-Credentials"] = "true"

        return response

    return app


# =============================================================================
# Application Instance
# =============================================================================

app = create_app()
