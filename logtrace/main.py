"""
FastAPI application entry point.
Log Trace Service - log parsing and usage trace correlation
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI

from logtrace import __version__
from logtrace.config import get_settings
from logtrace.logging_config import configure_logging
from logtrace.api.routes import router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    configure_logging()
    yield


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Parses semi-structured server logs and correlates request "
                "lines with recorded upstream usage events.",
    version=__version__,
    lifespan=lifespan,
)

# Include API routes
app.include_router(router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "logtrace.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
