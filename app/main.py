"""FastAPI Application Entry Point.

Configures the app, lifespan, CORS, exception handlers, and includes all
route modules.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from figma_extractor import config
from figma_extractor.logging_config import get_api_logger, get_extractor_logger

from .errors import register_exception_handlers

SERVICE_NAME = "figma-frontend-extractor"
SERVICE_VERSION = "1.0.0"

logger = logging.getLogger("api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    get_api_logger()
    get_extractor_logger()

    # Warn about optional integrations
    if not config.FIGMA_TOKEN:
        logger.warning(
            "FIGMA_ACCESS_TOKEN not set: extract-design, generate-code and "
            "validate-token will fail until a token is configured."
        )

    yield


app = FastAPI(title="Figma Frontend Extractor API", version=SERVICE_VERSION, lifespan=lifespan)

CORS_ORIGINS = [o.strip() for o in config.CORS_ORIGINS.split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers
from .routes.design import router as design_router  # noqa: E402
from .routes.figma import router as figma_router  # noqa: E402
from .routes.generated_code import router as generated_code_router  # noqa: E402
from .routes.project import router as project_router  # noqa: E402

app.include_router(figma_router)
app.include_router(design_router)
app.include_router(generated_code_router)
app.include_router(project_router)


@app.get("/health")
async def health_check():
    """Health check endpoint for container orchestration."""
    return {"status": "ok"}


@app.get("/api/v1/health")
async def api_health():
    """Service status plus the map of v1 endpoints."""
    return {
        "status": "ok",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "apiVersion": "v1",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "endpoints": {
            "listFiles": "/api/v1/list-files",
            "validateToken": "/api/v1/validate-token",
            "extractDesign": "/api/v1/extract-design",
            "generateCode": "/api/v1/generate-code",
            "generatedCode": "/api/v1/generated-code",
            "extractProject": "/api/v1/extract-project",
            "docs": "/docs",
        },
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=config.API_HOST, port=config.API_PORT)
