"""Terraformer API - FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..config import get_config
from .routers import catalog, generate
from .schemas import ErrorResponse

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    config = get_config()
    logger.info("Terraformer API starting with model %s", config.gemini_model)

    yield


app = FastAPI(
    title="Terraformer API",
    description="Reimagine any place on Earth with generative imagery",
    version=VERSION,
    lifespan=lifespan,
)

# CORS middleware - allow all origins in development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed bodies as 400 in the shared error shape."""
    body = ErrorResponse(
        error="Invalid request",
        details=[
            {"loc": list(error.get("loc", ())), "msg": error.get("msg", "")}
            for error in exc.errors()
        ],
    )
    return JSONResponse(status_code=400, content=body.model_dump(mode="json", exclude_none=True))


# Include routers
app.include_router(generate.router, prefix="/api", tags=["generate"])
app.include_router(catalog.router, prefix="/api", tags=["catalog"])


@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": VERSION}


@app.get("/api/config")
async def get_api_config():
    """Get API configuration (non-sensitive)."""
    config = get_config()
    return {
        "gemini_model": config.gemini_model,
        "use_street_view": config.use_street_view,
        "image_size": config.image_size,
        "map_zoom": config.map_zoom,
        "street_view_fov": config.street_view_fov,
        "request_timeout": config.request_timeout,
        "has_gemini_api_key": bool(config.gemini_api_key),
        "has_maps_api_key": bool(config.google_maps_api_key),
    }
