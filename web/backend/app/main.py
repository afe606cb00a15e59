"""FastAPI application exposing the rtw moderation and scoring functions.

Provides REST API endpoints wrapping the rtw package for:
- Review moderation (single, bulk, sanitize)
- Review helpfulness scoring
- Company weighted rating, statistics and trust tier
- Hiring rate
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rtw import __version__
from web.backend.app.routers import moderation, scoring

app = FastAPI(
    title="RTW Integrity API",
    description=(
        "REST API for review moderation and reputation scoring. "
        "Every endpoint is a pure computation over the request body; "
        "nothing is stored."
    ),
    version=__version__,
)

# ---------------------------------------------------------------------------
# CORS middleware (allow all origins for development)
# ---------------------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Include routers
# ---------------------------------------------------------------------------
app.include_router(moderation.router)
app.include_router(scoring.router)


# ---------------------------------------------------------------------------
# Root and health-check endpoints
# ---------------------------------------------------------------------------


@app.get("/", tags=["meta"])
async def root():
    """Return basic API information."""
    return {
        "name": "RTW Integrity API",
        "version": __version__,
        "description": "Review moderation and reputation scoring REST API",
        "docs": "/docs",
        "openapi": "/openapi.json",
    }


@app.get("/health", tags=["meta"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
