"""
Top‑level API router.

Aggregates the endpoint routers.  When new resources are added,
include their routers here.
"""

from fastapi import APIRouter

from .endpoints import highscores

router = APIRouter()

router.include_router(highscores.router, tags=["highscores"])
