"""
Highscore endpoints.

These routes expose the highscore store over HTTP: list every record,
list the records for one version, fetch the top ten for one version and
submit a new record.  Paths are unprefixed because existing game
clients call them directly.

The handlers are plain ``def`` functions so that FastAPI runs them on
its thread pool; the store's SQLite calls block.
"""

from typing import List

from fastapi import APIRouter, Depends, Request

from highscore_api.app.schemas.highscore import Highscore
from highscore_api.app.services.highscore_service import TOP_TEN, HighscoreService

router = APIRouter()


def get_highscore_service(request: Request) -> HighscoreService:
    """Return the store created by the application factory."""
    return request.app.state.highscore_service


@router.get("/highscores", response_model=List[Highscore])
def list_highscores(
    service: HighscoreService = Depends(get_highscore_service),
) -> List[Highscore]:
    """Return every stored highscore in insertion order."""
    return service.list_all()


@router.get("/highscores/{version}", response_model=List[Highscore])
def list_highscores_for_version(
    version: str,
    service: HighscoreService = Depends(get_highscore_service),
) -> List[Highscore]:
    """Return the highscores recorded for ``version``.

    An unknown version yields an empty list, not a 404.
    """
    return service.list_by_version(version)


@router.get("/top_ten/{version}", response_model=List[Highscore])
def top_ten(
    version: str,
    service: HighscoreService = Depends(get_highscore_service),
) -> List[Highscore]:
    """Return at most ten highscores for ``version``, highest first."""
    return service.top_n(version, TOP_TEN)


@router.post("/highscore", response_model=Highscore)
def submit_highscore(
    highscore: Highscore,
    service: HighscoreService = Depends(get_highscore_service),
) -> Highscore:
    """Store a highscore and echo it back.

    Bodies with missing or mistyped fields are rejected with 422 by
    FastAPI before this handler runs.
    """
    service.insert(highscore)
    return highscore
