"""FastAPI Web application — letter catalogue, scoring and progress."""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException

from quran_tracer.content.catalog import LetterCatalog
from quran_tracer.progress.store import ProgressStore
from quran_tracer.tracing.feedback import FeedbackRenderer
from quran_tracer.web.schemas import (
    AyahRecord,
    AyahsResponse,
    HealthResponse,
    LetterDetail,
    LettersResponse,
    LetterSummary,
    ProgressResponse,
    ScoreRequest,
    ScoreResponse,
)
from quran_tracer.web.service import LetterLockedError, LetterNotFoundError, TracingService

load_dotenv()  # loads .env from project root; must run before env vars are consumed

_logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# App setup
# ---------------------------------------------------------------------------

VERSION = "0.1.0"

app = FastAPI(title="Quran Tracer", version=VERSION)

_DEFAULT_DB = os.environ.get("QURAN_TRACER_DB", "progress.db")

_catalog = LetterCatalog.load()
_renderer = FeedbackRenderer()


def _store(db_path: str | None = None) -> ProgressStore:
    return ProgressStore(db_path or _DEFAULT_DB, _catalog.ids())


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="ok", version=VERSION)


@app.get("/api/letters", response_model=LettersResponse)
def list_letters(db: str | None = None) -> LettersResponse:
    """Return every letter with its lock state and best star tier."""
    store = _store(db)
    try:
        scores = store.high_scores()
    finally:
        store.close()

    letters = [
        LetterSummary(
            **letter.to_dict(include_path=False),
            unlocked=letter.id in scores,
            stars=scores.get(letter.id, 0),
        )
        for letter in _catalog.letters
    ]
    return LettersResponse(letters=letters)


@app.get("/api/letters/{letter_id}", response_model=LetterDetail)
def get_letter(letter_id: str) -> LetterDetail:
    """Return one letter including its normalised reference path."""
    try:
        letter = _catalog.get(letter_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Letter not found") from None

    return LetterDetail(**letter.to_dict())


@app.get("/api/ayahs", response_model=AyahsResponse)
def list_ayahs() -> AyahsResponse:
    ayahs = [
        AyahRecord(surah=a.surah, ayah=a.ayah, text=a.text, has_path=bool(a.reference_path))
        for a in _catalog.ayahs
    ]
    return AyahsResponse(ayahs=ayahs)


@app.post("/api/score", response_model=ScoreResponse)
def score_trace(req: ScoreRequest, db: str | None = None) -> ScoreResponse:
    """Score a trace and record a new best when stars were earned."""
    svc = TracingService(db or _DEFAULT_DB, catalog=_catalog)
    try:
        result, new_best = svc.score_attempt(req)
    except LetterNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Letter not found") from exc
    except LetterLockedError as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc
    except Exception as exc:
        _logger.exception("Scoring failed for %s", req.letter_id)
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    return ScoreResponse(
        letter_id=req.letter_id,
        accuracy_percent=result.accuracy_percent,
        tier=result.tier,
        stars=_renderer.format_stars(result.tier),
        new_high_score=new_best,
    )


@app.get("/api/progress", response_model=ProgressResponse)
def get_progress(db: str | None = None) -> ProgressResponse:
    store = _store(db)
    try:
        return ProgressResponse(high_scores=store.high_scores())
    finally:
        store.close()


@app.post("/api/progress/reset", response_model=ProgressResponse)
def reset_progress(db: str | None = None) -> ProgressResponse:
    """Clear all progress; only the first letter remains unlocked."""
    store = _store(db)
    try:
        store.reset()
        return ProgressResponse(high_scores=store.high_scores())
    finally:
        store.close()
