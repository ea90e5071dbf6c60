"""Tests for TracingService (no HTTP layer)."""

from __future__ import annotations

import pytest

from quran_tracer.content.catalog import LetterCatalog
from quran_tracer.progress.store import ProgressStore
from quran_tracer.web.schemas import ScoreRequest
from quran_tracer.web.service import LetterLockedError, LetterNotFoundError, TracingService

_CATALOG = LetterCatalog.from_dict(
    {
        "letters": [
            {"id": "Alif", "initial_form": "ا",
             "path": [{"x": 0.5, "y": 0.15, "stroke_start": True}, {"x": 0.5, "y": 0.85}]},
            {"id": "Ba", "initial_form": "ب",
             "path": [{"x": 0.8, "y": 0.62, "stroke_start": True}, {"x": 0.2, "y": 0.62}]},
        ]
    }
)


def _request(letter_id: str = "Alif", path=None) -> ScoreRequest:
    if path is None:
        path = [{"x": 175, "y": 50, "stroke_start": True}, {"x": 175, "y": 300}]
    return ScoreRequest.model_validate(
        {"letter_id": letter_id, "canvas": {"width": 350, "height": 350}, "path": path}
    )


@pytest.fixture
def svc(tmp_path):
    return TracingService(str(tmp_path / "p.db"), catalog=_CATALOG)


def test_score_attempt_returns_result_and_new_best(svc):
    result, new_best = svc.score_attempt(_request())
    assert result.tier == 3
    assert new_best is True


def test_score_attempt_persists(svc, tmp_path):
    svc.score_attempt(_request())
    store = ProgressStore(str(tmp_path / "p.db"), _CATALOG.ids())
    try:
        assert store.get_high_score("Alif") == 3
        assert store.is_unlocked("Ba")
    finally:
        store.close()


def test_zero_tier_not_persisted(svc, tmp_path):
    result, new_best = svc.score_attempt(
        _request(path=[{"x": 20, "y": 330, "stroke_start": True}, {"x": 120, "y": 330}])
    )
    assert result.tier == 0
    assert new_best is False
    store = ProgressStore(str(tmp_path / "p.db"), _CATALOG.ids())
    try:
        assert not store.is_unlocked("Ba")
    finally:
        store.close()


def test_locked_letter_raises(svc):
    with pytest.raises(LetterLockedError):
        svc.score_attempt(_request("Ba"))


def test_unknown_letter_raises(svc):
    with pytest.raises(LetterNotFoundError):
        svc.score_attempt(_request("Omega"))


def test_second_letter_after_unlock(svc):
    svc.score_attempt(_request())
    result, _ = svc.score_attempt(
        _request("Ba", path=[{"x": 285, "y": 215, "stroke_start": True}, {"x": 65, "y": 215}])
    )
    assert result.tier == 3
