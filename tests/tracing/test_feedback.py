"""Tests for FeedbackRenderer."""

from __future__ import annotations

import pytest

from quran_tracer.tracing.feedback import FeedbackRenderer
from quran_tracer.tracing.models import ScoreResult

# ---------------------------------------------------------------------------
# format_accuracy / format_stars
# ---------------------------------------------------------------------------


def test_format_accuracy_one_decimal():
    assert FeedbackRenderer().format_accuracy(87.34) == "87.3%"


def test_format_accuracy_full():
    assert FeedbackRenderer().format_accuracy(100.0) == "100.0%"


@pytest.mark.parametrize(
    "tier, expected",
    [(0, "☆☆☆"), (1, "★☆☆"), (2, "★★☆"), (3, "★★★"), (7, "★★★"), (-1, "☆☆☆")],
)
def test_format_stars(tier, expected):
    assert FeedbackRenderer().format_stars(tier) == expected


# ---------------------------------------------------------------------------
# render
# ---------------------------------------------------------------------------


def test_render_passed():
    out = FeedbackRenderer().render(ScoreResult(accuracy_percent=91.0, tier=3))
    assert out == {
        "accuracy": "91.0%",
        "stars": "★★★",
        "tier": 3,
        "passed": True,
        "message": "Level Complete!",
    }


def test_render_failed():
    out = FeedbackRenderer().render(ScoreResult.zero())
    assert out["passed"] is False
    assert out["message"] == "Keep practising"
    assert out["stars"] == "☆☆☆"


# ---------------------------------------------------------------------------
# render_grid
# ---------------------------------------------------------------------------


def test_render_grid_symbols():
    grid = FeedbackRenderer().render_grid(
        ref_cells={(0, 0), (1, 0)},
        user_cells={(1, 0), (2, 1)},
        grid_size=3,
    )
    assert grid.splitlines() == ["o#.", "..x", "..."]
