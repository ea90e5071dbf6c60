"""Stroke-accuracy scoring.

Compares a letter's reference path with the learner's trace by rasterising
both onto the same grid and blending how much of the reference was covered
with how much of the trace landed on it.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from quran_tracer.tracing.models import CanvasSize, PathPoint, ScoreResult
from quran_tracer.tracing.rasterizer import GRID_SIZE, PathRasterizer

_logger = logging.getLogger(__name__)

COVERAGE_WEIGHT = 0.9
PRECISION_WEIGHT = 0.1

# Freehand traces rarely reach full geometric coverage; calibrated empirically.
AMPLIFICATION = 2.5

# (minimum accuracy, tier), highest first
TIER_THRESHOLDS: tuple[tuple[float, int], ...] = ((85.0, 3), (70.0, 2), (60.0, 1))


def tier_for_accuracy(accuracy_percent: float) -> int:
    """Map an accuracy percentage to a star tier (0–3).

    Examples
    --------
    >>> tier_for_accuracy(85.0)
    3
    >>> tier_for_accuracy(84.9)
    2
    >>> tier_for_accuracy(59.9)
    0
    """
    for threshold, tier in TIER_THRESHOLDS:
        if accuracy_percent >= threshold:
            return tier
    return 0


def denormalize(reference_path: Sequence[PathPoint], canvas_size: CanvasSize) -> list[PathPoint]:
    """Scale a unit-square path onto *canvas_size*, keeping stroke breaks."""
    return [
        PathPoint(
            x=p.x * canvas_size.width,
            y=p.y * canvas_size.height,
            is_stroke_start=p.is_stroke_start,
        )
        for p in reference_path
    ]


class AccuracyScorer:
    """Score a user trace against a normalised reference path.

    Args:
        grid_size: Grid resolution passed to :class:`PathRasterizer`.
    """

    def __init__(self, grid_size: int = GRID_SIZE) -> None:
        self._rasterizer = PathRasterizer(grid_size)

    @property
    def grid_size(self) -> int:
        return self._rasterizer.grid_size

    def score(
        self,
        reference_path: Sequence[PathPoint],
        user_path: Sequence[PathPoint],
        canvas_size: CanvasSize,
    ) -> ScoreResult:
        """Return the :class:`ScoreResult` for one check action.

        *reference_path* is in normalised coordinates, *user_path* in canvas
        pixels.  Both sequences are copied before use so that a caller still
        appending pointer samples cannot change the outcome mid-computation.

        Degenerate input (empty path, non-positive or non-finite canvas,
        every point off the canvas) yields ``ScoreResult(0.0, 0)`` rather than an error.
        """
        ref_abs = denormalize(list(reference_path), canvas_size)
        user_abs = list(user_path)
        if not ref_abs or not user_abs:
            return ScoreResult.zero()

        ref_cells = self._rasterizer.rasterize(ref_abs, canvas_size)
        user_cells = self._rasterizer.rasterize(user_abs, canvas_size)
        if not ref_cells or not user_cells:
            return ScoreResult.zero()

        overlap = len(ref_cells & user_cells)
        coverage = overlap / len(ref_cells)
        precision = overlap / len(user_cells)

        raw = (coverage * COVERAGE_WEIGHT + precision * PRECISION_WEIGHT) * 100.0
        accuracy = min(100.0, raw * AMPLIFICATION)
        tier = tier_for_accuracy(accuracy)

        _logger.debug(
            "Scored trace: ref=%d cells, user=%d cells, overlap=%d, "
            "coverage=%.3f, precision=%.3f, accuracy=%.1f, tier=%d",
            len(ref_cells),
            len(user_cells),
            overlap,
            coverage,
            precision,
            accuracy,
            tier,
        )
        return ScoreResult(accuracy_percent=accuracy, tier=tier)


def score(
    reference_path: Sequence[PathPoint],
    user_path: Sequence[PathPoint],
    canvas_size: CanvasSize,
) -> ScoreResult:
    """Functional shortcut for :meth:`AccuracyScorer.score` at the default grid size."""
    return AccuracyScorer().score(reference_path, user_path, canvas_size)
