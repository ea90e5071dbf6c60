"""Stroke rasterisation, accuracy scoring and per-attempt tracing state."""

from quran_tracer.tracing.feedback import FeedbackRenderer
from quran_tracer.tracing.models import CanvasSize, Cell, PathPoint, ScoreResult
from quran_tracer.tracing.rasterizer import GRID_SIZE, PathRasterizer, rasterize
from quran_tracer.tracing.scorer import AccuracyScorer, denormalize, score, tier_for_accuracy
from quran_tracer.tracing.session import SessionState, SessionStateError, TracingSession

__all__ = [
    "GRID_SIZE",
    "AccuracyScorer",
    "CanvasSize",
    "Cell",
    "FeedbackRenderer",
    "PathPoint",
    "PathRasterizer",
    "ScoreResult",
    "SessionState",
    "SessionStateError",
    "TracingSession",
    "denormalize",
    "rasterize",
    "score",
    "tier_for_accuracy",
]
