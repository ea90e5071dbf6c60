"""Tracing data structures."""

from __future__ import annotations

import math
from dataclasses import dataclass

Cell = tuple[int, int]
"""Grid cell as ``(col, row)``."""


@dataclass(frozen=True)
class PathPoint:
    """A single sample on a drawn or reference stroke.

    Reference paths use normalised coordinates (0.0–1.0 per axis); user paths
    use absolute canvas pixels.
    """

    x: float
    """Horizontal coordinate."""

    y: float
    """Vertical coordinate (grows downwards, like screen space)."""

    is_stroke_start: bool = False
    """True when this point begins a new stroke (pen lifted before it)."""

    @classmethod
    def from_dict(cls, d: dict) -> PathPoint:
        """Create a :class:`PathPoint` from an ``{x, y, stroke_start}`` record."""
        return cls(
            x=float(d["x"]),
            y=float(d["y"]),
            is_stroke_start=bool(d.get("stroke_start", False)),
        )

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "stroke_start": self.is_stroke_start}


@dataclass(frozen=True)
class CanvasSize:
    """Pixel dimensions of the drawing surface."""

    width: float
    height: float

    @property
    def is_degenerate(self) -> bool:
        """True unless both dimensions are finite and positive."""
        return not (
            0 < self.width < math.inf and 0 < self.height < math.inf
        )


@dataclass(frozen=True)
class ScoreResult:
    """Outcome of a single check action."""

    accuracy_percent: float
    """Amplified accuracy, clamped to [0.0, 100.0]."""

    tier: int
    """Star rating in {0, 1, 2, 3}."""

    @classmethod
    def zero(cls) -> ScoreResult:
        return cls(accuracy_percent=0.0, tier=0)

    @property
    def passed(self) -> bool:
        """True if at least one star was earned."""
        return self.tier > 0
