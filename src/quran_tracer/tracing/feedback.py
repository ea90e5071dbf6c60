"""Feedback rendering — display formatting for scored traces."""

from __future__ import annotations

from quran_tracer.tracing.models import Cell, ScoreResult

MAX_STARS = 3

_FILLED = "★"
_EMPTY = "☆"


class FeedbackRenderer:
    """Formats :class:`ScoreResult` values for display.

    All methods are pure data transformations with no side effects.
    """

    def format_accuracy(self, accuracy_percent: float) -> str:
        """Format an accuracy value with one decimal place.

        Examples
        --------
        >>> FeedbackRenderer().format_accuracy(87.34)
        '87.3%'
        >>> FeedbackRenderer().format_accuracy(100.0)
        '100.0%'
        """
        return f"{accuracy_percent:.1f}%"

    def format_stars(self, tier: int) -> str:
        """Return *tier* filled stars padded with empty ones to three."""
        filled = max(0, min(MAX_STARS, tier))
        return _FILLED * filled + _EMPTY * (MAX_STARS - filled)

    def render(self, result: ScoreResult) -> dict:
        """Return a display-ready dict from a :class:`ScoreResult`.

        Returns
        -------
        dict with keys:
            ``accuracy`` – formatted percentage (e.g. ``'87.3%'``)
            ``stars``    – star string (e.g. ``'★★☆'``)
            ``tier``     – integer tier 0–3
            ``passed``   – True when at least one star was earned
            ``message``  – short headline for the completion panel
        """
        return {
            "accuracy": self.format_accuracy(result.accuracy_percent),
            "stars": self.format_stars(result.tier),
            "tier": result.tier,
            "passed": result.passed,
            "message": "Level Complete!" if result.passed else "Keep practising",
        }

    def render_grid(
        self,
        ref_cells: set[Cell],
        user_cells: set[Cell],
        grid_size: int,
    ) -> str:
        """Draw both cell sets as ASCII art, one text line per grid row.

        ``#`` marks cells in both sets, ``o`` reference only, ``x`` trace
        only and ``.`` empty cells.
        """
        lines = []
        for row in range(grid_size):
            chars = []
            for col in range(grid_size):
                cell = (col, row)
                in_ref = cell in ref_cells
                in_user = cell in user_cells
                if in_ref and in_user:
                    chars.append("#")
                elif in_ref:
                    chars.append("o")
                elif in_user:
                    chars.append("x")
                else:
                    chars.append(".")
            lines.append("".join(chars))
        return "\n".join(lines)
