"""Path rasterisation onto a coarse square grid.

A polyline (reference or user-drawn) is reduced to the set of grid cells it
passes through. The cell sets of two paths drawn on the same canvas can then
be compared directly, which is what :mod:`quran_tracer.tracing.scorer` does.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from quran_tracer.tracing.models import CanvasSize, Cell, PathPoint

GRID_SIZE = 35


class PathRasterizer:
    """Convert a polyline into the set of ``(col, row)`` cells it covers.

    Algorithm:
    1. Split the canvas into ``grid_size × grid_size`` cells.
    2. Mark the cell holding the first point.
    3. Walk every consecutive pair of points that belong to the same stroke
       and sample the straight segment between them roughly once per half
       cell, marking each sample's cell.

    Samples that fall outside the canvas are dropped silently.

    Args:
        grid_size: Number of cells along each axis.
    """

    def __init__(self, grid_size: int = GRID_SIZE) -> None:
        if grid_size < 1:
            raise ValueError("grid_size must be >= 1")
        self.grid_size = grid_size

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def rasterize(self, path: Sequence[PathPoint], canvas_size: CanvasSize) -> set[Cell]:
        """Return the distinct cells touched by *path* on *canvas_size*.

        Args:
            path: Points in absolute canvas coordinates.
            canvas_size: Canvas the path was drawn on.

        Returns:
            Unordered set of ``(col, row)`` pairs.  Empty when *path* is empty
            or the canvas has a non-positive dimension.
        """
        cells: set[Cell] = set()
        if not path or canvas_size.is_degenerate:
            return cells

        cell_w = canvas_size.width / self.grid_size
        cell_h = canvas_size.height / self.grid_size
        # Sampling pitch: half of the narrower cell side
        pitch = min(cell_w, cell_h) / 2

        self._mark(cells, path[0].x, path[0].y, cell_w, cell_h)

        for p1, p2 in zip(path, path[1:]):
            if p2.is_stroke_start:
                continue
            dx = p2.x - p1.x
            dy = p2.y - p1.y
            if not (math.isfinite(dx) and math.isfinite(dy)):
                # No segment through a non-finite point; keep the finite end.
                self._mark(cells, p1.x, p1.y, cell_w, cell_h)
                self._mark(cells, p2.x, p2.y, cell_w, cell_h)
                continue
            steps = int(math.hypot(dx, dy) / pitch) + 1
            for step in range(steps + 1):
                t = step / steps
                self._mark(cells, p1.x + dx * t, p1.y + dy * t, cell_w, cell_h)

        return cells

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _mark(self, cells: set[Cell], x: float, y: float, cell_w: float, cell_h: float) -> None:
        """Add the cell containing ``(x, y)`` if it lies on the grid."""
        if not (math.isfinite(x) and math.isfinite(y)):
            return
        # int() truncates toward zero, so points just left of / above the
        # canvas edge still land in column / row 0.
        col = int(x / cell_w)
        row = int(y / cell_h)
        if 0 <= col < self.grid_size and 0 <= row < self.grid_size:
            cells.add((col, row))


def rasterize(
    path: Sequence[PathPoint],
    canvas_size: CanvasSize,
    grid_size: int = GRID_SIZE,
) -> set[Cell]:
    """Functional shortcut for :meth:`PathRasterizer.rasterize`."""
    return PathRasterizer(grid_size).rasterize(path, canvas_size)
