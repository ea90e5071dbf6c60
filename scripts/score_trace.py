"""Score a recorded trace against a catalogue letter.

Usage:
  uv run python scripts/score_trace.py \\
      --letter Alif \\
      --path trace.json \\
      --width 350 --height 350 \\
      --db progress.db \\
      --grid

The trace file is a JSON list of ``{"x", "y", "stroke_start"}`` points in
canvas pixels (or an object with such a list under ``"path"``).  Progress is
only recorded when ``--db`` is given and at least one star was earned.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from quran_tracer.content.catalog import CatalogError, LetterCatalog
from quran_tracer.progress.store import ProgressStore
from quran_tracer.tracing.feedback import FeedbackRenderer
from quran_tracer.tracing.models import CanvasSize, PathPoint
from quran_tracer.tracing.rasterizer import GRID_SIZE, PathRasterizer
from quran_tracer.tracing.scorer import AccuracyScorer, denormalize


def _load_trace(path: str) -> list[PathPoint]:
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        if isinstance(data, dict):
            data = data["path"]
        return [PathPoint.from_dict(p) for p in data]
    except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError) as exc:
        print(f"  [!] Cannot read trace {path!r}: {exc}", file=sys.stderr)
        sys.exit(1)


def main() -> None:
    ap = argparse.ArgumentParser(description="Score a traced letter")
    ap.add_argument("--letter", required=True, help="Letter id, e.g. Alif")
    ap.add_argument("--path", required=True, help="JSON file with the traced points")
    ap.add_argument("--width", type=float, default=350.0, help="Canvas width in pixels")
    ap.add_argument("--height", type=float, default=350.0, help="Canvas height in pixels")
    ap.add_argument("--catalog", default=None, help="Alternative letters.json")
    ap.add_argument("--db", default=None, help="Progress SQLite database to update")
    ap.add_argument("--grid", action="store_true", help="Print the rasterised cell grid")
    ap.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = ap.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        catalog = LetterCatalog.load(args.catalog)
    except (OSError, CatalogError) as exc:
        print(f"  [!] Cannot load catalogue: {exc}", file=sys.stderr)
        sys.exit(1)

    if args.letter not in catalog:
        print(f"  [!] Unknown letter: {args.letter!r}", file=sys.stderr)
        sys.exit(1)
    letter = catalog.get(args.letter)
    trace = _load_trace(args.path)
    canvas = CanvasSize(args.width, args.height)

    print(f"Letter : {letter.name} ({letter.initial_form})")
    print(f"Canvas : {canvas.width:g} x {canvas.height:g}")
    print(f"Points : {len(trace)}")

    result = AccuracyScorer().score(letter.reference_path, trace, canvas)
    feedback = FeedbackRenderer().render(result)
    print(f"Accuracy: {feedback['accuracy']}  {feedback['stars']}  {feedback['message']}")

    if args.grid:
        rasterizer = PathRasterizer(GRID_SIZE)
        ref_cells = rasterizer.rasterize(denormalize(letter.reference_path, canvas), canvas)
        user_cells = rasterizer.rasterize(trace, canvas)
        print()
        print(FeedbackRenderer().render_grid(ref_cells, user_cells, GRID_SIZE))

    if args.db and result.passed:
        store = ProgressStore(args.db, catalog.ids())
        try:
            if store.set_high_score_if_higher(letter.id, result.tier):
                print(f"\n[OK] New best for {letter.id}: {result.tier} star(s)")
        finally:
            store.close()


if __name__ == "__main__":
    main()
