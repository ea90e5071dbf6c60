"""TracingService — scores letter attempts and records progress for the Web API."""

from __future__ import annotations

import logging

from quran_tracer.content.catalog import LetterCatalog
from quran_tracer.progress.store import ProgressStore
from quran_tracer.tracing.models import CanvasSize, PathPoint, ScoreResult
from quran_tracer.tracing.scorer import AccuracyScorer
from quran_tracer.web.schemas import ScoreRequest

_logger = logging.getLogger(__name__)


class LetterNotFoundError(KeyError):
    """The requested letter is not in the catalogue."""


class LetterLockedError(PermissionError):
    """The requested letter has not been unlocked yet."""


class TracingService:
    """Score a submitted trace and persist any new best.

    Parameters
    ----------
    db_path:
        Path to the progress SQLite database.
    catalog:
        Letter catalogue; loaded with :meth:`LetterCatalog.load` if None.
    scorer:
        Optional scorer for testing injection.
    """

    def __init__(
        self,
        db_path: str,
        catalog: LetterCatalog | None = None,
        scorer: AccuracyScorer | None = None,
    ) -> None:
        self._db_path = db_path
        self._catalog = catalog if catalog is not None else LetterCatalog.load()
        self._scorer = scorer or AccuracyScorer()

    def score_attempt(self, req: ScoreRequest) -> tuple[ScoreResult, bool]:
        """Score *req* against its letter and update progress.

        Progress is written only when at least one star was earned.

        Returns
        -------
        tuple[ScoreResult, bool]
            ``(result, new_high_score)``

        Raises
        ------
        LetterNotFoundError
            If ``req.letter_id`` is not in the catalogue.
        LetterLockedError
            If the letter exists but is still locked.
        """
        try:
            letter = self._catalog.get(req.letter_id)
        except KeyError:
            raise LetterNotFoundError(req.letter_id) from None

        store = ProgressStore(self._db_path, self._catalog.ids())
        try:
            if not store.is_unlocked(letter.id):
                raise LetterLockedError(f"Letter {letter.id!r} is locked")

            user_path = [
                PathPoint(p.x, p.y, is_stroke_start=p.stroke_start) for p in req.path
            ]
            canvas = CanvasSize(req.canvas.width, req.canvas.height)
            result = self._scorer.score(letter.reference_path, user_path, canvas)

            new_best = False
            if result.passed:
                new_best = store.set_high_score_if_higher(letter.id, result.tier)
        finally:
            store.close()

        _logger.info(
            "Scored %s: %d points, accuracy %.1f%%, tier %d",
            letter.id,
            len(user_path),
            result.accuracy_percent,
            result.tier,
        )
        return result, new_best
