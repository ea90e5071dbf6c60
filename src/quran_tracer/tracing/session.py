"""TracingSession — per-attempt drawing state driven by pointer events."""

from __future__ import annotations

import enum
import logging
import threading

from quran_tracer.tracing.models import CanvasSize, PathPoint, ScoreResult
from quran_tracer.tracing.scorer import AccuracyScorer

_logger = logging.getLogger(__name__)


class SessionState(enum.Enum):
    IDLE = "idle"
    DRAWING = "drawing"
    READY_TO_CHECK = "ready_to_check"
    CHECKING = "checking"
    SCORED = "scored"


class SessionStateError(RuntimeError):
    """Raised when an action is not allowed in the current state."""


class TracingSession:
    """Accumulates one learner's trace of a letter and scores it on demand.

    State flow::

        IDLE ──down──▶ DRAWING ──up──▶ READY_TO_CHECK ──check──▶ SCORED
                         ▲                   │                     │
                         └──────down─────────┴─────────down────────┘

    ``check`` passes through ``CHECKING`` while the scorer runs.
    ``clear()`` returns to ``IDLE`` from anywhere.  A new pointer-down keeps
    the strokes drawn so far but discards any previous score.

    Parameters
    ----------
    letter_id:
        Catalogue id of the letter being traced.
    reference_path:
        Normalised reference path of that letter.
    scorer:
        Scorer to use; a default :class:`AccuracyScorer` if omitted.
    progress:
        Optional object with ``set_high_score_if_higher(letter_id, tier)``,
        typically a :class:`~quran_tracer.progress.store.ProgressStore`.
        Called after a check only when at least one star was earned.
    """

    def __init__(
        self,
        letter_id: str,
        reference_path: list[PathPoint],
        scorer: AccuracyScorer | None = None,
        progress=None,
    ) -> None:
        self.letter_id = letter_id
        self._reference = list(reference_path)
        self._scorer = scorer or AccuracyScorer()
        self._progress = progress
        self._lock = threading.Lock()
        self._path: list[PathPoint] = []
        self._state = SessionState.IDLE
        self._result: ScoreResult | None = None
        self._new_high_score = False

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def result(self) -> ScoreResult | None:
        """Score of the last check, or ``None`` if not scored since the last stroke."""
        return self._result

    @property
    def new_high_score(self) -> bool:
        """True if the last check improved the stored best for this letter."""
        return self._new_high_score

    def snapshot(self) -> list[PathPoint]:
        """Return a copy of the user path."""
        with self._lock:
            return list(self._path)

    # ------------------------------------------------------------------
    # Pointer events
    # ------------------------------------------------------------------

    def pointer_down(self, x: float, y: float) -> None:
        """Begin a new stroke at ``(x, y)``."""
        with self._lock:
            self._begin_stroke(x, y)

    def pointer_move(self, x: float, y: float) -> None:
        """Extend the current stroke; starts one if the pointer was not down."""
        with self._lock:
            if self._state is not SessionState.DRAWING:
                self._begin_stroke(x, y)
            else:
                self._path.append(PathPoint(x, y))

    def pointer_up(self) -> None:
        """Finish the current stroke."""
        with self._lock:
            if self._state is not SessionState.DRAWING:
                return
            self._state = SessionState.READY_TO_CHECK if self._path else SessionState.IDLE

    def clear(self) -> None:
        """Erase the trace and any score."""
        with self._lock:
            self._path.clear()
            self._result = None
            self._new_high_score = False
            self._state = SessionState.IDLE

    def _begin_stroke(self, x: float, y: float) -> None:
        # Caller holds self._lock.
        self._result = None
        self._new_high_score = False
        self._path.append(PathPoint(x, y, is_stroke_start=True))
        self._state = SessionState.DRAWING

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def check(self, canvas_size: CanvasSize) -> ScoreResult:
        """Score the current trace against the reference.

        The session is ``CHECKING`` while the scorer runs, so a second check
        is rejected.  If a new stroke begins meanwhile, the result is still
        returned (and any earned stars recorded) but not kept as the
        session's result.

        Raises:
            SessionStateError: If the session is not ready to be checked.
        """
        with self._lock:
            if self._state is not SessionState.READY_TO_CHECK:
                raise SessionStateError(
                    f"Cannot check letter {self.letter_id!r} in state {self._state.value!r}"
                )
            self._state = SessionState.CHECKING
            path = list(self._path)

        try:
            result = self._scorer.score(self._reference, path, canvas_size)
        except Exception:
            with self._lock:
                if self._state is SessionState.CHECKING:
                    self._state = SessionState.READY_TO_CHECK
            raise

        new_best = False
        if result.passed and self._progress is not None:
            new_best = self._progress.set_high_score_if_higher(self.letter_id, result.tier)

        with self._lock:
            if self._state is SessionState.CHECKING:
                self._result = result
                self._new_high_score = new_best
                self._state = SessionState.SCORED

        _logger.info(
            "Checked %s: accuracy %.1f%%, %d star(s)%s",
            self.letter_id,
            result.accuracy_percent,
            result.tier,
            " (new best)" if new_best else "",
        )
        return result
