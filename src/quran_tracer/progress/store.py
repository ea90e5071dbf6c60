"""ProgressStore — best star tier per letter and unlock progression.

A letter is *unlocked* when it has a row in ``high_scores``; locked letters
have no row at all.  The first letter in the unlock order is always
available, and earning a new best on a letter unlocks the one after it.
"""

from __future__ import annotations

import contextlib
import logging
import sqlite3
from collections.abc import Sequence

_logger = logging.getLogger(__name__)

_DDL = """
PRAGMA journal_mode = WAL;
PRAGMA synchronous  = NORMAL;

CREATE TABLE IF NOT EXISTS high_scores (
    letter_id  TEXT    PRIMARY KEY,
    stars      INTEGER NOT NULL DEFAULT 0,
    updated_at TEXT    NOT NULL
               DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ', 'now'))
);
"""

_SELECT_STARS = "SELECT stars FROM high_scores WHERE letter_id = ?"

_SELECT_ALL = "SELECT letter_id, stars FROM high_scores"

_COUNT = "SELECT COUNT(*) FROM high_scores"

_UNLOCK = "INSERT OR IGNORE INTO high_scores (letter_id, stars) VALUES (?, 0)"

_UPSERT_STARS = """
INSERT INTO high_scores (letter_id, stars) VALUES (?, ?)
ON CONFLICT (letter_id) DO UPDATE SET
    stars      = excluded.stars,
    updated_at = strftime('%Y-%m-%dT%H:%M:%SZ', 'now')
"""

_DELETE_ALL = "DELETE FROM high_scores"


class ProgressStore:
    """Persist per-letter high scores in SQLite.

    Args:
        db_path: Path to the SQLite file. Use ``":memory:"`` for tests.
        letter_ids: Letter ids in unlock order (usually
            :meth:`LetterCatalog.ids <quran_tracer.content.catalog.LetterCatalog.ids>`).
    """

    def __init__(self, db_path: str = "progress.db", letter_ids: Sequence[str] = ()) -> None:
        self._order = list(letter_ids)
        self._conn = sqlite3.connect(db_path)
        self._conn.row_factory = sqlite3.Row
        for stmt in _DDL.strip().split(";"):
            stmt = stmt.strip()
            if stmt:
                self._conn.execute(stmt)
        self._conn.commit()
        self._ensure_first_unlocked()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get_high_score(self, letter_id: str) -> int:
        """Best tier recorded for *letter_id* (0 if none)."""
        row = self._conn.execute(_SELECT_STARS, (letter_id,)).fetchone()
        return int(row["stars"]) if row else 0

    def is_unlocked(self, letter_id: str) -> bool:
        """True if *letter_id* may be practised."""
        return self._conn.execute(_SELECT_STARS, (letter_id,)).fetchone() is not None

    def set_high_score_if_higher(self, letter_id: str, tier: int) -> bool:
        """Record *tier* for *letter_id* if it beats the stored best.

        A new best also unlocks the next letter.

        Returns:
            True if the stored value changed.
        """
        current = self.get_high_score(letter_id)
        if tier <= current:
            return False
        self._conn.execute(_UPSERT_STARS, (letter_id, tier))
        self._conn.commit()
        _logger.info("New best for %s: %d -> %d star(s)", letter_id, current, tier)
        self.unlock_next(letter_id)
        return True

    def unlock_next(self, letter_id: str) -> None:
        """Unlock the letter following *letter_id* with 0 stars.

        No-op if *letter_id* is unknown, is the last letter, or the next
        letter is already unlocked.
        """
        try:
            i = self._order.index(letter_id)
        except ValueError:
            return
        if i + 1 >= len(self._order):
            return
        next_id = self._order[i + 1]
        cur = self._conn.execute(_UNLOCK, (next_id,))
        self._conn.commit()
        if cur.rowcount:
            _logger.info("Unlocked %s", next_id)

    def high_scores(self) -> dict[str, int]:
        """Return ``{letter_id: stars}`` for every unlocked letter."""
        rows = self._conn.execute(_SELECT_ALL).fetchall()
        return {r["letter_id"]: int(r["stars"]) for r in rows}

    def reset(self) -> None:
        """Forget all progress; only the first letter stays unlocked."""
        self._conn.execute(_DELETE_ALL)
        self._conn.commit()
        self._ensure_first_unlocked()

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()

    def __del__(self) -> None:
        with contextlib.suppress(Exception):
            self._conn.close()

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _ensure_first_unlocked(self) -> None:
        if not self._order:
            return
        (count,) = self._conn.execute(_COUNT).fetchone()
        if count == 0:
            self._conn.execute(_UNLOCK, (self._order[0],))
            self._conn.commit()
