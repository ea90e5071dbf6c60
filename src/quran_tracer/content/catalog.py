"""LetterCatalog — loads letters and ayahs from a JSON resource.

Document layout::

    {
      "letters": [
        {"id": "Alif", "name": "Alif", "initial_form": "ا",
         "path": [{"x": 0.5, "y": 0.15, "stroke_start": true}, ...]},
        ...
      ],
      "ayahs": [
        {"surah": 1, "ayah": 1, "text": "...", "path": []}
      ]
    }

Letter order in the document is the unlock order.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from quran_tracer.content.models import ArabicLetter, Ayah
from quran_tracer.tracing.models import PathPoint

_logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).parent / "data" / "letters.json"

ENV_CATALOG_PATH = "QURAN_TRACER_LETTERS"


class CatalogError(ValueError):
    """Raised when a catalogue document is malformed."""


def _parse_path(raw, where: str) -> list[PathPoint]:
    if not isinstance(raw, list):
        raise CatalogError(f"{where}: 'path' must be a list")
    try:
        return [PathPoint.from_dict(p) for p in raw]
    except (KeyError, TypeError, ValueError) as exc:
        raise CatalogError(f"{where}: invalid path point ({exc})") from exc


class LetterCatalog:
    """Ordered collection of :class:`ArabicLetter` plus practice ayahs.

    Args:
        letters: Letters in unlock order.
        ayahs: Verses available for tracing.

    Raises:
        CatalogError: If two letters share an id.
    """

    def __init__(self, letters: list[ArabicLetter], ayahs: list[Ayah] | None = None) -> None:
        self._letters = list(letters)
        self._ayahs = list(ayahs or [])
        self._index: dict[str, int] = {}
        for i, letter in enumerate(self._letters):
            if letter.id in self._index:
                raise CatalogError(f"Duplicate letter id: {letter.id!r}")
            self._index[letter.id] = i

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_dict(cls, data: dict) -> LetterCatalog:
        """Build a catalogue from a decoded JSON document."""
        if not isinstance(data, dict):
            raise CatalogError("Catalogue document must be a JSON object")

        letters: list[ArabicLetter] = []
        for i, item in enumerate(data.get("letters", [])):
            where = f"letters[{i}]"
            if not isinstance(item, dict):
                raise CatalogError(f"{where}: entry must be an object")
            try:
                letter_id = str(item["id"])
                initial_form = str(item["initial_form"])
            except KeyError as exc:
                raise CatalogError(f"{where}: missing field {exc}") from exc
            letters.append(
                ArabicLetter(
                    id=letter_id,
                    name=str(item.get("name", letter_id)),
                    initial_form=initial_form,
                    reference_path=_parse_path(item.get("path", []), where),
                )
            )

        ayahs: list[Ayah] = []
        for i, item in enumerate(data.get("ayahs", [])):
            where = f"ayahs[{i}]"
            if not isinstance(item, dict):
                raise CatalogError(f"{where}: entry must be an object")
            try:
                surah = int(item["surah"])
                number = int(item["ayah"])
                text = str(item["text"])
            except (KeyError, TypeError, ValueError) as exc:
                raise CatalogError(f"{where}: missing or invalid field ({exc})") from exc
            ayahs.append(
                Ayah(
                    surah=surah,
                    ayah=number,
                    text=text,
                    reference_path=_parse_path(item.get("path", []), where),
                )
            )

        return cls(letters, ayahs)

    @classmethod
    def load(cls, path: str | Path | None = None) -> LetterCatalog:
        """Load a catalogue from *path*.

        Falls back to ``$QURAN_TRACER_LETTERS`` and then to the packaged
        ``letters.json``.

        Raises:
            CatalogError: If the file is not valid JSON or has a bad layout.
        """
        if path is None:
            path = os.environ.get(ENV_CATALOG_PATH) or DEFAULT_CATALOG_PATH
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise CatalogError(f"{path}: not valid JSON ({exc})") from exc

        catalog = cls.from_dict(data)
        _logger.debug(
            "Loaded %d letters and %d ayahs from %s",
            len(catalog.letters),
            len(catalog.ayahs),
            path,
        )
        return catalog

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def letters(self) -> list[ArabicLetter]:
        return list(self._letters)

    @property
    def ayahs(self) -> list[Ayah]:
        return list(self._ayahs)

    def ids(self) -> list[str]:
        """Letter ids in unlock order."""
        return [letter.id for letter in self._letters]

    def get(self, letter_id: str) -> ArabicLetter:
        """Return the letter with *letter_id*.

        Raises:
            KeyError: If no such letter exists.
        """
        try:
            return self._letters[self._index[letter_id]]
        except KeyError:
            raise KeyError(letter_id) from None

    def next_id(self, letter_id: str) -> str | None:
        """Id of the letter after *letter_id*, or ``None`` for the last/unknown letter."""
        i = self._index.get(letter_id)
        if i is None or i + 1 >= len(self._letters):
            return None
        return self._letters[i + 1].id

    def __contains__(self, letter_id: object) -> bool:
        return letter_id in self._index

    def __len__(self) -> int:
        return len(self._letters)
