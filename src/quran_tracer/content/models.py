"""Catalogue data structures."""

from __future__ import annotations

from dataclasses import dataclass, field

from quran_tracer.tracing.models import PathPoint


@dataclass(frozen=True)
class ArabicLetter:
    """A letter the learner can trace."""

    id: str
    """Stable identifier, also the progress-store key (e.g. ``'Alif'``)."""

    name: str
    """Transliterated display name."""

    initial_form: str
    """Arabic glyph shown behind the canvas as a guide."""

    reference_path: list[PathPoint] = field(default_factory=list)
    """Correct tracing path in normalised coordinates."""

    def to_dict(self, include_path: bool = True) -> dict:
        d = {"id": self.id, "name": self.name, "initial_form": self.initial_form}
        if include_path:
            d["path"] = [p.to_dict() for p in self.reference_path]
        return d


@dataclass(frozen=True)
class Ayah:
    """A Quranic verse offered for tracing practice."""

    surah: int
    ayah: int
    text: str
    reference_path: list[PathPoint] = field(default_factory=list)
    """May be empty; a verse without a path always scores zero."""
