"""Learner progress persistence."""

from quran_tracer.progress.store import ProgressStore

__all__ = ["ProgressStore"]
