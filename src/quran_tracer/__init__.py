"""Quran Tracer — stroke-accuracy scoring for Arabic letter tracing practice."""

__version__ = "0.1.0"
