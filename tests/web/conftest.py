"""Shared fixtures for web tests."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from quran_tracer.web.app import app


@pytest.fixture
def client():
    """FastAPI test client."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db_path(tmp_path):
    """Path to a fresh progress database."""
    return str(tmp_path / "progress.db")


def alif_trace_payload(letter_id: str = "Alif") -> dict:
    """A close trace of Alif's vertical stroke on a 350x350 canvas."""
    return {
        "letter_id": letter_id,
        "canvas": {"width": 350, "height": 350},
        "path": [
            {"x": 175, "y": 50, "stroke_start": True},
            {"x": 175, "y": 300},
        ],
    }
