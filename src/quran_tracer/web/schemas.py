"""Pydantic request/response schemas for the Web API."""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field, model_validator

from quran_tracer.tracing.rasterizer import GRID_SIZE

# Request bounds.  Coordinates and canvas sides are capped so that the
# rasteriser's per-segment sample count stays small.
MAX_COORDINATE = 1e5
MAX_CANVAS_SIDE = 1e5
MAX_PATH_POINTS = 10_000
MAX_TRACE_SAMPLES = 250_000


class PointModel(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    x: float = Field(ge=-MAX_COORDINATE, le=MAX_COORDINATE)
    y: float = Field(ge=-MAX_COORDINATE, le=MAX_COORDINATE)
    stroke_start: bool = False


class CanvasModel(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    width: float = Field(gt=0, le=MAX_CANVAS_SIDE)
    height: float = Field(gt=0, le=MAX_CANVAS_SIDE)


class ScoreRequest(BaseModel):
    letter_id: str
    canvas: CanvasModel
    path: list[PointModel] = Field(default_factory=list, max_length=MAX_PATH_POINTS)

    @model_validator(mode="after")
    def _check_sample_budget(self) -> ScoreRequest:
        """Reject traces whose segments would need too many grid samples."""
        pitch = min(self.canvas.width, self.canvas.height) / GRID_SIZE / 2
        samples = 0
        for p1, p2 in zip(self.path, self.path[1:]):
            if p2.stroke_start:
                continue
            samples += int(math.hypot(p2.x - p1.x, p2.y - p1.y) / pitch) + 2
            if samples > MAX_TRACE_SAMPLES:
                raise ValueError(
                    f"path too long for a {self.canvas.width:g}x{self.canvas.height:g} canvas"
                )
        return self


class ScoreResponse(BaseModel):
    letter_id: str
    accuracy_percent: float
    tier: int
    stars: str
    new_high_score: bool


class HealthResponse(BaseModel):
    status: str
    version: str


class LetterSummary(BaseModel):
    id: str
    name: str
    initial_form: str
    unlocked: bool
    stars: int


class LettersResponse(BaseModel):
    letters: list[LetterSummary]


class LetterDetail(BaseModel):
    id: str
    name: str
    initial_form: str
    path: list[PointModel]


class AyahRecord(BaseModel):
    surah: int
    ayah: int
    text: str
    has_path: bool


class AyahsResponse(BaseModel):
    ayahs: list[AyahRecord]


class ProgressResponse(BaseModel):
    high_scores: dict[str, int]
