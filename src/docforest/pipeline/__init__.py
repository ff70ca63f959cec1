"""Comment enrichment pipeline primitives."""

from __future__ import annotations

from .base import Drop, Keep, Pipeline, Stage, StageResult
from .factory import build_pipeline, lint_pipeline

__all__ = [
    "Pipeline",
    "Stage",
    "StageResult",
    "Keep",
    "Drop",
    "build_pipeline",
    "lint_pipeline",
]
