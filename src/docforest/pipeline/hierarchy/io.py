"""I/O utilities for documentation assembly."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Sequence

from pydantic import ValidationError

from docforest.entities.core import Comment
from docforest.pipeline.lint import LintFinding
from docforest.utils.helpers import ensure_directory, serialize_json
from docforest.utils.logging import get_logger

from .assembler import DocumentationResult

_LOGGER = get_logger(module=__name__)


def load_comments(input_paths: Sequence[str | Path]) -> List[Comment]:
    """Read comment records from JSON Lines files, preserving file and line order."""

    comments: List[Comment] = []
    for path_like in input_paths:
        path = Path(path_like)
        if not path.exists():
            raise FileNotFoundError(f"comment file not found: {path}")
        with path.open("r", encoding="utf-8") as handle:
            for line_number, line in enumerate(handle, start=1):
                if not line.strip():
                    continue
                try:
                    payload = json.loads(line)
                    comments.append(Comment.model_validate(payload))
                except (json.JSONDecodeError, ValidationError) as exc:
                    raise ValueError(f"{path}:{line_number}: invalid comment record: {exc}") from exc
    _LOGGER.info(
        "Loaded comments",
        total=len(comments),
        files=[str(Path(p)) for p in input_paths],
    )
    return comments


def write_forest(result: DocumentationResult, output_path: str | Path) -> Path:
    path = Path(output_path)
    ensure_directory(path.parent)
    payload = {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "forest": result.forest_payload(),
        "report": result.validation_report.to_dict(),
    }
    serialize_json(payload, path)
    _LOGGER.info("Wrote documentation forest", path=str(path), roots=len(result.forest))
    return path.resolve()


def write_manifest(manifest: dict, output_path: str | Path) -> Path:
    return serialize_json(manifest, output_path).resolve()


def write_findings(findings: Iterable[LintFinding], output_path: str | Path) -> Path:
    payload = {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "findings": [finding.to_dict() for finding in findings],
    }
    return serialize_json(payload, output_path).resolve()


__all__ = ["load_comments", "write_forest", "write_manifest", "write_findings"]
