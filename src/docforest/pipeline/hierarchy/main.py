"""File-level entry point for documentation assembly."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from docforest.config.settings import Settings
from docforest.utils.logging import get_logger, log_timing, logging_context

from .assembler import DocumentationAssembler, DocumentationResult
from .io import load_comments, write_findings, write_forest, write_manifest

_LOGGER = get_logger(module=__name__)


def assemble_documentation(
    comments_paths: Sequence[str | Path],
    output_path: str | Path | None = None,
    *,
    settings: Settings | None = None,
    lint: bool = False,
    manifest_path: str | Path | None = None,
    findings_path: str | Path | None = None,
) -> DocumentationResult:
    """Load comment records, assemble the forest and write the requested artefacts."""

    cfg = settings or Settings()
    if cfg.create_dirs:
        cfg.paths.ensure_exists()

    comments = load_comments(comments_paths)
    assembler = DocumentationAssembler(cfg.policies, lint=lint)
    config_snapshot = {
        "environment": cfg.environment,
        "policy_version": cfg.policy_version,
        "policies": cfg.policies.model_dump(mode="json"),
    }

    step = "lint" if lint else "build"
    with logging_context(step=step), log_timing(step, logger_=_LOGGER):
        result = assembler.run(comments, config_snapshot=config_snapshot)

    if output_path is not None:
        write_forest(result, output_path)
    if manifest_path is not None:
        write_manifest(result.manifest, manifest_path)
    if findings_path is not None:
        write_findings(result.findings, findings_path)
    return result


__all__ = ["assemble_documentation"]
