"""Documentation assembler that coordinates enrichment, resolution and validation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

from docforest.config.policies import Policies
from docforest.entities.core import Comment
from docforest.pipeline.base import Pipeline
from docforest.pipeline.factory import build_pipeline, lint_pipeline
from docforest.pipeline.lint import LintFinding, collect_findings
from docforest.utils.logging import get_logger

from .resolver import HierarchyResolver
from .validator import ForestValidator, ValidationReport

_LOGGER = get_logger(module=__name__)


@dataclass(slots=True)
class DocumentationResult:
    """Materialised results returned by :class:`DocumentationAssembler`."""

    forest: List[Comment]
    validation_report: ValidationReport
    manifest: dict
    dropped: int = 0
    findings: List[LintFinding] = field(default_factory=list)

    def forest_payload(self) -> List[dict]:
        return [root.to_output() for root in self.forest]


class DocumentationAssembler:
    """Run a pipeline over raw comments, then resolve and validate the forest."""

    def __init__(self, policies: Policies | None = None, *, lint: bool = False) -> None:
        self._policies = policies or Policies()
        self._lint = lint
        if lint:
            self._pipeline = lint_pipeline(self._policies.inference, self._policies.lint)
        else:
            self._pipeline = build_pipeline(self._policies.inference)
        self._resolver = HierarchyResolver(self._policies.hierarchy)
        self._validator = ForestValidator()

    @property
    def pipeline(self) -> Pipeline:
        return self._pipeline

    def run(
        self,
        comments: Sequence[Comment],
        *,
        config_snapshot: dict | None = None,
    ) -> DocumentationResult:
        enriched = self._pipeline.run(comments)
        dropped = len(comments) - len(enriched)
        forest = self._resolver.resolve(enriched)
        report = self._validator.run(
            forest, include_statistics=self._policies.hierarchy.include_statistics
        )
        findings = collect_findings(forest) if self._lint else []
        manifest = self.generate_manifest(report, dropped=dropped, config_snapshot=config_snapshot)
        _LOGGER.info(
            "Documentation assembled",
            pipeline=self._pipeline.name,
            comments=len(comments),
            roots=len(forest),
            dropped=dropped,
        )
        return DocumentationResult(
            forest=forest,
            validation_report=report,
            manifest=manifest,
            dropped=dropped,
            findings=findings,
        )

    def generate_manifest(
        self,
        report: ValidationReport,
        *,
        dropped: int,
        config_snapshot: dict | None,
    ) -> dict:
        manifest = {
            "policy_version": self._policies.policy_version,
            "pipeline": self._pipeline.stage_names,
            "dropped": dropped,
            "validation": report.to_dict(),
        }
        if config_snapshot:
            manifest["config"] = dict(config_snapshot)
        return manifest


def build_documentation(
    comments: Sequence[Comment], policies: Policies | None = None
) -> DocumentationResult:
    return DocumentationAssembler(policies).run(comments)


def lint_documentation(
    comments: Sequence[Comment], policies: Policies | None = None
) -> DocumentationResult:
    return DocumentationAssembler(policies, lint=True).run(comments)


__all__ = [
    "DocumentationAssembler",
    "DocumentationResult",
    "build_documentation",
    "lint_documentation",
]
