"""Structural checks over a resolved forest."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Sequence

from docforest.entities.core import SCOPES, Comment
from docforest.pipeline.lint import iter_forest
from docforest.utils.logging import get_logger


@dataclass(slots=True)
class ValidationReport:
    """Structured validation output used by manifests and downstream tooling."""

    passed: bool
    violations: List[dict] = field(default_factory=list)
    diagnostic_summary: dict = field(default_factory=dict)
    forest_stats: dict = field(default_factory=dict)
    generated_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    def to_dict(self) -> dict:
        return {
            "passed": self.passed,
            "violations": list(self.violations),
            "diagnostic_summary": dict(self.diagnostic_summary),
            "forest_stats": dict(self.forest_stats),
            "generated_at": self.generated_at,
        }


def _depth(comment: Comment) -> int:
    return len(comment.path or ())


def forest_statistics(roots: Sequence[Comment]) -> Dict[str, object]:
    """Return structural statistics for manifests."""

    entities = list(iter_forest(roots))
    bucket_counts = {scope: 0 for scope in SCOPES}
    event_count = 0
    for comment in entities:
        if comment.members is not None:
            for scope, count in comment.members.counts().items():
                bucket_counts[scope] += count
        event_count += len(comment.events or [])
    return {
        "root_count": len(roots),
        "entity_count": len(entities),
        "member_counts": bucket_counts,
        "event_count": event_count,
        "max_depth": max((_depth(comment) for comment in entities), default=0),
    }


class ForestChecker:
    """Checks that sit above individual record resolution."""

    def find_duplicate_paths(self, entities: Sequence[Comment]) -> List[dict]:
        counts = Counter(tuple(comment.path or ()) for comment in entities)
        return [
            {
                "code": "duplicate-path",
                "path": list(path),
                "detail": f"{count} entities share this path",
            }
            for path, count in counts.items()
            if count > 1
        ]

    def find_unnamed(self, entities: Sequence[Comment]) -> List[dict]:
        return [
            {
                "code": "unnamed-entity",
                "file": comment.context.file,
                "line": comment.context.line,
                "detail": "no name could be inferred for this comment",
            }
            for comment in entities
            if not comment.name
        ]

    def summarize_diagnostics(self, entities: Sequence[Comment]) -> dict:
        by_message: Counter[str] = Counter()
        for comment in entities:
            for error in comment.errors:
                by_message[error.message] += 1
        return {
            "total": sum(by_message.values()),
            "by_message": dict(sorted(by_message.items())),
        }


class ForestValidator:
    """High-level orchestrator combining structural checks into a report."""

    def __init__(self, checker: ForestChecker | None = None) -> None:
        self._checker = checker or ForestChecker()
        self._logger = get_logger(module=f"{__name__}.ForestValidator")

    def run(self, roots: Sequence[Comment], *, include_statistics: bool = True) -> ValidationReport:
        entities = list(iter_forest(roots))
        violations = self._checker.find_duplicate_paths(entities)
        violations.extend(self._checker.find_unnamed(entities))
        diagnostic_summary = self._checker.summarize_diagnostics(entities)
        stats = forest_statistics(roots) if include_statistics else {}

        report = ValidationReport(
            passed=not violations and diagnostic_summary["total"] == 0,
            violations=violations,
            diagnostic_summary=diagnostic_summary,
            forest_stats=stats,
        )
        self._logger.info(
            "Forest validation completed",
            passed=report.passed,
            violations=len(report.violations),
            diagnostics=diagnostic_summary["total"],
        )
        return report


__all__ = ["ForestValidator", "ForestChecker", "ValidationReport", "forest_statistics"]
