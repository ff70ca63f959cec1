"""Leading validation stage used by the lint pipeline, plus finding collection."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Iterator, List

from docforest.config.policies import LintPolicy
from docforest.entities.core import SCOPES, Comment
from docforest.pipeline.base import Keep, StageResult

_TYPE_TOKEN = re.compile(r"[A-Za-z_$][\w$]*")


@dataclass(frozen=True, slots=True)
class LintFinding:
    """One diagnostic located in the source tree."""

    file: str | None
    line: int | None
    message: str
    path: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "file": self.file,
            "line": self.line,
            "message": self.message,
            "path": list(self.path),
        }


class LintStage:
    """Flag non-standard type names and unnamed parameter tags."""

    name = "lint_comments"

    def __init__(self, policy: LintPolicy) -> None:
        self._policy = policy
        self._named_tags = frozenset(policy.named_tags)

    def __call__(self, comment: Comment) -> StageResult:
        for tag in comment.tags:
            if tag.title in self._named_tags and not (tag.name or "").strip():
                comment.add_error(f"Missing or invalid tag name for @{tag.title}", tag.line_number)
            if tag.type:
                for token in _TYPE_TOKEN.findall(tag.type):
                    standard = self._policy.canonical_types.get(token)
                    if standard is not None:
                        comment.add_error(
                            f"type {token} found, {standard} is standard",
                            tag.line_number,
                        )
        return Keep(comment)


def _walk(comment: Comment) -> Iterator[Comment]:
    yield comment
    if comment.members is not None:
        for scope in SCOPES:
            for child in comment.members.bucket(scope):
                yield from _walk(child)
    for event in comment.events or []:
        yield from _walk(event)


def iter_forest(roots: Iterable[Comment]) -> Iterator[Comment]:
    """Yield every entity of the forest, parents before their children."""

    for root in roots:
        yield from _walk(root)


def collect_findings(roots: Iterable[Comment]) -> List[LintFinding]:
    """Gather every diagnostic in the forest, ordered by file then line."""

    findings: List[LintFinding] = []
    for comment in iter_forest(roots):
        for error in comment.errors:
            line = comment.context.line
            if line is not None and error.comment_line_number is not None:
                line = line + error.comment_line_number
            findings.append(
                LintFinding(
                    file=comment.context.file,
                    line=line,
                    message=error.message,
                    path=tuple(comment.path or ()),
                )
            )
    findings.sort(key=lambda finding: (finding.file or "", finding.line or 0))
    return findings


__all__ = ["LintStage", "LintFinding", "collect_findings", "iter_forest"]
