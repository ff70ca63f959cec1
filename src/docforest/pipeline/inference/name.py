"""Canonical name inference."""

from __future__ import annotations

from docforest.entities.core import Comment
from docforest.pipeline.base import Keep, StageResult
from docforest.utils.logging import get_logger

from .signature import parse_signature

_LOGGER = get_logger(module=__name__)

# Tags whose value doubles as the entity name, in precedence order.
NAMING_TAGS: tuple[str, ...] = (
    "name",
    "alias",
    "class",
    "constructor",
    "function",
    "func",
    "method",
    "event",
    "typedef",
    "callback",
    "mixin",
    "module",
    "namespace",
    "interface",
    "constant",
    "const",
    "member",
    "var",
    "external",
)


def name_from_tags(comment: Comment) -> str | None:
    for title in NAMING_TAGS:
        for tag in comment.tags_titled(title):
            # kind tags carry free text in their description; only @name and
            # @alias may fall back to it
            value = tag.value if title in ("name", "alias") else (tag.name or "").strip()
            if value:
                return value
    return None


class NameInferer:
    """Derive ``comment.name`` from naming tags, then from the attached code."""

    name = "infer_name"

    def __init__(self, *, infer_from_code: bool = True) -> None:
        self._infer_from_code = infer_from_code

    def __call__(self, comment: Comment) -> StageResult:
        if comment.name:
            return Keep(comment)
        explicit = name_from_tags(comment)
        if explicit:
            comment.name = explicit
            return Keep(comment)
        if self._infer_from_code:
            signature = parse_signature(comment.context.code)
            if signature.name:
                comment.name = signature.name
                return Keep(comment)
        _LOGGER.debug(
            "No name could be inferred",
            file=comment.context.file,
            line=comment.context.line,
        )
        return Keep(comment)


__all__ = ["NameInferer", "NAMING_TAGS", "name_from_tags"]
