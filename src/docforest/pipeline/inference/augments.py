"""Inheritance (augments/extends) inference."""

from __future__ import annotations

from typing import List

from docforest.entities.core import Comment
from docforest.pipeline.base import Keep, StageResult

from .signature import parse_signature


class AugmentsInferer:
    name = "infer_augments"

    def __init__(self, *, infer_from_code: bool = True) -> None:
        self._infer_from_code = infer_from_code

    def __call__(self, comment: Comment) -> StageResult:
        declared: List[str] = list(comment.augments)
        for tag in comment.tags_titled("augments", "extends"):
            target = tag.value or tag.type
            if target and target not in declared:
                declared.append(target)
        if not declared and self._infer_from_code:
            extends = parse_signature(comment.context.code).extends
            if extends:
                declared.append(extends)
        comment.augments = declared
        return Keep(comment)


__all__ = ["AugmentsInferer"]
