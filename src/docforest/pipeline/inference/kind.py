"""Entity kind inference."""

from __future__ import annotations

from docforest.entities.core import Comment
from docforest.pipeline.base import Keep, StageResult

from .signature import parse_signature

KIND_TAGS: dict[str, str] = {
    "class": "class",
    "constructor": "class",
    "function": "function",
    "func": "function",
    "method": "function",
    "event": "event",
    "typedef": "typedef",
    "callback": "typedef",
    "mixin": "mixin",
    "module": "module",
    "namespace": "namespace",
    "interface": "interface",
    "constant": "constant",
    "const": "constant",
    "member": "member",
    "var": "member",
    "external": "external",
    "file": "file",
}


class KindInferer:
    """Determine the entity category.

    Precedence: ``@kind``, kind-implying tags in source order, the attached
    code, then the presence of ``@param`` tags.
    """

    name = "infer_kind"

    def __init__(self, *, infer_from_code: bool = True, params_imply_function: bool = True) -> None:
        self._infer_from_code = infer_from_code
        self._params_imply_function = params_imply_function

    def __call__(self, comment: Comment) -> StageResult:
        if comment.kind:
            return Keep(comment)
        kind_tag = comment.first_tag("kind")
        if kind_tag is not None and kind_tag.value:
            comment.kind = kind_tag.value.lower()
            return Keep(comment)
        for tag in comment.tags:
            if tag.title in KIND_TAGS:
                comment.kind = KIND_TAGS[tag.title]
                return Keep(comment)
        if self._infer_from_code:
            signature = parse_signature(comment.context.code)
            if signature.kind:
                comment.kind = signature.kind
                return Keep(comment)
        if self._params_imply_function and comment.has_tag("param", "arg", "argument"):
            comment.kind = "function"
        return Keep(comment)


__all__ = ["KindInferer", "KIND_TAGS"]
