"""Parameter, property and return descriptor inference.

Dotted names such as ``options.depth`` (or ``items[].id``) are nested under
the descriptor of their parent path. A sub-path whose parent was never
documented stays at the top level and is reported on the record.
"""

from __future__ import annotations

import re
from typing import Dict, List, Sequence

from docforest.entities.core import Comment, ParamDescriptor, ReturnDescriptor, Tag
from docforest.pipeline.base import Keep, StageResult
from docforest.utils.helpers import normalize_whitespace

from .signature import parse_signature

_OPTIONAL_NAME = re.compile(r"^\[\s*([^=\]]+?)\s*(?:=\s*(.*?))?\s*\]$")

PARAM_TAGS = ("param", "arg", "argument")
PROPERTY_TAGS = ("property", "prop")
RETURN_TAGS = ("returns", "return")


def descriptor_from_tag(tag: Tag) -> ParamDescriptor | None:
    """Build a flat descriptor from one tag, honouring ``[name=default]`` syntax."""

    raw_name = (tag.name or "").strip()
    if not raw_name:
        return None
    optional = False
    default: str | None = None
    match = _OPTIONAL_NAME.match(raw_name)
    if match:
        raw_name = match.group(1).strip()
        optional = True
        default = match.group(2) or None
    type_text = tag.type.strip() if tag.type else None
    if type_text and type_text.endswith("="):
        optional = True
        type_text = type_text[:-1].strip() or None
    description = normalize_whitespace(tag.description) if tag.description else None
    return ParamDescriptor(
        name=raw_name,
        type=type_text,
        description=description or None,
        optional=optional,
        default=default,
        line_number=tag.line_number,
    )


def _parent_path(name: str) -> str | None:
    if "." not in name:
        return None
    parent = name.rsplit(".", 1)[0]
    if parent.endswith("[]"):
        parent = parent[:-2]
    return parent or None


def nest_descriptors(
    comment: Comment, flat: Sequence[ParamDescriptor], *, label: str
) -> List[ParamDescriptor]:
    """Arrange *flat* descriptors into trees keyed by dotted path."""

    roots: List[ParamDescriptor] = []
    by_path: Dict[str, ParamDescriptor] = {}
    for descriptor in flat:
        parent_key = _parent_path(descriptor.name)
        key = descriptor.name[:-2] if descriptor.name.endswith("[]") else descriptor.name
        if parent_key is None:
            roots.append(descriptor)
        elif parent_key in by_path:
            by_path[parent_key].properties.append(descriptor)
        else:
            roots.append(descriptor)
            comment.add_error(
                f"Parent of nested {label} {descriptor.name} not found",
                descriptor.line_number,
            )
        by_path.setdefault(key, descriptor)
    return roots


class ParamsInferer:
    """Populate ``comment.params`` from tags and the attached code signature."""

    name = "infer_params"

    def __init__(self, *, infer_from_code: bool = True, append_undocumented: bool = True) -> None:
        self._infer_from_code = infer_from_code
        self._append_undocumented = append_undocumented

    def __call__(self, comment: Comment) -> StageResult:
        flat = [
            descriptor
            for descriptor in (descriptor_from_tag(tag) for tag in comment.tags_titled(*PARAM_TAGS))
            if descriptor is not None
        ]
        params = nest_descriptors(comment, flat, label="param")
        if self._infer_from_code and self._append_undocumented:
            documented = {param.name for param in params}
            for name in parse_signature(comment.context.code).params:
                if name not in documented:
                    params.append(ParamDescriptor(name=name))
        comment.params = params
        return Keep(comment)


class PropertiesInferer:
    name = "infer_properties"

    def __call__(self, comment: Comment) -> StageResult:
        flat = [
            descriptor
            for descriptor in (
                descriptor_from_tag(tag) for tag in comment.tags_titled(*PROPERTY_TAGS)
            )
            if descriptor is not None
        ]
        comment.properties = nest_descriptors(comment, flat, label="property")
        return Keep(comment)


class ReturnsInferer:
    name = "infer_returns"

    def __call__(self, comment: Comment) -> StageResult:
        returns: List[ReturnDescriptor] = []
        for tag in comment.tags_titled(*RETURN_TAGS):
            description = normalize_whitespace(tag.description) if tag.description else None
            returns.append(
                ReturnDescriptor(
                    type=tag.type.strip() if tag.type else None,
                    description=description or None,
                )
            )
        comment.returns = returns
        return Keep(comment)


__all__ = [
    "ParamsInferer",
    "PropertiesInferer",
    "ReturnsInferer",
    "descriptor_from_tag",
    "nest_descriptors",
]
