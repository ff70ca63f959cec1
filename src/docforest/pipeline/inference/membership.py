"""Membership inference: ``memberof`` and ``scope``.

Explicit tags are authoritative. When they are silent, a compound name
written in namepath syntax is split at its last separator::

    Foo.bar            static member of Foo
    Foo#bar            instance member of Foo
    Foo.prototype.bar  instance member of Foo
    Foo~bar            inner entity of Foo

A ``@memberof`` value may carry the same separators as a suffix
(``Foo#``, ``Foo.prototype``, ``Foo.``, ``Foo~``) to imply a scope.
"""

from __future__ import annotations

from dataclasses import dataclass

from docforest.entities.core import EVENT_KIND, SCOPES, Comment
from docforest.pipeline.base import Keep, StageResult
from docforest.utils.logging import get_logger

_LOGGER = get_logger(module=__name__)

SEPARATOR_SCOPES: dict[str, str] = {".": "static", "#": "instance", "~": "inner"}
_PROTOTYPE_SUFFIX = ".prototype"
_EVENT_PREFIX = "event:"


@dataclass(frozen=True, slots=True)
class NamepathSplit:
    parent: str
    scope: str
    name: str


def split_namepath(name: str) -> NamepathSplit | None:
    """Split ``name`` at its last namepath separator, or return ``None``."""

    index = max(name.rfind(separator) for separator in SEPARATOR_SCOPES)
    if index <= 0 or index == len(name) - 1:
        return None
    parent, separator, short = name[:index], name[index], name[index + 1 :]
    scope = SEPARATOR_SCOPES[separator]
    if separator == "." and parent.endswith(_PROTOTYPE_SUFFIX):
        parent = parent[: -len(_PROTOTYPE_SUFFIX)]
        scope = "instance"
    if not parent or short == "prototype":
        return None
    return NamepathSplit(parent=parent, scope=scope, name=short)


def parse_memberof(value: str) -> tuple[str, str | None]:
    """Return the target of a ``@memberof`` value and the scope its suffix implies."""

    target = value.strip()
    if target.endswith(_PROTOTYPE_SUFFIX) and len(target) > len(_PROTOTYPE_SUFFIX):
        return target[: -len(_PROTOTYPE_SUFFIX)], "instance"
    if len(target) > 1 and target[-1] in SEPARATOR_SCOPES:
        return target[:-1], SEPARATOR_SCOPES[target[-1]]
    return target, None


def scope_from_tags(comment: Comment) -> str | None:
    """First scope declared by ``@scope``, ``@static``, ``@instance`` or ``@inner``."""

    for tag in comment.tags:
        if tag.title in SCOPES:
            return tag.title
        if tag.title == "scope" and tag.value and tag.value.lower() in SCOPES:
            return tag.value.lower()
    return None


class MembershipInferer:
    name = "infer_membership"

    def __call__(self, comment: Comment) -> StageResult:
        if comment.has_tag("global"):
            comment.memberof = None
            comment.scope = None
            return Keep(comment)

        explicit_scope = scope_from_tags(comment)
        memberof_tag = comment.first_tag("memberof")
        declared = memberof_tag.value if memberof_tag is not None else None
        declared = declared or comment.memberof

        if declared:
            target, implied_scope = parse_memberof(declared)
            scope = explicit_scope or implied_scope or comment.scope
            if comment.name:
                split = split_namepath(comment.name)
                if split is not None and split.parent == target:
                    self._apply_short_name(comment, split.name)
                    scope = scope or split.scope
            comment.memberof = target
            comment.scope = scope  # type: ignore[assignment]
            return Keep(comment)

        if comment.name:
            split = split_namepath(comment.name)
            if split is not None:
                self._apply_short_name(comment, split.name)
                comment.memberof = split.parent
                comment.scope = explicit_scope or split.scope  # type: ignore[assignment]
                _LOGGER.debug(
                    "Inferred membership from namepath",
                    name=comment.name,
                    memberof=comment.memberof,
                    scope=comment.scope,
                )
                return Keep(comment)

        if explicit_scope:
            comment.scope = explicit_scope  # type: ignore[assignment]
        return Keep(comment)

    @staticmethod
    def _apply_short_name(comment: Comment, short: str) -> None:
        if short.startswith(_EVENT_PREFIX) and len(short) > len(_EVENT_PREFIX):
            short = short[len(_EVENT_PREFIX) :]
            if comment.kind is None:
                comment.kind = EVENT_KIND
        comment.name = short


__all__ = [
    "MembershipInferer",
    "NamepathSplit",
    "split_namepath",
    "parse_memberof",
    "scope_from_tags",
]
