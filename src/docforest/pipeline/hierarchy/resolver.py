"""Resolve a flat, enriched comment stream into a forest of documented entities."""

from __future__ import annotations

import re
from typing import Dict, Iterable, List, Mapping, Sequence

from docforest.config.policies import HierarchyPolicy
from docforest.entities.core import EVENT_KIND, SCOPES, Comment, Members
from docforest.utils.logging import get_logger

from .index import NameIndex

_LOGGER = get_logger(module=__name__)

MISSING_SCOPE_MESSAGE = "found memberof but no @scope, @static, or @instance tag"


def not_found_message(reference: str) -> str:
    return f"memberof reference to {reference} not found"


def cycle_message(reference: str) -> str:
    return f"memberof reference to {reference} creates a cycle"


_RESOLUTION_MESSAGE = re.compile(r"^memberof reference to .+ (?:not found|creates a cycle)$")


def is_resolution_message(message: str) -> bool:
    """Whether *message* is a diagnostic emitted by the resolver itself."""

    return message == MISSING_SCOPE_MESSAGE or bool(_RESOLUTION_MESSAGE.match(message))


def children_of(comment: Comment) -> List[Comment]:
    children: List[Comment] = []
    if comment.members is not None:
        for scope in SCOPES:
            children.extend(comment.members.bucket(scope))
    children.extend(comment.events or [])
    return children


def assign_paths(roots: Iterable[Comment]) -> None:
    """Set ``path`` on every entity from the forest roots downwards."""

    stack: List[tuple[Comment, List[str]]] = [(root, []) for root in roots]
    while stack:
        comment, prefix = stack.pop()
        comment.path = [*prefix, comment.name or ""]
        for child in children_of(comment):
            stack.append((child, comment.path))


class HierarchyResolver:
    """Attach children to parents by name reference.

    Resolution runs in two passes: an index over every record (so a child
    may precede its parent), then attachment in input order. Records whose
    membership cannot be honoured stay at the root with one diagnostic.
    Nothing is dropped and nothing raises.
    """

    def __init__(self, policy: HierarchyPolicy | None = None) -> None:
        self._policy = policy or HierarchyPolicy()

    @property
    def policy(self) -> HierarchyPolicy:
        return self._policy

    def resolve(self, comments: Sequence[Comment]) -> List[Comment]:
        records = list(comments)
        for comment in records:
            comment.members = Members()
            comment.events = []
            comment.path = None
            comment.errors = [
                error for error in comment.errors if not is_resolution_message(error.message)
            ]

        index = NameIndex.build(records, self._policy)
        parent_of: Dict[int, int] = {}
        roots: List[Comment] = []
        for position, comment in enumerate(records):
            if not self._attach(position, comment, records, index, parent_of):
                roots.append(comment)

        assign_paths(roots)
        _LOGGER.info(
            "Hierarchy resolved",
            records=len(records),
            roots=len(roots),
            nested=len(parent_of),
        )
        return roots

    def _attach(
        self,
        position: int,
        comment: Comment,
        records: Sequence[Comment],
        index: NameIndex,
        parent_of: Dict[int, int],
    ) -> bool:
        """Attach *comment* to its parent; return ``False`` when it stays a root."""

        reference = comment.memberof
        if not reference:
            return False

        target = index.lookup(reference)
        if target is None:
            comment.add_error(not_found_message(reference), self._line_of(comment))
            self._log_demotion(comment, "unresolved-memberof")
            return False

        is_event = comment.kind == EVENT_KIND
        if not is_event and comment.scope not in SCOPES:
            comment.add_error(MISSING_SCOPE_MESSAGE)
            self._log_demotion(comment, "missing-scope")
            return False

        if self._creates_cycle(position, target, parent_of):
            comment.add_error(cycle_message(reference), self._line_of(comment))
            self._log_demotion(comment, "cycle")
            return False

        parent = records[target]
        if is_event:
            parent.events.append(comment)  # type: ignore[union-attr]
        else:
            parent.members.bucket(comment.scope).append(comment)  # type: ignore[union-attr, arg-type]
        parent_of[position] = target
        return True

    @staticmethod
    def _creates_cycle(position: int, target: int, parent_of: Mapping[int, int]) -> bool:
        cursor: int | None = target
        while cursor is not None:
            if cursor == position:
                return True
            cursor = parent_of.get(cursor)
        return False

    @staticmethod
    def _line_of(comment: Comment) -> int:
        """Line of the ``@memberof`` tag relative to the comment; 0 is the comment's first line."""

        tag = comment.first_tag("memberof")
        if tag is not None and tag.line_number is not None:
            return tag.line_number
        return 0

    @staticmethod
    def _log_demotion(comment: Comment, reason: str) -> None:
        _LOGGER.warning(
            "Demoting comment to root",
            name=comment.name,
            memberof=comment.memberof,
            reason=reason,
            file=comment.context.file,
            line=comment.context.line,
        )


def resolve_hierarchy(
    comments: Sequence[Comment], policy: HierarchyPolicy | None = None
) -> List[Comment]:
    return HierarchyResolver(policy).resolve(comments)


__all__ = [
    "HierarchyResolver",
    "resolve_hierarchy",
    "assign_paths",
    "children_of",
    "MISSING_SCOPE_MESSAGE",
    "not_found_message",
    "cycle_message",
    "is_resolution_message",
]
