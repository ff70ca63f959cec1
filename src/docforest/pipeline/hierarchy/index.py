"""Immutable lookup index built once over every record before attachment."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping, Sequence

from docforest.config.policies import HierarchyPolicy
from docforest.entities.core import EVENT_KIND, Comment
from docforest.utils.logging import get_logger

_LOGGER = get_logger(module=__name__)

SCOPE_SEPARATORS: Mapping[str, str] = MappingProxyType(
    {"static": ".", "instance": "#", "inner": "~"}
)


def declared_long_name(comment: Comment) -> str | None:
    """Long name a record claims through its own ``memberof``/``scope`` fields."""

    if not comment.name or not comment.memberof:
        return None
    if comment.kind == EVENT_KIND:
        return f"{comment.memberof}#event:{comment.name}"
    separator = SCOPE_SEPARATORS.get(comment.scope or "")
    if separator is None:
        return None
    return f"{comment.memberof}{separator}{comment.name}"


def _insert(store: Dict[str, int], key: str, position: int, strategy: str) -> None:
    if key in store:
        _LOGGER.debug("Duplicate index key", key=key, kept=strategy)
        if strategy == "first":
            return
    store[key] = position


@dataclass(frozen=True, slots=True)
class NameIndex:
    """Maps reference strings to record positions in the input sequence."""

    by_long_name: Mapping[str, int]
    by_name: Mapping[str, int]

    @classmethod
    def build(cls, comments: Sequence[Comment], policy: HierarchyPolicy) -> "NameIndex":
        by_long_name: Dict[str, int] = {}
        by_name: Dict[str, int] = {}
        strategy = policy.duplicate_name_strategy
        for position, comment in enumerate(comments):
            if not comment.name:
                continue
            _insert(by_name, comment.name, position, strategy)
            if policy.match_long_names:
                long_name = declared_long_name(comment)
                if long_name is not None:
                    _insert(by_long_name, long_name, position, strategy)
        return cls(
            by_long_name=MappingProxyType(by_long_name),
            by_name=MappingProxyType(by_name),
        )

    def lookup(self, reference: str) -> int | None:
        """Resolve *reference*, preferring long names over plain names."""

        position = self.by_long_name.get(reference)
        if position is None:
            position = self.by_name.get(reference)
        return position

    def __len__(self) -> int:
        return len(self.by_name)


__all__ = ["NameIndex", "declared_long_name", "SCOPE_SEPARATORS"]
