"""Access level inference."""

from __future__ import annotations

import re

from docforest.entities.core import ACCESS_LEVELS, Comment
from docforest.pipeline.base import Keep, StageResult

_TRAILING_IDENTIFIER = re.compile(r"[^.#~]+$")


def explicit_access(comment: Comment) -> str | None:
    """Return the first valid access level declared by tags, if any."""

    for tag in comment.tags:
        if tag.title in ACCESS_LEVELS:
            return tag.title
        if tag.title == "access" and tag.value:
            level = tag.value.lower()
            if level in ACCESS_LEVELS:
                return level
    return None


class AccessInferer:
    """Normalise access tags; mark private-looking names when no tag says otherwise.

    The private-name pattern is matched against the trailing identifier of the
    name so that namepaths such as ``Foo#_cache`` are recognised before
    membership inference splits them.
    """

    name = "infer_access"

    def __init__(self, private_pattern: re.Pattern[str] | None = None) -> None:
        self._private_pattern = private_pattern

    def __call__(self, comment: Comment) -> StageResult:
        level = explicit_access(comment)
        if level is not None:
            comment.access = level  # type: ignore[assignment]
            return Keep(comment)
        if comment.access is None and self._private_pattern is not None and comment.name:
            match = _TRAILING_IDENTIFIER.search(comment.name)
            trailing = match.group(0) if match else comment.name
            if self._private_pattern.search(trailing):
                comment.access = "private"
        return Keep(comment)


__all__ = ["AccessInferer", "explicit_access"]
