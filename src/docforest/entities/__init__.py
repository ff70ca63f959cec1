"""Domain entities for the documentation pipeline."""

from .core import (
    ACCESS_LEVELS,
    EVENT_KIND,
    SCOPES,
    Comment,
    CommentContext,
    Diagnostic,
    Members,
    ParamDescriptor,
    ReturnDescriptor,
    Tag,
)

__all__ = [
    "ACCESS_LEVELS",
    "EVENT_KIND",
    "SCOPES",
    "Tag",
    "CommentContext",
    "Diagnostic",
    "ParamDescriptor",
    "ReturnDescriptor",
    "Members",
    "Comment",
]
