"""Top-level package for docforest."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("docforest")
except PackageNotFoundError:  # pragma: no cover - running from a source checkout
    __version__ = "0.1.0"

from .config.settings import Settings, get_settings
from .entities import Comment, CommentContext, Diagnostic, Members, Tag
from .pipeline import Drop, Keep, Pipeline, build_pipeline, lint_pipeline
from .pipeline.hierarchy import (
    HierarchyResolver,
    build_documentation,
    lint_documentation,
    resolve_hierarchy,
)

__all__ = [
    "__version__",
    "Settings",
    "get_settings",
    "Comment",
    "CommentContext",
    "Diagnostic",
    "Members",
    "Tag",
    "Pipeline",
    "Keep",
    "Drop",
    "build_pipeline",
    "lint_pipeline",
    "HierarchyResolver",
    "resolve_hierarchy",
    "build_documentation",
    "lint_documentation",
]
