"""Hierarchy resolution public API."""

from __future__ import annotations

from .assembler import (
    DocumentationAssembler,
    DocumentationResult,
    build_documentation,
    lint_documentation,
)
from .index import NameIndex
from .main import assemble_documentation
from .resolver import HierarchyResolver, resolve_hierarchy
from .validator import ForestChecker, ForestValidator, ValidationReport

__all__ = [
    "assemble_documentation",
    "build_documentation",
    "lint_documentation",
    "DocumentationAssembler",
    "DocumentationResult",
    "HierarchyResolver",
    "resolve_hierarchy",
    "NameIndex",
    "ForestChecker",
    "ForestValidator",
    "ValidationReport",
]
