"""Lint policy models."""

from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, Field, field_validator

_DEFAULT_CANONICAL_TYPES = {
    "String": "string",
    "Number": "number",
    "Boolean": "boolean",
    "Symbol": "symbol",
    "Undefined": "undefined",
    "Null": "null",
    "object": "Object",
    "array": "Array",
    "function": "Function",
}


class LintPolicy(BaseModel):
    """Configuration for the leading validation stage of the lint pipeline."""

    canonical_types: Dict[str, str] = Field(
        default_factory=lambda: dict(_DEFAULT_CANONICAL_TYPES),
        description="Mapping of non-standard type names to their standard spelling.",
    )
    named_tags: List[str] = Field(
        default_factory=lambda: ["param", "arg", "argument", "property", "prop"],
        description="Tags that must carry a name.",
    )

    @field_validator("named_tags", mode="before")
    @classmethod
    def _normalize_tags(cls, value: List[str]) -> List[str]:
        return [tag.strip().lstrip("@") for tag in value if tag and tag.strip()]
