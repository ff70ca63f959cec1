"""Hierarchy resolution policy models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class HierarchyPolicy(BaseModel):
    """Configuration controlling how flat comment records become a forest."""

    duplicate_name_strategy: Literal["first", "last"] = Field(
        default="first",
        description="Which record wins the index slot when several share a lookup key.",
    )
    match_long_names: bool = Field(
        default=True,
        description="Index records under their declared long name (memberof + separator + name).",
    )
    include_statistics: bool = Field(default=True)
