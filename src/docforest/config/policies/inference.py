"""Field inference policy models."""

from __future__ import annotations

import re

from pydantic import BaseModel, Field, field_validator


class InferencePolicy(BaseModel):
    """Configuration controlling how structural fields are inferred from tags."""

    private_name_pattern: str | None = Field(
        default=None,
        description=(
            "Regular expression matched against the trailing identifier of an entity "
            "name; matches without an explicit access tag are marked private."
        ),
    )
    infer_from_code: bool = Field(
        default=True,
        description="Fall back to the attached code signature when tags are silent.",
    )
    params_imply_function: bool = Field(
        default=True,
        description="Treat records carrying @param tags as functions when no kind is known.",
    )
    append_undocumented_params: bool = Field(
        default=True,
        description="Append parameters found in the code signature but missing from @param tags.",
    )

    @field_validator("private_name_pattern")
    @classmethod
    def _validate_pattern(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        try:
            re.compile(value)
        except re.error as exc:
            raise ValueError(f"private_name_pattern is not a valid regex: {exc}") from exc
        return value

    def compiled_private_pattern(self) -> re.Pattern[str] | None:
        if self.private_name_pattern is None:
            return None
        return re.compile(self.private_name_pattern)
