"""Core domain entities used throughout the documentation pipeline."""

from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

Access = Literal["public", "protected", "private"]
Scope = Literal["static", "instance", "inner"]

SCOPES: tuple[str, ...] = ("static", "instance", "inner")
ACCESS_LEVELS: tuple[str, ...] = ("public", "protected", "private")
EVENT_KIND = "event"


class _AliasedModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class Tag(_AliasedModel):
    """One raw annotation tag as produced by the comment parser."""

    title: str = Field(..., min_length=1, description="Tag keyword without the leading '@'.")
    name: str | None = None
    description: str | None = None
    type: str | None = Field(default=None, description="Type annotation text, braces stripped.")
    line_number: int | None = Field(
        default=None,
        alias="lineNumber",
        description="Line of the tag relative to the start of the comment.",
    )

    @field_validator("title")
    @classmethod
    def _normalize_title(cls, value: str) -> str:
        cleaned = value.strip().lstrip("@")
        if not cleaned:
            raise ValueError("tag title must contain non-whitespace characters")
        return cleaned

    @property
    def value(self) -> str | None:
        """First non-empty token carried by the tag (name, then description)."""

        for candidate in (self.name, self.description):
            if candidate and candidate.strip():
                return candidate.strip().split()[0]
        return None


class CommentContext(_AliasedModel):
    """Source location of a comment and the code it is attached to."""

    file: str | None = None
    line: int | None = Field(default=None, ge=1, description="1-based line of the comment.")
    code: str | None = Field(default=None, description="Source text following the comment.")


class Diagnostic(_AliasedModel):
    """Non-fatal defect attached to the record it concerns."""

    message: str = Field(..., min_length=1)
    comment_line_number: int | None = Field(default=None, alias="commentLineNumber")


class ParamDescriptor(_AliasedModel):
    """Parameter or property descriptor, nested by dotted sub-path."""

    name: str
    type: str | None = None
    description: str | None = None
    optional: bool = False
    default: str | None = None
    line_number: int | None = Field(default=None, alias="lineNumber")
    properties: List["ParamDescriptor"] = Field(default_factory=list)


class ReturnDescriptor(_AliasedModel):
    type: str | None = None
    description: str | None = None


class Members(BaseModel):
    """Child buckets of a hierarchy container, keyed by scope."""

    static: List["Comment"] = Field(default_factory=list)
    instance: List["Comment"] = Field(default_factory=list)
    inner: List["Comment"] = Field(default_factory=list)

    def bucket(self, scope: str) -> List["Comment"]:
        if scope not in SCOPES:
            raise KeyError(f"unknown member scope '{scope}'")
        return getattr(self, scope)

    def counts(self) -> Dict[str, int]:
        return {scope: len(self.bucket(scope)) for scope in SCOPES}


class Comment(_AliasedModel):
    """A documentation comment record, enriched in place as it moves through the pipeline.

    The parser supplies ``description``, ``tags`` and ``context``. Inference
    stages populate ``name`` through ``returns``; the hierarchy resolver sets
    ``members``, ``events`` and ``path``. Every stage may append to ``errors``.
    """

    description: str = ""
    tags: List[Tag] = Field(default_factory=list)
    context: CommentContext = Field(default_factory=CommentContext)
    errors: List[Diagnostic] = Field(default_factory=list)

    name: str | None = None
    kind: str | None = None
    access: Optional[Access] = None
    scope: Optional[Scope] = None
    memberof: str | None = None
    augments: List[str] = Field(default_factory=list)
    params: List[ParamDescriptor] = Field(default_factory=list)
    properties: List[ParamDescriptor] = Field(default_factory=list)
    returns: List[ReturnDescriptor] = Field(default_factory=list)

    members: Members | None = None
    events: List["Comment"] | None = None
    path: List[str] | None = None

    def tags_titled(self, *titles: str) -> List[Tag]:
        wanted = set(titles)
        return [tag for tag in self.tags if tag.title in wanted]

    def first_tag(self, *titles: str) -> Tag | None:
        """Return the first tag, in source order, whose title is one of *titles*."""

        wanted = set(titles)
        for tag in self.tags:
            if tag.title in wanted:
                return tag
        return None

    def has_tag(self, *titles: str) -> bool:
        return self.first_tag(*titles) is not None

    def add_error(self, message: str, line_number: int | None = None) -> Diagnostic:
        diagnostic = Diagnostic(message=message, comment_line_number=line_number)
        self.errors.append(diagnostic)
        return diagnostic

    def to_output(self) -> dict:
        """Serialise the record and its subtree using the public key names."""

        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


ParamDescriptor.model_rebuild()
Members.model_rebuild()
Comment.model_rebuild()


__all__ = [
    "Access",
    "Scope",
    "SCOPES",
    "ACCESS_LEVELS",
    "EVENT_KIND",
    "Tag",
    "CommentContext",
    "Diagnostic",
    "ParamDescriptor",
    "ReturnDescriptor",
    "Members",
    "Comment",
]
