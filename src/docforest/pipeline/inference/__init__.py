"""Field inference stages."""

from __future__ import annotations

from .access import AccessInferer, explicit_access
from .augments import AugmentsInferer
from .kind import KIND_TAGS, KindInferer
from .membership import (
    MembershipInferer,
    NamepathSplit,
    parse_memberof,
    scope_from_tags,
    split_namepath,
)
from .name import NAMING_TAGS, NameInferer, name_from_tags
from .params import ParamsInferer, PropertiesInferer, ReturnsInferer, nest_descriptors
from .signature import CodeSignature, parse_signature

__all__ = [
    "NameInferer",
    "AccessInferer",
    "AugmentsInferer",
    "KindInferer",
    "ParamsInferer",
    "PropertiesInferer",
    "ReturnsInferer",
    "MembershipInferer",
    "NamepathSplit",
    "CodeSignature",
    "KIND_TAGS",
    "NAMING_TAGS",
    "explicit_access",
    "name_from_tags",
    "nest_descriptors",
    "parse_memberof",
    "parse_signature",
    "scope_from_tags",
    "split_namepath",
]
