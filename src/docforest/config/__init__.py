"""Configuration utilities for docforest."""

from .policies import HierarchyPolicy, InferencePolicy, LintPolicy, Policies, load_policies
from .settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
    "Policies",
    "load_policies",
    "InferencePolicy",
    "HierarchyPolicy",
    "LintPolicy",
]
