"""Standard stage orders for building and linting documentation."""

from __future__ import annotations

from docforest.config.policies import InferencePolicy, LintPolicy

from .base import Pipeline
from .inference import (
    AccessInferer,
    AugmentsInferer,
    KindInferer,
    MembershipInferer,
    NameInferer,
    ParamsInferer,
    PropertiesInferer,
    ReturnsInferer,
)
from .lint import LintStage


def _inference_stages(policy: InferencePolicy) -> list:
    return [
        NameInferer(infer_from_code=policy.infer_from_code),
        AccessInferer(policy.compiled_private_pattern()),
        AugmentsInferer(infer_from_code=policy.infer_from_code),
        KindInferer(
            infer_from_code=policy.infer_from_code,
            params_imply_function=policy.params_imply_function,
        ),
        ParamsInferer(
            infer_from_code=policy.infer_from_code,
            append_undocumented=policy.append_undocumented_params,
        ),
        PropertiesInferer(),
        ReturnsInferer(),
        MembershipInferer(),
    ]


def build_pipeline(policy: InferencePolicy | None = None) -> Pipeline:
    return Pipeline(_inference_stages(policy or InferencePolicy()), name="build")


def lint_pipeline(
    policy: InferencePolicy | None = None,
    lint_policy: LintPolicy | None = None,
) -> Pipeline:
    stages = [LintStage(lint_policy or LintPolicy()), *_inference_stages(policy or InferencePolicy())]
    return Pipeline(stages, name="lint")


__all__ = ["build_pipeline", "lint_pipeline"]
