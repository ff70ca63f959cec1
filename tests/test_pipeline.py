"""Tests for the transform pipeline primitive."""

from __future__ import annotations

from docforest.entities import Comment, CommentContext
from docforest.pipeline import Drop, Keep, Pipeline, lint_pipeline


def make_comment(name: str) -> Comment:
    return Comment(name=name, context=CommentContext(file="test.js", line=1))


def rename(suffix: str):
    def stage(comment: Comment) -> Keep:
        comment.name = f"{comment.name}{suffix}"
        return Keep(comment)

    return stage


def drop_named(target: str):
    def stage(comment: Comment):
        if comment.name == target:
            return Drop("filtered")
        return Keep(comment)

    return stage


def test_stages_apply_left_to_right_and_skip_none():
    pipeline = Pipeline([rename("-a"), None, rename("-b")])

    result = pipeline(make_comment("x"))

    assert isinstance(result, Keep)
    assert result.comment.name == "x-a-b"
    assert len(pipeline.stage_names) == 2


def test_drop_short_circuits_later_stages():
    calls: list[str] = []

    def record(comment: Comment) -> Keep:
        calls.append(comment.name or "")
        return Keep(comment)

    pipeline = Pipeline([drop_named("skip"), record])

    result = pipeline(make_comment("skip"))

    assert result == Drop("filtered")
    assert calls == []


def test_run_keeps_survivors_in_input_order():
    pipeline = Pipeline([drop_named("b"), rename("!")])

    kept = pipeline.run([make_comment(name) for name in ["a", "b", "c"]])

    assert [comment.name for comment in kept] == ["a!", "c!"]


def test_empty_pipeline_is_identity():
    comment = make_comment("same")
    assert Pipeline()(comment) == Keep(comment)


def test_lint_pipeline_prepends_validation_stage():
    assert lint_pipeline().stage_names[0] == "lint_comments"
    assert lint_pipeline().stage_names[1:] == [
        "infer_name",
        "infer_access",
        "infer_augments",
        "infer_kind",
        "infer_params",
        "infer_properties",
        "infer_returns",
        "infer_membership",
    ]
