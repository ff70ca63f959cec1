"""Tests for the field inference stages."""

from __future__ import annotations

import re

import pytest

from docforest.entities import Comment, CommentContext, Tag
from docforest.pipeline import Keep, build_pipeline
from docforest.pipeline.inference import (
    AccessInferer,
    AugmentsInferer,
    KindInferer,
    MembershipInferer,
    NameInferer,
    ParamsInferer,
    PropertiesInferer,
    ReturnsInferer,
    parse_memberof,
    parse_signature,
    split_namepath,
)


def make_comment(*tags: Tag, code: str | None = None, name: str | None = None) -> Comment:
    return Comment(
        tags=list(tags),
        name=name,
        context=CommentContext(file="lib/widget.js", line=10, code=code),
    )


def apply(stage, comment: Comment) -> Comment:
    result = stage(comment)
    assert isinstance(result, Keep)
    return result.comment


# name ---------------------------------------------------------------------


def test_name_tag_wins_over_kind_tags_and_code():
    comment = make_comment(
        Tag(title="class", name="Other"),
        Tag(title="name", name="Explicit"),
        code="function fromCode() {}",
    )
    assert apply(NameInferer(), comment).name == "Explicit"


def test_name_from_kind_tag_ignores_free_text_description():
    named = make_comment(Tag(title="class", name="Widget"))
    described = make_comment(Tag(title="class", description="Represents a widget"))

    assert apply(NameInferer(), named).name == "Widget"
    assert apply(NameInferer(), described).name is None


@pytest.mark.parametrize(
    ("code", "expected"),
    [
        ("function render(a, b) {", "render"),
        ("export default class Widget extends Base {", "Widget"),
        ("const answer = 42;", "answer"),
        ("Widget.prototype.draw = function (ctx) {", "Widget.prototype.draw"),
        ("module.exports.parse = function (text) {", "parse"),
        ("exports.VERSION = '1.0';", "VERSION"),
        ("this.count = 0;", "count"),
        ("  draw(ctx, options) {", "draw"),
        ("  'resize': function () {", "resize"),
    ],
)
def test_name_from_code(code: str, expected: str):
    assert apply(NameInferer(), make_comment(code=code)).name == expected


def test_name_absent_is_tolerated():
    comment = make_comment(code="if (ready) {")
    assert apply(NameInferer(), comment).name is None
    assert apply(NameInferer(infer_from_code=False), make_comment(code="function f() {}")).name is None


# access -------------------------------------------------------------------


def test_access_tags_are_normalized():
    assert apply(AccessInferer(), make_comment(Tag(title="private"))).access == "private"
    assert (
        apply(AccessInferer(), make_comment(Tag(title="access", name="Protected"))).access
        == "protected"
    )
    assert apply(AccessInferer(), make_comment(Tag(title="access", name="package"))).access is None


def test_private_pattern_applies_only_without_explicit_tag():
    stage = AccessInferer(re.compile(r"^_"))

    assert apply(stage, make_comment(name="_secret")).access == "private"
    assert apply(stage, make_comment(name="Widget#_cache")).access == "private"
    assert apply(stage, make_comment(Tag(title="public"), name="_exposed")).access == "public"
    assert apply(stage, make_comment(name="visible")).access is None


# augments -----------------------------------------------------------------


def test_augments_from_tags_and_code():
    tagged = make_comment(
        Tag(title="augments", name="Base"),
        Tag(title="extends", type="Mixin"),
        Tag(title="extends", name="Base"),
    )
    assert apply(AugmentsInferer(), tagged).augments == ["Base", "Mixin"]

    from_code = make_comment(code="class Button extends ui.Control {")
    assert apply(AugmentsInferer(), from_code).augments == ["ui.Control"]


# kind ---------------------------------------------------------------------


def test_kind_precedence():
    explicit = make_comment(Tag(title="class"), Tag(title="kind", name="Event"))
    assert apply(KindInferer(), explicit).kind == "event"

    implied = make_comment(Tag(title="typedef", name="Options"), code="function f() {}")
    assert apply(KindInferer(), implied).kind == "typedef"


@pytest.mark.parametrize(
    ("code", "expected"),
    [
        ("class Widget {", "class"),
        ("function render() {", "function"),
        ("const add = (a, b) => a + b;", "function"),
        ("var Base = class {", "class"),
        ("const LIMIT = 10;", "constant"),
        ("let counter = 0;", None),
    ],
)
def test_kind_from_code(code: str, expected: str | None):
    assert apply(KindInferer(), make_comment(code=code)).kind == expected


def test_params_imply_function():
    comment = make_comment(Tag(title="param", name="value"))
    assert apply(KindInferer(), comment).kind == "function"
    assert apply(KindInferer(params_imply_function=False), make_comment(Tag(title="param", name="v"))).kind is None


# params, properties, returns ----------------------------------------------


def test_params_are_nested_by_dotted_path():
    comment = make_comment(
        Tag(title="param", name="options", type="Object", description="settings   bag"),
        Tag(title="param", name="[options.depth=2]", type="number"),
        Tag(title="param", name="options.filter", type="Function="),
        Tag(title="param", name="items", type="Array<Object>"),
        Tag(title="param", name="items[].id", type="string"),
    )
    params = apply(ParamsInferer(), comment).params

    assert [param.name for param in params] == ["options", "items"]
    options = params[0]
    assert options.description == "settings bag"
    depth, filter_ = options.properties
    assert (depth.name, depth.optional, depth.default, depth.type) == ("options.depth", True, "2", "number")
    assert (filter_.optional, filter_.type) == (True, "Function")
    assert params[1].properties[0].name == "items[].id"
    assert comment.errors == []


def test_orphan_nested_param_is_kept_and_reported():
    comment = make_comment(Tag(title="param", name="config.mode", lineNumber=3))
    params = apply(ParamsInferer(), comment).params

    assert [param.name for param in params] == ["config.mode"]
    assert comment.errors[0].message == "Parent of nested param config.mode not found"
    assert comment.errors[0].comment_line_number == 3


def test_undocumented_code_params_are_appended():
    comment = make_comment(
        Tag(title="param", name="b", type="number"),
        code="function add(a, b = 1, ...rest) {",
    )
    params = apply(ParamsInferer(), comment).params
    assert [param.name for param in params] == ["b", "a", "rest"]

    only_tags = apply(ParamsInferer(append_undocumented=False), make_comment(code="function f(x) {}"))
    assert only_tags.params == []


def test_properties_and_returns():
    comment = make_comment(
        Tag(title="property", name="size", type="number"),
        Tag(title="prop", name="size.width", type="number"),
        Tag(title="returns", type="Promise<string>", description="the  result"),
    )
    comment = apply(PropertiesInferer(), comment)
    comment = apply(ReturnsInferer(), comment)

    assert comment.properties[0].properties[0].name == "size.width"
    assert comment.returns[0].type == "Promise<string>"
    assert comment.returns[0].description == "the result"


# membership ---------------------------------------------------------------


@pytest.mark.parametrize(
    ("name", "parent", "scope", "short"),
    [
        ("Foo.bar", "Foo", "static", "bar"),
        ("Foo#bar", "Foo", "instance", "bar"),
        ("Foo.prototype.bar", "Foo", "instance", "bar"),
        ("Foo~bar", "Foo", "inner", "bar"),
        ("a.b.C#d", "a.b.C", "instance", "d"),
    ],
)
def test_split_namepath(name: str, parent: str, scope: str, short: str):
    split = split_namepath(name)
    assert split is not None
    assert (split.parent, split.scope, split.name) == (parent, scope, short)


@pytest.mark.parametrize("name", ["plain", ".hidden", "trailing.", "Foo.prototype"])
def test_split_namepath_rejects_non_paths(name: str):
    assert split_namepath(name) is None


def test_parse_memberof_suffixes():
    assert parse_memberof("Foo#") == ("Foo", "instance")
    assert parse_memberof("Foo.prototype") == ("Foo", "instance")
    assert parse_memberof("Foo~") == ("Foo", "inner")
    assert parse_memberof("Foo.") == ("Foo", "static")
    assert parse_memberof("Foo.Bar") == ("Foo.Bar", None)


def test_membership_from_explicit_tags():
    comment = make_comment(
        Tag(title="memberof", description="Widget"),
        Tag(title="scope", name="inner"),
        name="helper",
    )
    comment = apply(MembershipInferer(), comment)
    assert (comment.memberof, comment.scope, comment.name) == ("Widget", "inner", "helper")


def test_membership_from_namepath():
    comment = apply(MembershipInferer(), make_comment(name="Widget.prototype.draw"))
    assert (comment.memberof, comment.scope, comment.name) == ("Widget", "instance", "draw")


def test_explicit_tags_take_precedence_over_namepath():
    foreign = apply(
        MembershipInferer(),
        make_comment(Tag(title="memberof", description="Panel"), name="Widget#draw"),
    )
    assert (foreign.memberof, foreign.scope, foreign.name) == ("Panel", None, "Widget#draw")

    matching = apply(
        MembershipInferer(),
        make_comment(Tag(title="memberof", description="Widget"), Tag(title="static"), name="Widget#draw"),
    )
    assert (matching.memberof, matching.scope, matching.name) == ("Widget", "static", "draw")

    scoped = apply(MembershipInferer(), make_comment(Tag(title="inner"), name="Widget.draw"))
    assert (scoped.memberof, scoped.scope) == ("Widget", "inner")


def test_memberof_suffix_implies_scope():
    comment = apply(
        MembershipInferer(),
        make_comment(Tag(title="memberof", description="Widget#"), name="draw"),
    )
    assert (comment.memberof, comment.scope) == ("Widget", "instance")


def test_global_clears_membership():
    comment = apply(
        MembershipInferer(),
        make_comment(Tag(title="global"), Tag(title="memberof", description="Widget"), name="util"),
    )
    assert comment.memberof is None
    assert comment.scope is None


def test_event_namepath_sets_event_kind():
    comment = apply(MembershipInferer(), make_comment(name="Widget#event:resize"))
    assert (comment.memberof, comment.name, comment.kind) == ("Widget", "resize", "event")


# full pipeline ------------------------------------------------------------


def test_signature_parser_ignores_comment_lines():
    signature = parse_signature("// helper\nfunction helper(a) {\n}")
    assert (signature.name, signature.kind, signature.params) == ("helper", "function", ["a"])


def test_build_pipeline_runs_stages_in_order():
    pipeline = build_pipeline()
    comment = make_comment(
        Tag(title="param", name="ctx", type="CanvasRenderingContext2D"),
        code="Widget.prototype._draw = function (ctx) {",
    )

    result = pipeline(comment)

    assert isinstance(result, Keep)
    assert pipeline.stage_names == [
        "infer_name",
        "infer_access",
        "infer_augments",
        "infer_kind",
        "infer_params",
        "infer_properties",
        "infer_returns",
        "infer_membership",
    ]
    enriched = result.comment
    assert (enriched.name, enriched.memberof, enriched.scope) == ("_draw", "Widget", "instance")
    assert enriched.kind == "function"
    assert [param.name for param in enriched.params] == ["ctx"]
