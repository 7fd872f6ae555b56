"""Tests for visibility directives."""

import pytest

from jsonui.visibility import (
    VisibilityKind,
    directive_for,
    resolve_hidden,
    resolve_visibility,
    static_visibility_classes,
    wrap_hide_entirely,
)


class TestResolveVisibility:
    """Test directive shapes, most specific first."""

    def test_literal_is_not_a_directive(self):
        assert resolve_visibility("gone") is None
        assert resolve_visibility(None) is None

    def test_bare_path(self):
        directive = resolve_visibility("@{isReady}")
        assert directive.kind is VisibilityKind.HIDE_ENTIRELY
        assert directive.condition == "data.isReady"
        assert not directive.inverted

    def test_visible_gone_ternary(self):
        directive = resolve_visibility("@{flag ? 'visible' : 'gone'}")
        assert directive.kind is VisibilityKind.HIDE_ENTIRELY
        assert directive.condition == "data.flag"
        assert not directive.inverted

    def test_gone_visible_ternary_negates(self):
        directive = resolve_visibility("@{flag ? 'gone' : 'visible'}")
        assert directive.kind is VisibilityKind.HIDE_ENTIRELY
        assert directive.condition == "!data.flag"
        assert directive.inverted

    def test_negated_condition_is_not_double_negated(self):
        directive = resolve_visibility("@{!flag ? 'gone' : 'visible'}")
        assert directive.condition == "data.flag"

    def test_fade_out(self):
        directive = resolve_visibility('@{isOpen ? "visible" : "invisible"}')
        assert directive.kind is VisibilityKind.FADE_OUT
        assert directive.condition == "data.isOpen"
        inverted = resolve_visibility("@{isOpen ? 'invisible' : 'visible'}")
        assert inverted.inverted
        assert inverted.condition == "!data.isOpen"

    def test_dotted_outcome_tokens(self):
        directive = resolve_visibility("@{flag ? '.gone' : '.visible'}")
        assert directive.condition == "!data.flag"

    @pytest.mark.parametrize("raw", [
        "@{a && b ? 'visible' : 'gone'}",
        "@{count > 0 ? 'visible' : 'gone'}",
        "@{check(x) ? 'visible' : 'gone'}",
        "@{flag ? 'visible' : 'hidden'}",
    ])
    def test_unmatched_shapes_yield_nothing(self, raw):
        assert resolve_visibility(raw) is None


class TestHiddenAndStatic:
    """Test the hidden attribute and literal visibility values."""

    def test_hidden_binding_hides_while_truthy(self):
        directive = resolve_hidden("@{isEmpty}")
        assert directive.kind is VisibilityKind.HIDE_ENTIRELY
        assert directive.condition == "!data.isEmpty"

    def test_visibility_takes_precedence_over_hidden(self):
        directive = directive_for({"visibility": "@{shown}", "hidden": "@{isEmpty}"})
        assert directive.condition == "data.shown"

    def test_static_classes(self):
        assert static_visibility_classes({"visibility": "gone"}) == ["hidden"]
        assert static_visibility_classes({"visibility": "invisible"}) == ["invisible"]
        assert static_visibility_classes({"hidden": True}) == ["hidden"]
        assert static_visibility_classes({"visibility": "@{flag}"}) == []

    def test_wrap_hide_entirely(self):
        directive = resolve_visibility("@{flag}")
        assert wrap_hide_entirely("  <div />", directive, 2) == "  {data.flag && (\n  <div />\n  )}"
