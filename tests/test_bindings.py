"""Tests for binding classification, accessor synthesis and text rendering."""

import pytest

from jsonui.bindings import (
    BindingKind,
    parse_action,
    parse_binding,
    render_action_attribute,
    render_attribute,
    render_text,
    resolve_expression,
    resolve_path,
)


class TestResolvePath:
    """Test rewriting paths onto the data namespace."""

    @pytest.mark.parametrize("path,accessor", [
        ("title", "data.title"),
        ("data.title", "data.title"),
        ("viewModel.title", "data.title"),
        ("viewModel.data.title", "data.title"),
        ("this.user.name", "data.user.name"),
        ("props.items", "data.items"),
    ])
    def test_prefixes(self, path, accessor):
        assert resolve_path(path) == accessor

    @pytest.mark.parametrize("raw", ["@{title}", "@{viewModel.title}", "@{!isLoading}", "@{user.name}"])
    def test_resolution_is_idempotent(self, raw):
        first = parse_binding(raw)
        second = parse_binding(raw)
        assert first.accessor == second.accessor
        assert resolve_path(resolve_path(first.path)) == resolve_path(first.path)


class TestParseBinding:
    """Test classification of attribute values."""

    def test_literal(self):
        expression = parse_binding("Hello")
        assert expression.kind is BindingKind.LITERAL
        assert expression.render() == '"Hello"'

    def test_data_binding(self):
        expression = parse_binding("@{ user.name }")
        assert expression.kind is BindingKind.DATA
        assert expression.render() == "data.user.name"

    def test_negated_binding(self):
        expression = parse_binding("@{!isLoading}")
        assert expression.negated
        assert expression.render() == "!data.isLoading"

    @pytest.mark.parametrize("raw", ["@{count + 1}", "@{a ? b : c}", "@{format(x)}", "@{}"])
    def test_anything_but_a_path_is_invalid(self, raw):
        expression = parse_binding(raw)
        assert expression.kind is BindingKind.INVALID
        assert not expression.is_valid
        assert expression.render().startswith("undefined /* unsupported binding:")

    def test_embedded_bindings_become_template_literal(self):
        assert resolve_expression("Hello @{name}!") == "`Hello ${data.name}!`"

    def test_non_string_literals(self):
        assert resolve_expression(3) == "3"
        assert resolve_expression(True) == "true"


class TestRenderText:
    """Test element content rendering."""

    def test_binding(self):
        assert render_text("@{title}") == "{data.title}"

    def test_multi_line_literal_is_segmented(self):
        assert render_text("first\nsecond") == "first<br />second"

    def test_braces_force_verbatim_wrapper(self):
        assert render_text("a {b}") == "{`a {b}`}"

    def test_segments_escape_independently(self):
        assert render_text("plain\n<tag>") == "plain<br />{`<tag>`}"

    def test_mixed_literal_and_binding(self):
        assert render_text("Hi @{name}") == "Hi {data.name}"

    def test_booleans_and_none(self):
        assert render_text(True) == "true"
        assert render_text(None) == ""


class TestRenderAttribute:
    """Test passthrough attributes."""

    def test_literal(self):
        assert render_attribute("id", "main") == ' id="main"'

    def test_binding(self):
        assert render_attribute("alt", "@{caption}") == " alt={data.caption}"

    def test_none_is_dropped(self):
        assert render_attribute("id", None) == ""

    def test_quotes_use_expression_form(self):
        assert render_attribute("title", 'say "hi"') == ' title={"say \\"hi\\""}'


class TestActions:
    """Test the event attribute surface forms."""

    def test_camel_case_requires_binding(self):
        action = parse_action("onClick", "@{handleTap}")
        assert action.kind is BindingKind.ACTION
        assert action.accessor == "data.handleTap"

    def test_lowercase_requires_bare_name(self):
        action = parse_action("onclick", "submit")
        assert action.kind is BindingKind.ACTION
        assert action.accessor == "() => viewModel.submit()"

    def test_wrong_form_for_camel_case(self):
        rendered = render_action_attribute("onClick", "submit")
        assert rendered.startswith(" /* ERROR: onClick requires binding syntax")

    def test_wrong_form_for_lowercase(self):
        action = parse_action("onclick", "@{submit}")
        assert action.kind is BindingKind.INVALID
        assert "bare method name" in action.reason

    def test_link_descriptor(self):
        assert parse_action("onClick", {"kind": "link", "url": "/home"}).accessor == \
            '() => window.location.assign("/home")'
        assert parse_action("onClick", {"kind": "link", "url": "https://x.io", "target": "_blank"}).accessor == \
            '() => window.open("https://x.io", "_blank")'

    def test_malformed_descriptor(self):
        assert parse_action("onClick", {"kind": "push"}).kind is BindingKind.INVALID

    def test_lowercase_event_gets_react_name(self):
        assert render_action_attribute("onclick", "submit") == " onClick={() => viewModel.submit()}"
