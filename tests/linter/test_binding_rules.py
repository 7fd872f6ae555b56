"""Test the binding linter and its built-in rules."""

import pytest

from jsonui.linter import BindingLinter, LintRule, LintSeverity
from jsonui.linter.builtin_rules import (
    BindingLogicRule,
    NamespacePrefixRule,
    UndeclaredBindingRule,
    business_logic,
    infer_kind,
    leading_identifier,
)
from jsonui.linter.core import LintContext
from jsonui.schema import SchemaKind
from jsonui.tree import parse_node


def lint(document, label=None):
    return BindingLinter().lint_tree(parse_node(document), label)


def with_schema(*children, declarations=None):
    return {
        "type": "View",
        "child": [{"data": declarations or [{"name": "count", "class": "Int"}]}, *children],
    }


class TestValidatorSoundness:
    """Declared names and logic detection are independent checks."""

    def test_declared_path_is_clean(self):
        result = lint(with_schema({"type": "Label", "text": "@{count}"}))
        assert result.findings == []

    def test_arithmetic_on_declared_name_still_warns(self):
        result = lint(with_schema({"type": "Label", "text": "@{count + 1}"}))
        assert [finding.rule_id for finding in result.findings] == ["binding-logic"]
        assert "arithmetic" in result.findings[0].message
        assert result.findings[0].severity == LintSeverity.WARNING

    def test_schema_less_document_is_skipped(self):
        result = lint({"type": "View", "child": [{"type": "Label", "text": "@{a ? b : c}"}]})
        assert result.findings == []
        assert result.success()

    def test_undeclared_boolean_attribute(self):
        result = lint(with_schema(
            {"type": "View", "hidden": "@{undefinedVar}"},
            declarations=[{"name": "otherVar"}],
        ))
        assert len(result.findings) == 1
        finding = result.findings[0]
        assert finding.rule_id == "undeclared-binding"
        assert finding.suggested_kind is SchemaKind.BOOLEAN
        assert '"class": "Boolean"' in finding.suggestion
        assert "undefinedVar" in finding.message


class TestScoping:
    """Declarations are visible only inside the declaring marker's subtree."""

    def test_sibling_subtree_does_not_see_declaration(self):
        document = {
            "type": "View",
            "child": [
                {"type": "View", "child": [
                    {"data": [{"name": "title", "class": "String"}]},
                    {"type": "Label", "text": "@{title}"},
                ]},
                {"type": "Label", "text": "@{title}"},
            ],
        }
        result = lint(document, "Screen.json")
        assert len(result.findings) == 1
        assert result.findings[0].location == "Screen.json:$.child[1].text"

    def test_root_declarations_cover_the_whole_tree(self):
        document = {
            "type": "View",
            "data": [{"name": "title", "class": "String"}],
            "child": [{"type": "View", "child": [{"type": "Label", "text": "@{title}"}]}],
        }
        assert lint(document).findings == []

    def test_marker_declarations_cover_the_containing_node(self):
        """A marker declares for the container holding it, including its own attributes."""
        document = {
            "type": "View",
            "child": [
                {"type": "View", "hidden": "@{isHidden}", "child": [
                    {"data": [{"name": "isHidden", "class": "Bool"}]},
                    {"type": "Label", "text": "Hi"},
                ]},
                {"type": "View", "hidden": "@{isHidden}"},
            ],
        }
        result = lint(document, "Screen.json")
        assert [finding.location for finding in result.findings] == ["Screen.json:$.child[1].hidden"]

    def test_view_model_handles_are_not_bindable(self):
        document = with_schema(
            {"type": "Label", "text": "@{viewModel}"},
            declarations=[{"name": "count", "class": "Int"}, {"name": "viewModel", "class": "LoginViewModel"}],
        )
        result = lint(document)
        assert [finding.rule_id for finding in result.findings] == ["undeclared-binding"]

    def test_cell_scoped_bindings_are_not_checked(self):
        result = lint(with_schema({"type": "Label", "text": "@{data.name}"}))
        assert result.findings == []


class TestRules:
    """Individual rules."""

    def test_namespace_prefix(self):
        context = LintContext.build(parse_node(with_schema({"type": "Label", "text": "@{viewModel.count}"})))
        findings = NamespacePrefixRule().check(context)
        assert len(findings) == 1
        assert findings[0].suggestion == "Use @{count} instead"
        assert UndeclaredBindingRule().check(context) == []

    def test_logic_reports_first_construct_only(self):
        context = LintContext.build(parse_node(with_schema({"type": "Label", "text": "@{count > 0 ? count + 1 : 0}"})))
        findings = BindingLogicRule().check(context)
        assert len(findings) == 1
        assert "ternary" in findings[0].message

    def test_embedded_bindings_are_checked(self):
        result = lint(with_schema({"type": "Label", "text": "Hello @{userName}"}))
        assert [finding.rule_id for finding in result.findings] == ["undeclared-binding"]

    def test_visibility_ternary_counts_as_logic(self):
        result = lint(with_schema({"type": "View", "visibility": "@{count ? 'visible' : 'gone'}"}))
        assert [finding.rule_id for finding in result.findings] == ["binding-logic"]

    def test_by_rule(self):
        result = lint(with_schema(
            {"type": "Label", "text": "@{missing}"},
            {"type": "Label", "text": "@{count * 2}"},
        ))
        assert len(result.by_rule("undeclared-binding")) == 1
        assert len(result.by_rule("binding-logic")) == 1
        assert result.warning_count() == 2
        assert result.has_issues()


class TestHelpers:
    """Pure helpers used by the rules."""

    @pytest.mark.parametrize("expression,construct", [
        ("a ? b : c", "ternary"),
        ("a == b", "comparison"),
        ("a && b", "logical"),
        ("a || b", "logical"),
        ("price * qty", "arithmetic"),
        ("total - discount", "arithmetic"),
        ("name ?? 'Guest'", "nil-coalescing"),
        ("format(date)", "call"),
    ])
    def test_business_logic(self, expression, construct):
        assert business_logic(expression)[0] == construct

    @pytest.mark.parametrize("expression", ["count", "user.name", "!isLoading", "refresh()", "'a ? b : c'"])
    def test_plain_paths_are_not_logic(self, expression):
        assert business_logic(expression) is None

    def test_leading_identifier(self):
        assert leading_identifier("!viewModel.user.name") == "user"
        assert leading_identifier("true") is None
        assert leading_identifier("'literal'") is None

    @pytest.mark.parametrize("name,attribute,kind", [
        ("flag", "enabled", SchemaKind.BOOLEAN),
        ("rows", "items", SchemaKind.ARRAY),
        ("submit", "onClick", SchemaKind.FUNCTION),
        ("onSave", "text", SchemaKind.FUNCTION),
        ("isOpen", "text", SchemaKind.BOOLEAN),
        ("todoItems", "text", SchemaKind.ARRAY),
        ("pageIndex", "text", SchemaKind.NUMBER),
        ("title", "text", SchemaKind.STRING),
    ])
    def test_infer_kind(self, name, attribute, kind):
        assert infer_kind(name, attribute) is kind


class TestBindingLinter:
    """Linter orchestration."""

    def test_parse_failure_is_reported_not_raised(self):
        result = BindingLinter().lint_document("{broken", "Broken.json")
        assert not result.success()
        assert result.errors[0].startswith("Parse error")

    def test_failing_rule_becomes_a_warning(self):
        class ExplodingRule(LintRule):
            def __init__(self):
                super().__init__(rule_id="exploding", description="always fails")

            def check(self, context):
                raise RuntimeError("boom")

        result = BindingLinter(rules=[ExplodingRule()]).lint_tree(parse_node(with_schema()))
        assert result.findings == []
        assert "exploding" in result.warnings[0]

    def test_tree_is_not_mutated(self):
        node = parse_node(with_schema({"type": "Label", "text": "@{missing}"}))
        before = repr(node)
        BindingLinter().lint_tree(node)
        assert repr(node) == before
