"""Tests for the component tree model and data schema entries."""

import pytest

from jsonui.errors import LayoutParseError
from jsonui.schema import SchemaKind, entry_from_declaration, format_default, to_typescript_type
from jsonui.tree import collect_declarations, parse_document, parse_node


class TestParseNode:
    """Test building ComponentNode trees from decoded JSON."""

    def test_structural_keys_are_not_attributes(self):
        node = parse_node({"type": "View", "style": "card", "width": 100, "child": []})
        assert node.type == "View"
        assert node.style == "card"
        assert dict(node.attributes) == {"width": 100}

    def test_child_and_children_accept_list_or_object(self):
        as_list = parse_node({"type": "View", "children": [{"type": "Label"}, {"type": "Button"}]})
        as_object = parse_node({"type": "View", "child": {"type": "Label"}})
        assert [child.type for child in as_list.children] == ["Label", "Button"]
        assert [child.type for child in as_object.children] == ["Label"]

    def test_locations_are_json_pointers(self):
        node = parse_node({"type": "View", "child": [{"type": "View", "child": [{"type": "Label"}]}]})
        assert node.location == "$"
        assert node.children[0].location == "$.child[0]"
        assert node.children[0].children[0].location == "$.child[0].child[0]"

    def test_marker_node_only_declares(self):
        node = parse_node({"type": "View", "child": [{"data": [{"name": "title", "class": "String"}]}]})
        marker = node.children[0]
        assert marker.is_marker
        assert [entry.name for entry in marker.declarations] == ["title"]

    def test_typed_node_may_declare_data_directly(self):
        node = parse_node({"type": "View", "data": [{"name": "count", "class": "Int"}]})
        assert not node.is_marker
        assert node.declarations[0].kind is SchemaKind.NUMBER
        assert "data" not in node.attributes

    def test_include_reference(self):
        node = parse_node({"include": "common/header", "data": {"title": "Hi"}})
        assert node.is_include
        assert node.include == "common/header"
        assert node.get("data") == {"title": "Hi"}

    def test_non_object_children_are_skipped(self):
        node = parse_node({"type": "View", "child": [{"type": "Label"}, "oops", 3]})
        assert len(node.children) == 1


class TestParseDocument:
    """Test the fatal, document-scoped parse failures."""

    def test_invalid_json(self):
        with pytest.raises(LayoutParseError) as exc_info:
            parse_document('{"type": "View",', path="Broken.json")
        assert exc_info.value.path == "Broken.json"
        assert "Invalid JSON" in exc_info.value.message

    def test_non_object_root(self):
        with pytest.raises(LayoutParseError) as exc_info:
            parse_document("[1, 2]")
        assert "must be a JSON object" in exc_info.value.message

    def test_walk_is_pre_order(self):
        root = parse_document('{"type": "A", "child": [{"type": "B", "child": [{"type": "C"}]}, {"type": "D"}]}')
        assert [node.type for node in root.walk()] == ["A", "B", "C", "D"]


class TestSchemaEntries:
    """Test declared classes, kinds and TypeScript types."""

    @pytest.mark.parametrize("raw_class,kind", [
        ("String", SchemaKind.STRING),
        ("Color", SchemaKind.STRING),
        ("Int", SchemaKind.NUMBER),
        ("CGFloat", SchemaKind.NUMBER),
        ("Bool", SchemaKind.BOOLEAN),
        ("[String]", SchemaKind.ARRAY),
        ("Array(Int)", SchemaKind.ARRAY),
        ("(String) -> Void", SchemaKind.FUNCTION),
        ("UserModel", SchemaKind.MODEL_REFERENCE),
        (None, SchemaKind.MODEL_REFERENCE),
    ])
    def test_kind_for_declared_class(self, raw_class, kind):
        entry = entry_from_declaration({"name": "value", "class": raw_class})
        assert entry.kind is kind

    def test_typescript_types(self):
        assert to_typescript_type("Array(Int)") == "number[]"
        assert to_typescript_type("Dictionary(String, Bool)") == "Record<string, boolean>"
        assert to_typescript_type("String?") == "string | undefined"
        assert to_typescript_type("(Int) -> Void") == "((arg0: number) => void) | undefined"

    def test_default_makes_entry_non_nullable(self):
        with_default = entry_from_declaration({"name": "title", "class": "String", "defaultValue": "Hello"})
        without = entry_from_declaration({"name": "title", "class": "String"})
        assert not with_default.nullable
        assert without.nullable
        assert format_default(with_default) == '"Hello"'
        assert format_default(without) == "undefined"

    def test_platform_specific_values(self):
        entry = entry_from_declaration({
            "name": "count",
            "class": {"swift": "Int", "react": "number"},
            "defaultValue": {"react": 3},
        })
        assert entry.ts_type == "number"
        assert format_default(entry) == "3"

    def test_view_model_handle(self):
        entry = entry_from_declaration({"name": "viewModel", "class": "LoginViewModel"})
        assert entry.is_view_model_handle

    def test_declaration_without_name_is_ignored(self):
        assert entry_from_declaration({"class": "String"}) is None

    def test_collect_declarations_first_wins(self):
        root = parse_node({
            "type": "View",
            "child": [
                {"data": [{"name": "title", "class": "String"}]},
                {"type": "View", "child": [{"data": [{"name": "title", "class": "Int"}]}]},
            ],
        })
        entries = collect_declarations(root)
        assert [(entry.name, entry.kind) for entry in entries] == [("title", SchemaKind.STRING)]
