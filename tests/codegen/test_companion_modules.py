"""Tests for the generated component, data model and state hook modules."""

import pytest

from jsonui.codegen import (
    ChangeHandler,
    collect_two_way_bindings,
    render_component,
    render_data_model,
    render_state_hook,
)
from jsonui.codegen.component import wrap_root
from jsonui.codegen.context import ModuleImport
from jsonui.codegen.data_model import data_fields
from jsonui.codegen.templates import render_template
from jsonui.errors import TemplateRenderError
from jsonui.schema import entry_from_declaration
from jsonui.tree import parse_node


@pytest.fixture
def entries():
    return [
        entry_from_declaration({"name": "title", "class": "String", "defaultValue": "Hello"}),
        entry_from_declaration({"name": "count", "class": "Int"}),
        entry_from_declaration({"name": "viewModel", "class": "LoginViewModel"}),
    ]


class TestTwoWayBindings:
    """Default change handlers for bound inputs."""

    def test_inputs_without_handlers(self):
        root = parse_node({"type": "View", "child": [
            {"type": "TextField", "text": "@{name}"},
            {"type": "Switch", "isOn": "@{notify}"},
            {"type": "Slider", "value": "@{volume}", "onValueChange": "@{changeVolume}"},
            {"type": "TextView", "text": "@{name}"},
            {"type": "TextField", "text": "@{user.email}"},
            {"type": "TextField", "text": "literal"},
        ]})
        handlers = collect_two_way_bindings(root)
        assert handlers == [
            ChangeHandler(name="onNameChange", prop="name", ts_type="string"),
            ChangeHandler(name="onNotifyChange", prop="notify", ts_type="boolean"),
        ]

    def test_legacy_prefix_is_normalized(self):
        root = parse_node({"type": "TextField", "text": "@{viewModel.query}"})
        assert collect_two_way_bindings(root)[0].prop == "query"


class TestDataModel:
    """The <Name>Data module."""

    def test_typescript_interface(self, entries):
        handlers = [ChangeHandler(name="onNameChange", prop="name", ts_type="string")]
        module = render_data_model("Login", entries, handlers, source="Login.json")
        assert module.startswith("// Generated by jsonui from Login.json - do not edit directly\n")
        assert "export interface LoginData {\n" in module
        assert "  title: string;\n" in module
        assert "  count?: number;\n" in module
        assert "  viewModel?: any;\n" in module
        assert "  onNameChange?: ((value: string) => void) | undefined;\n" in module
        assert "export const createLoginData = (): LoginData => ({\n" in module
        assert '  title: "Hello",\n' in module
        assert "  count: undefined,\n" in module

    def test_javascript_typedef(self, entries):
        module = render_data_model("Login", entries, [], typescript=False)
        assert " * @typedef {Object} LoginData\n" in module
        assert " * @property {string} title\n" in module
        assert " * @property {number} [count]\n" in module
        assert "export const createLoginData = () => ({\n" in module
        assert "interface" not in module

    def test_empty_schema(self):
        module = render_data_model("Empty", [], [])
        assert "  // No data properties declared\n" in module

    def test_declared_handler_is_not_duplicated(self):
        declared = [entry_from_declaration({"name": "onNameChange", "class": "(String) -> Void"})]
        handlers = [ChangeHandler(name="onNameChange", prop="name", ts_type="string")]
        assert [field.name for field in data_fields(declared, handlers)] == ["onNameChange"]


class TestStateHook:
    """The use<Name>ViewModel module."""

    def test_typescript_hook(self):
        handlers = [ChangeHandler(name="onNameChange", prop="name", ts_type="string")]
        module = render_state_hook("Login", handlers, data_import="../data/LoginData")
        assert 'import { LoginData, createLoginData } from "../data/LoginData";\n' in module
        assert "export function useLoginViewModel(initial?: Partial<LoginData>) {\n" in module
        assert "useState<LoginData>(() => ({ ...createLoginData(), ...initial }))" in module
        assert ("      onNameChange: data.onNameChange ?? ((value: string) => "
                "setData((prev) => ({ ...prev, name: value }))),\n") in module
        assert "    setData,\n" in module

    def test_javascript_hook(self):
        handlers = [ChangeHandler(name="onNotifyChange", prop="notify", ts_type="boolean")]
        module = render_state_hook("Settings", handlers, data_import="../data/SettingsData", typescript=False)
        assert "export function useSettingsViewModel(initial) {\n" in module
        assert "onNotifyChange: data.onNotifyChange ?? ((value) => " in module
        assert "boolean" not in module


class TestComponentModule:
    """The component wrapping the emitted markup."""

    def test_typescript_component(self):
        module = render_component(
            "Main",
            '    <div className="p-2" />',
            components=["Header", "Main"],
            data_import="../data/MainData",
        )
        assert 'import React from "react";\nimport Header from "./Header";\n' in module
        assert 'import Main from "./Main"' not in module
        assert 'import type { MainData } from "../data/MainData";\n' in module
        assert "interface MainProps {\n  data: MainData;\n  viewModel?: any;\n}\n" in module
        assert "export const Main = ({ data, viewModel }: MainProps) => {\n" in module
        assert '  return (\n    <div className="p-2" />\n  );\n};\n' in module
        assert module.endswith("export default Main;\n")

    def test_javascript_component(self):
        module = render_component("Main", "    <div />", typescript=False)
        assert "export const Main = ({ data, viewModel }) => {\n" in module
        assert "interface" not in module
        assert "import type" not in module

    def test_without_data_model_props_are_any(self):
        module = render_component("Main", "    <div />")
        assert "  data: any;\n" in module

    def test_package_imports(self):
        modules = {
            "next/link": ModuleImport(default="Link"),
            "lucide-react": ModuleImport(names=["Home", "User"]),
        }
        module = render_component("Main", "    <div />", modules=modules, components=["Header"])
        assert (
            'import React from "react";\n'
            'import Link from "next/link";\n'
            'import { Home, User } from "lucide-react";\n'
            'import Header from "./Header";\n'
        ) in module


class TestTemplates:
    """Template rendering entry point."""

    def test_name_is_a_template_variable(self):
        module = render_template("data_model", name="Profile", fields=[], typescript=True, source="Profile.json")
        assert "export interface ProfileData {" in module
        assert "// Generated by jsonui from Profile.json" in module

    def test_render_failure_is_wrapped(self):
        with pytest.raises(TemplateRenderError) as excinfo:
            render_template("data_model", name="Profile")
        assert "Failed to render data_model template" in excinfo.value.message


class TestWrapRoot:
    """Root markup must be a single expression."""

    def test_element_is_unchanged(self):
        assert wrap_root("    <div />") == "    <div />"

    def test_conditional_root_gets_fragment(self):
        wrapped = wrap_root("    {data.flag && (\n    <div />\n    )}")
        assert wrapped.startswith("    <>\n      {data.flag && (")
        assert wrapped.endswith("\n    </>")

    def test_empty_root_is_null(self):
        assert wrap_root("") == "    null"
