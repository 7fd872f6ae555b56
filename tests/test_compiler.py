"""End-to-end tests for the layout compiler and workspace batches."""

import pytest

from jsonui.compiler import (
    LayoutCompiler,
    compile_workspace,
    discover_layouts,
    known_document_names,
    output_files,
)
from jsonui.config import CompilerConfig
from jsonui.errors import LayoutParseError
from jsonui.schema import SchemaKind


def codes(document):
    return [diagnostic.code for diagnostic in document.diagnostics]


class TestScenarios:
    """Whole-document behavior from JSON to markup."""

    def test_schema_less_document(self, compile_layout):
        document = compile_layout({
            "type": "View",
            "width": 100,
            "child": [{"type": "Label", "text": "@{title}"}],
        })
        assert document.lint.findings == []
        assert 'className="flex flex-col w-[100px]"' in document.markup
        assert "<span>{data.title}</span>" in document.markup

    def test_bound_background_overrides_style_color(self, compile_layout):
        document = compile_layout(
            {"type": "View", "style": "card", "background": "@{bg}"},
            styles={"card": {"background": "#112233", "cornerRadius": 8}},
        )
        assert "style={{ backgroundColor: data.bg }}" in document.markup
        assert "bg-[#112233]" not in document.markup
        assert "rounded-lg" in document.markup

    def test_negated_visibility_wrapper(self, compile_layout):
        document = compile_layout({
            "type": "View",
            "child": [{"type": "Label", "text": "Next", "visibility": "@{isLast ? 'gone' : 'visible'}"}],
        })
        assert "{!data.isLast && (" in document.markup

    def test_undeclared_boolean_suggestion(self, compile_layout):
        document = compile_layout({
            "type": "View",
            "child": [
                {"data": [{"name": "otherVar", "class": "String"}]},
                {"type": "View", "hidden": "@{undefinedVar}"},
            ],
        })
        findings = document.lint.findings
        assert len(findings) == 1
        assert findings[0].suggested_kind is SchemaKind.BOOLEAN

    def test_padding_quartet(self, compile_layout):
        document = compile_layout({"type": "View", "padding": [10, 20, 30, 40]})
        assert "pt-2.5 pr-5 pb-7 pl-10" in document.markup


class TestDiagnostics:
    """Problems are recorded and compilation continues."""

    def test_missing_style(self, compile_layout):
        document = compile_layout({"type": "View", "style": "nope", "width": 10})
        assert codes(document) == ["style-not-found"]
        assert "w-[10px]" in document.markup

    def test_unknown_type_and_unresolved_include(self, compile_layout):
        document = compile_layout(
            {"type": "View", "child": [{"type": "Carousel"}, {"include": "missing"}]},
            known_documents={"header"},
        )
        assert codes(document) == ["unknown-type", "include-unresolved"]

    def test_event_binding_form(self, compile_layout):
        document = compile_layout({"type": "Button", "text": "Go", "onClick": "submit"})
        assert codes(document) == ["event-binding-form"]
        assert "ERROR" in document.component

    def test_parse_failure_raises(self):
        with pytest.raises(LayoutParseError) as excinfo:
            LayoutCompiler().compile_source("{not json", "Broken")
        assert excinfo.value.code == "layout-parse"

    def test_extension_load_failure_is_a_diagnostic(self, workspace):
        config = CompilerConfig(root=workspace, extensions={"Fancy": "jsonui_missing_module:emit"})
        compiler = LayoutCompiler.from_config(config)
        assert [diagnostic.code for diagnostic in compiler.diagnostics] == ["extension-load-failed"]
        assert "Fancy" in compiler.diagnostics[0].message


class TestCompiledDocument:
    """Companion modules produced alongside the markup."""

    def test_all_modules_generated(self, compile_layout):
        document = compile_layout({
            "type": "View",
            "child": [
                {"data": [{"name": "name", "class": "String", "defaultValue": ""}]},
                {"type": "TextField", "text": "@{name}"},
            ],
        }, name="Login")
        assert "export const Login = " in document.component
        assert 'from "../data/LoginData"' in document.component
        assert "export interface LoginData {" in document.data_model
        assert "onNameChange" in document.data_model
        assert "export function useLoginViewModel(" in document.state
        assert [handler.name for handler in document.handlers] == ["onNameChange"]

    def test_selection_widgets_get_handlers_and_imports(self, compile_layout):
        document = compile_layout({
            "type": "View",
            "child": [
                {"type": "Segment", "items": ["Day", "Week"], "selectedIndex": "@{period}"},
                {"type": "Button", "text": "Home", "href": "/home"},
                {"type": "TabView", "tabs": [{"title": "Home", "icon": "house"}]},
            ],
        }, name="Dashboard")
        assert 'import Link from "next/link";\n' in document.component
        assert 'import { Home } from "lucide-react";\n' in document.component
        assert [(handler.name, handler.ts_type) for handler in document.handlers] == [
            ("onPeriodChange", "number"),
            ("onSelectedTabChange", "number"),
        ]
        assert "onPeriodChange?: ((value: number) => void) | undefined;" in document.data_model

    def test_validation_can_be_disabled(self):
        document = LayoutCompiler(validate=False).compile_source('{"type": "View"}', "Plain")
        assert document.lint is None

    def test_modules_can_be_switched_off(self, compile_layout):
        config = CompilerConfig(generate_data_models=False)
        document = compile_layout({"type": "View"}, config=config)
        assert document.data_model is None
        assert document.state is None
        assert "data: any;" in document.component

    def test_javascript_flavor(self, compile_layout, workspace):
        config = CompilerConfig(root=workspace, typescript=False)
        document = compile_layout({"type": "View"}, name="Plain", config=config)
        assert "interface" not in document.component
        names = [path.name for path, _ in output_files(document, config)]
        assert names == ["Plain.jsx", "PlainData.js", "usePlainViewModel.js"]

    def test_conditional_root_is_wrapped_in_fragment(self, compile_layout):
        document = compile_layout({"type": "View", "visibility": "@{shown}"})
        assert "    <>\n" in document.component
        assert "    </>\n" in document.component

    def test_compiler_is_reusable(self, compile_layout):
        compiler = LayoutCompiler()
        first = compiler.compile_source('{"type": "Label", "text": "a"}', "A")
        second = compiler.compile_source('{"type": "Label", "text": "b"}', "B")
        assert ">a</span>" in first.markup
        assert ">b</span>" in second.markup


@pytest.mark.integration
class TestWorkspace:
    """Discovery and batch compilation."""

    def test_discovery_skips_styles_and_resources(self, workspace, write_layout, write_style):
        write_layout("Login.json", {"type": "View"})
        write_layout("common/header.json", {"type": "View"})
        write_layout("Resources/strings.json", {"hello": "Hello"})
        write_layout("Styles/card.json", {"background": "#fff"})
        write_style("title", {"fontSize": 20})
        config = CompilerConfig(root=workspace)
        names = [path.relative_to(config.layouts_path).as_posix() for path in discover_layouts(config)]
        assert names == ["Login.json", "common/header.json"]
        assert known_document_names(config, discover_layouts(config)) == {
            "Login", "common/header", "header",
        }

    def test_missing_layouts_directory(self, tmp_path):
        assert discover_layouts(CompilerConfig(root=tmp_path)) == []

    def test_batch_writes_outputs_and_collects_failures(self, workspace, write_layout, write_style):
        write_style("primary", {"background": "#0055ff"})
        write_layout("login.json", {
            "type": "View",
            "style": "primary",
            "child": [
                {"data": [{"name": "email", "class": "String"}]},
                {"type": "TextField", "text": "@{email}"},
                {"include": "common/header"},
            ],
        })
        write_layout("common/header.json", {"type": "Label", "text": "Header"})
        broken = workspace / "src" / "Layouts" / "broken.json"
        broken.write_text("{not json", encoding="utf-8")

        config = CompilerConfig(root=workspace)
        result = compile_workspace(config)

        assert not result.success
        assert [failure.path.name for failure in result.failures] == ["broken.json"]
        assert sorted(document.name for document in result.compiled) == ["Header", "Login"]
        assert result.all_diagnostics() == []

        generated = workspace / "src" / "generated"
        assert (generated / "components" / "Login.tsx").is_file()
        assert (generated / "data" / "LoginData.ts").is_file()
        assert (generated / "hooks" / "useLoginViewModel.ts").is_file()
        component = (generated / "components" / "Login.tsx").read_text(encoding="utf-8")
        assert 'import Header from "./Header";' in component
        assert "bg-[#0055ff]" in component
        assert len(result.written) == 6

    def test_dry_run_writes_nothing(self, workspace, write_layout):
        write_layout("Home.json", {"type": "View"})
        result = compile_workspace(CompilerConfig(root=workspace), write=False)
        assert len(result.compiled) == 1
        assert result.written == []
        assert not (workspace / "src" / "generated").exists()
