"""Layout compilation pipeline.

One document goes through::

    parse -> resolve styles -> type defaults -> lint -> emit markup
          -> component / data model / state hook modules

``LayoutCompiler`` holds only read-only collaborators (style catalog,
emitter registry, flags), so one instance can compile many documents,
including from several threads.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import FrozenSet, Iterable, List, Optional, Tuple

from .codegen.component import MARKUP_INDENT, render_component
from .codegen.context import EmitContext
from .codegen.data_model import ChangeHandler, collect_two_way_bindings, render_data_model
from .codegen.registry import EmitterRegistry
from .codegen.state import render_state_hook
from .codegen.walker import emit_node
from .config import CompilerConfig
from .errors import Diagnostic, JsonUIError, LayoutParseError
from .linter import BindingLinter, LintResult
from .naming import component_name_for
from .schema import DataSchemaEntry
from .styles import StyleCatalog, apply_type_defaults, resolve_styles
from .tree import ComponentNode, collect_declarations, parse_document

logger = logging.getLogger(__name__)

SKIPPED_LAYOUT_DIRECTORIES = ("Resources",)


@dataclass
class CompiledDocument:
    """Every artifact produced for one layout document."""

    name: str
    tree: ComponentNode
    markup: str
    component: str
    data_model: Optional[str] = None
    state: Optional[str] = None
    declarations: List[DataSchemaEntry] = field(default_factory=list)
    handlers: List[ChangeHandler] = field(default_factory=list)
    components: List[str] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)
    lint: Optional[LintResult] = None
    source: Optional[Path] = None


@dataclass
class DocumentFailure:
    path: Path
    error: JsonUIError


@dataclass
class BatchResult:
    """Outcome of compiling a set of documents; one failure never aborts the rest."""

    compiled: List[CompiledDocument] = field(default_factory=list)
    failures: List[DocumentFailure] = field(default_factory=list)
    written: List[Path] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.failures

    def all_diagnostics(self) -> List[Diagnostic]:
        collected = list(self.diagnostics)
        for document in self.compiled:
            collected.extend(document.diagnostics)
        return collected

    def warning_count(self) -> int:
        return sum(document.lint.warning_count() for document in self.compiled if document.lint)


def _module_import(from_directory: Path, to_directory: Path, module: str) -> str:
    relative = Path(os.path.relpath(to_directory, from_directory)).as_posix()
    if relative == ".":
        return f"./{module}"
    if not relative.startswith("."):
        relative = f"./{relative}"
    return f"{relative}/{module}"


class LayoutCompiler:
    """Compile layout documents against a fixed catalog, registry and flag set."""

    def __init__(
        self,
        catalog: Optional[StyleCatalog] = None,
        registry: Optional[EmitterRegistry] = None,
        *,
        config: Optional[CompilerConfig] = None,
        validate: bool = True,
        known_documents: Optional[Iterable[str]] = None,
    ) -> None:
        self.config = config or CompilerConfig()
        self.catalog = catalog if catalog is not None else StyleCatalog()
        self.registry = registry if registry is not None else EmitterRegistry()
        self.validate = validate
        self.known_documents: Optional[FrozenSet[str]] = (
            frozenset(known_documents) if known_documents is not None else None
        )
        self.linter = BindingLinter()
        self.diagnostics: List[Diagnostic] = [
            Diagnostic(code="extension-load-failed", message=message)
            for message in self.registry.load_errors
        ]

    @classmethod
    def from_config(
        cls,
        config: CompilerConfig,
        *,
        validate: bool = True,
        known_documents: Optional[Iterable[str]] = None,
    ) -> "LayoutCompiler":
        catalog = StyleCatalog.from_search_paths(config.style_search_paths())
        registry = EmitterRegistry.from_references(config.extensions)
        return cls(catalog, registry, config=config, validate=validate, known_documents=known_documents)

    # -- single document -------------------------------------------------

    def resolve(self, root: ComponentNode, diagnostics: List[Diagnostic], label: Optional[str] = None) -> ComponentNode:
        """Style resolution, then per-type defaults beneath the resolved attributes."""
        style_diagnostics: List[Diagnostic] = []
        resolved = resolve_styles(root, self.catalog, style_diagnostics)
        resolved = apply_type_defaults(resolved, self.config.defaults)
        for diagnostic in style_diagnostics:
            if label and diagnostic.location:
                diagnostic = replace(diagnostic, location=f"{label}:{diagnostic.location}")
            diagnostics.append(diagnostic)
        return resolved

    def compile_tree(
        self,
        root: ComponentNode,
        name: str,
        *,
        label: Optional[str] = None,
        source: Optional[Path] = None,
    ) -> CompiledDocument:
        config = self.config
        diagnostics: List[Diagnostic] = []
        resolved = self.resolve(root, diagnostics, label)
        lint = self.linter.lint_tree(resolved, label) if self.validate else None

        ctx = EmitContext(
            registry=self.registry,
            diagnostics=diagnostics,
            known_documents=self.known_documents,
            document=label,
        )
        markup = emit_node(resolved, ctx, MARKUP_INDENT)
        declarations = collect_declarations(resolved)
        handlers = collect_two_way_bindings(resolved)
        origin = source.name if source is not None else f"{name}.json"

        data_model = None
        data_import = None
        if config.generate_data_models:
            data_import = _module_import(config.components_path, config.data_path, f"{name}Data")
            data_model = render_data_model(
                name, declarations, handlers, typescript=config.typescript, source=origin)

        state = None
        if config.generate_hooks and data_model is not None:
            state = render_state_hook(
                name,
                handlers,
                data_import=_module_import(config.hooks_path, config.data_path, f"{name}Data"),
                typescript=config.typescript,
                source=origin,
            )

        component = render_component(
            name,
            markup,
            components=ctx.components,
            modules=ctx.modules,
            data_import=data_import,
            typescript=config.typescript,
            source=origin,
        )
        return CompiledDocument(
            name=name,
            tree=resolved,
            markup=markup,
            component=component,
            data_model=data_model,
            state=state,
            declarations=declarations,
            handlers=handlers,
            components=list(ctx.components),
            diagnostics=diagnostics,
            lint=lint,
            source=source,
        )

    def compile_source(self, text: str, name: str, *, path: Optional[Path] = None) -> CompiledDocument:
        """Parse and compile one document; only a parse failure raises."""
        label = path.as_posix() if path is not None else None
        root = parse_document(text, path=label)
        return self.compile_tree(root, name, label=label, source=path)

    def compile_file(self, path: Path) -> CompiledDocument:
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise LayoutParseError(f"Cannot read layout: {exc}", path=str(path)) from exc
        return self.compile_source(text, component_name_for(path.name), path=path)


# =============================================================================
# WORKSPACE
# =============================================================================

def discover_layouts(config: CompilerConfig) -> List[Path]:
    """Every ``*.json`` layout below the layouts directory, minus styles and resources."""
    layouts = config.layouts_path
    if not layouts.is_dir():
        return []
    excluded = [path.resolve() for path in config.style_search_paths() if path.is_dir()]
    found = []
    for path in sorted(layouts.rglob("*.json")):
        relative = path.relative_to(layouts)
        if any(part in SKIPPED_LAYOUT_DIRECTORIES for part in relative.parts[:-1]):
            continue
        resolved = path.resolve()
        if any(directory in resolved.parents for directory in excluded):
            continue
        found.append(path)
    return found


def known_document_names(config: CompilerConfig, paths: Iterable[Path]) -> FrozenSet[str]:
    """Include targets a batch can resolve: relative paths and bare stems."""
    names = set()
    for path in paths:
        try:
            relative = path.relative_to(config.layouts_path).with_suffix("").as_posix()
        except ValueError:
            relative = path.stem
        names.add(relative)
        names.add(path.stem)
    return frozenset(names)


def output_files(document: CompiledDocument, config: CompilerConfig) -> List[Tuple[Path, str]]:
    files = [(config.components_path / f"{document.name}{config.component_extension}", document.component)]
    if document.data_model is not None:
        files.append((config.data_path / f"{document.name}Data{config.module_extension}", document.data_model))
    if document.state is not None:
        files.append((config.hooks_path / f"use{document.name}ViewModel{config.module_extension}", document.state))
    return files


def write_outputs(document: CompiledDocument, config: CompilerConfig) -> List[Path]:
    written = []
    for path, content in output_files(document, config):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        logger.info("Wrote %s", path)
        written.append(path)
    return written


def compile_workspace(
    config: CompilerConfig,
    *,
    validate: bool = True,
    write: bool = True,
    paths: Optional[List[Path]] = None,
) -> BatchResult:
    """Compile every discovered layout; failures are collected, not raised."""
    layouts = paths if paths is not None else discover_layouts(config)
    compiler = LayoutCompiler.from_config(
        config,
        validate=validate,
        known_documents=known_document_names(config, layouts),
    )
    result = BatchResult(diagnostics=list(compiler.diagnostics))
    seen = {}
    for path in layouts:
        try:
            document = compiler.compile_file(path)
        except JsonUIError as exc:
            logger.error("Failed to compile %s: %s", path, exc.format())
            result.failures.append(DocumentFailure(path=path, error=exc))
            continue
        if document.name in seen:
            logger.warning("%s and %s both compile to %s; the later one wins", seen[document.name], path, document.name)
        seen[document.name] = path
        result.compiled.append(document)
        if write:
            result.written.extend(write_outputs(document, config))
    return result
