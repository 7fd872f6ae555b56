"""Shared fixtures for jsonui tests."""

import json
from pathlib import Path
from typing import Any, Dict, Optional

import pytest

from jsonui.codegen.context import EmitContext
from jsonui.codegen.registry import EmitterRegistry
from jsonui.codegen.walker import emit_node
from jsonui.compiler import LayoutCompiler
from jsonui.config import CompilerConfig
from jsonui.styles import StyleCatalog
from jsonui.tree import parse_node


def pytest_configure(config):
    """Register markers for pytest."""
    config.addinivalue_line("markers", "integration: mark test as integration test")


@pytest.fixture
def emit():
    """Emit markup for one raw node document; returns ``(markup, ctx)``."""

    def _emit(document: Dict[str, Any], *, known_documents=None, registry=None):
        ctx = EmitContext(
            registry=registry or EmitterRegistry(),
            known_documents=frozenset(known_documents) if known_documents is not None else None,
        )
        return emit_node(parse_node(document), ctx), ctx

    return _emit


@pytest.fixture
def compile_layout():
    """Compile a raw document with an in-memory style catalog."""

    def _compile(
        document: Dict[str, Any],
        *,
        name: str = "Sample",
        styles: Optional[Dict[str, Dict[str, Any]]] = None,
        config: Optional[CompilerConfig] = None,
        known_documents=None,
    ):
        compiler = LayoutCompiler(
            StyleCatalog(styles or {}),
            config=config,
            known_documents=known_documents,
        )
        return compiler.compile_tree(parse_node(document), name)

    return _compile


@pytest.fixture
def workspace(tmp_path):
    """Empty workspace with the default layouts and styles directories."""
    (tmp_path / "src" / "Layouts").mkdir(parents=True)
    (tmp_path / "src" / "Styles").mkdir(parents=True)
    return tmp_path


def write_json(path: Path, document: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


@pytest.fixture
def write_layout(workspace):
    def _write(relative: str, document: Any) -> Path:
        return write_json(workspace / "src" / "Layouts" / relative, document)

    return _write


@pytest.fixture
def write_style(workspace):
    def _write(name: str, document: Any) -> Path:
        return write_json(workspace / "src" / "Styles" / f"{name}.json", document)

    return _write
