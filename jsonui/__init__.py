"""
jsonui: compile declarative JSON layouts into React components.

A layout is a JSON tree of typed components with attributes, named
styles and ``@{...}`` data bindings.  The compiler turns each layout
into JSX markup styled with Tailwind utility classes, plus optional
companion modules: a data model describing the bindable fields and a
state hook holding them.

The code is organised into several modules:

* ``tree`` and ``schema`` - parsing raw JSON into ``ComponentNode`` trees
  and the data declarations they carry.
* ``styles`` - named style lookup and merging before code generation.
* ``bindings`` and ``visibility`` - classification of attribute values
  and visibility directives.
* ``codegen`` - Tailwind mapping, per-type emitters and the templates
  for the generated modules.
* ``linter`` - advisory checks that bindings stay plain property paths.
* ``compiler`` - the per-document pipeline and workspace batch builds.
* ``cli`` - the ``jsonui build`` / ``jsonui validate`` commands.
"""

__version__ = "0.4.0"

from .compiler import (
    BatchResult,
    CompiledDocument,
    LayoutCompiler,
    compile_workspace,
    discover_layouts,
)
from .config import CompilerConfig, load_config
from .errors import (
    ConfigError,
    Diagnostic,
    EmitterRegistryError,
    JsonUIError,
    LayoutParseError,
    StyleResolutionError,
    TemplateRenderError,
)
from .tree import ComponentNode, parse_document

__all__ = [
    "__version__",
    "BatchResult",
    "CompiledDocument",
    "ComponentNode",
    "CompilerConfig",
    "ConfigError",
    "Diagnostic",
    "EmitterRegistryError",
    "JsonUIError",
    "LayoutCompiler",
    "LayoutParseError",
    "StyleResolutionError",
    "TemplateRenderError",
    "compile_workspace",
    "discover_layouts",
    "load_config",
    "parse_document",
]
