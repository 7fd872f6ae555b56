"""Component module wrapping the emitted markup."""

from __future__ import annotations

import textwrap
from typing import Mapping, Optional, Sequence

from .context import ModuleImport
from .templates import render_template

# Markup inside ``return (...)`` of the component body.
MARKUP_INDENT = 4


def wrap_root(markup: str) -> str:
    """Make the root markup a single JSX expression.

    Conditionally rendered roots (``{cond && (...)}``) and placeholder
    comments are wrapped in a fragment; an empty root renders ``null``.
    """
    if not markup.strip():
        return " " * MARKUP_INDENT + "null"
    if markup.lstrip().startswith("{"):
        pad = " " * MARKUP_INDENT
        return f"{pad}<>\n{textwrap.indent(markup, '  ')}\n{pad}</>"
    return markup


def render_component(
    name: str,
    markup: str,
    *,
    components: Sequence[str] = (),
    modules: Optional[Mapping[str, ModuleImport]] = None,
    data_import: Optional[str] = None,
    typescript: bool = True,
    source: Optional[str] = None,
) -> str:
    return render_template(
        "component",
        name=name,
        markup=wrap_root(markup),
        modules=[(module, entry.clause()) for module, entry in (modules or {}).items()],
        components=[component for component in components if component != name],
        data_import=data_import,
        typescript=typescript,
        source=source or f"{name}.json",
    )
