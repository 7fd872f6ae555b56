"""State-scaffold module: the ``use<Name>ViewModel`` hook."""

from __future__ import annotations

from typing import Optional, Sequence

from .data_model import ChangeHandler
from .templates import render_template


def render_state_hook(
    name: str,
    handlers: Sequence[ChangeHandler],
    *,
    data_import: str,
    typescript: bool = True,
    source: Optional[str] = None,
) -> str:
    """Hook holding the document's data with default handlers for two-way bound inputs."""
    return render_template(
        "state",
        name=name,
        handlers=list(handlers),
        data_import=data_import,
        typescript=typescript,
        source=source or f"{name}.json",
    )
