"""React/Tailwind code generation for resolved component trees."""

from .component import render_component
from .context import EmitContext
from .data_model import ChangeHandler, collect_two_way_bindings, render_data_model
from .registry import EmitterRegistry, load_emitter
from .state import render_state_hook
from .walker import emit_node

__all__ = [
    "ChangeHandler",
    "EmitContext",
    "EmitterRegistry",
    "collect_two_way_bindings",
    "emit_node",
    "load_emitter",
    "render_component",
    "render_data_model",
    "render_state_hook",
]
