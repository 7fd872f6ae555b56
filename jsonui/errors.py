"""Unified error model for jsonui."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass
class ErrorLocation:
    path: Optional[str] = None
    pointer: Optional[str] = None

    def describe(self) -> str:
        if self.path and self.pointer:
            return f"{self.path}:{self.pointer}"
        if self.path:
            return self.path
        if self.pointer:
            return self.pointer
        return "unknown location"


class JsonUIError(Exception):
    """Base class for all compiler errors surfaced to users."""

    code: Optional[str] = None
    hint: Optional[str] = None

    def __init__(
        self,
        message: str,
        *,
        path: Optional[str] = None,
        pointer: Optional[str] = None,
        code: Optional[str] = None,
        hint: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.location = ErrorLocation(path=path, pointer=pointer)
        self.path = path
        self.pointer = pointer
        if code is not None:
            self.code = code
        if hint is not None:
            self.hint = hint

    def format(self) -> str:
        components = [self.message]
        meta_parts = []
        location_desc = self.location.describe()
        if location_desc != "unknown location":
            meta_parts.append(location_desc)
        if self.code:
            meta_parts.append(self.code)
        if meta_parts:
            components[-1] = f"{components[-1]} ({'; '.join(meta_parts)})"
        if self.hint:
            components.append(f"Hint: {self.hint}")
        return " ".join(part for part in components if part)


class LayoutParseError(JsonUIError):
    """Raised when a layout document cannot be parsed."""

    code = "layout-parse"


class StyleResolutionError(JsonUIError):
    """Raised by the style catalog when a named style is missing or malformed."""

    code = "style-resolution"


class EmitterRegistryError(JsonUIError):
    """Raised when an extension emitter reference cannot be loaded."""

    code = "emitter-registry"


class ConfigError(JsonUIError):
    """Raised when the workspace configuration file is malformed."""

    code = "config"


class TemplateRenderError(JsonUIError):
    """Raised when a companion module template fails to render."""

    code = "template-render"


class DiagnosticSeverity(str, Enum):
    WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    """A non-fatal problem recorded while compiling one document.

    Diagnostics never stop compilation: the offending construct is replaced
    with a no-op default and the rest of the document still compiles.
    """

    code: str
    message: str
    location: Optional[str] = None
    severity: DiagnosticSeverity = DiagnosticSeverity.WARNING

    def format(self) -> str:
        where = f" at {self.location}" if self.location else ""
        return f"[{self.code}] {self.message}{where}"
