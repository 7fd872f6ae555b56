"""Data schema entries declared by marker nodes.

A layout declares the names it may bind to with ``data`` lists::

    {"data": [{"name": "title", "class": "String", "defaultValue": "Hello"}]}

Each entry carries the raw declared class, the kind the validator reasons
about and the TypeScript type used by the companion type module.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

_MISSING = object()


class SchemaKind(str, Enum):
    """Kind of value a schema entry holds."""
    STRING = "String"
    NUMBER = "Number"
    BOOLEAN = "Boolean"
    ARRAY = "Array"
    FUNCTION = "Function"
    MODEL_REFERENCE = "ModelReference"


# =============================================================================
# TYPE TABLES
# =============================================================================

_KIND_BY_CLASS: Dict[str, SchemaKind] = {
    "string": SchemaKind.STRING,
    "color": SchemaKind.STRING,
    "image": SchemaKind.STRING,
    "date": SchemaKind.STRING,
    "int": SchemaKind.NUMBER,
    "integer": SchemaKind.NUMBER,
    "double": SchemaKind.NUMBER,
    "float": SchemaKind.NUMBER,
    "cgfloat": SchemaKind.NUMBER,
    "number": SchemaKind.NUMBER,
    "bool": SchemaKind.BOOLEAN,
    "boolean": SchemaKind.BOOLEAN,
    "array": SchemaKind.ARRAY,
}

TS_TYPE_MAPPING: Dict[str, str] = {
    "String": "string",
    "string": "string",
    "Int": "number",
    "int": "number",
    "Integer": "number",
    "integer": "number",
    "Double": "number",
    "double": "number",
    "Float": "number",
    "float": "number",
    "CGFloat": "number",
    "Number": "number",
    "number": "number",
    "Bool": "boolean",
    "bool": "boolean",
    "Boolean": "boolean",
    "boolean": "boolean",
    "Array": "any[]",
    "array": "any[]",
    "Object": "Record<string, any>",
    "object": "Record<string, any>",
    "Hash": "Record<string, any>",
    "Dictionary": "Record<string, any>",
    "Void": "void",
    "void": "void",
    "Unit": "void",
    "Color": "string",
    "color": "string",
    "Image": "string",
    "image": "string",
    "Date": "string",
}

_ARRAY_CLASS = re.compile(r"^Array\((.+)\)$")
_BRACKET_ARRAY_CLASS = re.compile(r"^\[(.+)\]$")
_DICTIONARY_CLASS = re.compile(r"^Dictionary\((.+?),\s*(.+)\)$")


@dataclass(frozen=True)
class DataSchemaEntry:
    """One declared bindable name."""
    name: str
    kind: SchemaKind
    raw_class: Optional[str] = None
    default: Any = None
    has_default: bool = False
    ts_type: str = "any"

    @property
    def is_view_model_handle(self) -> bool:
        return bool(self.raw_class) and self.raw_class.endswith("ViewModel")

    @property
    def nullable(self) -> bool:
        return not self.has_default


def _platform_value(value: Any) -> Any:
    # Declarations may carry per-platform values: {"react": "...", "swift": "..."}
    if isinstance(value, Mapping) and ("react" in value or "web" in value):
        return value.get("react", value.get("web"))
    return value


def _find_arrow(text: str) -> int:
    depth = 0
    for index, char in enumerate(text):
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        elif char == "-" and text[index + 1:index + 2] == ">" and depth == 0:
            return index
    return -1


def _split_params(text: str) -> List[str]:
    params: List[str] = []
    depth = 0
    current = ""
    for char in text:
        if char in "(<[":
            depth += 1
        elif char in ")>]":
            depth -= 1
        if char == "," and depth == 0:
            params.append(current.strip())
            current = ""
            continue
        current += char
    if current.strip():
        params.append(current.strip())
    return params


def _single_type(text: str) -> str:
    optional = text.endswith("?")
    base = text[:-1] if optional else text
    result = TS_TYPE_MAPPING.get(base, base)
    return f"{result} | undefined" if optional else result


def function_type(raw: str) -> Optional[str]:
    """Convert ``(Int) -> Void`` style declarations, or return ``None``."""
    working = raw.strip()
    if working.endswith(")?") and working.startswith("("):
        working = working[1:-2]
    elif working.startswith("(") and working.endswith(")") and _find_arrow(working[1:-1]) >= 0:
        working = working[1:-1]
    arrow = _find_arrow(working)
    if arrow < 0:
        return None
    params_part = working[:arrow].strip()
    return_part = working[arrow + 2:].strip()
    if not (params_part.startswith("(") and params_part.endswith(")")):
        return None
    params = _split_params(params_part[1:-1].strip())
    rendered = ", ".join(f"arg{i}: {_single_type(p)}" for i, p in enumerate(params))
    return f"(({rendered}) => {_single_type(return_part)}) | undefined"


def to_typescript_type(raw_class: Optional[str]) -> str:
    if raw_class is None or not str(raw_class).strip():
        return "any"
    text = str(raw_class).strip()
    optional = text.endswith("?")
    base = text[:-1] if optional else text

    match = _ARRAY_CLASS.match(base) or _BRACKET_ARRAY_CLASS.match(base)
    if match:
        result = f"{to_typescript_type(match.group(1).strip())}[]"
        return f"{result} | undefined" if optional else result

    match = _DICTIONARY_CLASS.match(base)
    if match:
        key = to_typescript_type(match.group(1).strip())
        value = to_typescript_type(match.group(2).strip())
        result = f"Record<{key}, {value}>"
        return f"{result} | undefined" if optional else result

    func = function_type(text)
    if func:
        return func

    result = TS_TYPE_MAPPING.get(base, base)
    return f"{result} | undefined" if optional else result


def kind_for_class(raw_class: Optional[str]) -> SchemaKind:
    if raw_class is None:
        return SchemaKind.MODEL_REFERENCE
    text = str(raw_class).strip().rstrip("?")
    if function_type(text) is not None:
        return SchemaKind.FUNCTION
    if _ARRAY_CLASS.match(text) or _BRACKET_ARRAY_CLASS.match(text):
        return SchemaKind.ARRAY
    return _KIND_BY_CLASS.get(text.lower(), SchemaKind.MODEL_REFERENCE)


def entry_from_declaration(declaration: Mapping[str, Any]) -> Optional[DataSchemaEntry]:
    """Build an entry from one ``data`` list item; items without a name are ignored."""
    name = declaration.get("name")
    if not isinstance(name, str) or not name:
        return None
    raw_class = _platform_value(declaration.get("class"))
    raw_class = str(raw_class) if raw_class is not None else None
    default = _platform_value(declaration.get("defaultValue", _MISSING))
    has_default = default is not _MISSING and default is not None
    return DataSchemaEntry(
        name=name,
        kind=kind_for_class(raw_class),
        raw_class=raw_class,
        default=default if has_default else None,
        has_default=has_default,
        ts_type=to_typescript_type(raw_class),
    )


def format_default(entry: DataSchemaEntry) -> str:
    """JavaScript literal for the entry's default value."""
    if not entry.has_default:
        return "undefined"
    value = entry.default
    if entry.ts_type == "string":
        if isinstance(value, str) and value in ("''", '""'):
            return '""'
        if isinstance(value, str) and value[:1] in ("'", '"'):
            return value
        return json.dumps(str(value))
    if entry.ts_type == "number":
        return str(value)
    if entry.ts_type == "boolean":
        return str(value).lower()
    if isinstance(value, list):
        return json.dumps(value)
    if isinstance(value, dict):
        return json.dumps(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return json.dumps(value)
    return str(value)
