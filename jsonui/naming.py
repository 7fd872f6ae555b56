"""Identifier helpers used when deriving output names from document names."""

from __future__ import annotations

import re

_CAMEL_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_LOWER_UPPER = re.compile(r"([a-z\d])([A-Z])")


def to_snake_case(value: str) -> str:
    snake = _CAMEL_BOUNDARY.sub(r"\1_\2", value)
    snake = _LOWER_UPPER.sub(r"\1_\2", snake)
    return snake.replace("-", "_").lower()


def to_pascal_case(value: str) -> str:
    """Convert ``user_profile``, ``user-profile`` or ``userProfile`` to ``UserProfile``."""
    parts = [part for part in re.split(r"[_\-\s]+", to_snake_case(value)) if part]
    return "".join(part.capitalize() for part in parts)


def capitalize_first(value: str) -> str:
    if not value:
        return value
    return value[0].upper() + value[1:]


def change_handler_name(prop: str) -> str:
    """Name of the change handler wired for a two-way bound property."""
    return f"on{capitalize_first(prop)}Change"


def component_name_for(path_or_name: str) -> str:
    """Component identifier for an include path such as ``common/header_bar``."""
    base = path_or_name.replace("\\", "/").rstrip("/").split("/")[-1]
    if base.endswith(".json"):
        base = base[: -len(".json")]
    return to_pascal_case(base)
