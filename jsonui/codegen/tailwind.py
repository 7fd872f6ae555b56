"""
Attribute-to-class mapping layer for jsonui.

Each function maps one declarative style dimension (size, spacing, color,
radius, opacity, shadow, z-order, flex-grow, font, alignment) to Tailwind
utility classes.

Numeric dimensions share one rule: an exact table hit gives the canonical
class; a value inside the table's range snaps to the nearest key (ties go
to the smaller key); a value outside the range becomes an arbitrary-value
class carrying the literal, e.g. ``p-[80px]``.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union
from enum import Enum

Number = Union[int, float]


# =============================================================================
# TYPE DEFINITIONS
# =============================================================================

class Orientation(str, Enum):
    """Main axis of a flex container"""
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"

    @classmethod
    def parse(cls, value: Any) -> "Orientation":
        if isinstance(value, str) and value.lower() == "horizontal":
            return cls.HORIZONTAL
        return cls.VERTICAL


# =============================================================================
# SCALE TABLES
# =============================================================================

SPACING_SCALE: Dict[Number, str] = {
    0: "0", 1: "px", 2: "0.5", 4: "1", 6: "1.5",
    8: "2", 10: "2.5", 12: "3", 14: "3.5", 16: "4",
    20: "5", 24: "6", 28: "7", 32: "8", 36: "9",
    40: "10", 44: "11", 48: "12", 56: "14", 64: "16",
}

FONT_SIZE_CLASSES: Dict[Number, str] = {
    12: "text-xs", 14: "text-sm", 16: "text-base",
    18: "text-lg", 20: "text-xl", 24: "text-2xl",
    30: "text-3xl", 36: "text-4xl", 48: "text-5xl",
    60: "text-6xl",
}

RADIUS_CLASSES: Dict[Number, str] = {
    0: "rounded-none", 2: "rounded-sm", 4: "rounded",
    6: "rounded-md", 8: "rounded-lg", 12: "rounded-xl",
    16: "rounded-2xl", 24: "rounded-3xl",
}

OPACITY_CLASSES: Dict[Number, str] = {
    0: "opacity-0", 0.1: "opacity-10", 0.2: "opacity-20",
    0.25: "opacity-25", 0.3: "opacity-30", 0.4: "opacity-40",
    0.5: "opacity-50", 0.6: "opacity-60", 0.7: "opacity-70",
    0.75: "opacity-75", 0.8: "opacity-80", 0.9: "opacity-90",
    1: "opacity-100",
}

Z_INDEX_CLASSES: Dict[Number, str] = {
    0: "z-0", 10: "z-10", 20: "z-20", 30: "z-30", 40: "z-40", 50: "z-50",
}

BORDER_WIDTH_CLASSES: Dict[Number, str] = {
    0: "border-0", 1: "border", 2: "border-2", 4: "border-4", 8: "border-8",
}

SHADOW_CLASSES: Dict[str, str] = {
    "sm": "shadow-sm",
    "md": "shadow-md",
    "lg": "shadow-lg",
    "xl": "shadow-xl",
    "2xl": "shadow-2xl",
}

FONT_WEIGHT_CLASSES: Dict[str, str] = {
    "thin": "font-thin",
    "extralight": "font-extralight",
    "light": "font-light",
    "normal": "font-normal",
    "regular": "font-normal",
    "medium": "font-medium",
    "semibold": "font-semibold",
    "bold": "font-bold",
    "extrabold": "font-extrabold",
    "heavy": "font-extrabold",
    "black": "font-black",
}

NUMERIC_FONT_WEIGHTS: Dict[Number, str] = {
    100: "thin", 200: "extralight", 300: "light", 400: "normal", 500: "medium",
    600: "semibold", 700: "bold", 800: "extrabold", 900: "black",
}

TEXT_ALIGN_CLASSES: Dict[str, str] = {
    "left": "text-left",
    "start": "text-left",
    "center": "text-center",
    "right": "text-right",
    "end": "text-right",
}

# (all sides, block axis, inline axis, top, right, bottom, left)
BOX_PREFIXES: Dict[str, Tuple[str, str, str, str, str, str, str]] = {
    "padding": ("p", "py", "px", "pt", "pr", "pb", "pl"),
    "margin": ("m", "my", "mx", "mt", "mr", "mb", "ml"),
}

_HORIZONTAL_GRAVITY = {"left": "start", "start": "start", "right": "end", "end": "end",
                       "centerHorizontal": "center"}
_VERTICAL_GRAVITY = {"top": "start", "bottom": "end", "centerVertical": "center"}

DIRECTIONS: Dict[str, str] = {
    "rtl": "rtl",
    "righttoleft": "rtl",
    "ltr": "ltr",
    "lefttoright": "ltr",
}


# =============================================================================
# NUMERIC CORE
# =============================================================================

# Decimal places kept when comparing distances to table keys.
DISTANCE_PRECISION = 9


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def format_number(value: Number) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def nearest_key(value: Number, table: Mapping[Number, str]) -> Optional[Number]:
    """Nearest table key within the table's range, or ``None`` outside it.

    Equidistant values resolve to the smaller key. Distances are rounded
    so float midpoints such as 0.55 tie exactly.
    """
    keys = sorted(table)
    if not keys or value < keys[0] or value > keys[-1]:
        return None
    best = keys[0]
    best_distance = round(abs(best - value), DISTANCE_PRECISION)
    for key in keys[1:]:
        distance = round(abs(key - value), DISTANCE_PRECISION)
        if distance < best_distance:
            best, best_distance = key, distance
    return best


def snap(value: Number, table: Mapping[Number, str], arbitrary: str) -> str:
    """Canonical class for ``value`` or the arbitrary fallback template.

    ``arbitrary`` is formatted with the literal value, e.g. ``"text-[{}px]"``.
    """
    if value in table:
        return table[value]
    key = nearest_key(value, table)
    if key is None:
        return arbitrary.format(format_number(value))
    return table[key]


def spacing_token(prefix: str, value: Any) -> str:
    if not is_number(value):
        return ""
    if value in SPACING_SCALE:
        return f"{prefix}-{SPACING_SCALE[value]}"
    key = nearest_key(value, SPACING_SCALE)
    if key is None:
        return f"{prefix}-[{format_number(value)}px]"
    return f"{prefix}-{SPACING_SCALE[key]}"


# =============================================================================
# BOX MODEL
# =============================================================================

def box_length_valid(value: Any) -> bool:
    """Box arrays must have 1, 2 or 4 entries."""
    return not isinstance(value, (list, tuple)) or len(value) in (1, 2, 4)


def map_box(kind: str, value: Any) -> str:
    """Padding or margin from a number or a 1/2/4 element array."""
    all_p, block_p, inline_p, top_p, right_p, bottom_p, left_p = BOX_PREFIXES[kind]
    if is_number(value):
        return spacing_token(all_p, value)
    if not isinstance(value, (list, tuple)):
        return ""
    if len(value) == 1:
        return spacing_token(all_p, value[0])
    if len(value) == 2:
        return join_classes(spacing_token(block_p, value[0]), spacing_token(inline_p, value[1]))
    if len(value) == 4:
        return join_classes(
            spacing_token(top_p, value[0]),
            spacing_token(right_p, value[1]),
            spacing_token(bottom_p, value[2]),
            spacing_token(left_p, value[3]),
        )
    return ""


def map_padding(value: Any) -> str:
    return map_box("padding", value)


def map_margin(value: Any) -> str:
    return map_box("margin", value)


def map_edges(kind: str, top: Any = None, right: Any = None, bottom: Any = None, left: Any = None) -> str:
    """Individual edge values such as ``topPadding`` / ``leftMargin``."""
    _, _, _, top_p, right_p, bottom_p, left_p = BOX_PREFIXES[kind]
    return join_classes(
        spacing_token(top_p, top),
        spacing_token(right_p, right),
        spacing_token(bottom_p, bottom),
        spacing_token(left_p, left),
    )


def map_gap(value: Any) -> str:
    return spacing_token("gap", value)


# =============================================================================
# SIZE
# =============================================================================

def _map_size(prefix: str, value: Any) -> str:
    if value == "matchParent":
        return f"{prefix}-full"
    if value == "wrapContent":
        return f"{prefix}-auto"
    if is_number(value):
        return f"{prefix}-[{format_number(value)}px]"
    if isinstance(value, str) and value.endswith("%") and value[:-1].replace(".", "", 1).isdigit():
        return f"{prefix}-[{value}]"
    return ""


def map_width(value: Any) -> str:
    return _map_size("w", value)


def map_height(value: Any) -> str:
    return _map_size("h", value)


def map_min_width(value: Any) -> str:
    return _map_size("min-w", value)


def map_max_width(value: Any) -> str:
    return _map_size("max-w", value)


def map_min_height(value: Any) -> str:
    return _map_size("min-h", value)


def map_max_height(value: Any) -> str:
    return _map_size("max-h", value)


# =============================================================================
# COLOR / SHAPE / DEPTH
# =============================================================================

def map_color(color: Any, prefix: str = "bg") -> str:
    if not isinstance(color, str) or not color:
        return ""
    if color.startswith("#"):
        return f"{prefix}-[{color}]"
    return f"{prefix}-{color}"


def map_corner_radius(radius: Any) -> str:
    if not is_number(radius):
        return ""
    return snap(radius, RADIUS_CLASSES, "rounded-[{}px]")


def map_opacity(opacity: Any) -> str:
    if not is_number(opacity):
        return ""
    return snap(opacity, OPACITY_CLASSES, "opacity-[{}]")


def map_z_index(z_index: Any) -> str:
    if not is_number(z_index):
        return ""
    return snap(z_index, Z_INDEX_CLASSES, "z-[{}]")


def map_border(width: Any = None, color: Any = None) -> str:
    tokens = []
    if is_number(width):
        tokens.append(snap(width, BORDER_WIDTH_CLASSES, "border-[{}px]"))
    if color is not None:
        tokens.append(map_color(color, "border"))
    return join_classes(*tokens)


def map_shadow(shadow: Any) -> str:
    if shadow is True:
        return "shadow"
    if isinstance(shadow, Mapping):
        radius = format_number(shadow.get("radius", 5))
        offset_x = format_number(shadow.get("offsetX", 0))
        offset_y = format_number(shadow.get("offsetY", 2))
        color = str(shadow.get("color", "rgba(0,0,0,0.1)")).replace(" ", "")
        return f"[box-shadow:{offset_x}px_{offset_y}px_{radius}px_{color}]"
    if isinstance(shadow, str):
        return SHADOW_CLASSES.get(shadow, "shadow")
    return ""


def map_flex_grow(weight: Any) -> str:
    if not is_number(weight):
        return ""
    if weight <= 0:
        return "grow-0"
    if weight == 1:
        return "grow"
    return f"grow-[{format_number(weight)}]"


def map_overflow(clip_to_bounds: Any) -> str:
    return "overflow-hidden" if clip_to_bounds is True else ""


# =============================================================================
# TYPOGRAPHY
# =============================================================================

def map_font_size(size: Any) -> str:
    if not is_number(size):
        return ""
    return snap(size, FONT_SIZE_CLASSES, "text-[{}px]")


def map_font_weight(weight: Any) -> str:
    if is_number(weight):
        name = snap(weight, NUMERIC_FONT_WEIGHTS, "{}")
        return FONT_WEIGHT_CLASSES.get(name, f"font-[{format_number(weight)}]")
    if isinstance(weight, str):
        return FONT_WEIGHT_CLASSES.get(weight.lower(), "")
    return ""


def map_font(font: Any) -> str:
    """``font: "bold"`` shorthand."""
    if isinstance(font, str):
        return FONT_WEIGHT_CLASSES.get(font.lower(), "")
    return ""


def map_text_align(align: Any) -> str:
    if not isinstance(align, str):
        return ""
    return TEXT_ALIGN_CLASSES.get(align.lower(), "")


# =============================================================================
# LAYOUT / ALIGNMENT
# =============================================================================

def map_orientation(orientation: Any) -> str:
    if not isinstance(orientation, str):
        return ""
    if orientation.lower() == "horizontal":
        return "flex flex-row"
    if orientation.lower() == "vertical":
        return "flex flex-col"
    return ""


def _gravity_tokens(gravity: Any) -> List[str]:
    if isinstance(gravity, (list, tuple)):
        return [str(token) for token in gravity]
    if isinstance(gravity, str):
        return [token for token in gravity.replace(",", "|").split("|") if token]
    return []


def map_gravity(gravity: Any, orientation: Orientation = Orientation.VERTICAL) -> List[str]:
    """Child alignment classes for a container.

    In a column, horizontal gravity is the cross axis (``items-*``) and
    vertical gravity the main axis (``justify-*``); a row swaps them.
    """
    horizontal: Optional[str] = None
    vertical: Optional[str] = None
    for token in _gravity_tokens(gravity):
        token = token.strip()
        if token == "center":
            horizontal = horizontal or "center"
            vertical = vertical or "center"
        elif token in _HORIZONTAL_GRAVITY:
            horizontal = _HORIZONTAL_GRAVITY[token]
        elif token in _VERTICAL_GRAVITY:
            vertical = _VERTICAL_GRAVITY[token]

    if orientation is Orientation.HORIZONTAL:
        cross, main = vertical, horizontal
    else:
        cross, main = horizontal, vertical
    classes = []
    if cross:
        classes.append(f"items-{cross}")
    if main:
        classes.append(f"justify-{main}")
    return classes


def map_self_alignment(attributes: Mapping[str, Any], parent: Orientation = Orientation.VERTICAL) -> str:
    """Alignment of a node inside its parent, on the parent's cross axis only."""
    if parent is Orientation.HORIZONTAL:
        flags = (("alignTop", "start"), ("alignBottom", "end"), ("centerVertical", "center"))
    else:
        flags = (("alignLeft", "start"), ("alignRight", "end"), ("centerHorizontal", "center"))
    for attribute, position in flags:
        if attributes.get(attribute) is True:
            return f"self-{position}"
    if attributes.get("centerInParent") is True:
        return "self-center"
    return ""


def map_direction(direction: Any) -> str:
    """Text direction as an arbitrary ``direction`` property class."""
    if not isinstance(direction, str):
        return ""
    value = DIRECTIONS.get(direction.lower())
    return f"[direction:{value}]" if value else ""


# =============================================================================
# JOINING
# =============================================================================

def join_classes(*tokens: Optional[str]) -> str:
    """Join class tokens: split on whitespace, drop empties, keep first occurrence."""
    seen = set()
    ordered: List[str] = []
    for token in tokens:
        if not token:
            continue
        for part in token.split():
            if part not in seen:
                seen.add(part)
                ordered.append(part)
    return " ".join(ordered)


def join_class_list(tokens: Sequence[Optional[str]]) -> str:
    return join_classes(*tokens)
