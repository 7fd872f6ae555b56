"""Workspace configuration for the jsonui compiler."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from .errors import ConfigError

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - fallback for older interpreters
    tomllib = None  # type: ignore

logger = logging.getLogger(__name__)

CONFIG_FILE_NAMES = ("jsonui.config.json", "jsonui.toml")

_PATH_FIELDS = (
    "layouts_directory",
    "styles_directory",
    "components_directory",
    "data_directory",
    "hooks_directory",
)
_BOOL_FIELDS = ("typescript", "generate_data_models", "generate_hooks")


@dataclass
class CompilerConfig:
    """Paths and flags for one workspace; relative paths resolve against ``root``."""

    root: Path = field(default_factory=Path.cwd)
    layouts_directory: Path = Path("src/Layouts")
    styles_directory: Path = Path("src/Styles")
    components_directory: Path = Path("src/generated/components")
    data_directory: Path = Path("src/generated/data")
    hooks_directory: Path = Path("src/generated/hooks")
    typescript: bool = True
    generate_data_models: bool = True
    generate_hooks: bool = True
    defaults: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    extensions: Dict[str, str] = field(default_factory=dict)
    source: Optional[Path] = None

    def resolve(self, path: Path) -> Path:
        return path if path.is_absolute() else (self.root / path)

    @property
    def layouts_path(self) -> Path:
        return self.resolve(self.layouts_directory)

    @property
    def components_path(self) -> Path:
        return self.resolve(self.components_directory)

    @property
    def data_path(self) -> Path:
        return self.resolve(self.data_directory)

    @property
    def hooks_path(self) -> Path:
        return self.resolve(self.hooks_directory)

    @property
    def component_extension(self) -> str:
        return ".tsx" if self.typescript else ".jsx"

    @property
    def module_extension(self) -> str:
        return ".ts" if self.typescript else ".js"

    def style_search_paths(self) -> List[Path]:
        """Configured styles directory first, then the conventional fallbacks."""
        layouts = self.layouts_path
        return [
            self.resolve(self.styles_directory),
            layouts / "Styles",
            layouts / "styles",
            self.resolve(Path("styles")),
        ]


def _read_json_config(path: Path) -> Dict[str, Any]:
    content = path.read_text(encoding="utf-8")
    return json.loads(content)


def _read_toml_config(path: Path) -> Dict[str, Any]:
    if tomllib is None:
        raise ConfigError(
            "TOML parsing requires Python 3.11 or later.",
            path=str(path),
            hint="Use jsonui.config.json instead",
        )
    with path.open("rb") as handle:
        return tomllib.load(handle)


def locate_config_file(root: Path, explicit: Optional[Path] = None) -> Optional[Path]:
    if explicit is not None:
        if not explicit.exists():
            raise ConfigError(f"Configuration file not found: {explicit}", path=str(explicit))
        return explicit
    for candidate in CONFIG_FILE_NAMES:
        path = root / candidate
        if path.exists():
            return path
    return None


def _parse_mapping(data: Mapping[str, Any], key: str, path: Path) -> Dict[str, Any]:
    value = data.get(key) or {}
    if not isinstance(value, Mapping):
        raise ConfigError(f"'{key}' must be a mapping", path=str(path), code="config-invalid")
    return dict(value)


def config_from_mapping(data: Mapping[str, Any], root: Path, source: Optional[Path] = None) -> CompilerConfig:
    where = source or root
    config = CompilerConfig(root=root, source=source)
    for name in _PATH_FIELDS:
        value = data.get(name)
        if value is None:
            continue
        if not isinstance(value, str) or not value:
            raise ConfigError(f"'{name}' must be a non-empty path string", path=str(where), code="config-invalid")
        setattr(config, name, Path(value))
    for name in _BOOL_FIELDS:
        value = data.get(name)
        if value is None:
            continue
        if not isinstance(value, bool):
            raise ConfigError(f"'{name}' must be true or false", path=str(where), code="config-invalid")
        setattr(config, name, value)

    defaults = _parse_mapping(data, "defaults", where)
    for type_tag, attributes in defaults.items():
        if not isinstance(attributes, Mapping):
            raise ConfigError(
                f"defaults for '{type_tag}' must be a mapping of attributes",
                path=str(where),
                code="config-invalid",
            )
    config.defaults = {str(key): dict(value) for key, value in defaults.items()}
    config.extensions = {str(key): str(value) for key, value in _parse_mapping(data, "extensions", where).items()}
    return config


def load_config(root: Path, explicit: Optional[Path] = None) -> CompilerConfig:
    """Load ``jsonui.config.json`` / ``jsonui.toml`` from ``root``, or defaults."""
    root = root.resolve()
    config_path = locate_config_file(root, explicit)
    if config_path is None:
        logger.debug("No configuration file in %s; using defaults", root)
        return CompilerConfig(root=root)

    try:
        if config_path.suffix == ".toml":
            data = _read_toml_config(config_path)
        else:
            data = _read_json_config(config_path)
    except ConfigError:
        raise
    except (OSError, ValueError) as exc:
        # tomllib.TOMLDecodeError and json.JSONDecodeError are both ValueErrors.
        raise ConfigError(
            f"Failed to read configuration: {exc}",
            path=str(config_path),
            code="config-malformed",
        ) from exc

    if not isinstance(data, Mapping):
        raise ConfigError("Configuration root must be an object", path=str(config_path), code="config-malformed")
    logger.debug("Loaded configuration from %s", config_path)
    return config_from_mapping(data, root, config_path)
