"""
Layered build configuration.

Values are merged from, highest precedence first: command line overrides,
`<demo>/config.local.yml`, `./config.local.yml`, `<demo>/config.yml` and the
built-in defaults. Keys are addressed with colon separated paths such as
`demo:shaderProvider:tool`.
"""

import copy
from pathlib import Path
from typing import Any

import yaml
from loguru import logger

from demoshader.pipeline.errors import InvalidConfigurationError
from demoshader.pipeline.models import Variable
from demoshader.pipeline.variables import VariableRegistry

DEFAULTS: dict[str, Any] = {
    "capture": False,
    "captureSettings": {"fps": 60, "height": 1080, "width": 1920},
    "directory": "demo",
    "minify": True,
    "demo": {
        "glslVersion": None,
        "resolution": {},
        "shaderMinifier": {"tool": "shader-minifier"},
        "shaderProvider": {"tool": "simple"},
    },
    "paths": {"build": "build"},
    "tools": {"shader-minifier": "shader_minifier"},
}


def merge_configs(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two mappings, values of `override` winning.

    None values in `override` are ignored so that unset command line options
    don't mask file values.
    """
    res = copy.deepcopy(base)
    for k, v in override.items():
        if v is None:
            continue
        if isinstance(v, dict) and isinstance(res.get(k), dict):
            res[k] = merge_configs(res[k], v)
        else:
            res[k] = copy.deepcopy(v)
    return res


def load_from_file(path: Path) -> dict[str, Any]:
    """Load a YAML config file, an absent file being an empty config."""
    if not path.exists():
        return {}

    with open(path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise InvalidConfigurationError(f"Cannot parse {path}: {e}") from e

    if not isinstance(data, dict):
        raise InvalidConfigurationError(f"{path} must contain a mapping.")

    logger.debug(f"Loaded config file: {path}")
    return data


class Config:
    """Read access to the merged configuration, plus the variables it declares.

    Attributes:
        variables: Variables declared by the configuration itself, such as
            the forced resolution constants
    """

    def __init__(self, values: dict[str, Any] | None = None):
        self._values = merge_configs(DEFAULTS, values or {})
        self.variables: list[Variable] = []

    def get(self, key: str, default: Any = None) -> Any:
        node: Any = self._values
        for part in key.split(":"):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return default if node is None else node

    def set(self, key: str, value: Any) -> None:
        parts = key.split(":")
        node = self._values
        for part in parts[:-1]:
            node = node.setdefault(part, {})
        node[parts[-1]] = value

    def set_defaults(self, key: str, values: dict[str, Any]) -> None:
        """Fill the missing entries of a section with default values."""
        current = self.get(key, {})
        self.set(key, merge_configs(values, current))

    @property
    def directory(self) -> Path:
        return Path(self.get("directory"))

    @property
    def build_directory(self) -> Path:
        return Path(self.get("paths:build"))

    def create_registry(self) -> VariableRegistry:
        """Create a fresh registry seeded with the configuration variables."""
        registry = VariableRegistry()
        for variable in self.variables:
            registry.add_variable(
                variable.kind, variable.type, variable.name, variable.value
            )
        return registry


def _resolution_value(config: Config, key: str) -> float:
    value = config.get(key, 0)
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise InvalidConfigurationError(
            f"expected a number, got {value!r}", key
        ) from e


def _add_resolution_constants(config: Config) -> None:
    section = "captureSettings" if config.get("capture") else "demo:resolution"
    width = _resolution_value(config, f"{section}:width")
    height = _resolution_value(config, f"{section}:height")
    if not config.get("capture") and not (width > 0 and height > 0):
        return

    config.set("forceResolution", True)
    registry = VariableRegistry()
    registry.add_constant("float", "resolutionWidth", str(width))
    registry.add_constant("float", "resolutionHeight", str(height))
    config.variables.extend(registry)
    logger.info(f"Forcing resolution to {width:g}x{height:g}")


def load_config(
    directory: Path | str | None = None,
    overrides: dict[str, Any] | None = None,
    working_directory: Path | str = ".",
) -> Config:
    """Build the configuration of a demo.

    Args:
        directory: Demo directory, defaults to the `directory` setting
        overrides: Command line values, None entries are ignored
        working_directory: Where the shared `config.local.yml` lives

    Returns:
        The merged configuration

    Raises:
        InvalidConfigurationError: If the demo directory is missing or a
            config file is malformed
    """
    cli_values = merge_configs({}, overrides or {})
    if directory is not None:
        cli_values["directory"] = str(directory)

    demo_directory = Path(cli_values.get("directory", DEFAULTS["directory"]))
    if not demo_directory.exists():
        raise InvalidConfigurationError(
            f"Demo directory does not exist: {demo_directory}"
        )
    if not demo_directory.is_dir():
        raise InvalidConfigurationError(
            f"Demo directory is not a directory: {demo_directory}"
        )

    values: dict[str, Any] = {}
    for path in (
        demo_directory / "config.yml",
        Path(working_directory) / "config.local.yml",
        demo_directory / "config.local.yml",
    ):
        values = merge_configs(values, load_from_file(path))
    values = merge_configs(values, cli_values)

    config = Config(values)
    _add_resolution_constants(config)
    return config
