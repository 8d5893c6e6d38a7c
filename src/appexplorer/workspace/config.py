import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List

try:
    import tomllib
except ImportError:
    import tomli as tomllib

from appexplorer.spec import ConfigError

log = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = [".tsx", ".jsx", ".ts", ".js", ".mjs", ".cjs", ".mts", ".cts"]


@dataclass
class AppExplorerConfig:
    scan_paths: List[str] = field(default_factory=lambda: ["src"])
    extensions: List[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    # Matched against the printed `extends` expression, not the resolved import
    component_base_classes: List[str] = field(
        default_factory=lambda: [
            "React.Component",
            "Component",
            "React.PureComponent",
            "PureComponent",
        ]
    )
    lazy_loaders: List[str] = field(default_factory=lambda: ["React.lazy", "lazy"])
    cross_reference_tag: str = "AppExplorer"
    pending_work_markers: List[str] = field(default_factory=lambda: ["TODO"])


def _coerce(name: str, value: Any, default: Any) -> Any:
    if isinstance(default, list):
        if isinstance(value, str):
            return [value]
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ConfigError(f"tool.appexplorer.{name} must be a list of strings")
        return list(value)
    if isinstance(default, str):
        if not isinstance(value, str) or not value:
            raise ConfigError(f"tool.appexplorer.{name} must be a non-empty string")
        return value
    return value


def load_config_from_path(root_path: Path) -> AppExplorerConfig:
    """
    Reads the [tool.appexplorer] table of `<root_path>/pyproject.toml`.

    A missing file or table yields the defaults; a malformed table raises
    ConfigError.
    """
    config = AppExplorerConfig()
    pyproject_path = root_path / "pyproject.toml"
    if not pyproject_path.is_file():
        return config

    try:
        with pyproject_path.open("rb") as f:
            data: Dict[str, Any] = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Could not parse {pyproject_path}: {e}") from e

    table = data.get("tool", {}).get("appexplorer")
    if table is None:
        return config
    if not isinstance(table, dict):
        raise ConfigError("tool.appexplorer must be a table")

    known = {f.name: getattr(config, f.name) for f in fields(config)}
    for key, value in table.items():
        # TOML style keys are kebab-case; accept both spellings
        name = key.replace("-", "_")
        if name not in known:
            log.warning(f"Ignoring unknown option tool.appexplorer.{key}")
            continue
        setattr(config, name, _coerce(name, value, known[name]))

    config.extensions = [
        ext if ext.startswith(".") else f".{ext}" for ext in config.extensions
    ]
    return config
