#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the paste2dita CLI.

Configuration files hold ``PipelineOptions`` data, for example::

    # .paste2dita.toml
    pretty_print = true

    [tables]
    frame = "topbot"

    [formatter]
    indent_width = 4

The same table may live under ``[tool.paste2dita]`` in ``pyproject.toml``.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Callable, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]

import yaml

from paste2dita.constants import CONFIG_FILENAMES, PYPROJECT_TOOL_SECTION
from paste2dita.exceptions import ConfigurationError
from paste2dita.options.pipeline import PipelineOptions

logger = logging.getLogger(__name__)

PYPROJECT_FILENAME = "pyproject.toml"


def _read_toml(path: Path) -> Any:
    with open(path, "rb") as f:
        return tomllib.load(f)


def _read_json(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _read_yaml(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


_READERS: Dict[str, Callable[[Path], Any]] = {
    ".toml": _read_toml,
    ".json": _read_json,
    ".yaml": _read_yaml,
    ".yml": _read_yaml,
}


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the ``[tool.paste2dita]`` table of a pyproject.toml file.

    Returns
    -------
    dict
        The table, or an empty dict when the file has none

    Raises
    ------
    ConfigurationError
        If the file cannot be parsed or the section is not a table

    """
    try:
        data = _read_toml(pyproject_path)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(
            f"Error reading {pyproject_path}: {e}", config_path=str(pyproject_path), original_error=e
        ) from e

    section = data.get("tool", {}).get(PYPROJECT_TOOL_SECTION)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigurationError(
            f"[tool.{PYPROJECT_TOOL_SECTION}] in {pyproject_path} must be a table, got {type(section).__name__}",
            config_path=str(pyproject_path),
        )
    return section


def _dedicated_config_in(directory: Path) -> Optional[Path]:
    for filename in CONFIG_FILENAMES:
        candidate = directory / filename
        if candidate.is_file():
            return candidate
    return None


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file by walking up from ``start_dir``.

    Each directory is checked for the dedicated config files in priority
    order (``.paste2dita.toml``, ``.yaml``, ``.yml``, ``.json``), then for a
    ``pyproject.toml`` that has a ``[tool.paste2dita]`` table. Unreadable
    pyproject files are skipped.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory, defaults to the current working directory

    Returns
    -------
    Path or None
        First config file found

    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        found = _dedicated_config_in(current)
        if found is not None:
            return found

        pyproject_path = current / PYPROJECT_FILENAME
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except ConfigurationError as e:
                logger.debug(f"Skipping unreadable {pyproject_path}: {e}")

        if current.parent == current:
            return None
        current = current.parent


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Discover a configuration file in the standard locations.

    The directory tree from ``start_dir`` (default: cwd) up to the root is
    searched first; the user's home directory is the fallback.
    """
    found = find_config_in_parents(start_dir)
    if found is not None:
        return found
    return _dedicated_config_in(Path.home())


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a TOML, YAML, JSON or pyproject.toml file.

    The format is chosen from the file name and extension.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration mapping

    Raises
    ------
    ConfigurationError
        If the file is missing, unsupported, unparsable or not a mapping

    """
    path = Path(config_path)
    if not path.is_file():
        raise ConfigurationError(f"Configuration file does not exist: {path}", config_path=str(path))

    if path.name.lower() == PYPROJECT_FILENAME:
        return _load_pyproject_section(path)

    reader = _READERS.get(path.suffix.lower())
    if reader is None:
        raise ConfigurationError(
            f"Unsupported config file format: {path.suffix}. Use .toml, .yaml or .json", config_path=str(path)
        )

    try:
        data = reader(path)
    except (OSError, ValueError, yaml.YAMLError) as e:
        # TOMLDecodeError and JSONDecodeError are ValueError subclasses
        raise ConfigurationError(f"Invalid config file {path}: {e}", config_path=str(path), original_error=e) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Config file {path} must contain a mapping at the top level, got {type(data).__name__}",
            config_path=str(path),
        )
    logger.debug(f"Loaded configuration from {path}")
    return data


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep-merge two configuration mappings; ``override`` wins on conflicts.

    Examples
    --------
    >>> merge_configs({"tables": {"frame": "all"}}, {"tables": {"rowsep": "0"}})
    {'tables': {'frame': 'all', 'rowsep': '0'}}

    """
    result = dict(base)
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value
    return result


def load_config_with_priority(
    explicit_path: Optional[str] = None, env_var_path: Optional[str] = None, discover: bool = True
) -> Dict[str, Any]:
    """Load configuration with priority handling.

    Priority order (highest to lowest):

    1. Explicit config file path (``--config``)
    2. ``PASTE2DITA_CONFIG`` environment variable
    3. Auto-discovered config file (skipped when ``discover`` is False)

    Returns
    -------
    dict
        Loaded configuration (empty when nothing was found)

    """
    if explicit_path:
        return load_config_file(explicit_path)
    if env_var_path:
        return load_config_file(env_var_path)
    if discover:
        discovered = discover_config_file()
        if discovered is not None:
            return load_config_file(discovered)
    return {}


def options_from_config(config: Dict[str, Any], config_path: Optional[str] = None) -> PipelineOptions:
    """Build ``PipelineOptions`` from a configuration mapping.

    Raises
    ------
    ConfigurationError
        If the mapping holds unknown keys or invalid values

    """
    try:
        return PipelineOptions.from_mapping(config)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid configuration: {e}", config_path=config_path, original_error=e) from e


def get_config_search_paths() -> list[Path]:
    """Return representative config paths in search order, for help output."""
    cwd = Path.cwd()
    home = Path.home()
    paths = [cwd / name for name in CONFIG_FILENAMES]
    paths.append(cwd / PYPROJECT_FILENAME)
    paths.extend(home / name for name in CONFIG_FILENAMES)
    return paths


__all__ = [
    "discover_config_file",
    "find_config_in_parents",
    "get_config_search_paths",
    "load_config_file",
    "load_config_with_priority",
    "merge_configs",
    "options_from_config",
]
