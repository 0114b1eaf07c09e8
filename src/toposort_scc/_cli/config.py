"""Configuration loading from pyproject.toml."""

import tomllib
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path


class ConfigError(Exception):
    """Error in toposort-scc configuration."""


class OutputFormat(StrEnum):
    """How the `sort` command prints its result."""

    TEXT = "text"
    JSON = "json"


@dataclass(slots=True, frozen=True)
class ToposortConfig:
    """Configuration loaded from the `[tool.toposort-scc]` table of pyproject.toml.

    All relative paths are resolved from the project root (directory containing pyproject.toml).
    """

    format: OutputFormat = OutputFormat.TEXT
    output: Path | None = None
    fail_on_cycle: bool = False
    project_root: Path | None = None


def find_pyproject_toml(start_dir: Path | None = None) -> Path | None:
    """Find pyproject.toml by walking up from start_dir.

    Args:
        start_dir: Starting directory. Defaults to current working directory.

    Returns:
        Path to pyproject.toml if found, None otherwise.

    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()

    while True:
        candidate = current / "pyproject.toml"
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            # Reached filesystem root
            return None
        current = parent


def _parse_format(value: object) -> OutputFormat:
    if not isinstance(value, str):
        msg = "Invalid [tool.toposort-scc].format: expected string"
        raise ConfigError(msg)
    try:
        return OutputFormat(value.lower())
    except ValueError:
        choices = ", ".join(f"'{f.value}'" for f in OutputFormat)
        msg = f"Invalid [tool.toposort-scc].format '{value}'. Expected one of {choices}"
        raise ConfigError(msg) from None


def load_config(pyproject_path: Path) -> ToposortConfig:
    """Load and validate [tool.toposort-scc] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed ToposortConfig

    Raises:
        ConfigError: If the configuration is invalid

    """
    project_root = pyproject_path.parent

    with pyproject_path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {pyproject_path}: {e}"
            raise ConfigError(msg) from e

    section = data.get("tool", {}).get("toposort-scc", {})

    if not section:
        return ToposortConfig(project_root=project_root)

    unknown = sorted(set(section) - {"format", "output", "fail-on-cycle"})
    if unknown:
        msg = f"Unknown [tool.toposort-scc] keys: {', '.join(unknown)}"
        raise ConfigError(msg)

    output_format = _parse_format(section["format"]) if "format" in section else OutputFormat.TEXT

    output_path: Path | None = None
    if "output" in section:
        output_value = section["output"]
        if not isinstance(output_value, str):
            msg = "Invalid [tool.toposort-scc].output: expected string path"
            raise ConfigError(msg)
        output_path = Path(output_value)
        if not output_path.is_absolute():
            output_path = project_root / output_path

    fail_on_cycle = section.get("fail-on-cycle", False)
    if not isinstance(fail_on_cycle, bool):
        msg = "Invalid [tool.toposort-scc].fail-on-cycle: expected boolean"
        raise ConfigError(msg)

    return ToposortConfig(
        format=output_format,
        output=output_path,
        fail_on_cycle=fail_on_cycle,
        project_root=project_root,
    )


def get_config() -> ToposortConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        ToposortConfig (may be empty if no pyproject.toml or no [tool.toposort-scc] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return ToposortConfig()
    return load_config(pyproject_path)
