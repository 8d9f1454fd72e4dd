"""Named-system TOML loading shared by handicap system configs."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, TypeVar
import tomllib


@dataclass(frozen=True)
class BaseSystemConfig:
    """Name, description and source file of one configured system."""

    name: str
    description: str | None
    file_path: Path


T = TypeVar("T", bound=BaseSystemConfig)


def _config_files(config_dir: Path) -> list[Path]:
    if not config_dir.is_dir():
        if config_dir.exists():
            raise NotADirectoryError(f"Config path is not a directory: {config_dir}")
        raise FileNotFoundError(f"Config directory not found: {config_dir}")

    files = sorted(config_dir.glob("*.toml"))
    if not files:
        raise ValueError(f"No .toml config files found in: {config_dir}")
    return files


def load_system_configs(config_dir: Path, parser: Callable[[dict[str, Any], Path], T]) -> list[T]:
    """Parse every ``*.toml`` file in ``config_dir``; system names must be unique."""
    systems: dict[str, T] = {}
    for file_path in _config_files(config_dir):
        system = parser(tomllib.loads(file_path.read_text(encoding="utf-8")), file_path)
        if system.name in systems:
            raise ValueError(
                f"Duplicate handicap system names found in {config_dir}: "
                f"{system.name!r} in {systems[system.name].file_path.name} and {file_path.name}"
            )
        systems[system.name] = system
    return list(systems.values())


def select_system_config(systems: list[T], name: str | None) -> T:
    """Pick one config by name, or the only one when ``name`` is omitted."""
    available = ", ".join(system.name for system in systems)
    if name is None:
        if len(systems) != 1:
            raise ValueError(f"Multiple systems configured; pick one of: {available}")
        return systems[0]

    for system in systems:
        if system.name == name:
            return system
    raise KeyError(f"No system named {name!r}. Available: {available}")


__all__ = ["BaseSystemConfig", "load_system_configs", "select_system_config"]
