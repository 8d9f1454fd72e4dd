"""Load handicap system definitions from TOML files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from domain.config_base import BaseSystemConfig, load_system_configs, select_system_config
from domain.handicap.course import DEFAULT_SKILL_INDEX
from domain.handicap.skill_index import SkillIndexParameters


@dataclass(frozen=True)
class HandicapSystemConfig(BaseSystemConfig):
    """Configuration for one named handicap system."""

    parameters: SkillIndexParameters
    default_skill_index: float = DEFAULT_SKILL_INDEX

    def as_config_json(self) -> dict[str, Any]:
        return {
            "learning_rate_offset": self.parameters.learning_rate_offset,
            "dampening": self.parameters.dampening,
            "max_adjustment": self.parameters.max_adjustment,
            "full_round_holes": self.parameters.full_round_holes,
            "default_skill_index": self.default_skill_index,
        }


def load_handicap_system_configs(config_dir: Path) -> list[HandicapSystemConfig]:
    """Load and validate all handicap system TOML config files in a directory."""
    return load_system_configs(config_dir, _parse_handicap_system_config)


def load_handicap_system_config(config_dir: Path, name: str | None = None) -> HandicapSystemConfig:
    """Load one named system (or the only one present) from a config directory."""
    return select_system_config(load_handicap_system_configs(config_dir), name)


def _parse_handicap_system_config(raw: dict[str, Any], file_path: Path) -> HandicapSystemConfig:
    system_raw = raw.get("system", {})
    skill_raw = raw.get("skill_index", {})

    name = str(system_raw.get("name", "")).strip()
    if not name:
        raise ValueError(f"{file_path}: [system].name is required")

    description_value = system_raw.get("description")
    description = None if description_value is None else str(description_value)

    parameters = SkillIndexParameters(
        learning_rate_offset=float(skill_raw.get("learning_rate_offset", 3.0)),
        dampening=float(skill_raw.get("dampening", 0.5)),
        max_adjustment=float(skill_raw.get("max_adjustment", 2.0)),
        full_round_holes=int(skill_raw.get("full_round_holes", 18)),
    )
    _validate_parameters(file_path=file_path, parameters=parameters)

    default_skill_index = float(skill_raw.get("default_skill_index", DEFAULT_SKILL_INDEX))

    return HandicapSystemConfig(
        name=name,
        description=description,
        file_path=file_path,
        parameters=parameters,
        default_skill_index=default_skill_index,
    )


def _validate_parameters(*, file_path: Path, parameters: SkillIndexParameters) -> None:
    if parameters.learning_rate_offset <= 0.0:
        raise ValueError(f"{file_path}: [skill_index].learning_rate_offset must be > 0")
    if parameters.dampening <= 0.0 or parameters.dampening > 1.0:
        raise ValueError(f"{file_path}: [skill_index].dampening must be in (0, 1]")
    if parameters.max_adjustment <= 0.0:
        raise ValueError(f"{file_path}: [skill_index].max_adjustment must be > 0")
    if parameters.full_round_holes <= 0:
        raise ValueError(f"{file_path}: [skill_index].full_round_holes must be > 0")


__all__ = ["HandicapSystemConfig", "load_handicap_system_config", "load_handicap_system_configs"]
