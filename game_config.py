"""
game_config.py

Typed configuration loading and validation for Grid Recall.

Design goals
- Load at most one UTF-8 JSON config file
- Validate with pydantic (defaults included, so a missing file is fine)
- Support environment variable overrides
- No other I/O beyond reading the config file (no directory creation)

Config file location
- If GRID_RECALL_CONFIG_PATH is set, that file is used (and must exist).
- Otherwise these paths are searched in order and the first one that exists is used:
  1) ./grid_recall_config.json (current working directory)
  2) <user config dir>/GridRecall/grid_recall_config.json
- If none exists, every setting keeps its default.

Example config file (grid_recall_config.json)
{
  "board": {
    "grid_size": 5
  },
  "levels": {
    "max_level": 7,
    "flash_base_ms": 3000,
    "flash_step_ms": 400,
    "flash_floor_ms": 500,
    "recall_budget_short_seconds": 20,
    "recall_budget_long_seconds": 30,
    "long_budget_from_level": 6
  },
  "session": {
    "seed": null
  },
  "window": {
    "fullscreen": false
  },
  "logging": {
    "level": "INFO",
    "log_to_file": false
  }
}
"""

from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

import paths
from level_rules import LevelRules


class ConfigError(ValueError):
    pass


class BoardConfig(BaseModel):
    grid_size: int = Field(default=5, ge=1, le=12, description="Cells per side of the square grid.")


class LevelConfig(BaseModel):
    max_level: int = Field(default=7, ge=1, description="Last level. Finishing it starts over at level 1.")
    flash_base_ms: int = Field(default=3000, ge=1, description="Flash duration at level 1.")
    flash_step_ms: int = Field(default=400, ge=0, description="Flash duration reduction per level.")
    flash_floor_ms: int = Field(default=500, ge=1, description="Shortest flash duration.")
    recall_budget_short_seconds: int = Field(default=20, ge=1, description="Recall time below long_budget_from_level.")
    recall_budget_long_seconds: int = Field(default=30, ge=1, description="Recall time from long_budget_from_level on.")
    long_budget_from_level: int = Field(default=6, ge=1, description="First level that gets the long recall budget.")
    success_delay_ms: int = Field(default=200, ge=0, description="Pause after the last correct click.")
    failure_delay_ms: int = Field(default=100, ge=0, description="Pause after a wrong click.")

    def to_rules(self) -> LevelRules:
        return LevelRules(
            max_level=self.max_level,
            flash_base_ms=self.flash_base_ms,
            flash_step_ms=self.flash_step_ms,
            flash_floor_ms=self.flash_floor_ms,
            recall_budget_short_seconds=self.recall_budget_short_seconds,
            recall_budget_long_seconds=self.recall_budget_long_seconds,
            long_budget_from_level=self.long_budget_from_level,
            success_delay_ms=self.success_delay_ms,
            failure_delay_ms=self.failure_delay_ms,
        )


class SessionConfig(BaseModel):
    seed: Optional[int] = Field(default=None, description="Random seed for reproducible sessions.")


class WindowConfig(BaseModel):
    fullscreen: bool = Field(default=False, description="Start in fullscreen.")
    width: int = Field(default=720, ge=320, description="Initial window width in pixels.")
    height: int = Field(default=820, ge=320, description="Initial window height in pixels.")


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO", description="DEBUG, INFO, WARNING, ERROR or CRITICAL")
    log_to_file: bool = Field(default=False, description="Also write logs under the user log dir.")

    @field_validator("level")
    @classmethod
    def validate_level(cls, value: str) -> str:
        normalized = (value or "").strip().upper()
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if normalized not in allowed:
            raise ValueError("level must be one of: DEBUG, INFO, WARNING, ERROR, CRITICAL")
        return normalized


class AppConfig(BaseModel):
    board: BoardConfig = Field(default_factory=BoardConfig)
    levels: LevelConfig = Field(default_factory=LevelConfig)
    session: SessionConfig = Field(default_factory=SessionConfig)
    window: WindowConfig = Field(default_factory=WindowConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @model_validator(mode="after")
    def check_grid_holds_longest_sequence(self) -> "AppConfig":
        cell_count = self.board.grid_size * self.board.grid_size
        if cell_count < self.levels.max_level:
            raise ValueError(
                f"grid_size {self.board.grid_size} has {cell_count} cells, "
                f"fewer than max_level {self.levels.max_level}"
            )
        return self


def _resolve_config_path() -> Optional[Path]:
    explicit_path_text = os.environ.get("GRID_RECALL_CONFIG_PATH", "").strip()
    if explicit_path_text:
        return Path(explicit_path_text)

    for candidate_path in paths.config_file_candidates():
        if candidate_path.exists():
            return candidate_path

    return None


def _read_json_file_utf8(config_path: Path) -> Dict[str, Any]:
    try:
        raw_text = config_path.read_text(encoding="utf-8")
    except OSError as exception:
        raise ConfigError(f"Failed to read config file: {config_path}. Error: {exception}") from exception

    try:
        parsed = json.loads(raw_text)
    except json.JSONDecodeError as exception:
        raise ConfigError(f"Config file is not valid JSON: {config_path}. Error: {exception}") from exception

    if not isinstance(parsed, dict):
        raise ConfigError(f"Config file root must be a JSON object: {config_path}")

    return parsed


_TRUTHY_TEXT = {"1", "true", "yes", "on"}
_FALSY_TEXT = {"0", "false", "no", "off"}


def _parse_env_int(value_text: str) -> Optional[int]:
    try:
        return int(value_text)
    except ValueError:
        return None


def _parse_env_bool(value_text: str) -> Optional[bool]:
    lowered = value_text.lower()
    if lowered in _TRUTHY_TEXT:
        return True
    if lowered in _FALSY_TEXT:
        return False
    return None


# (environment variable, config section, key, parser). A parser returning None skips the override.
_ENVIRONMENT_OVERRIDES: Tuple[Tuple[str, str, str, Callable[[str], Any]], ...] = (
    ("GRID_RECALL_GRID_SIZE", "board", "grid_size", _parse_env_int),
    ("GRID_RECALL_MAX_LEVEL", "levels", "max_level", _parse_env_int),
    ("GRID_RECALL_SEED", "session", "seed", _parse_env_int),
    ("GRID_RECALL_FULLSCREEN", "window", "fullscreen", _parse_env_bool),
    ("GRID_RECALL_LOG_LEVEL", "logging", "level", str),
    ("GRID_RECALL_LOG_TO_FILE", "logging", "log_to_file", _parse_env_bool),
)


def _apply_environment_overrides(config_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Layer GRID_RECALL_* variables over the file values. Empty or unparseable values are ignored."""
    updated_config = dict(config_dict)

    for env_name, section_name, key_name, parse_value in _ENVIRONMENT_OVERRIDES:
        value_text = os.environ.get(env_name, "").strip()
        if not value_text:
            continue
        parsed_value = parse_value(value_text)
        if parsed_value is None:
            continue

        section = updated_config.get(section_name)
        section = dict(section) if isinstance(section, dict) else {}
        section[key_name] = parsed_value
        updated_config[section_name] = section

    return updated_config


def load_config(config_path: Optional[Path] = None) -> Tuple[AppConfig, Optional[Path]]:
    resolved_path = config_path if config_path is not None else _resolve_config_path()
    json_dict: Dict[str, Any] = {}
    if resolved_path is not None:
        json_dict = _read_json_file_utf8(resolved_path)
    json_dict = _apply_environment_overrides(json_dict)

    try:
        config = AppConfig.model_validate(json_dict)
    except ValidationError as exception:
        source_text = str(resolved_path) if resolved_path is not None else "defaults"
        raise ConfigError(f"Config validation failed for {source_text}:\n{exception}") from exception

    return config, resolved_path


@lru_cache(maxsize=1)
def get_config() -> Tuple[AppConfig, Optional[Path]]:
    return load_config()


def to_json(config: AppConfig) -> str:
    return json.dumps(config.model_dump(), ensure_ascii=False, indent=2)


def main() -> int:
    try:
        config, resolved_path = load_config()
    except ConfigError as exception:
        error_payload = {"ok": False, "error": str(exception)}
        print(json.dumps(error_payload, ensure_ascii=False, indent=2))
        return 2

    output_payload = {
        "ok": True,
        "config_path": str(resolved_path) if resolved_path is not None else None,
        "config": json.loads(to_json(config)),
    }
    print(json.dumps(output_payload, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
