"""Unified configuration loaded from .haru.toml, env vars, and CLI flags.

Loading order: defaults → TOML file → env vars → CLI flags.
"""

from __future__ import annotations

import calendar
import logging
import os
import tomllib
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".haru.toml"
GLOBAL_CONFIG_DIR = Path("~/.config/haru")

WEEKDAY_NAMES: dict[str, int] = {
    "monday": calendar.MONDAY,
    "tuesday": calendar.TUESDAY,
    "wednesday": calendar.WEDNESDAY,
    "thursday": calendar.THURSDAY,
    "friday": calendar.FRIDAY,
    "saturday": calendar.SATURDAY,
    "sunday": calendar.SUNDAY,
}


class StoreSectionConfig(BaseModel):
    """[store] section."""

    directory: str = "./.haru"

    @property
    def path(self) -> Path:
        return Path(self.directory).expanduser()


class CalendarSectionConfig(BaseModel):
    """[calendar] section."""

    max_entries_per_day: int = Field(default=3, ge=0)
    week_start: str = "sunday"

    @field_validator("week_start")
    @classmethod
    def _known_weekday(cls, value: str) -> str:
        name = value.strip().lower()
        if name not in WEEKDAY_NAMES:
            raise ValueError(f"week_start must be a weekday name, got {value!r}")
        return name

    @property
    def first_weekday(self) -> int:
        """``week_start`` as a ``calendar`` module constant."""
        return WEEKDAY_NAMES[self.week_start]


class EntriesSectionConfig(BaseModel):
    """[entries] section."""

    daily_limit: int = Field(default=3, ge=1)
    preview_length: int = Field(default=100, ge=1)


class HaruConfig(BaseModel):
    """Top-level configuration model."""

    store: StoreSectionConfig = Field(default_factory=StoreSectionConfig)
    calendar: CalendarSectionConfig = Field(default_factory=CalendarSectionConfig)
    entries: EntriesSectionConfig = Field(default_factory=EntriesSectionConfig)


def load_config(path: str | Path | None = None) -> HaruConfig:
    """Load configuration, then overlay ``HARU_*`` environment variables.

    Without *path*, ``./.haru.toml`` is used when present, otherwise
    ``~/.config/haru/config.toml``.  Missing or unreadable files leave
    the defaults in place.
    """
    toml_path = Path(path) if path is not None else _find_config()
    data = _load_toml(toml_path) if toml_path is not None else {}
    return _apply_env_vars(HaruConfig.model_validate(data))


def merge_cli_overrides(config: HaruConfig, **cli_kwargs: object) -> HaruConfig:
    """Overlay CLI flags that were given (not None) onto the config.

    Args:
        config: Base config.
        **cli_kwargs: CLI flag values, e.g. ``store_directory``,
            ``max_entries_per_day``, ``week_start``.

    Returns:
        Updated config with CLI overrides applied.
    """
    data = config.model_dump()

    mapping: dict[str, tuple[str, str]] = {
        "store_directory": ("store", "directory"),
        "max_entries_per_day": ("calendar", "max_entries_per_day"),
        "week_start": ("calendar", "week_start"),
        "daily_limit": ("entries", "daily_limit"),
        "preview_length": ("entries", "preview_length"),
    }

    for key, value in cli_kwargs.items():
        if value is None:
            continue
        if key in mapping:
            section, field = mapping[key]
            data[section][field] = str(value) if isinstance(value, Path) else value

    return HaruConfig.model_validate(data)


def _find_config() -> Path | None:
    for candidate in (Path(CONFIG_FILENAME), GLOBAL_CONFIG_DIR.expanduser() / "config.toml"):
        if candidate.is_file():
            logger.info("Loaded config from %s", candidate)
            return candidate
    return None


def _load_toml(path: Path) -> dict[str, object]:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        logger.warning("Config file not found: %s", path)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
    return {}


def _apply_env_vars(config: HaruConfig) -> HaruConfig:
    """Apply environment variable overrides to config."""
    data = config.model_dump()

    env_mapping: dict[str, tuple[str, str]] = {
        "HARU_STORE_DIR": ("store", "directory"),
        "HARU_WEEK_START": ("calendar", "week_start"),
    }
    for env_var, (section, field) in env_mapping.items():
        value = os.environ.get(env_var)
        if value is not None:
            data[section][field] = value

    int_mapping: dict[str, tuple[str, str]] = {
        "HARU_MAX_ENTRIES_PER_DAY": ("calendar", "max_entries_per_day"),
        "HARU_DAILY_LIMIT": ("entries", "daily_limit"),
    }
    for env_var, (section, field) in int_mapping.items():
        raw = os.environ.get(env_var)
        if raw is None:
            continue
        try:
            data[section][field] = int(raw)
        except ValueError:
            logger.warning("Ignoring non-integer %s=%r", env_var, raw)

    return HaruConfig.model_validate(data)
