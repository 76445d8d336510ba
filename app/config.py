from __future__ import annotations

import os
from pathlib import Path
from typing import ClassVar

from pydantic import BaseModel, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources import PydanticBaseSettingsSource, YamlConfigSettingsSource

from domain.models import Constraint

DEFAULT_CONFIG_PATH = Path("config/canvas/app.yaml")

LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class LayoutSettings(BaseModel):
    scene_dir: Path = Path("examples/scenes")
    report_dir: Path = Path("data/reports")
    default_width: str = "unspecified"
    default_height: str = "unspecified"
    log_level: str = "INFO"

    @field_validator("default_width", "default_height", mode="before")
    @classmethod
    def normalize_constraint(cls, value: object) -> str:
        raw = str(value).strip() if value is not None else ""
        if not raw:
            return "unspecified"
        return str(Constraint.parse(raw))

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> str:
        level = str(value or "INFO").strip().upper()
        if level not in LOG_LEVELS:
            msg = f"layout.log_level must be one of {sorted(LOG_LEVELS)}"
            raise ValueError(msg)
        return level

    def width_constraint(self) -> Constraint:
        return Constraint.parse(self.default_width)

    def height_constraint(self) -> Constraint:
        return Constraint.parse(self.default_height)


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="CANVAS_", env_nested_delimiter="__")

    layout: LayoutSettings = LayoutSettings()

    _yaml_path: ClassVar[Path | None] = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: list[PydanticBaseSettingsSource] = [
            init_settings,
            env_settings,
            dotenv_settings,
            file_secret_settings,
        ]
        if cls._yaml_path:
            sources.append(YamlConfigSettingsSource(settings_cls, yaml_file=cls._yaml_path))
        return tuple(sources)


def load_settings(config_path: Path | None = None) -> AppSettings:
    env_path = os.getenv("CANVAS_CONFIG_PATH")
    resolved_path: Path | None = None

    if config_path is not None:
        resolved_path = config_path
    elif env_path:
        resolved_path = Path(env_path)
    elif DEFAULT_CONFIG_PATH.exists():
        resolved_path = DEFAULT_CONFIG_PATH

    previous = AppSettings._yaml_path
    try:
        if resolved_path is not None:
            if not resolved_path.exists():
                msg = f"Config file not found: {resolved_path}"
                raise FileNotFoundError(msg)
            AppSettings._yaml_path = resolved_path
        return AppSettings()
    finally:
        AppSettings._yaml_path = previous
