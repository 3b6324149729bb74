"""Configuration loader for Distillery."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from typing import TYPE_CHECKING

import tomlkit
from pydantic import BaseModel, Field, field_validator

from distillery.atomic import atomic_write
from distillery.paths import get_config_path

if TYPE_CHECKING:
    from pathlib import Path

DEFAULT_MODEL = "gpt-5.2"
DEFAULT_CACHE_FILE = ".dstl-cache.json"


class GeneralConfig(BaseModel):
    """General configuration settings."""

    model: str = Field(default=DEFAULT_MODEL, description="Model used for story generation")
    cache_file: str = Field(
        default=DEFAULT_CACHE_FILE,
        description="Where generated stories are cached (relative to the working directory)",
    )

    @field_validator("model", "cache_file", mode="before")
    @classmethod
    def strip_blank(cls, value: object) -> object:
        """Treat blank strings as unset."""
        if isinstance(value, str) and not value.strip():
            raise ValueError("must not be blank")
        return value.strip() if isinstance(value, str) else value


class DistilleryConfig(BaseModel):
    """Root configuration model."""

    general: GeneralConfig = Field(default_factory=GeneralConfig)

    @classmethod
    def load(cls, config_path: Path | None = None) -> DistilleryConfig:
        """Load configuration from TOML file or use defaults."""
        if config_path is None:
            config_path = get_config_path()

        if config_path.exists():
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
            return cls.model_validate(data)

        return cls()

    def save(self, path: Path | None = None) -> None:
        """Serialize current config to TOML file.

        Args:
            path: Path to write config file (created if missing)
        """
        if path is None:
            path = get_config_path()

        doc = tomlkit.document()
        doc.add(tomlkit.comment("Distillery configuration"))

        general_table = tomlkit.table()
        for key, value in self.general.model_dump().items():
            general_table[key] = value
        doc["general"] = general_table

        atomic_write(path, tomlkit.dumps(doc))


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Runtime settings handed to the reducer and the command executor."""

    api_key: str
    model: str = DEFAULT_MODEL
    use_cache: bool = False
    cache_file: str = DEFAULT_CACHE_FILE
