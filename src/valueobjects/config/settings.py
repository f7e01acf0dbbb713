"""Unified settings — init kwargs, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — passed to :meth:`ValueObjectSettings.load`
  2. Env vars     — ``VALUEOBJECTS_*`` prefix, ``__`` for nesting
  3. TOML file    — explicit path or ``VALUEOBJECTS_CONFIG``
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource`.
"""

from __future__ import annotations

import functools
import threading
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from valueobjects.config.discovery import find_config, read_toml
from valueobjects.config.models import JsonCodecConfig, LoggingConfig, YamlCodecConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a TOML file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            self._data = read_toml(toml_path)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class ValueObjectSettings(BaseSettings):
    """Settings for codecs and logging, frozen after construction.

    Attributes:
        config_path: TOML file the settings were read from, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "VALUEOBJECTS_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    json_codec: JsonCodecConfig = Field(default_factory=JsonCodecConfig)
    yaml_codec: YamlCodecConfig = Field(default_factory=YamlCodecConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def load(cls, *, config_path: str | Path | None = None, **overrides: Any) -> ValueObjectSettings:
        """Construct settings, reading *config_path* or ``VALUEOBJECTS_CONFIG``.

        A *config_path* that does not point at a file is ignored.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config()

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **overrides)
        finally:
            _tls.toml_path = None


@functools.cache
def get_settings() -> ValueObjectSettings:
    """Return the process-wide settings, loading them on first use."""
    return ValueObjectSettings.load()


def reset_settings() -> None:
    """Drop the cached settings so the next :func:`get_settings` reloads."""
    get_settings.cache_clear()
