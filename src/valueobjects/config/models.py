"""Pydantic config models for valueobjects.

All models are frozen. Defaults are baked in; a TOML file or environment
variables only need to carry the keys they override.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class JsonCodecConfig(BaseModel):
    """[json_codec] section."""

    model_config = {"frozen": True}

    indent: int | None = None
    ensure_ascii: bool = False
    compact: bool = True


class YamlCodecConfig(BaseModel):
    """[yaml_codec] section."""

    model_config = {"frozen": True}

    explicit_start: bool = False
    indent: int = Field(default=2, ge=2)
    sequence_dash_offset: int = Field(default=0, ge=0)


class LoggingConfig(BaseModel):
    """[logging] section, read by ``configure_logging`` for unset arguments."""

    model_config = {"frozen": True}

    verbose: bool = False
    log_json: bool = False

