"""Tests for config models — defaults and validation."""

import pytest
from pydantic import ValidationError

from valueobjects.config.models import JsonCodecConfig, LoggingConfig, YamlCodecConfig


class TestDefaults:
    def test_section_defaults(self) -> None:
        assert JsonCodecConfig().indent is None
        assert JsonCodecConfig().ensure_ascii is False
        assert YamlCodecConfig().sequence_dash_offset == 0
        assert LoggingConfig().log_json is False

    def test_sparse_override(self) -> None:
        cfg = YamlCodecConfig.model_validate({"explicit_start": True})
        assert cfg.explicit_start is True
        assert cfg.indent == 2


class TestSectionValidation:
    def test_yaml_indent_minimum(self) -> None:
        with pytest.raises(ValidationError):
            YamlCodecConfig(indent=1)

    def test_frozen(self) -> None:
        cfg = JsonCodecConfig()
        with pytest.raises(ValidationError):
            cfg.indent = 4  # type: ignore[misc]
