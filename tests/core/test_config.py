# tests/core/test_config.py
"""Tests for settings schema and Dynaconf-based loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from structkit.contracts import ValidationMode


class TestToolkitSettings:
    """ToolkitSettings defaults and validation."""

    def test_defaults(self) -> None:
        from structkit.core.config import ToolkitSettings

        settings = ToolkitSettings()

        assert settings.validation_mode is ValidationMode.STRICT
        assert settings.nested_strict is True
        assert settings.resolver_cache is True
        assert settings.resolver_cache_size == 1024
        assert settings.log_level == "INFO"
        assert settings.json_logs is False

    def test_frozen(self) -> None:
        from structkit.core.config import ToolkitSettings

        settings = ToolkitSettings()

        with pytest.raises(ValidationError):
            settings.nested_strict = False  # type: ignore[misc]

    def test_mode_from_string(self) -> None:
        from structkit.core.config import ToolkitSettings

        settings = ToolkitSettings(validation_mode="lenient")

        assert settings.validation_mode is ValidationMode.LENIENT

    def test_invalid_mode_rejected(self) -> None:
        from structkit.core.config import ToolkitSettings

        with pytest.raises(ValidationError):
            ToolkitSettings(validation_mode="loose")

    @pytest.mark.parametrize("size", [0, -1])
    def test_cache_size_must_be_positive(self, size: int) -> None:
        from structkit.core.config import ToolkitSettings

        with pytest.raises(ValidationError):
            ToolkitSettings(resolver_cache_size=size)

    def test_log_level_normalized(self) -> None:
        from structkit.core.config import ToolkitSettings

        assert ToolkitSettings(log_level="debug").log_level == "DEBUG"


class TestLoadSettings:
    """Test Dynaconf-based settings loading."""

    def test_load_from_yaml_file(self, tmp_path: Path) -> None:
        from structkit.core.config import load_settings

        config_file = tmp_path / "settings.yaml"
        config_file.write_text("""
validation_mode: lenient
nested_strict: false
log_level: DEBUG
""")
        settings = load_settings(config_file)

        assert settings.validation_mode is ValidationMode.LENIENT
        assert settings.nested_strict is False
        assert settings.log_level == "DEBUG"

    def test_load_with_env_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        from structkit.core.config import load_settings

        config_file = tmp_path / "settings.yaml"
        config_file.write_text("""
validation_mode: lenient
""")
        monkeypatch.setenv("STRUCTKIT_VALIDATION_MODE", "strict")

        settings = load_settings(config_file)

        assert settings.validation_mode is ValidationMode.STRICT

    def test_load_env_only(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from structkit.core.config import load_settings

        monkeypatch.setenv("STRUCTKIT_RESOLVER_CACHE", "false")

        settings = load_settings()

        assert settings.resolver_cache is False

    def test_load_validates_schema(self, tmp_path: Path) -> None:
        from structkit.core.config import load_settings

        config_file = tmp_path / "settings.yaml"
        config_file.write_text("""
validation_mode: sometimes
""")
        with pytest.raises(ValidationError):
            load_settings(config_file)

    def test_load_missing_file_raises_file_not_found(self, tmp_path: Path) -> None:
        from structkit.core.config import load_settings

        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "missing.yaml")
