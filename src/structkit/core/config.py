# src/structkit/core/config.py
"""
Configuration schema and loading for structkit.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.
"""

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from structkit.contracts.enums import ValidationMode


class ToolkitSettings(BaseModel):
    """Runtime settings shared by the validator and resolver.

    Example YAML:
        validation_mode: lenient
        nested_strict: false
        log_level: DEBUG
    """

    model_config = {"frozen": True}

    validation_mode: ValidationMode = Field(
        default=ValidationMode.STRICT,
        description="Default excess-property handling when validate() is called without a mode",
    )
    nested_strict: bool = Field(
        default=True,
        description="Apply the caller's mode to nested records; if false, nested records are validated leniently",
    )
    resolver_cache: bool = Field(
        default=True,
        description="Memoize structural-subtype results per (subject, bound) pair",
    )
    resolver_cache_size: int = Field(
        default=1024,
        ge=1,
        description="Maximum memoized (subject, bound) pairs; least recently used pairs are evicted first",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Log level passed to configure_logging()",
    )
    json_logs: bool = Field(
        default=False,
        description="Render logs as JSON instead of console text",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> Any:
        """Accept lowercase level names from env vars."""
        if isinstance(v, str):
            return v.upper()
        return v


def load_settings(config_path: Path | None = None) -> ToolkitSettings:
    """Load settings from an optional file with environment variable overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (STRUCTKIT_*) - highest priority
    2. Config file (YAML/TOML), if given
    3. Defaults from Pydantic schema - lowest priority

    Args:
        config_path: Optional path to a configuration file

    Returns:
        Validated ToolkitSettings instance

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config_path is given but doesn't exist
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if config_path is not None and not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="STRUCTKIT",
        settings_files=[str(config_path)] if config_path is not None else [],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    # Dynaconf returns uppercase keys; convert to lowercase for Pydantic
    # Also filter out internal Dynaconf settings
    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = {k.lower(): v for k, v in dynaconf_settings.as_dict().items() if k not in internal_keys}

    return ToolkitSettings(**raw_config)


DEFAULT_SETTINGS = ToolkitSettings()
