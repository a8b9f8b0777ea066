"""Configuration management using pydantic-settings."""

import threading
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import AdvancedExportSettings, DataTypeSelection, ExportFormat
from .profile import DateFormat, FormatCustomization, TimeFormat
from .units import UnitPreference

# Valid log levels
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

DATA_TYPE_NAMES = tuple(DataTypeSelection.model_fields)


class ExportSettings(BaseSettings):
    """Export defaults."""

    model_config = SettingsConfigDict(env_prefix="EXPORT_")

    format: ExportFormat = Field(default=ExportFormat.MARKDOWN, description="Output format")
    include_metadata: bool = Field(default=True, description="Emit Markdown frontmatter")
    group_by_category: bool = Field(default=True, description="Group metrics by category")
    unit_preference: UnitPreference = Field(
        default=UnitPreference.METRIC, description="metric or imperial"
    )
    date_format: DateFormat = Field(default=DateFormat.ISO, description="Date rendering style")
    time_format: TimeFormat = Field(
        default=TimeFormat.TWELVE_HOUR, description="Time rendering style"
    )
    vault_dir: Path | None = Field(default=None, description="Vault root directory")
    subfolder: str = Field(default="Health", description="Folder inside the vault")
    data_types: str = Field(
        default="", description="Comma-separated categories to export; empty exports all"
    )

    @field_validator("format", mode="before")
    @classmethod
    def validate_format(cls, v):
        """Accept format names case-insensitively."""
        if isinstance(v, str):
            for member in ExportFormat:
                if v.strip().lower() == member.value.lower():
                    return member
            valid = ", ".join(m.value for m in ExportFormat)
            raise ValueError(f"Invalid export format '{v}'. Must be one of: {valid}")
        return v

    @field_validator("unit_preference", mode="before")
    @classmethod
    def validate_unit_preference(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("data_types")
    @classmethod
    def validate_data_types(cls, v: str) -> str:
        """Validate every listed category is known."""
        names = [name.strip().lower() for name in v.split(",") if name.strip()]
        unknown = [name for name in names if name not in DATA_TYPE_NAMES]
        if unknown:
            raise ValueError(
                f"Unknown data types: {', '.join(unknown)}. "
                f"Must be among: {', '.join(DATA_TYPE_NAMES)}"
            )
        return ",".join(names)

    def selection(self) -> DataTypeSelection:
        if not self.data_types:
            return DataTypeSelection.all()
        return DataTypeSelection.only(*self.data_types.split(","))

    def to_advanced(self) -> AdvancedExportSettings:
        """Build the per-export options from these defaults."""
        return AdvancedExportSettings(
            data_types=self.selection(),
            export_format=self.format,
            include_metadata=self.include_metadata,
            group_by_category=self.group_by_category,
            format_customization=FormatCustomization(
                date_format=self.date_format,
                time_format=self.time_format,
                unit_preference=self.unit_preference,
            ),
        )


class AppSettings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_prefix="APP_")

    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Log format: json or console")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        normalized = v.upper()
        if normalized not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log level '{v}'. Must be one of: {', '.join(sorted(VALID_LOG_LEVELS))}"
            )
        return normalized

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format is valid."""
        normalized = v.lower()
        if normalized not in ("json", "console"):
            raise ValueError(f"Invalid log format '{v}'. Must be 'json' or 'console'")
        return normalized


class Settings(BaseSettings):
    """Combined application settings."""

    export: ExportSettings = Field(default_factory=ExportSettings)
    app: AppSettings = Field(default_factory=AppSettings)

    @classmethod
    def load(cls) -> "Settings":
        """Load settings from environment variables."""
        return cls(export=ExportSettings(), app=AppSettings())


# Global settings instance with thread-safe initialization
_settings: Settings | None = None
_settings_lock = threading.Lock()


def get_settings() -> Settings:
    """Get or create the global settings instance.

    Thread-safe singleton pattern using double-checked locking.
    """
    global _settings
    if _settings is None:
        with _settings_lock:
            # Double-check after acquiring lock
            if _settings is None:
                _settings = Settings.load()
    return _settings
