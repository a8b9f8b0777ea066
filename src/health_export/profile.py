"""Formatting profile shared by all exporters.

Every stylistic choice an exporter makes (date and time rendering, unit
system, markdown cosmetics, frontmatter keys) is resolved here so the
exporters themselves carry no style constants.
"""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .units import UnitConverter, UnitPreference

_MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


class DateFormat(str, Enum):
    """Date rendering strategy."""

    ISO = "iso"  # 2026-01-05
    US = "us"  # 01/05/2026
    EU = "eu"  # 05/01/2026
    LONG = "long"  # January 5, 2026

    def format(self, value: date) -> str:
        if self is DateFormat.US:
            return f"{value.month:02d}/{value.day:02d}/{value.year:04d}"
        if self is DateFormat.EU:
            return f"{value.day:02d}/{value.month:02d}/{value.year:04d}"
        if self is DateFormat.LONG:
            return f"{_MONTH_NAMES[value.month - 1]} {value.day}, {value.year}"
        return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


class TimeFormat(str, Enum):
    """Time-of-day rendering strategy."""

    TWELVE_HOUR = "12h"  # 7:05 AM
    TWENTY_FOUR_HOUR = "24h"  # 07:05

    def format(self, value: datetime) -> str:
        if self is TimeFormat.TWENTY_FOUR_HOUR:
            return f"{value.hour:02d}:{value.minute:02d}"
        hour = value.hour % 12 or 12
        suffix = "AM" if value.hour < 12 else "PM"
        return f"{hour}:{value.minute:02d} {suffix}"


class BulletStyle(str, Enum):
    """Markdown list bullet glyph."""

    DASH = "-"
    ASTERISK = "*"
    PLUS = "+"


class MarkdownTemplate(BaseModel):
    """Cosmetic options for the Markdown exporter."""

    model_config = ConfigDict(frozen=True)

    bullet_style: BulletStyle = Field(default=BulletStyle.DASH, description="List bullet glyph")
    section_header_level: int = Field(default=2, description="Heading depth for categories")
    use_emoji: bool = Field(default=False, description="Prefix category headings with emoji")
    include_summary: bool = Field(default=True, description="Emit a one-line day summary")

    @field_validator("section_header_level")
    @classmethod
    def validate_header_level(cls, v: int) -> int:
        """Keep the header and its sub-header within Markdown's six levels."""
        if not 1 <= v <= 5:
            raise ValueError(f"Section header level must be between 1 and 5, got {v}")
        return v

    @property
    def bullet(self) -> str:
        return self.bullet_style.value

    def header(self, title: str, depth_offset: int = 0) -> str:
        return f"{'#' * (self.section_header_level + depth_offset)} {title}"


class FrontmatterConfig(BaseModel):
    """Frontmatter key layout and per-field key remapping."""

    model_config = ConfigDict(frozen=True)

    include_date: bool = True
    include_type: bool = True
    custom_date_key: str = "date"
    custom_type_key: str = "type"
    custom_type_value: str = "health-data"
    custom_fields: dict[str, str] = Field(
        default_factory=dict, description="Static key/value pairs added to every file"
    )
    key_overrides: dict[str, str | None] = Field(
        default_factory=dict,
        description="Canonical field name -> output key; None or empty omits the field",
    )

    def output_key(self, field_name: str) -> str | None:
        """Resolve the key to emit for a canonical field name.

        Returns:
            The remapped key, the field name itself when no override exists,
            or None when the field must be omitted.
        """
        if field_name not in self.key_overrides:
            return field_name
        override = self.key_overrides[field_name]
        if override is None or not override.strip():
            return None
        return override.strip()

    def static_lines(self, date_string: str) -> list[str]:
        """Date, type and sorted custom fields as ``key: value`` lines."""
        lines = []
        if self.include_date:
            lines.append(f"{self.custom_date_key}: {date_string}")
        if self.include_type:
            lines.append(f"{self.custom_type_key}: {self.custom_type_value}")
        for key, value in sorted(self.custom_fields.items()):
            lines.append(f"{key}: {value}")
        return lines


class FormatCustomization(BaseModel):
    """Immutable formatting profile threaded through every exporter."""

    model_config = ConfigDict(frozen=True)

    date_format: DateFormat = DateFormat.ISO
    time_format: TimeFormat = TimeFormat.TWELVE_HOUR
    unit_preference: UnitPreference = UnitPreference.METRIC
    markdown_template: MarkdownTemplate = Field(default_factory=MarkdownTemplate)
    frontmatter_config: FrontmatterConfig = Field(default_factory=FrontmatterConfig)

    @property
    def unit_converter(self) -> UnitConverter:
        return UnitConverter(self.unit_preference)

    def format_date(self, value: date) -> str:
        return self.date_format.format(value)

    def format_time(self, value: datetime) -> str:
        return self.time_format.format(value)
