"""Daily health data export engine.

Turns a day's health metrics into Markdown, Obsidian Bases Markdown, JSON or
CSV documents under a configurable formatting profile, and writes them into a
notes vault.

Modules:
    config: Configuration management using pydantic-settings
    models: Per-day health data aggregate and data-type filter
    units: Metric/imperial unit conversion
    profile: Date, time, markdown and frontmatter formatting choices
    exporters: Format-specific exporters and the export registry
    batch: Multi-day export with per-day failure reporting
    vault: File writer for the vault folder

Example:
    Export one day as Markdown::

        from health_export import HealthData, export_health_data

        text = export_health_data(HealthData(date=day, sleep=sleep))
"""

__version__ = "0.1.0"

from .batch import export_configured_range, export_date_range
from .config import Settings, get_settings
from .exporters import export_health_data, to_csv, to_json, to_markdown, to_obsidian_bases
from .models import (
    AdvancedExportSettings,
    DataTypeSelection,
    ExportFormat,
    HealthData,
    filtered,
    generate_filename,
)
from .profile import FormatCustomization
from .units import UnitConverter, UnitPreference

__all__ = [
    "AdvancedExportSettings",
    "DataTypeSelection",
    "ExportFormat",
    "FormatCustomization",
    "HealthData",
    "Settings",
    "UnitConverter",
    "UnitPreference",
    "export_configured_range",
    "export_date_range",
    "export_health_data",
    "filtered",
    "generate_filename",
    "get_settings",
    "to_csv",
    "to_json",
    "to_markdown",
    "to_obsidian_bases",
    "__version__",
]
