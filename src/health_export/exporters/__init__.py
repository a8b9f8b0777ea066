"""Format-specific exporters for daily health data."""

from ..models import HealthData
from ..profile import FormatCustomization
from .base import BaseExporter
from .bases import ObsidianBasesExporter
from .csv_exporter import CsvExporter
from .json_exporter import JsonExporter
from .markdown import MarkdownExporter
from .registry import ExporterRegistry, export_health_data, get_registry


def to_markdown(
    data: HealthData,
    customization: FormatCustomization | None = None,
    include_metadata: bool = True,
) -> str:
    return MarkdownExporter().render(
        data, customization or FormatCustomization(), include_metadata=include_metadata
    )


def to_obsidian_bases(data: HealthData, customization: FormatCustomization | None = None) -> str:
    return ObsidianBasesExporter().render(data, customization or FormatCustomization())


def to_json(data: HealthData, customization: FormatCustomization | None = None) -> str:
    return JsonExporter().render(data, customization or FormatCustomization())


def to_csv(data: HealthData, customization: FormatCustomization | None = None) -> str:
    return CsvExporter().render(data, customization or FormatCustomization())


__all__ = [
    "BaseExporter",
    "CsvExporter",
    "ExporterRegistry",
    "JsonExporter",
    "MarkdownExporter",
    "ObsidianBasesExporter",
    "export_health_data",
    "get_registry",
    "to_csv",
    "to_json",
    "to_markdown",
    "to_obsidian_bases",
]
