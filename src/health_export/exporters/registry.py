"""Exporter registry routing an export request to its format's exporter."""

import structlog

from ..models import AdvancedExportSettings, ExportFormat, HealthData, filtered
from .base import BaseExporter
from .bases import ObsidianBasesExporter
from .csv_exporter import CsvExporter
from .json_exporter import JsonExporter
from .markdown import MarkdownExporter

logger = structlog.get_logger(__name__)


class ExporterRegistry:
    """Registry of one exporter per output format."""

    def __init__(self) -> None:
        """Initialize registry with all available exporters."""
        exporters: list[BaseExporter] = [
            MarkdownExporter(),
            ObsidianBasesExporter(),
            JsonExporter(),
            CsvExporter(),
        ]
        self._exporters = {exporter.format: exporter for exporter in exporters}

    @property
    def formats(self) -> list[ExportFormat]:
        return list(self._exporters)

    def get_exporter(self, export_format: ExportFormat | str) -> BaseExporter:
        """Get the exporter for a format.

        Args:
            export_format: Format enum member or its string value.

        Returns:
            The exporter registered for the format.

        Raises:
            ValueError: If the format is not a known export format.
        """
        return self._exporters[ExportFormat(export_format)]

    def export(self, data: HealthData, settings: AdvancedExportSettings) -> str:
        """Filter the aggregate to the selected data types and render it.

        Args:
            data: Full aggregate for one day.
            settings: Format, data-type selection and formatting profile.

        Returns:
            The exported document text.
        """
        selected = filtered(data, settings.data_types)
        exporter = self.get_exporter(settings.export_format)
        logger.debug(
            "exporter_selected",
            format=settings.export_format.value,
            exporter=exporter.__class__.__name__,
            data_types=settings.data_types.enabled(),
        )
        return exporter.export(selected, settings)


# Global registry instance
_registry: ExporterRegistry | None = None


def get_registry() -> ExporterRegistry:
    global _registry
    if _registry is None:
        _registry = ExporterRegistry()
    return _registry


def export_health_data(
    data: HealthData,
    settings: AdvancedExportSettings | None = None,
    export_format: ExportFormat | str | None = None,
) -> str:
    """Export one day's aggregate.

    Args:
        data: Full aggregate for one day.
        settings: Export options; defaults to every data type as Markdown.
        export_format: Overrides ``settings.export_format`` when given.

    Returns:
        The exported document text.
    """
    settings = settings or AdvancedExportSettings()
    if export_format is not None:
        settings = settings.model_copy(update={"export_format": ExportFormat(export_format)})
    return get_registry().export(data, settings)
