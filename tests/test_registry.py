"""Tests for the exporter registry and the export entry point."""

import json

import pytest

from health_export.exporters import (
    CsvExporter,
    ExporterRegistry,
    JsonExporter,
    MarkdownExporter,
    ObsidianBasesExporter,
    export_health_data,
)
from health_export.models import AdvancedExportSettings, DataTypeSelection, ExportFormat


class TestExporterRegistry:
    """Tests for ExporterRegistry routing."""

    def setup_method(self):
        self.registry = ExporterRegistry()

    def test_one_exporter_per_format(self):
        assert isinstance(self.registry.get_exporter(ExportFormat.MARKDOWN), MarkdownExporter)
        assert isinstance(self.registry.get_exporter("obsidianBases"), ObsidianBasesExporter)
        assert isinstance(self.registry.get_exporter("json"), JsonExporter)
        assert isinstance(self.registry.get_exporter(ExportFormat.CSV), CsvExporter)
        assert set(self.registry.formats) == set(ExportFormat)

    def test_unknown_format_rejected(self):
        with pytest.raises(ValueError):
            self.registry.get_exporter("pdf")

    def test_export_filters_before_rendering(self, full_day):
        settings = AdvancedExportSettings(
            export_format=ExportFormat.JSON,
            data_types=DataTypeSelection.only("sleep"),
        )
        document = json.loads(self.registry.export(full_day, settings))
        assert "sleep" in document
        assert "activity" not in document
        assert "mindfulness" not in document
        assert "workouts" not in document

    @pytest.mark.parametrize("export_format", list(ExportFormat))
    def test_disabled_category_absent_in_every_format(self, full_day, export_format):
        settings = AdvancedExportSettings(
            export_format=export_format,
            data_types=DataTypeSelection.only("sleep"),
        )
        output = self.registry.export(full_day, settings)
        assert "10523" not in output
        assert "10,523" not in output
        assert "Running" not in output
        assert "running" not in output

    @pytest.mark.parametrize("export_format", list(ExportFormat))
    def test_deterministic(self, full_day, export_format):
        settings = AdvancedExportSettings(export_format=export_format)
        assert self.registry.export(full_day, settings) == self.registry.export(
            full_day, settings
        )


class TestExportHealthData:
    def test_defaults_to_markdown(self, sleep_and_steps):
        assert export_health_data(sleep_and_steps).startswith("---\ndate: 2026-01-15\n")

    def test_format_override(self, sleep_and_steps):
        output = export_health_data(sleep_and_steps, export_format="csv")
        assert output.startswith("Date,Category,Metric,Value,Unit\n")

    def test_group_by_category_does_not_change_output(self, full_day):
        grouped = AdvancedExportSettings(group_by_category=True)
        flat = AdvancedExportSettings(group_by_category=False)
        assert export_health_data(full_day, grouped) == export_health_data(full_day, flat)
