"""Base exporter class and shared value formatting."""

from abc import ABC, abstractmethod

import structlog

from ..models import AdvancedExportSettings, ExportFormat, HealthData
from ..profile import FormatCustomization

logger = structlog.get_logger(__name__)


def format_duration(seconds: float) -> str:
    """Format seconds as ``8h 30m``, or ``45m`` under an hour."""
    hours = int(seconds) // 3600
    minutes = (int(seconds) % 3600) // 60
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def format_number(value: float) -> str:
    """Truncate to an integer and group thousands with commas."""
    return f"{int(value):,}"


def plain_number(value: float) -> float | int:
    """Integral floats become ``int`` (``97.0`` -> ``97``); other values pass through."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def format_raw(value: float) -> str:
    """Plain numeric text; integral floats drop the trailing ``.0``."""
    return str(plain_number(value))


def scaled_percent(fraction: float) -> float:
    """Fraction (0-1) to percent, without float noise (0.57 -> 57.0)."""
    return round(fraction * 100, 6)


def percent_int(fraction: float) -> int:
    return int(scaled_percent(fraction))


def pluralize(count: int, noun: str) -> str:
    return f"{count} {noun}{'s' if count > 1 else ''}"


def tag_list(values: list[str]) -> str:
    """Lowercase, hyphenated, de-duplicated ``[a, b]`` list."""
    tags = []
    for value in values:
        tag = value.lower().replace(" ", "-")
        if tag not in tags:
            tags.append(tag)
    return f"[{', '.join(tags)}]"


class BaseExporter(ABC):
    """Base class for format-specific exporters.

    Exporters are stateless: every call reads only the aggregate and the
    formatting profile it is given and returns new text.
    """

    format: ExportFormat

    @abstractmethod
    def render(self, data: HealthData, customization: FormatCustomization) -> str:
        """Serialize an already-filtered aggregate.

        Args:
            data: Aggregate restricted to the enabled categories.
            customization: Formatting profile for units, dates and keys.

        Returns:
            The exported document text.
        """

    def export(self, data: HealthData, settings: AdvancedExportSettings) -> str:
        """Render using the options carried by ``settings``."""
        text = self.render(data, settings.format_customization)
        self._log_export(data, text)
        return text

    def _log_export(self, data: HealthData, text: str) -> None:
        logger.debug(
            "export_generated",
            exporter=self.__class__.__name__,
            format=self.format.value,
            date=data.date.isoformat(),
            length=len(text),
        )
