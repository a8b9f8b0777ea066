"""Multi-day export runner.

Each day in a range is fetched, rendered and written independently; a failure
on one day is recorded and the run moves on to the next.
"""

import datetime as dt
from collections.abc import Awaitable, Callable, Iterator
from enum import Enum
from typing import Protocol

import structlog
from pydantic import BaseModel, ConfigDict, Field

from .config import Settings, get_settings
from .errors import ExportError, ExportFailureReason
from .exporters import ExporterRegistry, get_registry
from .models import AdvancedExportSettings, HealthData, generate_filename
from .vault import VaultWriter

logger = structlog.get_logger(__name__)

FetchDay = Callable[[dt.date], Awaitable[HealthData]]
ProgressCallback = Callable[[int, int], None]


class DocumentWriter(Protocol):
    async def write(self, filename: str, content: str) -> object: ...


def iter_dates(start: dt.date, end: dt.date) -> Iterator[dt.date]:
    """Yield each calendar day from start to end inclusive."""
    current = start
    while current <= end:
        yield current
        current += dt.timedelta(days=1)


class RunStatus(str, Enum):
    SUCCESS = "success"
    PARTIAL = "partial"
    FAILED = "failed"


class FailedDateDetail(BaseModel):
    """A day that could not be exported and why."""

    model_config = ConfigDict(frozen=True)

    date: dt.date
    reason: ExportFailureReason
    error: str | None = Field(default=None, description="Underlying error message")

    @property
    def description(self) -> str:
        return f"{self.date.isoformat()}: {self.reason.label}"


class ExportRunResult(BaseModel):
    """Outcome of exporting a range of days."""

    success_count: int = 0
    total_count: int = 0
    failed: list[FailedDateDetail] = Field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.success_count > 0

    @property
    def status(self) -> RunStatus:
        if self.total_count > 0 and self.success_count == self.total_count:
            return RunStatus.SUCCESS
        if self.success_count > 0:
            return RunStatus.PARTIAL
        return RunStatus.FAILED

    @property
    def status_message(self) -> str:
        status = self.status
        if status is RunStatus.SUCCESS:
            noun = "file" if self.success_count == 1 else "files"
            return f"Exported {self.success_count} {noun}"
        if status is RunStatus.PARTIAL:
            dates = ", ".join(detail.date.isoformat() for detail in self.failed)
            return f"Exported {self.success_count}/{self.total_count} files. Failed: {dates}"
        reason = self.failed[0].reason if self.failed else ExportFailureReason.NO_HEALTH_DATA
        return f"Export failed: {reason.label}"


async def export_day(
    day: dt.date,
    fetch: FetchDay,
    writer: DocumentWriter,
    settings: AdvancedExportSettings,
    registry: ExporterRegistry,
) -> None:
    """Fetch, render and write a single day.

    Raises:
        ExportError: With the reason the day failed.
    """
    try:
        data = await fetch(day)
    except ExportError:
        raise
    except Exception as e:
        raise ExportError(ExportFailureReason.HEALTH_STORE_ERROR, str(e)) from e

    if not data.filtered(settings.data_types).has_any_data:
        raise ExportError(ExportFailureReason.NO_HEALTH_DATA)

    content = registry.export(data, settings)
    filename = generate_filename(day, settings.export_format)

    try:
        await writer.write(filename, content)
    except ExportError:
        raise
    except OSError as e:
        raise ExportError(ExportFailureReason.FILE_WRITE_ERROR, str(e)) from e


async def export_date_range(
    start: dt.date,
    end: dt.date,
    fetch: FetchDay,
    writer: DocumentWriter,
    settings: AdvancedExportSettings | None = None,
    progress: ProgressCallback | None = None,
    registry: ExporterRegistry | None = None,
) -> ExportRunResult:
    """Export every day from start to end inclusive.

    Args:
        start: First day to export.
        end: Last day to export; a range with end before start is empty.
        fetch: Coroutine returning the aggregate for a day.
        writer: Destination receiving ``(filename, content)`` per day.
        settings: Export options; defaults to every data type as Markdown.
        progress: Called with ``(done, total)`` after each day.
        registry: Exporter registry; defaults to the shared instance.

    Returns:
        Per-day success and failure counts.
    """
    settings = settings or AdvancedExportSettings()
    registry = registry or get_registry()
    days = list(iter_dates(start, end))
    result = ExportRunResult(total_count=len(days))

    for index, day in enumerate(days, 1):
        try:
            await export_day(day, fetch, writer, settings, registry)
        except ExportError as e:
            result.failed.append(FailedDateDetail(date=day, reason=e.reason, error=e.detail))
            logger.warning(
                "day_export_failed",
                date=day.isoformat(),
                reason=e.reason.value,
                error=e.detail,
            )
        except Exception as e:
            result.failed.append(
                FailedDateDetail(date=day, reason=ExportFailureReason.UNKNOWN, error=str(e))
            )
            logger.exception("day_export_failed", date=day.isoformat(), reason="unknown")
        else:
            result.success_count += 1

        if progress is not None:
            progress(index, len(days))

    logger.info(
        "export_run_complete",
        status=result.status.value,
        success_count=result.success_count,
        total_count=result.total_count,
    )
    return result


async def export_configured_range(
    start: dt.date,
    end: dt.date,
    fetch: FetchDay,
    settings: Settings | None = None,
    progress: ProgressCallback | None = None,
) -> ExportRunResult:
    """Export a date range into the vault folder named by the settings.

    Format, data types, units and date/time styles also come from the
    settings; the global settings are used when none are given.
    """
    settings = settings or get_settings()
    writer = VaultWriter.from_settings(settings.export)
    logger.info(
        "configured_export_started",
        export_path=writer.export_path(),
        format=settings.export.format.value,
    )
    return await export_date_range(
        start, end, fetch, writer, settings.export.to_advanced(), progress
    )
