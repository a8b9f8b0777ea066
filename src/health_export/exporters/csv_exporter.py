"""CSV exporter: one ``Date,Category,Metric,Value,Unit`` row per metric."""

from ..models import ExportFormat, HealthData, MindfulnessData, valence_percent
from ..profile import FormatCustomization
from ..units import UnitConverter
from .base import BaseExporter, format_raw
from .fields import CATEGORIES, MINDFULNESS, WORKOUTS_TITLE

HEADER = ("Date", "Category", "Metric", "Value", "Unit")
STATE_OF_MIND_CATEGORY = "State of Mind"


class QuotedCell(str):
    """Cell text that is already quoted and must be written as is."""


def escape_cell(value: str) -> str:
    """Quote a cell containing a delimiter, quote or newline."""
    if isinstance(value, QuotedCell):
        return value
    if any(ch in value for ch in (",", '"', "\n", "\r")):
        return '"' + value.replace('"', '""') + '"'
    return value


def list_cell(values: tuple[str, ...]) -> QuotedCell:
    """Always-quoted ``a; b`` cell.

    Commas inside items become ``;`` so the cell never splits, which is lossy.
    """
    joined = "; ".join(values).replace(",", ";").replace('"', '""')
    return QuotedCell(f'"{joined}"')


class CsvExporter(BaseExporter):
    """Flat long-format table; absent metrics produce no row."""

    format = ExportFormat.CSV

    def render(self, data: HealthData, customization: FormatCustomization) -> str:
        date_cell = escape_cell(customization.format_date(data.date))
        converter = customization.unit_converter
        rows: list[tuple[str, str, str, str]] = []

        for category in CATEGORIES:
            record = getattr(data, category.name)
            if not record.has_data:
                continue
            for metric, value in category.values(record, category.csv_positive_only):
                rows.append(
                    (
                        category.title,
                        metric.csv.metric,
                        metric.csv.render(value, converter),
                        metric.csv.unit_for(converter),
                    )
                )
            if category is MINDFULNESS:
                rows.extend(self._state_of_mind_rows(record, customization))

        for workout in data.workouts:
            rows.extend(self._workout_rows(workout, customization, converter))

        lines = [",".join(HEADER)]
        for category_name, metric_name, value, unit in rows:
            lines.append(
                ",".join(
                    (
                        date_cell,
                        escape_cell(category_name),
                        escape_cell(metric_name),
                        escape_cell(value),
                        escape_cell(unit),
                    )
                )
            )
        return "\n".join(lines) + "\n"

    def _state_of_mind_rows(
        self, mindfulness: MindfulnessData, customization: FormatCustomization
    ) -> list[tuple[str, str, str, str]]:
        if not mindfulness.stateOfMind:
            return []
        title = MINDFULNESS.title
        rows = [(title, "State of Mind Entries", str(len(mindfulness.stateOfMind)), "count")]

        avg_valence = mindfulness.average_valence
        if avg_valence is not None:
            rows.append((title, "Average Mood Valence", f"{avg_valence:.2f}", "scale(-1 to 1)"))
            rows.append((title, "Average Mood Percent", str(valence_percent(avg_valence)), "percent"))
        if mindfulness.daily_moods:
            rows.append((title, "Daily Mood Count", str(len(mindfulness.daily_moods)), "count"))
        if mindfulness.momentary_emotions:
            rows.append(
                (title, "Momentary Emotion Count", str(len(mindfulness.momentary_emotions)), "count")
            )

        for entry in mindfulness.stateOfMind:
            kind = entry.kind.value
            time_string = customization.format_time(entry.timestamp)
            rows.append(
                (STATE_OF_MIND_CATEGORY, f"{kind} at {time_string}", f"{entry.valence:.2f}", "valence")
            )
            if entry.labels:
                rows.append(
                    (
                        STATE_OF_MIND_CATEGORY,
                        f"{kind} Labels at {time_string}",
                        list_cell(entry.labels),
                        "labels",
                    )
                )
            if entry.associations:
                rows.append(
                    (
                        STATE_OF_MIND_CATEGORY,
                        f"{kind} Associations at {time_string}",
                        list_cell(entry.associations),
                        "associations",
                    )
                )
        return rows

    def _workout_rows(
        self, workout, customization: FormatCustomization, converter: UnitConverter
    ) -> list[tuple[str, str, str, str]]:
        name = workout.workout_type_name
        rows = [
            (WORKOUTS_TITLE, f"{name} Start Time", customization.format_time(workout.startTime), "time"),
            (WORKOUTS_TITLE, f"{name} Duration", format_raw(workout.duration), "seconds"),
        ]
        if workout.distance is not None and workout.distance > 0:
            distance = f"{converter.convert_distance(workout.distance):.2f}"
            rows.append((WORKOUTS_TITLE, f"{name} Distance", distance, converter.distance_unit()))
        if workout.calories is not None and workout.calories > 0:
            rows.append((WORKOUTS_TITLE, f"{name} Calories", format_raw(workout.calories), "kcal"))
        return rows
