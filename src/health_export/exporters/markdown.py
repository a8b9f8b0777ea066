"""Markdown exporter: frontmatter, a day summary and one section per category."""

from ..models import AdvancedExportSettings, ExportFormat, HealthData, MindfulnessData, VitalsData
from ..models import valence_description, valence_percent
from ..profile import FormatCustomization, MarkdownTemplate
from ..units import UnitConverter
from .base import BaseExporter, format_duration, format_number, percent_int, pluralize
from .fields import CATEGORIES, MINDFULNESS, VITALS, WORKOUTS_EMOJI, WORKOUTS_TITLE, CategoryFields

# Mood entries are itemised only for small days
MAX_ITEMIZED_MOOD_ENTRIES = 5


class MarkdownExporter(BaseExporter):
    """Renders a human-readable daily note."""

    format = ExportFormat.MARKDOWN

    def export(self, data: HealthData, settings: AdvancedExportSettings) -> str:
        text = self.render(
            data,
            settings.format_customization,
            include_metadata=settings.include_metadata,
        )
        self._log_export(data, text)
        return text

    def render(
        self,
        data: HealthData,
        customization: FormatCustomization,
        include_metadata: bool = True,
    ) -> str:
        """Build the Markdown document.

        Sections follow the fixed category order and are emitted only for
        categories that carry data.
        """
        date_string = customization.format_date(data.date)
        template = customization.markdown_template
        lines: list[str] = []

        if include_metadata:
            lines.append("---")
            lines.extend(customization.frontmatter_config.static_lines(date_string))
            lines.append("---")
            lines.append("")

        lines.append(f"# Health Data — {date_string}")

        if template.include_summary:
            summary = self._summary_line(data, template)
            if summary:
                lines.extend(["", summary])

        converter = customization.unit_converter
        for category in CATEGORIES:
            record = getattr(data, category.name)
            if not record.has_data:
                continue
            lines.extend(["", self._heading(category, template), ""])
            if category is VITALS:
                section = self._vitals_lines(record, template.bullet, converter)
            else:
                section = self._field_lines(category, record, template.bullet, converter)
            if category is MINDFULNESS:
                moods = self._state_of_mind_lines(record, customization)
                if section and moods:
                    section.append("")
                section.extend(moods)
            lines.extend(section)

        if data.workouts:
            lines.extend(self._workout_lines(data, customization))

        return "\n".join(lines) + "\n"

    def _heading(self, category: CategoryFields, template: MarkdownTemplate) -> str:
        emoji = f"{category.emoji} " if template.use_emoji else ""
        return template.header(f"{emoji}{category.title}")

    def _summary_line(self, data: HealthData, template: MarkdownTemplate) -> str:
        """Condensed ``8h 30m sleep · 8,432 steps · ...`` line; empty when nothing applies."""
        parts = []
        if data.sleep.totalDuration > 0:
            parts.append(f"{format_duration(data.sleep.totalDuration)} sleep")
        if data.activity.steps is not None:
            parts.append(f"{format_number(data.activity.steps)} steps")
        if data.workouts:
            parts.append(pluralize(len(data.workouts), "workout"))
        avg_valence = data.mindfulness.average_valence
        if avg_valence is not None:
            emoji = ""
            if template.use_emoji:
                if avg_valence >= 0.2:
                    emoji = "🙂 "
                elif avg_valence <= -0.2:
                    emoji = "😔 "
                else:
                    emoji = "😐 "
            parts.append(f"{emoji}mood {valence_percent(avg_valence)}%")
        return " · ".join(parts)

    def _field_lines(
        self,
        category: CategoryFields,
        record,
        bullet: str,
        converter: UnitConverter,
    ) -> list[str]:
        lines = []
        for metric, value in category.markdown_values(record):
            if metric.markdown is None:
                continue
            rendered = metric.markdown.render(value, converter)
            lines.append(f"{bullet} **{metric.markdown.label}:** {rendered}")
        return lines

    def _vitals_lines(self, vitals: VitalsData, bullet: str, converter: UnitConverter) -> list[str]:
        """Averages with a ``(range: min–max)`` suffix when min and max differ."""
        lines = []

        def ranged(label: str, avg, low, high, fmt, unit: str = "") -> None:
            if avg is None:
                return
            line = f"{bullet} **{label}:** {fmt(avg)}{unit}"
            if low is not None and high is not None and low != high:
                line += f" (range: {fmt(low)}–{fmt(high)})"
            lines.append(line)

        ranged(
            "Respiratory Rate",
            vitals.respiratoryRateAvg,
            vitals.respiratoryRateMin,
            vitals.respiratoryRateMax,
            lambda v: f"{v:.1f}",
            " breaths/min",
        )
        ranged(
            "SpO2",
            vitals.bloodOxygenAvg,
            vitals.bloodOxygenMin,
            vitals.bloodOxygenMax,
            lambda v: f"{percent_int(v)}%",
        )
        ranged(
            "Body Temperature",
            vitals.bodyTemperatureAvg,
            vitals.bodyTemperatureMin,
            vitals.bodyTemperatureMax,
            converter.format_temperature,
        )

        systolic = vitals.bloodPressureSystolicAvg
        diastolic = vitals.bloodPressureDiastolicAvg
        if systolic is not None and diastolic is not None:
            line = f"{bullet} **Blood Pressure:** {int(systolic)}/{int(diastolic)} mmHg"
            bounds = (
                vitals.bloodPressureSystolicMin,
                vitals.bloodPressureSystolicMax,
                vitals.bloodPressureDiastolicMin,
                vitals.bloodPressureDiastolicMax,
            )
            if all(b is not None for b in bounds):
                sys_min, sys_max, dia_min, dia_max = bounds
                if sys_min != sys_max or dia_min != dia_max:
                    line += (
                        f" (range: {int(sys_min)}/{int(dia_min)}"
                        f"–{int(sys_max)}/{int(dia_max)})"
                    )
            lines.append(line)

        ranged(
            "Blood Glucose",
            vitals.bloodGlucoseAvg,
            vitals.bloodGlucoseMin,
            vitals.bloodGlucoseMax,
            lambda v: f"{v:.1f}",
            " mg/dL",
        )
        return lines

    def _state_of_mind_lines(
        self, mindfulness: MindfulnessData, customization: FormatCustomization
    ) -> list[str]:
        if not mindfulness.stateOfMind:
            return []
        template = customization.markdown_template
        bullet = template.bullet
        lines = []

        avg_valence = mindfulness.average_valence
        if avg_valence is not None:
            lines.append(
                f"{bullet} **Average Mood:** {valence_percent(avg_valence)}% "
                f"({valence_description(avg_valence)})"
            )
        if mindfulness.daily_moods:
            lines.append(f"{bullet} **Daily Mood Entries:** {len(mindfulness.daily_moods)}")
        if mindfulness.momentary_emotions:
            lines.append(
                f"{bullet} **Momentary Emotions:** {len(mindfulness.momentary_emotions)}"
            )
        if mindfulness.all_labels:
            lines.append(f"{bullet} **Emotions/Moods:** {', '.join(mindfulness.all_labels)}")
        if mindfulness.all_associations:
            lines.append(
                f"{bullet} **Associated With:** {', '.join(mindfulness.all_associations)}"
            )

        if len(mindfulness.stateOfMind) <= MAX_ITEMIZED_MOOD_ENTRIES:
            lines.extend(["", template.header("Mood Entries", depth_offset=1), ""])
            for entry in mindfulness.stateOfMind:
                emoji = f"{entry.valence_emoji} " if template.use_emoji else ""
                line = (
                    f"{bullet} **{customization.format_time(entry.timestamp)}** "
                    f"{emoji}({entry.kind.label}): {entry.valence_percent}%"
                )
                if entry.labels:
                    line += f" — {', '.join(entry.labels)}"
                lines.append(line)
        return lines

    def _workout_lines(self, data: HealthData, customization: FormatCustomization) -> list[str]:
        template = customization.markdown_template
        converter = customization.unit_converter
        bullet = template.bullet
        emoji = f"{WORKOUTS_EMOJI} " if template.use_emoji else ""
        lines = ["", template.header(f"{emoji}{WORKOUTS_TITLE}")]

        for index, workout in enumerate(data.workouts, 1):
            lines.extend(
                [
                    "",
                    template.header(f"{index}. {workout.workout_type_name}", depth_offset=1),
                    "",
                    f"{bullet} **Time:** {customization.format_time(workout.startTime)}",
                    f"{bullet} **Duration:** {format_duration(workout.duration)}",
                ]
            )
            if workout.distance is not None and workout.distance > 0:
                lines.append(f"{bullet} **Distance:** {converter.format_distance(workout.distance)}")
            if workout.calories is not None and workout.calories > 0:
                lines.append(f"{bullet} **Calories:** {int(workout.calories)} kcal")
        return lines
