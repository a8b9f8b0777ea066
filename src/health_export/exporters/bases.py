"""Obsidian Bases exporter: every metric as a queryable frontmatter property."""

from ..models import ExportFormat, HealthData, MindfulnessData, valence_percent
from ..profile import FormatCustomization
from ..units import UnitConverter
from .base import BaseExporter, format_number, pluralize, tag_list
from .fields import CATEGORIES, MINDFULNESS

NOTES_HEADING = "## Notes"


class ObsidianBasesExporter(BaseExporter):
    """Flattens the aggregate into ``key: value`` frontmatter plus a short body.

    This is the only exporter that honours frontmatter key overrides: every
    metric key is resolved through ``FrontmatterConfig.output_key`` and
    skipped when the override omits it.
    """

    format = ExportFormat.OBSIDIAN_BASES

    def render(self, data: HealthData, customization: FormatCustomization) -> str:
        date_string = customization.format_date(data.date)
        fm_config = customization.frontmatter_config
        converter = customization.unit_converter

        frontmatter = ["---", *fm_config.static_lines(date_string)]
        for key, value in self._properties(data, converter):
            output_key = fm_config.output_key(key)
            if output_key is not None:
                frontmatter.append(f"{output_key}: {value}")
        frontmatter.append("---")

        body = [f"# Health — {date_string}"]
        summary = self._summary_line(data)
        if summary:
            body.extend(["", summary])
        # Always present so user notes have a home
        body.extend(["", NOTES_HEADING, "", ""])

        return "\n".join(frontmatter + body)

    def _properties(self, data: HealthData, converter: UnitConverter) -> list[tuple[str, str]]:
        """Canonical ``(key, value)`` pairs in category order."""
        properties: list[tuple[str, str]] = []
        for category in CATEGORIES:
            record = getattr(data, category.name)
            if not record.has_data:
                continue
            for metric, value in category.values(record, category.positive_only):
                for key, render in metric.bases:
                    properties.append((key, render(value, converter)))
            if category is MINDFULNESS:
                properties.extend(self._mood_properties(record))

        if data.workouts:
            properties.extend(self._workout_properties(data, converter))
        return properties

    def _mood_properties(self, mindfulness: MindfulnessData) -> list[tuple[str, str]]:
        if not mindfulness.stateOfMind:
            return []
        properties = [("mood_entries", str(len(mindfulness.stateOfMind)))]

        avg_valence = mindfulness.average_valence
        if avg_valence is not None:
            properties.append(("average_mood_valence", f"{avg_valence:.2f}"))
            properties.append(("average_mood_percent", str(valence_percent(avg_valence))))

        if mindfulness.daily_moods:
            properties.append(("daily_mood_count", str(len(mindfulness.daily_moods))))
            avg_daily = mindfulness.average_daily_mood_valence
            if avg_daily is not None:
                properties.append(("daily_mood_percent", str(valence_percent(avg_daily))))

        if mindfulness.momentary_emotions:
            properties.append(
                ("momentary_emotion_count", str(len(mindfulness.momentary_emotions)))
            )
        if mindfulness.all_labels:
            properties.append(("mood_labels", tag_list(mindfulness.all_labels)))
        if mindfulness.all_associations:
            properties.append(("mood_associations", tag_list(mindfulness.all_associations)))
        return properties

    def _workout_properties(
        self, data: HealthData, converter: UnitConverter
    ) -> list[tuple[str, str]]:
        """Workouts collapse to day totals and a list of distinct types."""
        workouts = data.workouts
        properties = [("workout_count", str(len(workouts)))]

        total_duration = sum(w.duration for w in workouts)
        properties.append(("workout_minutes", str(int(total_duration / 60))))

        total_calories = sum(w.calories for w in workouts if w.calories is not None)
        if total_calories > 0:
            properties.append(("workout_calories", str(int(total_calories))))

        total_distance = sum(w.distance for w in workouts if w.distance is not None)
        if total_distance > 0:
            converted = converter.convert_distance(total_distance)
            properties.append(("workout_distance_km", f"{converted:.2f}"))

        properties.append(("workouts", tag_list([w.workout_type_name for w in workouts])))
        return properties

    def _summary_line(self, data: HealthData) -> str:
        items = []
        if data.sleep.totalDuration > 0:
            hours = int(data.sleep.totalDuration) // 3600
            minutes = (int(data.sleep.totalDuration) % 3600) // 60
            items.append(f"{hours}h {minutes}m sleep")
        if data.activity.steps is not None:
            items.append(f"{format_number(data.activity.steps)} steps")
        if data.nutrition.dietaryEnergy is not None:
            items.append(f"{int(data.nutrition.dietaryEnergy)} kcal")
        minutes = data.mindfulness.mindfulMinutes
        if minutes is not None and minutes > 0:
            items.append(f"{int(minutes)} mindful min")
        avg_valence = data.mindfulness.average_valence
        if avg_valence is not None:
            items.append(f"mood: {valence_percent(avg_valence)}%")
        if data.workouts:
            types = {w.workout_type_name for w in data.workouts}
            count = len(data.workouts)
            if len(types) == 1:
                noun = f"{types.pop().lower()} workout"
                items.append(pluralize(count, noun))
            else:
                items.append(pluralize(count, "workout"))
        return " · ".join(items)
