"""JSON exporter: base-unit values plus formatted and percent duplicates."""

import json

import structlog

from ..models import (
    ExportFormat,
    HealthData,
    MindfulnessData,
    StateOfMindEntry,
    WorkoutData,
    valence_percent,
)
from ..profile import FormatCustomization
from ..types import JSONObject, StateOfMindEntryPayload, WorkoutPayload
from .base import BaseExporter, format_duration, plain_number
from .fields import CATEGORIES, MINDFULNESS

logger = structlog.get_logger(__name__)

EMPTY_DOCUMENT = "{}"


class JsonExporter(BaseExporter):
    """Pretty-printed JSON document for one day.

    Numbers stay in base units (seconds, meters, kilograms, fractions). The
    redundant ``*Formatted``, ``*Percent`` and legacy keys are kept for
    consumers that read them.
    """

    format = ExportFormat.JSON

    def render(self, data: HealthData, customization: FormatCustomization) -> str:
        document = self.build_document(data, customization)
        try:
            return json.dumps(document, indent=2, ensure_ascii=False, allow_nan=False)
        except (TypeError, ValueError) as exc:
            logger.warning(
                "json_serialization_failed",
                date=data.date.isoformat(),
                error=str(exc),
            )
            return EMPTY_DOCUMENT

    def build_document(self, data: HealthData, customization: FormatCustomization) -> JSONObject:
        """Assemble the document as plain dicts and lists."""
        document: JSONObject = {
            "date": customization.format_date(data.date),
            "type": "health-data",
            "units": customization.unit_preference.value.lower(),
        }

        for category in CATEGORIES:
            record = getattr(data, category.name)
            if not record.has_data:
                continue
            section: JSONObject = {}
            for metric, value in category.values(record, category.positive_only):
                section[metric.name] = plain_number(value)
                for key, derive in metric.json_extras:
                    section[key] = plain_number(derive(value))
            if category is MINDFULNESS:
                section.update(self._state_of_mind(record, customization))
            document[category.name] = section

        if data.workouts:
            document["workouts"] = [
                self._workout(workout, customization) for workout in data.workouts
            ]
        return document

    def _state_of_mind(
        self, mindfulness: MindfulnessData, customization: FormatCustomization
    ) -> JSONObject:
        if not mindfulness.stateOfMind:
            return {}
        section: JSONObject = {"stateOfMindCount": len(mindfulness.stateOfMind)}

        avg_valence = mindfulness.average_valence
        if avg_valence is not None:
            section["averageValence"] = avg_valence
            section["averageValencePercent"] = valence_percent(avg_valence)

        if mindfulness.daily_moods:
            section["dailyMoodCount"] = len(mindfulness.daily_moods)
            avg_daily = mindfulness.average_daily_mood_valence
            if avg_daily is not None:
                section["averageDailyMoodValence"] = avg_daily

        if mindfulness.momentary_emotions:
            section["momentaryEmotionCount"] = len(mindfulness.momentary_emotions)
        if mindfulness.all_labels:
            section["emotionLabels"] = mindfulness.all_labels
        if mindfulness.all_associations:
            section["associations"] = mindfulness.all_associations

        section["stateOfMindEntries"] = [
            self._entry(entry, customization) for entry in mindfulness.stateOfMind
        ]
        return section

    def _entry(
        self, entry: StateOfMindEntry, customization: FormatCustomization
    ) -> StateOfMindEntryPayload:
        payload: StateOfMindEntryPayload = {
            "timestamp": customization.format_time(entry.timestamp),
            "kind": entry.kind.value,
            "valence": entry.valence,
            "valencePercent": entry.valence_percent,
            "valenceDescription": entry.valence_description,
        }
        if entry.labels:
            payload["labels"] = list(entry.labels)
        if entry.associations:
            payload["associations"] = list(entry.associations)
        return payload

    def _workout(self, workout: WorkoutData, customization: FormatCustomization) -> WorkoutPayload:
        payload: WorkoutPayload = {
            "type": workout.workout_type_name,
            "startTime": customization.format_time(workout.startTime),
            "duration": plain_number(workout.duration),
            "durationFormatted": format_duration(workout.duration),
        }
        if workout.distance is not None and workout.distance > 0:
            payload["distance"] = plain_number(workout.distance)
            payload["distanceFormatted"] = customization.unit_converter.format_distance(
                workout.distance
            )
        if workout.calories is not None and workout.calories > 0:
            payload["calories"] = plain_number(workout.calories)
        return payload
