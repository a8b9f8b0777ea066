"""Ordered per-category field tables shared by the exporters.

Each metric is declared once with its canonical name and how every format
labels and renders it. Exporters walk these tables in order; only layouts
that genuinely differ per format (vital ranges, moods, workouts) are
written out by hand in the exporter itself.
"""

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any

from ..units import UnitConverter
from .base import format_duration, format_number, format_raw, percent_int, scaled_percent

Render = Callable[[float, UnitConverter], str]
Unit = str | Callable[[UnitConverter], str]


def _raw(v: float, c: UnitConverter) -> str:
    return format_raw(v)


def _int(v: float, c: UnitConverter) -> str:
    return str(int(v))


def _fixed(places: int) -> Render:
    return lambda v, c: f"{v:.{places}f}"


def _hours(v: float, c: UnitConverter) -> str:
    return f"{v / 3600:.2f}"


def _duration(v: float, c: UnitConverter) -> str:
    return format_duration(v)


def _number(v: float, c: UnitConverter) -> str:
    return format_number(v)


def _with_unit(render: Render, unit: str) -> Render:
    return lambda v, c: f"{render(v, c)} {unit}"


def _percent_fixed(v: float, c: UnitConverter) -> str:
    return f"{v * 100:.1f}"


def _percent_raw(v: float, c: UnitConverter) -> str:
    return format_raw(scaled_percent(v))


def _percent_int(v: float, c: UnitConverter) -> str:
    return str(percent_int(v))


@dataclass(frozen=True)
class MarkdownLine:
    label: str
    render: Render


@dataclass(frozen=True)
class CsvRow:
    metric: str
    unit: Unit
    render: Render = _raw

    def unit_for(self, converter: UnitConverter) -> str:
        if callable(self.unit):
            return self.unit(converter)
        return self.unit


@dataclass(frozen=True)
class MetricField:
    """One metric: canonical name plus per-format presentation."""

    name: str
    csv: CsvRow
    markdown: MarkdownLine | None = None
    bases: tuple[tuple[str, Render], ...] = ()
    json_extras: tuple[tuple[str, Callable[[float], Any]], ...] = ()


@dataclass(frozen=True)
class CategoryFields:
    """Ordered metric table for one category."""

    name: str
    title: str
    emoji: str
    fields: tuple[MetricField, ...] = field(default_factory=tuple)
    # Emit only values > 0 (Markdown, Bases, JSON)
    positive_only: bool = False
    # Emit only values > 0 in CSV
    csv_positive_only: bool = False
    # Metrics Markdown lists first, ahead of the rest in table order
    markdown_order: tuple[str, ...] = ()

    def values(self, record: Any, positive_only: bool) -> Iterator[tuple[MetricField, float]]:
        """Yield ``(field, value)`` for every populated metric in table order."""
        for metric in self.fields:
            value = getattr(record, metric.name)
            if value is None:
                continue
            if positive_only and not value > 0:
                continue
            yield metric, value

    def markdown_values(self, record: Any) -> list[tuple[MetricField, float]]:
        """Populated metrics in Markdown display order."""
        items = list(self.values(record, self.positive_only))
        if self.markdown_order:
            rank = {name: index for index, name in enumerate(self.markdown_order)}
            items.sort(key=lambda item: rank.get(item[0].name, len(rank)))
        return items


def _md(label: str, render: Render) -> MarkdownLine:
    return MarkdownLine(label, render)


SLEEP = CategoryFields(
    name="sleep",
    title="Sleep",
    emoji="😴",
    positive_only=True,
    csv_positive_only=True,
    fields=(
        MetricField(
            "totalDuration",
            CsvRow("Total Duration", "seconds"),
            _md("Total", _duration),
            (("sleep_total_hours", _hours),),
            (("totalDurationFormatted", format_duration),),
        ),
        MetricField(
            "deepSleep",
            CsvRow("Deep Sleep", "seconds"),
            _md("Deep", _duration),
            (("sleep_deep_hours", _hours),),
            (("deepSleepFormatted", format_duration),),
        ),
        MetricField(
            "remSleep",
            CsvRow("REM Sleep", "seconds"),
            _md("REM", _duration),
            (("sleep_rem_hours", _hours),),
            (("remSleepFormatted", format_duration),),
        ),
        MetricField(
            "coreSleep",
            CsvRow("Core Sleep", "seconds"),
            _md("Core", _duration),
            (("sleep_core_hours", _hours),),
            (("coreSleepFormatted", format_duration),),
        ),
        MetricField(
            "awakeTime",
            CsvRow("Awake Time", "seconds"),
            _md("Awake", _duration),
            (("sleep_awake_hours", _hours),),
            (("awakeTimeFormatted", format_duration),),
        ),
        MetricField(
            "inBedTime",
            CsvRow("In Bed Time", "seconds"),
            _md("In Bed", _duration),
            (("sleep_in_bed_hours", _hours),),
            (("inBedTimeFormatted", format_duration),),
        ),
    ),
    markdown_order=("totalDuration", "inBedTime"),
)


def _distance(v: float, c: UnitConverter) -> str:
    return c.format_distance(v)


def _converted_distance(v: float, c: UnitConverter) -> str:
    return f"{c.convert_distance(v):.2f}"


ACTIVITY = CategoryFields(
    name="activity",
    title="Activity",
    emoji="🏃",
    csv_positive_only=True,
    fields=(
        MetricField(
            "steps",
            CsvRow("Steps", "count"),
            _md("Steps", _number),
            (("steps", _int),),
        ),
        MetricField(
            "activeCalories",
            CsvRow("Active Calories", "kcal"),
            _md("Active Calories", _with_unit(_number, "kcal")),
            (("active_calories", _int),),
        ),
        MetricField(
            "basalEnergyBurned",
            CsvRow("Basal Energy", "kcal"),
            _md("Basal Energy", _with_unit(_number, "kcal")),
            (("basal_calories", _int),),
        ),
        MetricField(
            "exerciseMinutes",
            CsvRow("Exercise Minutes", "minutes"),
            _md("Exercise", _with_unit(_int, "min")),
            (("exercise_minutes", _int),),
        ),
        MetricField(
            "standHours",
            CsvRow("Stand Hours", "hours"),
            _md("Stand Hours", _int),
            (("stand_hours", _int),),
        ),
        MetricField(
            "flightsClimbed",
            CsvRow("Flights Climbed", "count"),
            _md("Flights Climbed", _int),
            (("flights_climbed", _int),),
        ),
        MetricField(
            "walkingRunningDistance",
            CsvRow("Walking Running Distance", UnitConverter.distance_unit, _converted_distance),
            _md("Walking/Running Distance", _distance),
            (("walking_running_km", _converted_distance),),
            (("walkingRunningDistanceKm", lambda v: v / 1000),),
        ),
        MetricField(
            "cyclingDistance",
            CsvRow("Cycling Distance", UnitConverter.distance_unit, _converted_distance),
            _md("Cycling Distance", _distance),
            (("cycling_km", _converted_distance),),
            (("cyclingDistanceKm", lambda v: v / 1000),),
        ),
        MetricField(
            "swimmingDistance",
            CsvRow("Swimming Distance", UnitConverter.distance_unit, _converted_distance),
            _md("Swimming Distance", _distance),
            (("swimming_m", _int),),
        ),
        MetricField(
            "swimmingStrokes",
            CsvRow("Swimming Strokes", "count"),
            _md("Swimming Strokes", _number),
            (("swimming_strokes", _int),),
        ),
        MetricField(
            "pushCount",
            CsvRow("Wheelchair Pushes", "count"),
            _md("Wheelchair Pushes", _number),
            (("wheelchair_pushes", _int),),
        ),
    ),
)

_bpm = _with_unit(_int, "bpm")

HEART = CategoryFields(
    name="heart",
    title="Heart",
    emoji="❤️",
    fields=(
        MetricField(
            "restingHeartRate",
            CsvRow("Resting Heart Rate", "bpm"),
            _md("Resting HR", _bpm),
            (("resting_heart_rate", _int),),
        ),
        MetricField(
            "walkingHeartRateAverage",
            CsvRow("Walking Heart Rate Average", "bpm"),
            _md("Walking HR Average", _bpm),
            (("walking_heart_rate", _int),),
        ),
        MetricField(
            "averageHeartRate",
            CsvRow("Average Heart Rate", "bpm"),
            _md("Average HR", _bpm),
            (("average_heart_rate", _int),),
        ),
        MetricField(
            "heartRateMin",
            CsvRow("Min Heart Rate", "bpm"),
            _md("Min HR", _bpm),
            (("heart_rate_min", _int),),
        ),
        MetricField(
            "heartRateMax",
            CsvRow("Max Heart Rate", "bpm"),
            _md("Max HR", _bpm),
            (("heart_rate_max", _int),),
        ),
        MetricField(
            "hrv",
            CsvRow("HRV", "ms"),
            _md("HRV", _with_unit(_fixed(1), "ms")),
            (("hrv_ms", _fixed(1)),),
        ),
    ),
)


def _temperature(v: float, c: UnitConverter) -> str:
    return f"{c.convert_temperature(v):.1f}"


def _vital(
    name: str,
    metric: str,
    unit: Unit,
    csv_render: Render,
    bases_key: str,
    bases_render: Render,
    is_avg: bool = False,
    json_extras: tuple[tuple[str, Callable[[float], Any]], ...] = (),
) -> MetricField:
    """Vitals carry a plain-key alias alongside the ``_avg`` key for compatibility."""
    if is_avg:
        bases = ((bases_key, bases_render), (f"{bases_key}_avg", bases_render))
    else:
        bases = ((bases_key, bases_render),)
    return MetricField(name, CsvRow(metric, unit, csv_render), None, bases, json_extras)


def _compat(key: str) -> tuple[str, Callable[[float], Any]]:
    return (key, lambda v: v)


# Markdown renders vitals with ranges; see MarkdownExporter
VITALS = CategoryFields(
    name="vitals",
    title="Vitals",
    emoji="🩺",
    fields=(
        _vital(
            "respiratoryRateAvg", "Respiratory Rate Avg", "breaths/min", _raw,
            "respiratory_rate", _fixed(1), is_avg=True,
            json_extras=(_compat("respiratoryRate"),),
        ),
        _vital(
            "respiratoryRateMin", "Respiratory Rate Min", "breaths/min", _raw,
            "respiratory_rate_min", _fixed(1),
        ),
        _vital(
            "respiratoryRateMax", "Respiratory Rate Max", "breaths/min", _raw,
            "respiratory_rate_max", _fixed(1),
        ),
        _vital(
            "bloodOxygenAvg", "Blood Oxygen Avg", "percent", _percent_raw,
            "blood_oxygen", _percent_int, is_avg=True,
            json_extras=(
                _compat("bloodOxygen"),
                ("bloodOxygenPercent", scaled_percent),
                ("bloodOxygenAvgPercent", scaled_percent),
            ),
        ),
        _vital(
            "bloodOxygenMin", "Blood Oxygen Min", "percent", _percent_raw,
            "blood_oxygen_min", _percent_int,
            json_extras=(("bloodOxygenMinPercent", scaled_percent),),
        ),
        _vital(
            "bloodOxygenMax", "Blood Oxygen Max", "percent", _percent_raw,
            "blood_oxygen_max", _percent_int,
            json_extras=(("bloodOxygenMaxPercent", scaled_percent),),
        ),
        _vital(
            "bodyTemperatureAvg", "Body Temperature Avg", UnitConverter.temperature_unit,
            _temperature, "body_temperature", _temperature, is_avg=True,
            json_extras=(_compat("bodyTemperature"),),
        ),
        _vital(
            "bodyTemperatureMin", "Body Temperature Min", UnitConverter.temperature_unit,
            _temperature, "body_temperature_min", _temperature,
        ),
        _vital(
            "bodyTemperatureMax", "Body Temperature Max", UnitConverter.temperature_unit,
            _temperature, "body_temperature_max", _temperature,
        ),
        _vital(
            "bloodPressureSystolicAvg", "Blood Pressure Systolic Avg", "mmHg", _raw,
            "blood_pressure_systolic", _int, is_avg=True,
            json_extras=(_compat("bloodPressureSystolic"),),
        ),
        _vital(
            "bloodPressureSystolicMin", "Blood Pressure Systolic Min", "mmHg", _raw,
            "blood_pressure_systolic_min", _int,
        ),
        _vital(
            "bloodPressureSystolicMax", "Blood Pressure Systolic Max", "mmHg", _raw,
            "blood_pressure_systolic_max", _int,
        ),
        _vital(
            "bloodPressureDiastolicAvg", "Blood Pressure Diastolic Avg", "mmHg", _raw,
            "blood_pressure_diastolic", _int, is_avg=True,
            json_extras=(_compat("bloodPressureDiastolic"),),
        ),
        _vital(
            "bloodPressureDiastolicMin", "Blood Pressure Diastolic Min", "mmHg", _raw,
            "blood_pressure_diastolic_min", _int,
        ),
        _vital(
            "bloodPressureDiastolicMax", "Blood Pressure Diastolic Max", "mmHg", _raw,
            "blood_pressure_diastolic_max", _int,
        ),
        _vital(
            "bloodGlucoseAvg", "Blood Glucose Avg", "mg/dL", _raw,
            "blood_glucose", _fixed(1), is_avg=True,
            json_extras=(_compat("bloodGlucose"),),
        ),
        _vital(
            "bloodGlucoseMin", "Blood Glucose Min", "mg/dL", _raw,
            "blood_glucose_min", _fixed(1),
        ),
        _vital(
            "bloodGlucoseMax", "Blood Glucose Max", "mg/dL", _raw,
            "blood_glucose_max", _fixed(1),
        ),
    ),
)


def _weight(v: float, c: UnitConverter) -> str:
    return f"{c.convert_weight(v):.1f}"


def _length(v: float, c: UnitConverter) -> str:
    return f"{c.convert_length(v):.1f}"


BODY = CategoryFields(
    name="body",
    title="Body",
    emoji="📏",
    fields=(
        MetricField(
            "weight",
            CsvRow("Weight", UnitConverter.weight_unit, _weight),
            _md("Weight", lambda v, c: c.format_weight(v)),
            (("weight_kg", _weight),),
        ),
        MetricField(
            "height",
            CsvRow("Height", UnitConverter.height_unit, lambda v, c: f"{c.convert_height(v):.2f}"),
            _md("Height", lambda v, c: c.format_height(v)),
            (("height_m", lambda v, c: f"{c.convert_height(v):.2f}"),),
        ),
        MetricField(
            "bmi",
            CsvRow("BMI", ""),
            _md("BMI", _fixed(1)),
            (("bmi", _fixed(1)),),
        ),
        MetricField(
            "bodyFatPercentage",
            CsvRow("Body Fat Percentage", "percent", _percent_raw),
            _md("Body Fat", lambda v, c: f"{v * 100:.1f}%"),
            (("body_fat_percent", _percent_fixed),),
            (("bodyFatPercent", scaled_percent),),
        ),
        MetricField(
            "leanBodyMass",
            CsvRow("Lean Body Mass", UnitConverter.weight_unit, _weight),
            _md("Lean Body Mass", lambda v, c: c.format_weight(v)),
            (("lean_body_mass_kg", _weight),),
        ),
        MetricField(
            "waistCircumference",
            CsvRow("Waist Circumference", UnitConverter.length_unit, _length),
            _md("Waist Circumference", lambda v, c: c.format_length(v)),
            (("waist_circumference_cm", _length),),
            (("waistCircumferenceCm", lambda v: round(v * 100, 6)),),
        ),
    ),
)

_grams = _with_unit(_fixed(1), "g")


def _nutrient(name: str, label: str, key: str) -> MetricField:
    """Gram-valued nutrient: ``%.1f g`` in Markdown, ``<key>_g`` in Bases."""
    return MetricField(name, CsvRow(label, "g"), _md(label, _grams), ((key, _fixed(1)),))


def _volume(v: float, c: UnitConverter) -> str:
    return format_raw(round(c.convert_volume(v), 3))


NUTRITION = CategoryFields(
    name="nutrition",
    title="Nutrition",
    emoji="🍎",
    csv_positive_only=True,
    fields=(
        MetricField(
            "dietaryEnergy",
            CsvRow("Dietary Energy", "kcal"),
            _md("Calories", _with_unit(_number, "kcal")),
            (("dietary_calories", _int),),
        ),
        _nutrient("protein", "Protein", "protein_g"),
        _nutrient("carbohydrates", "Carbohydrates", "carbohydrates_g"),
        _nutrient("fat", "Fat", "fat_g"),
        _nutrient("saturatedFat", "Saturated Fat", "saturated_fat_g"),
        _nutrient("fiber", "Fiber", "fiber_g"),
        _nutrient("sugar", "Sugar", "sugar_g"),
        MetricField(
            "sodium",
            CsvRow("Sodium", "mg"),
            _md("Sodium", _with_unit(_number, "mg")),
            (("sodium_mg", _int),),
        ),
        MetricField(
            "cholesterol",
            CsvRow("Cholesterol", "mg"),
            _md("Cholesterol", _with_unit(_fixed(1), "mg")),
            (("cholesterol_mg", _fixed(1)),),
        ),
        MetricField(
            "water",
            CsvRow("Water", UnitConverter.volume_unit, _volume),
            _md("Water", lambda v, c: c.format_volume(v)),
            (("water_l", lambda v, c: f"{c.convert_volume(v):.2f}"),),
        ),
        MetricField(
            "caffeine",
            CsvRow("Caffeine", "mg"),
            _md("Caffeine", _with_unit(_fixed(1), "mg")),
            (("caffeine_mg", _fixed(1)),),
        ),
    ),
)

# State of mind entries are rendered by each exporter
MINDFULNESS = CategoryFields(
    name="mindfulness",
    title="Mindfulness",
    emoji="🧘",
    csv_positive_only=True,
    fields=(
        MetricField(
            "mindfulMinutes",
            CsvRow("Mindful Minutes", "minutes"),
            _md("Mindful Minutes", _with_unit(_int, "min")),
            (("mindful_minutes", _int),),
        ),
        MetricField(
            "mindfulSessions",
            CsvRow("Mindful Sessions", "count"),
            _md("Sessions", _int),
            (("mindful_sessions", _int),),
        ),
    ),
)


def _speed(v: float, c: UnitConverter) -> str:
    return c.format_speed(v)


def _converted_speed(v: float, c: UnitConverter) -> str:
    return f"{c.convert_speed(v):.2f}"


MOBILITY = CategoryFields(
    name="mobility",
    title="Mobility",
    emoji="🚶",
    csv_positive_only=True,
    fields=(
        MetricField(
            "walkingSpeed",
            CsvRow("Walking Speed", UnitConverter.speed_unit, _converted_speed),
            _md("Walking Speed", _speed),
            (("walking_speed", _fixed(2)),),
        ),
        MetricField(
            "walkingStepLength",
            CsvRow("Walking Step Length", UnitConverter.length_unit, _length),
            _md("Step Length", lambda v, c: c.format_length(v)),
            (("step_length_cm", lambda v, c: f"{v * 100:.1f}"),),
        ),
        MetricField(
            "walkingDoubleSupportPercentage",
            CsvRow("Double Support Percentage", "percent", _percent_raw),
            _md("Double Support", lambda v, c: f"{v * 100:.1f}%"),
            (("double_support_percent", _percent_fixed),),
        ),
        MetricField(
            "walkingAsymmetryPercentage",
            CsvRow("Walking Asymmetry", "percent", _percent_raw),
            _md("Walking Asymmetry", lambda v, c: f"{v * 100:.1f}%"),
            (("walking_asymmetry_percent", _percent_fixed),),
        ),
        MetricField(
            "stairAscentSpeed",
            CsvRow("Stair Ascent Speed", UnitConverter.speed_unit, _converted_speed),
            _md("Stair Ascent Speed", _speed),
            (("stair_ascent_speed", _fixed(2)),),
        ),
        MetricField(
            "stairDescentSpeed",
            CsvRow("Stair Descent Speed", UnitConverter.speed_unit, _converted_speed),
            _md("Stair Descent Speed", _speed),
            (("stair_descent_speed", _fixed(2)),),
        ),
        MetricField(
            "sixMinuteWalkDistance",
            CsvRow("Six Minute Walk Distance", UnitConverter.distance_unit, _converted_distance),
            _md("6-Min Walk Distance", _distance),
            (("six_min_walk_m", _int),),
        ),
    ),
)

HEARING = CategoryFields(
    name="hearing",
    title="Hearing",
    emoji="👂",
    csv_positive_only=True,
    fields=(
        MetricField(
            "headphoneAudioLevel",
            CsvRow("Headphone Audio Level", "dB"),
            _md("Headphone Audio Level", _with_unit(_fixed(1), "dB")),
            (("headphone_audio_db", _fixed(1)),),
        ),
        MetricField(
            "environmentalSoundLevel",
            CsvRow("Environmental Sound Level", "dB"),
            _md("Environmental Sound Level", _with_unit(_fixed(1), "dB")),
            (("environmental_sound_db", _fixed(1)),),
        ),
    ),
)

# Fixed export order; workouts follow as their own section
CATEGORIES: tuple[CategoryFields, ...] = (
    SLEEP,
    ACTIVITY,
    HEART,
    VITALS,
    BODY,
    NUTRITION,
    MINDFULNESS,
    MOBILITY,
    HEARING,
)

WORKOUTS_TITLE = "Workouts"
WORKOUTS_EMOJI = "💪"
