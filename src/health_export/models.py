"""Per-day health data aggregate and the data-type filter.

The aggregate is assembled by the health-store collaborator and is never
mutated afterwards; filtering builds a new copy.
"""

import datetime as dt
from enum import Enum
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .profile import FormatCustomization

_FROZEN = ConfigDict(frozen=True, allow_inf_nan=False, extra="forbid")


def valence_percent(valence: float) -> int:
    """Map a valence in [-1, 1] to 0-100, truncating toward zero."""
    return int(((valence + 1.0) / 2.0) * 100)


def valence_description(valence: float) -> str:
    """Five-bucket description of a valence; values outside [-1, 1] are Unknown."""
    if -1.0 <= valence < -0.6:
        return "Very Unpleasant"
    if -0.6 <= valence < -0.2:
        return "Unpleasant"
    if -0.2 <= valence < 0.2:
        return "Neutral"
    if 0.2 <= valence < 0.6:
        return "Pleasant"
    if 0.6 <= valence <= 1.0:
        return "Very Pleasant"
    return "Unknown"


_VALENCE_EMOJI = {
    "Very Unpleasant": "😢",
    "Unpleasant": "😔",
    "Neutral": "😐",
    "Pleasant": "🙂",
    "Very Pleasant": "😊",
}


def valence_emoji(valence: float) -> str:
    return _VALENCE_EMOJI.get(valence_description(valence), "❓")


class _Category(BaseModel):
    """Base for optional-field categories: has data when any field is set."""

    model_config = _FROZEN

    @property
    def has_data(self) -> bool:
        return any(getattr(self, name) is not None for name in type(self).model_fields)


class SleepData(BaseModel):
    """Sleep durations in seconds."""

    model_config = _FROZEN

    totalDuration: float = Field(default=0.0, ge=0)
    deepSleep: float = Field(default=0.0, ge=0)
    remSleep: float = Field(default=0.0, ge=0)
    # May include untyped "asleep" time
    coreSleep: float = Field(default=0.0, ge=0)
    awakeTime: float = Field(default=0.0, ge=0)
    inBedTime: float = Field(default=0.0, ge=0)

    @property
    def has_data(self) -> bool:
        return any(getattr(self, name) > 0 for name in type(self).model_fields)


class ActivityData(_Category):
    steps: int | None = None
    activeCalories: float | None = None
    exerciseMinutes: float | None = None
    flightsClimbed: int | None = None
    walkingRunningDistance: float | None = Field(default=None, description="meters")
    standHours: int | None = None
    basalEnergyBurned: float | None = None
    cyclingDistance: float | None = Field(default=None, description="meters")
    swimmingDistance: float | None = Field(default=None, description="meters")
    swimmingStrokes: int | None = None
    pushCount: int | None = Field(default=None, description="Wheelchair pushes")


class HeartData(_Category):
    restingHeartRate: float | None = None
    walkingHeartRateAverage: float | None = None
    averageHeartRate: float | None = None
    hrv: float | None = Field(default=None, description="milliseconds")
    heartRateMin: float | None = None
    heartRateMax: float | None = None


class VitalsData(_Category):
    """Daily avg/min/max aggregates of vital signs."""

    respiratoryRateAvg: float | None = None
    respiratoryRateMin: float | None = None
    respiratoryRateMax: float | None = None

    # Fractions 0-1
    bloodOxygenAvg: float | None = None
    bloodOxygenMin: float | None = None
    bloodOxygenMax: float | None = None

    # Celsius
    bodyTemperatureAvg: float | None = None
    bodyTemperatureMin: float | None = None
    bodyTemperatureMax: float | None = None

    bloodPressureSystolicAvg: float | None = None
    bloodPressureSystolicMin: float | None = None
    bloodPressureSystolicMax: float | None = None
    bloodPressureDiastolicAvg: float | None = None
    bloodPressureDiastolicMin: float | None = None
    bloodPressureDiastolicMax: float | None = None

    # mg/dL
    bloodGlucoseAvg: float | None = None
    bloodGlucoseMin: float | None = None
    bloodGlucoseMax: float | None = None

    @property
    def has_data(self) -> bool:
        """Only the averages count; a lone min or max is not data."""
        return any(
            value is not None
            for value in (
                self.respiratoryRateAvg,
                self.bloodOxygenAvg,
                self.bodyTemperatureAvg,
                self.bloodPressureSystolicAvg,
                self.bloodPressureDiastolicAvg,
                self.bloodGlucoseAvg,
            )
        )


class BodyData(_Category):
    weight: float | None = Field(default=None, description="kg")
    bodyFatPercentage: float | None = Field(default=None, description="fraction 0-1")
    height: float | None = Field(default=None, description="meters")
    bmi: float | None = None
    leanBodyMass: float | None = Field(default=None, description="kg")
    waistCircumference: float | None = Field(default=None, description="meters")


class NutritionData(_Category):
    dietaryEnergy: float | None = Field(default=None, description="kcal")
    protein: float | None = Field(default=None, description="grams")
    carbohydrates: float | None = Field(default=None, description="grams")
    fat: float | None = Field(default=None, description="grams")
    fiber: float | None = Field(default=None, description="grams")
    sugar: float | None = Field(default=None, description="grams")
    sodium: float | None = Field(default=None, description="mg")
    water: float | None = Field(default=None, description="liters")
    caffeine: float | None = Field(default=None, description="mg")
    cholesterol: float | None = Field(default=None, description="mg")
    saturatedFat: float | None = Field(default=None, description="grams")


class StateOfMindKind(str, Enum):
    MOMENTARY_EMOTION = "momentaryEmotion"
    DAILY_MOOD = "dailyMood"

    @property
    def label(self) -> str:
        if self is StateOfMindKind.DAILY_MOOD:
            return "Daily Mood"
        return "Momentary Emotion"


class StateOfMindEntry(BaseModel):
    """A single logged emotion or daily mood."""

    model_config = _FROZEN

    id: UUID = Field(default_factory=uuid4)
    timestamp: dt.datetime
    kind: StateOfMindKind
    valence: float = Field(description="-1.0 (very unpleasant) to 1.0 (very pleasant)")
    labels: tuple[str, ...] = ()
    associations: tuple[str, ...] = ()

    @property
    def valence_description(self) -> str:
        return valence_description(self.valence)

    @property
    def valence_percent(self) -> int:
        return valence_percent(self.valence)

    @property
    def valence_emoji(self) -> str:
        return valence_emoji(self.valence)


class MindfulnessData(BaseModel):
    model_config = _FROZEN

    mindfulMinutes: float | None = None
    mindfulSessions: int | None = None
    stateOfMind: tuple[StateOfMindEntry, ...] = ()

    @property
    def has_data(self) -> bool:
        return (
            self.mindfulMinutes is not None
            or self.mindfulSessions is not None
            or bool(self.stateOfMind)
        )

    @property
    def daily_moods(self) -> list[StateOfMindEntry]:
        return [e for e in self.stateOfMind if e.kind == StateOfMindKind.DAILY_MOOD]

    @property
    def momentary_emotions(self) -> list[StateOfMindEntry]:
        return [e for e in self.stateOfMind if e.kind == StateOfMindKind.MOMENTARY_EMOTION]

    @property
    def average_valence(self) -> float | None:
        return _mean_valence(self.stateOfMind)

    @property
    def average_daily_mood_valence(self) -> float | None:
        return _mean_valence(self.daily_moods)

    @property
    def all_labels(self) -> list[str]:
        return sorted({label for e in self.stateOfMind for label in e.labels})

    @property
    def all_associations(self) -> list[str]:
        return sorted({assoc for e in self.stateOfMind for assoc in e.associations})


def _mean_valence(entries) -> float | None:
    entries = list(entries)
    if not entries:
        return None
    return sum(e.valence for e in entries) / len(entries)


class MobilityData(_Category):
    walkingSpeed: float | None = Field(default=None, description="m/s")
    walkingStepLength: float | None = Field(default=None, description="meters")
    walkingDoubleSupportPercentage: float | None = Field(default=None, description="fraction")
    walkingAsymmetryPercentage: float | None = Field(default=None, description="fraction")
    stairAscentSpeed: float | None = Field(default=None, description="m/s")
    stairDescentSpeed: float | None = Field(default=None, description="m/s")
    sixMinuteWalkDistance: float | None = Field(default=None, description="meters")


class HearingData(_Category):
    headphoneAudioLevel: float | None = Field(default=None, description="dB")
    environmentalSoundLevel: float | None = Field(default=None, description="dB")


class WorkoutType(str, Enum):
    """Platform workout activity types."""

    RUNNING = "running"
    WALKING = "walking"
    CYCLING = "cycling"
    SWIMMING = "swimming"
    HIKING = "hiking"
    YOGA = "yoga"
    FUNCTIONAL_STRENGTH_TRAINING = "functionalStrengthTraining"
    TRADITIONAL_STRENGTH_TRAINING = "traditionalStrengthTraining"
    CORE_TRAINING = "coreTraining"
    HIGH_INTENSITY_INTERVAL_TRAINING = "highIntensityIntervalTraining"
    ELLIPTICAL = "elliptical"
    ROWING = "rowing"
    STAIR_CLIMBING = "stairClimbing"
    PILATES = "pilates"
    DANCE = "dance"
    COOLDOWN = "cooldown"
    MIXED_CARDIO = "mixedCardio"
    SOCIAL_DANCE = "socialDance"
    PICKLEBALL = "pickleball"
    TENNIS = "tennis"
    BADMINTON = "badminton"
    TABLE_TENNIS = "tableTennis"
    GOLF = "golf"
    SOCCER = "soccer"
    BASKETBALL = "basketball"
    BASEBALL = "baseball"
    SOFTBALL = "softball"
    VOLLEYBALL = "volleyball"
    AMERICAN_FOOTBALL = "americanFootball"
    RUGBY = "rugby"
    HOCKEY = "hockey"
    LACROSSE = "lacrosse"
    SKATING_SPORTS = "skatingSports"
    SNOW_SPORTS = "snowSports"
    WATER_SPORTS = "waterSports"
    MARTIAL_ARTS = "martialArts"
    BOXING = "boxing"
    KICKBOXING = "kickboxing"
    WRESTLING = "wrestling"
    CLIMBING = "climbing"
    JUMP_ROPE = "jumpRope"
    MIND_AND_BODY = "mindAndBody"
    FLEXIBILITY = "flexibility"
    OTHER = "other"

    @classmethod
    def _missing_(cls, value):
        return cls.OTHER

    @property
    def display_name(self) -> str:
        return _WORKOUT_DISPLAY_NAMES.get(self, _default_display_name(self.value))


_WORKOUT_DISPLAY_NAMES = {
    WorkoutType.FUNCTIONAL_STRENGTH_TRAINING: "Strength Training",
    WorkoutType.TRADITIONAL_STRENGTH_TRAINING: "Strength Training",
    WorkoutType.HIGH_INTENSITY_INTERVAL_TRAINING: "HIIT",
    WorkoutType.SKATING_SPORTS: "Skating",
    WorkoutType.MIND_AND_BODY: "Mind & Body",
}


def _default_display_name(value: str) -> str:
    """camelCase -> Title Case (``tableTennis`` -> ``Table Tennis``)."""
    words = []
    current = ""
    for char in value:
        if char.isupper() and current:
            words.append(current)
            current = char
        else:
            current += char
    words.append(current)
    return " ".join(word[:1].upper() + word[1:] for word in words)


class WorkoutData(BaseModel):
    model_config = _FROZEN

    id: UUID = Field(default_factory=uuid4)
    workoutType: WorkoutType = WorkoutType.OTHER
    startTime: dt.datetime
    duration: float = Field(ge=0, description="seconds")
    calories: float | None = None
    distance: float | None = Field(default=None, description="meters")

    @field_validator("workoutType", mode="before")
    @classmethod
    def coerce_workout_type(cls, v):
        """Unknown activity types fall back to OTHER."""
        if isinstance(v, WorkoutType):
            return v
        return WorkoutType(v)

    @property
    def workout_type_name(self) -> str:
        return self.workoutType.display_name


class DataTypeSelection(BaseModel):
    """Categories enabled for an export. Missing flags are off."""

    model_config = ConfigDict(frozen=True)

    sleep: bool = False
    activity: bool = False
    heart: bool = False
    vitals: bool = False
    body: bool = False
    nutrition: bool = False
    mindfulness: bool = False
    mobility: bool = False
    hearing: bool = False
    workouts: bool = False

    @classmethod
    def all(cls) -> "DataTypeSelection":
        return cls(**{name: True for name in cls.model_fields})

    @classmethod
    def only(cls, *categories: str) -> "DataTypeSelection":
        """Selection with just the named categories enabled; unknown names are ignored."""
        return cls(**{name: True for name in categories if name in cls.model_fields})

    def enabled(self) -> list[str]:
        return [name for name in type(self).model_fields if getattr(self, name)]


class HealthData(BaseModel):
    """Everything recorded for one calendar day."""

    model_config = _FROZEN

    date: dt.date
    sleep: SleepData = Field(default_factory=SleepData)
    activity: ActivityData = Field(default_factory=ActivityData)
    heart: HeartData = Field(default_factory=HeartData)
    vitals: VitalsData = Field(default_factory=VitalsData)
    body: BodyData = Field(default_factory=BodyData)
    nutrition: NutritionData = Field(default_factory=NutritionData)
    mindfulness: MindfulnessData = Field(default_factory=MindfulnessData)
    mobility: MobilityData = Field(default_factory=MobilityData)
    hearing: HearingData = Field(default_factory=HearingData)
    workouts: tuple[WorkoutData, ...] = ()

    @property
    def has_any_data(self) -> bool:
        return (
            self.sleep.has_data
            or self.activity.has_data
            or self.heart.has_data
            or self.vitals.has_data
            or self.body.has_data
            or self.nutrition.has_data
            or self.mindfulness.has_data
            or self.mobility.has_data
            or self.hearing.has_data
            or bool(self.workouts)
        )

    def filtered(self, selection: DataTypeSelection) -> "HealthData":
        return filtered(self, selection)


# Canonical empty value per category
_EMPTY_CATEGORIES = {
    "sleep": SleepData,
    "activity": ActivityData,
    "heart": HeartData,
    "vitals": VitalsData,
    "body": BodyData,
    "nutrition": NutritionData,
    "mindfulness": MindfulnessData,
    "mobility": MobilityData,
    "hearing": HearingData,
    "workouts": tuple,
}


def filtered(data: HealthData, selection: DataTypeSelection) -> HealthData:
    """Return a copy with every disabled category reset to its empty value.

    Enabled categories are carried over unchanged; the date is always kept.
    """
    update = {
        name: empty()
        for name, empty in _EMPTY_CATEGORIES.items()
        if not getattr(selection, name)
    }
    return data.model_copy(update=update)


class ExportFormat(str, Enum):
    """Output formats and their file extensions."""

    MARKDOWN = "markdown"
    OBSIDIAN_BASES = "obsidianBases"
    JSON = "json"
    CSV = "csv"

    @property
    def extension(self) -> str:
        if self is ExportFormat.JSON:
            return ".json"
        if self is ExportFormat.CSV:
            return ".csv"
        return ".md"

    @property
    def label(self) -> str:
        return _FORMAT_LABELS[self]


_FORMAT_LABELS = {
    ExportFormat.MARKDOWN: "Markdown",
    ExportFormat.OBSIDIAN_BASES: "Obsidian Bases",
    ExportFormat.JSON: "JSON",
    ExportFormat.CSV: "CSV",
}


def generate_filename(day: dt.date, export_format: ExportFormat) -> str:
    """``{ISO-date}{ext}``, e.g. ``2026-01-05.md``."""
    return f"{day.isoformat()}{ExportFormat(export_format).extension}"


class AdvancedExportSettings(BaseModel):
    """Per-export options passed to the orchestrator."""

    model_config = ConfigDict(frozen=True)

    data_types: DataTypeSelection = Field(default_factory=DataTypeSelection.all)
    export_format: ExportFormat = ExportFormat.MARKDOWN
    include_metadata: bool = Field(default=True, description="Emit Markdown frontmatter")
    group_by_category: bool = Field(default=True, description="Accepted for compatibility")
    format_customization: FormatCustomization = Field(default_factory=FormatCustomization)
