"""Pytest configuration and fixtures."""

from datetime import date, datetime
from pathlib import Path
import sys

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from health_export.models import (  # noqa: E402
    ActivityData,
    BodyData,
    HealthData,
    HearingData,
    HeartData,
    MindfulnessData,
    MobilityData,
    NutritionData,
    SleepData,
    StateOfMindEntry,
    StateOfMindKind,
    VitalsData,
    WorkoutData,
)

SAMPLE_DATE = date(2026, 1, 15)


@pytest.fixture
def sample_date():
    return SAMPLE_DATE


@pytest.fixture
def sleep_and_steps():
    """8h 30m of sleep and 8,432 steps, nothing else."""
    return HealthData(
        date=SAMPLE_DATE,
        sleep=SleepData(totalDuration=30600),
        activity=ActivityData(steps=8432),
    )


@pytest.fixture
def spo2_day():
    """Blood oxygen 97% with a 95-99% daily range."""
    return HealthData(
        date=SAMPLE_DATE,
        vitals=VitalsData(bloodOxygenAvg=0.97, bloodOxygenMin=0.95, bloodOxygenMax=0.99),
    )


@pytest.fixture
def mood_entries():
    return (
        StateOfMindEntry(
            timestamp=datetime(2026, 1, 15, 8, 30),
            kind=StateOfMindKind.MOMENTARY_EMOTION,
            valence=0.75,
            labels=("Happy", "Calm"),
            associations=("Work",),
        ),
        StateOfMindEntry(
            timestamp=datetime(2026, 1, 15, 21, 0),
            kind=StateOfMindKind.DAILY_MOOD,
            valence=0.25,
            labels=("Content",),
            associations=("Family", "Self Care"),
        ),
    )


@pytest.fixture
def full_day(mood_entries):
    """A day with every category populated."""
    return HealthData(
        date=SAMPLE_DATE,
        sleep=SleepData(
            totalDuration=27000,
            deepSleep=5400,
            remSleep=6300,
            coreSleep=15300,
            awakeTime=900,
            inBedTime=28800,
        ),
        activity=ActivityData(
            steps=10523,
            activeCalories=450.7,
            exerciseMinutes=35,
            flightsClimbed=12,
            walkingRunningDistance=7250.0,
            standHours=10,
            basalEnergyBurned=1650.2,
        ),
        heart=HeartData(restingHeartRate=58, hrv=45.5, heartRateMin=52, heartRateMax=165),
        vitals=VitalsData(
            respiratoryRateAvg=14.5,
            respiratoryRateMin=12.0,
            respiratoryRateMax=17.0,
            bloodOxygenAvg=0.97,
            bloodOxygenMin=0.95,
            bloodOxygenMax=0.99,
            bloodPressureSystolicAvg=118,
            bloodPressureSystolicMin=110,
            bloodPressureSystolicMax=126,
            bloodPressureDiastolicAvg=76,
            bloodPressureDiastolicMin=70,
            bloodPressureDiastolicMax=82,
        ),
        body=BodyData(weight=75.5, bodyFatPercentage=0.18, height=1.8, bmi=23.3),
        nutrition=NutritionData(dietaryEnergy=2150, protein=120.5, water=2.5),
        mindfulness=MindfulnessData(
            mindfulMinutes=15, mindfulSessions=2, stateOfMind=mood_entries
        ),
        mobility=MobilityData(walkingSpeed=1.35, walkingDoubleSupportPercentage=0.28),
        hearing=HearingData(headphoneAudioLevel=68.2),
        workouts=(
            WorkoutData(
                workoutType="running",
                startTime=datetime(2026, 1, 15, 7, 0),
                duration=2700,
                calories=350,
                distance=5200,
            ),
            WorkoutData(
                workoutType="yoga",
                startTime=datetime(2026, 1, 15, 18, 15),
                duration=1800,
            ),
        ),
    )
