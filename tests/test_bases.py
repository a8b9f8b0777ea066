"""Tests for the Obsidian Bases exporter."""

from datetime import datetime

from health_export.exporters import ObsidianBasesExporter
from health_export.models import HealthData, MindfulnessData, WorkoutData
from health_export.profile import FormatCustomization, FrontmatterConfig
from health_export.units import UnitPreference


def _frontmatter(output: str) -> dict[str, str]:
    block = output.split("---\n")[1]
    pairs = {}
    for line in block.strip().splitlines():
        key, _, value = line.partition(": ")
        pairs[key] = value
    return pairs


class TestObsidianBasesExporter:
    """Tests for ObsidianBasesExporter."""

    def setup_method(self):
        self.exporter = ObsidianBasesExporter()
        self.profile = FormatCustomization()

    def test_sleep_and_steps_document(self, sleep_and_steps):
        output = self.exporter.render(sleep_and_steps, self.profile)

        assert output == (
            "---\n"
            "date: 2026-01-15\n"
            "type: health-data\n"
            "sleep_total_hours: 8.50\n"
            "steps: 8432\n"
            "---\n"
            "# Health — 2026-01-15\n"
            "\n"
            "8h 30m sleep · 8,432 steps\n"
            "\n"
            "## Notes\n"
            "\n"
        )

    def test_notes_heading_always_present(self, sample_date):
        output = self.exporter.render(HealthData(date=sample_date), self.profile)
        assert output.endswith("\n## Notes\n\n")

    def test_metric_properties(self, full_day):
        props = _frontmatter(self.exporter.render(full_day, self.profile))

        assert props["sleep_deep_hours"] == "1.50"
        assert props["active_calories"] == "450"
        assert props["walking_running_km"] == "7.25"
        assert props["resting_heart_rate"] == "58"
        assert props["hrv_ms"] == "45.5"
        assert props["weight_kg"] == "75.5"
        assert props["height_m"] == "1.80"
        assert props["water_l"] == "2.50"
        assert props["walking_speed"] == "1.35"

    def test_percent_fractions_scaled(self, full_day):
        props = _frontmatter(self.exporter.render(full_day, self.profile))
        assert props["body_fat_percent"] == "18.0"
        assert props["blood_oxygen"] == "97"
        assert props["blood_oxygen_avg"] == "97"
        assert props["blood_oxygen_min"] == "95"
        assert props["double_support_percent"] == "28.0"

    def test_mood_properties(self, full_day):
        props = _frontmatter(self.exporter.render(full_day, self.profile))
        assert props["mood_entries"] == "2"
        assert props["average_mood_valence"] == "0.50"
        assert props["average_mood_percent"] == "75"
        assert props["daily_mood_count"] == "1"
        assert props["daily_mood_percent"] == "62"
        assert props["momentary_emotion_count"] == "1"
        assert props["mood_labels"] == "[calm, content, happy]"
        assert props["mood_associations"] == "[family, self-care, work]"

    def test_workout_totals(self, full_day):
        props = _frontmatter(self.exporter.render(full_day, self.profile))
        assert props["workout_count"] == "2"
        assert props["workout_minutes"] == "75"
        assert props["workout_calories"] == "350"
        assert props["workout_distance_km"] == "5.20"
        assert props["workouts"] == "[running, yoga]"

    def test_workout_types_deduplicated(self, sample_date):
        runs = tuple(
            WorkoutData(
                workoutType="running",
                startTime=datetime(2026, 1, 15, hour, 0),
                duration=1200,
            )
            for hour in (7, 18)
        )
        output = self.exporter.render(HealthData(date=sample_date, workouts=runs), self.profile)
        props = _frontmatter(output)
        assert props["workouts"] == "[running]"
        assert "workout_calories" not in props
        assert "workout_distance_km" not in props
        assert "2 running workouts" in output

    def test_summary_line(self, full_day):
        output = self.exporter.render(full_day, self.profile)
        assert (
            "7h 30m sleep · 10,523 steps · 2150 kcal · 15 mindful min · mood: 75% · 2 workouts"
            in output
        )

    def test_key_overrides_remap_and_omit(self, sleep_and_steps):
        profile = FormatCustomization(
            frontmatter_config=FrontmatterConfig(
                key_overrides={"steps": "daily_steps", "sleep_total_hours": None}
            )
        )
        props = _frontmatter(self.exporter.render(sleep_and_steps, profile))
        assert props["daily_steps"] == "8432"
        assert "steps" not in props
        assert "sleep_total_hours" not in props

    def test_static_keys_not_remapped(self, sleep_and_steps):
        profile = FormatCustomization(
            frontmatter_config=FrontmatterConfig(
                custom_date_key="day", custom_fields={"source": "watch"}
            )
        )
        props = _frontmatter(self.exporter.render(sleep_and_steps, profile))
        assert props["day"] == "2026-01-15"
        assert props["source"] == "watch"

    def test_imperial_preconversion(self, full_day):
        profile = FormatCustomization(unit_preference=UnitPreference.IMPERIAL)
        props = _frontmatter(self.exporter.render(full_day, profile))
        assert props["weight_kg"] == "166.4"
        assert props["workout_distance_km"] == "3.23"

    def test_no_average_mood_without_entries(self, sample_date):
        data = HealthData(date=sample_date, mindfulness=MindfulnessData(mindfulMinutes=10))
        output = self.exporter.render(data, self.profile)
        props = _frontmatter(output)
        assert props["mindful_minutes"] == "10"
        assert not any(key.startswith("average_mood") for key in props)
        assert "mood_entries" not in props
        assert "mood:" not in output

    def test_sleep_properties_end_with_in_bed(self, full_day):
        props = list(_frontmatter(self.exporter.render(full_day, self.profile)))
        sleep_keys = [key for key in props if key.startswith("sleep_")]
        assert sleep_keys == [
            "sleep_total_hours",
            "sleep_deep_hours",
            "sleep_rem_hours",
            "sleep_core_hours",
            "sleep_awake_hours",
            "sleep_in_bed_hours",
        ]
