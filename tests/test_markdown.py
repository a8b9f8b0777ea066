"""Tests for the Markdown exporter."""

from health_export.exporters import MarkdownExporter, to_markdown
from health_export.models import (
    AdvancedExportSettings,
    DataTypeSelection,
    HealthData,
    MindfulnessData,
    StateOfMindEntry,
    StateOfMindKind,
    VitalsData,
)
from health_export.profile import (
    BulletStyle,
    FormatCustomization,
    FrontmatterConfig,
    MarkdownTemplate,
)


class TestMarkdownExporter:
    """Tests for MarkdownExporter."""

    def setup_method(self):
        self.exporter = MarkdownExporter()
        self.profile = FormatCustomization()

    def test_sleep_and_steps_document(self, sleep_and_steps):
        output = self.exporter.render(sleep_and_steps, self.profile)

        assert output == (
            "---\n"
            "date: 2026-01-15\n"
            "type: health-data\n"
            "---\n"
            "\n"
            "# Health Data — 2026-01-15\n"
            "\n"
            "8h 30m sleep · 8,432 steps\n"
            "\n"
            "## Sleep\n"
            "\n"
            "- **Total:** 8h 30m\n"
            "\n"
            "## Activity\n"
            "\n"
            "- **Steps:** 8,432\n"
        )

    def test_absent_categories_have_no_section(self, sleep_and_steps):
        output = self.exporter.render(sleep_and_steps, self.profile)
        for title in ("Heart", "Vitals", "Body", "Nutrition", "Mindfulness", "Workouts"):
            assert f"## {title}" not in output

    def test_without_metadata(self, sleep_and_steps):
        output = self.exporter.render(sleep_and_steps, self.profile, include_metadata=False)
        assert output.startswith("# Health Data — 2026-01-15\n")
        assert "---" not in output

    def test_export_honours_include_metadata(self, sleep_and_steps):
        settings = AdvancedExportSettings(include_metadata=False)
        assert not self.exporter.export(sleep_and_steps, settings).startswith("---")

    def test_spo2_range(self, spo2_day):
        output = self.exporter.render(spo2_day, self.profile)
        assert "- **SpO2:** 97% (range: 95%–99%)" in output

    def test_vitals_range_omitted_when_min_equals_max(self, sample_date):
        data = HealthData(
            date=sample_date,
            vitals=VitalsData(
                respiratoryRateAvg=14.0, respiratoryRateMin=14.0, respiratoryRateMax=14.0
            ),
        )
        output = self.exporter.render(data, self.profile)
        assert "- **Respiratory Rate:** 14.0 breaths/min\n" in output

    def test_vitals_ranges(self, full_day):
        output = self.exporter.render(full_day, self.profile)
        assert "- **Respiratory Rate:** 14.5 breaths/min (range: 12.0–17.0)" in output
        assert "- **Blood Pressure:** 118/76 mmHg (range: 110/70–126/82)" in output

    def test_blood_pressure_needs_both_averages(self, sample_date):
        data = HealthData(date=sample_date, vitals=VitalsData(bloodPressureSystolicAvg=120))
        output = self.exporter.render(data, self.profile)
        assert "Blood Pressure" not in output
        # The section heading is still written, with no lines under it
        assert output.endswith("\n## Vitals\n\n")

    def test_summary_line(self, full_day):
        output = self.exporter.render(full_day, self.profile)
        assert "7h 30m sleep · 10,523 steps · 2 workouts · mood 75%" in output

    def test_summary_can_be_disabled(self, sleep_and_steps):
        profile = FormatCustomization(markdown_template=MarkdownTemplate(include_summary=False))
        output = self.exporter.render(sleep_and_steps, profile)
        assert "8h 30m sleep" not in output

    def test_sleep_field_order(self, full_day):
        output = self.exporter.render(full_day, self.profile)
        labels = ["**Total:**", "**In Bed:**", "**Deep:**", "**REM:**", "**Core:**", "**Awake:**"]
        positions = [output.index(label) for label in labels]
        assert positions == sorted(positions)

    def test_category_order(self, full_day):
        output = self.exporter.render(full_day, self.profile)
        titles = [
            "Sleep",
            "Activity",
            "Heart",
            "Vitals",
            "Body",
            "Nutrition",
            "Mindfulness",
            "Mobility",
            "Hearing",
            "Workouts",
        ]
        positions = [output.index(f"\n## {title}\n") for title in titles]
        assert positions == sorted(positions)

    def test_mindfulness_section(self, full_day):
        output = self.exporter.render(full_day, self.profile)
        assert "- **Mindful Minutes:** 15 min" in output
        assert "- **Average Mood:** 75% (Pleasant)" in output
        assert "- **Daily Mood Entries:** 1" in output
        assert "- **Momentary Emotions:** 1" in output
        assert "- **Emotions/Moods:** Calm, Content, Happy" in output
        assert "- **Associated With:** Family, Self Care, Work" in output
        assert "### Mood Entries" in output
        assert "- **8:30 AM** (Momentary Emotion): 87% — Happy, Calm" in output
        assert "- **9:00 PM** (Daily Mood): 62% — Content" in output

    def test_many_mood_entries_are_not_itemized(self, sample_date, mood_entries):
        entries = tuple(
            StateOfMindEntry(
                timestamp=mood_entries[0].timestamp,
                kind=StateOfMindKind.MOMENTARY_EMOTION,
                valence=0.1,
            )
            for _ in range(6)
        )
        data = HealthData(date=sample_date, mindfulness=MindfulnessData(stateOfMind=entries))
        output = self.exporter.render(data, self.profile)
        assert "**Average Mood:** 55% (Neutral)" in output
        assert "Mood Entries" not in output

    def test_no_average_mood_without_entries(self, sample_date):
        data = HealthData(date=sample_date, mindfulness=MindfulnessData(mindfulMinutes=10))
        output = self.exporter.render(data, self.profile)
        assert "Average Mood" not in output
        assert "mood" not in output.split("\n## ")[0]

    def test_workouts(self, full_day):
        output = self.exporter.render(full_day, self.profile)
        assert "### 1. Running\n\n- **Time:** 7:00 AM\n- **Duration:** 45m\n" in output
        assert "- **Distance:** 5.2 km\n- **Calories:** 350 kcal" in output
        yoga = output.split("### 2. Yoga")[1]
        assert "- **Duration:** 30m" in yoga
        assert "Distance" not in yoga
        assert "Calories" not in yoga

    def test_template_customization(self, sleep_and_steps):
        profile = FormatCustomization(
            markdown_template=MarkdownTemplate(
                bullet_style=BulletStyle.ASTERISK, section_header_level=3, use_emoji=True
            )
        )
        output = self.exporter.render(sleep_and_steps, profile)
        assert "### 😴 Sleep" in output
        assert "* **Total:** 8h 30m" in output

    def test_frontmatter_custom_fields_sorted(self, sleep_and_steps):
        profile = FormatCustomization(
            frontmatter_config=FrontmatterConfig(custom_fields={"zeta": "z", "alpha": "a"})
        )
        output = self.exporter.render(sleep_and_steps, profile)
        assert "type: health-data\nalpha: a\nzeta: z\n---" in output

    def test_imperial_units(self, full_day):
        profile = FormatCustomization(unit_preference="imperial")
        output = self.exporter.render(full_day, profile)
        assert "- **Weight:** 166.4 lb" in output
        assert "- **Distance:** 3.23 mi" in output

    def test_filtered_categories_disappear(self, full_day):
        settings = AdvancedExportSettings(data_types=DataTypeSelection.only("heart"))
        filtered = full_day.filtered(settings.data_types)
        output = self.exporter.export(filtered, settings)
        assert "## Heart" in output
        assert "## Sleep" not in output
        assert "## Workouts" not in output

    def test_deterministic(self, full_day):
        assert to_markdown(full_day) == to_markdown(full_day)
