"""Unit tests for the document codec."""

import json
from datetime import date

import pytest

from nutritrack.core.document import (
    InvalidDocumentError,
    build_document,
    dump_document,
    export_filename,
    parse_document,
)
from nutritrack.core.models import DailyLog, LogEntry, MealItem, MealPlans, Profile


def sample_document():
    profile = Profile(
        name="Lan",
        gender="female",
        age=31,
        height=160.5,
        weight=58.2,
        target_weight=55,
        activity_level="light",
        start_date=date(2025, 1, 1),
        target_date=date(2025, 4, 1),
        start_time="07:30",
        water_goal=10,
    )
    logs = {
        "2025-01-02": DailyLog(
            weight=58.0,
            intake=630,
            outtake=120.5,
            water=4,
            foods=[LogEntry(id="a1", name="Phở Bò", cal=450), LogEntry(id=1735776000000, name="Cà Phê", cal=180)],
            activities=[LogEntry(id="b1", name="Walk", cal=120.5)],
        )
    }
    plans = MealPlans(breakfast=[MealItem(name="Bánh Mì", cal=450)], other=[MealItem(name="Trà Đá", cal=0)])
    return build_document(profile, logs, plans)


class TestDumpDocument:
    """Tests for dump_document."""

    def test_uses_camel_case_keys(self):
        """Top-level and profile keys match the exchange format."""
        data = json.loads(dump_document(sample_document()))

        assert set(data) == {"profile", "logs", "mealPlans"}
        assert data["profile"]["targetWeight"] == 55
        assert data["profile"]["activityLevel"] == "light"
        assert data["profile"]["startDate"] == "2025-01-01"
        assert data["profile"]["waterGoal"] == 10

    def test_keeps_non_ascii(self):
        """Vietnamese names are written as-is."""
        assert "Phở Bò" in dump_document(sample_document())

    def test_preserves_entry_ids(self):
        """String and numeric ids are written unchanged."""
        data = json.loads(dump_document(sample_document()))
        assert [f["id"] for f in data["logs"]["2025-01-02"]["foods"]] == ["a1", 1735776000000]


class TestParseDocument:
    """Tests for parse_document."""

    def test_round_trip(self):
        """Dumping then parsing reproduces every part exactly."""
        original = sample_document()
        update = parse_document(dump_document(original))

        assert update.profile == original.profile
        assert update.logs == original.logs
        assert update.meal_plans == original.meal_plans

    def test_partial_document(self):
        """Absent parts come back as None."""
        update = parse_document('{"mealPlans": {"lunch": [{"name": "Cơm", "cal": 600}]}}')

        assert update.profile is None
        assert update.logs is None
        assert update.meal_plans.lunch == [MealItem(name="Cơm", cal=600)]

    def test_legacy_document_without_water(self):
        """Logs written before water tracking default to zero cups."""
        text = json.dumps({
            "logs": {
                "2024-12-01": {
                    "weight": 70,
                    "intake": 450,
                    "outtake": 0,
                    "foods": [{"name": "Phở", "cal": 450, "id": 1733011200000}],
                    "activities": [],
                }
            }
        })
        log = parse_document(text).logs["2024-12-01"]

        assert log.water == 0
        assert log.foods[0].id == 1733011200000

    def test_empty_object(self):
        """An empty object parses to an empty update."""
        assert parse_document("{}").is_empty()

    @pytest.mark.parametrize("text", ["", "not json", "{\"profile\": ", "[1, 2]", "42"])
    def test_malformed_text_rejected(self, text):
        """Unparseable or non-object documents raise."""
        with pytest.raises(InvalidDocumentError):
            parse_document(text)

    def test_invalid_part_rejects_whole_document(self):
        """One bad part fails the whole parse."""
        text = json.dumps({
            "profile": {"name": "Ok", "age": 30},
            "logs": {"2025-01-01": {"weight": "heavy"}},
        })
        with pytest.raises(InvalidDocumentError):
            parse_document(text)

    def test_bad_log_key_rejected(self):
        """Log keys must be ISO dates."""
        with pytest.raises(InvalidDocumentError):
            parse_document('{"logs": {"yesterday": {"weight": 70}}}')

    def test_unknown_meal_slot_rejected(self):
        """Meal plans only have the four slots."""
        with pytest.raises(InvalidDocumentError):
            parse_document('{"mealPlans": {"brunch": []}}')

    @pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity", "1e999"])
    def test_non_finite_numbers_rejected(self, literal):
        """Numbers that can't be written back as JSON fail the parse."""
        text = '{"logs": {"2025-01-15": {"weight": 70, "intake": ' + literal + ', "outtake": 0}}}'
        with pytest.raises(InvalidDocumentError):
            parse_document(text)

    def test_non_finite_entry_calories_rejected(self):
        """A NaN entry fails the parse too."""
        text = '{"mealPlans": {"lunch": [{"name": "Cơm", "cal": NaN}]}}'
        with pytest.raises(InvalidDocumentError):
            parse_document(text)

    def test_blank_profile_fields_are_unset(self):
        """Cleared date and number inputs import as missing values."""
        text = json.dumps({
            "profile": {
                "name": "Lan",
                "age": None,
                "height": "",
                "weight": 58,
                "startDate": "2025-01-01",
                "targetDate": "",
            }
        })
        profile = parse_document(text).profile

        assert profile.target_date is None
        assert profile.height is None
        assert profile.age is None
        assert profile.start_date == date(2025, 1, 1)

    def test_totals_recomputed_from_entries(self):
        """Stored totals that disagree with the entries are replaced by the sums."""
        text = json.dumps({
            "logs": {
                "2025-01-15": {
                    "weight": 70,
                    "intake": 9999,
                    "outtake": 5,
                    "foods": [{"id": "a", "name": "Phở", "cal": 450}, {"id": "b", "name": "Chè", "cal": 250.5}],
                    "activities": [],
                }
            }
        })
        log = parse_document(text).logs["2025-01-15"]

        assert log.intake == 700.5
        assert log.outtake == 0

    def test_consistent_totals_untouched(self):
        """Totals that already match are kept as stored."""
        log = parse_document(dump_document(sample_document())).logs["2025-01-02"]
        assert log.intake == 630
        assert log.outtake == 120.5

    def test_error_is_value_error(self):
        """Callers can catch it as ValueError."""
        with pytest.raises(ValueError):
            parse_document("nope")


class TestExportFilename:
    """Tests for export_filename."""

    def test_dated_name(self):
        """The file name carries the export date."""
        assert export_filename(date(2025, 2, 3)) == "nutritrack_backup_2025-02-03.json"
