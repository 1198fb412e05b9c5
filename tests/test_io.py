"""Tests for serialization, validation, the plan store and YAML defaults."""

import json
from dataclasses import replace
from datetime import date, datetime

import pytest

from couch_planner.core.engine.config_loader import default_settings_dict, load_program_config
from couch_planner.core.generator import generate_plan
from couch_planner.core.models import ProgramSettings
from couch_planner.core.scheduler import schedule_all
from couch_planner.io.plan_store import PlanStore
from couch_planner.io.serializers import (
    ValidationError,
    dict_to_session,
    dict_to_settings,
    format_rest_days,
    parse_date,
    parse_rest_days,
    session_to_dict,
    settings_to_dict,
    validate_settings,
)


@pytest.fixture
def settings():
    return ProgramSettings(start_date=date(2024, 1, 1), program_weeks=2, training_days_per_week=3)


@pytest.fixture
def isolated_home(tmp_path, monkeypatch):
    """Point HOME at an empty directory so no user override is picked up."""
    monkeypatch.setenv("HOME", str(tmp_path))
    return tmp_path


class TestParseDate:
    """Calendar-day parsing at the I/O boundary."""

    @pytest.mark.parametrize(
        "value",
        [
            "2024-01-05",
            "2024-01-05T00:00:00.000Z",
            "2024-01-05T08:30:00+02:00",
            date(2024, 1, 5),
            datetime(2024, 1, 5, 23, 59),
        ],
    )
    def test_accepted_forms(self, value):
        assert parse_date(value) == date(2024, 1, 5)

    @pytest.mark.parametrize(
        "value",
        ["", "05/01/2024", "2024-13-01", "yesterday", "2024-01-05xyz", "2024-01-05T"],
    )
    def test_rejected_forms(self, value):
        with pytest.raises(ValidationError):
            parse_date(value)


class TestRestDays:
    """Rest-day parsing and display."""

    def test_indices(self):
        assert parse_rest_days("0,6") == frozenset({0, 6})

    def test_names_and_prefixes(self):
        assert parse_rest_days("sat, Sunday") == frozenset({0, 6})
        assert parse_rest_days("wed") == frozenset({3})

    def test_none(self):
        assert parse_rest_days("none") == frozenset()
        assert parse_rest_days("") == frozenset()

    @pytest.mark.parametrize("raw", ["7", "-1", "funday", "sa"])
    def test_invalid(self, raw):
        with pytest.raises(ValidationError):
            parse_rest_days(raw)

    def test_format_sunday_first(self):
        assert format_rest_days({6, 0}) == "Sunday, Saturday"
        assert format_rest_days(frozenset()) == "none"


class TestValidateSettings:
    """Boundary validation beyond the model's own checks."""

    def test_valid(self, settings):
        assert validate_settings(settings) is settings

    @pytest.mark.parametrize(
        "overrides",
        [
            {"program_weeks": 0},
            {"training_days_per_week": 0},
            {"rest_days": set(range(7))},
        ],
    )
    def test_rejected(self, settings, overrides):
        with pytest.raises(ValidationError):
            validate_settings(replace(settings, **overrides))

    def test_model_rejects_out_of_range(self):
        with pytest.raises(ValueError):
            ProgramSettings(start_date=date(2024, 1, 1), program_weeks=53)
        with pytest.raises(ValueError):
            ProgramSettings(start_date=date(2024, 1, 1), rest_days={7})
        with pytest.raises(ValueError):
            ProgramSettings(start_date=date(2024, 1, 1), running_speed_kmh=0)


class TestSerializers:
    """Dict conversion of settings and sessions."""

    def test_settings_round_trip(self, settings):
        data = settings_to_dict(settings)
        assert data["start_date"] == "2024-01-01"
        assert data["rest_days"] == [0, 6]
        assert dict_to_settings(data) == settings

    def test_settings_missing_start_date(self):
        with pytest.raises(ValidationError, match="start_date"):
            dict_to_settings({"program_weeks": 9})

    def test_settings_bad_value(self):
        with pytest.raises(ValidationError):
            dict_to_settings({"start_date": "2024-01-01", "program_weeks": "many"})

    def test_session_round_trip(self, settings):
        session = schedule_all(generate_plan(settings), settings)[0]
        session.completed = True
        session.completed_date = date(2024, 1, 2)
        data = session_to_dict(session)
        assert data["scheduled_date"] == "2024-01-01"
        assert dict_to_session(data) == session

    def test_session_defaults(self):
        session = dict_to_session({"week": 2, "day": 3})
        assert session.title == "Week 2, Day 3"
        assert session.scheduled_date is None
        assert not session.completed and not session.skipped

    def test_session_accepts_timestamps(self):
        session = dict_to_session(
            {"week": 1, "day": 1, "scheduled_date": "2024-01-05T00:00:00.000Z"}
        )
        assert session.scheduled_date == date(2024, 1, 5)

    def test_session_requires_identity(self):
        with pytest.raises(ValidationError):
            dict_to_session({"title": "no week"})

    @pytest.mark.parametrize("field", ["completed", "skipped"])
    def test_session_flags_must_be_booleans(self, field):
        """A hand-edited "false" string is rejected, not read as True."""
        with pytest.raises(ValidationError, match=field):
            dict_to_session({"week": 1, "day": 1, field: "false"})


class TestPlanStore:
    """settings.json / plan.json persistence."""

    def test_init_creates_empty_plan(self, tmp_path):
        store = PlanStore(tmp_path / "data")
        store.init()
        assert store.plan_path.read_text().strip() == "[]"
        assert not store.exists()
        assert store.load_sessions() == []

    def test_settings_round_trip(self, tmp_path, settings):
        store = PlanStore(tmp_path)
        store.save_settings(settings)
        assert store.exists()
        assert store.load_settings() == settings

    def test_sessions_round_trip(self, tmp_path, settings):
        store = PlanStore(tmp_path)
        sessions = schedule_all(generate_plan(settings), settings)
        store.save_sessions(sessions)
        assert store.load_sessions() == sessions

    def test_missing_settings(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            PlanStore(tmp_path).load_settings()

    def test_corrupt_plan_names_file(self, tmp_path):
        store = PlanStore(tmp_path)
        store.plan_path.write_text("{not json")
        with pytest.raises(ValidationError, match="plan.json"):
            store.load_sessions()

    def test_bad_entry_names_entry(self, tmp_path):
        store = PlanStore(tmp_path)
        store.plan_path.write_text(json.dumps([{"week": 1, "day": 1}, {"week": "x"}]))
        with pytest.raises(ValidationError, match="entry 2"):
            store.load_sessions()


class TestConfigLoader:
    """Bundled program.yaml and user overrides."""

    def test_bundled_defaults(self, isolated_home):
        defaults = default_settings_dict()
        assert defaults["program_weeks"] == 9
        assert defaults["training_days_per_week"] == 3
        assert defaults["goal_distance_km"] == 5.0
        assert defaults["rest_days"] == [0, 6]
        assert "defaults" in load_program_config()

    def test_user_override(self, isolated_home):
        user = isolated_home / "program.yaml"
        user.write_text("defaults:\n  program_weeks: 12\n  goal_distance_km: 10.0\n")
        defaults = default_settings_dict(user)
        assert defaults["program_weeks"] == 12
        assert defaults["goal_distance_km"] == 10.0
        assert defaults["running_speed_kmh"] == 9.0

    def test_override_in_home_directory(self, isolated_home):
        override_dir = isolated_home / ".couch-planner"
        override_dir.mkdir()
        (override_dir / "program.yaml").write_text("defaults:\n  training_days_per_week: 4\n")
        assert default_settings_dict()["training_days_per_week"] == 4

    def test_broken_override_warns_and_is_ignored(self, isolated_home):
        user = isolated_home / "program.yaml"
        user.write_text("defaults: [unclosed\n")
        with pytest.warns(UserWarning, match="ignoring"):
            defaults = default_settings_dict(user)
        assert defaults["program_weeks"] == 9
