from datetime import date, datetime

import pytest

from expedition.services import validation
from expedition.services.validation import ValidationError


def test_parse_date_accepts_strings_and_dates():
    assert validation.parse_date("2025-02-03") == date(2025, 2, 3)
    assert validation.parse_date(date(2025, 2, 3)) == date(2025, 2, 3)
    assert validation.parse_date(datetime(2025, 2, 3, 12, 30)) == date(2025, 2, 3)


@pytest.mark.parametrize("value", [None, "", "03/02/2025", 20250203])
def test_parse_date_rejects_bad_values(value):
    with pytest.raises(ValidationError) as excinfo:
        validation.parse_date(value, "start_date")
    assert excinfo.value.field == "start_date"


def test_target_day_defaults_and_bounds():
    assert validation.validate_target_day(None) == 9
    assert validation.validate_target_day(1) == 1
    assert validation.validate_target_day(14) == 14
    for bad in (0, 15, "9", True, 9.0):
        with pytest.raises(ValidationError):
            validation.validate_target_day(bad)


def test_scores_fill_missing_bosses_with_zero():
    assert validation.validate_scores({"teo": 12, "kyle": None}) == {"teo": 12, "yeonhee": 0, "kyle": 0, "karma": 0}
    assert validation.validate_scores(None) == {"teo": 0, "yeonhee": 0, "kyle": 0, "karma": 0}


@pytest.mark.parametrize(
    "raw, field",
    [
        ({"dragon": 1}, "scores"),
        ({"teo": -1}, "scores.teo"),
        ({"teo": 1.5}, "scores.teo"),
        ({"teo": False}, "scores.teo"),
    ],
)
def test_scores_rejects_invalid(raw, field):
    with pytest.raises(ValidationError) as excinfo:
        validation.validate_scores(raw)
    assert excinfo.value.field == field


def test_window_requires_end_after_start():
    validation.validate_window(date(2025, 1, 1), date(2025, 1, 2))
    with pytest.raises(ValidationError, match="end date must be after start date"):
        validation.validate_window(date(2025, 1, 2), date(2025, 1, 2))


def test_cycle_create_normalises_payload():
    cycle = validation.validate_cycle_create(
        {"name": "  Week 12 ", "start_date": "2025-01-01", "end_date": "2025-01-14"}
    )
    assert cycle.name == "Week 12"
    assert cycle.target_day == 9
    assert cycle.auto_regenerate is True


def test_cycle_create_requires_name():
    with pytest.raises(ValidationError) as excinfo:
        validation.validate_cycle_create({"start_date": "2025-01-01", "end_date": "2025-01-14"})
    assert excinfo.value.field == "name"


def test_cycle_update_only_returns_given_keys():
    update = validation.validate_cycle_update({"status": "active", "actual_days": 8})
    assert update == {"status": "active", "actual_days": 8}

    with pytest.raises(ValidationError):
        validation.validate_cycle_update({"status": "archived"})
    with pytest.raises(ValidationError):
        validation.validate_cycle_update({"actual_days": 0})


def test_availability_parses_dates():
    assert validation.validate_availability({"m1": "2025-01-04"}) == {"m1": date(2025, 1, 4)}
    assert validation.validate_availability(None) is None
    with pytest.raises(ValidationError):
        validation.validate_availability(["m1"])


def test_submission_checks_boss_and_score():
    submission = validation.validate_submission({"member_ign": "Alpha", "boss": "kyle", "score": 1200})
    assert submission.boss == "kyle"
    assert submission.cycle_id is None

    with pytest.raises(ValidationError) as excinfo:
        validation.validate_submission({"member_ign": "Alpha", "boss": "nobody", "score": 1})
    assert excinfo.value.field == "boss"
    with pytest.raises(ValidationError) as excinfo:
        validation.validate_submission({"member_ign": "Alpha", "boss": "kyle", "score": -5})
    assert excinfo.value.field == "score"


def test_profile_payload_fills_missing_bosses():
    profile = validation.validate_profile({"member_ign": "Alpha", "scores": {"karma": 90}, "cycle_id": "c1"})
    assert profile.scores == {"teo": 0, "yeonhee": 0, "kyle": 0, "karma": 90}
    assert profile.cycle_id == "c1"


@pytest.mark.parametrize(
    "payload, field",
    [
        ({"scores": {"teo": 1}}, "member_ign"),
        ({"member_ign": "Alpha"}, "scores"),
        ({"member_ign": "Alpha", "scores": [1, 2]}, "scores"),
        ({"member_ign": "Alpha", "scores": {"kyle": "10"}}, "scores.kyle"),
    ],
)
def test_profile_payload_rejects_invalid(payload, field):
    with pytest.raises(ValidationError) as excinfo:
        validation.validate_profile(payload)
    assert excinfo.value.field == field
