import json
from datetime import date
from pathlib import Path

import pytest

from expedition.infrastructure.scenarios import load_config, load_scenario, scenario_from_mapping
from expedition.services.validation import ValidationError

SAMPLE = Path(__file__).resolve().parents[1] / "scenarios" / "sample_guild.yaml"


def test_sample_scenario_loads():
    scenario = load_scenario(SAMPLE)
    assert scenario.name == "sample_guild"
    assert [m.member_id for m in scenario.members] == ["m1", "m2", "m3", "m4", "m5", "m6"]
    assert scenario.members[1].member_nickname == "bram"
    assert scenario.members[3].scores == {"teo": 0, "yeonhee": 0, "kyle": 0, "karma": 300}
    assert not scenario.members[5].has_scores()
    assert scenario.member_availability == {"m5": date(2025, 1, 3)}
    assert scenario.initial_hp["karma"] == 2500


def test_json_scenario_uses_file_stem_as_name(tmp_path):
    path = tmp_path / "week3.json"
    path.write_text(json.dumps({"members": [{"id": 7, "name": "Gale", "scores": {"teo": 5}}]}), encoding="utf-8")

    scenario = load_scenario(path)
    assert scenario.name == "week3"
    assert scenario.members[0].member_id == "7"
    assert scenario.members[0].member_ign == "Gale"
    assert scenario.start_date is None
    assert scenario.target_day == 9
    assert scenario.initial_hp is None


def test_empty_yaml_is_an_empty_config(tmp_path):
    path = tmp_path / "empty.yml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == {}


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_member_without_id_is_rejected():
    with pytest.raises(ValidationError) as excinfo:
        scenario_from_mapping({"members": [{"ign": "NoId"}]})
    assert excinfo.value.field == "members[0].id"


def test_inverted_window_is_rejected():
    with pytest.raises(ValidationError):
        scenario_from_mapping({"start_date": "2025-01-10", "end_date": "2025-01-01"})
