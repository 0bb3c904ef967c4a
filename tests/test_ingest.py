"""
Tests for profile loading and the Profile model's defaults.
"""

import json

import pandas as pd
import pytest

from matchmaking.data_models import Profile
from matchmaking.ingest import column_map, index_profiles, load_profiles, profiles_from_df, split_list_field


class TestProfileModel:
    def test_missing_fields_default_to_empty(self):
        p = Profile(id="x")
        assert p.name == p.title == p.company == p.industry == p.current_event == ""
        assert p.interests == p.goals == p.planned_sessions == ()

    def test_none_values_become_defaults(self):
        p = Profile(id="x", title=None, interests=None, plannedSessions=None)
        assert p.title == ""
        assert p.interests == ()
        assert p.planned_sessions == ()

    def test_duplicates_dropped_keeping_first(self):
        p = Profile(id="x", interests=["AI", "Gaming", "AI", " Gaming "])
        assert p.interests == ("AI", "Gaming")

    def test_accepts_snake_and_camel_case(self):
        a = Profile(id="x", plannedSessions=["s1"], currentEvent="e")
        b = Profile(id="x", planned_sessions=["s1"], current_event="e")
        assert a == b
        assert a.model_dump(by_alias=True)["plannedSessions"] == ("s1",)

    def test_numeric_id_coerced(self):
        assert Profile(id=7).id == "7"

    def test_profiles_are_immutable(self):
        p = Profile(id="x")
        with pytest.raises(Exception):
            p.id = "y"


def test_split_list_field():
    assert split_list_field("AI; Web3, Gaming") == ["AI", "Web3", "Gaming"]
    assert split_list_field(None) == []
    assert split_list_field(float("nan")) == []
    assert split_list_field(["a", " "]) == ["a"]


def test_load_json_list(tmp_path):
    path = tmp_path / "profiles.json"
    path.write_text(json.dumps([
        {"id": "a", "name": "Ann", "interests": ["AI"], "currentEvent": "ev"},
        {"id": "b", "title": "Designer", "unknownField": 1},
    ]))

    profiles = load_profiles(path)

    assert [p.id for p in profiles] == ["a", "b"]
    assert profiles[0].current_event == "ev"
    assert profiles[1].title == "Designer"


def test_load_json_wrapped_and_skips_records_without_id(tmp_path):
    path = tmp_path / "profiles.json"
    path.write_text(json.dumps({"profiles": [{"id": "a"}, {"name": "no id"}, {"id": ""}]}))

    assert [p.id for p in load_profiles(path)] == ["a"]


def test_load_json_rejects_other_shapes(tmp_path):
    path = tmp_path / "profiles.json"
    path.write_text(json.dumps({"people": []}))

    with pytest.raises(ValueError, match="list of profiles"):
        load_profiles(path)


def test_load_csv_with_aliased_headers(tmp_path):
    path = tmp_path / "attendees.csv"
    path.write_text(
        "Attendee ID,Name,Job Title,Company,Industry,Interests,Goals,Planned Sessions,Event\n"
        "cto_001,Alice Chen,CTO,TechStartup Inc,Technology,AI; Architecture,hiring;networking,scaling-101,gamescom2025\n"
        ",Nobody,,,,,,,\n"
        "eng_001, Bob Smith ,Senior Engineer,GameDev Studio,Technology,Architecture,job-seeking,,gamescom2025\n"
    )

    profiles = load_profiles(path)

    assert [p.id for p in profiles] == ["cto_001", "eng_001"]
    cto, eng = profiles
    assert cto.interests == ("AI", "Architecture")
    assert cto.goals == ("hiring", "networking")
    assert cto.planned_sessions == ("scaling-101",)
    assert cto.current_event == "gamescom2025"
    assert eng.name == "Bob Smith"
    assert eng.planned_sessions == ()


def test_load_csv_without_id_column(tmp_path):
    path = tmp_path / "attendees.csv"
    path.write_text("Name,Title\nAnn,CTO\n")

    with pytest.raises(ValueError, match="No id column"):
        load_profiles(path)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_profiles(tmp_path / "missing.json")


def test_unsupported_format(tmp_path):
    path = tmp_path / "profiles.yaml"
    path.write_text("- id: a\n")

    with pytest.raises(ValueError, match="Unsupported"):
        load_profiles(path)


def test_index_profiles_last_duplicate_wins():
    indexed = index_profiles([Profile(id="a", name="first"), Profile(id="a", name="second")])
    assert indexed["a"].name == "second"


def test_column_map_ignores_case_and_separators():
    columns = ["ATTENDEE_ID", "Full-Name", "job title", "currentEvent", "plannedSessions", "Notes"]

    assert column_map(columns) == {
        "id": "ATTENDEE_ID",
        "name": "Full-Name",
        "title": "job title",
        "planned_sessions": "plannedSessions",
        "current_event": "currentEvent",
    }


def test_column_map_prefers_earlier_alias():
    assert column_map(["event", "current_event"])["current_event"] == "current_event"


def test_profiles_from_df_collapses_whitespace_and_drops_blanks():
    df = pd.DataFrame(
        {
            "id": ["a1", "b2"],
            "Title": ["Senior\n  Engineer", "   "],
            "Interests": ["AI |  Web3", None],
        }
    )

    a, b = profiles_from_df(df)

    assert a.title == "Senior Engineer"
    assert a.interests == ("AI", "Web3")
    assert b.title == ""
    assert b.interests == ()
