"""Tests for JSON-backed preferences persistence."""

import json
from pathlib import Path

import pytest

from define_explorer.application.ports.repositories import PreferencesRepositoryPort
from define_explorer.infrastructure.repositories import (
    JsonPreferencesRepository,
    PreferencesSaveError,
)


@pytest.fixture
def prefs_path(tmp_path: Path) -> Path:
    return tmp_path / "nested" / "preferences.json"


def test_implements_port(prefs_path):
    assert isinstance(JsonPreferencesRepository(prefs_path), PreferencesRepositoryPort)


def test_missing_file_loads_empty(prefs_path):
    assert JsonPreferencesRepository(prefs_path).load() == {}


def test_save_creates_parent_and_sorts_sets(prefs_path):
    repository = JsonPreferencesRepository(prefs_path)
    repository.save({"hidden_columns": {"ADLB": {"AVALC", "ANRIND"}}})

    assert json.loads(prefs_path.read_text(encoding="utf-8")) == {
        "hidden_columns": {"ADLB": ["ANRIND", "AVALC"]}
    }
    assert repository.load() == {"hidden_columns": {"ADLB": ["ANRIND", "AVALC"]}}


def test_tuples_are_written_as_lists(prefs_path):
    repository = JsonPreferencesRepository(str(prefs_path))
    repository.save({"recent": ("a.xml", "b.xml")})

    assert repository.load() == {"recent": ["a.xml", "b.xml"]}


def test_corrupt_file_warns_and_loads_empty(prefs_path):
    prefs_path.parent.mkdir(parents=True)
    prefs_path.write_text("{not json", encoding="utf-8")

    with pytest.warns(UserWarning, match="Failed to load preferences"):
        assert JsonPreferencesRepository(prefs_path).load() == {}


def test_non_object_payload_is_ignored(prefs_path):
    prefs_path.parent.mkdir(parents=True)
    prefs_path.write_text("[1, 2]", encoding="utf-8")

    with pytest.warns(UserWarning, match="expected a JSON object"):
        assert JsonPreferencesRepository(prefs_path).load() == {}


def test_unserializable_value_raises(prefs_path):
    with pytest.raises(PreferencesSaveError, match="Failed to save preferences"):
        JsonPreferencesRepository(prefs_path).save({"bad": object()})


def test_unwritable_target_raises(tmp_path: Path):
    with pytest.raises(PreferencesSaveError):
        JsonPreferencesRepository(tmp_path).save({"a": 1})
