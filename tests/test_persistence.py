"""Tests for local storage and the persistence manager.

These tests verify that:
- LocalStorage stores, replaces and removes string values
- A corrupt store file reads as empty
- The resume prompt appears only for a meaningful record
- Accepting resume always lands on People; declining deletes the record
- Unparsable or non-conforming records start a fresh session
- Every edit is written through and a confirmed reset deletes the record
"""

import json

import pytest

from resource_map.config import RESUME_PROMPT, STORAGE_KEY
from resource_map.core.models import UserData
from resource_map.core.persistence import open_session
from resource_map.core.session import Step

from conftest import ScriptedConfirm


def _store(storage, data: UserData) -> None:
    storage.set_item(STORAGE_KEY, json.dumps(data.to_dict()))


# ── LocalStorage ─────────────────────────────────────────────────────────────


def test_storage_roundtrip(storage):
    assert storage.get_item("k") is None
    storage.set_item("k", "v1")
    storage.set_item("other", "x")
    storage.set_item("k", "v2")
    assert storage.get_item("k") == "v2"
    assert storage.get_item("other") == "x"


def test_storage_remove_missing_key_is_noop(storage):
    storage.remove_item("nothing")
    storage.set_item("k", "v")
    storage.remove_item("k")
    assert storage.get_item("k") is None


def test_storage_creates_parent_dirs(tmp_path):
    from resource_map.core.persistence import LocalStorage

    nested = LocalStorage(tmp_path / "a" / "b" / "storage.json")
    nested.set_item("k", "v")
    assert nested.get_item("k") == "v"


def test_corrupt_store_file_reads_as_empty(storage):
    storage.path.write_text("{not json", encoding="utf-8")
    assert storage.get_item(STORAGE_KEY) is None


def test_non_object_store_file_reads_as_empty(storage):
    storage.path.write_text("[1, 2, 3]", encoding="utf-8")
    assert storage.get_item(STORAGE_KEY) is None


def test_deeply_nested_store_file_reads_as_empty(storage):
    storage.path.write_text("[" * 100000 + "]" * 100000, encoding="utf-8")
    assert storage.get_item(STORAGE_KEY) is None


def test_storage_leaves_no_temp_files(storage):
    storage.set_item("k", "v")
    assert [p.name for p in storage.path.parent.iterdir()] == ["storage.json"]


# ── Load / save ──────────────────────────────────────────────────────────────


def test_save_then_load(persistence, filled_data):
    persistence.save(filled_data)
    assert persistence.load() == filled_data


def test_save_writes_under_well_known_key(persistence, storage, filled_data):
    persistence.save(filled_data)
    raw = json.loads(storage.get_item("mapaRecursosData"))
    assert raw["userName"] == "Ana"
    assert raw["people"][0]["name"] == "Mamá"


def test_load_unparsable_value_returns_none(persistence, storage):
    storage.set_item(STORAGE_KEY, "{{{")
    assert persistence.load() is None


def test_load_nonconforming_record_returns_none(persistence, storage):
    storage.set_item(STORAGE_KEY, json.dumps({"userName": "Ana", "people": []}))
    assert persistence.load() is None


# ── Startup protocol ─────────────────────────────────────────────────────────


def test_startup_without_record_does_not_prompt(persistence):
    confirm = ScriptedConfirm()
    result = persistence.startup(confirm)
    assert confirm.prompts == []
    assert result.step == Step.WELCOME
    assert result.data == UserData.empty()
    assert not result.prompted


def test_resume_accepted_lands_on_people(persistence, storage, filled_data):
    # Every category is filled, yet resume still starts at People
    _store(storage, filled_data)
    confirm = ScriptedConfirm(True)
    result = persistence.startup(confirm)
    assert confirm.prompts == [RESUME_PROMPT]
    assert result.resumed
    assert result.step == Step.PEOPLE
    assert result.data == filled_data


def test_resume_with_only_first_person(persistence, storage):
    _store(storage, UserData.empty().with_field("people", 0, "name", "Ana"))
    result = persistence.startup(ScriptedConfirm(True))
    assert result.step == Step.PEOPLE
    assert result.data.people[0].name == "Ana"


def test_resume_declined_deletes_record(persistence, storage, filled_data):
    _store(storage, filled_data)
    result = persistence.startup(ScriptedConfirm(False))
    assert result.prompted
    assert not result.resumed
    assert result.step == Step.WELCOME
    assert result.data == UserData.empty()
    assert storage.get_item(STORAGE_KEY) is None


def test_record_without_meaningful_content_is_not_offered(persistence, storage):
    data = UserData.empty().with_field("places", 0, "name", "La playa")
    _store(storage, data)
    confirm = ScriptedConfirm()
    result = persistence.startup(confirm)
    assert confirm.prompts == []
    assert result.data == UserData.empty()
    # Left in place until the first edit overwrites it
    assert storage.get_item(STORAGE_KEY) is not None


@pytest.mark.parametrize("raw", ["not json", "[]", '{"userName": 3}'])
def test_bad_record_starts_fresh_without_prompt(persistence, storage, raw):
    storage.set_item(STORAGE_KEY, raw)
    confirm = ScriptedConfirm()
    result = persistence.startup(confirm)
    assert confirm.prompts == []
    assert result.step == Step.WELCOME
    assert result.data == UserData.empty()


def test_deeply_nested_record_starts_fresh_without_prompt(persistence, storage):
    storage.set_item(STORAGE_KEY, "[" * 100000 + "]" * 100000)
    confirm = ScriptedConfirm()
    result = persistence.startup(confirm)
    assert confirm.prompts == []
    assert result.step == Step.WELCOME
    assert result.data == UserData.empty()


def test_unreadable_store_path_starts_fresh_without_prompt(tmp_path):
    from resource_map.core.persistence import LocalStorage, PersistenceManager

    # A directory where the store file should be makes every read fail
    blocked = tmp_path / "storage.json"
    blocked.mkdir()
    persistence = PersistenceManager(LocalStorage(blocked))
    confirm = ScriptedConfirm()
    result = persistence.startup(confirm)
    assert persistence.load() is None
    assert confirm.prompts == []
    assert result.step == Step.WELCOME
    assert result.data == UserData.empty()


# ── Write-through ────────────────────────────────────────────────────────────


def test_every_edit_is_written_through(persistence, storage):
    session = open_session(persistence, ScriptedConfirm())
    session.set_user_name("Bea")
    assert persistence.load().user_name == "Bea"
    session.edit_field("people", 0, "name", "Ana")
    assert persistence.load().people[0].name == "Ana"
    assert persistence.load() == session.data


def test_startup_alone_writes_nothing(persistence, storage):
    open_session(persistence, ScriptedConfirm())
    assert storage.get_item(STORAGE_KEY) is None


def test_confirmed_reset_deletes_record(persistence, storage, filled_data):
    _store(storage, filled_data)
    session = open_session(persistence, ScriptedConfirm(True))
    assert session.step == Step.PEOPLE
    assert session.reset(ScriptedConfirm(True))
    assert storage.get_item(STORAGE_KEY) is None


def test_declined_reset_keeps_record(persistence, storage, filled_data):
    _store(storage, filled_data)
    session = open_session(persistence, ScriptedConfirm(True))
    assert not session.reset(ScriptedConfirm(False))
    assert persistence.load() == filled_data


def test_resumed_session_survives_restart(persistence, storage):
    session = open_session(persistence, ScriptedConfirm())
    session.edit_field("people", 0, "name", "Ana")
    session.edit_field("people", 0, "feeling", "calma")

    restarted = open_session(persistence, ScriptedConfirm(True))
    assert restarted.step == Step.PEOPLE
    assert restarted.data == session.data


def test_save_failure_is_logged_not_raised(persistence, filled_data, monkeypatch):
    def boom(key, value):
        raise OSError("disk full")

    monkeypatch.setattr(persistence.storage, "set_item", boom)
    persistence.save(filled_data)
