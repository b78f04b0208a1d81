"""Shared fixtures for the resource map tests."""

import pytest

from resource_map.core.models import UserData
from resource_map.core.persistence import LocalStorage, PersistenceManager


class ScriptedConfirm:
    """Confirm callable that answers from a fixed script and records prompts."""

    def __init__(self, *answers: bool):
        self.answers = list(answers)
        self.prompts = []

    def __call__(self, prompt: str) -> bool:
        self.prompts.append(prompt)
        return self.answers.pop(0)


@pytest.fixture()
def storage(tmp_path):
    """A LocalStorage backed by a temporary file."""
    return LocalStorage(tmp_path / "storage.json")


@pytest.fixture()
def persistence(storage):
    """A PersistenceManager on the temporary store."""
    return PersistenceManager(storage)


@pytest.fixture()
def filled_data():
    """A record with every primary slot filled and a few secondary ones."""
    return (
        UserData.empty()
        .with_user_name("Ana")
        .with_field("people", 0, "name", "Mamá")
        .with_field("people", 0, "feeling", "calma")
        .with_field("people", 2, "name", "Luis")
        .with_field("places", 0, "name", "La playa")
        .with_field("places", 0, "details", "olor a sal")
        .with_field("qualities", 0, "name", "Persistencia")
        .with_field("qualities", 1, "name", "Humor")
        .with_field("memories", 0, "description", "Terminé la carrera")
        .with_field("memories", 0, "qualities", "Determinación")
    )


@pytest.fixture()
def confirm_yes():
    return ScriptedConfirm(True)


@pytest.fixture()
def confirm_no():
    return ScriptedConfirm(False)
