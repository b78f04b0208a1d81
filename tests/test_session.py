"""Tests for the wizard session state machine.

These tests verify that:
- Each forward transition is gated on the primary slot of its step
- Welcome always advances and Result never does
- Back is ungated and only offered on the form steps
- Edit jumps to People without touching the data
- Reset only happens after an explicit yes
- Mutations are broadcast to subscribers
"""

import pytest

from resource_map.config import RESET_PROMPT
from resource_map.core.models import UserData
from resource_map.core.session import ResourceMapSession, Step

from conftest import ScriptedConfirm


@pytest.fixture()
def session():
    return ResourceMapSession()


# ── Forward navigation ───────────────────────────────────────────────────────


def test_new_session_starts_empty_on_welcome(session):
    assert session.step == Step.WELCOME
    assert session.data == UserData.empty()


def test_welcome_advances_unconditionally(session):
    assert session.can_advance()
    assert session.advance()
    assert session.step == Step.PEOPLE


@pytest.mark.parametrize(
    "step, category, field_name",
    [
        (Step.PEOPLE, "people", "name"),
        (Step.PLACES, "places", "name"),
        (Step.QUALITIES, "qualities", "name"),
        (Step.MEMORIES, "memories", "description"),
    ],
)
def test_form_step_is_gated_on_primary_slot(step, category, field_name):
    session = ResourceMapSession(step=step)
    assert not session.can_advance()
    assert not session.advance()
    assert session.step == step

    session.edit_field(category, 0, field_name, "algo")
    assert session.can_advance()
    assert session.advance()
    assert session.step == Step(step + 1)


def test_secondary_slots_do_not_open_the_gate():
    session = ResourceMapSession(step=Step.PEOPLE)
    session.edit_field("people", 1, "name", "Luis")
    session.edit_field("people", 0, "feeling", "calma")
    assert not session.can_advance()


def test_clearing_primary_closes_the_gate_again():
    session = ResourceMapSession(step=Step.PLACES)
    session.edit_field("places", 0, "name", "El parque")
    assert session.can_advance()
    session.edit_field("places", 0, "name", "")
    assert not session.can_advance()


def test_result_never_advances(filled_data):
    session = ResourceMapSession(filled_data, Step.RESULT)
    assert not session.can_advance()
    assert not session.advance()
    assert session.step == Step.RESULT


def test_full_walkthrough(filled_data):
    session = ResourceMapSession(filled_data)
    for expected in (Step.PEOPLE, Step.PLACES, Step.QUALITIES, Step.MEMORIES, Step.RESULT):
        assert session.advance()
        assert session.step == expected


# ── Back and edit ────────────────────────────────────────────────────────────


def test_retreat_is_ungated():
    session = ResourceMapSession(step=Step.QUALITIES)
    assert session.retreat()
    assert session.step == Step.PLACES


def test_retreat_from_people_returns_to_welcome():
    session = ResourceMapSession(step=Step.PEOPLE)
    assert session.retreat()
    assert session.step == Step.WELCOME


@pytest.mark.parametrize("step", [Step.WELCOME, Step.RESULT])
def test_retreat_is_a_noop_outside_form_steps(step):
    session = ResourceMapSession(step=step)
    assert not session.can_retreat()
    assert not session.retreat()
    assert session.step == step


def test_jump_to_edit_keeps_data(filled_data):
    session = ResourceMapSession(filled_data, Step.RESULT)
    session.jump_to_edit()
    assert session.step == Step.PEOPLE
    assert session.data == filled_data


# ── Edits and listeners ──────────────────────────────────────────────────────


def test_edit_field_notifies_with_new_snapshot(session):
    seen = []
    session.subscribe(on_change=seen.append)
    session.edit_field("qualities", 2, "example", "En el trabajo")
    session.set_user_name("Ana")
    assert len(seen) == 2
    assert seen[0].qualities[2].example == "En el trabajo"
    assert seen[1].user_name == "Ana"
    assert seen[-1] is session.data


def test_edit_field_is_idempotent(session):
    session.edit_field("people", 0, "name", "Ana")
    first = session.data
    session.edit_field("people", 0, "name", "Ana")
    assert session.data == first


def test_bad_edit_leaves_data_untouched(session):
    seen = []
    session.subscribe(on_change=seen.append)
    with pytest.raises(IndexError):
        session.edit_field("memories", 5, "description", "x")
    assert session.data == UserData.empty()
    assert seen == []


def test_snapshot_is_unaffected_by_later_edits(session):
    session.edit_field("people", 0, "name", "Ana")
    snapshot = session.data
    session.edit_field("people", 0, "name", "Bea")
    assert snapshot.people[0].name == "Ana"


# ── Reset ────────────────────────────────────────────────────────────────────


def test_reset_confirmed_clears_everything(filled_data):
    session = ResourceMapSession(filled_data, Step.RESULT)
    resets = []
    session.subscribe(on_reset=lambda: resets.append(True))
    confirm = ScriptedConfirm(True)

    assert session.reset(confirm)
    assert confirm.prompts == [RESET_PROMPT]
    assert session.data == UserData.empty()
    assert session.step == Step.WELCOME
    assert resets == [True]


def test_reset_declined_changes_nothing(filled_data):
    session = ResourceMapSession(filled_data, Step.RESULT)
    resets = []
    session.subscribe(on_reset=lambda: resets.append(True))

    assert not session.reset(ScriptedConfirm(False))
    assert session.data == filled_data
    assert session.step == Step.RESULT
    assert resets == []


# ── Presentation ─────────────────────────────────────────────────────────────


def test_step_labels():
    assert ResourceMapSession().step_label() == "Bienvenido/a"
    assert ResourceMapSession(step=Step.PLACES).step_label() == "Paso 2 de 4"
    assert ResourceMapSession(step=Step.MEMORIES).step_label() == "Paso 4 de 4"
    assert ResourceMapSession(step=Step.RESULT).step_label() == ""


def test_progress():
    assert ResourceMapSession().progress() == 0.0
    assert ResourceMapSession(step=Step.PEOPLE).progress() == 0.25
    assert ResourceMapSession(step=Step.RESULT).progress() == 1.0
