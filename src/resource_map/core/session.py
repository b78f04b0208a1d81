"""
Wizard session controller.

ResourceMapSession owns the UserData aggregate and the current wizard step.
It is created once per run and passed to the UI and the exporter; nothing
else holds the aggregate.
"""

from enum import IntEnum
from typing import Callable, List, Optional

from .models import UserData
from ..config import RESET_PROMPT
from ..logging_utils import log_info

# Yes/no decision boundary: receives the prompt text, returns the answer.
# No aggregate mutation happens until it returns.
ConfirmFn = Callable[[str], bool]


class Step(IntEnum):
    """Wizard steps, in navigation order."""
    WELCOME = 0
    PEOPLE = 1
    PLACES = 2
    QUALITIES = 3
    MEMORIES = 4
    RESULT = 5


# Category whose primary slot must be filled before leaving each form step
STEP_CATEGORIES = {
    Step.PEOPLE: "people",
    Step.PLACES: "places",
    Step.QUALITIES: "qualities",
    Step.MEMORIES: "memories",
}

FORM_STEP_COUNT = len(STEP_CATEGORIES)


class ResourceMapSession:
    """
    State machine for one resource map session.

    Subscribers are told about every aggregate mutation (on_change, with the
    new snapshot) and about confirmed resets (on_reset). Step changes are not
    broadcast; the caller re-renders after calling a navigation method.
    """

    def __init__(self, data: Optional[UserData] = None, step: Step = Step.WELCOME):
        self._data = data if data is not None else UserData.empty()
        self._step = Step(step)
        self._change_listeners: List[Callable[[UserData], None]] = []
        self._reset_listeners: List[Callable[[], None]] = []

    @property
    def data(self) -> UserData:
        """Current aggregate snapshot (immutable)."""
        return self._data

    @property
    def step(self) -> Step:
        return self._step

    def subscribe(
        self,
        on_change: Optional[Callable[[UserData], None]] = None,
        on_reset: Optional[Callable[[], None]] = None,
    ) -> None:
        """Register mutation and reset listeners."""
        if on_change:
            self._change_listeners.append(on_change)
        if on_reset:
            self._reset_listeners.append(on_reset)

    def _notify_change(self) -> None:
        for listener in self._change_listeners:
            listener(self._data)

    # --- Navigation ---

    def can_advance(self) -> bool:
        """Gating predicate for leaving the current step, on in-memory data."""
        if self._step == Step.RESULT:
            return False
        category = STEP_CATEGORIES.get(self._step)
        if category is None:
            return True
        return bool(self._data.primary(category))

    def advance(self) -> bool:
        """
        Move to the next step.

        Returns:
            True if the step changed, False if gated (no-op).
        """
        if not self.can_advance():
            log_info(f"NAV: Next blocked on {self._step.name}")
            return False
        self._step = Step(self._step + 1)
        log_info(f"NAV: Advanced to {self._step.name}")
        return True

    def can_retreat(self) -> bool:
        """Back is offered on the form steps only."""
        return Step.PEOPLE <= self._step <= Step.MEMORIES

    def retreat(self) -> bool:
        """Move to the previous step; never gated. Returns True if moved."""
        if not self.can_retreat():
            return False
        self._step = Step(self._step - 1)
        log_info(f"NAV: Back to {self._step.name}")
        return True

    def jump_to_edit(self) -> None:
        """Return to the first form step without touching the data."""
        self._step = Step.PEOPLE
        log_info("NAV: Edit, jumped to PEOPLE")

    # --- Edits ---

    def edit_field(self, category: str, index: int, field_name: str, value: str) -> None:
        """
        Replace one text field of one slot.

        Raises:
            KeyError: Unknown category or field.
            IndexError: Slot index out of range.
        """
        self._data = self._data.with_field(category, index, field_name, value)
        self._notify_change()

    def set_user_name(self, value: str) -> None:
        """Replace the optional user name."""
        self._data = self._data.with_user_name(value)
        self._notify_change()

    def reset(self, confirm: ConfirmFn) -> bool:
        """
        Discard everything after an explicit yes.

        Returns:
            True if the reset happened, False if the user declined.
        """
        if not confirm(RESET_PROMPT):
            log_info("NAV: Reset declined")
            return False

        self._data = UserData.empty()
        for listener in self._reset_listeners:
            listener()
        self._step = Step.WELCOME
        log_info("NAV: Reset confirmed, back to WELCOME")
        return True

    # --- Presentation helpers ---

    def step_label(self) -> str:
        """Header text for the current step."""
        if self._step == Step.WELCOME:
            return "Bienvenido/a"
        if self._step == Step.RESULT:
            return ""
        return f"Paso {int(self._step)} de {FORM_STEP_COUNT}"

    def progress(self) -> float:
        """Fraction of form steps reached (0.0 on Welcome, 1.0 from Memories on)."""
        return min(int(self._step), FORM_STEP_COUNT) / FORM_STEP_COUNT


__all__ = [
    "ConfirmFn",
    "FORM_STEP_COUNT",
    "ResourceMapSession",
    "STEP_CATEGORIES",
    "Step",
]
