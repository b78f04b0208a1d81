"""
Base classes for wizard step architecture.

Provides the WizardStep abstract base class. Steps read from and write to
the shared ResourceMapSession; navigation and gating live in the session.
"""

import tkinter as tk
from abc import ABC, abstractmethod
from typing import Optional, TYPE_CHECKING

from ...core.session import ResourceMapSession

if TYPE_CHECKING:
    from ..full_wizard import ResourceMapWizard


class WizardStep(ABC):
    """
    Abstract base class for wizard steps.

    Lifecycle:
        1. build_ui() - Called once when step is created
        2. on_enter() - Called each time step becomes active
        3. User edits fields, which go straight to the session
        4. on_leave() - Called when navigating away from step
    """

    # Step metadata - override in subclasses
    STEP_ID: str = "base"
    STEP_TITLE: str = "Base Step"
    STEP_HELP: str = "Override this help text in subclass."
    NEXT_LABEL: str = "Siguiente"
    SHOW_NAV: bool = True  # Footer back/next buttons

    def __init__(self, wizard: "ResourceMapWizard", session: ResourceMapSession):
        """
        Initialize the wizard step.

        Args:
            wizard: Parent wizard window for navigation callbacks.
            session: Shared session holding the data and current step.
        """
        self.wizard = wizard
        self.session = session
        self._frame: Optional[tk.Frame] = None

    @property
    def frame(self) -> Optional[tk.Frame]:
        """Get the step's main frame, if built."""
        return self._frame

    def build(self, parent: tk.Frame) -> tk.Frame:
        """Build the step's UI once and return its frame."""
        self._frame = tk.Frame(parent, bg=parent.cget("bg"))
        self.build_ui(self._frame)
        return self._frame

    @abstractmethod
    def build_ui(self, parent: tk.Frame) -> None:
        """Create all UI elements for the step inside parent."""
        pass

    def on_enter(self) -> None:
        """
        Called when the step becomes active.

        Override to refresh displayed values from the session. Default
        implementation does nothing.
        """
        pass

    def on_leave(self) -> None:
        """Called when navigating away from this step."""
        pass

    def data_changed(self) -> None:
        """Tell the wizard an edit happened so the Next button re-gates."""
        if self.wizard:
            self.wizard.refresh_nav()

    def request_next(self) -> None:
        """Request navigation to the next step."""
        if self.wizard:
            self.wizard.go_next()

    def request_back(self) -> None:
        """Request navigation to the previous step."""
        if self.wizard:
            self.wizard.go_back()
