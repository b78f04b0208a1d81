"""
UI module for the Tkinter wizard.

Includes:
- Light theme styled components
- Yes/no and notice dialogs
- One screen per wizard step
- The wizard window that hosts them
"""

from .tk_common import (
    # Window utilities
    apply_window_size,
    apply_light_theme,
    get_window_size,
    WINDOW_SIZES,
    # Styled components
    create_primary_button,
    create_secondary_button,
    create_danger_button,
    create_help_button,
    show_help_modal,
    show_toast,
)

from .dialogs import (
    ask_yes_no,
    make_confirm,
    show_notice,
)

from .full_wizard import (
    ResourceMapWizard,
    run_wizard,
)

__all__ = [
    # Common utilities
    "apply_window_size",
    "apply_light_theme",
    "get_window_size",
    "WINDOW_SIZES",
    # Styled components
    "create_primary_button",
    "create_secondary_button",
    "create_danger_button",
    "create_help_button",
    "show_help_modal",
    "show_toast",
    # Dialogs
    "ask_yes_no",
    "make_confirm",
    "show_notice",
    # Wizard
    "ResourceMapWizard",
    "run_wizard",
]
