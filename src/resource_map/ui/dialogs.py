"""
Blocking dialogs used as the app's decision boundary.

Both wrap tkinter.messagebox so the core only ever sees a plain
"prompt text in, answer out" callable.
"""

import tkinter as tk
from tkinter import messagebox
from typing import Callable, Optional

from ..config import APP_NAME
from ..logging_utils import log_info


def ask_yes_no(message: str, parent: Optional[tk.Misc] = None) -> bool:
    """
    Ask a yes/no question and block until the user answers.

    Args:
        message: Question text.
        parent: Window to center the dialog over.

    Returns:
        True for yes, False for no or a closed dialog.
    """
    if parent is not None:
        try:
            parent.focus_force()
        except tk.TclError:
            pass  # Window may be in transition
    answer = messagebox.askyesno(APP_NAME, message, icon="question", parent=parent)
    log_info(f"DIALOG: '{message}' -> {'yes' if answer else 'no'}")
    return bool(answer)


def make_confirm(parent: Optional[tk.Misc]) -> Callable[[str], bool]:
    """Bind ask_yes_no to a parent window."""
    return lambda message: ask_yes_no(message, parent)


def show_notice(message: str, parent: Optional[tk.Misc] = None) -> None:
    """Show a blocking, non-fatal warning the user acknowledges with OK."""
    messagebox.showwarning(APP_NAME, message, parent=parent)
