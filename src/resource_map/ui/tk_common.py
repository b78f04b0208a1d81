"""
Common Tkinter utilities and layout helpers.

Shared functions for window sizing, styled buttons, form fields, help and
toast overlays in the calm light theme.
"""

import tkinter as tk
from tkinter import ttk
from typing import Callable, Optional, Tuple

from ..config import (
    # Colors
    BG_COLOR,
    BG_SECONDARY,
    CARD_BG,
    FIELD_BG,
    TEXT_COLOR,
    TEXT_SECONDARY,
    TEXT_ON_ACCENT,
    PRIMARY_COLOR,
    PRIMARY_HOVER,
    ACCENT_COLOR,
    ACCENT_HOVER,
    DISABLED_COLOR,
    SECONDARY_COLOR,
    SECONDARY_HOVER,
    DANGER_COLOR,
    BORDER_COLOR,
    # Fonts
    FONT_FAMILY,
    SECTION_FONT,
    BODY_FONT,
    SMALL_FONT,
    BUTTON_FONT,
    BUTTON_FONT_LARGE,
)


# ═══════════════════════════════════════════════════════════════════════════════
# WINDOW SIZE CLASSES
# ═══════════════════════════════════════════════════════════════════════════════

WINDOW_SIZES = {
    "compact": (0.35, 0.45),
    "standard": (0.50, 0.80),
    "large": (0.70, 0.85),
}


def get_window_size(size_class: str, screen_w: int, screen_h: int) -> Tuple[int, int]:
    """
    Get window dimensions for a size class.

    Args:
        size_class: One of "compact", "standard", "large"
        screen_w: Screen width in pixels
        screen_h: Screen height in pixels

    Returns:
        (width, height) in pixels
    """
    w_ratio, h_ratio = WINDOW_SIZES.get(size_class, WINDOW_SIZES["standard"])
    return int(screen_w * w_ratio), int(screen_h * h_ratio)


def apply_window_size(root: tk.Tk, size_class: str) -> None:
    """Apply a standard size class to a window and center it."""
    root.update_idletasks()
    sw = root.winfo_screenwidth()
    sh = root.winfo_screenheight()

    w, h = get_window_size(size_class, sw, sh)
    x = (sw - w) // 2
    y = (sh - h) // 2

    root.geometry(f"{w}x{h}+{x}+{y}")


def apply_light_theme(root: tk.Tk) -> None:
    """
    Apply the calm light theme to a Tkinter window.

    Sets background color and configures the ttk styles used by the wizard.
    """
    root.configure(bg=BG_COLOR)

    style = ttk.Style()
    style.theme_use('clam')

    style.configure(
        "Calm.Horizontal.TProgressbar",
        troughcolor=SECONDARY_COLOR,
        background=ACCENT_COLOR,
        bordercolor=SECONDARY_COLOR,
        lightcolor=ACCENT_COLOR,
        darkcolor=ACCENT_COLOR,
        thickness=8,
    )
    style.configure(
        "Calm.TCombobox",
        fieldbackground=FIELD_BG,
        background=CARD_BG,
        foreground=TEXT_COLOR,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# STYLED BUTTON FACTORIES
# ═══════════════════════════════════════════════════════════════════════════════

def _styled_button(
    parent: tk.Widget,
    text: str,
    command: Callable,
    bg: str,
    hover: str,
    fg: str,
    font,
    width: int,
) -> tk.Button:
    btn = tk.Button(
        parent,
        text=text,
        command=command,
        width=width,
        bg=bg,
        fg=fg,
        activebackground=hover,
        activeforeground=fg,
        disabledforeground=TEXT_ON_ACCENT,
        font=font,
        relief="flat",
        cursor="hand2",
        bd=0,
        padx=12,
        pady=5,
    )

    # Hover only while enabled
    btn.bind("<Enter>", lambda e: btn.configure(bg=hover) if str(btn["state"]) != "disabled" else None)
    btn.bind("<Leave>", lambda e: btn.configure(bg=bg) if str(btn["state"]) != "disabled" else None)
    return btn


def create_primary_button(
    parent: tk.Widget,
    text: str,
    command: Callable,
    width: int = 15,
) -> tk.Button:
    """Create a styled primary action button (calming blue)."""
    return _styled_button(
        parent, text, command, PRIMARY_COLOR, PRIMARY_HOVER, TEXT_ON_ACCENT, BUTTON_FONT, width
    )


def create_next_button(
    parent: tk.Widget,
    text: str,
    command: Callable,
    width: int = 16,
) -> tk.Button:
    """Create the large green "next" button; see set_button_enabled()."""
    btn = _styled_button(
        parent, text, command, ACCENT_COLOR, ACCENT_HOVER, TEXT_ON_ACCENT, BUTTON_FONT_LARGE, width
    )
    btn._enabled_bg = ACCENT_COLOR
    return btn


def create_secondary_button(
    parent: tk.Widget,
    text: str,
    command: Callable,
    width: int = 15,
) -> tk.Button:
    """Create a styled secondary button (light gray, muted)."""
    return _styled_button(
        parent, text, command, SECONDARY_COLOR, SECONDARY_HOVER, TEXT_COLOR, BUTTON_FONT, width
    )


def create_danger_button(
    parent: tk.Widget,
    text: str,
    command: Callable,
    width: int = 15,
) -> tk.Button:
    """Create an outlined destructive button (red text)."""
    return _styled_button(
        parent, text, command, CARD_BG, "#FFF5F5", DANGER_COLOR, BUTTON_FONT, width
    )


def set_button_enabled(btn: tk.Button, enabled: bool) -> None:
    """Enable/disable a button, greying it out while disabled."""
    enabled_bg = getattr(btn, "_enabled_bg", PRIMARY_COLOR)
    if enabled:
        btn.configure(state="normal", bg=enabled_bg, cursor="hand2")
    else:
        btn.configure(state="disabled", bg=DISABLED_COLOR, cursor="arrow")


# ═══════════════════════════════════════════════════════════════════════════════
# FORM FIELDS
# ═══════════════════════════════════════════════════════════════════════════════

def create_labeled_entry(
    parent: tk.Widget,
    label: str,
    variable: tk.StringVar,
    placeholder: str = "",
    bold: bool = True,
    width: int = 50,
) -> tk.Entry:
    """
    Create a label + entry pair stacked vertically.

    The placeholder is shown as a hint label under the entry rather than
    inside it, so the entry text always equals the stored value.
    """
    bg = parent.cget("bg")
    tk.Label(
        parent,
        text=label,
        bg=bg,
        fg=TEXT_COLOR if bold else TEXT_SECONDARY,
        font=(FONT_FAMILY, 11, "bold") if bold else SMALL_FONT,
        anchor="w",
    ).pack(fill="x")

    entry = tk.Entry(
        parent,
        textvariable=variable,
        font=BODY_FONT,
        width=width,
        bg=FIELD_BG,
        fg=TEXT_COLOR,
        insertbackground=TEXT_COLOR,
        relief="solid",
        bd=1,
        highlightthickness=1,
        highlightcolor=PRIMARY_COLOR,
        highlightbackground=BORDER_COLOR,
    )
    entry.pack(fill="x", pady=(2, 0), ipady=4)

    if placeholder:
        tk.Label(
            parent,
            text=placeholder,
            bg=bg,
            fg=TEXT_SECONDARY,
            font=(FONT_FAMILY, 9, "italic"),
            anchor="w",
        ).pack(fill="x", pady=(0, 6))
    return entry


# ═══════════════════════════════════════════════════════════════════════════════
# HELP SYSTEM
# ═══════════════════════════════════════════════════════════════════════════════

def create_help_button(parent: tk.Widget, help_title: str, help_text: str) -> tk.Button:
    """Create a small "?" button that opens a help modal."""
    btn = tk.Button(
        parent,
        text="?",
        command=lambda: show_help_modal(parent, help_title, help_text),
        width=2,
        bg=SECONDARY_COLOR,
        fg=TEXT_COLOR,
        activebackground=SECONDARY_HOVER,
        activeforeground=TEXT_COLOR,
        font=(FONT_FAMILY, 10, "bold"),
        relief="flat",
        cursor="hand2",
        bd=0,
    )
    btn.bind("<Enter>", lambda e: btn.configure(bg=SECONDARY_HOVER))
    btn.bind("<Leave>", lambda e: btn.configure(bg=SECONDARY_COLOR))
    return btn


def show_help_modal(parent: tk.Widget, title: str, help_text: str) -> None:
    """
    Show a modal overlay with help content.

    Args:
        parent: Parent widget (used to find root window)
        title: Modal title
        help_text: Help content to display
    """
    root = parent.winfo_toplevel()

    overlay = tk.Toplevel(root)
    overlay.title(title)
    overlay.configure(bg=BG_COLOR)
    overlay.transient(root)
    overlay.grab_set()

    modal_w, modal_h = 460, 340
    x = root.winfo_x() + (root.winfo_width() - modal_w) // 2
    y = root.winfo_y() + (root.winfo_height() - modal_h) // 2
    overlay.geometry(f"{modal_w}x{modal_h}+{x}+{y}")
    overlay.resizable(False, False)

    content = tk.Frame(overlay, bg=BG_COLOR, padx=24, pady=20)
    content.pack(fill="both", expand=True)

    tk.Label(
        content,
        text=title,
        bg=BG_COLOR,
        fg=PRIMARY_COLOR,
        font=SECTION_FONT,
    ).pack(anchor="w", pady=(0, 12))

    text_widget = tk.Text(
        content,
        wrap="word",
        bg=BG_COLOR,
        fg=TEXT_COLOR,
        font=BODY_FONT,
        relief="flat",
        highlightthickness=0,
        height=10,
    )
    text_widget.insert("1.0", help_text)
    text_widget.configure(state="disabled")
    text_widget.pack(fill="both", expand=True, pady=(0, 12))

    create_primary_button(content, "Entendido", overlay.destroy, width=12).pack()

    overlay.bind("<Escape>", lambda e: overlay.destroy())
    overlay.focus_set()


# ═══════════════════════════════════════════════════════════════════════════════
# TOASTS
# ═══════════════════════════════════════════════════════════════════════════════

def show_toast(
    parent: tk.Widget,
    message: str,
    duration_ms: int = 2500,
    error: bool = False,
) -> tk.Frame:
    """
    Show a non-blocking notice at the bottom of the window.

    The toast removes itself after duration_ms.
    """
    root = parent.winfo_toplevel()
    bg = DANGER_COLOR if error else TEXT_COLOR

    toast = tk.Frame(root, bg=bg, padx=16, pady=10)
    tk.Label(
        toast,
        text=message,
        bg=bg,
        fg=TEXT_ON_ACCENT,
        font=BODY_FONT,
        wraplength=420,
        justify="center",
    ).pack()
    toast.place(relx=0.5, rely=0.92, anchor="s")
    toast.lift()

    def dismiss():
        try:
            toast.destroy()
        except tk.TclError:
            pass  # Window already closed

    root.after(duration_ms, dismiss)
    return toast


def create_slot_panel(parent: tk.Widget) -> tk.Frame:
    """Bordered panel grouping the fields of one slot."""
    outer = tk.Frame(parent, bg=BORDER_COLOR, padx=1, pady=1)
    inner = tk.Frame(outer, bg=FIELD_BG, padx=16, pady=12)
    inner.pack(fill="both", expand=True)
    outer.pack(fill="x", pady=(0, 12))
    return inner


__all__ = [
    "WINDOW_SIZES",
    "get_window_size",
    "apply_window_size",
    "apply_light_theme",
    "create_primary_button",
    "create_next_button",
    "create_secondary_button",
    "create_danger_button",
    "set_button_enabled",
    "create_labeled_entry",
    "create_help_button",
    "show_help_modal",
    "show_toast",
    "create_slot_panel",
    "BG_COLOR",
    "BG_SECONDARY",
    "CARD_BG",
    "TEXT_COLOR",
    "TEXT_SECONDARY",
    "PRIMARY_COLOR",
]
