"""
Wizard window for the resource map builder.

Hosts one screen per session step with a progress header and back/next
footer. The window only renders: navigation, gating and data live in the
ResourceMapSession, which is opened (resume prompt included) before any
screen accepts input.

Usage:
    wizard = ResourceMapWizard(persistence, exporter)
    wizard.run()
"""

import queue
import threading
import tkinter as tk
from tkinter import ttk, messagebox
from typing import Callable, List, Optional, Type

from ..config import (
    APP_NAME,
    BG_COLOR,
    BG_SECONDARY,
    COPY_TOAST,
    PRIMARY_COLOR,
    PAGE_TITLE_FONT,
)
from ..core.cards import Card
from ..core.exporter import Exporter, ExportResult
from ..core.persistence import PersistenceManager, open_session
from ..core.session import ResourceMapSession, Step
from ..logging_utils import log_info, log_warning, log_exception
from .dialogs import make_confirm, show_notice
from .screens.base import WizardStep
from .tk_common import (
    apply_light_theme,
    apply_window_size,
    create_help_button,
    create_next_button,
    create_secondary_button,
    set_button_enabled,
    show_toast,
)


class ResourceMapWizard:
    """
    Main window that shows the screen for the session's current step.

    Screens are registered in Step order, so a step's ordinal is also its
    index in the screen list.
    """

    def __init__(
        self,
        persistence: PersistenceManager,
        exporter: Exporter,
        preview_renderer=None,
    ):
        """
        Initialize the wizard and run the startup protocol.

        Args:
            persistence: Store manager; decides resume-or-discard.
            exporter: Export pipeline for the result screen.
            preview_renderer: Rasterizer used for on-screen previews.
        """
        self.root = tk.Tk()
        self.root.title(APP_NAME)
        self.root.protocol("WM_DELETE_WINDOW", self._on_close)
        self.root.withdraw()

        apply_light_theme(self.root)

        self.exporter = exporter
        self.preview_renderer = preview_renderer
        self.confirm = make_confirm(self.root)

        # Resume question is asked before any screen exists
        self._session: ResourceMapSession = open_session(persistence, self.confirm)

        self._step_classes: List[Type[WizardStep]] = []
        self._steps: List[WizardStep] = []
        self._shown: Optional[WizardStep] = None
        self._exporting = False

        # UI references
        self._content_frame: Optional[tk.Frame] = None
        self._title_label: Optional[tk.Label] = None
        self._progress: Optional[ttk.Progressbar] = None
        self._footer: Optional[tk.Frame] = None
        self._back_btn: Optional[tk.Button] = None
        self._next_btn: Optional[tk.Button] = None
        self._help_slot: Optional[tk.Frame] = None

        # Background export threads hand results back through this queue
        self._callback_queue: queue.Queue = queue.Queue()

        self._build_ui()

    @property
    def session(self) -> ResourceMapSession:
        """Get the wizard's session."""
        return self._session

    @property
    def current_step(self) -> Optional[WizardStep]:
        index = int(self._session.step)
        if 0 <= index < len(self._steps):
            return self._steps[index]
        return None

    def register_step(self, step_class: Type[WizardStep]) -> None:
        """Register a screen class; registration order must match Step order."""
        self._step_classes.append(step_class)

    # --- UI construction ---

    def _build_ui(self) -> None:
        self._main_frame = tk.Frame(self.root, bg=BG_COLOR)
        self._main_frame.pack(fill="both", expand=True)

        self._build_header()

        # Scrollable content area
        outer = tk.Frame(self._main_frame, bg=BG_COLOR)
        outer.pack(fill="both", expand=True)
        self._scroll_canvas = tk.Canvas(outer, bg=BG_COLOR, highlightthickness=0)
        scrollbar = tk.Scrollbar(outer, orient="vertical", command=self._scroll_canvas.yview, width=10)
        self._scroll_canvas.configure(yscrollcommand=scrollbar.set)
        scrollbar.pack(side="right", fill="y")
        self._scroll_canvas.pack(side="left", fill="both", expand=True)

        self._content_frame = tk.Frame(self._scroll_canvas, bg=BG_COLOR, padx=30, pady=16)
        self._canvas_window = self._scroll_canvas.create_window(
            (0, 0), window=self._content_frame, anchor="n"
        )
        self._content_frame.bind("<Configure>", self._on_content_configure)
        self._scroll_canvas.bind("<Configure>", self._on_canvas_configure)
        self.root.bind_all("<MouseWheel>", self._on_mousewheel)
        self.root.bind_all("<Button-4>", lambda e: self._scroll_canvas.yview_scroll(-1, "units"))
        self.root.bind_all("<Button-5>", lambda e: self._scroll_canvas.yview_scroll(1, "units"))

        self._build_footer()

    def _build_header(self) -> None:
        header = tk.Frame(self._main_frame, bg=BG_SECONDARY, padx=30, pady=12)
        header.pack(fill="x")

        self._title_label = tk.Label(
            header,
            text="",
            bg=BG_SECONDARY,
            fg=PRIMARY_COLOR,
            font=PAGE_TITLE_FONT,
        )
        self._title_label.pack()

        self._progress = ttk.Progressbar(
            header,
            orient="horizontal",
            length=256,
            mode="determinate",
            maximum=1.0,
            style="Calm.Horizontal.TProgressbar",
        )

    def _build_footer(self) -> None:
        self._footer = tk.Frame(self._main_frame, bg=BG_SECONDARY, padx=30, pady=12)
        self._footer.pack(fill="x", side="bottom")
        self._footer.columnconfigure(0, weight=1)
        self._footer.columnconfigure(1, weight=1)
        self._footer.columnconfigure(2, weight=1)

        left = tk.Frame(self._footer, bg=BG_SECONDARY)
        left.grid(row=0, column=0, sticky="w")
        self._back_btn = create_secondary_button(left, "← Atrás", self.go_back, width=10)
        self._back_btn.pack(side="left")

        self._help_slot = tk.Frame(self._footer, bg=BG_SECONDARY)
        self._help_slot.grid(row=0, column=1)

        right = tk.Frame(self._footer, bg=BG_SECONDARY)
        right.grid(row=0, column=2, sticky="e")
        self._next_btn = create_next_button(right, "Siguiente →", self.go_next)
        self._next_btn.pack(side="right")

    # --- Scrolling helpers ---

    def _on_content_configure(self, event=None) -> None:
        self._scroll_canvas.configure(scrollregion=self._scroll_canvas.bbox("all"))

    def _on_canvas_configure(self, event=None) -> None:
        width = self._scroll_canvas.winfo_width()
        self._scroll_canvas.coords(self._canvas_window, width // 2, 0)

    def _on_mousewheel(self, event) -> None:
        self._scroll_canvas.yview_scroll(int(-1 * (event.delta / 120)), "units")

    # --- Rendering ---

    def _show_current_step(self) -> None:
        """Swap in the screen for the session's step and refresh chrome."""
        new_step = self.current_step
        if new_step is None:
            return

        if self._shown is not None and self._shown is not new_step:
            try:
                self._shown.on_leave()
            except Exception as e:
                log_warning(f"Error leaving step {self._shown.STEP_ID}: {e}")
            if self._shown.frame:
                self._shown.frame.pack_forget()

        log_info(f"NAV: Showing step {new_step.STEP_ID} ({new_step.STEP_TITLE})")
        self._scroll_canvas.yview_moveto(0)
        if new_step.frame:
            new_step.frame.pack(fill="both", expand=True)
        self._shown = new_step

        try:
            new_step.on_enter()
        except Exception as e:
            log_exception(f"Error entering step {new_step.STEP_ID}: {e}")
            messagebox.showerror(
                "Error",
                f"Ocurrió un error al abrir '{new_step.STEP_TITLE}':\n\n{e}",
                parent=self.root,
            )

        self._update_header()
        self._update_help_button()
        self.refresh_nav()

    def _update_header(self) -> None:
        self._title_label.configure(text=self._session.step_label())
        if Step.PEOPLE <= self._session.step <= Step.MEMORIES:
            self._progress["value"] = self._session.progress()
            self._progress.pack(pady=(8, 0))
        else:
            self._progress.pack_forget()

    def _update_help_button(self) -> None:
        for widget in self._help_slot.winfo_children():
            widget.destroy()
        step = self.current_step
        if step:
            create_help_button(self._help_slot, f"Ayuda: {step.STEP_TITLE}", step.STEP_HELP).pack()

    def refresh_nav(self) -> None:
        """Update footer buttons; Next is disabled while the step is gated."""
        step = self.current_step
        if step is None:
            return
        if not step.SHOW_NAV:
            self._back_btn.pack_forget()
            self._next_btn.pack_forget()
            return

        if self._session.can_retreat():
            self._back_btn.pack(side="left")
        else:
            self._back_btn.pack_forget()

        self._next_btn.configure(text=f"{step.NEXT_LABEL} →")
        self._next_btn.pack(side="right")
        set_button_enabled(self._next_btn, self._session.can_advance())

    # --- Navigation ---

    def go_next(self) -> None:
        if self._session.advance():
            self._show_current_step()

    def go_back(self) -> None:
        if self._session.retreat():
            self._show_current_step()

    def go_edit(self) -> None:
        self._session.jump_to_edit()
        self._show_current_step()

    def request_reset(self) -> None:
        """Start over after confirmation."""
        if self._session.reset(self.confirm):
            self._show_current_step()

    # --- Exports ---

    def copy_text(self) -> None:
        """Copy the text digest; the toast shows whatever the clipboard did."""
        self.exporter.copy_text(self._session.data, self._write_clipboard)
        show_toast(self.root, COPY_TOAST)

    def _write_clipboard(self, text: str) -> None:
        self.root.clipboard_clear()
        self.root.clipboard_append(text)
        self.root.update()  # Required for the clipboard to persist

    def download_card(self, card: Card, file_name: str) -> None:
        """
        Export a card on a background thread.

        The card is already a snapshot; edits made while the export runs do
        not affect it.
        """
        if self._exporting:
            show_toast(self.root, "Ya se está generando una imagen...")
            return
        self._exporting = True
        self.root.configure(cursor="watch")
        log_info(f"EXPORT: Starting {file_name}.png")

        def worker():
            result = self.exporter.export_image(card, file_name)
            self.schedule_callback(lambda: self._on_export_done(result))

        threading.Thread(target=worker, daemon=True).start()

    def _on_export_done(self, result: ExportResult) -> None:
        self._exporting = False
        self.root.configure(cursor="")
        if result.success:
            show_toast(self.root, result.message, duration_ms=4000)
        else:
            show_notice(result.message, parent=self.root)

    def schedule_callback(self, callback: Callable) -> None:
        """
        Schedule a callback to run on the main (UI) thread.

        Background threads must use this instead of root.after().
        """
        self._callback_queue.put(callback)

    def _process_callback_queue(self) -> None:
        try:
            while True:
                callback = self._callback_queue.get_nowait()
                callback()
        except queue.Empty:
            pass
        self.root.after(100, self._process_callback_queue)

    # --- Lifecycle ---

    def _on_close(self) -> None:
        # Every edit is already on disk, so closing needs no confirmation
        log_info("NAV: Window closed")
        self.root.quit()

    def _initialize_steps(self) -> None:
        for step_class in self._step_classes:
            step = step_class(self, self._session)
            step.build(self._content_frame)
            self._steps.append(step)

    def run(self) -> ResourceMapSession:
        """
        Show the window and run the Tk main loop.

        Returns:
            The session as it was when the window closed.
        """
        self._initialize_steps()
        if len(self._steps) != len(Step):
            raise RuntimeError(
                f"Expected {len(Step)} screens, {len(self._steps)} registered"
            )

        apply_window_size(self.root, "standard")
        self.root.deiconify()
        self._show_current_step()
        self._process_callback_queue()

        self.root.mainloop()
        self.root.destroy()
        return self._session


def run_wizard(
    persistence: PersistenceManager,
    exporter: Exporter,
    preview_renderer=None,
) -> ResourceMapSession:
    """
    Run the resource map wizard with all screens registered.

    Args:
        persistence: Store manager for the session.
        exporter: Export pipeline for the result screen.
        preview_renderer: Rasterizer used for on-screen previews.

    Returns:
        The final session.
    """
    from .screens.welcome_step import WelcomeStep
    from .screens.resource_steps import PeopleStep, PlacesStep, QualitiesStep, MemoriesStep
    from .screens.result_step import ResultStep

    wizard = ResourceMapWizard(persistence, exporter, preview_renderer)

    wizard.register_step(WelcomeStep)     # Step 0
    wizard.register_step(PeopleStep)      # Step 1
    wizard.register_step(PlacesStep)      # Step 2
    wizard.register_step(QualitiesStep)   # Step 3
    wizard.register_step(MemoriesStep)    # Step 4
    wizard.register_step(ResultStep)      # Step 5

    return wizard.run()
