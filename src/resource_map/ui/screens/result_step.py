"""
Result wizard step (Step 5).

Previews the full card and the pocket card and offers the export actions:
image downloads, copy as text, edit and start over.
"""

import tkinter as tk
from typing import Optional

from PIL import ImageTk

from ...config import (
    BG_COLOR,
    TEXT_SECONDARY,
    PRIMARY_COLOR,
    PAGE_TITLE_FONT,
    SMALL_FONT,
    SMALL_FONT_ITALIC,
    BODY_FONT,
    FULL_CARD_FILE_NAME,
    POCKET_CARD_FILE_NAME,
    FONT_FAMILY,
)
from ...core.cards import build_full_card, build_pocket_card
from ...logging_utils import log_warning
from ..tk_common import (
    create_danger_button,
    create_primary_button,
    create_secondary_button,
)
from .base import WizardStep


class ResultStep(WizardStep):
    """Step 5: The finished map and its exports."""

    STEP_ID = "result"
    STEP_TITLE = "Tu mapa"
    SHOW_NAV = False
    STEP_HELP = """Tu Mapa de Recursos

- Descargar Mapa: guarda la tarjeta completa como imagen PNG.
- Copiar Texto: copia una versión en texto al portapapeles.
- Editar: vuelve al primer paso con todo lo que escribiste.
- Crear Nuevo: borra todo tu progreso (se pide confirmación).

La versión de bolsillo resume lo esencial para momentos difíciles."""

    def __init__(self, wizard, session):
        super().__init__(wizard, session)
        self._full_label: Optional[tk.Label] = None
        self._pocket_label: Optional[tk.Label] = None
        # PhotoImages must stay referenced or Tk drops them
        self._full_photo = None
        self._pocket_photo = None

    def build_ui(self, parent: tk.Frame) -> None:
        parent.configure(bg=BG_COLOR)

        tk.Label(
            parent,
            text="✨ Tu Mapa de Recursos",
            bg=BG_COLOR,
            fg=PRIMARY_COLOR,
            font=PAGE_TITLE_FONT,
        ).pack(pady=(0, 16))

        self._full_label = tk.Label(parent, bg=BG_COLOR)
        self._full_label.pack(pady=(0, 16))

        actions = tk.Frame(parent, bg=BG_COLOR)
        actions.pack(pady=(0, 24))
        create_primary_button(actions, "Descargar Mapa", self._download_full, width=18).grid(
            row=0, column=0, padx=6, pady=6
        )
        create_secondary_button(actions, "Copiar Texto", self.wizard.copy_text, width=18).grid(
            row=0, column=1, padx=6, pady=6
        )
        create_secondary_button(actions, "Editar", self.wizard.go_edit, width=18).grid(
            row=1, column=0, padx=6, pady=6
        )
        create_danger_button(actions, "Crear Nuevo", self.wizard.request_reset, width=18).grid(
            row=1, column=1, padx=6, pady=6
        )

        tk.Label(
            parent,
            text="VERSIÓN DE BOLSILLO",
            bg=BG_COLOR,
            fg=TEXT_SECONDARY,
            font=(FONT_FAMILY, 10, "bold"),
        ).pack(pady=(8, 8))

        self._pocket_label = tk.Label(parent, bg=BG_COLOR)
        self._pocket_label.pack()

        mini = tk.Label(
            parent,
            text="Descargar versión mini",
            bg=BG_COLOR,
            fg=TEXT_SECONDARY,
            font=(FONT_FAMILY, 10, "underline"),
            cursor="hand2",
        )
        mini.pack(pady=(6, 0))
        mini.bind("<Button-1>", lambda e: self._download_pocket())
        mini.bind("<Enter>", lambda e: mini.configure(fg=PRIMARY_COLOR))
        mini.bind("<Leave>", lambda e: mini.configure(fg=TEXT_SECONDARY))

        tk.Label(
            parent,
            text=(
                "\"Practica acceder a estos recursos cuando estés calmado/a. "
                "Así estarán disponibles cuando los necesites.\""
            ),
            bg=BG_COLOR,
            fg=TEXT_SECONDARY,
            font=SMALL_FONT_ITALIC,
            wraplength=420,
            justify="center",
        ).pack(pady=(32, 8))

    def on_enter(self) -> None:
        self.update_display()

    def update_display(self) -> None:
        """Re-render both previews from the current data."""
        data = self.session.data
        renderer = self.wizard.preview_renderer
        if renderer is None:
            self._full_label.configure(image="", text="(Vista previa no disponible)", font=BODY_FONT)
            self._pocket_label.configure(image="", text="", font=SMALL_FONT)
            return
        try:
            self._full_photo = ImageTk.PhotoImage(renderer.rasterize(build_full_card(data), 1))
            self._pocket_photo = ImageTk.PhotoImage(renderer.rasterize(build_pocket_card(data), 1))
        except Exception as e:
            log_warning(f"UI: Preview rendering failed: {e}")
            self._full_label.configure(image="", text="(Vista previa no disponible)", font=BODY_FONT)
            self._pocket_label.configure(image="", text="")
            return
        self._full_label.configure(image=self._full_photo, text="")
        self._pocket_label.configure(image=self._pocket_photo, text="")

    # Cards are built here, at click time, from the current snapshot
    def _download_full(self) -> None:
        self.wizard.download_card(build_full_card(self.session.data), FULL_CARD_FILE_NAME)

    def _download_pocket(self) -> None:
        self.wizard.download_card(build_pocket_card(self.session.data), POCKET_CARD_FILE_NAME)
