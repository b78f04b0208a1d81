"""
Welcome wizard step (Step 0).

Explains what a resource is and collects the optional user name.
"""

import tkinter as tk
from typing import Optional

from ...config import (
    BG_COLOR,
    CARD_BG,
    TEXT_COLOR,
    TEXT_SECONDARY,
    PRIMARY_COLOR,
    TITLE_FONT,
    BODY_FONT,
    BODY_FONT_BOLD,
)
from ..tk_common import create_labeled_entry
from .base import WizardStep

INTRO_TEXT = (
    "Un recurso es cualquier cosa que te ayuda a regresar a tu Ventana de "
    "Tolerancia cuando te sientes desregulado/a.\n\n"
    "Vamos a identificar TUS recursos para que estén disponibles cuando "
    "los necesites."
)


class WelcomeStep(WizardStep):
    """Step 0: Introduction and optional name."""

    STEP_ID = "welcome"
    STEP_TITLE = "Bienvenida"
    NEXT_LABEL = "Construir mi mapa"
    STEP_HELP = """Tu Mapa de Recursos

En los próximos cuatro pasos vas a anotar:
- Personas que te hacen sentir seguro/a
- Lugares donde te sientes en paz
- Cualidades y fortalezas que tienes
- Momentos donde demostraste que podías

Tu nombre es opcional. Todo se guarda en este equipo a medida que escribes,
así que puedes cerrar la aplicación y continuar más tarde."""

    def __init__(self, wizard, session):
        super().__init__(wizard, session)
        self._name_var: Optional[tk.StringVar] = None
        self._syncing = False

    def build_ui(self, parent: tk.Frame) -> None:
        parent.configure(bg=BG_COLOR)

        card = tk.Frame(parent, bg=CARD_BG, padx=40, pady=32)
        card.pack(pady=(12, 0))

        tk.Label(card, text="🗺", bg=CARD_BG, fg=PRIMARY_COLOR, font=("Segoe UI Emoji", 40)).pack()
        tk.Label(
            card,
            text="Tu Mapa de Recursos",
            bg=CARD_BG,
            fg=PRIMARY_COLOR,
            font=TITLE_FONT,
        ).pack(pady=(8, 16))

        tk.Label(
            card,
            text=INTRO_TEXT,
            bg=CARD_BG,
            fg=TEXT_SECONDARY,
            font=BODY_FONT,
            wraplength=480,
            justify="center",
        ).pack(pady=(0, 24))

        form = tk.Frame(card, bg=CARD_BG)
        form.pack(fill="x", padx=80)

        self._name_var = tk.StringVar(value=self.session.data.user_name)
        self._name_var.trace_add("write", self._on_name_changed)
        create_labeled_entry(
            form, "Tu nombre (opcional):", self._name_var, placeholder="¿Cómo te llamas?", width=30
        )

        tk.Label(
            card,
            text="Pulsa «Construir mi mapa» para empezar.",
            bg=CARD_BG,
            fg=TEXT_COLOR,
            font=BODY_FONT_BOLD,
        ).pack(pady=(20, 0))

    def _on_name_changed(self, *_args) -> None:
        if self._syncing:
            return
        self.session.set_user_name(self._name_var.get())
        self.data_changed()

    def on_enter(self) -> None:
        # Reset may have cleared the name while this step was hidden
        self._syncing = True
        try:
            self._name_var.set(self.session.data.user_name)
        finally:
            self._syncing = False
