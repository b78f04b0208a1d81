"""
Resource form steps (Steps 1-4).

One generic CategoryStep renders the fixed slots of a category; the four
subclasses only declare copy, fields and widget tweaks. Every keystroke is
written to the session immediately.
"""

import tkinter as tk
from tkinter import ttk
from typing import Dict, List, Tuple

from ...config import (
    BG_COLOR,
    CARD_BG,
    FIELD_BG,
    TEXT_COLOR,
    TEXT_SECONDARY,
    PRIMARY_COLOR,
    BORDER_COLOR,
    PAGE_TITLE_FONT,
    BODY_FONT,
    SMALL_FONT_ITALIC,
    FONT_FAMILY,
    QUALITY_OPTIONS,
)
from ...core.models import get_category
from ...logging_utils import log_warning
from ..tk_common import create_labeled_entry, create_slot_panel
from .base import WizardStep


class CategoryStep(WizardStep):
    """Base for a step that edits every slot of one category."""

    CATEGORY: str = ""
    ICON: str = ""
    HEADING: str = ""
    DESCRIPTION: str = ""
    SLOT_LABEL: str = ""
    # (field_name, label, placeholder); the primary field comes first
    FIELDS: List[Tuple[str, str, str]] = []
    FOOTER_HINT: str = ""

    def __init__(self, wizard, session):
        super().__init__(wizard, session)
        self._vars: Dict[Tuple[int, str], tk.StringVar] = {}
        self._syncing = False

    def build_ui(self, parent: tk.Frame) -> None:
        parent.configure(bg=BG_COLOR)

        card = tk.Frame(parent, bg=CARD_BG, padx=32, pady=24)
        card.pack(fill="x", padx=40, pady=(8, 0))

        tk.Label(card, text=self.ICON, bg=CARD_BG, fg=PRIMARY_COLOR, font=("Segoe UI Emoji", 28)).pack()
        tk.Label(
            card,
            text=self.HEADING,
            bg=CARD_BG,
            fg=PRIMARY_COLOR,
            font=PAGE_TITLE_FONT,
        ).pack(pady=(4, 6))
        tk.Label(
            card,
            text=self.DESCRIPTION,
            bg=CARD_BG,
            fg=TEXT_SECONDARY,
            font=BODY_FONT,
            wraplength=560,
            justify="center",
        ).pack(pady=(0, 16))

        spec = get_category(self.CATEGORY)
        for index in range(spec.count):
            panel = create_slot_panel(card)
            for position, (field_name, label, placeholder) in enumerate(self.FIELDS):
                var = tk.StringVar(value="")
                var.trace_add("write", self._make_trace(index, field_name))
                self._vars[(index, field_name)] = var
                if position == 0:
                    self.build_primary_field(panel, index, field_name, f"{self.SLOT_LABEL} {index + 1}", placeholder, var)
                else:
                    create_labeled_entry(panel, label, var, placeholder=placeholder, bold=False)

        if self.FOOTER_HINT:
            tk.Label(
                card,
                text=self.FOOTER_HINT,
                bg=CARD_BG,
                fg=TEXT_SECONDARY,
                font=SMALL_FONT_ITALIC,
                wraplength=520,
            ).pack(pady=(4, 0))

    def build_primary_field(
        self, panel: tk.Frame, index: int, field_name: str, label: str, placeholder: str, var: tk.StringVar
    ) -> None:
        """Create the widget for the slot's primary field (an entry by default)."""
        create_labeled_entry(panel, label, var, placeholder=placeholder)

    def _make_trace(self, index: int, field_name: str):
        def on_write(*_args):
            if self._syncing:
                return
            self.session.edit_field(self.CATEGORY, index, field_name, self._vars[(index, field_name)].get())
            self.data_changed()
        return on_write

    def on_enter(self) -> None:
        """Load the session's current values into the widgets."""
        self._syncing = True
        try:
            for slot_index, slot in enumerate(self.session.data.slots(self.CATEGORY)):
                for field_name, _label, _placeholder in self.FIELDS:
                    value = getattr(slot, field_name)
                    var = self._vars[(slot_index, field_name)]
                    if var.get() != value:
                        var.set(value)
                    self.sync_widget(slot_index, field_name, value)
        finally:
            self._syncing = False

    def sync_widget(self, index: int, field_name: str, value: str) -> None:
        """Hook for widgets not driven by a StringVar."""
        pass


class PeopleStep(CategoryStep):
    """Step 1: People who make the user feel safe."""

    STEP_ID = "people"
    STEP_TITLE = "Personas"
    CATEGORY = "people"
    ICON = "👤"
    HEADING = "Personas que me hacen sentir seguro/a"
    DESCRIPTION = "¿Con quiénes puedes ser tú mismo/a? ¿Quiénes te calman con su presencia?"
    SLOT_LABEL = "Persona"
    FIELDS = [
        ("name", "Persona", "Ej: Mi mamá, Juan, mi terapeuta..."),
        ("feeling", "¿Qué sientes con esta persona?", "Ej: Calma, aceptación, seguridad..."),
    ]
    FOOTER_HINT = "Con una persona basta. Si tienes más, mejor."
    STEP_HELP = """Personas seguras

Escribe al menos una persona para continuar. Puede ser alguien de tu
familia, una amistad, tu terapeuta o incluso una mascota.

En el segundo campo anota qué sientes con esa persona: calma, aceptación,
seguridad..."""


class PlacesStep(CategoryStep):
    """Step 2: Places where the user feels at peace."""

    STEP_ID = "places"
    STEP_TITLE = "Lugares"
    CATEGORY = "places"
    ICON = "📍"
    HEADING = "Lugares donde me siento en paz"
    DESCRIPTION = "¿Dónde se relaja tu sistema nervioso? Pueden ser lugares reales o imaginarios."
    SLOT_LABEL = "Lugar"
    FIELDS = [
        ("name", "Lugar", "Ej: La playa, mi cuarto, el jardín..."),
        ("details", "¿Qué lo hace especial?", "Colores, olores, sonidos, sensaciones..."),
    ]
    FOOTER_HINT = "Visualiza este lugar en detalle. Mientras más sentidos incluyas, más poderoso será."
    STEP_HELP = """Lugares de paz

Escribe al menos un lugar para continuar. Puede existir o ser imaginario.

Describe lo que lo hace especial con todos los sentidos que puedas."""


class QualitiesStep(CategoryStep):
    """Step 3: Personal strengths, with suggestions."""

    STEP_ID = "qualities"
    STEP_TITLE = "Cualidades"
    CATEGORY = "qualities"
    ICON = "❤"
    HEADING = "Cualidades y fortalezas que tengo"
    DESCRIPTION = (
        "¿Qué fortalezas has demostrado en tu vida? "
        "Persistencia, creatividad, humor, sensibilidad..."
    )
    SLOT_LABEL = "Cualidad"
    FIELDS = [
        ("name", "Cualidad", "Selecciona o escribe una..."),
        ("example", "Un momento donde la demostré:", "Describe brevemente una situación..."),
    ]
    STEP_HELP = """Cualidades

Elige una cualidad de la lista o escribe la tuya. Necesitas al menos una
para continuar.

Anota un momento concreto en que la demostraste."""

    def build_primary_field(self, panel, index, field_name, label, placeholder, var) -> None:
        tk.Label(
            panel,
            text=label,
            bg=FIELD_BG,
            fg=TEXT_COLOR,
            font=(FONT_FAMILY, 11, "bold"),
            anchor="w",
        ).pack(fill="x")
        combo = ttk.Combobox(
            panel,
            textvariable=var,
            values=QUALITY_OPTIONS,
            font=BODY_FONT,
            style="Calm.TCombobox",
        )
        combo.pack(fill="x", pady=(2, 0), ipady=3)
        tk.Label(
            panel,
            text=placeholder,
            bg=FIELD_BG,
            fg=TEXT_SECONDARY,
            font=(FONT_FAMILY, 9, "italic"),
            anchor="w",
        ).pack(fill="x", pady=(0, 6))


class MemoriesStep(CategoryStep):
    """Step 4: Memories of past resilience; description is multi-line."""

    STEP_ID = "memories"
    STEP_TITLE = "Memorias"
    NEXT_LABEL = "Generar mi mapa"
    CATEGORY = "memories"
    ICON = "🏆"
    HEADING = "Momentos donde demostré que podía"
    DESCRIPTION = (
        "Recuerda momentos donde superaste algo difícil, lograste algo "
        "importante, o demostraste tu capacidad."
    )
    SLOT_LABEL = "Memoria"
    FIELDS = [
        ("description", "Memoria", "Describe el momento: ¿Qué pasó? ¿Qué lograste?"),
        ("qualities", "¿Qué cualidades usaste?", "Ej: Determinación, creatividad..."),
    ]
    FOOTER_HINT = "Estas memorias son evidencia de que puedes manejar cosas difíciles."
    STEP_HELP = """Memorias de capacidad

Describe al menos un momento en el que superaste algo difícil. Con eso
se habilita «Generar mi mapa».

Añade qué cualidades usaste en ese momento."""

    def __init__(self, wizard, session):
        super().__init__(wizard, session)
        self._texts: Dict[int, tk.Text] = {}

    def build_primary_field(self, panel, index, field_name, label, placeholder, var) -> None:
        tk.Label(
            panel,
            text=label,
            bg=FIELD_BG,
            fg=TEXT_COLOR,
            font=(FONT_FAMILY, 11, "bold"),
            anchor="w",
        ).pack(fill="x")
        text = tk.Text(
            panel,
            height=4,
            wrap="word",
            font=BODY_FONT,
            bg=FIELD_BG,
            fg=TEXT_COLOR,
            insertbackground=TEXT_COLOR,
            relief="solid",
            bd=1,
            highlightthickness=1,
            highlightcolor=PRIMARY_COLOR,
            highlightbackground=BORDER_COLOR,
        )
        text.pack(fill="x", pady=(2, 0))
        tk.Label(
            panel,
            text=placeholder,
            bg=FIELD_BG,
            fg=TEXT_SECONDARY,
            font=(FONT_FAMILY, 9, "italic"),
            anchor="w",
        ).pack(fill="x", pady=(0, 6))

        # Text widgets have no textvariable; mirror edits into the StringVar
        def on_modified(_event=None):
            if not text.edit_modified():
                return
            text.edit_modified(False)
            if not self._syncing:
                var.set(text.get("1.0", "end-1c"))

        text.bind("<<Modified>>", on_modified)
        self._texts[index] = text

    def sync_widget(self, index: int, field_name: str, value: str) -> None:
        if field_name != "description":
            return
        text = self._texts.get(index)
        if text is None:
            log_warning(f"UI: No text widget for memory slot {index}")
            return
        if text.get("1.0", "end-1c") != value:
            text.delete("1.0", "end")
            text.insert("1.0", value)
            text.edit_modified(False)
