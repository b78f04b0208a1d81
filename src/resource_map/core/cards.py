"""
Card descriptions for the visual exports.

A Card is a plain, immutable description of what a rendered card shows.
The UI previews it and the rasterizer draws it; neither needs the UserData
that produced it, so a card built at click time is a stable snapshot.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple

from .models import UserData
from ..config import FULL_CARD_FALLBACKS, POCKET_CARD_FALLBACKS


@dataclass(frozen=True)
class CardItem:
    """One entry in a card section."""
    text: str
    detail: str = ""


@dataclass(frozen=True)
class CardSection:
    """
    A titled block of entries.

    layout is one of:
        "list"    - "text - detail" lines
        "details" - text with the detail on an indented sub-line
        "chips"   - inline pills
        "quotes"  - quoted paragraphs
    """
    key: str
    heading: str
    layout: str
    items: Tuple[CardItem, ...]


@dataclass(frozen=True)
class CardRow:
    """A labelled value (pocket rows, full card footer)."""
    label: str
    value: str


@dataclass(frozen=True)
class Card:
    """Everything needed to draw one card."""
    kind: str  # "full" or "pocket"
    title: str
    subtitle: str = ""
    sections: Tuple[CardSection, ...] = ()
    highlight_title: str = ""
    rows: Tuple[CardRow, ...] = ()
    footnote: str = ""


def format_card_date(day: date) -> str:
    """Day/month/year without zero padding, as shown on the card."""
    return f"{day.day}/{day.month}/{day.year}"


def build_full_card(data: UserData, today: Optional[date] = None) -> Card:
    """
    Describe the full resource map card.

    Only populated categories get a section. The footer always shows one
    entry per category: its primary slot, or a calming fallback word.
    """
    today = today or date.today()
    sections = []

    people = data.filled("people")
    if people:
        sections.append(CardSection(
            "people", "MIS PERSONAS SEGURAS", "list",
            tuple(CardItem(p.name, p.feeling) for p in people),
        ))

    places = data.filled("places")
    if places:
        sections.append(CardSection(
            "places", "MIS LUGARES DE PAZ", "details",
            tuple(CardItem(p.name, p.details) for p in places),
        ))

    qualities = data.filled("qualities")
    if qualities:
        sections.append(CardSection(
            "qualities", "MIS CUALIDADES", "chips",
            tuple(CardItem(q.name) for q in qualities),
        ))

    memories = data.filled("memories")
    if memories:
        sections.append(CardSection(
            "memories", "MEMORIAS DE CAPACIDAD", "quotes",
            tuple(CardItem(m.description) for m in memories),
        ))

    people_fallback, places_fallback, qualities_fallback = FULL_CARD_FALLBACKS
    rows = (
        CardRow("", data.primary("people") or people_fallback),
        CardRow("", data.primary("places") or places_fallback),
        CardRow("", data.primary("qualities") or qualities_fallback),
    )

    return Card(
        kind="full",
        title="MI MAPA DE RECURSOS",
        subtitle=data.user_name,
        sections=tuple(sections),
        highlight_title="EN MOMENTOS DIFÍCILES:",
        rows=rows,
        footnote=f"Generado el {format_card_date(today)}",
    )


def build_pocket_card(data: UserData) -> Card:
    """Describe the pocket "calm kit": always exactly three primary rows."""
    people_fallback, places_fallback, qualities_fallback = POCKET_CARD_FALLBACKS
    return Card(
        kind="pocket",
        title="KIT DE CALMA",
        rows=(
            CardRow("Llama o busca a", data.primary("people") or people_fallback),
            CardRow("Ve (mentalmente) a", data.primary("places") or places_fallback),
            CardRow("Recuerda tu", data.primary("qualities") or qualities_fallback),
        ),
        footnote='"Esto también pasará"',
    )
