"""
Core business logic layer.

Contains the data model, the wizard session state machine, persistence
and the export pipeline, independent of the UI layer.
"""

from .models import UserData, Person, Place, Quality, Memory, CATEGORIES
from .session import ResourceMapSession, Step
from .persistence import LocalStorage, PersistenceManager, open_session
from .exporter import Exporter, ExportResult, CardRasterizer, build_text_digest
from .cards import Card, build_full_card, build_pocket_card

__all__ = [
    "UserData",
    "Person",
    "Place",
    "Quality",
    "Memory",
    "CATEGORIES",
    "ResourceMapSession",
    "Step",
    "LocalStorage",
    "PersistenceManager",
    "open_session",
    "Exporter",
    "ExportResult",
    "CardRasterizer",
    "build_text_digest",
    "Card",
    "build_full_card",
    "build_pocket_card",
]
