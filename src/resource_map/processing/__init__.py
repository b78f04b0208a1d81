"""
Processing module for turning card descriptions into images.
"""

from .card_renderer import (
    PillowCardRenderer,
    load_font,
    wrap_text,
)

__all__ = [
    "PillowCardRenderer",
    "load_font",
    "wrap_text",
]
