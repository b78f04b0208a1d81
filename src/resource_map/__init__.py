"""
Mapa de Recursos

A calm, step-by-step wizard for building a personal resource map: safe
people, peaceful places, personal strengths and memories of coping.
The result can be saved as a PNG card, a pocket card or copied as text.

Package Structure:
    core/       - Data model, session, persistence and export pipeline
    processing/ - Pillow card rendering
    ui/         - Tkinter user interface
"""

__version__ = "1.0.0"

# Lazy imports so the core can be used without touching tkinter
def __getattr__(name):
    if name == "UserData":
        from .core.models import UserData
        return UserData
    if name == "ResourceMapSession":
        from .core.session import ResourceMapSession
        return ResourceMapSession
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

__all__ = [
    "__version__",
    "UserData",
    "ResourceMapSession",
]
