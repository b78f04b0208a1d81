#!/usr/bin/env python3
"""
config.py

All global paths, constants, and static tables for the resource map builder.
User overrides are read from an optional settings.yml in the data directory.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

# ═══════════════════════════════════════════════════════════════════════════════
# APPLICATION INFO
# ═══════════════════════════════════════════════════════════════════════════════
APP_NAME = "Mapa de Recursos"
APP_VERSION = "1.0.0"


def get_data_dir() -> Path:
    """Directory holding the store and settings (RESOURCE_MAP_HOME overrides it)."""
    override = os.environ.get("RESOURCE_MAP_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".resource_map"


# Paths for storage and settings
DATA_DIR = get_data_dir()
STORAGE_PATH = DATA_DIR / "storage.json"
SETTINGS_PATH = DATA_DIR / "settings.yml"
DEFAULT_DOWNLOADS_DIR = Path.home() / "Downloads"

# Single well-known key the whole aggregate is stored under
STORAGE_KEY = "mapaRecursosData"

# ═══════════════════════════════════════════════════════════════════════════════
# EXPORT
# ═══════════════════════════════════════════════════════════════════════════════
EXPORT_SCALE = 2
FULL_CARD_FILE_NAME = "mi-mapa-recursos"
POCKET_CARD_FILE_NAME = "kit-emergencia"

# Footer fallbacks on the full card (people, places, qualities)
FULL_CARD_FALLBACKS = ("Respira", "Observa", "Confía")

# Pocket card fallbacks (people, places, qualities)
POCKET_CARD_FALLBACKS = ("Alguien de confianza", "Tu lugar seguro", "Fortaleza")

# ═══════════════════════════════════════════════════════════════════════════════
# DIALOG / NOTICE COPY
# ═══════════════════════════════════════════════════════════════════════════════
RESUME_PROMPT = "¿Continuar donde lo dejaste?"
RESET_PROMPT = "¿Estás seguro/a? Se borrará todo tu progreso."
COPY_TOAST = "Texto copiado al portapapeles ✨"
EXPORT_UNAVAILABLE_NOTICE = "La función de descarga no está disponible en este momento."
EXPORT_FAILED_NOTICE = "Hubo un error generando la imagen. Por favor intenta de nuevo."

# Suggestions offered on the qualities step
QUALITY_OPTIONS: List[str] = [
    "Persistencia",
    "Creatividad",
    "Humor",
    "Sensibilidad",
    "Valentía",
    "Paciencia",
    "Empatía",
    "Inteligencia",
    "Adaptabilidad",
]

# ═══════════════════════════════════════════════════════════════════════════════
# CALM LIGHT COLOR SCHEME
# ═══════════════════════════════════════════════════════════════════════════════
BG_COLOR = "#FAF5F0"              # Main window background (warm paper)
BG_SECONDARY = "#FFFFFF"          # Header / footer
CARD_BG = "#FFFFFF"               # Form card background
FIELD_BG = "#F7FAFC"              # Slot panels and entries

TEXT_COLOR = "#2D3748"            # Primary text
TEXT_SECONDARY = "#718096"        # Secondary/muted text
TEXT_ON_ACCENT = "#FFFFFF"        # Text on colored buttons

PRIMARY_COLOR = "#4A7C94"         # Calming blue
PRIMARY_HOVER = "#3B657A"
ACCENT_COLOR = "#7CB08A"          # Soft green, "next" buttons and progress
ACCENT_HOVER = "#6A9C78"
DISABLED_COLOR = "#CBD5E0"
SECONDARY_COLOR = "#E2E8F0"
SECONDARY_HOVER = "#CBD5E0"
DANGER_COLOR = "#E53E3E"
DANGER_HOVER = "#C53030"
BORDER_COLOR = "#E2E8F0"

POCKET_BG = "#2D3748"             # Pocket card background
POCKET_HIGHLIGHT = "#ECC94B"      # Pocket card title

# Per-section tints on the full card
SECTION_TINTS: Dict[str, str] = {
    "people": "#EBF4FA",
    "places": "#EDF7EF",
    "qualities": "#FDF3E8",
    "memories": "#F4EEF9",
}

# ═══════════════════════════════════════════════════════════════════════════════
# FONT DEFINITIONS
# ═══════════════════════════════════════════════════════════════════════════════
FONT_FAMILY = "Segoe UI"

TITLE_FONT = (FONT_FAMILY, 22, "bold")
PAGE_TITLE_FONT = (FONT_FAMILY, 18, "bold")
SECTION_FONT = (FONT_FAMILY, 14, "bold")
BODY_FONT = (FONT_FAMILY, 12)
BODY_FONT_BOLD = (FONT_FAMILY, 12, "bold")
SMALL_FONT = (FONT_FAMILY, 10)
SMALL_FONT_ITALIC = (FONT_FAMILY, 10, "italic")
BUTTON_FONT = (FONT_FAMILY, 11)
BUTTON_FONT_LARGE = (FONT_FAMILY, 13, "bold")

# ═══════════════════════════════════════════════════════════════════════════════
# USER SETTINGS (settings.yml)
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass
class AppSettings:
    """Runtime settings, defaults overridden by settings.yml."""
    storage_path: Path = STORAGE_PATH
    downloads_dir: Path = DEFAULT_DOWNLOADS_DIR
    export_scale: int = EXPORT_SCALE


def _apply_overrides(settings: AppSettings, raw: Dict[str, Any]) -> AppSettings:
    if raw.get("storage_path"):
        settings.storage_path = Path(str(raw["storage_path"])).expanduser()
    if raw.get("downloads_dir"):
        settings.downloads_dir = Path(str(raw["downloads_dir"])).expanduser()
    if raw.get("export_scale") is not None:
        scale = int(raw["export_scale"])
        if scale < 1:
            raise ValueError(f"export_scale must be >= 1, got {scale}")
        settings.export_scale = scale
    return settings


def load_settings(path: Optional[Path] = None) -> AppSettings:
    """
    Load settings.yml, falling back to defaults.

    A missing file is normal. An unreadable or invalid file is logged and
    ignored so the app still starts.

    Args:
        path: Settings file to read (defaults to SETTINGS_PATH).

    Returns:
        AppSettings with any overrides applied.
    """
    from .logging_utils import log_warning

    path = Path(path) if path is not None else SETTINGS_PATH
    settings = AppSettings()
    if not path.exists():
        return settings

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
        if not isinstance(raw, dict):
            raise ValueError("settings.yml must contain a mapping")
        return _apply_overrides(settings, raw)
    except (OSError, yaml.YAMLError, ValueError, TypeError) as e:
        log_warning(f"CONFIG: Ignoring settings file {path}: {e}")
        return AppSettings()
