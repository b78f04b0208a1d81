"""
Export pipeline for a finished resource map.

Derives the plain-text digest and turns card descriptions into PNG files
through a pluggable rasterizer. Nothing here mutates the session.
"""

import os
import tempfile
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from io import BytesIO
from pathlib import Path
from typing import Any, Callable, List, Optional

from .cards import Card, build_full_card, build_pocket_card
from .models import UserData
from ..config import (
    EXPORT_FAILED_NOTICE,
    EXPORT_SCALE,
    EXPORT_UNAVAILABLE_NOTICE,
    FULL_CARD_FILE_NAME,
    POCKET_CARD_FILE_NAME,
)
from ..logging_utils import log_export, log_warning


def _section(header: str, lines: List[str]) -> str:
    return f"{header}\n" + "\n".join(lines)


def build_text_digest(data: UserData) -> str:
    """
    Build the plain-text version of the map.

    Sections always appear in the same order, with a header even when the
    category is empty. Slots with an empty primary field are skipped.
    """
    title = f"MAPA DE RECURSOS DE {data.user_name.upper() or 'MÍ'}"
    sections = [
        _section("PERSONAS:", [f"- {p.name} ({p.feeling})" for p in data.filled("people")]),
        _section("LUGARES:", [f"- {p.name}" for p in data.filled("places")]),
        _section("CUALIDADES:", [f"- {q.name}" for q in data.filled("qualities")]),
        _section("MEMORIAS:", [f"- {m.description}" for m in data.filled("memories")]),
    ]
    return "\n\n".join([title] + sections)


class CardRasterizer(ABC):
    """Turns a Card into an image at a given upscale factor."""

    @abstractmethod
    def rasterize(self, card: Card, scale: int) -> Any:
        """
        Render the card.

        Returns:
            A PIL Image (anything with a PIL-compatible save()).

        Raises:
            RasterizationError (or any exception) when rendering fails.
        """
        pass


@dataclass
class ExportResult:
    """Outcome of an image export, suitable for a user notice."""
    success: bool
    path: Optional[Path]
    message: str


def encode_png(image: Any) -> bytes:
    """Encode an image to PNG bytes in memory."""
    buffer = BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


class Exporter:
    """
    Produces the downloadable artifacts of a session.

    Args:
        rasterizer: Renderer for cards, or None when image export is unavailable.
        downloads_dir: Folder that receives the PNG files.
        scale: Fixed upscale factor handed to the rasterizer.
    """

    def __init__(
        self,
        rasterizer: Optional[CardRasterizer],
        downloads_dir: Path,
        scale: int = EXPORT_SCALE,
    ):
        self.rasterizer = rasterizer
        self.downloads_dir = Path(downloads_dir)
        self.scale = scale

    # --- Text ---

    def copy_text(self, data: UserData, clipboard: Callable[[str], None]) -> str:
        """
        Send the digest to the clipboard.

        The caller confirms to the user regardless of the outcome, so a
        failing clipboard is only logged.

        Returns:
            The digest that was sent.
        """
        text = build_text_digest(data)
        try:
            clipboard(text)
        except Exception as e:
            log_warning(f"EXPORT: Clipboard write failed: {e}")
        return text

    # --- Images ---

    def export_full_card(self, data: UserData, today: Optional[date] = None) -> ExportResult:
        """Render and save the full card as mi-mapa-recursos.png."""
        return self.export_image(build_full_card(data, today), FULL_CARD_FILE_NAME)

    def export_pocket_card(self, data: UserData) -> ExportResult:
        """Render and save the pocket card as kit-emergencia.png."""
        return self.export_image(build_pocket_card(data), POCKET_CARD_FILE_NAME)

    def export_image(self, card: Card, file_name: str) -> ExportResult:
        """
        Rasterize a card and save it as <file_name>.png.

        The image is fully encoded before anything touches the disk, and the
        file appears atomically, so a failure never leaves a partial file.
        """
        target = f"{file_name}.png"
        if self.rasterizer is None:
            log_export(target, False, "no rasterizer available")
            return ExportResult(False, None, EXPORT_UNAVAILABLE_NOTICE)

        try:
            image = self.rasterizer.rasterize(card, self.scale)
            payload = encode_png(image)
            path = self._write_download(payload, target)
        except Exception as e:
            log_export(target, False, str(e))
            return ExportResult(False, None, EXPORT_FAILED_NOTICE)

        log_export(target, True, str(path))
        return ExportResult(True, path, f"Imagen guardada en {path}")

    def _write_download(self, payload: bytes, target: str) -> Path:
        self.downloads_dir.mkdir(parents=True, exist_ok=True)
        dest = self.downloads_dir / target
        fd, tmp_name = tempfile.mkstemp(prefix=f".{target}.", suffix=".tmp", dir=str(self.downloads_dir))
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(payload)
            os.replace(tmp_name, dest)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
            raise
        return dest
