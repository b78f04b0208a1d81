"""
Pillow renderer for resource map cards.

Draws a Card description onto an image at an integer upscale factor. Used
both for the on-screen preview (scale 1) and for the PNG export.
"""

from functools import lru_cache
from typing import List, Tuple

from PIL import Image, ImageDraw, ImageFont

from ..config import (
    BG_COLOR,
    BORDER_COLOR,
    PRIMARY_COLOR,
    SECTION_TINTS,
    TEXT_COLOR,
    TEXT_SECONDARY,
    TEXT_ON_ACCENT,
    POCKET_BG,
    POCKET_HIGHLIGHT,
)
from ..core.cards import Card, CardSection
from ..core.exceptions import RasterizationError
from ..core.exporter import CardRasterizer

FULL_CARD_WIDTH = 600
POCKET_CARD_WIDTH = 384
POCKET_MIN_HEIGHT = 300

# Tried in order; the bundled Pillow font is the last resort
_FONT_CANDIDATES = {
    False: ("DejaVuSans.ttf", "arial.ttf", "Arial.ttf", "LiberationSans-Regular.ttf"),
    True: ("DejaVuSans-Bold.ttf", "arialbd.ttf", "Arial Bold.ttf", "LiberationSans-Bold.ttf"),
}


@lru_cache(maxsize=64)
def load_font(size: int, bold: bool = False) -> ImageFont.ImageFont:
    """Load a TrueType font of the given pixel size, falling back to Pillow's default."""
    for name in _FONT_CANDIDATES[bold]:
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    return ImageFont.load_default(size=size)


def _break_word(draw: ImageDraw.ImageDraw, word: str, font, max_width: int) -> List[str]:
    """Split a word wider than max_width into pieces that fit, by character."""
    pieces: List[str] = []
    current = ""
    for char in word:
        if current and draw.textlength(current + char, font=font) > max_width:
            pieces.append(current)
            current = char
        else:
            current += char
    pieces.append(current)
    return pieces


def wrap_text(draw: ImageDraw.ImageDraw, text: str, font, max_width: int) -> List[str]:
    """
    Greedy word wrap by rendered width.

    Words longer than max_width are broken across lines.
    """
    words: List[str] = []
    for word in text.split():
        if draw.textlength(word, font=font) > max_width:
            words.extend(_break_word(draw, word, font, max_width))
        else:
            words.append(word)
    if not words:
        return [""]
    lines: List[str] = []
    current = words[0]
    for word in words[1:]:
        candidate = f"{current} {word}"
        if draw.textlength(candidate, font=font) <= max_width:
            current = candidate
        else:
            lines.append(current)
            current = word
    lines.append(current)
    return lines


def _line_height(font) -> int:
    if hasattr(font, "getmetrics"):
        ascent, descent = font.getmetrics()
        return ascent + descent
    return font.getbbox("Ág")[3] + 2


class PillowCardRenderer(CardRasterizer):
    """Default rasterizer: draws cards with Pillow."""

    def rasterize(self, card: Card, scale: int = 1) -> Image.Image:
        if scale < 1:
            raise RasterizationError(f"Invalid scale {scale}", card.kind)
        if card.kind == "full":
            render = self._render_full
        elif card.kind == "pocket":
            render = self._render_pocket
        else:
            raise RasterizationError(f"Unknown card kind '{card.kind}'", card.kind)

        # Draw on a generous canvas, then crop; redraw once if it overflowed
        canvas_h = 1600 * scale
        img, used_h = render(card, scale, canvas_h)
        if used_h > canvas_h:
            img, used_h = render(card, scale, used_h)
        return img.crop((0, 0, img.width, used_h))

    # ── Full card ─────────────────────────────────────────────────────────

    def _render_full(self, card: Card, s: int, canvas_h: int) -> Tuple[Image.Image, int]:
        width = FULL_CARD_WIDTH * s
        pad = 32 * s
        inner = width - 2 * pad

        img = Image.new("RGB", (width, canvas_h), BG_COLOR)
        draw = ImageDraw.Draw(img)

        title_font = load_font(24 * s, bold=True)
        subtitle_font = load_font(16 * s)
        y = pad

        y = self._centered(draw, card.title, title_font, PRIMARY_COLOR, width, y)
        if card.subtitle:
            y += 4 * s
            y = self._centered(draw, card.subtitle, subtitle_font, TEXT_SECONDARY, width, y)
        y += 12 * s
        draw.line([(pad, y), (width - pad, y)], fill=BORDER_COLOR, width=2 * s)
        y += 24 * s

        for section in card.sections:
            y = self._draw_section(draw, section, pad, inner, y, s)
            y += 16 * s

        y = self._draw_footer(draw, card, pad, inner, y + 8 * s, s)
        return img, y + pad

    def _draw_section(
        self, draw: ImageDraw.ImageDraw, section: CardSection, x: int, width: int, y: int, s: int
    ) -> int:
        box_pad = 16 * s
        heading_font = load_font(15 * s, bold=True)
        text_w = width - 2 * box_pad

        # Lay out first so the tinted box can be drawn behind the text
        ops: List[Tuple[int, int, str, object, str]] = []  # (dx, dy, text, font, fill)
        chips: List[Tuple[int, int, int, int]] = []
        cy = _line_height(heading_font) + 8 * s

        if section.layout == "chips":
            chip_font = load_font(13 * s)
            chip_h = _line_height(chip_font) + 8 * s
            cx = 0
            for item in section.items:
                chip_w = int(draw.textlength(item.text, font=chip_font)) + 24 * s
                if cx and cx + chip_w > text_w:
                    cx = 0
                    cy += chip_h + 8 * s
                chips.append((cx, cy, chip_w, chip_h))
                ops.append((cx + 12 * s, cy + 4 * s, item.text, chip_font, TEXT_COLOR))
                cx += chip_w + 8 * s
            cy += chip_h
        else:
            body_bold = load_font(14 * s, bold=True)
            body = load_font(14 * s)
            small = load_font(12 * s)
            for item in section.items:
                if section.layout == "quotes":
                    for line in wrap_text(draw, f'"{item.text}"', body, text_w):
                        ops.append((0, cy, line, body, TEXT_COLOR))
                        cy += _line_height(body)
                else:
                    text = item.text
                    if section.layout == "list" and item.detail:
                        text = f"{item.text} - {item.detail}"
                    for line in wrap_text(draw, text, body_bold, text_w):
                        ops.append((0, cy, line, body_bold, TEXT_COLOR))
                        cy += _line_height(body_bold)
                    if section.layout == "details" and item.detail:
                        for line in wrap_text(draw, f"↳ {item.detail}", small, text_w - 16 * s):
                            ops.append((16 * s, cy, line, small, TEXT_SECONDARY))
                            cy += _line_height(small)
                cy += 8 * s

        box_h = cy + 2 * box_pad
        tint = SECTION_TINTS.get(section.key, "#FFFFFF")
        draw.rounded_rectangle(
            [x, y, x + width, y + box_h], radius=12 * s, fill=tint, outline=BORDER_COLOR, width=s
        )
        draw.text((x + box_pad, y + box_pad), section.heading, font=heading_font, fill=PRIMARY_COLOR)
        for cx, chip_y, chip_w, chip_h in chips:
            left, top = x + box_pad + cx, y + box_pad + chip_y
            draw.rounded_rectangle(
                [left, top, left + chip_w, top + chip_h],
                radius=chip_h // 2, fill="#FFFFFF", outline=BORDER_COLOR, width=s,
            )
        for dx, dy, text, font, fill in ops:
            draw.text((x + box_pad + dx, y + box_pad + dy), text, font=font, fill=fill)
        return y + box_h

    def _draw_footer(
        self, draw: ImageDraw.ImageDraw, card: Card, x: int, width: int, y: int, s: int
    ) -> int:
        draw.line([(x, y), (x + width, y)], fill=BORDER_COLOR, width=s)
        y += 16 * s

        title_font = load_font(13 * s, bold=True)
        value_font = load_font(13 * s)
        box_pad = 12 * s
        box_h = _line_height(title_font) + _line_height(value_font) + 8 * s + 2 * box_pad
        draw.rounded_rectangle([x, y, x + width, y + box_h], radius=8 * s, fill=PRIMARY_COLOR)

        self._centered(draw, card.highlight_title, title_font, TEXT_ON_ACCENT, 2 * x + width, y + box_pad)
        row_y = y + box_pad + _line_height(title_font) + 8 * s
        if card.rows:
            column_w = width // len(card.rows)
            for i, row in enumerate(card.rows):
                text = row.value
                # Long entries are shortened to their column
                while len(text) > 1 and draw.textlength(text, font=value_font) > column_w - 8 * s:
                    text = text[:-2] + "…"
                text_w = draw.textlength(text, font=value_font)
                cx = x + i * column_w + (column_w - text_w) / 2
                draw.text((cx, row_y), text, font=value_font, fill=TEXT_ON_ACCENT)
        y += box_h + 12 * s

        if card.footnote:
            y = self._centered(draw, card.footnote, load_font(11 * s), TEXT_SECONDARY, 2 * x + width, y)
        return y

    # ── Pocket card ───────────────────────────────────────────────────────

    def _render_pocket(self, card: Card, s: int, canvas_h: int) -> Tuple[Image.Image, int]:
        width = POCKET_CARD_WIDTH * s
        pad = 24 * s
        inner = width - 2 * pad

        img = Image.new("RGB", (width, canvas_h), POCKET_BG)
        draw = ImageDraw.Draw(img)

        title_font = load_font(20 * s, bold=True)
        label_font = load_font(11 * s)
        value_font = load_font(18 * s, bold=True)

        y = pad
        draw.text((pad, y), card.title, font=title_font, fill=POCKET_HIGHLIGHT)
        y += _line_height(title_font) + 24 * s

        for row in card.rows:
            draw.text((pad, y), row.label.upper(), font=label_font, fill="#A0AEC0")
            y += _line_height(label_font) + 2 * s
            for line in wrap_text(draw, row.value, value_font, inner):
                draw.text((pad, y), line, font=value_font, fill=TEXT_ON_ACCENT)
                y += _line_height(value_font)
            y += 16 * s

        y = max(y + 16 * s, POCKET_MIN_HEIGHT * s - 60 * s)
        draw.line([(pad, y), (width - pad, y)], fill="#4A5568", width=s)
        y += 16 * s
        if card.footnote:
            y = self._centered(draw, card.footnote, label_font, "#A0AEC0", width, y)
        return img, max(y + pad, POCKET_MIN_HEIGHT * s)

    # ── Helpers ───────────────────────────────────────────────────────────

    def _centered(self, draw: ImageDraw.ImageDraw, text: str, font, fill: str, width: int, y: int) -> int:
        """Draw wrapped text centered in [0, width); return the y below it."""
        for line in wrap_text(draw, text, font, int(width * 0.85)):
            line_w = draw.textlength(line, font=font)
            draw.text(((width - line_w) / 2, y), line, font=font, fill=fill)
            y += _line_height(font)
        return y
