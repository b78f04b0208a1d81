"""Tests for the text digest, card descriptions and image export.

These tests verify that:
- The digest is deterministic, ordered and skips empty primary slots
- Card descriptions carry the right sections, rows and fallbacks
- Image export writes <name>.png, or reports the right notice on failure
- A failed export never leaves a file behind
- A failing clipboard is not fatal
"""

from datetime import date

import pytest
from PIL import Image

from resource_map.config import EXPORT_FAILED_NOTICE, EXPORT_UNAVAILABLE_NOTICE
from resource_map.core.cards import build_full_card, build_pocket_card, format_card_date
from resource_map.core.exceptions import RasterizationError
from resource_map.core.exporter import CardRasterizer, Exporter, build_text_digest
from resource_map.core.models import UserData


class FakeRasterizer(CardRasterizer):
    """Returns a tiny image and records what it was asked to draw."""

    def __init__(self):
        self.calls = []

    def rasterize(self, card, scale):
        self.calls.append((card, scale))
        return Image.new("RGB", (4 * scale, 3 * scale), "white")


class BrokenRasterizer(CardRasterizer):
    def rasterize(self, card, scale):
        raise RasterizationError("no canvas", card.kind)


@pytest.fixture()
def ana_only():
    return (
        UserData.empty()
        .with_field("people", 0, "name", "Ana")
        .with_field("people", 0, "feeling", "calma")
    )


# ── Text digest ──────────────────────────────────────────────────────────────


def test_digest_with_one_person(ana_only):
    assert build_text_digest(ana_only) == (
        "MAPA DE RECURSOS DE MÍ\n\n"
        "PERSONAS:\n- Ana (calma)\n\n"
        "LUGARES:\n\n\n"
        "CUALIDADES:\n\n\n"
        "MEMORIAS:\n"
    )


def test_digest_of_empty_record_keeps_all_headers():
    text = build_text_digest(UserData.empty())
    for header in ("PERSONAS:", "LUGARES:", "CUALIDADES:", "MEMORIAS:"):
        assert header in text
    assert "- " not in text


def test_digest_uppercases_name_and_lists_filled_slots(filled_data):
    text = build_text_digest(filled_data)
    assert text.startswith("MAPA DE RECURSOS DE ANA\n\n")
    assert "- Mamá (calma)\n- Luis ()" in text
    assert "- La playa" in text
    assert "- Persistencia\n- Humor" in text
    assert "- Terminé la carrera" in text


def test_digest_skips_slots_with_empty_primary():
    data = UserData.empty().with_field("places", 1, "name", "El bosque").with_field("places", 0, "details", "solo detalle")
    text = build_text_digest(data)
    assert "LUGARES:\n- El bosque\n\n" in text
    assert "solo detalle" not in text


def test_digest_is_deterministic(filled_data):
    assert build_text_digest(filled_data) == build_text_digest(filled_data)


# ── Card descriptions ────────────────────────────────────────────────────────


def test_full_card_sections_and_footer(filled_data):
    card = build_full_card(filled_data, today=date(2024, 3, 7))
    assert card.kind == "full"
    assert card.title == "MI MAPA DE RECURSOS"
    assert card.subtitle == "Ana"
    assert [s.key for s in card.sections] == ["people", "places", "qualities", "memories"]
    assert [item.text for item in card.sections[0].items] == ["Mamá", "Luis"]
    assert [row.value for row in card.rows] == ["Mamá", "La playa", "Persistencia"]
    assert card.footnote == "Generado el 7/3/2024"


def test_full_card_omits_empty_sections_and_uses_fallbacks(ana_only):
    card = build_full_card(ana_only, today=date(2024, 1, 1))
    assert [s.key for s in card.sections] == ["people"]
    assert [row.value for row in card.rows] == ["Ana", "Observa", "Confía"]


def test_pocket_card_rows_and_fallbacks(filled_data):
    card = build_pocket_card(filled_data)
    assert card.title == "KIT DE CALMA"
    assert [(r.label, r.value) for r in card.rows] == [
        ("Llama o busca a", "Mamá"),
        ("Ve (mentalmente) a", "La playa"),
        ("Recuerda tu", "Persistencia"),
    ]
    empty = build_pocket_card(UserData.empty())
    assert [r.value for r in empty.rows] == ["Alguien de confianza", "Tu lugar seguro", "Fortaleza"]


def test_card_date_format_has_no_padding():
    assert format_card_date(date(2025, 12, 31)) == "31/12/2025"
    assert format_card_date(date(2025, 1, 5)) == "5/1/2025"


# ── Image export ─────────────────────────────────────────────────────────────


def test_export_full_card_writes_png(tmp_path, filled_data):
    rasterizer = FakeRasterizer()
    exporter = Exporter(rasterizer, tmp_path / "downloads")
    result = exporter.export_full_card(filled_data)

    assert result.success
    assert result.path == tmp_path / "downloads" / "mi-mapa-recursos.png"
    assert result.path.read_bytes().startswith(b"\x89PNG")
    assert str(result.path) in result.message
    assert rasterizer.calls[0][1] == 2


def test_export_pocket_card_file_name(tmp_path, filled_data):
    exporter = Exporter(FakeRasterizer(), tmp_path)
    result = exporter.export_pocket_card(filled_data)
    assert result.path.name == "kit-emergencia.png"


def test_export_without_rasterizer_reports_unavailable(tmp_path, filled_data):
    exporter = Exporter(None, tmp_path)
    result = exporter.export_full_card(filled_data)
    assert not result.success
    assert result.message == EXPORT_UNAVAILABLE_NOTICE
    assert list(tmp_path.iterdir()) == []


def test_failed_rasterization_leaves_no_file(tmp_path, filled_data):
    exporter = Exporter(BrokenRasterizer(), tmp_path)
    result = exporter.export_full_card(filled_data)
    assert not result.success
    assert result.path is None
    assert result.message == EXPORT_FAILED_NOTICE
    assert list(tmp_path.iterdir()) == []


def test_export_uses_card_snapshot(tmp_path, filled_data):
    rasterizer = FakeRasterizer()
    exporter = Exporter(rasterizer, tmp_path)
    card = build_pocket_card(filled_data)
    filled_data.with_field("people", 0, "name", "Otra persona")
    exporter.export_image(card, "kit-emergencia")
    assert rasterizer.calls[0][0].rows[0].value == "Mamá"


# ── Clipboard ────────────────────────────────────────────────────────────────


def test_copy_text_sends_digest(tmp_path, filled_data):
    copied = []
    text = Exporter(None, tmp_path).copy_text(filled_data, copied.append)
    assert copied == [build_text_digest(filled_data)]
    assert text == copied[0]


def test_copy_text_survives_clipboard_failure(tmp_path, filled_data):
    def broken(_text):
        raise RuntimeError("no clipboard")

    text = Exporter(None, tmp_path).copy_text(filled_data, broken)
    assert text == build_text_digest(filled_data)
