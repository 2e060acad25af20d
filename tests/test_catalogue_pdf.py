"""
Testy katalogu PDF: uklad stron (bez rysowania) i render reportlab.
"""

import math
from pathlib import Path
from datetime import date

import pytest
import requests
from PIL import Image

from documents.catalogue import (
    CatalogueRenderer,
    catalogue_filename,
    create_catalogue_service,
)
from documents.catalogue.images import ImageLoader
from documents.catalogue import constants as C
from documents.catalogue.layout import (
    build_pages,
    format_long_date,
    format_price,
    index_pages,
    product_card,
    product_code_for,
    text_width,
    truncate,
    wrap_text,
)
from documents.catalogue.primitives import ImageBox, RoundedRect, Text
from catalogue.grouping import CategoryGroup

from conftest import make_image_bytes, make_product

MUGS = {"id": "c1", "name": "Mugs", "color": "#EF4444", "display_order": 1}
PLATES = {"id": "c2", "name": "Plates", "color": "#3B82F6", "display_order": 2}
BOWLS = {"id": "c3", "name": "Bowls", "color": "#22C55E", "display_order": 3}
CATEGORIES = [MUGS, PLATES, BOWLS]
TODAY = date(2026, 10, 18)


def card_images(page):
    """Obrazy produktow (logo nie ma placeholdera)"""
    return [e for e in page.of_type(ImageBox) if e.placeholder is not None]


@pytest.fixture
def products():
    items = [make_product(MUGS, i) for i in range(13)]
    items += [make_product(PLATES, 100), make_product(PLATES, 101)]
    items.append(make_product(PLATES, 102, name="SECRET PLATE", is_hidden=True))
    return items


@pytest.fixture
def pages(products):
    return CatalogueRenderer(logo_source=None).layout(CATEGORIES, products, TODAY)


# =========================================================
# UKLAD
# =========================================================

def test_page_sequence(pages):
    assert [p.kind for p in pages] == [
        "cover", "index", "products", "products", "products", "products", "back_cover"
    ]


def test_category_pages_hold_six_cards_and_underfilled_last(pages):
    mug_pages = [p for p in pages if p.title.startswith("Mugs")]

    assert len(mug_pages) == math.ceil(13 / 6)
    assert [len(card_images(p)) for p in mug_pages] == [6, 6, 1]
    assert [p.title for p in mug_pages] == ["Mugs", "Mugs (CONT.)", "Mugs (CONT.)"]


def test_page_numbers_count_pages_after_cover(pages):
    product_pages = [p for p in pages if p.kind == "products"]
    for number, page in enumerate(product_pages, start=2):
        assert f"Page {number}" in page.texts()


def test_long_index_shifts_page_numbers():
    categories = [{"id": str(i), "name": f"Category {i}", "color": "#EF4444"} for i in range(20)]
    products = [make_product(category, i) for i, category in enumerate(categories)]

    specs = build_pages(categories, products, TODAY)

    assert [p.kind for p in specs[:4]] == ["cover", "index", "index", "products"]
    assert "Page 3" in specs[3].texts()
    assert "Page 22" in specs[-2].texts()


def test_index_lists_only_categories_with_visible_products(pages):
    texts = pages[1].texts()

    assert "1. Mugs" in texts and "13 items" in texts
    assert "2. Plates" in texts and "2 items" in texts
    assert not any("Bowls" in t for t in texts)


def test_hidden_products_never_rendered(pages):
    assert not any("SECRET PLATE" in t for page in pages for t in page.texts())


def test_long_index_continues_on_next_page():
    groups = [
        CategoryGroup({"id": str(i), "name": f"Category {i}"}, [make_product(MUGS, i)])
        for i in range(20)
    ]

    specs = index_pages(groups)

    assert len(specs) == 2
    assert specs[1].title == "CATALOGUE INDEX (CONT.)"
    assert "14. Category 13" in specs[1].texts()


def test_back_cover_shows_generation_date(pages):
    assert "Catalogue generated on 18 October 2026" in pages[-1].texts()


def test_card_texts(pages):
    first_card_product_texts = pages[2].texts()
    assert "Rs 100.00" in first_card_product_texts
    assert "24 PCS" in first_card_product_texts
    assert "Wholesale Price" in first_card_product_texts


def test_long_name_is_cut_to_two_lines():
    name = "ASHOKA PREMIUM CERAMIC COFFEE MUG WITH GOLD RIM AND MATCHING SAUCER SET FOR ALL HOTEL AND RESTAURANT"
    product = make_product(MUGS, 1, name=name)
    details_x = C.MARGIN + C.IMAGE_PADDING + C.IMAGE_SIZE + C.DETAILS_OFFSET

    elements = product_card(product, 45.0)

    lines = wrap_text(name, C.FONT_BOLD, 11, C.NAME_WRAP_WIDTH)
    name_texts = [e.text for e in elements if isinstance(e, Text) and e.x == details_x
                  and e.font == C.FONT_BOLD and e.size in (11, 10)]
    assert len(name) == 100
    assert len(lines) > 2
    assert name_texts == lines[:2]


def test_word_longer_than_line_is_split():
    word = "X" * 80

    lines = wrap_text(word, C.FONT_BOLD, 11, C.NAME_WRAP_WIDTH)

    assert len(lines) > 1
    assert "".join(lines) == word
    assert all(text_width(line, C.FONT_BOLD, 11) <= C.NAME_WRAP_WIDTH for line in lines)


def test_cards_stacked_below_header(pages):
    cards = [e for e in pages[2].of_type(RoundedRect) if e.width == C.CARD_WIDTH]

    assert C.CARD_HEIGHT == math.floor(227 / 6) - 2 == 35
    assert [card.y for card in cards] == [
        C.HEADER_HEIGHT + C.MARGIN + k * (C.CARD_HEIGHT + C.CARD_GAP) for k in range(6)
    ]
    assert cards[-1].y + C.CARD_HEIGHT <= C.PAGE_HEIGHT - C.FOOTER_HEIGHT


def test_product_code_from_id_differs_from_entered_code():
    product = {"id": "800a1ace-1111-2222-3333-444455556666", "product_code": "ashoka-01"}

    assert product_code_for(product, "id") == "800A1ACE"
    assert product_code_for(product, "product_code") == "ASHOKA-01"
    assert product_code_for({"id": "abc", "product_code": ""}, "product_code") == "ABC"


def test_formatting_helpers():
    assert truncate("1234567890123456789012345", 20) == "12345678901234567890..."
    assert truncate("24 PCS", 20) == "24 PCS"
    assert format_price("620") == "Rs 620.00"
    assert format_long_date(date(2026, 1, 5)) == "5 January 2026"
    assert catalogue_filename(TODAY) == "RT-Marketing-Catalogue-2026-10-18.pdf"


# =========================================================
# RENDER
# =========================================================

class BrokenSession:
    def get(self, url, timeout=None):
        raise requests.ConnectionError("offline")


def test_render_with_failing_images_uses_placeholders(tmp_path):
    good = tmp_path / "good.jpg"
    good.write_bytes(make_image_bytes())
    corrupt = tmp_path / "corrupt.jpg"
    corrupt.write_bytes(b"not an image")

    products = [
        make_product(MUGS, 1, image_url="https://example.com/missing.jpg"),
        make_product(MUGS, 2, image_url=str(corrupt)),
        make_product(MUGS, 3, image_url=str(good)),
        make_product(MUGS, 4, image_url=str(tmp_path / "nope.jpg")),
        make_product(MUGS, 5, image_url=str(good)),
    ]
    loader = ImageLoader(session=BrokenSession())
    renderer = CatalogueRenderer(logo_source=None, image_loader=loader)

    content = renderer.render(CATEGORIES, products, TODAY)

    assert content.startswith(b"%PDF")
    assert renderer.last_page_count == 4
    assert renderer.last_placeholder_count == 3
    assert len(loader.failures) == 3


def test_oversized_image_gets_placeholder(tmp_path, monkeypatch):
    huge = tmp_path / "huge.png"
    huge.write_bytes(make_image_bytes(size=(300, 300), fmt="PNG"))
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 1000)

    products = [
        make_product(MUGS, 1, image_url=str(huge)),
        make_product(MUGS, 2),
    ]
    loader = ImageLoader(session=BrokenSession())
    renderer = CatalogueRenderer(logo_source=None, image_loader=loader)

    content = renderer.render(CATEGORIES, products, TODAY)

    assert content.startswith(b"%PDF")
    assert renderer.last_placeholder_count == 2
    assert loader.failures == [str(huge)]


def test_render_empty_catalogue():
    renderer = CatalogueRenderer(logo_source=None)

    content = renderer.render(CATEGORIES, [], TODAY)

    assert content.startswith(b"%PDF")
    assert renderer.last_page_count == 3


# =========================================================
# SERWIS
# =========================================================

def seed(client, categories, count=7):
    for i in range(count):
        client.tables["products"].append({
            "id": f"p{i}", "name": f"Mug {i}", "product_code": f"M{i}",
            "category_id": categories[0]["id"], "price": 50 + i, "qty_per_box": "48 PCS",
            "image_url": None, "image_size": 0, "is_hidden": i == 0,
            "created_at": f"2026-10-{10 + i:02d}T00:00:00+00:00",
        })


def test_service_generates_from_visible_products(client, categories, event_bus):
    seed(client, categories)
    generated = []
    event_bus.subscribe_all(generated.append)

    document = create_catalogue_service(client).generate(TODAY)

    assert document.filename == "RT-Marketing-Catalogue-2026-10-18.pdf"
    assert document.content.startswith(b"%PDF")
    assert document.product_count == 6
    assert document.page_count == 4
    assert document.placeholder_count == 6
    assert generated[-1].data["pages"] == 4


def test_export_writes_file_into_directory(client, categories, tmp_path):
    seed(client, categories)

    success, path = create_catalogue_service(client).export_to_file(tmp_path, TODAY)

    assert success
    assert path.endswith("RT-Marketing-Catalogue-2026-10-18.pdf")
    assert (tmp_path / "RT-Marketing-Catalogue-2026-10-18.pdf").read_bytes().startswith(b"%PDF")


def test_export_failure_writes_nothing(client, categories, tmp_path):
    client.failures.add(("products", "select"))
    target = tmp_path / "catalogue.pdf"

    success, message = create_catalogue_service(client).export_to_file(target, TODAY)

    assert not success
    assert message.startswith("Failed to create catalogue")
    assert not target.exists()


def test_failed_write_leaves_no_file(client, categories, tmp_path, monkeypatch):
    seed(client, categories)
    target = tmp_path / "catalogue.pdf"

    def disk_full(self, data):
        with open(self, "wb") as f:
            f.write(data[:100])
        raise OSError("No space left on device")

    monkeypatch.setattr(Path, "write_bytes", disk_full)

    success, message = create_catalogue_service(client).export_to_file(target, TODAY)

    assert not success
    assert message == "Cannot write file: No space left on device"
    assert list(tmp_path.iterdir()) == []
