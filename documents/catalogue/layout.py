"""
Catalogue PDF - Layout
======================
Czyste funkcje budujace strony katalogu jako listy prymitywow.

Kolejnosc dokumentu:
    okladka → indeks → strony produktow (grupa po grupie) → tylna okladka

Strony produktow:
- 6 kart na strone, grupa dzielona na kawalki po 6
- pierwsza strona grupy: naglowek = nazwa kategorii,
  kolejne: nazwa + " (CONT.)"
- numer strony w stopce = fizyczna strona bez okladki (indeks to 1,
  pierwsza strona produktow to 2 przy jednostronicowym indeksie)

Nic tu nie rysuje ani nie pobiera obrazow - obrazy sa tylko
zadeklarowane (ImageBox), wczytuje je backend.
"""

from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from reportlab.lib.units import mm
from reportlab.pdfbase.pdfmetrics import stringWidth

from catalogue.grouping import CategoryGroup, chunk, group_by_category
from config.settings import PDF_PRODUCT_CODE_SOURCE

from . import constants as C
from .primitives import (
    Circle, ImageBox, Line, PageSpec, Rect, RoundedRect, Text, Triangle
)

MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


# ============================================================
# Helpers
# ============================================================

def text_width(text: str, font: str, size: float) -> float:
    """Szerokosc tekstu w mm"""
    return stringWidth(text, font, size) / mm


def wrap_text(text: str, font: str, size: float, max_width: float) -> List[str]:
    """
    Zawijanie tekstu do szerokosci (mm) - po slowach, slowo dluzsze
    niz linia jest ciete po znakach.
    """
    lines: List[str] = []
    current = ""

    for word in (text or "").split():
        candidate = f"{current} {word}" if current else word
        if text_width(candidate, font, size) <= max_width:
            current = candidate
            continue

        if current:
            lines.append(current)
            current = ""

        while text_width(word, font, size) > max_width and len(word) > 1:
            cut = len(word)
            while cut > 1 and text_width(word[:cut], font, size) > max_width:
                cut -= 1
            lines.append(word[:cut])
            word = word[cut:]
        current = word

    if current:
        lines.append(current)
    return lines


def truncate(text: str, max_chars: int) -> str:
    text = text or ""
    return text[:max_chars] + "..." if len(text) > max_chars else text


def format_price(price: Any) -> str:
    return f"{C.CURRENCY_PREFIX} {float(price or 0):.2f}"


def format_long_date(day: date) -> str:
    """18 October 2026"""
    return f"{day.day} {MONTHS[day.month - 1]} {day.year}"


def product_code_for(product: Dict[str, Any], source: str = None) -> str:
    """
    Kod pokazywany na karcie PDF.

    source="id" (domyslnie): pierwsze 8 znakow identyfikatora, wielkimi
    literami - NIE jest to pole product_code z panelu admina.
    source="product_code": kod wpisany przez operatora.
    """
    source = source or PDF_PRODUCT_CODE_SOURCE
    if source == "product_code" and product.get("product_code"):
        return str(product["product_code"]).upper()
    return str(product.get("id") or "")[:8].upper()


def _full_page(fill) -> Rect:
    return Rect(0, 0, C.PAGE_WIDTH, C.PAGE_HEIGHT, fill=fill)


def _centered(text, y, font, size, color) -> Text:
    return Text(text, C.PAGE_WIDTH / 2, y, font, size, color, align="center")


# ============================================================
# Okladka
# ============================================================

def cover_page(logo_source: Optional[str]) -> PageSpec:
    logo_x = (C.PAGE_WIDTH - C.COVER_LOGO_SIZE) / 2
    elements = [
        _full_page(C.BRAND_RED),
        ImageBox(logo_source, logo_x, 45, C.COVER_LOGO_SIZE, C.COVER_LOGO_SIZE),
        _centered(C.BRAND_NAME, 110, C.FONT_BOLD, 42, C.WHITE),
        Line(50, 120, C.PAGE_WIDTH - 50, 120, C.WHITE, width=0.8),
        _centered(C.COVER_SUBTITLE, 135, C.FONT_REGULAR, 16, C.WHITE),
        _centered(C.COVER_TITLE, 153, C.FONT_BOLD, 22, C.WHITE),
        _centered(C.COVER_EDITION, 167, C.FONT_REGULAR, 14, C.WHITE),
        _centered(" | ".join(C.PHONES), C.PAGE_HEIGHT - 35, C.FONT_REGULAR, 11, C.WHITE),
        _centered(C.EMAIL, C.PAGE_HEIGHT - 25, C.FONT_REGULAR, 11, C.WHITE),
        _centered(C.ADDRESS, C.PAGE_HEIGHT - 18, C.FONT_REGULAR, 9, C.WHITE),
    ]
    return PageSpec(kind="cover", elements=elements, title="Cover")


# ============================================================
# Indeks
# ============================================================

def _index_page(title: str) -> PageSpec:
    return PageSpec(kind="index", title=title, elements=[
        _full_page(C.PAGE_BACKGROUND),
        Text(title, C.MARGIN, C.INDEX_TITLE_Y, C.FONT_BOLD, 26, C.ACCENT_RED),
        Line(C.MARGIN, C.INDEX_RULE_Y, C.PAGE_WIDTH - C.MARGIN, C.INDEX_RULE_Y,
             C.ACCENT_RED, width=1.2),
    ])


def index_pages(groups: Sequence[CategoryGroup]) -> List[PageSpec]:
    """
    Spis kategorii: "<n>. <nazwa>" + "<liczba> items".

    Dostaje tylko niepuste grupy, wiec kategorie bez widocznych
    produktow nie trafiaja do indeksu. Gdy pozycje nie mieszcza sie
    na jednej stronie, indeks przechodzi na kolejna.
    """
    pages = [_index_page(C.INDEX_TITLE)]
    y = C.INDEX_FIRST_Y

    for number, group in enumerate(groups, start=1):
        if y > C.INDEX_BOTTOM_LIMIT:
            pages.append(_index_page(C.INDEX_TITLE + C.CONTINUATION_SUFFIX))
            y = C.INDEX_FIRST_Y

        pages[-1].elements.extend([
            Text(f"{number}. {group.name}", C.MARGIN + 5, y, C.FONT_BOLD, 13, C.TEXT_STRONG),
            Text(f"{group.count} items", C.MARGIN + 5, y + 5.5, C.FONT_REGULAR, 10,
                 C.TEXT_INDEX_COUNT),
        ])
        y += C.INDEX_STEP

    return pages


# ============================================================
# Strony produktow
# ============================================================

def product_card(product: Dict[str, Any], y: float, code_source: str = None) -> List[object]:
    """
    Karta produktu: obraz | nazwa, kod, ilosc | cena.
    """
    x = C.MARGIN
    img_x = x + C.IMAGE_PADDING
    img_y = y + C.IMAGE_PADDING
    details_x = img_x + C.IMAGE_SIZE + C.DETAILS_OFFSET
    details_y = y + C.DETAILS_OFFSET

    elements: List[object] = [
        RoundedRect(x, y, C.CARD_WIDTH, C.CARD_HEIGHT, C.CARD_RADIUS,
                    fill=C.WHITE, stroke=C.CARD_BORDER, line_width=0.4),
        ImageBox(product.get("image_url") or None, img_x, img_y, C.IMAGE_SIZE, C.IMAGE_SIZE,
                 placeholder=C.PLACEHOLDER_FILL, border=C.IMAGE_BORDER),
    ]

    # Nazwa - maks. 2 linie
    name_lines = wrap_text(product.get("name") or "", C.FONT_BOLD, 11, C.NAME_WRAP_WIDTH)
    if name_lines:
        elements.append(Text(name_lines[0], details_x, details_y, C.FONT_BOLD, 11, C.TEXT_DARK))
    if len(name_lines) > 1:
        elements.append(Text(name_lines[1], details_x, details_y + 5, C.FONT_BOLD, 10, C.TEXT_DARK))

    elements.extend([
        Text("Product Code:", details_x, details_y + 12, C.FONT_REGULAR, 7.5, C.TEXT_LABEL),
        Text(product_code_for(product, code_source), details_x + 22, details_y + 12,
             C.FONT_BOLD, 9, C.TEXT_STRONG),
        Text("Quantity:", details_x, details_y + 19, C.FONT_REGULAR, 7.5, C.TEXT_LABEL),
        Text(truncate(product.get("qty_per_box") or "", C.QTY_MAX_CHARS),
             details_x + 18, details_y + 19, C.FONT_BOLD, 9, C.TEXT_STRONG),
    ])

    # Panel ceny
    box_x = x + C.CARD_WIDTH - C.PRICE_BOX_WIDTH - C.PRICE_BOX_RIGHT_PADDING
    box_y = y + C.IMAGE_PADDING
    box_center = box_x + C.PRICE_BOX_WIDTH / 2
    elements.extend([
        RoundedRect(box_x, box_y, C.PRICE_BOX_WIDTH, C.CARD_HEIGHT - 2 * C.IMAGE_PADDING, 1,
                    fill=C.PRICE_BOX_FILL, stroke=C.PRICE_BOX_BORDER, line_width=0.3),
        Text("Wholesale Price", box_center, box_y + 5, C.FONT_REGULAR, 6.5,
             C.TEXT_PRICE_LABEL, align="center"),
        Text(format_price(product.get("price")), box_center, box_y + 16, C.FONT_BOLD, 16,
             C.ACCENT_RED, align="center"),
        Text("per box", box_center, box_y + 22, C.FONT_REGULAR, 6.5,
             C.TEXT_PER_BOX, align="center"),
    ])
    return elements


def product_page(
    group: CategoryGroup,
    products: Sequence[Dict[str, Any]],
    continuation: bool,
    page_number: int,
    logo_source: Optional[str] = None,
    code_source: str = None
) -> PageSpec:
    """Jedna strona produktow grupy (maks. 6 kart)"""
    header = group.name + (C.CONTINUATION_SUFFIX if continuation else "")
    elements: List[object] = [
        _full_page(C.PAGE_BACKGROUND),
        Rect(0, 0, C.PAGE_WIDTH, C.HEADER_HEIGHT, fill=C.BRAND_RED),
        ImageBox(logo_source, C.MARGIN, (C.HEADER_HEIGHT - C.HEADER_LOGO_SIZE) / 2,
                 C.HEADER_LOGO_SIZE, C.HEADER_LOGO_SIZE),
        _centered(header, C.HEADER_HEIGHT / 2 + 3, C.FONT_BOLD, 20, C.WHITE),
    ]

    y = C.HEADER_HEIGHT + C.MARGIN
    for product in products:
        elements.extend(product_card(product, y, code_source))
        y += C.CARD_HEIGHT + C.CARD_GAP

    footer_y = C.PAGE_HEIGHT - C.FOOTER_HEIGHT + 3
    elements.extend([
        Text(C.FOOTER_CONTACT, C.MARGIN, footer_y, C.FONT_REGULAR, 7, C.TEXT_FOOTER),
        Text(C.EMAIL, C.MARGIN, footer_y + 4, C.FONT_REGULAR, 7, C.TEXT_FOOTER),
        Text(f"Page {page_number}", C.PAGE_WIDTH - C.MARGIN, footer_y, C.FONT_BOLD, 7,
             C.TEXT_FOOTER, align="right"),
    ])
    return PageSpec(kind="products", elements=elements, title=header)


def group_pages(
    group: CategoryGroup,
    first_page_number: int,
    logo_source: Optional[str] = None,
    code_source: str = None
) -> List[PageSpec]:
    """Wszystkie strony grupy: ceil(N / 6), ostatnia moze byc niepelna"""
    return [
        product_page(group, page_products, index > 0, first_page_number + index,
                     logo_source, code_source)
        for index, page_products in enumerate(chunk(group.products, C.PRODUCTS_PER_PAGE))
    ]


# ============================================================
# Tylna okladka
# ============================================================

def _phone_glyph(x: float, y: float) -> List[object]:
    return [
        RoundedRect(x - 8, y - 8, 12, 12, 2, fill=C.BRAND_RED),
        Line(x - 4, y - 4, x - 1, y - 1, C.WHITE, width=1.5),
        Line(x - 1, y - 1, x + 1, y + 1, C.WHITE, width=1.5),
        Line(x + 1, y + 1, x + 4, y + 4, C.WHITE, width=1.5),
    ]


def _envelope_glyph(x: float, y: float) -> List[object]:
    return [
        RoundedRect(x - 8, y - 8, 12, 9, 1, fill=C.BRAND_RED),
        Line(x - 7, y - 7, x - 2, y - 3, C.WHITE, width=1),
        Line(x - 2, y - 3, x + 3, y - 7, C.WHITE, width=1),
    ]


def _pin_glyph(x: float, y: float) -> List[object]:
    return [
        Circle(x - 2, y - 3, 4, fill=C.BRAND_RED),
        Triangle(((x - 2, y + 3), (x - 5, y - 1), (x + 1, y - 1)), fill=C.BRAND_RED),
        Circle(x - 2, y - 3, 2, fill=C.WHITE),
    ]


def back_cover(generated_on: date) -> PageSpec:
    box_margin = 25.0
    box_y = 105.0
    box_height = 120.0

    elements: List[object] = [
        _full_page(C.BRAND_RED),
        _centered(C.BACK_TITLE, 45, C.FONT_BOLD, 42, C.WHITE),
        Line(40, 55, C.PAGE_WIDTH - 40, 55, C.WHITE, width=2),
        _centered(C.BRAND_NAME, 75, C.FONT_BOLD, 28, C.WHITE),
        _centered(C.BACK_TAGLINE, 87, C.FONT_REGULAR, 13, C.WHITE),
        RoundedRect(box_margin, box_y, C.PAGE_WIDTH - 2 * box_margin, box_height, 5,
                    fill=C.WHITE),
    ]

    # Lewa kolumna - telefon i email
    left_x = box_margin + 18
    y = box_y + 25
    elements.extend(_phone_glyph(left_x, y))
    elements.append(Text("PHONE", left_x + 10, y - 1, C.FONT_BOLD, 11, C.BRAND_RED))
    for offset, phone in zip((12, 24), C.PHONES):
        elements.append(Text(phone, left_x + 3, y + offset, C.FONT_REGULAR, 13, C.TEXT_BODY))

    y += 48
    elements.extend(_envelope_glyph(left_x, y))
    elements.extend([
        Text("EMAIL", left_x + 10, y - 1, C.FONT_BOLD, 11, C.BRAND_RED),
        Text(C.EMAIL, left_x + 3, y + 12, C.FONT_REGULAR, 11, C.TEXT_BODY),
    ])

    # Prawa kolumna - adres
    right_x = C.PAGE_WIDTH / 2 + 15
    address_y = box_y + 25
    elements.extend(_pin_glyph(right_x, address_y))
    elements.append(Text("ADDRESS", right_x + 10, address_y - 1, C.FONT_BOLD, 11, C.BRAND_RED))
    for index, line in enumerate(C.ADDRESS_LINES):
        elements.append(Text(line, right_x + 3, address_y + 12 + 11 * index,
                             C.FONT_REGULAR, 11, C.TEXT_BODY))

    rule_y = box_y + box_height + 15
    elements.extend([
        Line(box_margin + 15, rule_y, C.PAGE_WIDTH - box_margin - 15, rule_y,
             C.BRAND_RED, width=1.5),
        _centered(f"Catalogue generated on {format_long_date(generated_on)}",
                  C.PAGE_HEIGHT - 24, C.FONT_REGULAR, 11, C.WHITE),
        _centered(C.COPYRIGHT, C.PAGE_HEIGHT - 14, C.FONT_REGULAR, 9, C.WHITE),
    ])
    return PageSpec(kind="back_cover", elements=elements, title="Contact")


# ============================================================
# Caly dokument
# ============================================================

def build_pages(
    categories: Sequence[Dict[str, Any]],
    products: Sequence[Dict[str, Any]],
    generated_on: date,
    logo_source: Optional[str] = None,
    code_source: str = None
) -> List[PageSpec]:
    """
    Wszystkie strony katalogu w kolejnosci wydruku.

    Args:
        categories: Kategorie wg display_order
        products: Widoczne produkty (is_hidden = false) z joinem kategorii
        generated_on: Data na tylnej okladce
        logo_source: Sciezka/URL logo (None = bez logo)
        code_source: "id" | "product_code" (domyslnie z ustawien)
    """
    groups = group_by_category(categories, products)

    index_specs = index_pages(groups)
    pages = [cover_page(logo_source)]
    pages.extend(index_specs)

    page_number = len(index_specs) + 1
    for group in groups:
        group_specs = group_pages(group, page_number, logo_source, code_source)
        pages.extend(group_specs)
        page_number += len(group_specs)

    pages.append(back_cover(generated_on))
    return pages
