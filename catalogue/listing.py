#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Filtrowanie i paginacja list produktów (w pamięci)

Lista pobrana z bazy jest filtrowana i cięta lokalnie - bez paginacji
po stronie serwera.

Katalog publiczny:  szukanie po nazwie, kategoria po nazwie lub 'ALL'
Panel admina:       szukanie po nazwie / kodzie / nazwie kategorii,
                    kategoria po id lub 'all'
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple

from config.settings import PRODUCTS_PAGE_SIZE
from catalogue.grouping import product_category_name

ALL_CATEGORIES = "ALL"
ALL_CATEGORY_IDS = "all"


# =========================================================
# FILTRY
# =========================================================

def filter_public(
    products: Sequence[Dict[str, Any]],
    search: str = "",
    category: str = ALL_CATEGORIES
) -> List[Dict[str, Any]]:
    """Filtr katalogu publicznego (nazwa produktu + nazwa kategorii)"""
    needle = (search or "").strip().lower()
    result = []
    for product in products:
        if needle and needle not in (product.get("name") or "").lower():
            continue
        if category != ALL_CATEGORIES and product_category_name(product) != category:
            continue
        result.append(product)
    return result


def filter_admin(
    products: Sequence[Dict[str, Any]],
    search: str = "",
    category_id: str = ALL_CATEGORY_IDS
) -> List[Dict[str, Any]]:
    """Filtr panelu admina (nazwa, kod produktu, nazwa kategorii + id kategorii)"""
    needle = (search or "").strip().lower()
    result = []
    for product in products:
        if needle:
            haystack = (
                (product.get("name") or "").lower(),
                (product.get("product_code") or "").lower(),
                (product_category_name(product) or "").lower(),
            )
            if not any(needle in text for text in haystack):
                continue
        if category_id != ALL_CATEGORY_IDS and product.get("category_id") != category_id:
            continue
        result.append(product)
    return result


def visibility_counts(products: Sequence[Dict[str, Any]]) -> Tuple[int, int]:
    """(widoczne, ukryte)"""
    hidden = sum(1 for p in products if p.get("is_hidden"))
    return len(products) - hidden, hidden


def apply_visibility(
    products: Sequence[Dict[str, Any]],
    product_id: str,
    hidden: bool
) -> List[Dict[str, Any]]:
    """
    Nowa lista z ustawionym is_hidden dla jednego produktu
    (optymistyczna aktualizacja po udanym zapisie).
    """
    return [
        {**p, "is_hidden": hidden} if p.get("id") == product_id else p
        for p in products
    ]


# =========================================================
# PAGINACJA
# =========================================================

@dataclass
class Page:
    """Jedna strona listy"""
    number: int
    total_pages: int
    total: int
    start: int
    items: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def end(self) -> int:
        return self.start + len(self.items)

    @property
    def has_previous(self) -> bool:
        return self.number > 1

    @property
    def has_next(self) -> bool:
        return self.number < self.total_pages

    @property
    def info_text(self) -> str:
        if not self.total:
            return "No products"
        return f"Showing {self.start + 1}-{self.end} of {self.total}"


def page_count(total: int, page_size: int = PRODUCTS_PAGE_SIZE) -> int:
    return math.ceil(total / page_size) if total > 0 else 0


def paginate(
    items: Sequence[Dict[str, Any]],
    page: int = 1,
    page_size: int = PRODUCTS_PAGE_SIZE
) -> Page:
    """
    Wytnij stronę (numeracja od 1; numer spoza zakresu jest przycinany).

    >>> p = paginate(list(range(120)), page=2)
    >>> p.start, p.end, p.total_pages
    (50, 100, 3)
    """
    total = len(items)
    total_pages = page_count(total, page_size)
    number = min(max(1, page), max(1, total_pages))
    start = (number - 1) * page_size
    return Page(
        number=number,
        total_pages=total_pages,
        total=total,
        start=start,
        items=list(items[start:start + page_size]),
    )
