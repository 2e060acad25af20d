#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Grupowanie produktów wg kategorii

Używane w dwóch miejscach, zawsze liczone osobno:
- katalog na ekranie: grupy z BIEŻĄCEJ strony (50 produktów)
- katalog PDF: grupy z CAŁEGO zbioru widocznych produktów

Zasady:
- kolejność grup = kolejność kategorii (display_order)
- kolejność produktów w grupie = kolejność wejściowa
- produkt trafia do grupy po nazwie kategorii (product['category']['name'])
- puste grupy są pomijane
- każdy produkt występuje co najwyżej raz (powtórzona nazwa kategorii
  nie tworzy drugiej grupy)
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence


@dataclass
class CategoryGroup:
    """Kategoria z uporządkowaną listą jej produktów"""
    category: Dict[str, Any]
    products: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.category.get("name", "")

    @property
    def color(self) -> Optional[str]:
        return self.category.get("color")

    @property
    def count(self) -> int:
        return len(self.products)


def product_category_name(product: Dict[str, Any]) -> Optional[str]:
    """Nazwa kategorii z joinu category:categories(name, color)"""
    category = product.get("category") or {}
    return category.get("name")


def group_by_category(
    categories: Sequence[Dict[str, Any]],
    products: Iterable[Dict[str, Any]]
) -> List[CategoryGroup]:
    """
    Podziel produkty na grupy kategorii.

    Args:
        categories: Kategorie w kolejności wyświetlania
        products: Produkty (już przefiltrowane)

    Returns:
        Niepuste grupy w kolejności kategorii
    """
    by_name: Dict[str, List[Dict[str, Any]]] = {}
    for product in products:
        name = product_category_name(product)
        if name is not None:
            by_name.setdefault(name, []).append(product)

    groups = []
    for category in categories:
        items = by_name.pop(category.get("name"), None)
        if items:
            groups.append(CategoryGroup(category=category, products=items))
    return groups


def chunk(items: Sequence[Any], size: int) -> List[List[Any]]:
    """Podziel listę na kawałki po `size` (ostatni może być krótszy)"""
    if size <= 0:
        raise ValueError("chunk size must be positive")
    return [list(items[i:i + size]) for i in range(0, len(items), size)]


def count_by_category_id(products: Iterable[Dict[str, Any]]) -> Dict[str, int]:
    """Liczba produktów na kategorię (po category_id)"""
    counts: Dict[str, int] = {}
    for product in products:
        key = product.get("category_id")
        counts[key] = counts.get(key, 0) + 1
    return counts
