#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Stan widoku list (szukanie, filtr kategorii, strona)

Jawny, serializowalny obiekt należący do okna - zamiast luźnych
zmiennych rozsianych po GUI. Każda zmiana szukania lub kategorii
wraca na stronę 1.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict

from catalogue.listing import ALL_CATEGORIES, ALL_CATEGORY_IDS


@dataclass
class CatalogueViewState:
    """Stan katalogu publicznego"""
    search: str = ""
    category: str = ALL_CATEGORIES
    page: int = 1

    def set_search(self, search: str) -> bool:
        """Returns: True jeśli stan się zmienił"""
        if search == self.search:
            return False
        self.search = search
        self.page = 1
        return True

    def set_category(self, category: str) -> bool:
        category = category or ALL_CATEGORIES
        if category == self.category:
            return False
        self.category = category
        self.page = 1
        return True

    def go_to(self, page: int):
        self.page = max(1, int(page))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CatalogueViewState':
        return cls(
            search=data.get("search", ""),
            category=data.get("category", ALL_CATEGORIES),
            page=int(data.get("page", 1)),
        )


@dataclass
class AdminViewState:
    """Stan panelu admina"""
    search: str = ""
    category_id: str = ALL_CATEGORY_IDS
    active_tab: str = "products"   # "products" | "categories"

    def set_search(self, search: str) -> bool:
        changed = search != self.search
        self.search = search
        return changed

    def set_category(self, category_id: str) -> bool:
        category_id = category_id or ALL_CATEGORY_IDS
        changed = category_id != self.category_id
        self.category_id = category_id
        return changed

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
