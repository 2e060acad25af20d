#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
CategoryRepository - Warstwa dostępu do tabeli categories

Kategorie zawsze sortowane po display_order (kolejność w katalogu,
w indeksie PDF i w filtrach).
"""

from typing import Any, Dict, List

from config.settings import CATEGORIES_TABLE
from core.base_repository import BaseRepository


class CategoryRepository(BaseRepository):
    """
    Repository dla tabeli categories.

    Example:
        repo = CategoryRepository(get_supabase_client())
        for category in repo.list_ordered():
            print(category['display_order'], category['name'])
    """

    TABLE_NAME = CATEGORIES_TABLE
    ENTITY_NAME = "Category"
    DEFAULT_ORDER = ("display_order", False)
    UPDATED_AT_COLUMN = None

    def list_ordered(self) -> List[Dict[str, Any]]:
        """Wszystkie kategorie wg display_order"""
        return self.list()
