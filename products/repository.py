#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ProductRepository - Warstwa dostępu do tabeli products

Odpowiedzialność:
- CRUD operacje na produktach
- Listy: wszystkie (panel admina) i widoczne (katalog publiczny, PDF)
- Zmiana flagi is_hidden
- Suma image_size (zużycie Storage)

Zasady:
- Przechowuje URL obrazu i zdenormalizowany rozmiar (image_size)
- Odczyty dołączają kategorię: category:categories(name, color)
- Nie zarządza plikami (to robi StorageRepository)
- Błędy bazy → DatabaseError (łapane w serwisie)
"""

import logging
from typing import Any, Dict, List

from supabase import Client

from config.settings import PRODUCTS_TABLE
from core.base_repository import BaseRepository
from core.exceptions import DatabaseError

logger = logging.getLogger(__name__)


class ProductRepository(BaseRepository):
    """
    Repository dla tabeli products.

    Example:
        repo = ProductRepository(get_supabase_client())

        products = repo.list_visible()
        for p in products:
            print(p['name'], p['category']['name'])

        repo.set_hidden(product_id, True)
    """

    TABLE_NAME = PRODUCTS_TABLE
    ENTITY_NAME = "Product"
    SELECT_COLUMNS = "*, category:categories(name, color)"
    DEFAULT_ORDER = ("created_at", True)

    def __init__(self, client: Client):
        super().__init__(client)

    # =========================================================
    # LISTY
    # =========================================================

    def list_all(self) -> List[Dict[str, Any]]:
        """Wszystkie produkty (także ukryte), najnowsze pierwsze"""
        return self.list()

    def list_visible(self) -> List[Dict[str, Any]]:
        """Produkty widoczne w katalogu (is_hidden = false), najnowsze pierwsze"""
        return self.list(filters={"is_hidden": False})

    def count_by_category(self, category_id: str) -> int:
        """Liczba produktów (także ukrytych) przypisanych do kategorii"""
        return self.count(filters={"category_id": category_id})

    # =========================================================
    # UPDATE
    # =========================================================

    def set_hidden(self, product_id: str, hidden: bool) -> Dict[str, Any]:
        """
        Ustaw flagę is_hidden (jedno pole, nic więcej się nie zmienia).

        Returns:
            Zaktualizowany rekord
        """
        return self.update(product_id, {"is_hidden": bool(hidden)})

    # =========================================================
    # STORAGE
    # =========================================================

    def get_total_image_size(self) -> int:
        """
        Suma image_size wszystkich produktów (bajty).

        Wartość zdenormalizowana - szacunek, nie rozliczenie.
        """
        try:
            response = self._table().select("image_size").execute()
        except Exception as e:
            logger.error(f"[DB] ❌ Storage usage query failed: {e}")
            raise DatabaseError(f"Failed to read image sizes: {e}")

        return sum(int(row.get("image_size") or 0) for row in (response.data or []))
