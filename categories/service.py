#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
CategoryService - Logika biznesowa kategorii

Zasady:
- Nazwa wymagana (po obcięciu spacji)
- Kolor z palety albo poprzednia wartość kategorii
- display_order: zachowany przy edycji, nowa kategoria → liczba kategorii + 1
- Usunięcie zablokowane gdy jakikolwiek produkt (także ukryty)
  wskazuje na kategorię - sprawdzane PRZED wywołaniem delete
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from supabase import Client

from categories.colors import resolve_color
from categories.repository import CategoryRepository
from core.base_service import BaseService
from core.events import EventBus, EventType
from core.exceptions import DatabaseError, ForeignKeyError
from products.repository import ProductRepository

logger = logging.getLogger(__name__)


class CategoryService(BaseService):
    """
    Serwis kategorii.

    Example:
        service = CategoryService(CategoryRepository(client), ProductRepository(client))
        success, result = service.save_category({'name': 'Mugs', 'color': '#EF4444'})
    """

    ENTITY_NAME = "Category"

    def __init__(
        self,
        repository: CategoryRepository,
        product_repository: ProductRepository,
        event_bus: EventBus = None
    ):
        super().__init__(repository.client, event_bus)
        self.repository = repository
        self.product_repository = product_repository

    def list_categories(self) -> List[Dict[str, Any]]:
        """Kategorie wg display_order"""
        return self.repository.list_ordered()

    # =========================================================
    # ZAPIS
    # =========================================================

    def validate(self, data: Dict[str, Any], is_update: bool = False) -> Dict[str, Any]:
        name = str(data.get("name") or "").strip()
        if not name:
            self._validation_failed({"name": "Category name is required"})
        return {"name": name, "color": data.get("color")}

    def save_category(
        self,
        data: Dict[str, Any],
        existing: Optional[Dict[str, Any]] = None
    ) -> Tuple[bool, str]:
        """
        Utwórz lub zaktualizuj kategorię.

        Args:
            data: {'name': ..., 'color': ...}
            existing: Edytowana kategoria (None = nowa)

        Returns:
            Tuple (success, category_id lub komunikat błędu)

        Raises:
            FormValidationError: Pusta nazwa
        """
        cleaned = self.validate(data, is_update=existing is not None)

        try:
            if existing:
                display_order = existing.get("display_order")
            else:
                display_order = None
            if not display_order:
                display_order = len(self.repository.list_ordered()) + 1

            record = {
                "name": cleaned["name"],
                "color": resolve_color(cleaned["color"], (existing or {}).get("color")),
                "display_order": display_order,
            }

            if existing:
                saved = self.repository.update(existing["id"], record)
                self.emit_event(EventType.CATEGORY_UPDATED, {"id": existing["id"], **record})
            else:
                saved = self.repository.create(record)
                self.emit_event(EventType.CATEGORY_CREATED, {"id": saved.get("id"), **record})

        except DatabaseError as e:
            return False, e.message or "Failed to save category"

        return True, saved.get("id", (existing or {}).get("id"))

    # =========================================================
    # USUWANIE
    # =========================================================

    def ensure_deletable(self, category_id: str):
        """
        Raises:
            ForeignKeyError: Kategoria ma przypisane produkty
        """
        count = self.product_repository.count_by_category(category_id)
        if count > 0:
            raise ForeignKeyError("Category", "Product", category_id, count=count)

    def delete_category(self, category_id: str) -> Tuple[bool, str]:
        """
        Usuń kategorię bez produktów.

        Returns:
            Tuple (success, komunikat)
        """
        try:
            self.ensure_deletable(category_id)
        except ForeignKeyError as e:
            logger.info(f"[SERVICE] Category delete blocked: {category_id} ({e.count} products)")
            return False, e.message
        except DatabaseError as e:
            return False, e.message

        try:
            self.repository.delete(category_id)
        except DatabaseError:
            return False, "Failed to delete category"

        self.emit_event(EventType.CATEGORY_DELETED, {"id": category_id})
        return True, "Category deleted successfully!"


def create_category_service(client: Client = None) -> CategoryService:
    """
    Factory method do tworzenia CategoryService.
    """
    if client is None:
        from core.supabase_client import get_supabase_client
        client = get_supabase_client()

    return CategoryService(CategoryRepository(client), ProductRepository(client))
