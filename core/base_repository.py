"""
R&T Catalogue - Base Repository
===============================
Bazowa klasa repozytorium z operacjami CRUD na tabelach Supabase.

Zasady:
- repozytorium NIE zawiera logiki biznesowej (to robi serwis)
- błędy bazy zamieniane na DatabaseError / RecordNotFoundError
- brak cache - każde wywołanie idzie do bazy (lista odświeżana po mutacji)
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
import logging

from supabase import Client

from core.exceptions import DatabaseError, RecordNotFoundError

logger = logging.getLogger(__name__)


class BaseRepository:
    """
    Bazowa klasa repozytorium.

    Usage:
        class CategoryRepository(BaseRepository):
            TABLE_NAME = "categories"
            ENTITY_NAME = "Category"
            DEFAULT_ORDER = ("display_order", False)
    """

    TABLE_NAME: str = None
    ENTITY_NAME: str = None

    # Kolumny dla select (może zawierać joiny PostgREST)
    SELECT_COLUMNS: str = "*"

    # (kolumna, malejąco)
    DEFAULT_ORDER = ("created_at", True)

    ID_COLUMN = "id"
    UPDATED_AT_COLUMN: Optional[str] = "updated_at"

    def __init__(self, client: Client):
        self.client = client

        if not self.TABLE_NAME:
            raise ValueError(f"{self.__class__.__name__} must define TABLE_NAME")
        if not self.ENTITY_NAME:
            self.ENTITY_NAME = self.TABLE_NAME

    def _table(self):
        return self.client.table(self.TABLE_NAME)

    # ============================================================
    # Core CRUD Operations
    # ============================================================

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Utwórz nowy rekord.

        Returns:
            Utworzony rekord z id

        Raises:
            DatabaseError: Błąd zapisu
        """
        try:
            response = self._table().insert(data).execute()
        except Exception as e:
            logger.error(f"[DB] ❌ [{self.ENTITY_NAME}] Create failed: {e}")
            raise DatabaseError(f"Failed to create {self.ENTITY_NAME}: {e}")

        if not response.data:
            raise DatabaseError(f"Failed to create {self.ENTITY_NAME}: empty response")

        record = response.data[0]
        logger.info(f"[DB] ✅ [{self.ENTITY_NAME}] Created: {record.get(self.ID_COLUMN)}")
        return record

    def get_by_id(self, id: str) -> Optional[Dict[str, Any]]:
        """
        Pobierz rekord po ID.

        Returns:
            Rekord lub None jeśli nie znaleziono
        """
        try:
            response = self._table()\
                .select(self.SELECT_COLUMNS)\
                .eq(self.ID_COLUMN, id)\
                .limit(1)\
                .execute()
        except Exception as e:
            logger.error(f"[DB] ❌ [{self.ENTITY_NAME}] Get by ID failed: {e}")
            raise DatabaseError(f"Failed to read {self.ENTITY_NAME}: {e}")

        return response.data[0] if response.data else None

    def get_by_id_or_raise(self, id: str) -> Dict[str, Any]:
        """
        Pobierz rekord po ID lub rzuć wyjątek.

        Raises:
            RecordNotFoundError: Jeśli nie znaleziono
        """
        record = self.get_by_id(id)
        if not record:
            raise RecordNotFoundError(self.ENTITY_NAME, id)
        return record

    def update(self, id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Aktualizuj rekord (last-write-wins).

        Returns:
            Zaktualizowany rekord

        Raises:
            RecordNotFoundError: Jeśli żaden wiersz nie pasuje
            DatabaseError: Błąd zapisu
        """
        data = dict(data)
        data.pop(self.ID_COLUMN, None)
        data.pop("created_at", None)
        if self.UPDATED_AT_COLUMN:
            data[self.UPDATED_AT_COLUMN] = datetime.now(timezone.utc).isoformat()

        try:
            response = self._table()\
                .update(data)\
                .eq(self.ID_COLUMN, id)\
                .execute()
        except Exception as e:
            logger.error(f"[DB] ❌ [{self.ENTITY_NAME}] Update failed: {e}")
            raise DatabaseError(f"Failed to update {self.ENTITY_NAME}: {e}")

        if not response.data:
            raise RecordNotFoundError(self.ENTITY_NAME, id)

        logger.info(f"[DB] ✅ [{self.ENTITY_NAME}] Updated: {id}")
        return response.data[0]

    def delete(self, id: str) -> bool:
        """
        Usuń rekord (fizycznie - brak soft delete).

        Returns:
            True jeśli usunięto
        """
        try:
            self._table()\
                .delete()\
                .eq(self.ID_COLUMN, id)\
                .execute()
        except Exception as e:
            logger.error(f"[DB] ❌ [{self.ENTITY_NAME}] Delete failed: {e}")
            raise DatabaseError(f"Failed to delete {self.ENTITY_NAME}: {e}")

        logger.info(f"[DB] ✅ [{self.ENTITY_NAME}] Deleted: {id}")
        return True

    # ============================================================
    # Query Methods
    # ============================================================

    def list(
        self,
        filters: Dict[str, Any] = None,
        order_by: str = None,
        descending: bool = None
    ) -> List[Dict[str, Any]]:
        """
        Pobierz listę rekordów.

        Args:
            filters: Filtry równości {kolumna: wartość}
            order_by: Kolumna sortowania (domyślnie DEFAULT_ORDER)
            descending: Kierunek sortowania

        Returns:
            Lista rekordów
        """
        default_col, default_desc = self.DEFAULT_ORDER
        order_by = order_by or default_col
        descending = default_desc if descending is None else descending

        try:
            query = self._table().select(self.SELECT_COLUMNS)
            for column, value in (filters or {}).items():
                query = query.eq(column, value)
            response = query.order(order_by, desc=descending).execute()
        except Exception as e:
            logger.error(f"[DB] ❌ [{self.ENTITY_NAME}] List failed: {e}")
            raise DatabaseError(f"Failed to list {self.ENTITY_NAME}: {e}")

        return response.data or []

    def count(self, filters: Dict[str, Any] = None) -> int:
        """Policz rekordy spełniające filtry równości"""
        try:
            query = self._table().select(self.ID_COLUMN, count="exact")
            for column, value in (filters or {}).items():
                query = query.eq(column, value)
            response = query.execute()
        except Exception as e:
            logger.error(f"[DB] ❌ [{self.ENTITY_NAME}] Count failed: {e}")
            raise DatabaseError(f"Failed to count {self.ENTITY_NAME}: {e}")

        if response.count is not None:
            return response.count
        return len(response.data or [])
