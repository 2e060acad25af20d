"""
R&T Catalogue - Base Service
============================
Bazowa klasa serwisu: walidacja, eventy, kontekst użytkownika.
Serwisy produktów i kategorii dziedziczą po tej klasie.
"""

from abc import ABC
from contextlib import contextmanager
from typing import Any, Dict, Optional
import logging

from supabase import Client

from core.events import EventBus, EventType, create_event
from core.exceptions import FormValidationError

logger = logging.getLogger(__name__)


class BaseService(ABC):
    """
    Bazowa klasa serwisu.

    Zapewnia:
    - Walidację (validate → FormValidationError z błędami per pole)
    - Emitowanie eventów
    - Kontekst użytkownika (kto wykonał operację)

    Usage:
        class CategoryService(BaseService):
            ENTITY_NAME = "Category"

            def __init__(self, client):
                super().__init__(client)
                self.repository = CategoryRepository(client)
    """

    ENTITY_NAME: str = None

    def __init__(self, client: Client, event_bus: EventBus = None):
        self.client = client
        self.event_bus = event_bus or EventBus()

        # Aktualny użytkownik (ustawiany po zalogowaniu)
        self._current_user_id: Optional[str] = None

    # ============================================================
    # User Context
    # ============================================================

    def set_user(self, user_id: Optional[str]):
        """Ustaw aktualnego użytkownika (dla eventów)"""
        self._current_user_id = user_id

    @contextmanager
    def user_context(self, user_id: str):
        """Context manager dla operacji użytkownika"""
        old_user = self._current_user_id
        self.set_user(user_id)
        try:
            yield
        finally:
            self._current_user_id = old_user

    # ============================================================
    # Validation
    # ============================================================

    def validate(self, data: Dict[str, Any], is_update: bool = False) -> Dict[str, Any]:
        """
        Waliduj dane wejściowe. Subklasy nadpisują.

        Returns:
            Znormalizowane dane

        Raises:
            FormValidationError: {pole: komunikat} dla wszystkich błędnych pól
        """
        return dict(data)

    def _validation_failed(self, errors: Dict[str, str]):
        logger.info(f"[{self.ENTITY_NAME}] Validation failed: {errors}")
        raise FormValidationError(errors)

    # ============================================================
    # Events
    # ============================================================

    def emit_event(self, event_type: EventType, data: Dict[str, Any]):
        """Wyemituj event"""
        event = create_event(
            event_type=event_type,
            data=data,
            user_id=self._current_user_id,
            source=self.ENTITY_NAME,
        )
        self.event_bus.publish(event)
