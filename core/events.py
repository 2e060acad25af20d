"""
R&T Catalogue - Event Bus
=========================
Prosty event bus dla komunikacji między serwisami a oknami GUI.

Serwisy emitują zdarzenia po każdej mutacji, okna subskrybują je
(np. dashboard przelicza zużycie Storage po PRODUCT_*).
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional
from enum import Enum
import uuid
import logging

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Typy zdarzeń w systemie"""

    # ========== Product Events ==========
    PRODUCT_CREATED = "product.created"
    PRODUCT_UPDATED = "product.updated"
    PRODUCT_DELETED = "product.deleted"
    PRODUCT_VISIBILITY_CHANGED = "product.visibility_changed"
    PRODUCT_IMAGE_UPLOADED = "product.image_uploaded"
    PRODUCT_IMAGE_DELETED = "product.image_deleted"

    # ========== Category Events ==========
    CATEGORY_CREATED = "category.created"
    CATEGORY_UPDATED = "category.updated"
    CATEGORY_DELETED = "category.deleted"

    # ========== Catalogue Events ==========
    CATALOGUE_GENERATED = "catalogue.generated"

    # ========== Auth Events ==========
    USER_LOGGED_IN = "auth.user_logged_in"
    USER_LOGGED_OUT = "auth.user_logged_out"


# Zdarzenia zmieniające zawartość Storage / listę produktów
PRODUCT_MUTATION_EVENTS = (
    EventType.PRODUCT_CREATED,
    EventType.PRODUCT_UPDATED,
    EventType.PRODUCT_DELETED,
    EventType.PRODUCT_VISIBILITY_CHANGED,
)


@dataclass
class Event:
    """
    Zdarzenie w systemie.

    Attributes:
        type: Typ zdarzenia
        data: Dane zdarzenia (payload)
        timestamp: Czas wystąpienia
        event_id: Unikalny identyfikator zdarzenia
        user_id: ID użytkownika który wywołał zdarzenie
        source: Serwis źródłowy
    """
    type: EventType
    data: Dict[str, Any]
    timestamp: datetime = field(default_factory=datetime.now)
    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    user_id: Optional[str] = None
    source: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "event_id": self.event_id,
            "type": self.type.value,
            "data": self.data,
            "timestamp": self.timestamp.isoformat(),
            "user_id": self.user_id,
            "source": self.source
        }


EventHandler = Callable[[Event], None]


class EventBus:
    """
    Singleton Event Bus.

    Użycie:
        bus = EventBus()
        bus.subscribe(EventType.PRODUCT_DELETED, on_product_deleted)
        bus.publish(create_event(EventType.PRODUCT_DELETED, {"id": product_id}))
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._handlers = {}
            cls._instance._global_handlers = []
        return cls._instance

    @classmethod
    def reset(cls):
        """Reset singletona (testy)"""
        cls._instance = None

    def subscribe(self, event_type: EventType, handler: EventHandler) -> None:
        self._handlers.setdefault(event_type, []).append(handler)
        logger.debug(f"[EventBus] Subscribed {getattr(handler, '__name__', handler)} to {event_type.value}")

    def subscribe_many(self, event_types, handler: EventHandler) -> None:
        """Subskrybuj jeden handler na kilka typów zdarzeń"""
        for event_type in event_types:
            self.subscribe(event_type, handler)

    def subscribe_all(self, handler: EventHandler) -> None:
        self._global_handlers.append(handler)

    def unsubscribe(self, event_type: EventType, handler: EventHandler) -> bool:
        """
        Odsubskrybuj handler.

        Returns:
            True jeśli handler został usunięty
        """
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)
            return True
        return False

    def publish(self, event: Event) -> None:
        """
        Opublikuj zdarzenie.

        Handlery wywoływane synchronicznie; błąd jednego handlera
        jest logowany i nie blokuje pozostałych.
        """
        logger.info(f"[EventBus] Publishing: {event.type.value} | ID: {event.event_id[:8]}")

        for handler in list(self._handlers.get(event.type, [])) + list(self._global_handlers):
            try:
                handler(event)
            except Exception as e:
                logger.error(
                    f"[EventBus] Handler error for {event.type.value}: {e}",
                    exc_info=True
                )

    def clear(self) -> None:
        self._handlers.clear()
        self._global_handlers.clear()

    def get_handler_count(self, event_type: EventType = None) -> int:
        if event_type:
            return len(self._handlers.get(event_type, []))
        return sum(len(h) for h in self._handlers.values()) + len(self._global_handlers)


def create_event(
    event_type: EventType,
    data: Dict[str, Any],
    user_id: str = None,
    source: str = None
) -> Event:
    """Helper do tworzenia zdarzeń"""
    return Event(type=event_type, data=data, user_id=user_id, source=source)


def get_event_bus() -> EventBus:
    """Pobierz instancję Event Bus"""
    return EventBus()


def logging_handler(event: Event) -> None:
    """Handler logujący wszystkie zdarzenia"""
    logger.info(
        f"[EVENT] {event.type.value} | "
        f"User: {event.user_id or 'anonymous'} | "
        f"Data: {event.data}"
    )


def setup_event_logging():
    """Włącz logowanie wszystkich zdarzeń"""
    EventBus().subscribe_all(logging_handler)
