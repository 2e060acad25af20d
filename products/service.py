#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ProductService - Warstwa logiki biznesowej dla produktów

Odpowiedzialność:
- Koordynacja operacji między bazą danych a Storage
- Walidacja formularza i obrazu
- Zmiana widoczności (tylko dla zalogowanego użytkownika)
- Zużycie Storage (suma image_size)

Zasady:
- Kolejność przy zapisie z nowym obrazem:
      upload nowego → INSERT/UPDATE rekordu → usunięcie starego obrazu
  Stary obraz znika dopiero gdy rekord wskazuje na nowy.
  Jeśli zapis rekordu się nie powiedzie, nowy obraz jest usuwany.
- Błędy zdalne → Tuple[bool, str]; błędy walidacji → FormValidationError

Użycie:
    from products import create_product_service

    service = create_product_service()

    success, product_id = service.save_product(
        {'name': 'ASHOKA MINI MUG', 'product_code': '800a1ace',
         'category_id': category_id, 'price': '620.00', 'qty_per_box': '24 PCS'},
        image_data=jpeg_bytes,
        image_filename='mug.jpg'
    )
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from supabase import Client

from auth.session import SessionService
from config.settings import STORAGE_QUOTA_MB, STORAGE_WARNING_MB
from core.base_service import BaseService
from core.events import EventBus, EventType
from core.exceptions import (
    DatabaseError,
    FileUploadError,
    FormValidationError,
    NotAuthenticatedError,
    StorageError,
)
from products.repository import ProductRepository
from products.storage import StorageRepository, StoredImage
from products.utils.image_processor import ImageProcessor, format_file_size
from products.validation import validate_product_form

logger = logging.getLogger(__name__)


@dataclass
class StorageUsage:
    """Szacunkowe zużycie Storage (z image_size w tabeli products)"""
    used_bytes: int
    quota_mb: float = STORAGE_QUOTA_MB
    warning_mb: float = STORAGE_WARNING_MB

    @property
    def used_mb(self) -> float:
        return self.used_bytes / 1024 / 1024

    @property
    def percent(self) -> float:
        """Procent limitu (0-100, obcięty do 100 dla paska postępu)"""
        if not self.quota_mb:
            return 0.0
        return min(self.used_mb / self.quota_mb * 100, 100.0)

    @property
    def is_warning(self) -> bool:
        return self.used_mb > self.warning_mb

    @property
    def label(self) -> str:
        return f"{self.used_mb:.1f} MB / {self.quota_mb / 1024:.0f} GB"


class ProductService(BaseService):
    """
    Serwis produktów - główny punkt wejścia dla operacji biznesowych.

    Example:
        service = ProductService(product_repo, storage_repo, session)

        products = service.list_products()
        success, message = service.toggle_visibility(product_id, currently_hidden=False)
    """

    ENTITY_NAME = "Product"

    def __init__(
        self,
        repository: ProductRepository,
        storage: StorageRepository,
        session: SessionService,
        image_processor: ImageProcessor = None,
        event_bus: EventBus = None
    ):
        super().__init__(repository.client, event_bus)
        self.repository = repository
        self.storage = storage
        self.session = session
        self.image_processor = image_processor or ImageProcessor()

    # =========================================================
    # ODCZYT
    # =========================================================

    def list_products(self) -> List[Dict[str, Any]]:
        """Wszystkie produkty (panel admina)"""
        return self.repository.list_all()

    def list_visible_products(self) -> List[Dict[str, Any]]:
        """Produkty widoczne w katalogu publicznym i w PDF"""
        return self.repository.list_visible()

    def get_product(self, product_id: str) -> Optional[Dict[str, Any]]:
        return self.repository.get_by_id(product_id)

    def get_storage_usage(self) -> StorageUsage:
        """Zużycie Storage przeliczone z bazy"""
        usage = StorageUsage(used_bytes=self.repository.get_total_image_size())
        if usage.is_warning:
            logger.warning(f"[SERVICE] ⚠️ Storage almost full: {usage.label}")
        return usage

    # =========================================================
    # WALIDACJA
    # =========================================================

    def validate(self, data: Dict[str, Any], is_update: bool = False) -> Dict[str, Any]:
        return validate_product_form(data)

    def _prepare_image(self, image_data: bytes, image_filename: str):
        """Walidacja + kompresja; błąd → FormValidationError na polu 'image'"""
        try:
            self.image_processor.validate_file(image_data, image_filename)
            self.image_processor.validate_dimensions(image_data)
            return self.image_processor.compress(image_data)
        except StorageError as e:
            raise FormValidationError({"image": e.message})

    # =========================================================
    # ZAPIS
    # =========================================================

    def save_product(
        self,
        data: Dict[str, Any],
        image_data: Optional[bytes] = None,
        image_filename: Optional[str] = None,
        product_id: Optional[str] = None
    ) -> Tuple[bool, str]:
        """
        Utwórz lub zaktualizuj produkt.

        Args:
            data: Pola formularza (name, product_code, category_id, price, qty_per_box)
            image_data: Nowy obraz (wymagany dla nowego produktu)
            image_filename: Nazwa pliku obrazu (rozszerzenie)
            product_id: ID edytowanego produktu (None = nowy)

        Returns:
            Tuple (success, product_id lub komunikat błędu)

        Raises:
            FormValidationError: Błędy pól formularza / obrazu
        """
        cleaned = self.validate(data, is_update=product_id is not None)

        existing = None
        if product_id:
            try:
                existing = self.repository.get_by_id_or_raise(product_id)
            except DatabaseError as e:
                return False, e.message

        if not image_data and existing is None:
            raise FormValidationError({"image": "Product image is required"})

        processed = None
        if image_data:
            processed = self._prepare_image(image_data, image_filename or "image.jpg")

        usage = self._safe_storage_usage()
        if usage is not None and usage.is_warning:
            logger.warning(f"[SERVICE] ⚠️ Saving with storage almost full: {usage.label}")

        # 1. Upload nowego obrazu
        stored: Optional[StoredImage] = None
        if processed is not None:
            try:
                stored = self.storage.store_image(
                    processed.data, processed.extension, processed.content_type
                )
            except FileUploadError as e:
                return False, f"Image upload failed: {e.details.get('reason') or e.message}"

            self.emit_event(EventType.PRODUCT_IMAGE_UPLOADED, {
                "url": stored.url, "size": stored.size
            })

        record = {
            **cleaned,
            "image_url": stored.url if stored else existing.get("image_url"),
            "image_size": stored.size if stored else int(existing.get("image_size") or 0),
            "is_hidden": bool(existing.get("is_hidden")) if existing else False,
        }

        # 2. Zapis rekordu
        try:
            if existing:
                saved = self.repository.update(product_id, record)
            else:
                saved = self.repository.create(record)
        except DatabaseError as e:
            if stored:
                # Kompensacja: nowy obraz nie jest nigdzie referencjonowany
                self.storage.delete(stored.key)
            return False, e.message

        saved_id = saved.get("id", product_id)

        # 3. Usunięcie starego obrazu (rekord wskazuje już na nowy)
        if stored and existing and existing.get("image_url"):
            if self.storage.delete_by_url(existing["image_url"]):
                self.emit_event(EventType.PRODUCT_IMAGE_DELETED, {"url": existing["image_url"]})
            else:
                logger.warning(f"[SERVICE] ⚠️ Old image left in storage: {existing['image_url']}")

        if existing:
            self.emit_event(EventType.PRODUCT_UPDATED, {"id": saved_id, "name": record["name"]})
            logger.info(f"[SERVICE] ✅ Product updated: {saved_id}")
        else:
            self.emit_event(EventType.PRODUCT_CREATED, {"id": saved_id, "name": record["name"]})
            logger.info(
                f"[SERVICE] ✅ Product created: {saved_id} "
                f"(image {format_file_size(record['image_size'])})"
            )

        return True, saved_id

    def _safe_storage_usage(self) -> Optional[StorageUsage]:
        try:
            return self.get_storage_usage()
        except DatabaseError:
            return None

    # =========================================================
    # WIDOCZNOŚĆ
    # =========================================================

    def toggle_visibility(self, product_id: str, currently_hidden: bool) -> Tuple[bool, str]:
        """
        Przełącz is_hidden.

        Sesja sprawdzana przed zapisem - bez zalogowanego użytkownika
        nic nie jest wysyłane do bazy.

        Returns:
            Tuple (success, komunikat)
        """
        try:
            user = self.session.require_user("update products")
        except NotAuthenticatedError as e:
            logger.warning(f"[SERVICE] ❌ Visibility change without session: {product_id}")
            return False, e.message

        new_hidden = not currently_hidden
        try:
            with self.user_context(str(getattr(user, "id", "") or "")):
                self.repository.set_hidden(product_id, new_hidden)
                self.emit_event(EventType.PRODUCT_VISIBILITY_CHANGED, {
                    "id": product_id, "is_hidden": new_hidden
                })
        except DatabaseError as e:
            return False, f"Failed to update visibility: {e.message}"

        state = "hidden from" if new_hidden else "visible in"
        return True, f"Product {state} catalogue"

    # =========================================================
    # USUWANIE
    # =========================================================

    def delete_product(self, product: Dict[str, Any]) -> Tuple[bool, str]:
        """
        Usuń produkt i jego obraz.

        Rekord usuwany pierwszy - obraz dopiero gdy nic go nie wskazuje.

        Returns:
            Tuple (success, komunikat)
        """
        product_id = product.get("id")
        try:
            self.repository.delete(product_id)
        except DatabaseError as e:
            return False, e.message

        image_url = product.get("image_url")
        if image_url and not self.storage.delete_by_url(image_url):
            logger.warning(f"[SERVICE] ⚠️ Image not removed from storage: {image_url}")

        self.emit_event(EventType.PRODUCT_DELETED, {"id": product_id, "name": product.get("name")})
        return True, "Product deleted successfully!"


# =========================================================
# FACTORY
# =========================================================

def create_product_service(client: Client = None, session: SessionService = None) -> ProductService:
    """
    Factory method do tworzenia ProductService.

    Args:
        client: Opcjonalna instancja Supabase Client
                (jeśli None - użyje get_supabase_client())
        session: Opcjonalny SessionService (domyślnie na tym samym kliencie)

    Example:
        service = create_product_service()
        products = service.list_products()
    """
    if client is None:
        from core.supabase_client import get_supabase_client
        client = get_supabase_client()

    return ProductService(
        ProductRepository(client),
        StorageRepository(client),
        session or SessionService(client),
    )
