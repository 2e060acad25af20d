"""
Catalogue Service
=================
Generowanie katalogu PDF z aktualnych danych Supabase.

Dane:
- kategorie wg display_order
- produkty z is_hidden = false (ten sam zbior co katalog na ekranie,
  ale bez paginacji ekranu)

Wynik: bajty PDF + nazwa pliku RT-Marketing-Catalogue-YYYY-MM-DD.pdf.
Plik na dysku powstaje dopiero po udanym renderze calosci.
"""

import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Tuple

from supabase import Client

from categories.repository import CategoryRepository
from config.settings import LOGO_PATH
from core.base_service import BaseService
from core.events import EventBus, EventType
from core.exceptions import CatalogueError, DatabaseError, RenderError
from products.repository import ProductRepository

from . import constants as C
from .renderer import CatalogueRenderer

logger = logging.getLogger(__name__)


@dataclass
class CatalogueDocument:
    """Gotowy katalog"""
    content: bytes
    filename: str
    page_count: int
    product_count: int
    placeholder_count: int = 0

    @property
    def size(self) -> int:
        return len(self.content)


def catalogue_filename(day: date) -> str:
    return f"{C.FILENAME_PREFIX}-{day.isoformat()}.pdf"


class CatalogueService(BaseService):
    """
    Uzycie:
        service = create_catalogue_service()
        document = service.generate()
        Path(document.filename).write_bytes(document.content)
    """

    ENTITY_NAME = "Catalogue"

    def __init__(
        self,
        product_repository: ProductRepository,
        category_repository: CategoryRepository,
        renderer: CatalogueRenderer = None,
        event_bus: EventBus = None
    ):
        super().__init__(product_repository.client, event_bus)
        self.products = product_repository
        self.categories = category_repository
        self.renderer = renderer or CatalogueRenderer(logo_source=str(LOGO_PATH))

    def generate(self, today: date = None) -> CatalogueDocument:
        """
        Pobierz dane i wyrenderuj katalog.

        Raises:
            RenderError: Blad pobierania danych lub renderowania
        """
        try:
            categories = self.categories.list_ordered()
            products = self.products.list_visible()
        except DatabaseError as e:
            raise RenderError(e.message)

        return self.render_catalogue(categories, products, today)

    def render_catalogue(
        self,
        categories: Sequence[Dict[str, Any]],
        products: Sequence[Dict[str, Any]],
        today: date = None
    ) -> CatalogueDocument:
        """
        Wyrenderuj katalog z podanych danych.

        Raises:
            RenderError: Porazka calego dokumentu
        """
        today = today or date.today()
        try:
            content = self.renderer.render(categories, products, today)
        except CatalogueError:
            raise
        except Exception as e:
            logger.error(f"[PDF] Catalogue render failed: {e}", exc_info=True)
            raise RenderError(str(e))

        document = CatalogueDocument(
            content=content,
            filename=catalogue_filename(today),
            page_count=self.renderer.last_page_count,
            product_count=sum(1 for p in products if not p.get("is_hidden")),
            placeholder_count=self.renderer.last_placeholder_count,
        )
        self.emit_event(EventType.CATALOGUE_GENERATED, {
            "filename": document.filename,
            "pages": document.page_count,
            "products": document.product_count,
        })
        return document

    def export_to_file(self, target: Path, today: date = None) -> Tuple[bool, str]:
        """
        Zapisz katalog do pliku (katalog docelowy lub pelna sciezka).

        Returns:
            Tuple (success, sciezka lub komunikat bledu)
        """
        try:
            document = self.generate(today)
        except RenderError as e:
            return False, f"Failed to create catalogue: {e.details.get('reason')}"

        target = Path(target)
        path = target / document.filename if target.is_dir() else target
        # Zapis do pliku tymczasowego obok celu, potem podmiana
        partial = path.with_name(path.name + ".part")
        try:
            partial.write_bytes(document.content)
            partial.replace(path)
        except OSError as e:
            partial.unlink(missing_ok=True)
            logger.error(f"[PDF] Cannot write {path}: {e}")
            return False, f"Cannot write file: {e}"

        logger.info(f"[PDF] Catalogue saved: {path} ({document.size:,} bytes)")
        return True, str(path)


def create_catalogue_service(client: Client = None, logo_source: Optional[str] = None) -> CatalogueService:
    """
    Factory method do tworzenia CatalogueService.
    """
    if client is None:
        from core.supabase_client import get_supabase_client
        client = get_supabase_client()

    renderer = CatalogueRenderer(logo_source=logo_source or str(LOGO_PATH))
    return CatalogueService(ProductRepository(client), CategoryRepository(client), renderer)
