"""
Catalogue PDF Renderer
======================
Sklada katalog: layout (czyste funkcje) → reportlab canvas → bajty PDF.

Uzycie:
    renderer = CatalogueRenderer(logo_source="assets/r-t-logo.jpg")
    pdf_bytes = renderer.render(categories, visible_products, date.today())
"""

import io
import logging
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from reportlab.lib.pagesizes import A4
from reportlab.pdfgen.canvas import Canvas

from . import constants as C
from .canvas_backend import CanvasBackend
from .images import ImageLoader
from .layout import build_pages
from .primitives import PageSpec

logger = logging.getLogger(__name__)


class CatalogueRenderer:
    """
    Renderer katalogu PDF.

    Bledy pojedynczych obrazow sa obslugiwane w ImageLoader/CanvasBackend;
    wyjatek z render() oznacza porazke calego dokumentu.
    """

    def __init__(
        self,
        logo_source: Optional[str] = None,
        image_loader: ImageLoader = None,
        code_source: str = None
    ):
        self.logo_source = logo_source
        self.image_loader = image_loader
        self.code_source = code_source

        # Statystyki ostatniego renderu
        self.last_page_count = 0
        self.last_placeholder_count = 0

    def layout(
        self,
        categories: Sequence[Dict[str, Any]],
        products: Sequence[Dict[str, Any]],
        generated_on: date = None
    ) -> List[PageSpec]:
        """Strony bez rysowania (podglad, testy)"""
        visible = [p for p in products if not p.get("is_hidden")]
        return build_pages(
            categories,
            visible,
            generated_on or date.today(),
            logo_source=self.logo_source,
            code_source=self.code_source,
        )

    def render(
        self,
        categories: Sequence[Dict[str, Any]],
        products: Sequence[Dict[str, Any]],
        generated_on: date = None
    ) -> bytes:
        """
        Returns:
            Zawartosc pliku PDF
        """
        pages = self.layout(categories, products, generated_on)

        loader = self.image_loader or ImageLoader(cached_sources=[self.logo_source])
        buffer = io.BytesIO()
        pdf = Canvas(buffer, pagesize=A4, pageCompression=1)
        self._set_metadata(pdf)

        backend = CanvasBackend(pdf, loader)
        for page in pages:
            backend.draw_page(page)
        pdf.save()

        self.last_page_count = len(pages)
        self.last_placeholder_count = backend.placeholders_drawn
        logger.info(
            f"[PDF] Rendered {len(pages)} pages "
            f"({backend.placeholders_drawn} image placeholders)"
        )
        return buffer.getvalue()

    @staticmethod
    def _set_metadata(pdf: Canvas):
        pdf.setTitle(C.METADATA["title"])
        pdf.setSubject(C.METADATA["subject"])
        pdf.setAuthor(C.METADATA["author"])
        pdf.setKeywords(C.METADATA["keywords"])
        pdf.setCreator(C.METADATA["creator"])
