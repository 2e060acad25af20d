"""
Catalogue PDF
=============
Katalog produktow w PDF: okladka, indeks, strony kategorii (6 kart
na strone), tylna okladka.

    layout          - czyste funkcje → PageSpec (listy prymitywow)
    canvas_backend  - rysowanie PageSpec na reportlab canvas
    images          - wczytywanie obrazow z placeholderem przy bledzie
    renderer        - calosc → bajty PDF
    service         - dane z Supabase → CatalogueDocument
"""

from .renderer import CatalogueRenderer
from .service import (
    CatalogueDocument,
    CatalogueService,
    catalogue_filename,
    create_catalogue_service,
)

__all__ = [
    'CatalogueRenderer',
    'CatalogueDocument',
    'CatalogueService',
    'catalogue_filename',
    'create_catalogue_service',
]
