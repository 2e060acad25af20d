"""
Documents Module
================
Dokumenty PDF generowane przez aplikacje.

Obslugiwane dokumenty:
- Katalog produktow (documents.catalogue) - okladka, indeks kategorii,
  strony produktow po 6 kart, tylna okladka z danymi kontaktowymi

Wykorzystuje reportlab (canvas) + Pillow + requests (obrazy produktow).

Uzycie:
    from documents.catalogue import create_catalogue_service

    service = create_catalogue_service()
    document = service.generate()
    open(document.filename, "wb").write(document.content)
"""

from .catalogue import (
    CatalogueRenderer,
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
