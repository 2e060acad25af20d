"""
Catalogue GUI Module

Komponenty:
- CatalogueWindow: Katalog publiczny z filtrami, paginacją i eksportem PDF
"""

from catalogue.gui.catalogue_window import CatalogueWindow

__all__ = [
    'CatalogueWindow',
]
