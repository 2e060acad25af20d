#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Catalogue Module - Katalog publiczny

Komponenty:
- grouping: CategoryGroup, group_by_category (ekran i PDF liczą osobno)
- listing: filtry (publiczny / admin), paginacja w pamięci
- view_state: stan widoku (szukanie, kategoria, strona)
- gui: okno katalogu publicznego z eksportem PDF
"""

from catalogue.grouping import CategoryGroup, group_by_category, chunk
from catalogue.listing import (
    ALL_CATEGORIES,
    ALL_CATEGORY_IDS,
    Page,
    filter_public,
    filter_admin,
    paginate,
    visibility_counts,
    apply_visibility,
)
from catalogue.view_state import CatalogueViewState, AdminViewState

__all__ = [
    'CategoryGroup',
    'group_by_category',
    'chunk',
    'ALL_CATEGORIES',
    'ALL_CATEGORY_IDS',
    'Page',
    'filter_public',
    'filter_admin',
    'paginate',
    'visibility_counts',
    'apply_visibility',
    'CatalogueViewState',
    'AdminViewState',
]
