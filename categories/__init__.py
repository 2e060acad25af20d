#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Categories Module - Kategorie produktów

Komponenty:
- CategoryService: zapis (nazwa, kolor, kolejność) i usuwanie
  (blokowane gdy kategoria ma produkty)
- CategoryRepository: tabela categories
- COLOR_PALETTE: 22 kolory do wyboru

Użycie:
    from categories import create_category_service

    service = create_category_service()
    success, message = service.delete_category(category_id)
"""

from categories.colors import COLOR_PALETTE, DEFAULT_COLOR, resolve_color
from categories.repository import CategoryRepository
from categories.service import CategoryService, create_category_service

__all__ = [
    'COLOR_PALETTE',
    'DEFAULT_COLOR',
    'resolve_color',
    'CategoryRepository',
    'CategoryService',
    'create_category_service',
]
