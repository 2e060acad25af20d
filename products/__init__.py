#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Products Module - Moduł zarządzania produktami

Architektura:
─────────────────────────────────────────────────────────────
    GUI Layer (products.gui)
         │
         ▼
    ProductService (products.service) ← Główny punkt wejścia
         │
         ├──────────────────┬──────────────────┐
         ▼                  ▼                  ▼
    ProductRepository  StorageRepository  ImageProcessor
    (products.repository) (products.storage) (products.utils)
         │                  │
         ▼                  ▼
    Supabase DB        Supabase Storage (product-images)
─────────────────────────────────────────────────────────────

Użycie:
    from products import create_product_service

    service = create_product_service()

    # Nowy produkt (obraz wymagany)
    success, product_id = service.save_product(form_data, image_bytes, 'mug.jpg')

    # Ukryj w katalogu
    service.toggle_visibility(product_id, currently_hidden=False)

    # Zużycie Storage
    usage = service.get_storage_usage()
    print(usage.label, usage.is_warning)
"""

from products.service import ProductService, StorageUsage, create_product_service
from products.repository import ProductRepository
from products.storage import StorageRepository, StoredImage
from products.paths import StoragePaths

__all__ = [
    'ProductService',
    'StorageUsage',
    'create_product_service',
    'ProductRepository',
    'StorageRepository',
    'StoredImage',
    'StoragePaths',
]
