#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
StoragePaths - Ścieżki obrazów produktów w Supabase Storage

Zasady:
1. Każdy upload dostaje NOWY, unikalny klucz → upsert=false
   (podmiana obrazu = nowy plik + usunięcie starego)
2. Klucz: products/{timestamp_ms}_{losowy_sufiks}.{ext}
3. Publiczny URL zawiera stały prefiks, z którego odtwarzamy klucz
   przy usuwaniu

Struktura w Storage (bucket product-images):
    products/
    ├── 1735689600000_k3j9x2a.jpg
    ├── 1735689612345_p0q8w1e.webp
    └── ...
"""

import random
import string
import time
from typing import Optional

from config.settings import (
    STORAGE_BUCKET,
    STORAGE_BASE_PATH,
    STORAGE_PUBLIC_PREFIX,
    SUPABASE_URL,
)

_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits


class StoragePaths:
    """
    Generator ścieżek w Supabase Storage.

    Przykład użycia:
        key = StoragePaths.image_key("jpg")
        # → "products/1735689600000_k3j9x2a.jpg"

        url = StoragePaths.get_public_url(key)
        # → "https://xxx.supabase.co/storage/v1/object/public/product-images/products/1735689600000_k3j9x2a.jpg"

        StoragePaths.key_from_public_url(url)
        # → "products/1735689600000_k3j9x2a.jpg"
    """

    BUCKET = STORAGE_BUCKET
    BASE = STORAGE_BASE_PATH
    PUBLIC_PREFIX = STORAGE_PUBLIC_PREFIX

    @staticmethod
    def image_key(extension: str, timestamp_ms: int = None, suffix: str = None) -> str:
        """
        Nowy, unikalny klucz obrazu produktu.

        Args:
            extension: Rozszerzenie pliku (z kropką lub bez)
            timestamp_ms: Znacznik czasu (domyślnie teraz)
            suffix: Losowy sufiks (domyślnie 7 znaków [a-z0-9])
        """
        ext = extension.lstrip('.').lower() or "jpg"
        if timestamp_ms is None:
            timestamp_ms = int(time.time() * 1000)
        if suffix is None:
            suffix = ''.join(random.choices(_SUFFIX_ALPHABET, k=7))
        return f"{StoragePaths.BASE}/{timestamp_ms}_{suffix}.{ext}"

    @staticmethod
    def get_public_url(key: str, base_url: str = None) -> str:
        """Publiczny URL obiektu (bucket publiczny)"""
        base = (base_url or SUPABASE_URL).rstrip('/')
        return f"{base}{StoragePaths.PUBLIC_PREFIX}{key}"

    @staticmethod
    def key_from_public_url(url: str) -> Optional[str]:
        """
        Odtwórz klucz obiektu z publicznego URL.

        Returns:
            Klucz (np. "products/123_abc.jpg") lub None jeśli URL nie
            wskazuje na bucket obrazów produktów
        """
        if not url or StoragePaths.PUBLIC_PREFIX not in url:
            return None

        key = url.split(StoragePaths.PUBLIC_PREFIX, 1)[1]
        # Usuń query string (np. ?t=... z cache-bustingu)
        key = key.split('?', 1)[0]
        return key or None

    @staticmethod
    def get_extension(filename: str, default: str = "jpg") -> str:
        """Rozszerzenie z nazwy pliku (bez kropki, małe litery)"""
        if not filename or '.' not in filename:
            return default
        return filename.rsplit('.', 1)[1].lower()
