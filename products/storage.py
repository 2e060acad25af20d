#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
StorageRepository - Warstwa dostępu do Supabase Storage (obrazy produktów)

Odpowiedzialność:
- Upload obrazu pod nowym, unikalnym kluczem → publiczny URL + rozmiar
- Usuwanie obrazu po publicznym URL (klucz odtwarzany z URL)

Zasady:
- upsert=false - klucz jest zawsze nowy, nadpisanie oznacza błąd
- cache-control 3600 s (obrazy są niezmienne pod danym kluczem)
- upload zwraca tuple success/error, store_image rzuca FileUploadError
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from supabase import Client

from config.settings import (
    STORAGE_BUCKET,
    STORAGE_CACHE_CONTROL,
    MAX_IMAGE_SIZE,
    get_mime_type,
)
from core.exceptions import FileUploadError
from products.paths import StoragePaths

logger = logging.getLogger(__name__)


@dataclass
class StoredImage:
    """Wynik uploadu obrazu"""
    key: str
    url: str
    size: int


class StorageRepository:
    """
    Repository dla operacji na Supabase Storage.

    Example:
        storage = StorageRepository(get_supabase_client())

        stored = storage.store_image(jpeg_bytes, "jpg")
        print(stored.url, stored.size)

        storage.delete_by_url(stored.url)
    """

    def __init__(self, client: Client, bucket: str = None):
        self.client = client
        self.bucket = bucket or STORAGE_BUCKET

    def _bucket(self):
        return self.client.storage.from_(self.bucket)

    # =========================================================
    # UPLOAD
    # =========================================================

    def upload(
        self,
        path: str,
        data: bytes,
        content_type: Optional[str] = None,
        upsert: bool = False
    ) -> Tuple[bool, str]:
        """
        Upload pliku do Storage.

        Returns:
            Tuple (success: bool, path_or_error: str)
        """
        if not path:
            return False, "Missing storage path"

        if not data:
            return False, "No data to upload"

        if len(data) > MAX_IMAGE_SIZE:
            size_mb = len(data) / (1024 * 1024)
            max_mb = MAX_IMAGE_SIZE / (1024 * 1024)
            return False, f"File too large ({size_mb:.1f} MB > {max_mb:.0f} MB)"

        if not content_type:
            content_type = get_mime_type(StoragePaths.get_extension(path))

        try:
            # upsert jako STRING (wymagane przez Supabase!)
            self._bucket().upload(
                path=path,
                file=data,
                file_options={
                    "content-type": content_type,
                    "cache-control": STORAGE_CACHE_CONTROL,
                    "upsert": "true" if upsert else "false"
                }
            )

            logger.info(f"[STORAGE] ✅ Upload: {path} ({len(data):,} bytes)")
            return True, path

        except Exception as e:
            error_msg = str(e)

            if "Duplicate" in error_msg and not upsert:
                logger.warning(f"[STORAGE] ⚠️ File already exists: {path}")
                return False, "File already exists"

            logger.error(f"[STORAGE] ❌ Upload failed: {path} - {error_msg}")
            return False, f"Upload error: {error_msg}"

    def store_image(
        self,
        data: bytes,
        extension: str,
        content_type: Optional[str] = None
    ) -> StoredImage:
        """
        Zapisz obraz produktu pod nowym kluczem.

        Returns:
            StoredImage (klucz, publiczny URL, rozmiar w bajtach)

        Raises:
            FileUploadError: Upload się nie powiódł
        """
        key = StoragePaths.image_key(extension)
        success, result = self.upload(key, data, content_type=content_type, upsert=False)
        if not success:
            raise FileUploadError(key, result)

        return StoredImage(key=key, url=self.get_public_url(key), size=len(data))

    # =========================================================
    # DELETE
    # =========================================================

    def delete(self, path: str) -> bool:
        """
        Usuń plik ze Storage.

        Returns:
            True jeśli sukces (lub plik nie istniał)
        """
        if not path:
            return False

        try:
            self._bucket().remove([path])
            logger.info(f"[STORAGE] ✅ Delete: {path}")
            return True

        except Exception as e:
            if "not found" in str(e).lower():
                return True

            logger.error(f"[STORAGE] ❌ Delete failed: {path} - {e}")
            return False

    def delete_by_url(self, url: str) -> bool:
        """
        Usuń obraz wskazywany przez publiczny URL.

        Returns:
            True jeśli usunięto, False jeśli URL obcy lub błąd Storage
        """
        key = StoragePaths.key_from_public_url(url)
        if not key:
            logger.warning(f"[STORAGE] ⚠️ Not a product image URL, skipping delete: {url}")
            return False
        return self.delete(key)

    # =========================================================
    # URL
    # =========================================================

    def get_public_url(self, path: str) -> str:
        """
        Publiczny URL dla pliku (bucket product-images jest publiczny).
        """
        if not path:
            return ""
        return StoragePaths.get_public_url(path)
