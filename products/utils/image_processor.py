#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ImageProcessor - Przygotowanie obrazu produktu przed uploadem

Kroki (w tej kolejności):
1. validate_file       - rozmiar <= 5 MB, typ JPEG/PNG/WEBP
2. validate_dimensions - co najmniej 200x200 px
3. compress            - dłuższy bok <= 1200 px, plik <= 0.5 MB

Kompresja:
- JPEG/WEBP: obniżanie jakości 90 → 40, potem zmniejszanie wymiarów
- PNG: zostaje PNG jeśli mieści się w limicie, inaczej → JPEG (tło białe)

Użycie:
    from products.utils import ImageProcessor

    processor = ImageProcessor()
    processor.validate_file(raw_bytes, "kubek.png")
    processor.validate_dimensions(raw_bytes)
    result = processor.compress(raw_bytes)
    # result.data, result.extension, result.content_type
"""

import io
import logging
from dataclasses import dataclass
from typing import Tuple

from PIL import Image, ImageOps, UnidentifiedImageError

from config.settings import (
    MAX_IMAGE_SIZE,
    MAX_IMAGE_SIZE_MB,
    ALLOWED_IMAGE_EXTENSIONS,
    IMAGE_MAX_SIZE_MB,
    IMAGE_MAX_DIMENSION,
    IMAGE_MIN_DIMENSION,
)
from core.exceptions import (
    FileTooLargeError,
    ImageDimensionsError,
    InvalidFileTypeError,
)

logger = logging.getLogger(__name__)

# Format PIL → (rozszerzenie, MIME)
_FORMATS = {
    'JPEG': ('jpg', 'image/jpeg'),
    'PNG': ('png', 'image/png'),
    'WEBP': ('webp', 'image/webp'),
}

_QUALITY_STEPS = (90, 80, 70, 60, 50, 40)
_MAX_SHRINK_ROUNDS = 6


@dataclass
class ProcessedImage:
    """Wynik kompresji"""
    data: bytes
    extension: str
    content_type: str
    width: int
    height: int
    original_size: int

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def ratio(self) -> float:
        """Stosunek rozmiaru po/przed (1.0 = bez zmian)"""
        return self.size / self.original_size if self.original_size else 1.0


class ImageProcessor:
    """
    Walidacja i kompresja obrazów produktów (Pillow).
    """

    def __init__(
        self,
        max_size_mb: float = IMAGE_MAX_SIZE_MB,
        max_dimension: int = IMAGE_MAX_DIMENSION,
        min_dimension: int = IMAGE_MIN_DIMENSION
    ):
        self.max_bytes = int(max_size_mb * 1024 * 1024)
        self.max_dimension = max_dimension
        self.min_dimension = min_dimension

    # =========================================================
    # WALIDACJA
    # =========================================================

    def validate_file(self, data: bytes, filename: str) -> str:
        """
        Sprawdź rozmiar i typ pliku.

        Returns:
            Format PIL ('JPEG', 'PNG', 'WEBP')

        Raises:
            FileTooLargeError: plik > 5 MB
            InvalidFileTypeError: nie JPEG/PNG/WEBP (rozszerzenie lub zawartość)
        """
        if len(data) > MAX_IMAGE_SIZE:
            raise FileTooLargeError(filename, len(data) / (1024 * 1024), MAX_IMAGE_SIZE_MB)

        ext = '.' + filename.rsplit('.', 1)[-1].lower() if '.' in filename else ''
        allowed = sorted(ALLOWED_IMAGE_EXTENSIONS)
        if ext not in ALLOWED_IMAGE_EXTENSIONS:
            raise InvalidFileTypeError(filename, allowed)

        image_format = self._detect_format(data)
        if image_format not in _FORMATS:
            raise InvalidFileTypeError(filename, allowed)
        return image_format

    def validate_dimensions(self, data: bytes) -> Tuple[int, int]:
        """
        Sprawdź minimalną rozdzielczość.

        Returns:
            (szerokość, wysokość)

        Raises:
            ImageDimensionsError: któryś bok < 200 px
        """
        with Image.open(io.BytesIO(data)) as image:
            width, height = image.size

        if width < self.min_dimension or height < self.min_dimension:
            raise ImageDimensionsError(width, height, self.min_dimension)
        return width, height

    @staticmethod
    def _detect_format(data: bytes) -> str:
        try:
            with Image.open(io.BytesIO(data)) as image:
                return image.format or ''
        except (UnidentifiedImageError, OSError):
            return ''

    # =========================================================
    # KOMPRESJA
    # =========================================================

    def compress(self, data: bytes) -> ProcessedImage:
        """
        Zmniejsz obraz do limitów uploadu.

        Returns:
            ProcessedImage (dane, rozszerzenie, MIME, wymiary)
        """
        with Image.open(io.BytesIO(data)) as source:
            source_format = source.format if source.format in _FORMATS else 'JPEG'
            image = ImageOps.exif_transpose(source)
            image.load()

        image.thumbnail((self.max_dimension, self.max_dimension), Image.Resampling.LANCZOS)

        output_format = source_format
        if output_format == 'PNG':
            encoded = self._encode(image, 'PNG')
            if len(encoded) <= self.max_bytes:
                return self._result(encoded, 'PNG', image, len(data))
            output_format = 'JPEG'

        for _ in range(_MAX_SHRINK_ROUNDS):
            for quality in _QUALITY_STEPS:
                encoded = self._encode(image, output_format, quality)
                if len(encoded) <= self.max_bytes:
                    return self._result(encoded, output_format, image, len(data))

            new_size = (max(1, int(image.width * 0.8)), max(1, int(image.height * 0.8)))
            image = image.resize(new_size, Image.Resampling.LANCZOS)

        # Nie udało się zejść do limitu - zwróć najmniejszą wersję
        logger.warning(
            f"[IMAGE] ⚠️ Could not reach {self.max_bytes:,} bytes, "
            f"using {len(encoded):,} bytes"
        )
        return self._result(encoded, output_format, image, len(data))

    @staticmethod
    def _encode(image: Image.Image, image_format: str, quality: int = None) -> bytes:
        buffer = io.BytesIO()

        if image_format == 'PNG':
            image.save(buffer, format='PNG', optimize=True)
            return buffer.getvalue()

        if image_format == 'JPEG' and image.mode != 'RGB':
            # JPEG bez kanału alfa - spłaszcz na białym tle
            rgba = image.convert('RGBA')
            background = Image.new('RGB', rgba.size, (255, 255, 255))
            background.paste(rgba, mask=rgba.split()[-1])
            image = background

        image.save(buffer, format=image_format, quality=quality or 85, optimize=True)
        return buffer.getvalue()

    @staticmethod
    def _result(data: bytes, image_format: str, image: Image.Image,
                original_size: int) -> ProcessedImage:
        extension, content_type = _FORMATS[image_format]
        logger.info(
            f"[IMAGE] ✅ Compressed {format_file_size(original_size)} → "
            f"{format_file_size(len(data))} ({image.width}x{image.height}, {image_format})"
        )
        return ProcessedImage(
            data=data,
            extension=extension,
            content_type=content_type,
            width=image.width,
            height=image.height,
            original_size=original_size,
        )


# =========================================================
# HELPERS
# =========================================================

def format_file_size(size_bytes: int) -> str:
    """
    Czytelny rozmiar pliku.

    >>> format_file_size(0)
    '0 Bytes'
    >>> format_file_size(1536)
    '1.5 KB'
    """
    if not size_bytes:
        return "0 Bytes"

    units = ("Bytes", "KB", "MB", "GB")
    value = float(size_bytes)
    index = 0
    while value >= 1024 and index < len(units) - 1:
        value /= 1024
        index += 1

    text = f"{value:.2f}".rstrip('0').rstrip('.')
    return f"{text} {units[index]}"


def create_image_processor() -> ImageProcessor:
    """Utwórz instancję ImageProcessor z ustawieniami z config"""
    return ImageProcessor()
