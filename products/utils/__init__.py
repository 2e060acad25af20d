#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Products Utils - Narzędzia pomocnicze

Komponenty:
- ImageProcessor: walidacja (rozmiar, typ, rozdzielczość) i kompresja
  obrazów produktów przed uploadem (Pillow)
- format_file_size: czytelny rozmiar pliku (Bytes/KB/MB/GB)

Użycie:
    from products.utils import ImageProcessor, format_file_size

    processor = ImageProcessor()
    result = processor.compress(file_bytes)
    print(format_file_size(result.size))
"""

from products.utils.image_processor import (
    ImageProcessor,
    ProcessedImage,
    create_image_processor,
    format_file_size,
)

__all__ = [
    'ImageProcessor',
    'ProcessedImage',
    'create_image_processor',
    'format_file_size',
]
