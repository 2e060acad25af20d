"""
Catalogue PDF - Image Loader
============================
Wczytywanie obrazow do PDF (URL przez requests, plik lokalny z dysku).

Zasady:
- obrazy wczytywane po kolei, jeden na raz
- blad jednego obrazu (siec, 404, uszkodzony plik, za duzy obraz) → None + ostrzezenie
  w logu; strona rysuje placeholder i renderowanie idzie dalej
- cache tylko dla zrodel podanych w `cached_sources` (logo na kazdej
  stronie), zdjecia produktow nie sa trzymane w pamieci
"""

import io
import logging
from pathlib import Path
from typing import Dict, Iterable, Optional

import requests
from PIL import Image, UnidentifiedImageError
from reportlab.lib.utils import ImageReader

from config.settings import IMAGE_FETCH_TIMEOUT

logger = logging.getLogger(__name__)


class ImageLoader:
    """
    Uzycie:
        loader = ImageLoader(cached_sources=[logo_path])
        reader = loader.load(product['image_url'])
        if reader is None:
            ...  # placeholder
    """

    def __init__(
        self,
        timeout: float = IMAGE_FETCH_TIMEOUT,
        session: requests.Session = None,
        cached_sources: Iterable[str] = ()
    ):
        self.timeout = timeout
        self.session = session or requests.Session()
        self.cached_sources = {s for s in cached_sources if s}
        self._cache: Dict[str, Optional[ImageReader]] = {}
        self.failures = []

    def load(self, source: Optional[str]) -> Optional[ImageReader]:
        """
        Returns:
            ImageReader gotowy dla reportlab lub None
        """
        if not source:
            return None

        if source in self._cache:
            return self._cache[source]

        try:
            reader = ImageReader(self._decode(self._fetch(source)))
        except (requests.RequestException, OSError, UnidentifiedImageError,
                ValueError, Image.DecompressionBombError) as e:
            logger.warning(f"[PDF] Image load failed, using placeholder: {source} ({e})")
            self.failures.append(source)
            reader = None

        if source in self.cached_sources:
            self._cache[source] = reader
        return reader

    def _fetch(self, source: str) -> bytes:
        if source.startswith(("http://", "https://")):
            response = self.session.get(source, timeout=self.timeout)
            response.raise_for_status()
            return response.content
        return Path(source).read_bytes()

    @staticmethod
    def _decode(data: bytes) -> Image.Image:
        image = Image.open(io.BytesIO(data))
        image.load()

        if image.mode in ("RGB", "L"):
            return image

        # Przezroczystosc → biale tlo (jak JPEG w katalogu)
        rgba = image.convert("RGBA")
        background = Image.new("RGB", rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.split()[-1])
        return background
