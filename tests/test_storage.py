"""
Testy kluczy Storage, repozytorium Storage i przetwarzania obrazów.
"""

import io
import re

import pytest
from PIL import Image

from core.exceptions import FileTooLargeError, ImageDimensionsError, InvalidFileTypeError
from products.paths import StoragePaths
from products.storage import StorageRepository
from products.utils.image_processor import ImageProcessor, format_file_size

from conftest import make_image_bytes


# =========================================================
# KLUCZE / URL
# =========================================================

def test_image_key_format():
    key = StoragePaths.image_key(".JPG", timestamp_ms=1735689600000, suffix="k3j9x2a")
    assert key == "products/1735689600000_k3j9x2a.jpg"
    assert re.fullmatch(r"products/\d+_[a-z0-9]{7}\.webp", StoragePaths.image_key("webp"))


def test_key_from_public_url():
    url = StoragePaths.get_public_url("products/1_abc.jpg", base_url="https://x.supabase.co/")

    assert url == "https://x.supabase.co/storage/v1/object/public/product-images/products/1_abc.jpg"
    assert StoragePaths.key_from_public_url(url) == "products/1_abc.jpg"
    assert StoragePaths.key_from_public_url(url + "?t=123") == "products/1_abc.jpg"


@pytest.mark.parametrize("url", [None, "", "https://cdn.example.com/img.jpg"])
def test_foreign_url_has_no_key(url):
    assert StoragePaths.key_from_public_url(url) is None


def test_extension_from_filename():
    assert StoragePaths.get_extension("Photo.JPEG") == "jpeg"
    assert StoragePaths.get_extension("noext") == "jpg"


# =========================================================
# STORAGE REPOSITORY
# =========================================================

def test_store_and_delete_by_url(client):
    storage = StorageRepository(client)

    stored = storage.store_image(b"fake-jpeg", "jpg", "image/jpeg")

    assert stored.size == len(b"fake-jpeg")
    assert client.stored_keys() == [stored.key]
    assert storage.delete_by_url(stored.url)
    assert client.stored_keys() == []


def test_upload_rejects_empty_data(client):
    storage = StorageRepository(client)
    assert storage.upload("products/a.jpg", b"") == (False, "No data to upload")


def test_delete_failure_reported(client):
    client.fail_remove = True
    assert StorageRepository(client).delete("products/a.jpg") is False


# =========================================================
# OBRAZY
# =========================================================

def test_validate_rejects_large_file():
    with pytest.raises(FileTooLargeError):
        ImageProcessor().validate_file(b"0" * (5 * 1024 * 1024 + 1), "big.jpg")


@pytest.mark.parametrize("data,filename", [
    (make_image_bytes(), "photo.gif"),
    (b"not an image at all", "photo.jpg"),
    (make_image_bytes(fmt="GIF", mode="P", color=1), "photo.png"),
])
def test_validate_rejects_wrong_type(data, filename):
    with pytest.raises(InvalidFileTypeError):
        ImageProcessor().validate_file(data, filename)


def test_validate_dimensions():
    processor = ImageProcessor()
    assert processor.validate_dimensions(make_image_bytes(size=(200, 250))) == (200, 250)
    with pytest.raises(ImageDimensionsError):
        processor.validate_dimensions(make_image_bytes(size=(199, 800)))


def test_compress_limits_dimension_and_size():
    big = make_image_bytes(size=(2400, 1800), fmt="PNG")

    processed = ImageProcessor(max_size_mb=0.1).compress(big)

    assert max(processed.width, processed.height) <= 1200
    assert processed.size <= int(0.1 * 1024 * 1024)
    assert processed.original_size == len(big)


def test_small_png_stays_png():
    processed = ImageProcessor().compress(make_image_bytes(size=(300, 300), fmt="PNG"))
    assert (processed.extension, processed.content_type) == ("png", "image/png")


def test_oversized_rgba_png_becomes_rgb_jpeg():
    noisy = Image.effect_noise((1000, 1000), 100).convert("RGBA")
    buffer = io.BytesIO()
    noisy.save(buffer, format="PNG")

    processed = ImageProcessor(max_size_mb=0.05).compress(buffer.getvalue())

    assert processed.extension == "jpg"
    assert Image.open(io.BytesIO(processed.data)).mode == "RGB"


@pytest.mark.parametrize("size,text", [
    (0, "0 Bytes"),
    (512, "512 Bytes"),
    (1536, "1.5 KB"),
    (5 * 1024 * 1024, "5 MB"),
])
def test_format_file_size(size, text):
    assert format_file_size(size) == text
