#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Konfiguracja aplikacji R&T Catalogue
Panel administracyjny i publiczny katalog produktów (hurt ceramiki)

UWAGA: Klucze Supabase tylko z pliku .env!
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Wczytaj zmienne środowiskowe z .env
load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent

# ============================================================
# SUPABASE - BAZA DANYCH, STORAGE, AUTH
# ============================================================

SUPABASE_URL = os.getenv("SUPABASE_URL", "")

# Klucz anon (RLS + Supabase Auth)
SUPABASE_KEY = os.getenv("SUPABASE_KEY", "")

# Tabele
PRODUCTS_TABLE = "products"
CATEGORIES_TABLE = "categories"

# ============================================================
# STORAGE - OBRAZY PRODUKTÓW
# ============================================================

STORAGE_BUCKET = "product-images"
STORAGE_BASE_PATH = "products"
STORAGE_CACHE_CONTROL = "3600"

# Prefiks publicznych URL (z niego wyliczamy klucz obiektu przy usuwaniu)
STORAGE_PUBLIC_PREFIX = f"/storage/v1/object/public/{STORAGE_BUCKET}/"

# Limit planu (1 GB) i próg ostrzeżenia
STORAGE_QUOTA_MB = 1024
STORAGE_WARNING_MB = 900

# ============================================================
# OBRAZY - WALIDACJA I KOMPRESJA
# ============================================================

MAX_IMAGE_SIZE_MB = 5
MAX_IMAGE_SIZE = MAX_IMAGE_SIZE_MB * 1024 * 1024

ALLOWED_IMAGE_TYPES = {'image/jpeg', 'image/jpg', 'image/png', 'image/webp'}
ALLOWED_IMAGE_EXTENSIONS = {'.jpg', '.jpeg', '.png', '.webp'}

# Cel kompresji przed uploadem
IMAGE_MAX_SIZE_MB = float(os.getenv("IMAGE_MAX_SIZE_MB", "0.5"))
IMAGE_MAX_DIMENSION = int(os.getenv("IMAGE_MAX_DIMENSION", "1200"))
IMAGE_MIN_DIMENSION = 200

# Timeout pobierania obrazów (PDF, podgląd)
IMAGE_FETCH_TIMEOUT = int(os.getenv("IMAGE_FETCH_TIMEOUT", "15"))

# ============================================================
# WALIDACJA PRODUKTU
# ============================================================

PRODUCT_NAME_MIN_LENGTH = 3
PRODUCT_NAME_MAX_LENGTH = 100
PRODUCT_MAX_PRICE = 999999

# ============================================================
# KATALOG PDF
# ============================================================

# "id" = pierwsze 8 znaków identyfikatora (jak w dotychczasowym katalogu)
# "product_code" = kod wpisany przez operatora
PDF_PRODUCT_CODE_SOURCE = os.getenv("PDF_PRODUCT_CODE_SOURCE", "id")

LOGO_PATH = Path(os.getenv("LOGO_PATH", BASE_DIR / "assets" / "r-t-logo.jpg"))

BRAND_NAME = "R&T MARKETING"
BRAND_TAGLINE = "Premium Wholesale Crockery Supplier"
CATALOGUE_EDITION = "2026 EDITION"

CONTACT_PHONES = ("9074089284", "8590266100")
CONTACT_EMAIL = "mail.randtmarketing@gmail.com"
CONTACT_ADDRESS = "Pothiladu, Kallidumbu, Edavanna, Malappuram Dt, Kerala"
CONTACT_ADDRESS_LINES = (
    "Pothiladu, Kallidumbu",
    "Edavanna",
    "Malappuram District",
    "Kerala, India",
)

PDF_TITLE = "R&T Marketing Product Catalogue 2025"
PDF_SUBJECT = "Wholesale Crockery Products"
PDF_AUTHOR = "R&T Marketing"
PDF_KEYWORDS = "crockery, wholesale, products, catalogue"
PDF_CREATOR = "R&T Marketing Catalogue System"
PDF_FILENAME_PREFIX = "RT-Marketing-Catalogue"

# ============================================================
# GUI - USTAWIENIA INTERFEJSU
# ============================================================

DEFAULT_WINDOW_SIZE = "1400x850"

# Liczba produktów na stronę w katalogu publicznym
PRODUCTS_PAGE_SIZE = 50

# Miniatury w podglądzie
PREVIEW_IMAGE_SIZE = 260

# Motyw CustomTkinter
CTK_APPEARANCE_MODE = "light"  # "dark", "light", "system"
CTK_COLOR_THEME = "blue"       # "blue", "green", "dark-blue"

# ============================================================
# MIME TYPES
# ============================================================

MIME_TYPES = {
    '.jpg': 'image/jpeg',
    '.jpeg': 'image/jpeg',
    '.png': 'image/png',
    '.webp': 'image/webp',
    '.pdf': 'application/pdf',
}


def get_mime_type(extension: str) -> str:
    """Zwraca MIME type dla rozszerzenia"""
    ext = extension.lower() if extension.startswith('.') else f'.{extension.lower()}'
    return MIME_TYPES.get(ext, 'application/octet-stream')


def validate_config():
    """Sprawdza czy konfiguracja jest poprawna"""
    errors = []

    if not SUPABASE_URL:
        errors.append("SUPABASE_URL nie jest ustawiony")

    if not SUPABASE_KEY:
        errors.append("SUPABASE_KEY nie jest ustawiony")

    if PDF_PRODUCT_CODE_SOURCE not in ("id", "product_code"):
        errors.append(f"PDF_PRODUCT_CODE_SOURCE: nieznana wartość '{PDF_PRODUCT_CODE_SOURCE}'")

    if errors:
        raise ValueError("Błędy konfiguracji:\n" + "\n".join(f"  - {e}" for e in errors))

    return True


if __name__ == "__main__":
    print("=== Konfiguracja R&T Catalogue ===")
    print(f"Supabase URL: {SUPABASE_URL or '(brak)'}")
    print(f"Storage bucket: {STORAGE_BUCKET}")
    print(f"Limit storage: {STORAGE_QUOTA_MB} MB (ostrzeżenie od {STORAGE_WARNING_MB} MB)")
    print(f"Logo: {LOGO_PATH}")

    try:
        validate_config()
        print("\n✅ Konfiguracja poprawna!")
    except ValueError as e:
        print(f"\n❌ {e}")
