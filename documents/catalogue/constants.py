"""
Catalogue PDF Constants
=======================
Geometria strony (mm, poczatek w lewym gornym rogu), kolory i teksty
katalogu PDF.
"""

from config import settings

# ============================================================
# Strona A4 (mm)
# ============================================================

PAGE_WIDTH = 210.0
PAGE_HEIGHT = 297.0
MARGIN = 10.0

# ============================================================
# Strony produktow
# ============================================================

PRODUCTS_PER_PAGE = 6
HEADER_HEIGHT = 35.0
FOOTER_HEIGHT = 15.0
AVAILABLE_HEIGHT = PAGE_HEIGHT - HEADER_HEIGHT - FOOTER_HEIGHT - 2 * MARGIN
CARD_HEIGHT = float(int(AVAILABLE_HEIGHT // PRODUCTS_PER_PAGE) - 2)
CARD_GAP = 3.0
CARD_WIDTH = PAGE_WIDTH - 2 * MARGIN
CARD_RADIUS = 1.5

IMAGE_PADDING = 5.0
IMAGE_SIZE = CARD_HEIGHT - 2 * IMAGE_PADDING
DETAILS_OFFSET = 8.0
NAME_WRAP_WIDTH = 90.0

PRICE_BOX_WIDTH = 50.0
PRICE_BOX_RIGHT_PADDING = 5.0

QTY_MAX_CHARS = 20

HEADER_LOGO_SIZE = 20.0
COVER_LOGO_SIZE = 50.0

# ============================================================
# Indeks
# ============================================================

INDEX_TITLE_Y = 28.0
INDEX_RULE_Y = 33.0
INDEX_FIRST_Y = 50.0
INDEX_STEP = 18.0
INDEX_BOTTOM_LIMIT = PAGE_HEIGHT - MARGIN - 10.0

# ============================================================
# Kolory (RGB 0-255)
# ============================================================

BRAND_RED = (200, 31, 45)
ACCENT_RED = (233, 74, 74)
WHITE = (255, 255, 255)
PAGE_BACKGROUND = (250, 249, 246)
CARD_BORDER = (220, 220, 220)
IMAGE_BORDER = (230, 230, 230)
PLACEHOLDER_FILL = (245, 245, 245)
PRICE_BOX_FILL = (250, 250, 250)
PRICE_BOX_BORDER = (240, 240, 240)

TEXT_DARK = (30, 30, 30)
TEXT_BODY = (40, 40, 40)
TEXT_STRONG = (50, 50, 50)
TEXT_LABEL = (100, 100, 100)
TEXT_PRICE_LABEL = (110, 110, 110)
TEXT_PER_BOX = (120, 120, 120)
TEXT_INDEX_COUNT = (130, 130, 130)
TEXT_FOOTER = (140, 140, 140)

# ============================================================
# Fonty (standardowe fonty PDF)
# ============================================================

FONT_REGULAR = "Helvetica"
FONT_BOLD = "Helvetica-Bold"

# ============================================================
# Teksty
# ============================================================

BRAND_NAME = settings.BRAND_NAME
COVER_SUBTITLE = "PREMIUM WHOLESALE CROCKERY"
COVER_TITLE = "PRODUCT CATALOGUE"
COVER_EDITION = settings.CATALOGUE_EDITION
INDEX_TITLE = "CATALOGUE INDEX"
CONTINUATION_SUFFIX = " (CONT.)"
BACK_TITLE = "CONTACT US"
BACK_TAGLINE = settings.BRAND_TAGLINE
COPYRIGHT = "© 2025 R&T Marketing. All rights reserved."

PHONES = settings.CONTACT_PHONES
EMAIL = settings.CONTACT_EMAIL
ADDRESS = settings.CONTACT_ADDRESS
ADDRESS_LINES = settings.CONTACT_ADDRESS_LINES

FOOTER_CONTACT = f"R&T Marketing | {', '.join(PHONES)}"
CURRENCY_PREFIX = "Rs"

# Metadane dokumentu
METADATA = {
    "title": settings.PDF_TITLE,
    "subject": settings.PDF_SUBJECT,
    "author": settings.PDF_AUTHOR,
    "keywords": settings.PDF_KEYWORDS,
    "creator": settings.PDF_CREATOR,
}

FILENAME_PREFIX = settings.PDF_FILENAME_PREFIX
