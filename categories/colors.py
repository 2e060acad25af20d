#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Paleta kolorów kategorii (22 kolory, stała kolejność)

Kolor kategorii to zawsze jeden z tych hexów albo wartość
przeniesiona z wcześniej zapisanej kategorii.
"""

from typing import List, Optional, Tuple

# (nazwa, hex) - kolejność = kolejność w wyborze koloru
COLOR_PALETTE: List[Tuple[str, str]] = [
    ("Red", "#EF4444"),
    ("Orange", "#F97316"),
    ("Amber", "#F59E0B"),
    ("Yellow", "#EAB308"),
    ("Lime", "#84CC16"),
    ("Green", "#22C55E"),
    ("Emerald", "#10B981"),
    ("Teal", "#14B8A6"),
    ("Cyan", "#06B6D4"),
    ("Sky", "#0EA5E9"),
    ("Blue", "#3B82F6"),
    ("Indigo", "#6366F1"),
    ("Violet", "#8B5CF6"),
    ("Purple", "#A855F7"),
    ("Fuchsia", "#D946EF"),
    ("Pink", "#EC4899"),
    ("Rose", "#F43F5E"),
    ("Slate", "#64748B"),
    ("Gray", "#6B7280"),
    ("Zinc", "#71717A"),
    ("Stone", "#78716C"),
    ("Brown", "#92400E"),
]

DEFAULT_COLOR = COLOR_PALETTE[0][1]

# Kolor dla produktów bez kategorii / kategorii bez koloru
FALLBACK_COLOR = "#3B82F6"


def palette_hexes() -> List[str]:
    return [hex_value for _, hex_value in COLOR_PALETTE]


def color_name(hex_value: str) -> Optional[str]:
    """Nazwa koloru z palety (None dla koloru spoza palety)"""
    wanted = (hex_value or "").upper()
    for name, value in COLOR_PALETTE:
        if value == wanted:
            return name
    return None


def resolve_color(requested: Optional[str], previous: Optional[str] = None) -> str:
    """
    Kolor do zapisu.

    - kolor z palety → ten kolor
    - kolor spoza palety równy poprzedniej wartości → zachowany
    - w pozostałych przypadkach → poprzedni kolor lub domyślny
    """
    requested = (requested or "").upper()
    if requested in palette_hexes():
        return requested
    if previous and requested == previous.upper():
        return previous
    return previous or DEFAULT_COLOR


def hex_to_rgb(hex_value: str) -> Tuple[int, int, int]:
    value = (hex_value or FALLBACK_COLOR).lstrip('#')
    if len(value) == 3:
        value = ''.join(ch * 2 for ch in value)
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def tint(hex_value: str, alpha: float = 0.12) -> str:
    """Jasny odcień koloru na białym tle (tło etykiety kategorii)"""
    r, g, b = hex_to_rgb(hex_value)
    r, g, b = (round(255 - (255 - c) * alpha) for c in (r, g, b))
    return f"#{r:02X}{g:02X}{b:02X}"
