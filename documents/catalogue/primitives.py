"""
Catalogue PDF - Draw Primitives
===============================
Deklaratywne elementy strony. Funkcje layoutu zwracaja listy tych
obiektow, backend (canvas_backend) je rysuje.

Wspolrzedne w mm, poczatek (0, 0) w LEWYM GORNYM rogu strony,
os Y w dol - jak w projekcie graficznym katalogu.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

RGB = Tuple[int, int, int]


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float
    fill: Optional[RGB] = None
    stroke: Optional[RGB] = None
    line_width: float = 0.3


@dataclass(frozen=True)
class RoundedRect:
    x: float
    y: float
    width: float
    height: float
    radius: float
    fill: Optional[RGB] = None
    stroke: Optional[RGB] = None
    line_width: float = 0.3


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    color: RGB
    width: float = 0.3


@dataclass(frozen=True)
class Circle:
    cx: float
    cy: float
    radius: float
    fill: RGB


@dataclass(frozen=True)
class Triangle:
    points: Tuple[Tuple[float, float], Tuple[float, float], Tuple[float, float]]
    fill: RGB


@dataclass(frozen=True)
class Text:
    """Tekst; y = linia bazowa. align: left | center | right"""
    text: str
    x: float
    y: float
    font: str
    size: float
    color: RGB
    align: str = "left"


@dataclass(frozen=True)
class ImageBox:
    """
    Obraz w kwadracie/prostokacie.

    source: URL lub sciezka pliku; None = od razu placeholder.
    placeholder: wypelnienie gdy obrazu brak albo nie da sie go wczytac
                 (None = nic nie rysuj, np. logo).
    border: obramowanie rysowane tylko gdy obraz sie wczytal.
    """
    source: Optional[str]
    x: float
    y: float
    width: float
    height: float
    placeholder: Optional[RGB] = None
    border: Optional[RGB] = None


@dataclass
class PageSpec:
    """Jedna strona dokumentu: rodzaj + lista elementow w kolejnosci rysowania"""
    kind: str
    elements: List[object] = field(default_factory=list)
    title: str = ""

    def texts(self) -> List[str]:
        return [e.text for e in self.elements if isinstance(e, Text)]

    def of_type(self, cls) -> list:
        return [e for e in self.elements if isinstance(e, cls)]
