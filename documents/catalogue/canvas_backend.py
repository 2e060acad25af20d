"""
Catalogue PDF - reportlab Canvas Backend
========================================
Rysuje PageSpec na reportlab canvas.

Prymitywy maja wspolrzedne w mm od LEWEGO GORNEGO rogu,
reportlab liczy w punktach od LEWEGO DOLNEGO - konwersja tylko tutaj.
"""

import logging

from PIL import Image

from reportlab.lib.units import mm
from reportlab.pdfgen.canvas import Canvas

from . import constants as C
from .images import ImageLoader
from .primitives import (
    Circle, ImageBox, Line, PageSpec, Rect, RoundedRect, Text, Triangle
)

logger = logging.getLogger(__name__)


def _rgb(color):
    r, g, b = color
    return r / 255.0, g / 255.0, b / 255.0


class CanvasBackend:
    """
    Uzycie:
        backend = CanvasBackend(canvas, ImageLoader())
        for page in pages:
            backend.draw_page(page)
    """

    def __init__(self, canvas: Canvas, image_loader: ImageLoader,
                 page_height: float = C.PAGE_HEIGHT):
        self.canvas = canvas
        self.images = image_loader
        self.page_height = page_height
        self.placeholders_drawn = 0

    def draw_page(self, page: PageSpec):
        for element in page.elements:
            self.draw(element)
        self.canvas.showPage()

    def draw(self, element):
        handler = self._handlers.get(type(element))
        if handler is None:
            raise TypeError(f"Unsupported primitive: {type(element).__name__}")
        handler(self, element)

    # ============================================================
    # Geometria
    # ============================================================

    def _y(self, y: float) -> float:
        return (self.page_height - y) * mm

    def _box(self, x, y, width, height):
        """(x, y_dol, w, h) w punktach"""
        return x * mm, self._y(y + height), width * mm, height * mm

    def _set_paint(self, fill, stroke, line_width):
        if fill is not None:
            self.canvas.setFillColorRGB(*_rgb(fill))
        if stroke is not None:
            self.canvas.setStrokeColorRGB(*_rgb(stroke))
            self.canvas.setLineWidth(line_width * mm)
        return int(stroke is not None), int(fill is not None)

    # ============================================================
    # Prymitywy
    # ============================================================

    def _draw_rect(self, e: Rect):
        stroke, fill = self._set_paint(e.fill, e.stroke, e.line_width)
        self.canvas.rect(*self._box(e.x, e.y, e.width, e.height), stroke=stroke, fill=fill)

    def _draw_rounded_rect(self, e: RoundedRect):
        stroke, fill = self._set_paint(e.fill, e.stroke, e.line_width)
        self.canvas.roundRect(*self._box(e.x, e.y, e.width, e.height), e.radius * mm,
                              stroke=stroke, fill=fill)

    def _draw_line(self, e: Line):
        self.canvas.setStrokeColorRGB(*_rgb(e.color))
        self.canvas.setLineWidth(e.width * mm)
        self.canvas.line(e.x1 * mm, self._y(e.y1), e.x2 * mm, self._y(e.y2))

    def _draw_circle(self, e: Circle):
        self.canvas.setFillColorRGB(*_rgb(e.fill))
        self.canvas.circle(e.cx * mm, self._y(e.cy), e.radius * mm, stroke=0, fill=1)

    def _draw_triangle(self, e: Triangle):
        self.canvas.setFillColorRGB(*_rgb(e.fill))
        path = self.canvas.beginPath()
        (x0, y0), (x1, y1), (x2, y2) = e.points
        path.moveTo(x0 * mm, self._y(y0))
        path.lineTo(x1 * mm, self._y(y1))
        path.lineTo(x2 * mm, self._y(y2))
        path.close()
        self.canvas.drawPath(path, stroke=0, fill=1)

    def _draw_text(self, e: Text):
        self.canvas.setFont(e.font, e.size)
        self.canvas.setFillColorRGB(*_rgb(e.color))
        x, y = e.x * mm, self._y(e.y)
        if e.align == "center":
            self.canvas.drawCentredString(x, y, e.text)
        elif e.align == "right":
            self.canvas.drawRightString(x, y, e.text)
        else:
            self.canvas.drawString(x, y, e.text)

    def _draw_image(self, e: ImageBox):
        box = self._box(e.x, e.y, e.width, e.height)
        reader = self.images.load(e.source)

        if reader is not None:
            try:
                self.canvas.drawImage(reader, *box)
            except (OSError, ValueError, Image.DecompressionBombError) as exc:
                logger.warning(f"[PDF] Image draw failed, using placeholder: {e.source} ({exc})")
                reader = None

        if reader is None:
            if e.placeholder is not None:
                self.placeholders_drawn += 1
                self._draw_rect(Rect(e.x, e.y, e.width, e.height, fill=e.placeholder))
            return

        if e.border is not None:
            self._draw_rect(Rect(e.x, e.y, e.width, e.height, stroke=e.border, line_width=0.3))

    _handlers = {
        Rect: _draw_rect,
        RoundedRect: _draw_rounded_rect,
        Line: _draw_line,
        Circle: _draw_circle,
        Triangle: _draw_triangle,
        Text: _draw_text,
        ImageBox: _draw_image,
    }
