"""
Categories GUI Module

Komponenty:
- CategoryDialog: Dialog dodawania/edycji kategorii z wyborem koloru
"""

from categories.gui.category_dialog import CategoryDialog

__all__ = [
    'CategoryDialog',
]
