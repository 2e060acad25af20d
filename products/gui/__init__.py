#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Products GUI Module - Panel administratora

Komponenty:
- AdminDashboard: Zakładki produktów i kategorii, wskaźnik Storage, PDF
- ProductEditDialog: Dialog edycji/dodawania produktu

Użycie:
    from products.gui import AdminDashboard

    window = AdminDashboard(root, product_service, category_service,
                            catalogue_service, session)
"""

from products.gui.admin_dashboard import AdminDashboard
from products.gui.product_edit_dialog import ProductEditDialog

__all__ = [
    'AdminDashboard',
    'ProductEditDialog',
]
