#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
CatalogueWindow - Katalog publiczny (tylko widoczne produkty)

Funkcjonalności:
- Szukanie po nazwie, filtr kategorii (ALL + nazwy kategorii)
- Paginacja po 50 produktów, "Showing X-Y of N"
- Produkty bieżącej strony pogrupowane wg kategorii
- Miniatury ładowane w tle
- Pobieranie katalogu PDF (pełny zbiór widocznych produktów)
"""

import customtkinter as ctk
from tkinter import messagebox, filedialog
from typing import Optional, Dict, List, Callable
from datetime import date
from PIL import Image
import io
import threading
import logging

import requests

from catalogue.grouping import group_by_category
from catalogue.listing import ALL_CATEGORIES, filter_public, paginate
from catalogue.view_state import CatalogueViewState
from categories.colors import FALLBACK_COLOR, tint
from documents.catalogue import CatalogueService, catalogue_filename
from products.service import ProductService
from config.settings import (
    BRAND_NAME,
    BRAND_TAGLINE,
    DEFAULT_WINDOW_SIZE,
    IMAGE_FETCH_TIMEOUT,
    PRODUCTS_PAGE_SIZE,
)

logger = logging.getLogger(__name__)

THUMBNAIL_SIZE = 110
CARDS_PER_ROW = 4


class CatalogueWindow(ctk.CTkToplevel):
    """
    Okno katalogu publicznego.
    """

    def __init__(
        self,
        parent,
        product_service: ProductService,
        catalogue_service: CatalogueService,
        categories: List[Dict] = None,
        on_admin_login: Callable = None
    ):
        super().__init__(parent)

        self.product_service = product_service
        self.catalogue_service = catalogue_service
        self.on_admin_login = on_admin_login

        self.view_state = CatalogueViewState()
        self.products: List[Dict] = []
        self.categories: List[Dict] = categories or []

        # Cache obrazów (URL -> bytes), CTkImage trzymane by GC ich nie zwolnił
        self._image_cache: Dict[str, bytes] = {}
        self._photos: List[ctk.CTkImage] = []

        self.title(f"{BRAND_NAME} - Product Catalogue")
        self.geometry(DEFAULT_WINDOW_SIZE)
        self.minsize(900, 600)

        self._setup_ui()
        self.after(100, self._load)

    # =========================================================
    # UI SETUP
    # =========================================================

    def _setup_ui(self):
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)

        header = ctk.CTkFrame(self)
        header.grid(row=0, column=0, sticky="ew", padx=10, pady=(10, 5))

        titles = ctk.CTkFrame(header, fg_color="transparent")
        titles.pack(side="left", padx=10, pady=5)
        ctk.CTkLabel(titles, text=BRAND_NAME, font=ctk.CTkFont(size=20, weight="bold")).pack(anchor="w")
        ctk.CTkLabel(titles, text=BRAND_TAGLINE, text_color="gray50").pack(anchor="w")

        if self.on_admin_login:
            ctk.CTkButton(header, text="🔒 Admin", width=90, fg_color="gray",
                          command=self.on_admin_login).pack(side="right", padx=10)

        self.pdf_btn = ctk.CTkButton(header, text="📄 Download PDF", width=140,
                                     command=self._on_download_pdf)
        self.pdf_btn.pack(side="right", padx=5)

        # Filtry
        toolbar = ctk.CTkFrame(self, fg_color="transparent")
        toolbar.grid(row=1, column=0, sticky="ew", padx=10, pady=5)

        self.search_var = ctk.StringVar()
        self.search_entry = ctk.CTkEntry(toolbar, textvariable=self.search_var,
                                         placeholder_text="Search products...", width=280)
        self.search_entry.pack(side="left", padx=5)
        self.search_var.trace_add("write", lambda *args: self._on_search())

        self.category_combo = ctk.CTkComboBox(toolbar, values=[ALL_CATEGORIES], width=200,
                                              state="readonly", command=self._on_category_change)
        self.category_combo.set(ALL_CATEGORIES)
        self.category_combo.pack(side="left", padx=10)

        self.info_label = ctk.CTkLabel(toolbar, text="Loading...")
        self.info_label.pack(side="right", padx=10)

        # Produkty
        self.content = ctk.CTkScrollableFrame(self)
        self.content.grid(row=2, column=0, sticky="nsew", padx=10, pady=5)
        self.content.grid_columnconfigure(tuple(range(CARDS_PER_ROW)), weight=1)

        # Paginacja
        pagination = ctk.CTkFrame(self, fg_color="transparent")
        pagination.grid(row=3, column=0, pady=(0, 10))

        self.prev_btn = ctk.CTkButton(pagination, text="← Previous", width=100,
                                      state="disabled", command=self._prev_page)
        self.prev_btn.pack(side="left", padx=5)
        self.page_label = ctk.CTkLabel(pagination, text="")
        self.page_label.pack(side="left", padx=10)
        self.next_btn = ctk.CTkButton(pagination, text="Next →", width=100,
                                      state="disabled", command=self._next_page)
        self.next_btn.pack(side="left", padx=5)

        self.bind("<F5>", lambda e: self._load())

    # =========================================================
    # DATA LOADING
    # =========================================================

    def _load(self):
        self.info_label.configure(text="Loading...")
        threading.Thread(target=self._load_thread, daemon=True).start()

    def _load_thread(self):
        try:
            categories = self.catalogue_service.categories.list_ordered()
            products = self.product_service.list_visible_products()
        except Exception as e:
            message = f"Failed to load catalogue: {e}"
            self.after(0, lambda: self._show_error(message))
            return
        self.after(0, lambda: self._on_loaded(categories, products))

    def _on_loaded(self, categories: List[Dict], products: List[Dict]):
        if not self.winfo_exists():
            return
        self.categories = categories
        self.products = products
        self.category_combo.configure(values=[ALL_CATEGORIES] + [c['name'] for c in categories])
        self._render()

    # =========================================================
    # RENDER
    # =========================================================

    def _render(self):
        for widget in self.content.winfo_children():
            widget.destroy()
        self._photos.clear()

        filtered = filter_public(self.products, self.view_state.search, self.view_state.category)
        page = paginate(filtered, self.view_state.page, PRODUCTS_PAGE_SIZE)
        self.view_state.go_to(page.number)

        self.info_label.configure(text=page.info_text)
        self.page_label.configure(text=f"Page {page.number} of {max(page.total_pages, 1)}")
        self.prev_btn.configure(state="normal" if page.has_previous else "disabled")
        self.next_btn.configure(state="normal" if page.has_next else "disabled")

        if not page.items:
            ctk.CTkLabel(self.content, text="No products found", text_color="gray50").grid(
                row=0, column=0, columnspan=CARDS_PER_ROW, pady=40
            )
            return

        row = 0
        for group in group_by_category(self.categories, page.items):
            self._create_group_header(group, row)
            row += 1
            for i, product in enumerate(group.products):
                card = self._create_card(product)
                card.grid(row=row + i // CARDS_PER_ROW, column=i % CARDS_PER_ROW,
                          sticky="nsew", padx=5, pady=5)
            row += (group.count + CARDS_PER_ROW - 1) // CARDS_PER_ROW

    def _create_group_header(self, group, row: int):
        color = group.color or FALLBACK_COLOR
        header = ctk.CTkFrame(self.content, fg_color=tint(color), border_color=color, border_width=2)
        header.grid(row=row, column=0, columnspan=CARDS_PER_ROW, sticky="ew", pady=(15, 5))
        ctk.CTkLabel(
            header,
            text=f"{group.name.upper()}  ({group.count})",
            text_color=color,
            font=ctk.CTkFont(size=15, weight="bold")
        ).pack(side="left", padx=10, pady=5)

    def _create_card(self, product: Dict) -> ctk.CTkFrame:
        card = ctk.CTkFrame(self.content)

        image_label = ctk.CTkLabel(card, text="", width=THUMBNAIL_SIZE, height=THUMBNAIL_SIZE)
        image_label.pack(pady=(8, 4))
        if product.get('image_url'):
            self._load_thumbnail_async(product['image_url'], image_label)

        ctk.CTkLabel(card, text=product.get('name', ""), wraplength=220,
                     font=ctk.CTkFont(weight="bold")).pack(padx=8)
        if product.get('product_code'):
            ctk.CTkLabel(card, text=f"Code: {product['product_code']}", text_color="gray50").pack()
        ctk.CTkLabel(card, text=f"Rs {float(product.get('price') or 0):.2f}",
                     text_color="#EF4444", font=ctk.CTkFont(size=14, weight="bold")).pack()
        ctk.CTkLabel(card, text=f"Box: {product.get('qty_per_box') or '-'}").pack(pady=(0, 8))
        return card

    def _load_thumbnail_async(self, url: str, label: ctk.CTkLabel):
        if url in self._image_cache:
            self._set_thumbnail(label, self._image_cache[url])
            return

        def load():
            try:
                response = requests.get(url, timeout=IMAGE_FETCH_TIMEOUT)
                response.raise_for_status()
            except requests.RequestException as e:
                logger.warning(f"[CATALOGUE] ❌ Image not loaded: {url} ({e})")
                return
            self._image_cache[url] = response.content
            if self.winfo_exists():
                self.after(0, lambda data=response.content: self._set_thumbnail(label, data))

        threading.Thread(target=load, daemon=True).start()

    def _set_thumbnail(self, label: ctk.CTkLabel, data: bytes):
        if not label.winfo_exists():
            return
        try:
            image = Image.open(io.BytesIO(data))
            image.load()
        except (OSError, ValueError):
            label.configure(text="No image")
            return

        ratio = min(THUMBNAIL_SIZE / image.width, THUMBNAIL_SIZE / image.height)
        size = (max(1, int(image.width * ratio)), max(1, int(image.height * ratio)))
        photo = ctk.CTkImage(light_image=image, dark_image=image, size=size)
        self._photos.append(photo)
        label.configure(image=photo, text="")

    # =========================================================
    # FILTRY / PAGINACJA
    # =========================================================

    def _on_search(self):
        if self.view_state.set_search(self.search_var.get().strip()):
            self._render()

    def _on_category_change(self, value: Optional[str] = None):
        if self.view_state.set_category(value or self.category_combo.get()):
            self._render()

    def _prev_page(self):
        self.view_state.go_to(self.view_state.page - 1)
        self._render()

    def _next_page(self):
        self.view_state.go_to(self.view_state.page + 1)
        self._render()

    # =========================================================
    # PDF
    # =========================================================

    def _on_download_pdf(self):
        path = filedialog.asksaveasfilename(
            parent=self,
            initialfile=catalogue_filename(date.today()),
            defaultextension=".pdf",
            filetypes=[("PDF", "*.pdf")]
        )
        if not path:
            return

        self.pdf_btn.configure(state="disabled", text="Generating...")

        def export():
            success, result = self.catalogue_service.export_to_file(path)
            self.after(0, lambda: self._on_pdf_done(success, result))

        threading.Thread(target=export, daemon=True).start()

    def _on_pdf_done(self, success: bool, result: str):
        if not self.winfo_exists():
            return
        self.pdf_btn.configure(state="normal", text="📄 Download PDF")
        if success:
            messagebox.showinfo("Success", f"Catalogue saved:\n{result}", parent=self)
        else:
            messagebox.showerror("Error", result, parent=self)

    def _show_error(self, message: str):
        if not self.winfo_exists():
            return
        self.info_label.configure(text=f"❌ {message}")
        messagebox.showerror("Error", message, parent=self)
