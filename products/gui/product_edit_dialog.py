#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ProductEditDialog - Dialog dodawania/edycji produktu

Funkcjonalności:
- Formularz: nazwa, kod, kategoria, cena, ilość w kartonie
- Wybór obrazu z dysku (wymagany dla nowego produktu)
- Podgląd wybranego / aktualnego obrazu
- Błędy walidacji wyświetlane przy polach
"""

import customtkinter as ctk
from tkinter import filedialog, messagebox
from typing import Optional, Dict, List
from pathlib import Path
from PIL import Image
import io
import threading
import logging

import requests

from products import ProductService
from products.utils import format_file_size
from core.exceptions import FormValidationError
from config.settings import (
    ALLOWED_IMAGE_EXTENSIONS,
    IMAGE_FETCH_TIMEOUT,
    PREVIEW_IMAGE_SIZE,
)

logger = logging.getLogger(__name__)

FORM_FIELDS = (
    ("name", "Product Name *"),
    ("product_code", "Product Code"),
    ("category_id", "Category *"),
    ("price", "Price (Rs) *"),
    ("qty_per_box", "Qty per Box *"),
    ("image", "Image *"),
)


class ProductEditDialog(ctk.CTkToplevel):
    """
    Dialog edycji produktu.

    Używany zarówno do tworzenia nowych produktów jak i edycji istniejących.
    Po udanym zapisie result = id produktu.
    """

    def __init__(
        self,
        parent,
        service: ProductService,
        categories: List[Dict],
        product: Dict = None
    ):
        """
        Args:
            parent: Okno nadrzędne
            service: Instancja ProductService
            categories: Kategorie do wyboru (w kolejności wyświetlania)
            product: Dane produktu do edycji (None = nowy produkt)
        """
        super().__init__(parent)

        self.service = service
        self.categories = categories
        self.product = product
        self.is_edit_mode = product is not None
        self.result = None

        # Wybrany obraz
        self.image_data: Optional[bytes] = None
        self.image_filename: Optional[str] = None
        self._preview_photo = None

        self._category_map = {c['name']: c['id'] for c in categories}

        title = f"Edit: {product.get('name', '')}" if self.is_edit_mode else "Add Product"
        self.title(title)
        self.geometry("720x640")
        self.minsize(640, 560)

        # Modal
        self.transient(parent)
        self.grab_set()

        self._setup_ui()

        if self.is_edit_mode:
            self._load_product_data()

    # =========================================================
    # UI SETUP
    # =========================================================

    def _setup_ui(self):
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)

        form = ctk.CTkScrollableFrame(self)
        form.grid(row=0, column=0, sticky="nsew", padx=10, pady=10)
        form.grid_columnconfigure(1, weight=1)

        self.error_labels: Dict[str, ctk.CTkLabel] = {}
        row = 0

        # Nazwa
        row = self._create_field(form, "name", row)
        self.name_entry = ctk.CTkEntry(form, width=400)
        self.name_entry.grid(row=row - 2, column=1, sticky="w", padx=5, pady=3)

        # Kod produktu
        row = self._create_field(form, "product_code", row)
        self.code_entry = ctk.CTkEntry(form, width=200, placeholder_text="e.g. 800A1ACE")
        self.code_entry.grid(row=row - 2, column=1, sticky="w", padx=5, pady=3)

        # Kategoria
        row = self._create_field(form, "category_id", row)
        names = list(self._category_map.keys())
        self.category_combo = ctk.CTkComboBox(form, values=names or [""], width=250, state="readonly")
        self.category_combo.grid(row=row - 2, column=1, sticky="w", padx=5, pady=3)
        if names:
            self.category_combo.set(names[0])

        # Cena
        row = self._create_field(form, "price", row)
        self.price_entry = ctk.CTkEntry(form, width=150, placeholder_text="620.00")
        self.price_entry.grid(row=row - 2, column=1, sticky="w", padx=5, pady=3)

        # Ilość w kartonie
        row = self._create_field(form, "qty_per_box", row)
        self.qty_entry = ctk.CTkEntry(form, width=150, placeholder_text="48 PCS")
        self.qty_entry.grid(row=row - 2, column=1, sticky="w", padx=5, pady=3)

        # Obraz
        row = self._create_field(form, "image", row)
        image_row = ctk.CTkFrame(form, fg_color="transparent")
        image_row.grid(row=row - 2, column=1, sticky="w", padx=5, pady=3)

        ctk.CTkButton(
            image_row,
            text="📁 Choose image...",
            width=140,
            command=self._on_choose_image
        ).pack(side="left")

        self.image_label = ctk.CTkLabel(image_row, text="No file selected", text_color="gray60")
        self.image_label.pack(side="left", padx=10)

        self.preview_label = ctk.CTkLabel(
            form, text="", width=PREVIEW_IMAGE_SIZE, height=PREVIEW_IMAGE_SIZE
        )
        self.preview_label.grid(row=row, column=1, sticky="w", padx=5, pady=10)

        # === PRZYCISKI ===
        buttons = ctk.CTkFrame(self, fg_color="transparent")
        buttons.grid(row=1, column=0, sticky="ew", padx=10, pady=(0, 10))

        ctk.CTkButton(
            buttons,
            text="Cancel",
            width=100,
            fg_color="gray",
            command=self._on_cancel
        ).pack(side="right", padx=5)

        self.save_btn = ctk.CTkButton(
            buttons,
            text="💾 Save",
            width=120,
            fg_color="green",
            command=self._on_save
        )
        self.save_btn.pack(side="right", padx=5)

        self.status_label = ctk.CTkLabel(buttons, text="")
        self.status_label.pack(side="left", padx=5)

        self.bind("<Escape>", lambda e: self._on_cancel())

    def _create_field(self, parent, field: str, row: int) -> int:
        """Etykieta pola + miejsce na komunikat błędu pod polem"""
        label_text = dict(FORM_FIELDS)[field]
        ctk.CTkLabel(parent, text=label_text, anchor="e", width=120).grid(
            row=row, column=0, sticky="e", padx=5, pady=3
        )
        error = ctk.CTkLabel(parent, text="", text_color="red", anchor="w")
        error.grid(row=row + 1, column=1, sticky="w", padx=5)
        self.error_labels[field] = error
        return row + 2

    def _load_product_data(self):
        """Wypełnij formularz danymi edytowanego produktu"""
        p = self.product
        self.name_entry.insert(0, p.get('name') or "")
        self.code_entry.insert(0, p.get('product_code') or "")
        self.price_entry.insert(0, f"{float(p.get('price') or 0):.2f}")
        self.qty_entry.insert(0, p.get('qty_per_box') or "")

        category_name = (p.get('category') or {}).get('name')
        if category_name in self._category_map:
            self.category_combo.set(category_name)

        self.image_label.configure(text="Current image (choose a file to replace)")
        if p.get('image_url'):
            self._load_remote_preview(p['image_url'])

    # =========================================================
    # OBRAZ
    # =========================================================

    def _on_choose_image(self):
        patterns = " ".join(f"*{ext}" for ext in sorted(ALLOWED_IMAGE_EXTENSIONS))
        filepath = filedialog.askopenfilename(
            parent=self,
            title="Choose product image",
            filetypes=[("Images", patterns), ("All files", "*.*")]
        )
        if not filepath:
            return

        try:
            data = Path(filepath).read_bytes()
        except OSError as e:
            messagebox.showerror("Error", f"Cannot read file:\n{e}", parent=self)
            return

        self.image_data = data
        self.image_filename = Path(filepath).name
        self.image_label.configure(
            text=f"✓ {self.image_filename} ({format_file_size(len(data))})",
            text_color=("gray10", "gray90")
        )
        self.error_labels['image'].configure(text="")
        self._set_preview(data)

    def _load_remote_preview(self, url: str):
        def load():
            try:
                response = requests.get(url, timeout=IMAGE_FETCH_TIMEOUT)
                response.raise_for_status()
            except requests.RequestException as e:
                logger.warning(f"[PREVIEW] ❌ Error loading preview: {e}")
                return
            if self.winfo_exists():
                self.after(0, lambda data=response.content: self._set_preview(data))

        threading.Thread(target=load, daemon=True).start()

    def _set_preview(self, image_data: bytes):
        """CTkImage tworzony w głównym wątku"""
        if not self.winfo_exists():
            return
        try:
            image = Image.open(io.BytesIO(image_data))
            image.load()
        except (OSError, ValueError) as e:
            self.preview_label.configure(image=None, text=f"Cannot preview image: {e}")
            return

        ratio = min(PREVIEW_IMAGE_SIZE / image.width, PREVIEW_IMAGE_SIZE / image.height)
        size = (max(1, int(image.width * ratio)), max(1, int(image.height * ratio)))
        self._preview_photo = ctk.CTkImage(light_image=image, dark_image=image, size=size)
        self.preview_label.configure(image=self._preview_photo, text="")

    # =========================================================
    # ZAPIS
    # =========================================================

    def _collect_form_data(self) -> Dict:
        return {
            'name': self.name_entry.get(),
            'product_code': self.code_entry.get(),
            'category_id': self._category_map.get(self.category_combo.get()),
            'price': self.price_entry.get(),
            'qty_per_box': self.qty_entry.get(),
        }

    def _show_errors(self, errors: Dict[str, str]):
        for field, label in self.error_labels.items():
            label.configure(text=errors.get(field, ""))

    def _on_save(self):
        data = self._collect_form_data()
        self._show_errors({})
        self.save_btn.configure(state="disabled")
        self.status_label.configure(text="Saving...")

        threading.Thread(target=self._save_thread, args=(data,), daemon=True).start()

    def _save_thread(self, data: Dict):
        try:
            success, result = self.service.save_product(
                data,
                image_data=self.image_data,
                image_filename=self.image_filename,
                product_id=self.product['id'] if self.is_edit_mode else None
            )
        except FormValidationError as e:
            self.after(0, lambda errors=e.errors: self._on_validation_error(errors))
            return

        if success:
            self.after(0, lambda: self._on_save_success(result))
        else:
            self.after(0, lambda: self._on_save_error(result))

    def _on_validation_error(self, errors: Dict[str, str]):
        self.save_btn.configure(state="normal")
        self.status_label.configure(text="")
        self._show_errors(errors)

    def _on_save_success(self, product_id: str):
        self.result = product_id
        message = "Product updated successfully!" if self.is_edit_mode else "Product added successfully!"
        messagebox.showinfo("Success", message, parent=self)
        self.destroy()

    def _on_save_error(self, message: str):
        self.save_btn.configure(state="normal")
        self.status_label.configure(text="")
        messagebox.showerror("Error", f"Failed to save product:\n{message}", parent=self)

    def _on_cancel(self):
        self.result = None
        self.destroy()
