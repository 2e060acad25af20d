#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
CategoryDialog - Dialog dodawania/edycji kategorii

Nazwa + wybór koloru z palety (siatka próbek).
"""

import customtkinter as ctk
from tkinter import messagebox
from typing import Dict, Optional

from categories.colors import COLOR_PALETTE, DEFAULT_COLOR, color_name
from categories.service import CategoryService
from core.exceptions import FormValidationError

SWATCHES_PER_ROW = 11


class CategoryDialog(ctk.CTkToplevel):
    """
    Dialog kategorii. Po udanym zapisie result = id kategorii.
    """

    def __init__(self, parent, service: CategoryService, category: Dict = None):
        super().__init__(parent)

        self.service = service
        self.category = category
        self.result: Optional[str] = None

        self.selected_color = (category or {}).get("color") or DEFAULT_COLOR
        self._swatches: Dict[str, ctk.CTkButton] = {}

        self.title(f"Edit: {category['name']}" if category else "Add Category")
        self.geometry("520x320")
        self.resizable(False, False)

        self.transient(parent)
        self.grab_set()

        self._setup_ui()

    def _setup_ui(self):
        self.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(self, text="Category Name *", anchor="w").grid(
            row=0, column=0, sticky="w", padx=15, pady=(15, 3)
        )
        self.name_entry = ctk.CTkEntry(self, width=300)
        self.name_entry.grid(row=1, column=0, sticky="w", padx=15)
        if self.category:
            self.name_entry.insert(0, self.category.get("name") or "")

        self.name_error = ctk.CTkLabel(self, text="", text_color="red", anchor="w")
        self.name_error.grid(row=2, column=0, sticky="w", padx=15)

        # Paleta
        self.color_label = ctk.CTkLabel(self, anchor="w")
        self.color_label.grid(row=3, column=0, sticky="w", padx=15, pady=(5, 3))

        grid = ctk.CTkFrame(self, fg_color="transparent")
        grid.grid(row=4, column=0, sticky="w", padx=15)

        for i, (name, hex_value) in enumerate(COLOR_PALETTE):
            swatch = ctk.CTkButton(
                grid,
                text="",
                width=32,
                height=32,
                corner_radius=16,
                fg_color=hex_value,
                hover_color=hex_value,
                border_width=0,
                command=lambda h=hex_value: self._select_color(h)
            )
            swatch.grid(row=i // SWATCHES_PER_ROW, column=i % SWATCHES_PER_ROW, padx=3, pady=3)
            self._swatches[hex_value] = swatch

        self._select_color(self.selected_color)

        buttons = ctk.CTkFrame(self, fg_color="transparent")
        buttons.grid(row=5, column=0, sticky="e", padx=15, pady=15)

        ctk.CTkButton(buttons, text="Cancel", width=90, fg_color="gray",
                      command=self.destroy).pack(side="right", padx=5)
        self.save_btn = ctk.CTkButton(buttons, text="💾 Save", width=110, fg_color="green",
                                      command=self._on_save)
        self.save_btn.pack(side="right", padx=5)

        self.name_entry.bind("<Return>", lambda e: self._on_save())
        self.bind("<Escape>", lambda e: self.destroy())

    def _select_color(self, hex_value: str):
        self.selected_color = hex_value
        for value, swatch in self._swatches.items():
            swatch.configure(border_width=3 if value == hex_value.upper() else 0,
                             border_color="black")
        name = color_name(hex_value) or "Custom"
        self.color_label.configure(text=f"Color: {name} ({hex_value})")

    def _on_save(self):
        self.name_error.configure(text="")
        data = {"name": self.name_entry.get(), "color": self.selected_color}

        try:
            success, result = self.service.save_category(data, existing=self.category)
        except FormValidationError as e:
            self.name_error.configure(text=e.errors.get("name", ""))
            return

        if not success:
            messagebox.showerror("Error", f"Failed to save category:\n{result}", parent=self)
            return

        self.result = result
        self.destroy()
