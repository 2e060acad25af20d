#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
AdminDashboard - Panel administratora katalogu

Funkcjonalności:
- Zakładka Products: lista (TreeView), szukanie, filtr kategorii,
  liczniki widocznych/ukrytych, dodawanie, edycja, ukrywanie, usuwanie
- Zakładka Categories: lista wg display_order z liczbą produktów,
  dodawanie, edycja, usuwanie (zablokowane gdy kategoria ma produkty)
- Wskaźnik zużycia Storage odświeżany po każdej mutacji produktu
- Pobieranie katalogu PDF, wylogowanie
"""

import customtkinter as ctk
from tkinter import ttk, messagebox, filedialog
from typing import Optional, Dict, List, Callable
from datetime import date
import threading
import logging

from auth.session import SessionService
from catalogue.grouping import count_by_category_id
from catalogue.listing import (
    ALL_CATEGORY_IDS,
    apply_visibility,
    filter_admin,
    visibility_counts,
)
from catalogue.view_state import AdminViewState
from categories.service import CategoryService
from core.events import Event, PRODUCT_MUTATION_EVENTS, get_event_bus
from documents.catalogue import CatalogueService, catalogue_filename
from products.service import ProductService, StorageUsage
from config.settings import DEFAULT_WINDOW_SIZE

logger = logging.getLogger(__name__)

ALL_CATEGORIES_LABEL = "All categories"


class AdminDashboard(ctk.CTkToplevel):
    """
    Główne okno panelu administratora.
    """

    def __init__(
        self,
        parent,
        product_service: ProductService,
        category_service: CategoryService,
        catalogue_service: CatalogueService,
        session: SessionService,
        on_sign_out: Callable = None
    ):
        """
        Args:
            parent: Okno nadrzędne
            product_service: Serwis produktów
            category_service: Serwis kategorii
            catalogue_service: Serwis katalogu PDF
            session: Sesja administratora
            on_sign_out: Callback po wylogowaniu
        """
        super().__init__(parent)

        self.product_service = product_service
        self.category_service = category_service
        self.catalogue_service = catalogue_service
        self.session = session
        self.on_sign_out = on_sign_out

        # Stan
        self.view_state = AdminViewState()
        self.products: List[Dict] = []
        self.categories: List[Dict] = []
        self.is_loading = False

        self.title("R&T Marketing - Admin Dashboard")
        self.geometry(DEFAULT_WINDOW_SIZE)
        self.minsize(1000, 600)

        self._setup_ui()
        self._setup_bindings()

        # Wskaźnik Storage przeliczany po każdej mutacji produktu
        self.event_bus = get_event_bus()
        self.event_bus.subscribe_many(PRODUCT_MUTATION_EVENTS, self._on_product_mutation)
        self.protocol("WM_DELETE_WINDOW", self._on_close)

        self.after(100, self._refresh)

    # =========================================================
    # UI SETUP
    # =========================================================

    def _setup_ui(self):
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        self._create_header()

        self.tabs = ctk.CTkTabview(self, command=self._on_tab_change)
        self.tabs.grid(row=1, column=0, sticky="nsew", padx=10, pady=(0, 10))

        self._create_products_tab(self.tabs.add("Products"))
        self._create_categories_tab(self.tabs.add("Categories"))

    def _create_header(self):
        header = ctk.CTkFrame(self)
        header.grid(row=0, column=0, sticky="ew", padx=10, pady=10)

        ctk.CTkLabel(
            header,
            text="R&T MARKETING · Admin",
            font=ctk.CTkFont(size=18, weight="bold")
        ).pack(side="left", padx=10)

        ctk.CTkButton(
            header,
            text="Sign Out",
            width=90,
            fg_color="gray",
            command=self._on_sign_out
        ).pack(side="right", padx=10)

        self.pdf_btn = ctk.CTkButton(
            header,
            text="📄 Download PDF",
            width=130,
            command=self._on_download_pdf
        )
        self.pdf_btn.pack(side="right", padx=5)

        # Storage
        storage_frame = ctk.CTkFrame(header, fg_color="transparent")
        storage_frame.pack(side="right", padx=20)

        self.storage_label = ctk.CTkLabel(storage_frame, text="Storage: -")
        self.storage_label.pack(anchor="e")

        self.storage_bar = ctk.CTkProgressBar(storage_frame, width=200)
        self.storage_bar.pack(anchor="e", pady=2)
        self.storage_bar.set(0)

    def _create_products_tab(self, tab):
        tab.grid_columnconfigure(0, weight=1)
        tab.grid_rowconfigure(1, weight=1)

        toolbar = ctk.CTkFrame(tab)
        toolbar.grid(row=0, column=0, sticky="ew", pady=(0, 5))

        ctk.CTkLabel(toolbar, text="🔍").pack(side="left", padx=(10, 5))
        self.search_var = ctk.StringVar()
        self.search_entry = ctk.CTkEntry(
            toolbar,
            textvariable=self.search_var,
            placeholder_text="Search name, code or category...",
            width=260
        )
        self.search_entry.pack(side="left", padx=5)

        self.category_var = ctk.StringVar(value=ALL_CATEGORIES_LABEL)
        self.category_combo = ctk.CTkComboBox(
            toolbar,
            variable=self.category_var,
            values=[ALL_CATEGORIES_LABEL],
            width=180,
            state="readonly",
            command=self._on_filter_change
        )
        self.category_combo.pack(side="left", padx=10)

        self.counts_label = ctk.CTkLabel(toolbar, text="")
        self.counts_label.pack(side="left", padx=10)

        ctk.CTkButton(
            toolbar,
            text="➕ Add Product",
            width=130,
            fg_color="green",
            command=self._on_add_product
        ).pack(side="right", padx=10)

        # Lista
        list_frame = ctk.CTkFrame(tab)
        list_frame.grid(row=1, column=0, sticky="nsew")
        list_frame.grid_rowconfigure(0, weight=1)
        list_frame.grid_columnconfigure(0, weight=1)

        columns = ("code", "name", "category", "price", "qty", "status")
        self.product_tree = ttk.Treeview(list_frame, columns=columns, show="headings", selectmode="browse")

        for column, text, width, anchor in (
            ("code", "Code", 110, "w"),
            ("name", "Name", 320, "w"),
            ("category", "Category", 160, "w"),
            ("price", "Price", 100, "e"),
            ("qty", "Qty / Box", 110, "center"),
            ("status", "Status", 90, "center"),
        ):
            self.product_tree.heading(column, text=text)
            self.product_tree.column(column, width=width, anchor=anchor)

        self.product_tree.tag_configure("hidden", foreground="gray55")

        vsb = ttk.Scrollbar(list_frame, orient="vertical", command=self.product_tree.yview)
        self.product_tree.configure(yscrollcommand=vsb.set)
        self.product_tree.grid(row=0, column=0, sticky="nsew")
        vsb.grid(row=0, column=1, sticky="ns")

        self.product_tree.bind("<<TreeviewSelect>>", lambda e: self._update_product_actions())
        self.product_tree.bind("<Double-1>", lambda e: self._on_edit_product())

        # Akcje
        actions = ctk.CTkFrame(tab, fg_color="transparent")
        actions.grid(row=2, column=0, sticky="ew", pady=(5, 0))

        self.edit_btn = ctk.CTkButton(actions, text="✏️ Edit", width=100, state="disabled",
                                      command=self._on_edit_product)
        self.edit_btn.pack(side="left", padx=5)

        self.visibility_btn = ctk.CTkButton(actions, text="👁 Hide", width=110, state="disabled",
                                            command=self._on_toggle_visibility)
        self.visibility_btn.pack(side="left", padx=5)

        self.delete_btn = ctk.CTkButton(actions, text="🗑️ Delete", width=100, fg_color="red",
                                        state="disabled", command=self._on_delete_product)
        self.delete_btn.pack(side="left", padx=5)

        self.info_label = ctk.CTkLabel(actions, text="Loading...")
        self.info_label.pack(side="right", padx=10)

    def _create_categories_tab(self, tab):
        tab.grid_columnconfigure(0, weight=1)
        tab.grid_rowconfigure(1, weight=1)

        toolbar = ctk.CTkFrame(tab, fg_color="transparent")
        toolbar.grid(row=0, column=0, sticky="ew", pady=(0, 5))

        ctk.CTkButton(toolbar, text="➕ Add Category", width=140, fg_color="green",
                      command=self._on_add_category).pack(side="left", padx=5)
        self.category_edit_btn = ctk.CTkButton(toolbar, text="✏️ Edit", width=100,
                                               command=self._on_edit_category)
        self.category_edit_btn.pack(side="left", padx=5)
        self.category_delete_btn = ctk.CTkButton(toolbar, text="🗑️ Delete", width=100, fg_color="red",
                                                 command=self._on_delete_category)
        self.category_delete_btn.pack(side="left", padx=5)

        columns = ("order", "name", "color", "products")
        self.category_tree = ttk.Treeview(tab, columns=columns, show="headings", selectmode="browse")
        for column, text, width in (
            ("order", "#", 50),
            ("name", "Name", 300),
            ("color", "Color", 120),
            ("products", "Products", 100),
        ):
            self.category_tree.heading(column, text=text)
            self.category_tree.column(column, width=width, anchor="w")

        self.category_tree.grid(row=1, column=0, sticky="nsew")
        self.category_tree.bind("<Double-1>", lambda e: self._on_edit_category())

    def _setup_bindings(self):
        self.search_var.trace_add("write", lambda *args: self._on_search())
        self.bind("<F5>", lambda e: self._refresh())

    # =========================================================
    # DATA LOADING
    # =========================================================

    def _refresh(self):
        """Pobierz produkty, kategorie i zużycie Storage (w wątku)"""
        if self.is_loading:
            return
        self.is_loading = True
        self.info_label.configure(text="Loading...")
        threading.Thread(target=self._load_thread, daemon=True).start()

    def _load_thread(self):
        try:
            categories = self.category_service.list_categories()
            products = self.product_service.list_products()
            usage = self.product_service.get_storage_usage()
        except Exception as e:
            message = f"Failed to load data: {e}"
            self.after(0, lambda: self._show_error(message))
            return
        self.after(0, lambda: self._on_loaded(categories, products, usage))

    def _on_loaded(self, categories: List[Dict], products: List[Dict], usage: StorageUsage):
        self.is_loading = False
        if not self.winfo_exists():
            return
        self.categories = categories
        self.products = products

        self.category_combo.configure(values=[ALL_CATEGORIES_LABEL] + [c['name'] for c in categories])
        self._render_products()
        self._render_categories()
        self._set_storage_usage(usage)

    def _set_storage_usage(self, usage: StorageUsage):
        self.storage_bar.set(usage.percent / 100)
        self.storage_bar.configure(progress_color="red" if usage.is_warning else "#3B8ED0")
        prefix = "⚠️ " if usage.is_warning else ""
        self.storage_label.configure(text=f"{prefix}Storage: {usage.label} ({usage.percent:.1f}%)")

    def _on_product_mutation(self, event: Event):
        """Handler EventBus - może przyjść z wątku roboczego"""
        def reload_usage():
            try:
                usage = self.product_service.get_storage_usage()
            except Exception as e:
                logger.warning(f"[GUI] Storage usage refresh failed: {e}")
                return
            if self.winfo_exists():
                self.after(0, lambda: self._set_storage_usage(usage))

        threading.Thread(target=reload_usage, daemon=True).start()

    # =========================================================
    # PRODUCTS
    # =========================================================

    def _visible_products(self) -> List[Dict]:
        return filter_admin(self.products, self.view_state.search, self.view_state.category_id)

    def _render_products(self):
        self.product_tree.delete(*self.product_tree.get_children())

        rows = self._visible_products()
        for product in rows:
            hidden = bool(product.get('is_hidden'))
            self.product_tree.insert(
                "", "end",
                iid=product['id'],
                values=(
                    product.get('product_code') or "-",
                    product.get('name', ""),
                    (product.get('category') or {}).get('name', "-"),
                    f"Rs {float(product.get('price') or 0):.2f}",
                    product.get('qty_per_box') or "-",
                    "Hidden" if hidden else "Visible",
                ),
                tags=("hidden",) if hidden else ()
            )

        visible, hidden = visibility_counts(self.products)
        self.counts_label.configure(text=f"Visible: {visible} | Hidden: {hidden}")
        self.info_label.configure(text=f"{len(rows)} of {len(self.products)} products")
        self._update_product_actions()

    def _selected_product(self) -> Optional[Dict]:
        selection = self.product_tree.selection()
        if not selection:
            return None
        return next((p for p in self.products if p['id'] == selection[0]), None)

    def _update_product_actions(self):
        product = self._selected_product()
        state = "normal" if product else "disabled"
        for button in (self.edit_btn, self.visibility_btn, self.delete_btn):
            button.configure(state=state)
        if product:
            self.visibility_btn.configure(text="👁 Show" if product.get('is_hidden') else "👁 Hide")

    def _on_search(self):
        if self.view_state.set_search(self.search_var.get()):
            self._render_products()

    def _on_filter_change(self, value=None):
        name = self.category_var.get()
        category_id = next((c['id'] for c in self.categories if c['name'] == name), ALL_CATEGORY_IDS)
        if self.view_state.set_category(category_id):
            self._render_products()

    def _on_tab_change(self):
        self.view_state.active_tab = self.tabs.get().lower()

    def _on_add_product(self):
        if not self.categories:
            messagebox.showwarning("No categories", "Add a category before adding products.", parent=self)
            return
        self._open_product_dialog(None)

    def _on_edit_product(self):
        product = self._selected_product()
        if product:
            self._open_product_dialog(product)

    def _open_product_dialog(self, product: Optional[Dict]):
        from products.gui.product_edit_dialog import ProductEditDialog

        dialog = ProductEditDialog(
            self,
            service=self.product_service,
            categories=self.categories,
            product=product
        )
        self.wait_window(dialog)

        if dialog.result:
            self._refresh()

    def _on_toggle_visibility(self):
        product = self._selected_product()
        if not product:
            return

        product_id = product['id']
        currently_hidden = bool(product.get('is_hidden'))
        self.visibility_btn.configure(state="disabled")

        def toggle():
            success, message = self.product_service.toggle_visibility(product_id, currently_hidden)
            self.after(0, lambda: self._on_visibility_result(product_id, not currently_hidden, success, message))

        threading.Thread(target=toggle, daemon=True).start()

    def _on_visibility_result(self, product_id: str, hidden: bool, success: bool, message: str):
        if not self.winfo_exists():
            return
        if not success:
            self._update_product_actions()
            messagebox.showerror("Error", message, parent=self)
            return

        self.products = apply_visibility(self.products, product_id, hidden)
        self._render_products()
        if self.product_tree.exists(product_id):
            self.product_tree.selection_set(product_id)
        self.info_label.configure(text=f"✅ {message}")

    def _on_delete_product(self):
        product = self._selected_product()
        if not product:
            return

        if not messagebox.askyesno(
            "Confirm delete",
            f"Are you sure you want to delete:\n\n{product.get('name', '')}?",
            parent=self
        ):
            return

        success, message = self.product_service.delete_product(product)
        if success:
            messagebox.showinfo("Success", message, parent=self)
            self._refresh()
        else:
            messagebox.showerror("Error", f"Failed to delete product:\n{message}", parent=self)

    # =========================================================
    # CATEGORIES
    # =========================================================

    def _render_categories(self):
        self.category_tree.delete(*self.category_tree.get_children())
        counts = count_by_category_id(self.products)
        for category in self.categories:
            self.category_tree.insert(
                "", "end",
                iid=category['id'],
                values=(
                    category.get('display_order', ""),
                    category.get('name', ""),
                    category.get('color') or "-",
                    counts.get(category['id'], 0),
                )
            )

    def _selected_category(self) -> Optional[Dict]:
        selection = self.category_tree.selection()
        if not selection:
            return None
        return next((c for c in self.categories if c['id'] == selection[0]), None)

    def _on_add_category(self):
        self._open_category_dialog(None)

    def _on_edit_category(self):
        category = self._selected_category()
        if category:
            self._open_category_dialog(category)

    def _open_category_dialog(self, category: Optional[Dict]):
        from categories.gui.category_dialog import CategoryDialog

        dialog = CategoryDialog(self, service=self.category_service, category=category)
        self.wait_window(dialog)

        if dialog.result:
            self._refresh()

    def _on_delete_category(self):
        category = self._selected_category()
        if not category:
            return

        if not messagebox.askyesno(
            "Confirm delete",
            f"Delete category \"{category.get('name', '')}\"?",
            parent=self
        ):
            return

        success, message = self.category_service.delete_category(category['id'])
        if success:
            self._refresh()
        else:
            messagebox.showerror("Error", message, parent=self)

    # =========================================================
    # PDF / SESJA
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

    def _on_sign_out(self):
        self.session.sign_out()
        self._on_close()
        if self.on_sign_out:
            self.on_sign_out()

    def _on_close(self):
        for event_type in PRODUCT_MUTATION_EVENTS:
            self.event_bus.unsubscribe(event_type, self._on_product_mutation)
        self.destroy()

    def _show_error(self, message: str):
        self.is_loading = False
        if not self.winfo_exists():
            return
        self.info_label.configure(text=f"❌ {message}")
        messagebox.showerror("Error", message, parent=self)
