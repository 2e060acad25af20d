#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
R&T Marketing - Product Catalogue
Główny plik uruchomieniowy

Uruchomienie:
    python main.py                      # Widok startowy wg sesji (admin / katalog)
    python main.py --admin              # Panel administratora (logowanie jeśli trzeba)
    python main.py --catalogue          # Katalog publiczny
    python main.py --export-pdf DIR     # Wygeneruj katalog PDF bez GUI
    python main.py --test               # Test połączenia
"""

import sys
import argparse
import logging
from pathlib import Path

import customtkinter as ctk

from config.settings import CTK_APPEARANCE_MODE, CTK_COLOR_THEME, validate_config

# Konfiguracja logowania
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def setup_ctk():
    """Konfiguracja CustomTkinter"""
    ctk.set_appearance_mode(CTK_APPEARANCE_MODE)
    ctk.set_default_color_theme(CTK_COLOR_THEME)


class CatalogueApp:
    """
    Przełączanie między katalogiem publicznym a panelem admina
    na jednym, ukrytym oknie głównym.
    """

    def __init__(self):
        from auth import create_session_service
        from categories import create_category_service
        from core import get_supabase_client
        from documents.catalogue import create_catalogue_service
        from products import create_product_service

        client = get_supabase_client()
        self.session = create_session_service(client)
        self.product_service = create_product_service(client, session=self.session)
        self.category_service = create_category_service(client)
        self.catalogue_service = create_catalogue_service(client)

        self.root = ctk.CTk()
        self.root.withdraw()
        self.window = None

    def run(self, route) -> int:
        from auth import LandingRoute

        if route == LandingRoute.ADMIN:
            self.show_admin()
        else:
            self.show_catalogue()
        self.root.mainloop()
        return 0

    def _replace_window(self, window):
        if self.window is not None and self.window.winfo_exists():
            self.window.destroy()
        self.window = window
        window.protocol("WM_DELETE_WINDOW", self.quit)

    def show_catalogue(self):
        from catalogue.gui import CatalogueWindow

        self._replace_window(CatalogueWindow(
            self.root,
            product_service=self.product_service,
            catalogue_service=self.catalogue_service,
            on_admin_login=self.show_admin
        ))

    def show_admin(self):
        if not self.session.is_authenticated() and not self._login():
            if self.window is None:
                self.show_catalogue()
            return

        from products.gui import AdminDashboard

        self._replace_window(AdminDashboard(
            self.root,
            product_service=self.product_service,
            category_service=self.category_service,
            catalogue_service=self.catalogue_service,
            session=self.session,
            on_sign_out=self.show_catalogue
        ))

    def _login(self) -> bool:
        from auth.gui import LoginDialog

        dialog = LoginDialog(self.window or self.root, self.session)
        self.root.wait_window(dialog)
        return dialog.result is not None

    def quit(self):
        if self.window is not None and self.window.winfo_exists():
            self.window.destroy()
        self.root.quit()


def run_tests():
    """Test połączenia z Supabase"""
    from core.supabase_client import test_connection
    return 0 if test_connection() else 1


def run_export(target: str) -> int:
    """Wygeneruj katalog PDF bez GUI"""
    from documents.catalogue import create_catalogue_service

    service = create_catalogue_service()
    success, result = service.export_to_file(Path(target))
    if not success:
        print(f"❌ {result}")
        return 1

    print(f"✓ Catalogue saved: {result}")
    return 0


def run_app(route=None) -> int:
    """Uruchom GUI (route=None → decyzja na podstawie sesji)"""
    setup_ctk()
    app = CatalogueApp()
    if route is None:
        route = app.session.landing_route()
    logger.info(f"[APP] Landing route: {route.value}")
    return app.run(route)


def main():
    """Główna funkcja"""
    parser = argparse.ArgumentParser(description="R&T Marketing Product Catalogue")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument('--admin', action='store_true', help='Uruchom panel administratora')
    mode.add_argument('--catalogue', action='store_true', help='Uruchom katalog publiczny')
    mode.add_argument('--export-pdf', metavar='PATH', help='Zapisz katalog PDF (plik lub katalog)')
    mode.add_argument('--test', action='store_true', help='Test połączenia z Supabase')
    parser.add_argument('--debug', action='store_true', help='Tryb debug (więcej logów)')

    args = parser.parse_args()

    # Tryb debug
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    # Walidacja konfiguracji
    try:
        validate_config()
        logger.info("✓ Konfiguracja OK")
    except ValueError as e:
        print(f"❌ Błąd konfiguracji: {e}")
        print("\nUstaw SUPABASE_URL i SUPABASE_KEY w pliku .env")
        return 1

    from core.events import setup_event_logging
    setup_event_logging()

    if args.test:
        return run_tests()

    if args.export_pdf:
        return run_export(args.export_pdf)

    from auth import LandingRoute

    if args.admin:
        return run_app(LandingRoute.ADMIN)

    if args.catalogue:
        return run_app(LandingRoute.CATALOGUE)

    # Domyślnie - widok wg sesji
    return run_app()


if __name__ == "__main__":
    sys.exit(main())
