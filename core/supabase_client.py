#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Centralny moduł połączenia z Supabase

Singleton pattern - jeden klient dla całej aplikacji.
Ten sam klient obsługuje bazę (products, categories), Storage
(bucket product-images) i Auth (sesja administratora).
"""

import logging
from typing import Optional
from supabase import create_client, Client

from config.settings import SUPABASE_URL, SUPABASE_KEY, CATEGORIES_TABLE
from core.exceptions import SupabaseConnectionError

logger = logging.getLogger(__name__)

# Globalny klient Supabase
_supabase_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """
    Zwraca singleton instancję klienta Supabase.

    Returns:
        Client: Klient Supabase (klucz z SUPABASE_KEY)

    Raises:
        SupabaseConnectionError: Jeśli brak konfiguracji
    """
    global _supabase_client

    if _supabase_client is None:
        if not SUPABASE_URL or not SUPABASE_KEY:
            raise SupabaseConnectionError(
                "Brak konfiguracji - ustaw SUPABASE_URL i SUPABASE_KEY w .env"
            )

        _supabase_client = create_client(SUPABASE_URL, SUPABASE_KEY)
        logger.info(f"[DB] Połączono z Supabase: {SUPABASE_URL}")

    return _supabase_client


def set_client(client: Client):
    """
    Podmień klienta (testy, alternatywne połączenie).
    """
    global _supabase_client
    _supabase_client = client


def reset_client():
    """
    Resetuj klienta (przydatne do testów).
    """
    global _supabase_client
    _supabase_client = None


def test_connection() -> bool:
    """
    Testuj połączenie z Supabase.

    Returns:
        True jeśli połączenie działa
    """
    try:
        client = get_supabase_client()
        client.table(CATEGORIES_TABLE).select("id").limit(1).execute()
        logger.info("[DB] Test połączenia zakończony sukcesem")
        return True

    except Exception as e:
        logger.error(f"[DB] Test połączenia nie powiódł się: {e}")
        return False


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    print("=" * 60)
    print("TEST POŁĄCZENIA Z SUPABASE")
    print("=" * 60)
    print("[OK]" if test_connection() else "[ERROR]")
