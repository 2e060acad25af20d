"""
Testy ładowania danych w oknach GUI - wątek roboczy bez pętli Tk.
"""

import logging
from types import SimpleNamespace

import pytest

pytest.importorskip("customtkinter")

from catalogue.gui import catalogue_window
from products.gui import admin_dashboard


class FakeLabel:
    def __init__(self):
        self.text = None

    def configure(self, text=None, **kwargs):
        self.text = text


class OfflineService:
    """Każdy odczyt z bazy kończy się błędem sieci"""

    @property
    def categories(self):
        return self

    def list_categories(self):
        raise ConnectionError("network down")

    def list_ordered(self):
        raise ConnectionError("network down")

    def list_products(self):
        raise ConnectionError("network down")

    def list_visible_products(self):
        raise ConnectionError("network down")

    def get_storage_usage(self):
        raise ConnectionError("network down")


def bare_window(window_class, **attrs):
    """Okno bez __init__ - callbacki after() zbierane do listy"""
    window = window_class.__new__(window_class)
    scheduled = []
    window.after = lambda delay, callback: scheduled.append(callback)
    window.winfo_exists = lambda: True
    window.info_label = FakeLabel()
    for name, value in attrs.items():
        setattr(window, name, value)
    return window, scheduled


@pytest.fixture
def shown_errors(monkeypatch):
    errors = []
    monkeypatch.setattr(
        admin_dashboard.messagebox, "showerror",
        lambda title, message, **kwargs: errors.append(message)
    )
    return errors


def test_admin_load_failure_reports_error_and_unlocks_reload(shown_errors):
    service = OfflineService()
    dashboard, scheduled = bare_window(
        admin_dashboard.AdminDashboard,
        category_service=service,
        product_service=service,
        is_loading=True,
    )

    dashboard._load_thread()
    for callback in scheduled:
        callback()

    assert shown_errors == ["Failed to load data: network down"]
    assert dashboard.info_label.text == "❌ Failed to load data: network down"
    assert dashboard.is_loading is False


def test_catalogue_load_failure_reports_error(shown_errors):
    service = OfflineService()
    window, scheduled = bare_window(
        catalogue_window.CatalogueWindow,
        catalogue_service=service,
        product_service=service,
    )

    window._load_thread()
    for callback in scheduled:
        callback()

    assert shown_errors == ["Failed to load catalogue: network down"]
    assert window.info_label.text == "❌ Failed to load catalogue: network down"


class InlineThread:
    def __init__(self, target, daemon=None):
        self.target = target

    def start(self):
        self.target()


def test_storage_refresh_failure_is_logged(monkeypatch, caplog):
    monkeypatch.setattr(admin_dashboard, "threading", SimpleNamespace(Thread=InlineThread))
    dashboard, scheduled = bare_window(
        admin_dashboard.AdminDashboard,
        product_service=OfflineService(),
    )

    with caplog.at_level(logging.WARNING, logger="products.gui.admin_dashboard"):
        dashboard._on_product_mutation(None)

    assert "Storage usage refresh failed: network down" in caplog.text
    assert scheduled == []
