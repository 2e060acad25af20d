"""
Konfiguracja pytest - wspólne fixtures

FakeSupabaseClient odtwarza tę część API supabase-py, której używają
repozytoria: table().select/eq/order/limit/insert/update/delete/execute,
storage.from_().upload/remove oraz auth.sign_in_with_password/get_user/sign_out.
Każde wywołanie zdalne jest dopisywane do client.calls (kolejność operacji).
"""

import io
import os
import re
import uuid
from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Any, Dict, List

import pytest
from PIL import Image

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")

from core.events import EventBus  # noqa: E402

JOIN_PATTERN = re.compile(r'(\w+):(\w+)\(([^)]*)\)')


# =========================================================
# FAKE SUPABASE
# =========================================================

class FakeResponse:
    def __init__(self, data, count=None):
        self.data = data
        self.count = count


class FakeQuery:
    """Builder zapytania na jednej tabeli"""

    def __init__(self, client: 'FakeSupabaseClient', table: str):
        self.client = client
        self.table = table
        self.operation = "select"
        self.columns = "*"
        self.count_mode = None
        self.payload = None
        self.filters: List[tuple] = []
        self.order_by = None
        self.limit_to = None

    def select(self, columns="*", count=None):
        self.operation = "select"
        self.columns = columns
        self.count_mode = count
        return self

    def insert(self, data):
        self.operation = "insert"
        self.payload = data
        return self

    def update(self, data):
        self.operation = "update"
        self.payload = data
        return self

    def delete(self):
        self.operation = "delete"
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def limit(self, size):
        self.limit_to = size
        return self

    def _matches(self, row) -> bool:
        return all(row.get(column) == value for column, value in self.filters)

    def execute(self) -> FakeResponse:
        self.client.calls.append((f"db.{self.operation}", self.table))
        if (self.table, self.operation) in self.client.failures:
            raise Exception(f"simulated {self.operation} failure on {self.table}")

        rows = self.client.tables.setdefault(self.table, [])

        if self.operation == "insert":
            record = dict(self.payload)
            record.setdefault("id", str(uuid.uuid4()))
            record.setdefault("created_at", datetime.now(timezone.utc).isoformat())
            rows.append(record)
            return FakeResponse([dict(record)])

        if self.operation == "update":
            updated = []
            for row in rows:
                if self._matches(row):
                    row.update(self.payload)
                    updated.append(dict(row))
            return FakeResponse(updated)

        if self.operation == "delete":
            removed = [row for row in rows if self._matches(row)]
            self.client.tables[self.table] = [row for row in rows if not self._matches(row)]
            return FakeResponse(removed)

        result = [self._project(row) for row in rows if self._matches(row)]
        if self.order_by:
            column, desc = self.order_by
            result.sort(key=lambda r: (r.get(column) is None, r.get(column)), reverse=desc)
        if self.limit_to is not None:
            result = result[:self.limit_to]
        count = len(result) if self.count_mode == "exact" else None
        return FakeResponse(result, count)

    def _project(self, row) -> Dict[str, Any]:
        record = dict(row)
        for alias, table, columns in JOIN_PATTERN.findall(self.columns):
            wanted = [c.strip() for c in columns.split(",")]
            target = next(
                (r for r in self.client.tables.get(table, []) if r.get("id") == row.get(f"{alias}_id")),
                None
            )
            record[alias] = {c: target.get(c) for c in wanted} if target else None
        return record


class FakeBucket:
    def __init__(self, client: 'FakeSupabaseClient', name: str):
        self.client = client
        self.name = name

    def upload(self, path, file, file_options=None):
        self.client.calls.append(("storage.upload", path))
        self.client.upload_options.append(file_options)
        if self.client.fail_upload:
            raise Exception("simulated upload failure")
        files = self.client.files.setdefault(self.name, {})
        if path in files:
            raise Exception("Duplicate: The resource already exists")
        files[path] = file
        return SimpleNamespace(path=path)

    def remove(self, paths):
        for path in paths:
            self.client.calls.append(("storage.remove", path))
        if self.client.fail_remove:
            raise Exception("simulated remove failure")
        files = self.client.files.setdefault(self.name, {})
        for path in paths:
            files.pop(path, None)
        return []


class FakeStorage:
    def __init__(self, client: 'FakeSupabaseClient'):
        self.client = client

    def from_(self, bucket):
        return FakeBucket(self.client, bucket)


class FakeAuth:
    def __init__(self, client: 'FakeSupabaseClient'):
        self.client = client
        self.users: Dict[str, str] = {}
        self.current = None

    def sign_in_with_password(self, credentials):
        self.client.calls.append(("auth.sign_in", credentials["email"]))
        if self.users.get(credentials["email"]) != credentials["password"]:
            raise Exception("Invalid login credentials")
        self.current = SimpleNamespace(id=str(uuid.uuid4()), email=credentials["email"])
        return SimpleNamespace(user=self.current, session=SimpleNamespace(access_token="token"))

    def get_user(self):
        self.client.calls.append(("auth.get_user", None))
        if self.current is None:
            return None
        return SimpleNamespace(user=self.current)

    def sign_out(self):
        self.client.calls.append(("auth.sign_out", None))
        self.current = None


class FakeSupabaseClient:
    """Klient Supabase w pamięci"""

    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {"categories": [], "products": []}
        self.files: Dict[str, Dict[str, bytes]] = {}
        self.calls: List[tuple] = []
        self.upload_options: List[dict] = []
        self.failures = set()
        self.fail_upload = False
        self.fail_remove = False
        self.storage = FakeStorage(self)
        self.auth = FakeAuth(self)

    def table(self, name):
        return FakeQuery(self, name)

    def log_in(self, email="admin@rt-marketing.in"):
        self.auth.current = SimpleNamespace(id=str(uuid.uuid4()), email=email)

    def stored_keys(self, bucket="product-images") -> List[str]:
        return sorted(self.files.get(bucket, {}))


# =========================================================
# FIXTURES
# =========================================================

@pytest.fixture(autouse=True)
def event_bus():
    """Świeży EventBus w każdym teście"""
    EventBus.reset()
    bus = EventBus()
    yield bus
    EventBus.reset()


@pytest.fixture
def client():
    return FakeSupabaseClient()


@pytest.fixture
def categories(client):
    rows = [
        {"id": str(uuid.uuid4()), "name": "Mugs", "color": "#EF4444", "display_order": 1},
        {"id": str(uuid.uuid4()), "name": "Plates", "color": "#3B82F6", "display_order": 2},
        {"id": str(uuid.uuid4()), "name": "Bowls", "color": "#22C55E", "display_order": 3},
    ]
    client.tables["categories"].extend(rows)
    return rows


def make_image_bytes(size=(400, 300), fmt="JPEG", color=(200, 30, 30), mode="RGB") -> bytes:
    image = Image.new(mode, size, color)
    buffer = io.BytesIO()
    image.save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def jpeg_bytes() -> bytes:
    return make_image_bytes()


def make_product(category: Dict[str, Any], index: int = 0, /, **overrides) -> Dict[str, Any]:
    """Produkt w kształcie odczytu z joinem kategorii"""
    product = {
        "id": str(uuid.uuid4()),
        "name": f"PRODUCT {index:03d}",
        "product_code": f"P{index:03d}",
        "category_id": category["id"],
        "category": {"name": category["name"], "color": category["color"]},
        "price": 100.0 + index,
        "qty_per_box": "24 PCS",
        "image_url": None,
        "image_size": 1000,
        "is_hidden": False,
    }
    product.update(overrides)
    return product
