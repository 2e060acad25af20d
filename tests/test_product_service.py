"""
Testy ProductService na kliencie Supabase w pamięci.
"""

import pytest

from config.settings import SUPABASE_URL, STORAGE_PUBLIC_PREFIX
from core.events import EventType
from core.exceptions import FormValidationError
from products import create_product_service
from products.service import StorageUsage

from conftest import make_image_bytes


@pytest.fixture
def service(client):
    return create_product_service(client)


def mug_form(category_id, **overrides):
    data = {
        "name": "ASHOKA MINI MUG",
        "product_code": "800a1ace",
        "category_id": category_id,
        "price": "620.00",
        "qty_per_box": "24 PCS",
    }
    data.update(overrides)
    return data


def stored_row(client, product_id):
    return next(r for r in client.tables["products"] if r["id"] == product_id)


def call_index(client, call):
    return client.calls.index(call)


# =========================================================
# TWORZENIE
# =========================================================

def test_create_product_with_image(client, service, categories, jpeg_bytes, event_bus):
    created = []
    event_bus.subscribe(EventType.PRODUCT_CREATED, created.append)

    success, product_id = service.save_product(
        mug_form(categories[0]["id"]), image_data=jpeg_bytes, image_filename="mug.jpg"
    )

    assert success
    row = stored_row(client, product_id)
    assert row["name"] == "ASHOKA MINI MUG"
    assert row["product_code"] == "800A1ACE"
    assert row["price"] == 620.0
    assert row["is_hidden"] is False
    assert row["image_url"].startswith(SUPABASE_URL.rstrip("/") + STORAGE_PUBLIC_PREFIX + "products/")

    key = client.stored_keys()[0]
    assert row["image_url"].endswith(key)
    assert row["image_size"] == len(client.files["product-images"][key])
    assert client.upload_options[0] == {
        "content-type": "image/jpeg",
        "cache-control": "3600",
        "upsert": "false",
    }
    assert [e.data["id"] for e in created] == [product_id]


def test_new_product_requires_image(client, service, categories):
    with pytest.raises(FormValidationError) as exc:
        service.save_product(mug_form(categories[0]["id"]))

    assert exc.value.errors == {"image": "Product image is required"}
    assert client.tables["products"] == []


def test_invalid_form_uploads_nothing(client, service, categories, jpeg_bytes):
    with pytest.raises(FormValidationError) as exc:
        service.save_product(
            mug_form(categories[0]["id"], qty_per_box="24 BOXES"),
            image_data=jpeg_bytes, image_filename="mug.jpg"
        )

    assert "qty_per_box" in exc.value.errors
    assert client.stored_keys() == []


def test_too_small_image_is_a_field_error(client, service, categories):
    tiny = make_image_bytes(size=(120, 120))

    with pytest.raises(FormValidationError) as exc:
        service.save_product(mug_form(categories[0]["id"]), image_data=tiny, image_filename="tiny.jpg")

    assert "image" in exc.value.errors
    assert client.stored_keys() == []


def test_upload_failure_writes_no_record(client, service, categories, jpeg_bytes):
    client.fail_upload = True

    success, message = service.save_product(
        mug_form(categories[0]["id"]), image_data=jpeg_bytes, image_filename="mug.jpg"
    )

    assert not success
    assert message.startswith("Image upload failed")
    assert ("db.insert", "products") not in client.calls


# =========================================================
# PODMIANA OBRAZU
# =========================================================

@pytest.fixture
def saved_product(client, service, categories, jpeg_bytes):
    success, product_id = service.save_product(
        mug_form(categories[0]["id"]), image_data=jpeg_bytes, image_filename="mug.jpg"
    )
    assert success
    old_key = client.stored_keys()[0]
    client.calls.clear()
    return product_id, old_key


def test_replace_image_uploads_before_deleting_old(client, service, categories, saved_product):
    product_id, old_key = saved_product
    new_image = make_image_bytes(color=(10, 120, 200))

    success, result = service.save_product(
        mug_form(categories[0]["id"], price="650"),
        image_data=new_image, image_filename="mug-v2.jpg", product_id=product_id
    )

    assert success and result == product_id
    new_key = next(k for k in client.stored_keys() if k != old_key)
    assert client.stored_keys() == [new_key]

    upload = call_index(client, ("storage.upload", new_key))
    update = call_index(client, ("db.update", "products"))
    remove = call_index(client, ("storage.remove", old_key))
    assert upload < update < remove

    row = stored_row(client, product_id)
    assert row["image_url"].endswith(new_key)
    assert row["price"] == 650.0


def test_failed_record_write_removes_new_image(client, service, categories, saved_product):
    product_id, old_key = saved_product
    before = dict(stored_row(client, product_id))
    client.failures.add(("products", "update"))

    success, message = service.save_product(
        mug_form(categories[0]["id"]),
        image_data=make_image_bytes(color=(0, 0, 0)), image_filename="other.jpg",
        product_id=product_id
    )

    assert not success
    assert client.stored_keys() == [old_key]
    assert stored_row(client, product_id) == before


def test_edit_without_new_image_keeps_image_and_visibility(client, service, categories, saved_product):
    product_id, old_key = saved_product
    stored_row(client, product_id)["is_hidden"] = True

    success, _ = service.save_product(
        mug_form(categories[1]["id"], name="ASHOKA MUG"), product_id=product_id
    )

    row = stored_row(client, product_id)
    assert success
    assert row["name"] == "ASHOKA MUG"
    assert row["category_id"] == categories[1]["id"]
    assert row["image_url"].endswith(old_key)
    assert row["is_hidden"] is True
    assert not any(call[0] == "storage.upload" for call in client.calls)


# =========================================================
# WIDOCZNOŚĆ
# =========================================================

def test_toggle_requires_session(client, service, saved_product):
    product_id, _ = saved_product

    success, message = service.toggle_visibility(product_id, currently_hidden=False)

    assert not success
    assert message == "You must be logged in to update products"
    assert ("db.update", "products") not in client.calls
    assert stored_row(client, product_id)["is_hidden"] is False


def test_hiding_removes_product_from_visible_list_only(client, service, saved_product):
    product_id, _ = saved_product
    client.log_in()
    before = dict(stored_row(client, product_id))

    success, _ = service.toggle_visibility(product_id, currently_hidden=False)

    assert success
    assert product_id not in [p["id"] for p in service.list_visible_products()]
    assert product_id in [p["id"] for p in service.list_products()]

    after = stored_row(client, product_id)
    for field in ("name", "product_code", "category_id", "price", "qty_per_box", "image_url", "image_size"):
        assert after[field] == before[field]

    service.toggle_visibility(product_id, currently_hidden=True)
    assert product_id in [p["id"] for p in service.list_visible_products()]


# =========================================================
# USUWANIE / STORAGE
# =========================================================

def test_delete_removes_row_then_image(client, service, saved_product):
    product_id, old_key = saved_product
    product = service.get_product(product_id)

    success, message = service.delete_product(product)

    assert success
    assert message == "Product deleted successfully!"
    assert client.tables["products"] == []
    assert client.stored_keys() == []
    assert call_index(client, ("db.delete", "products")) < call_index(client, ("storage.remove", old_key))


def test_delete_with_foreign_image_url_keeps_going(client, service, categories):
    client.tables["products"].append({
        "id": "p-1", "name": "Legacy", "category_id": categories[0]["id"],
        "image_url": "https://cdn.example.com/legacy.jpg", "image_size": 10, "is_hidden": False,
    })

    success, _ = service.delete_product({"id": "p-1", "image_url": "https://cdn.example.com/legacy.jpg"})

    assert success
    assert not any(call[0] == "storage.remove" for call in client.calls)


def test_storage_usage_sums_image_sizes(client, service, categories):
    client.tables["products"].extend([
        {"id": "a", "category_id": categories[0]["id"], "image_size": 3 * 1024 * 1024},
        {"id": "b", "category_id": categories[0]["id"], "image_size": None},
        {"id": "c", "category_id": categories[0]["id"], "image_size": 1024 * 1024},
    ])

    usage = service.get_storage_usage()

    assert usage.used_mb == pytest.approx(4.0)
    assert not usage.is_warning


def test_storage_usage_warning_and_cap():
    assert StorageUsage(used_bytes=950 * 1024 * 1024).is_warning
    assert not StorageUsage(used_bytes=900 * 1024 * 1024).is_warning
    assert StorageUsage(used_bytes=512 * 1024 * 1024).percent == pytest.approx(50.0)
    assert StorageUsage(used_bytes=4096 * 1024 * 1024).percent == 100.0
