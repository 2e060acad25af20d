"""
Testy grupowania, filtrów i paginacji list produktów.
"""

from catalogue.grouping import chunk, group_by_category
from catalogue.listing import (
    ALL_CATEGORIES,
    apply_visibility,
    filter_admin,
    filter_public,
    paginate,
    visibility_counts,
)
from catalogue.view_state import AdminViewState, CatalogueViewState

from conftest import make_product

MUGS = {"id": "c1", "name": "Mugs", "color": "#EF4444", "display_order": 1}
PLATES = {"id": "c2", "name": "Plates", "color": "#3B82F6", "display_order": 2}
BOWLS = {"id": "c3", "name": "Bowls", "color": "#22C55E", "display_order": 3}


# =========================================================
# GRUPOWANIE
# =========================================================

def test_groups_follow_category_order_and_skip_empty():
    products = [make_product(PLATES, 1), make_product(MUGS, 2), make_product(PLATES, 3)]

    groups = group_by_category([MUGS, PLATES, BOWLS], products)

    assert [g.name for g in groups] == ["Mugs", "Plates"]
    assert [p["name"] for p in groups[1].products] == ["PRODUCT 001", "PRODUCT 003"]


def test_groups_cover_every_categorised_product_once():
    products = [make_product([MUGS, PLATES, BOWLS][i % 3], i) for i in range(20)]

    groups = group_by_category([MUGS, PLATES, BOWLS, dict(MUGS, id="dup")], products)

    grouped_ids = [p["id"] for g in groups for p in g.products]
    assert sorted(grouped_ids) == sorted(p["id"] for p in products)
    assert len(grouped_ids) == len(set(grouped_ids))


def test_products_without_known_category_are_not_grouped():
    orphan = make_product(MUGS, 1, category=None)
    assert group_by_category([MUGS], [orphan]) == []


def test_chunk_leaves_underfilled_last_chunk():
    assert [len(c) for c in chunk(list(range(13)), 6)] == [6, 6, 1]


# =========================================================
# FILTRY
# =========================================================

def test_public_filter_by_name_and_category():
    products = [
        make_product(MUGS, 1, name="ASHOKA MINI MUG"),
        make_product(PLATES, 2, name="Dinner Plate"),
        make_product(MUGS, 3, name="Coffee Mug"),
    ]

    assert len(filter_public(products, "mug", ALL_CATEGORIES)) == 2
    assert [p["name"] for p in filter_public(products, "", "Plates")] == ["Dinner Plate"]
    assert filter_public(products, "plate", "Mugs") == []


def test_admin_filter_searches_code_and_category_name():
    products = [
        make_product(MUGS, 1, product_code="800A1ACE"),
        make_product(PLATES, 2),
    ]

    assert len(filter_admin(products, "800a")) == 1
    assert len(filter_admin(products, "plates")) == 1
    assert len(filter_admin(products, "", "c1")) == 1
    assert len(filter_admin(products, "", "all")) == 2


def test_visibility_counts_and_apply():
    products = [make_product(MUGS, i) for i in range(3)]

    updated = apply_visibility(products, products[1]["id"], True)

    assert visibility_counts(products) == (3, 0)
    assert visibility_counts(updated) == (2, 1)
    assert updated[1]["name"] == products[1]["name"]
    assert products[1]["is_hidden"] is False


# =========================================================
# PAGINACJA
# =========================================================

def test_pagination_of_120_items():
    items = [make_product(MUGS, i) for i in range(120)]

    page = paginate(items, page=2)

    assert page.total_pages == 3
    assert page.items == items[50:100]
    assert page.info_text == "Showing 51-100 of 120"
    assert page.has_previous and page.has_next


def test_last_page_and_clamping():
    items = [make_product(MUGS, i) for i in range(120)]

    last = paginate(items, page=99)

    assert last.number == 3
    assert len(last.items) == 20
    assert not last.has_next


def test_empty_list_has_no_pages():
    page = paginate([], page=1)
    assert page.total_pages == 0
    assert page.items == []
    assert page.info_text == "No products"


# =========================================================
# STAN WIDOKU
# =========================================================

def test_changing_search_or_category_resets_page():
    state = CatalogueViewState()
    state.go_to(3)

    assert state.set_search("mug") is True
    assert state.page == 1

    state.go_to(2)
    assert state.set_category("Plates") is True
    assert state.page == 1

    state.go_to(2)
    assert state.set_category("Plates") is False
    assert state.page == 2


def test_view_state_round_trip_dict():
    state = CatalogueViewState(search="mug", category="Mugs", page=2)
    assert CatalogueViewState.from_dict(state.to_dict()) == state


def test_admin_state_defaults_to_all_categories():
    state = AdminViewState()
    assert state.set_category(None) is False
    assert state.category_id == "all"
