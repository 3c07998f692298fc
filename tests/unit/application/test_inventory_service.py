"""
Name: Inventory Service Tests

Responsibilities:
  - Validate add/update/remove/get with field validation and NotFound
  - Validate purchase/restock stock arithmetic and updated_at refresh
  - Validate search semantics through the service
  - Validate the store's conditional write is what protects stock
"""

from datetime import timedelta
from decimal import Decimal
from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from sweetshop.application.inventory_service import InventoryService
from sweetshop.domain.entities import Sweet
from sweetshop.domain.errors import (
    InsufficientStockError,
    NotFoundError,
    ValidationError,
)

pytestmark = pytest.mark.unit


def _add(service, name="Gummy Bears", category="Gummies", price="2.99", quantity=50):
    return service.add(
        name, category, Decimal(price), quantity, "Fruity gummy bears in five flavours"
    )


# =============================================================================
# CRUD
# =============================================================================


def test_add_assigns_id_and_timestamps(inventory_service):
    sweet = _add(inventory_service)

    assert sweet.id is not None
    assert sweet.created_at == sweet.updated_at
    assert sweet.price == Decimal("2.99")
    assert inventory_service.get_by_id(sweet.id).quantity == 50


def test_add_normalizes_price_to_two_decimals(inventory_service):
    sweet = _add(inventory_service, price="3")
    assert str(sweet.price) == "3.00"


def test_add_rejects_invalid_fields(inventory_service):
    with pytest.raises(ValidationError) as exc_info:
        inventory_service.add("A", "", Decimal("0"), -1, "short")

    fields = {e["field"] for e in exc_info.value.errors}
    assert fields == {"name", "category", "price", "quantity", "description"}
    assert inventory_service.list() == []


def test_add_rejects_non_numeric_price(inventory_service):
    with pytest.raises(ValidationError) as exc_info:
        inventory_service.add(
            "Gummy Bears", "Gummies", "abc", 1, "Fruity gummy bears in five flavours"
        )

    assert exc_info.value.errors == [
        {"field": "price", "msg": "Price must be a decimal number"}
    ]


def test_get_missing_raises_not_found(inventory_service):
    missing = uuid4()
    with pytest.raises(NotFoundError, match=f"Sweet not found with id: {missing}"):
        inventory_service.get_by_id(missing)


def test_list_returns_whole_catalog(inventory_service):
    a = _add(inventory_service, name="Gummy Bears")
    b = _add(inventory_service, name="Chocolate Bar", category="Chocolate")

    assert [s.id for s in inventory_service.list()] == [a.id, b.id]


def test_update_replaces_all_fields(inventory_service):
    sweet = _add(inventory_service)

    updated = inventory_service.update(
        sweet.id,
        "Sour Worms",
        "Sour",
        Decimal("1.25"),
        7,
        "Tangy sour gummy worms",
    )

    assert updated.name == "Sour Worms"
    assert updated.category == "Sour"
    assert updated.price == Decimal("1.25")
    assert updated.quantity == 7
    assert updated.created_at == sweet.created_at
    assert updated.updated_at >= sweet.updated_at


def test_update_missing_raises_not_found(inventory_service):
    with pytest.raises(NotFoundError):
        inventory_service.update(
            uuid4(), "Sour Worms", "Sour", Decimal("1.25"), 7, "Tangy sour gummy worms"
        )


def test_update_invalid_leaves_record_untouched(inventory_service):
    sweet = _add(inventory_service)

    with pytest.raises(ValidationError):
        inventory_service.update(sweet.id, "X", "Sour", Decimal("1.25"), 7, "short")

    assert inventory_service.get_by_id(sweet.id).name == "Gummy Bears"


def test_remove_then_get_raises_not_found(inventory_service):
    sweet = _add(inventory_service)

    inventory_service.remove(sweet.id)

    with pytest.raises(NotFoundError):
        inventory_service.get_by_id(sweet.id)
    with pytest.raises(NotFoundError):
        inventory_service.remove(sweet.id)


# =============================================================================
# Stock movements
# =============================================================================


@pytest.mark.parametrize("initial,qty", [(0, 1), (5, 10), (50, 1000)])
def test_restock_adds_exactly_quantity(inventory_service, initial, qty):
    sweet = _add(inventory_service, quantity=initial)

    restocked = inventory_service.restock(sweet.id, qty)

    assert restocked.quantity == initial + qty
    assert restocked.updated_at >= sweet.updated_at


@pytest.mark.parametrize("initial,qty", [(1, 1), (50, 5), (10, 10)])
def test_purchase_decrements_exactly_quantity(inventory_service, initial, qty):
    sweet = _add(inventory_service, quantity=initial)

    purchased = inventory_service.purchase(sweet.id, qty)

    assert purchased.quantity == initial - qty
    assert inventory_service.get_by_id(sweet.id).quantity == initial - qty


@pytest.mark.parametrize("initial,qty", [(0, 1), (45, 1000), (9, 10)])
def test_purchase_over_stock_leaves_stock_unchanged(inventory_service, initial, qty):
    sweet = _add(inventory_service, quantity=initial)

    with pytest.raises(InsufficientStockError, match="Insufficient quantity available"):
        inventory_service.purchase(sweet.id, qty)

    assert inventory_service.get_by_id(sweet.id).quantity == initial


def test_purchase_and_restock_missing_raise_not_found(inventory_service):
    with pytest.raises(NotFoundError):
        inventory_service.purchase(uuid4(), 1)
    with pytest.raises(NotFoundError):
        inventory_service.restock(uuid4(), 1)


def test_purchase_lost_race_reports_insufficient_stock():
    """The store refuses the conditional write after the pre-check passed."""
    sweet = Sweet(
        name="Gummy Bears",
        category="Gummies",
        price=Decimal("2.99"),
        quantity=5,
        description="Fruity gummy bears in five flavours",
    )
    drained = Sweet(
        id=sweet.id,
        name=sweet.name,
        category=sweet.category,
        price=sweet.price,
        quantity=0,
        description=sweet.description,
        created_at=sweet.created_at,
        updated_at=sweet.created_at + timedelta(seconds=1),
    )
    repo = MagicMock()
    repo.get_sweet.side_effect = [sweet, drained]
    repo.adjust_quantity.return_value = None

    service = InventoryService(sweets=repo)

    with pytest.raises(InsufficientStockError) as exc_info:
        service.purchase(sweet.id, 5)

    assert exc_info.value.available == 0
    repo.adjust_quantity.assert_called_once()
    assert repo.adjust_quantity.call_args.args[:2] == (sweet.id, -5)


# =============================================================================
# Search
# =============================================================================


@pytest.fixture
def catalog(inventory_service):
    _add(inventory_service, name="Chocolate Bar", category="Chocolate", price="1.50")
    _add(inventory_service, name="Dark Chocolate", category="Chocolate", price="2.00")
    _add(inventory_service, name="Gummy Bears", category="Gummies", price="2.99")
    _add(inventory_service, name="Lollipop", category="Hard Candy", price="5.00")
    _add(inventory_service, name="Truffle Box", category="Chocolate", price="12.00")
    return inventory_service


def _names(sweets):
    return sorted(s.name for s in sweets)


def test_search_without_filters_returns_catalog(catalog):
    assert len(catalog.search()) == 5


def test_search_name_is_case_insensitive(catalog):
    assert _names(catalog.search(name="choc")) == ["Chocolate Bar", "Dark Chocolate"]


def test_search_category_is_exact(catalog):
    assert _names(catalog.search(category="Chocolate")) == [
        "Chocolate Bar",
        "Dark Chocolate",
        "Truffle Box",
    ]
    assert catalog.search(category="choc") == []


def test_search_price_range_is_inclusive(catalog):
    results = catalog.search(min_price=Decimal("2.00"), max_price=Decimal("5.00"))
    assert _names(results) == ["Dark Chocolate", "Gummy Bears", "Lollipop"]


def test_search_combines_filters(catalog):
    results = catalog.search(category="Chocolate", max_price=Decimal("2.00"))
    assert _names(results) == ["Chocolate Bar", "Dark Chocolate"]


def test_search_with_no_match_returns_empty(catalog):
    assert catalog.search(name="licorice") == []
