"""
Name: Sweets API Tests

Responsibilities:
  - Walk the full catalog flow over HTTP (add, purchase, restock, delete)
  - Validate role enforcement (public reads, USER purchase, ADMIN writes)
  - Validate search query parameters and error responses
"""

from uuid import uuid4

import pytest

pytestmark = pytest.mark.unit

SWEETS = "/api/sweets"

GUMMY_BEARS = {
    "name": "Gummy Bears",
    "category": "Gummies",
    "price": "2.99",
    "quantity": 50,
    "description": "Fruity gummy bears in five flavours",
}


def _create(client, headers, **overrides):
    payload = {**GUMMY_BEARS, **overrides}
    res = client.post(SWEETS, json=payload, headers=headers)
    assert res.status_code == 201, res.text
    return res.json()


# =============================================================================
# End-to-end flow
# =============================================================================


def test_gummy_bears_flow(client, admin_headers, user_headers):
    created = _create(client, admin_headers)
    assert created["quantity"] == 50
    assert created["price"] == "2.99"
    assert isinstance(created["createdAt"], int)
    assert created["createdAt"] == created["updatedAt"]
    sweet_url = f"{SWEETS}/{created['id']}"

    res = client.post(
        f"{sweet_url}/purchase", json={"quantity": 5}, headers=user_headers
    )
    assert res.status_code == 200
    assert res.json()["quantity"] == 45

    res = client.post(
        f"{sweet_url}/purchase", json={"quantity": 1000}, headers=user_headers
    )
    assert res.status_code == 400
    assert res.json()["code"] == "INSUFFICIENT_STOCK"
    assert res.json()["detail"] == "Insufficient quantity available"
    assert client.get(sweet_url).json()["quantity"] == 45

    res = client.post(
        f"{sweet_url}/restock", json={"quantity": 10}, headers=admin_headers
    )
    assert res.status_code == 200
    assert res.json()["quantity"] == 55

    res = client.delete(sweet_url, headers=admin_headers)
    assert res.status_code == 204

    res = client.get(sweet_url)
    assert res.status_code == 404
    assert res.json()["code"] == "NOT_FOUND"
    assert res.json()["detail"] == f"Sweet not found with id: {created['id']}"


def test_update_replaces_fields(client, admin_headers):
    created = _create(client, admin_headers)

    res = client.put(
        f"{SWEETS}/{created['id']}",
        json={**GUMMY_BEARS, "name": "Sour Gummy Bears", "price": "3.50"},
        headers=admin_headers,
    )

    assert res.status_code == 200
    body = res.json()
    assert body["name"] == "Sour Gummy Bears"
    assert body["price"] == "3.50"
    assert body["createdAt"] == created["createdAt"]
    assert body["updatedAt"] >= created["updatedAt"]


# =============================================================================
# Public reads
# =============================================================================


def test_list_and_get_are_public(client, admin_headers):
    created = _create(client, admin_headers)

    listed = client.get(SWEETS)
    fetched = client.get(f"{SWEETS}/{created['id']}")

    assert listed.status_code == 200
    assert [s["id"] for s in listed.json()] == [created["id"]]
    assert fetched.json() == created


def test_get_unknown_id_is_not_found(client):
    assert client.get(f"{SWEETS}/{uuid4()}").status_code == 404


def test_get_malformed_id_is_validation_error(client):
    res = client.get(f"{SWEETS}/not-a-uuid")

    assert res.status_code == 400
    assert res.json()["code"] == "VALIDATION_ERROR"


@pytest.fixture
def catalog(client, admin_headers):
    _create(client, admin_headers, name="Chocolate Bar", category="Chocolate", price="1.50")
    _create(client, admin_headers, name="Dark Chocolate", category="Chocolate", price="2.00")
    _create(client, admin_headers, name="Gummy Bears", category="Gummies", price="2.99")
    _create(client, admin_headers, name="Lollipop", category="Hard Candy", price="5.00")
    return client


def _search(client, **params):
    res = client.get(f"{SWEETS}/search", params=params)
    assert res.status_code == 200, res.text
    return sorted(s["name"] for s in res.json())


def test_search_by_name(catalog):
    assert _search(catalog, name="choc") == ["Chocolate Bar", "Dark Chocolate"]


def test_search_by_price_range(catalog):
    assert _search(catalog, minPrice="2.00", maxPrice="5.00") == [
        "Dark Chocolate",
        "Gummy Bears",
        "Lollipop",
    ]


def test_search_by_category_and_price(catalog):
    assert _search(catalog, category="Chocolate", maxPrice="1.99") == ["Chocolate Bar"]


def test_search_without_match_is_empty(catalog):
    assert _search(catalog, name="licorice") == []


def test_search_inverted_range_is_empty(catalog):
    assert _search(catalog, minPrice="5.00", maxPrice="1.00") == []


@pytest.mark.parametrize("params", [{"minPrice": "-1"}, {"maxPrice": "cheap"}])
def test_search_rejects_bad_price_bounds(client, params):
    res = client.get(f"{SWEETS}/search", params=params)

    assert res.status_code == 400
    assert res.json()["code"] == "VALIDATION_ERROR"


# =============================================================================
# Role enforcement
# =============================================================================


def test_writes_require_authentication(client):
    res = client.post(SWEETS, json=GUMMY_BEARS)

    assert res.status_code == 401
    assert res.json()["code"] == "UNAUTHORIZED"


def test_purchase_requires_authentication(client, admin_headers):
    created = _create(client, admin_headers)

    res = client.post(f"{SWEETS}/{created['id']}/purchase", json={"quantity": 1})

    assert res.status_code == 401


def test_admin_can_purchase(client, admin_headers):
    created = _create(client, admin_headers)

    res = client.post(
        f"{SWEETS}/{created['id']}/purchase", json={"quantity": 1}, headers=admin_headers
    )

    assert res.status_code == 200
    assert res.json()["quantity"] == 49


def test_regular_user_cannot_mutate_catalog(client, admin_headers, user_headers):
    created = _create(client, admin_headers)
    sweet_url = f"{SWEETS}/{created['id']}"

    responses = [
        client.post(SWEETS, json=GUMMY_BEARS, headers=user_headers),
        client.put(sweet_url, json=GUMMY_BEARS, headers=user_headers),
        client.delete(sweet_url, headers=user_headers),
        client.post(f"{sweet_url}/restock", json={"quantity": 1}, headers=user_headers),
    ]

    for res in responses:
        assert res.status_code == 403
        assert res.json()["code"] == "FORBIDDEN"
        assert res.json()["detail"] == "Only admins can perform this action"
    assert client.get(sweet_url).json()["quantity"] == 50


# =============================================================================
# Payload validation
# =============================================================================


@pytest.mark.parametrize(
    "overrides,field",
    [
        ({"name": "A"}, "name"),
        ({"price": "0"}, "price"),
        ({"price": "1.999"}, "price"),
        ({"quantity": -1}, "quantity"),
        ({"description": "too short"}, "description"),
    ],
)
def test_create_validation_errors(client, admin_headers, overrides, field):
    res = client.post(SWEETS, json={**GUMMY_BEARS, **overrides}, headers=admin_headers)

    assert res.status_code == 400
    assert field in {e.get("field") for e in res.json()["errors"]}


@pytest.mark.parametrize("quantity", [0, -3])
def test_stock_movements_require_positive_quantity(
    client, admin_headers, quantity
):
    created = _create(client, admin_headers)

    res = client.post(
        f"{SWEETS}/{created['id']}/restock",
        json={"quantity": quantity},
        headers=admin_headers,
    )

    assert res.status_code == 400
    assert client.get(f"{SWEETS}/{created['id']}").json()["quantity"] == 50


def test_purchase_unknown_sweet_is_not_found(client, user_headers):
    res = client.post(
        f"{SWEETS}/{uuid4()}/purchase", json={"quantity": 1}, headers=user_headers
    )

    assert res.status_code == 404
