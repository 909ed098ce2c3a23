from decimal import Decimal

import pytest

from restaurant_pos.models import RoleEnum


@pytest.fixture
def floor(make_user, make_table, make_menu_item, login):
    """Официант, стол №5 на 4 места и бургер за 10.00."""
    waiter = make_user(RoleEnum.waiter)
    make_user(RoleEnum.chef)
    make_user(RoleEnum.host)
    return {
        "waiter": waiter,
        "table": make_table(5, capacity=4),
        "burger": make_menu_item("Burger", "10.00"),
        "fries": make_menu_item("Fries", "3.95"),
        "headers": login("waiter@bistro-staff.com"),
    }


def seat(client, floor, guests=2):
    resp = client.put(
        f"/api/tables/{floor['table'].id}",
        json={"status": "occupied", "waiter_id": floor["waiter"].id, "guest_count": guests},
        headers=floor["headers"],
    )
    assert resp.status_code == 200, resp.text
    return resp.json()["table"]


def place_order(client, floor, items):
    return client.post(
        "/api/orders",
        json={"table_id": floor["table"].id, "items": items},
        headers=floor["headers"],
    )


def set_status(client, floor, order_id, status):
    return client.put(f"/api/orders/{order_id}/status", json={"status": status}, headers=floor["headers"])


def test_full_service_flow(client, floor):
    headers = floor["headers"]
    table = seat(client, floor)
    assert table["status"] == "occupied"
    assert table["waiter_id"] == floor["waiter"].id
    assert table["guest_count"] == 2

    resp = place_order(client, floor, [{"menu_item_id": floor["burger"].id, "quantity": 2}])
    assert resp.status_code == 201, resp.text
    order = resp.json()["order"]
    assert order["status"] == "new"
    assert order["waiter_id"] == floor["waiter"].id
    assert order["count_items"] == 2
    assert Decimal(order["subtotal"]) == Decimal("20.00")
    assert Decimal(order["tax"]) == Decimal("1.70")
    assert order["items"][0]["name"] == "Burger"

    totals = client.get(f"/api/orders/{order['id']}/totals", params={"tip_preset": 15}, headers=headers).json()
    assert Decimal(totals["tip"]) == Decimal("3.00")
    assert Decimal(totals["total"]) == Decimal("24.70")
    assert totals["tip_presets"] == [0, 15, 20]

    for status in ("in_progress", "done", "delivered"):
        resp = set_status(client, floor, order["id"], status)
        assert resp.status_code == 200, resp.text
        assert resp.json()["order"]["status"] == status
    assert resp.json()["order"]["items"][0]["status"] == "delivered"

    resp = set_status(client, floor, order["id"], "paid")
    assert resp.status_code == 400

    resp = client.post(
        "/api/payments",
        json={"order_id": order["id"], "amount": "20.00", "tip": "3.00", "payment_method": "Cash"},
        headers=headers,
    )
    assert resp.status_code == 201, resp.text
    payment = resp.json()["payment"]
    assert payment["payment_method"] == "cash"
    assert Decimal(payment["tip"]) == Decimal("3.00")

    paid = client.get(f"/api/orders/{order['id']}", headers=headers).json()["order"]
    assert paid["status"] == "paid"

    assert set_status(client, floor, order["id"], "cancelled").status_code == 400
    resp = client.post(
        f"/api/orders/{order['id']}/items", json={"menu_item_id": floor["burger"].id}, headers=headers
    )
    assert resp.status_code == 400

    resp = client.post(
        "/api/payments",
        json={"order_id": order["id"], "amount": "20.00", "payment_method": "cash"},
        headers=headers,
    )
    assert resp.status_code == 409

    table = client.get(f"/api/tables/{floor['table'].id}", headers=headers).json()["table"]
    assert table["status"] == "available"
    assert table["waiter_id"] is None
    assert table["guest_count"] is None

    payments = client.get("/api/payments", params={"order_id": order["id"]}, headers=headers).json()["payments"]
    assert [p["id"] for p in payments] == [payment["id"]]


def test_order_requires_occupied_table(client, floor):
    resp = place_order(client, floor, [{"menu_item_id": floor["burger"].id}])
    assert resp.status_code == 400


def test_empty_order_rejected(client, floor):
    seat(client, floor)
    resp = place_order(client, floor, [])
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Order must contain at least one item"


def test_unavailable_menu_item_rejected(client, floor, make_menu_item):
    seat(client, floor)
    soup = make_menu_item("Soup of the day", "5.00", available=False)
    assert place_order(client, floor, [{"menu_item_id": soup.id}]).status_code == 400
    assert place_order(client, floor, [{"menu_item_id": 999}]).status_code == 404


def test_second_submission_merges_into_active_order(client, floor):
    seat(client, floor)
    first = place_order(client, floor, [{"menu_item_id": floor["burger"].id, "quantity": 1}]).json()["order"]
    second = place_order(
        client,
        floor,
        [{"menu_item_id": floor["burger"].id, "quantity": 2}, {"menu_item_id": floor["fries"].id}],
    ).json()["order"]

    assert second["id"] == first["id"]
    quantities = {item["name"]: item["quantity"] for item in second["items"]}
    assert quantities == {"Burger": 3, "Fries": 1}

    orders = client.get("/api/orders", params={"table_id": floor["table"].id}, headers=floor["headers"]).json()
    assert len(orders["orders"]) == 1


def test_price_is_snapshotted(client, floor, login, make_user):
    make_user(RoleEnum.manager)
    seat(client, floor)
    order = place_order(client, floor, [{"menu_item_id": floor["burger"].id}]).json()["order"]

    resp = client.put(
        f"/api/menu/{floor['burger'].id}", json={"price": "12.50"}, headers=login("manager@bistro-staff.com")
    )
    assert resp.status_code == 200

    again = client.get(f"/api/orders/{order['id']}", headers=floor["headers"]).json()["order"]
    assert Decimal(again["items"][0]["price"]) == Decimal("10.00")


def test_cancelled_item_not_billed(client, floor):
    seat(client, floor)
    order = place_order(
        client,
        floor,
        [{"menu_item_id": floor["burger"].id, "quantity": 2}, {"menu_item_id": floor["fries"].id}],
    ).json()["order"]
    fries = next(item for item in order["items"] if item["name"] == "Fries")

    resp = client.put(
        f"/api/orders/{order['id']}/items/{fries['id']}",
        json={"status": "cancelled"},
        headers=floor["headers"],
    )
    assert resp.status_code == 200
    assert Decimal(resp.json()["order"]["subtotal"]) == Decimal("20.00")

    resp = client.put(
        f"/api/orders/{order['id']}/items/{fries['id']}", json={"quantity": 0}, headers=floor["headers"]
    )
    assert resp.status_code == 422


def test_backward_transition_rejected(client, floor):
    seat(client, floor)
    order = place_order(client, floor, [{"menu_item_id": floor["burger"].id}]).json()["order"]
    assert set_status(client, floor, order["id"], "done").status_code == 400
    assert set_status(client, floor, order["id"], "in_progress").status_code == 200
    assert set_status(client, floor, order["id"], "new").status_code == 400


def test_payment_before_delivery_rejected(client, floor):
    seat(client, floor)
    order = place_order(client, floor, [{"menu_item_id": floor["burger"].id}]).json()["order"]
    resp = client.post(
        "/api/payments",
        json={"order_id": order["id"], "amount": "10.85", "payment_method": "card"},
        headers=floor["headers"],
    )
    assert resp.status_code == 400
    assert client.get(f"/api/orders/{order['id']}", headers=floor["headers"]).json()["order"]["status"] == "new"


def test_payment_with_tip_preset(client, floor):
    seat(client, floor)
    order = place_order(client, floor, [{"menu_item_id": floor["burger"].id, "quantity": 2}]).json()["order"]
    for status in ("in_progress", "done", "delivered"):
        set_status(client, floor, order["id"], status)

    resp = client.post(
        "/api/payments",
        json={"order_id": order["id"], "amount": "21.70", "tip_preset": 20, "payment_method": "card"},
        headers=floor["headers"],
    )
    assert resp.status_code == 201
    assert Decimal(resp.json()["payment"]["tip"]) == Decimal("4.00")


def test_kitchen_queue(client, floor, login):
    seat(client, floor)
    order = place_order(client, floor, [{"menu_item_id": floor["burger"].id}]).json()["order"]

    resp = client.get("/api/kitchen/orders", headers=login("chef@bistro-staff.com"))
    assert resp.status_code == 200
    queue = resp.json()
    assert [ticket["id"] for ticket in queue["new"]] == [order["id"]]
    assert queue["new"][0]["table_number"] == 5
    assert queue["new"][0]["waiting"] == "just now"
    assert queue["in_progress"] == [] and queue["done"] == []
    assert queue["poll_interval_seconds"] == 15

    assert client.get("/api/kitchen/orders", headers=login("host@bistro-staff.com")).status_code == 403


def test_adding_same_item_increments_quantity(client, floor):
    seat(client, floor)
    order = place_order(client, floor, [{"menu_item_id": floor["burger"].id}]).json()["order"]

    resp = client.post(
        f"/api/orders/{order['id']}/items",
        json={"menu_item_id": floor["burger"].id, "notes": "medium rare"},
        headers=floor["headers"],
    )
    assert resp.status_code == 200
    items = resp.json()["order"]["items"]
    assert len(items) == 1
    assert items[0]["quantity"] == 2
    assert items[0]["notes"] == "medium rare"


def test_payment_keeps_reservation_of_next_party(client, floor):
    headers = floor["headers"]
    table_id = floor["table"].id
    seat(client, floor)
    order = place_order(client, floor, [{"menu_item_id": floor["burger"].id}]).json()["order"]
    for status in ("in_progress", "done", "delivered"):
        set_status(client, floor, order["id"], status)

    # гости ушли до оплаты, стол уже забронирован следующими
    client.put(f"/api/tables/{table_id}", json={"status": "available"}, headers=headers)
    resp = client.put(
        f"/api/tables/{table_id}", json={"status": "reserved", "reservation_name": "Smith"}, headers=headers
    )
    assert resp.status_code == 200

    resp = client.post(
        "/api/payments",
        json={"order_id": order["id"], "amount": "10.85", "payment_method": "cash"},
        headers=headers,
    )
    assert resp.status_code == 201

    table = client.get(f"/api/tables/{table_id}", headers=headers).json()["table"]
    assert table["status"] == "reserved"
    assert table["reservation_name"] == "Smith"


def test_order_with_unknown_waiter_rejected(client, floor, make_user):
    seat(client, floor)
    gone = make_user(RoleEnum.waiter, email="gone@bistro-staff.com", active=False)

    for waiter_id in (9999, gone.id):
        resp = client.post(
            "/api/orders",
            json={"table_id": floor["table"].id, "waiter_id": waiter_id, "items": [{"menu_item_id": floor["burger"].id}]},
            headers=floor["headers"],
        )
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Assigned waiter must be an active staff member"

    orders = client.get("/api/orders", headers=floor["headers"]).json()["orders"]
    assert orders == []
