from decimal import Decimal

from restaurant_pos.models import MenuCategoryEnum, RoleEnum


def test_menu_crud(client, make_user, login):
    make_user(RoleEnum.manager)
    make_user(RoleEnum.waiter)
    manager = login("manager@bistro-staff.com")
    waiter = login("waiter@bistro-staff.com")

    payload = {"name": "Tiramisu", "category": "dessert", "price": "6.50", "description": "Coffee dessert"}
    resp = client.post("/api/menu", json=payload, headers=manager)
    assert resp.status_code == 201
    item = resp.json()["menu_item"]
    assert Decimal(item["price"]) == Decimal("6.50")
    assert item["available"] is True

    assert client.post("/api/menu", json=payload, headers=waiter).status_code == 403
    assert client.post("/api/menu", json={**payload, "price": "0"}, headers=manager).status_code == 422

    resp = client.put(f"/api/menu/{item['id']}", json={"available": False, "is_special": True}, headers=manager)
    assert resp.json()["menu_item"]["available"] is False
    assert resp.json()["menu_item"]["is_special"] is True

    listed = client.get("/api/menu", params={"available": "false"}, headers=waiter).json()["menu_items"]
    assert [m["name"] for m in listed] == ["Tiramisu"]

    assert client.delete(f"/api/menu/{item['id']}", headers=manager).status_code == 200
    assert client.get(f"/api/menu/{item['id']}", headers=waiter).status_code == 404


def test_menu_filter_by_category(client, make_user, make_menu_item, login):
    make_user(RoleEnum.host)
    make_menu_item("Cola", "2.00", category=MenuCategoryEnum.drink)
    make_menu_item("Steak", "25.00")

    items = client.get("/api/menu", params={"category": "drink"}, headers=login("host@bistro-staff.com")).json()
    assert [m["name"] for m in items["menu_items"]] == ["Cola"]


def test_ordered_menu_item_cannot_be_deleted(client, make_user, make_table, make_menu_item, login):
    waiter = make_user(RoleEnum.waiter)
    make_user(RoleEnum.manager)
    table = make_table(1)
    item = make_menu_item("Steak", "25.00")
    headers = login("waiter@bistro-staff.com")

    client.put(f"/api/tables/{table.id}", json={"status": "occupied", "waiter_id": waiter.id}, headers=headers)
    client.post("/api/orders", json={"table_id": table.id, "items": [{"menu_item_id": item.id}]}, headers=headers)

    resp = client.delete(f"/api/menu/{item.id}", headers=login("manager@bistro-staff.com"))
    assert resp.status_code == 409


def test_staff_list_hides_admins(client, make_user, login):
    make_user(RoleEnum.admin)
    make_user(RoleEnum.manager)
    make_user(RoleEnum.chef)
    headers = login("manager@bistro-staff.com")

    roles = [s["role"] for s in client.get("/api/staff", headers=headers).json()["staff"]]
    assert "admin" not in roles
    assert sorted(roles) == ["chef", "manager"]

    chefs = client.get("/api/staff", params={"role": "chef"}, headers=headers).json()["staff"]
    assert [s["role"] for s in chefs] == ["chef"]


def test_manager_staff_rules(client, make_user, login):
    admin = make_user(RoleEnum.admin)
    make_user(RoleEnum.manager)
    headers = login("manager@bistro-staff.com")

    resp = client.post(
        "/api/staff",
        json={"name": "Lisa", "email": "lisa@bistro-staff.com", "password": "lisapass", "role": "waiter"},
        headers=headers,
    )
    assert resp.status_code == 201
    lisa = resp.json()["staff"]

    resp = client.post(
        "/api/staff",
        json={"name": "Boss", "email": "boss@bistro-staff.com", "password": "bosspass", "role": "owner"},
        headers=headers,
    )
    assert resp.status_code == 403

    resp = client.put(f"/api/staff/{lisa['id']}", json={"role": "manager"}, headers=headers)
    assert resp.status_code == 403

    resp = client.put(f"/api/staff/{lisa['id']}", json={"name": "Lisa Brown"}, headers=headers)
    assert resp.json()["staff"]["name"] == "Lisa Brown"

    assert client.get(f"/api/staff/{admin.id}", headers=headers).status_code == 403


def test_deactivated_staff_cannot_login(client, make_user, login):
    make_user(RoleEnum.owner)
    waiter = make_user(RoleEnum.waiter)
    waiter_headers = login("waiter@bistro-staff.com")

    resp = client.delete(f"/api/staff/{waiter.id}", headers=login("owner@bistro-staff.com"))
    assert resp.status_code == 200

    member = client.get(f"/api/staff/{waiter.id}", headers=login("owner@bistro-staff.com")).json()["staff"]
    assert member["active"] is False

    assert client.get("/api/auth/profile", headers=waiter_headers).status_code == 401
    resp = client.post("/api/auth/login", json={"email": "waiter@bistro-staff.com", "password": "secret123"})
    assert resp.status_code == 401


def test_manager_cannot_deactivate_owner(client, make_user, login):
    owner = make_user(RoleEnum.owner)
    make_user(RoleEnum.manager)
    resp = client.delete(f"/api/staff/{owner.id}", headers=login("manager@bistro-staff.com"))
    assert resp.status_code == 403


def test_manager_cannot_deactivate_self(client, make_user, login):
    manager = make_user(RoleEnum.manager)
    headers = login("manager@bistro-staff.com")

    resp = client.put(f"/api/staff/{manager.id}", json={"active": False}, headers=headers)
    assert resp.status_code == 403

    resp = client.put(f"/api/staff/{manager.id}", json={"name": "Maria G."}, headers=headers)
    assert resp.status_code == 200
    assert client.get("/api/auth/profile", headers=headers).status_code == 200
