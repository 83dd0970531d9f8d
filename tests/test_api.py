import pytest

from tests.conftest import ADMIN_EMAIL, ADMIN_PASSWORD


def create_category(client, headers, **body):
    response = client.post("/api/admin/categories", json=body, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()


def create_item(client, headers, **body):
    response = client.post("/api/admin/items", json=body, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()


# =============================================================================
# ROOT & HEALTH
# =============================================================================

def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["menu"] == "/api/menu"


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "operational"
    assert body["database"] == "healthy"
    assert body["cache"] == "healthy"


# =============================================================================
# PUBLIC MENU
# =============================================================================

def test_menu_is_seeded_on_startup(client):
    response = client.get("/api/menu")

    assert response.status_code == 200
    menu = response.json()
    assert [c["name"] for c in menu] == [
        "المقبلات", "الأطباق الرئيسية", "المشويات", "الحلويات", "المشروبات",
    ]
    assert all(len(c["items"]) == 6 for c in menu)
    first_item = menu[0]["items"][0]
    assert first_item["name"] == "حمص بالطحينة"
    assert first_item["price"] == "15 ريال"
    assert first_item["categoryId"] == menu[0]["id"]


def test_public_settings_use_camel_case(client):
    response = client.get("/api/settings")

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "مطعمنا المميز"
    assert body["primaryColor"] == "#f59e0b"
    assert "logoUrl" in body


def test_category_items_endpoint(client):
    category_id = client.get("/api/menu").json()[0]["id"]

    response = client.get(f"/api/menu/categories/{category_id}/items")

    assert response.status_code == 200
    assert len(response.json()) == 6


def test_category_items_endpoint_unknown_category(client):
    response = client.get("/api/menu/categories/9999/items")

    assert response.status_code == 404
    assert response.json()["error"] == "NOT_FOUND"


# =============================================================================
# LOGIN & AUTH
# =============================================================================

def test_login_returns_token_and_user(client):
    response = client.post(
        "/api/admin/login",
        json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["token"].count(".") == 2
    assert body["user"]["email"] == ADMIN_EMAIL
    assert body["user"]["name"] == "مدير المطعم"


def test_login_alias_route(client):
    response = client.post(
        "/api/auth/login",
        json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
    )

    assert response.status_code == 200


def test_login_wrong_password(client):
    response = client.post(
        "/api/admin/login",
        json={"email": ADMIN_EMAIL, "password": "wrong"},
    )

    assert response.status_code == 401
    assert response.json() == {
        "success": False,
        "error": "AUTHENTICATION_ERROR",
        "detail": "Invalid credentials",
    }


@pytest.mark.parametrize("body", [{}, {"email": ADMIN_EMAIL}, {"password": "x"}])
def test_login_missing_fields(client, body):
    response = client.post("/api/admin/login", json=body)

    assert response.status_code == 400
    assert response.json()["detail"] == "Email and password are required"


def test_admin_routes_require_token(client):
    assert client.get("/api/admin/categories").status_code == 401
    assert client.get("/api/admin/items").status_code == 401
    assert client.get("/api/admin/settings").status_code == 401


def test_prefix_tokens_are_rejected(client):
    response = client.get(
        "/api/admin/categories",
        headers={"Authorization": "Bearer admin-token-123"},
    )

    assert response.status_code == 401


# =============================================================================
# ADMIN CATEGORIES
# =============================================================================

def test_admin_lists_all_categories(client, auth_headers):
    response = client.get("/api/admin/categories", headers=auth_headers)

    assert response.status_code == 200
    assert len(response.json()) == 5


def test_create_category_defaults_order_to_next(client, auth_headers):
    category = create_category(client, auth_headers, name="  السلطات  ")

    assert category["name"] == "السلطات"
    assert category["order"] == 6
    assert category["visible"] is True
    assert category["items"] == []


def test_create_category_requires_name(client, auth_headers):
    response = client.post(
        "/api/admin/categories",
        json={"description": "بدون اسم"},
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"


def test_new_category_appears_in_cached_menu(client, auth_headers):
    assert len(client.get("/api/menu").json()) == 5

    create_category(client, auth_headers, name="السلطات")

    assert len(client.get("/api/menu").json()) == 6


def test_hidden_category_is_excluded_from_public_menu(client, auth_headers):
    hidden = create_category(client, auth_headers, name="سري", visible=False)

    names = [c["name"] for c in client.get("/api/menu").json()]
    assert "سري" not in names

    response = client.get(f"/api/menu/categories/{hidden['id']}/items")
    assert response.status_code == 404

    admin_names = [
        c["name"] for c in client.get("/api/admin/categories", headers=auth_headers).json()
    ]
    assert "سري" in admin_names


def test_partial_category_update(client, auth_headers):
    category = create_category(client, auth_headers, name="السلطات", description="طازجة")

    response = client.put(
        f"/api/admin/categories/{category['id']}",
        json={"visible": False},
        headers=auth_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["visible"] is False
    assert body["name"] == "السلطات"
    assert body["description"] == "طازجة"


def test_update_unknown_category(client, auth_headers):
    response = client.put(
        "/api/admin/categories/9999",
        json={"name": "x"},
        headers=auth_headers,
    )

    assert response.status_code == 404
    assert response.json()["detail"] == "Category with id 9999 not found"


def test_delete_category_removes_its_items(client, auth_headers):
    menu = client.get("/api/menu").json()
    category_id = menu[0]["id"]

    response = client.delete(f"/api/admin/categories/{category_id}", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Category deleted successfully"}

    items = client.get("/api/admin/items", headers=auth_headers).json()
    assert len(items) == 24
    assert all(item["categoryId"] != category_id for item in items)
    assert len(client.get("/api/menu").json()) == 4


# =============================================================================
# ADMIN ITEMS
# =============================================================================

def test_create_item(client, auth_headers):
    category = create_category(client, auth_headers, name="السلطات")

    item = create_item(
        client,
        auth_headers,
        name="سلطة يونانية",
        price="18 ريال",
        categoryId=category["id"],
    )

    assert item["categoryId"] == category["id"]
    assert item["category"]["name"] == "السلطات"

    public = client.get(f"/api/menu/categories/{category['id']}/items").json()
    assert [i["name"] for i in public] == ["سلطة يونانية"]


def test_create_item_in_unknown_category(client, auth_headers):
    response = client.post(
        "/api/admin/items",
        json={"name": "x", "price": "1", "categoryId": 9999},
        headers=auth_headers,
    )

    assert response.status_code == 404


def test_create_item_requires_price(client, auth_headers):
    category_id = client.get("/api/menu").json()[0]["id"]

    response = client.post(
        "/api/admin/items",
        json={"name": "x", "categoryId": category_id},
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"


def test_update_item_moves_category(client, auth_headers):
    source = create_category(client, auth_headers, name="أ")
    target = create_category(client, auth_headers, name="ب")
    item = create_item(client, auth_headers, name="صنف", price="5", categoryId=source["id"])

    response = client.put(
        f"/api/admin/items/{item['id']}",
        json={"name": "صنف معدل", "price": "7", "categoryId": target["id"]},
        headers=auth_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "صنف معدل"
    assert body["categoryId"] == target["id"]
    assert body["category"]["name"] == "ب"


def test_delete_item(client, auth_headers):
    category = create_category(client, auth_headers, name="السلطات")
    item = create_item(client, auth_headers, name="صنف", price="5", categoryId=category["id"])

    response = client.delete(f"/api/admin/items/{item['id']}", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["message"] == "Item deleted successfully"
    assert client.get(f"/api/admin/items/{item['id']}", headers=auth_headers).status_code == 404


# =============================================================================
# ADMIN SETTINGS
# =============================================================================

def test_partial_settings_update(client, auth_headers):
    assert client.get("/api/settings").json()["name"] == "مطعمنا المميز"

    response = client.put(
        "/api/admin/settings",
        json={"name": "مطعم الشام", "primaryColor": "#123456"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "مطعم الشام"
    assert body["primaryColor"] == "#123456"
    assert body["secondaryColor"] == "#ea580c"

    public = client.get("/api/settings").json()
    assert public["name"] == "مطعم الشام"


def test_invalid_color_is_rejected(client, auth_headers):
    response = client.put(
        "/api/admin/settings",
        json={"primaryColor": "orange"},
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"
