"""
Tests for product endpoints: listing, CRUD and bulk updates.
"""

from shared.config.settings import settings
from store_api.models import Product, ProductIngredient


class TestProductListing:
    """GET /api/store/products"""

    def test_popular_filter_paginates_filtered_set(self, client, make_product):
        for i in range(25):
            make_product(name=f"Product {i}", is_popular=i % 2 == 0 and i < 24)

        response = client.get("/api/store/products", params={"isPopular": "true", "limit": 10})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["total"] == 12
        assert len(body["data"]) == 10
        assert body["page"] == 1
        assert body["limit"] == 10
        assert body["totalPages"] == 2

    def test_default_order_is_newest_first(self, client, make_product):
        make_product(name="Old", slug="old")
        make_product(name="New", slug="new")

        data = client.get("/api/store/products").json()["data"]

        assert [p["slug"] for p in data] == ["new", "old"]

    def test_sort_by_price(self, client, make_product):
        make_product(name="B", slug="b", price=12.0)
        make_product(name="A", slug="a", price=8.0)

        by_token = client.get("/api/store/products", params={"sort": "price_asc"}).json()["data"]
        by_params = client.get(
            "/api/store/products", params={"sortBy": "price", "sortOrder": "desc"}
        ).json()["data"]

        assert [p["slug"] for p in by_token] == ["a", "b"]
        assert [p["slug"] for p in by_params] == ["b", "a"]

    def test_sort_token_takes_precedence(self, client, make_product):
        make_product(name="B", slug="b", price=12.0)
        make_product(name="A", slug="a", price=8.0)

        data = client.get(
            "/api/store/products", params={"sort": "price_asc", "sortBy": "price", "sortOrder": "desc"}
        ).json()["data"]

        assert [p["slug"] for p in data] == ["a", "b"]

    def test_invalid_sort_is_400(self, client):
        response = client.get("/api/store/products", params={"sort": "password_asc"})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Invalid parameters"
        assert body["details"][0]["field"] == "sort"

    def test_invalid_filter_is_400(self, client):
        response = client.get("/api/store/products", params={"priceMin": "abc"})

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "priceMin"

    def test_bad_page_and_limit_are_coerced(self, client, make_product):
        make_product()

        body = client.get("/api/store/products", params={"page": "-2", "limit": "abc"}).json()

        assert body["page"] == 1
        assert body["limit"] == 20

    def test_limit_is_capped(self, client):
        body = client.get("/api/store/products", params={"limit": "1000"}).json()

        assert body["limit"] == 100

    def test_names_are_resolved_for_locale(self, client, make_product):
        make_product(name={"fr": "Tarte", "en": "Pie"}, description={"fr": "Maison"})

        item = client.get("/api/store/products", params={"locale": "en"}).json()["data"][0]

        assert item["name"] == {"fr": "Tarte", "en": "Pie"}
        assert item["displayName"] == "Pie"
        assert item["displayDescription"] == "Maison"

    def test_search_matches_other_locales(self, client, make_product):
        make_product(name={"fr": "Tarte", "en": "Pie"}, slug="tarte")
        make_product(name="Pizza", slug="pizza")

        data = client.get("/api/store/products", params={"search": "pie", "locale": "fr"}).json()["data"]

        assert [p["slug"] for p in data] == ["tarte"]

    def test_empty_catalog(self, client):
        body = client.get("/api/store/products").json()

        assert body["data"] == []
        assert body["total"] == 0
        assert body["totalPages"] == 0

    def test_configured_default_page_size_applies(self, client, make_product, monkeypatch):
        monkeypatch.setattr(settings, "default_page_size", 5)
        for i in range(7):
            make_product(name=f"Product {i}")

        missing = client.get("/api/store/products").json()
        invalid = client.get("/api/store/products", params={"limit": "0"}).json()

        assert missing["limit"] == 5
        assert len(missing["data"]) == 5
        assert missing["totalPages"] == 2
        assert invalid["limit"] == 5

    def test_configured_max_page_size_applies(self, client, monkeypatch):
        monkeypatch.setattr(settings, "max_page_size", 150)

        assert client.get("/api/store/products", params={"limit": "150"}).json()["limit"] == 150
        assert client.get("/api/store/products", params={"limit": "500"}).json()["limit"] == 150

    def test_blank_filter_values_are_ignored(self, client, make_product):
        make_product()

        body = client.get("/api/store/products", params={"priceMin": "", "isFeatured": ""}).json()

        assert body["total"] == 1

    def test_snake_case_filters_are_accepted(self, client, make_product):
        make_product(slug="featured", is_featured=True)
        make_product(slug="plain")

        data = client.get("/api/store/products", params={"is_featured": "true"}).json()["data"]

        assert [p["slug"] for p in data] == ["featured"]

    def test_every_bad_filter_is_reported(self, client):
        response = client.get(
            "/api/store/products", params={"isFeatured": "x", "ratingMin": "9", "priceMin": "-1"}
        )

        assert response.status_code == 400
        fields = {d["field"] for d in response.json()["details"]}
        assert fields == {"isFeatured", "ratingMin", "priceMin"}

    def test_overlong_search_is_400(self, client, make_product):
        make_product(name="a" * 100 + "b")

        response = client.get("/api/store/products", params={"search": "a" * 100 + "c"})

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "search"


class TestProductCrud:
    """POST/GET/PUT/DELETE /api/store/products"""

    def test_create_requires_staff(self, client, user_headers):
        response = client.post(
            "/api/store/products", json={"name": "Pizza", "price": 9.5}, headers=user_headers
        )

        assert response.status_code == 403

    def test_create_requires_authentication(self, client):
        response = client.post("/api/store/products", json={"name": "Pizza", "price": 9.5})

        assert response.status_code == 401

    def test_create_with_links(
        self, client, staff_headers, make_category, seed_ingredient, seed_extra
    ):
        category = make_category("Pizzas")

        response = client.post(
            "/api/store/products",
            json={
                "name": {"fr": "Pizza reine", "en": "Queen pizza"},
                "price": 11.0,
                "categoryId": category.id,
                "ingredients": [{"ingredientId": seed_ingredient.id, "quantity": "125g"}],
                "extras": [{"extraId": seed_extra.id, "price": 2.5}],
            },
            headers=staff_headers,
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["slug"] == "pizza-reine"
        assert data["displayName"] == "Pizza reine"
        assert data["category"]["id"] == category.id
        assert data["ingredients"][0]["name"] == "Mozzarella"
        assert data["ingredients"][0]["quantity"] == "125g"
        assert data["extras"][0]["price"] == 2.5

    def test_extra_without_override_uses_extra_price(self, client, staff_headers, seed_extra):
        response = client.post(
            "/api/store/products",
            json={"name": "Calzone", "price": 10, "extras": [{"extraId": seed_extra.id}]},
            headers=staff_headers,
        )

        assert response.json()["data"]["extras"][0]["price"] == 3.0

    def test_duplicate_names_get_unique_slugs(self, client, staff_headers):
        first = client.post("/api/store/products", json={"name": "Pizza", "price": 9}, headers=staff_headers)
        second = client.post("/api/store/products", json={"name": "Pizza", "price": 9}, headers=staff_headers)

        assert first.json()["data"]["slug"] == "pizza"
        assert second.json()["data"]["slug"] == "pizza-2"

    def test_unknown_category_is_400(self, client, staff_headers):
        response = client.post(
            "/api/store/products",
            json={"name": "Pizza", "price": 9, "categoryId": "missing"},
            headers=staff_headers,
        )

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "categoryId"

    def test_unknown_ingredient_is_400(self, client, staff_headers):
        response = client.post(
            "/api/store/products",
            json={"name": "Pizza", "price": 9, "ingredients": [{"ingredientId": "missing"}]},
            headers=staff_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid product links"

    def test_negative_price_is_400(self, client, staff_headers):
        response = client.post(
            "/api/store/products", json={"name": "Pizza", "price": -1}, headers=staff_headers
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid parameters"

    def test_unknown_locale_code_is_400(self, client, staff_headers):
        response = client.post(
            "/api/store/products", json={"name": {"xx": "Pizza"}, "price": 9}, headers=staff_headers
        )

        assert response.status_code == 400

    def test_get_by_id_and_slug(self, client, make_product):
        product = make_product(name="Margherita", slug="margherita")

        by_id = client.get(f"/api/store/products/{product.id}")
        by_slug = client.get("/api/store/products/slug/margherita")

        assert by_id.status_code == 200
        assert by_slug.json()["data"]["id"] == product.id

    def test_missing_product_is_404(self, client):
        response = client.get("/api/store/products/missing")

        assert response.status_code == 404
        assert response.json()["error"] == "Product with ID missing not found"

    def test_missing_slug_is_404(self, client):
        assert client.get("/api/store/products/slug/nope").status_code == 404

    def test_update_renames_and_reslugs(self, client, staff_headers, make_product):
        product = make_product(name="Pizza", slug="pizza", price=9.0)

        response = client.put(
            f"/api/store/products/{product.id}",
            json={"name": "Pizza royale", "price": 12.0},
            headers=staff_headers,
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["slug"] == "pizza-royale"
        assert data["price"] == 12.0

    def test_update_with_null_required_field_keeps_value(self, client, staff_headers, make_product):
        product = make_product(name="Pizza", price=9.0)

        response = client.put(
            f"/api/store/products/{product.id}", json={"price": None}, headers=staff_headers
        )

        assert response.status_code == 200
        assert response.json()["data"]["price"] == 9.0

    def test_update_replaces_links(self, client, staff_headers, db_session, make_product, seed_ingredient):
        product = make_product(name="Pizza")
        db_session.add(ProductIngredient(product_id=product.id, ingredient_id=seed_ingredient.id))
        db_session.commit()

        response = client.put(
            f"/api/store/products/{product.id}",
            json={"ingredients": [{"ingredientId": seed_ingredient.id, "isOptional": True}]},
            headers=staff_headers,
        )

        assert response.status_code == 200
        ingredients = response.json()["data"]["ingredients"]
        assert len(ingredients) == 1
        assert ingredients[0]["isOptional"] is True

    def test_delete_requires_admin(self, client, staff_headers, make_product):
        product = make_product()

        response = client.delete(f"/api/store/products/{product.id}", headers=staff_headers)

        assert response.status_code == 403

    def test_delete(self, client, admin_headers, db_session, make_product):
        product = make_product()
        product_id = product.id

        response = client.delete(f"/api/store/products/{product_id}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Product deleted successfully"}
        db_session.expire_all()
        assert db_session.get(Product, product_id) is None


class TestBulkUpdate:
    """PATCH /api/store/products/bulk-update"""

    def test_reports_per_item(self, client, admin_headers, make_product):
        first = make_product()
        second = make_product()

        response = client.patch(
            "/api/store/products/bulk-update",
            json={"updates": [
                {"id": first.id, "isFeatured": True},
                {"id": second.id},
                {"id": "missing", "isPopular": True},
            ]},
            headers=admin_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "1 products updated successfully, 2 errors"
        assert body["data"] == [
            {"id": first.id, "success": True, "error": None},
            {"id": second.id, "success": False, "error": "No fields to update"},
            {"id": "missing", "success": False, "error": "Product not found"},
        ]

    def test_flags_are_persisted(self, client, admin_headers, make_product):
        product = make_product()

        client.patch(
            "/api/store/products/bulk-update",
            json={"updates": [{"id": product.id, "isTrending": True, "isPopular": True}]},
            headers=admin_headers,
        )
        listed = client.get("/api/store/products", params={"isTrending": "true"}).json()

        assert listed["total"] == 1
        assert listed["data"][0]["isPopular"] is True

    def test_requires_admin(self, client, staff_headers, make_product):
        product = make_product()

        response = client.patch(
            "/api/store/products/bulk-update",
            json={"updates": [{"id": product.id, "isFeatured": True}]},
            headers=staff_headers,
        )

        assert response.status_code == 403

    def test_empty_batch_is_400(self, client, admin_headers):
        response = client.patch(
            "/api/store/products/bulk-update", json={"updates": []}, headers=admin_headers
        )

        assert response.status_code == 400
