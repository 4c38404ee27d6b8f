"""
Tests for ingredient and extra endpoints.
"""

from store_api.models import Ingredient, ProductExtra, ProductIngredient


class TestIngredients:

    def test_create_and_get(self, client, staff_headers):
        response = client.post(
            "/api/store/ingredients",
            json={"name": "Basilic", "allergens": [], "isVegetarian": True, "isVegan": True},
            headers=staff_headers,
        )

        assert response.status_code == 201
        ingredient = response.json()["data"]
        assert ingredient["slug"] == "basilic"

        fetched = client.get(f"/api/store/ingredients/{ingredient['id']}").json()["data"]
        assert fetched["isVegan"] is True

    def test_unknown_allergen_is_400(self, client, staff_headers):
        response = client.post(
            "/api/store/ingredients",
            json={"name": "Mystery", "allergens": ["kryptonite"]},
            headers=staff_headers,
        )

        assert response.status_code == 400

    def test_filter_by_dietary_flag(self, client, staff_headers, seed_ingredient):
        client.post("/api/store/ingredients", json={"name": "Jambon"}, headers=staff_headers)

        vegetarian = client.get(
            "/api/store/ingredients", params={"isVegetarian": "true"}
        ).json()["data"]

        assert [i["name"] for i in vegetarian] == ["Mozzarella"]

    def test_search_matches_name_or_description(self, client, db_session, seed_ingredient):
        db_session.add_all([
            Ingredient(name="Tomate", slug="tomate"),
            Ingredient(name="Sauce", slug="sauce", description="Coulis de TOMATE"),
            Ingredient(name="Basilic", slug="basilic"),
        ])
        db_session.commit()

        body = client.get("/api/store/ingredients", params={"search": "tomate"}).json()

        assert [i["name"] for i in body["data"]] == ["Sauce", "Tomate"]
        assert body["total"] == 2

    def test_search_wildcards_are_literal(self, client, db_session):
        db_session.add_all([Ingredient(name="100% cacao", slug="cacao"), Ingredient(name="Sucre", slug="sucre")])
        db_session.commit()

        found = client.get("/api/store/ingredients", params={"search": "%"}).json()["data"]

        assert [i["name"] for i in found] == ["100% cacao"]

    def test_over_long_search_is_400(self, client):
        response = client.get("/api/store/ingredients", params={"search": "x" * 101})

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "search"

    def test_sort_order_descending(self, client, db_session, seed_ingredient):
        db_session.add_all([Ingredient(name="Basilic", slug="basilic"), Ingredient(name="Origan", slug="origan")])
        db_session.commit()

        names = [
            i["name"]
            for i in client.get(
                "/api/store/ingredients", params={"sortBy": "name", "sortOrder": "desc"}
            ).json()["data"]
        ]

        assert names == ["Origan", "Mozzarella", "Basilic"]

    def test_unknown_sort_is_400(self, client):
        response = client.get("/api/store/ingredients", params={"sortBy": "price"})

        assert response.status_code == 400

    def test_list_is_paginated(self, client, db_session):
        db_session.add_all([Ingredient(name=f"Ingredient {n}", slug=f"ingredient-{n}") for n in range(5)])
        db_session.commit()

        body = client.get("/api/store/ingredients", params={"page": "3", "limit": "2"}).json()

        assert [i["name"] for i in body["data"]] == ["Ingredient 4"]
        assert (body["total"], body["page"], body["limit"], body["totalPages"]) == (5, 3, 2, 3)

    def test_delete_unused(self, client, admin_headers, seed_ingredient):
        response = client.delete(f"/api/store/ingredients/{seed_ingredient.id}", headers=admin_headers)

        assert response.status_code == 200

    def test_delete_used_by_product_is_409(
        self, client, admin_headers, db_session, make_product, seed_ingredient
    ):
        product = make_product()
        db_session.add(ProductIngredient(product_id=product.id, ingredient_id=seed_ingredient.id))
        db_session.commit()

        response = client.delete(f"/api/store/ingredients/{seed_ingredient.id}", headers=admin_headers)

        assert response.status_code == 409
        assert response.json()["details"] == {"productCount": 1}


class TestExtras:

    def test_create(self, client, staff_headers):
        response = client.post(
            "/api/store/extras",
            json={"name": "Sauce piquante", "type": "sauce", "price": 0.5},
            headers=staff_headers,
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["type"] == "sauce"
        assert data["maxQuantity"] == 1

    def test_unknown_type_is_400(self, client, staff_headers):
        response = client.post(
            "/api/store/extras", json={"name": "X", "type": "dessert"}, headers=staff_headers
        )

        assert response.status_code == 400

    def test_filter_by_type(self, client, staff_headers, seed_extra):
        client.post("/api/store/extras", json={"name": "Frites", "type": "side"}, headers=staff_headers)

        sizes = client.get("/api/store/extras", params={"type": "size"}).json()["data"]

        assert [e["name"] for e in sizes] == ["Grande taille"]

    def test_update_price(self, client, staff_headers, seed_extra):
        response = client.put(
            f"/api/store/extras/{seed_extra.id}", json={"price": 4.0}, headers=staff_headers
        )

        assert response.status_code == 200
        assert response.json()["data"]["price"] == 4.0

    def test_delete_used_by_product_is_409(
        self, client, admin_headers, db_session, make_product, seed_extra
    ):
        product = make_product()
        db_session.add(ProductExtra(product_id=product.id, extra_id=seed_extra.id))
        db_session.commit()

        response = client.delete(f"/api/store/extras/{seed_extra.id}", headers=admin_headers)

        assert response.status_code == 409
        assert response.json()["error"].startswith("Cannot delete extra used by products")
