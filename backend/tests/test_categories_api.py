"""
Tests for category endpoints.
"""

from shared.config.settings import settings


class TestCategoryCrud:

    def test_create_derives_slug(self, client, staff_headers):
        response = client.post(
            "/api/store/categories", json={"name": "Crème Brûlée"}, headers=staff_headers
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["slug"] == "creme-brulee"
        assert data["isActive"] is True
        assert data["parentId"] is None

    def test_create_requires_staff(self, client, user_headers):
        response = client.post("/api/store/categories", json={"name": "Pizzas"}, headers=user_headers)

        assert response.status_code == 403

    def test_create_with_unknown_parent_is_400(self, client, staff_headers):
        response = client.post(
            "/api/store/categories",
            json={"name": "Pizzas", "parentId": "missing"},
            headers=staff_headers,
        )

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "parentId"

    def test_list_active_only(self, client, make_category):
        make_category("Pizzas")
        make_category("Archive", is_active=False)

        everything = client.get("/api/store/categories").json()["data"]
        active = client.get("/api/store/categories", params={"activeOnly": "true"}).json()["data"]

        assert len(everything) == 2
        assert [c["name"] for c in active] == ["Pizzas"]

    def test_list_is_paginated(self, client, make_category):
        for n in range(5):
            make_category(f"Category {n}", display_order=n)

        body = client.get("/api/store/categories", params={"page": "2", "limit": "2"}).json()

        assert [c["name"] for c in body["data"]] == ["Category 2", "Category 3"]
        assert (body["total"], body["page"], body["limit"], body["totalPages"]) == (5, 2, 2, 3)

    def test_list_uses_configured_page_size(self, client, make_category, monkeypatch):
        monkeypatch.setattr(settings, "default_page_size", 3)
        for n in range(4):
            make_category(f"Category {n}", display_order=n)

        body = client.get("/api/store/categories").json()

        assert len(body["data"]) == 3
        assert body["limit"] == 3
        assert body["totalPages"] == 2

    def test_list_as_hierarchy(self, client, make_category):
        root = make_category("Pizzas")
        make_category("Rouges", parent_id=root.id)

        body = client.get("/api/store/categories", params={"hierarchy": "true"}).json()

        assert body["total"] == 1
        assert body["data"][0]["children"][0]["name"] == "Rouges"

    def test_get_missing_is_404(self, client):
        assert client.get("/api/store/categories/missing").status_code == 404

    def test_rename_reslugs(self, client, staff_headers, make_category):
        category = make_category("Pizzas", slug="pizzas")

        response = client.put(
            f"/api/store/categories/{category.id}", json={"name": "Pizzas maison"}, headers=staff_headers
        )

        assert response.status_code == 200
        assert response.json()["data"]["slug"] == "pizzas-maison"


class TestCategoryTree:

    def test_children_are_nested_under_roots(self, client, make_category):
        root = make_category("Pizzas")
        make_category("Blanches", parent_id=root.id, display_order=2)
        make_category("Rouges", parent_id=root.id, display_order=1)
        make_category("Desserts")

        tree = client.get("/api/store/categories/tree").json()["data"]

        assert sorted(node["name"] for node in tree) == ["Desserts", "Pizzas"]
        pizzas = next(node for node in tree if node["name"] == "Pizzas")
        assert [c["name"] for c in pizzas["children"]] == ["Rouges", "Blanches"]

    def test_inactive_children_are_hidden_with_active_only(self, client, make_category):
        root = make_category("Pizzas")
        make_category("Old", parent_id=root.id, is_active=False)

        tree = client.get("/api/store/categories/tree", params={"activeOnly": "true"}).json()["data"]

        assert tree[0]["children"] == []

    def test_grandchildren_are_nested(self, client, make_category):
        root = make_category("Root")
        child = make_category("Child", parent_id=root.id)
        make_category("Grand", parent_id=child.id)

        tree = client.get("/api/store/categories/tree").json()["data"]

        assert len(tree) == 1
        assert tree[0]["children"][0]["name"] == "Child"
        assert tree[0]["children"][0]["children"][0]["name"] == "Grand"
        assert tree[0]["children"][0]["children"][0]["children"] == []

    def test_inactive_node_hides_its_subtree(self, client, make_category):
        root = make_category("Root")
        child = make_category("Child", parent_id=root.id, is_active=False)
        make_category("Grand", parent_id=child.id)

        tree = client.get("/api/store/categories/tree", params={"activeOnly": "true"}).json()["data"]

        assert [node["name"] for node in tree] == ["Root"]
        assert tree[0]["children"] == []


class TestCategoryHierarchyRules:

    def test_category_cannot_be_its_own_parent(self, client, staff_headers, make_category):
        category = make_category("Pizzas")

        response = client.put(
            f"/api/store/categories/{category.id}", json={"parentId": category.id}, headers=staff_headers
        )

        assert response.status_code == 400

    def test_category_cannot_move_under_its_descendant(self, client, staff_headers, make_category):
        root = make_category("Root")
        child = make_category("Child", parent_id=root.id)
        grandchild = make_category("Grandchild", parent_id=child.id)

        response = client.put(
            f"/api/store/categories/{root.id}", json={"parentId": grandchild.id}, headers=staff_headers
        )

        assert response.status_code == 400
        assert response.json()["error"] == "A category cannot be moved under one of its descendants"


class TestCategoryDelete:

    def test_category_with_products_is_409(self, client, admin_headers, make_category, make_product):
        category = make_category("Pizzas")
        for _ in range(3):
            make_product(category_id=category.id)

        response = client.delete(f"/api/store/categories/{category.id}", headers=admin_headers)

        assert response.status_code == 409
        body = response.json()
        assert body["error"].startswith("Cannot delete category with products")
        assert body["details"] == {"productCount": 3}

    def test_category_with_children_is_409(self, client, admin_headers, make_category):
        root = make_category("Pizzas")
        make_category("Blanches", parent_id=root.id)

        response = client.delete(f"/api/store/categories/{root.id}", headers=admin_headers)

        assert response.status_code == 409
        assert response.json()["details"] == {"childCount": 1}

    def test_empty_category_is_deleted(self, client, admin_headers, make_category):
        category = make_category("Pizzas")

        response = client.delete(f"/api/store/categories/{category.id}", headers=admin_headers)

        assert response.status_code == 200
        assert client.get(f"/api/store/categories/{category.id}").status_code == 404

    def test_delete_requires_admin(self, client, staff_headers, make_category):
        category = make_category("Pizzas")

        response = client.delete(f"/api/store/categories/{category.id}", headers=staff_headers)

        assert response.status_code == 403
