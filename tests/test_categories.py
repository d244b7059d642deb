"""Category CRUD and the sync from item categories."""

from models.categories import Category


class TestCategories:

    def test_list_adds_categories_used_by_items(self, client, db, create_item):
        db.add(Category(name="Tools", description="Hand tools"))
        db.commit()
        create_item(name="Hammer", category="tools")
        create_item(name="Desk", category="furniture")
        create_item(name="Old lamp", category="lighting", is_active=False)

        categories = client.get("/categories").json()["categories"]

        by_name = {c["name"]: c["description"] for c in categories}
        assert by_name == {"Tools": "Hand tools", "furniture": "furniture items"}

    def test_create_and_update(self, client):
        created = client.post("/categories", json={"name": "paint", "description": "Wall paint"})
        assert created.status_code == 201

        updated = client.put(f"/categories/{created.json()['id']}", json={"description": "Paint and primer"})

        assert updated.json()["name"] == "paint"
        assert updated.json()["description"] == "Paint and primer"

    def test_create_duplicate(self, client):
        client.post("/categories", json={"name": "paint"})

        assert client.post("/categories", json={"name": "paint"}).status_code == 400

    def test_create_requires_name(self, client):
        assert client.post("/categories", json={"description": "nameless"}).status_code == 400

    def test_delete_refused_while_in_use(self, client, create_item):
        category = client.post("/categories", json={"name": "tools"}).json()
        create_item(category="tools")

        response = client.delete(f"/categories/{category['id']}")

        assert response.status_code == 400
        assert "Cannot delete" in response.json()["detail"]

    def test_delete_allowed_once_items_inactive(self, client, create_item):
        category = client.post("/categories", json={"name": "tools"}).json()
        create_item(category="tools", is_active=False)

        response = client.delete(f"/categories/{category['id']}")

        assert response.status_code == 200
        assert client.delete(f"/categories/{category['id']}").status_code == 404
