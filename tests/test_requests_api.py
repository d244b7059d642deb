"""HTTP surface of the request endpoints."""

from models.request_items import RequestItem
from models.requests import RequestStatus


class TestCreateRequest:

    def test_create_returns_id(self, client, create_user, create_item):
        user = create_user(name="Dana")
        laptop = create_item(name="Laptop", quantity=5)
        chair = create_item(name="Chair", quantity=9)

        response = client.post("/requests", json={
            "project_name": "Office fit-out",
            "requester_id": user.id,
            "reason": "New hires",
            "priority": "high",
            "due_date": "2026-12-01",
            "items": [{"item_id": laptop.id, "quantity": 2}, {"item_id": chair.id, "quantity": 3}],
        })

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True

        fetched = client.get(f"/requests/{body['id']}").json()
        assert fetched["status"] == "pending"
        assert fetched["priority"] == "high"
        assert fetched["requester_name"] == "Dana"
        assert [(line["name"], line["quantity"]) for line in fetched["items"]] == [("Laptop", 2), ("Chair", 3)]

    def test_reason_defaults_to_empty(self, client, create_item):
        item = create_item()

        response = client.post("/requests", json={"project_name": "P", "items": [{"item_id": item.id, "quantity": 1}]})

        fetched = client.get(f"/requests/{response.json()['id']}").json()
        assert fetched["reason"] == ""
        assert fetched["priority"] == "medium"

    def test_missing_project_name(self, client, create_item):
        item = create_item()

        response = client.post("/requests", json={"items": [{"item_id": item.id, "quantity": 1}]})

        assert response.status_code == 400

    def test_missing_items(self, client):
        response = client.post("/requests", json={"project_name": "P", "items": []})

        assert response.status_code == 400

    def test_line_without_quantity(self, client, create_item):
        item = create_item()

        response = client.post("/requests", json={"project_name": "P", "items": [{"item_id": item.id}]})

        assert response.status_code == 400

    def test_non_positive_quantity(self, client, create_item):
        item = create_item()

        response = client.post("/requests", json={"project_name": "P", "items": [{"item_id": item.id, "quantity": 0}]})

        assert response.status_code == 400

    def test_unknown_item(self, client):
        response = client.post("/requests", json={"project_name": "P", "items": [{"item_id": 404, "quantity": 1}]})

        assert response.status_code == 400
        assert "404" in response.json()["detail"]

    def test_deleted_item_cannot_be_requested(self, client, create_item):
        item = create_item(quantity=10)
        client.delete(f"/items/{item.id}")

        response = client.post("/requests", json={"project_name": "P", "items": [{"item_id": item.id, "quantity": 3}]})

        assert response.status_code == 400
        assert client.get(f"/items/{item.id}").json()["quantity"] == 10


class TestStatusEndpoint:

    def test_approve(self, client, db, create_item, create_request):
        item = create_item(quantity=10)
        request = create_request([(item, 5)])

        response = client.patch(f"/requests/{request.id}/status", json={"status": "approved", "approved_by": "boss"})

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": None}
        assert client.get(f"/items/{item.id}").json()["quantity"] == 5

    def test_unknown_request(self, client):
        response = client.patch("/requests/nope/status", json={"status": "approved"})

        assert response.status_code == 404

    def test_locked_request(self, client, create_item, create_request):
        request = create_request([(create_item(), 1)], status=RequestStatus.COMPLETED)

        response = client.patch(f"/requests/{request.id}/status", json={"status": "approved"})

        assert response.status_code == 400

    def test_invalid_status(self, client, create_item, create_request):
        request = create_request([(create_item(), 1)])

        response = client.patch(f"/requests/{request.id}/status", json={"status": "shipped"})

        assert response.status_code == 422

    def test_failed_approval_is_500(self, client, db, create_item, create_request):
        item = create_item(quantity=10)
        request = create_request([(item, 4)])
        db.add(RequestItem(request_id=request.id, item_id=9999, quantity=1))
        db.commit()

        response = client.patch(f"/requests/{request.id}/status", json={"status": "approved"})

        assert response.status_code == 500
        assert client.get(f"/items/{item.id}").json()["quantity"] == 10
        assert client.get(f"/requests/{request.id}").json()["status"] == "pending"


class TestListingAndDeletion:

    def test_list_by_user(self, client, create_user, create_item, create_request):
        alice = create_user(name="Alice")
        bob = create_user(name="Bob")
        item = create_item()
        create_request([(item, 1)], requester=alice, project_name="A1")
        create_request([(item, 1)], requester=bob, project_name="B1")

        mine = client.get(f"/requests/user/{alice.id}").json()

        assert [r["project_name"] for r in mine] == ["A1"]
        assert len(client.get("/requests").json()) == 2

    def test_delete_removes_lines(self, client, db, create_item, create_request):
        item = create_item()
        request_id = create_request([(item, 1), (item, 2)]).id

        response = client.delete(f"/requests/{request_id}")

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert client.get(f"/requests/{request_id}").status_code == 404
        db.expire_all()
        assert db.query(RequestItem).filter(RequestItem.request_id == request_id).count() == 0

    def test_delete_unknown(self, client):
        assert client.delete("/requests/nope").status_code == 404

    def test_export(self, client, create_item, create_request):
        create_request([(create_item(), 2)])

        response = client.get("/requests/export")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith(
            "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        )
        assert response.content[:2] == b"PK"
