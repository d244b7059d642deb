"""Dashboard read models and the notification inbox."""

from crud import request_workflow
from models.requests import RequestStatus
from models.users import UserRole


class TestDashboard:

    def test_global_stats(self, client, db, create_user, create_item, create_request):
        admin = create_user(role=UserRole.ADMIN)
        create_user()
        cable = create_item(name="Cable", category="electrical", quantity=10, min_quantity=2)
        bolt = create_item(name="Bolt", category="hardware", quantity=1, min_quantity=5)
        create_item(name="Retired", category="old", quantity=0, is_active=False)
        approved = create_request([(cable, 3), (bolt, 1)], requester=admin)
        create_request([(cable, 2)], requester=admin)
        request_workflow.set_request_status(db, approved.id, RequestStatus.APPROVED)

        stats = client.get("/dashboard/stats").json()

        assert stats["total_users"] == 2
        assert stats["users_by_role"] == {"admin": 1, "manager": 0, "user": 1}
        assert stats["total_items"] == 2
        assert stats["total_quantity"] == 7
        assert stats["low_stock_items"] == 1
        assert stats["total_categories"] == 2
        assert stats["total_requests"] == 2
        assert stats["requests_by_status"]["approved"] == 1
        assert stats["requests_by_status"]["pending"] == 1
        assert stats["recent_requests"] == 2
        assert stats["top_requested_items"][0] == {"name": "Cable", "category": "electrical", "total_requested": 5}
        assert len(stats["recent_activity"]) == 2

    def test_user_stats(self, client, create_user, create_item, create_request):
        me = create_user()
        other = create_user()
        item = create_item(quantity=5)
        create_item(name="Empty", quantity=0)
        create_request([(item, 2)], requester=me)
        create_request([(item, 9)], requester=other)

        stats = client.get(f"/dashboard/user/{me.id}").json()

        assert stats["my_requests"]["pending"] == 1
        assert stats["my_requests"]["total"] == 1
        assert stats["available_items"] == 1
        assert stats["recent_requests"] == 1
        assert stats["my_top_requested_items"][0]["total_requested"] == 2
        assert stats["my_recent_activity"][0]["user"] == me.name


class TestNotifications:

    def test_inbox_flow(self, client, create_user):
        user = create_user()
        for title in ("Low stock", "Request approved"):
            response = client.post("/notifications", json={"user_id": user.id, "type": "info", "title": title})
            assert response.status_code == 201

        assert client.get(f"/notifications/user/{user.id}/unread-count").json() == {"count": 2}

        inbox = client.get(f"/notifications/user/{user.id}").json()
        assert [n["title"] for n in inbox] == ["Request approved", "Low stock"]

        assert client.patch(f"/notifications/{inbox[0]['id']}/read").status_code == 200
        assert client.get(f"/notifications/user/{user.id}/unread-count").json() == {"count": 1}

        marked = client.patch(f"/notifications/user/{user.id}/mark-all-read").json()
        assert marked["success"] is True
        assert client.get(f"/notifications/user/{user.id}/unread-count").json() == {"count": 0}

    def test_mark_unknown(self, client):
        assert client.patch("/notifications/9999/read").status_code == 404
