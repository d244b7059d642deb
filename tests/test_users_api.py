"""Registration, lookup and login."""

from models.users import User
from utils.auth_utils import is_hashed, verify_password, hash_password


class TestPasswords:

    def test_hash_round_trip(self):
        stored = hash_password("s3cret")

        assert is_hashed(stored)
        assert verify_password("s3cret", stored)
        assert not verify_password("wrong", stored)

    def test_plaintext_fallback(self):
        assert not is_hashed("legacy-pass")
        assert verify_password("legacy-pass", "legacy-pass")
        assert not verify_password("legacy", "legacy-pass")

    def test_empty_values(self):
        assert not verify_password("", "x")
        assert not verify_password("x", "")


class TestUsers:

    def test_register_hashes_password(self, client, db):
        response = client.post("/users", json={
            "name": "Sam", "email": "sam@example.com", "password": "pw", "role": "manager",
        })

        assert response.status_code == 201
        user = response.json()["user"]
        assert user["username"] == "Sam"
        assert user["role"] == "manager"
        stored = db.query(User).filter(User.email == "sam@example.com").one().password
        assert stored != "pw"
        assert is_hashed(stored)

    def test_duplicate_email(self, client, create_user):
        create_user(email="dup@example.com")

        response = client.post("/users", json={"name": "X", "email": "dup@example.com", "password": "pw"})

        assert response.status_code == 400

    def test_missing_fields(self, client):
        assert client.post("/users", json={"email": "a@example.com"}).status_code == 400

    def test_lookup_by_email(self, client, create_user):
        create_user(name="Lee", email="lee@example.com")

        assert client.get("/users/email/lee@example.com").json()["name"] == "Lee"
        assert client.get("/users/email/nobody@example.com").status_code == 404

    def test_list(self, client, create_user):
        create_user(name="B")
        create_user(name="A")

        assert [u["name"] for u in client.get("/users").json()] == ["A", "B"]


class TestLogin:

    def test_hashed_password(self, client, create_user):
        user = create_user(email="kim@example.com", password="pw")

        response = client.post("/auth/login", json={"email": "kim@example.com", "password": "pw"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["user"] == {"id": user.id, "username": user.name, "email": "kim@example.com", "role": "user"}

    def test_plaintext_password(self, client, create_user):
        create_user(email="old@example.com", password="legacy", hashed=False)

        response = client.post("/auth/login", json={"email": "old@example.com", "password": "legacy"})

        assert response.status_code == 200

    def test_wrong_password(self, client, create_user):
        create_user(email="kim@example.com", password="pw")

        response = client.post("/auth/login", json={"email": "kim@example.com", "password": "nope"})

        assert response.status_code == 401

    def test_unknown_email(self, client):
        response = client.post("/auth/login", json={"email": "ghost@example.com", "password": "pw"})

        assert response.status_code == 401

    def test_missing_credentials(self, client):
        assert client.post("/auth/login", json={"email": "kim@example.com"}).status_code == 400
