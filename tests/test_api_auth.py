"""HTTP tests for /api/auth and /api/health."""


class TestAuth:
    def test_register_login_and_me(self, client):
        response = client.post("/api/auth/register", json={"email": "Cara@Example.com", "password": "secret123"})
        assert response.status_code == 201
        assert response.json()["email"] == "cara@example.com"

        response = client.post("/api/auth/login", json={"email": "cara@example.com", "password": "secret123"})
        assert response.status_code == 200
        token = response.json()["access_token"]

        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200
        assert response.json()["email"] == "cara@example.com"

    def test_duplicate_email(self, client, user):
        response = client.post("/api/auth/register", json={"email": user.email, "password": "secret123"})
        assert response.status_code == 400
        assert response.json() == {"error": "Email already registered"}

    def test_wrong_password(self, client, user):
        response = client.post("/api/auth/login", json={"email": user.email, "password": "nope-nope"})
        assert response.status_code == 401

    def test_cookie_authentication(self, client, user):
        client.post("/api/auth/login", json={"email": user.email, "password": "secret123"})
        response = client.get("/api/auth/me")
        assert response.status_code == 200

        client.post("/api/auth/logout")
        client.cookies.clear()
        assert client.get("/api/auth/me").status_code == 401

    def test_protected_routes_need_a_token(self, client):
        assert client.get("/api/trips").status_code == 401
        assert client.get("/api/trips", headers={"Authorization": "Bearer garbage"}).status_code == 401


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert set(response.json()) == {"status", "database"}
