from app import models


def _set_cookie_header(response) -> str:
    return response.headers.get("set-cookie", "")


def test_register_user(client):
    """Регистрация возвращает пользователя и ставит cookie сессии"""
    response = client.post(
        "/api/users", json={"name": "  Anna ", "email": " Anna@Example.COM "}
    )
    assert response.status_code == 200

    user = response.json()["user"]
    assert user["name"] == "Anna"
    assert user["email"] == "anna@example.com"
    assert user["votes"] == []
    assert len(user["sessionId"]) == 64
    assert "createdAt" in user

    cookie = _set_cookie_header(response)
    assert cookie.startswith(f"session_id={user['sessionId']}")
    assert "HttpOnly" in cookie
    assert "Path=/" in cookie
    assert "Max-Age=86400" in cookie
    assert "samesite=strict" in cookie.lower()


def test_register_duplicate_email_conflict(client, db_session):
    first = client.post(
        "/api/users", json={"name": "Anna", "email": "anna@example.com"}
    )
    assert first.status_code == 200

    second = client.post(
        "/api/users", json={"name": "Other", "email": "ANNA@example.com"}
    )
    assert second.status_code == 400
    assert second.json() == {"error": "User with this email already exists"}

    count = (
        db_session.query(models.User)
        .filter(models.User.email == "anna@example.com")
        .count()
    )
    assert count == 1


def test_register_validation(client):
    r = client.post("/api/users", json={"name": "", "email": "a@example.com"})
    assert r.status_code == 400
    assert "name" in r.json()["error"]

    r = client.post("/api/users", json={"name": "Anna", "email": "   "})
    assert r.status_code == 400

    r = client.post("/api/users", json={"name": "Anna"})
    assert r.status_code == 400
    assert "email" in r.json()["error"]


def test_session_cookie_identifies_user(client, registered):
    """Cookie из регистрации принимается GET /api/users"""
    response = client.get("/api/users")
    assert response.status_code == 200
    assert response.json()["user"]["id"] == registered["id"]
    assert response.json()["user"]["email"] == "anna@example.com"


def test_get_user_without_session(client):
    response = client.get("/api/users")
    assert response.status_code == 401
    assert response.json() == {"error": "No session found"}


def test_get_user_with_unknown_session(client):
    response = client.get("/api/users", headers={"Cookie": "session_id=deadbeef"})
    assert response.status_code == 401


def test_check_user_exists(client, registered):
    r = client.post("/api/users/check", json={"email": "ANNA@example.com"})
    assert r.status_code == 200
    assert r.json() == {"exists": True}

    r = client.post("/api/users/check", json={"email": "nobody@example.com"})
    assert r.status_code == 200
    assert r.json() == {"exists": False}


def test_login_unknown_email(client):
    r = client.post("/api/users/login", json={"email": "nobody@example.com"})
    assert r.status_code == 404
    assert r.json() == {"error": "User not found"}


def test_login_rotates_session(client, registered):
    old_session = registered["sessionId"]
    client.cookies.clear()

    r = client.post("/api/users/login", json={"email": "anna@example.com"})
    assert r.status_code == 200
    user = r.json()["user"]
    assert user["id"] == registered["id"]
    assert user["sessionId"] != old_session
    assert _set_cookie_header(r).startswith(f"session_id={user['sessionId']}")

    # Новая cookie работает, старая нет
    assert client.get("/api/users").json()["user"]["id"] == registered["id"]
    stale = client.get("/api/users", headers={"Cookie": f"session_id={old_session}"})
    assert stale.status_code == 401


def test_logout_clears_cookie(client, registered):
    response = client.delete("/api/users")
    assert response.status_code == 200
    assert response.json() == {"success": True}

    cookie = _set_cookie_header(response)
    assert cookie.startswith("session_id=")
    assert "Max-Age=0" in cookie

    assert client.get("/api/users").status_code == 401
    # Старый токен тоже больше не действует
    stale = client.get(
        "/api/users", headers={"Cookie": f"session_id={registered['sessionId']}"}
    )
    assert stale.status_code == 401


def test_logout_without_session(client):
    response = client.delete("/api/users")
    assert response.status_code == 200
    assert "Max-Age=0" in _set_cookie_header(response)
