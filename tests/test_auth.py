from supabase_auth.errors import AuthRetryableError

from fake_supabase import FakeAuthApiError

CREDENTIALS = {"email": "a@x.com", "password": "123456"}


def test_register(client, db):
    r = client.post("/api/v1/auth/register", json={"email": "a@x.com", "password": "123456"})
    assert r.status_code == 201
    data = r.json()
    assert data["email"] == "a@x.com"
    assert "password" not in data
    assert db.tables["users"][0]["id"] == data["id"]
    assert "a@x.com" in db.auth.accounts


def test_register_duplicate_email(client):
    payload = {"email": "a@x.com", "password": "123456"}
    assert client.post("/api/v1/auth/register", json=payload).status_code == 201

    r = client.post("/api/v1/auth/register", json=payload)
    assert r.status_code == 400
    assert r.json()["detail"] == "Email already registered"


def test_register_duplicate_email_ignores_case(client):
    client.post("/api/v1/auth/register", json={"email": "a@x.com", "password": "123456"})
    r = client.post("/api/v1/auth/register", json={"email": "A@X.com", "password": "654321"})
    assert r.status_code == 400


def test_register_weak_password(client, db):
    r = client.post("/api/v1/auth/register", json={"email": "a@x.com", "password": "12345"})
    assert r.status_code == 400
    assert "at least 6 characters" in r.json()["detail"]
    assert db.auth.accounts == {}


def test_register_malformed_email(client):
    r = client.post("/api/v1/auth/register", json={"email": "not-an-email", "password": "123456"})
    assert r.status_code == 400
    assert r.json()["errors"][0]["field"] == "email"


def test_register_rejected_by_auth_service(client, db):
    # account exists in auth but has no users row yet
    db.auth.admin.create_user({"email": "a@x.com", "password": "123456"})

    r = client.post("/api/v1/auth/register", json={"email": "a@x.com", "password": "123456"})
    assert r.status_code == 400
    assert "already been registered" in r.json()["detail"]


def test_login_and_me(client):
    client.post("/api/v1/auth/register", json={"email": "a@x.com", "password": "123456"})

    r = client.post("/api/v1/auth/login", json={"email": "a@x.com", "password": "123456"})
    assert r.status_code == 200
    token = r.json()
    assert token["token_type"] == "bearer"
    assert token["expires_in"] == 3600

    r = client.get(
        "/api/v1/auth/me",
        headers={"Authorization": f"Bearer {token['access_token']}"},
    )
    assert r.status_code == 200
    assert r.json()["email"] == "a@x.com"


def test_login_wrong_password(client):
    client.post("/api/v1/auth/register", json={"email": "a@x.com", "password": "123456"})

    r = client.post("/api/v1/auth/login", json={"email": "a@x.com", "password": "wrong-one"})
    assert r.status_code == 401
    assert r.headers["www-authenticate"] == "Bearer"


def test_me_requires_session(client):
    assert client.get("/api/v1/auth/me").status_code == 401


def test_session_token_creates_owned_video(client):
    client.post("/api/v1/auth/register", json={"email": "a@x.com", "password": "123456"})
    login = client.post("/api/v1/auth/login", json={"email": "a@x.com", "password": "123456"})
    headers = {"Authorization": f"Bearer {login.json()['access_token']}"}
    me = client.get("/api/v1/auth/me", headers=headers).json()

    r = client.post(
        "/api/v1/videos",
        json={"title": "t", "description": "d", "video_url": "videos/a.mp4"},
        headers=headers,
    )
    assert r.status_code == 201
    assert r.json()["user_id"] == me["id"]


def test_register_auth_service_down(client, db):
    db.auth.fail_with = AuthRetryableError("Connection refused to auth.internal:9999", 0)

    r = client.post("/api/v1/auth/register", json=CREDENTIALS)
    assert r.status_code == 500
    assert r.json()["detail"] == "Registration failed"
    assert "auth.internal" not in r.text


def test_register_auth_service_error(client, db):
    db.auth.fail_with = FakeAuthApiError("database error saving new user", 503)

    r = client.post("/api/v1/auth/register", json=CREDENTIALS)
    assert r.status_code == 500
    assert r.json()["detail"] == "Registration failed"


def test_register_rolls_back_auth_account(client, db):
    db.fail_on[("users", "insert")] = RuntimeError("users insert timed out")

    r = client.post("/api/v1/auth/register", json=CREDENTIALS)
    assert r.status_code == 500
    assert r.json()["detail"] == "Registration failed"
    assert db.auth.accounts == {}
    assert len(db.auth.deleted) == 1

    db.fail_on.clear()
    r = client.post("/api/v1/auth/register", json=CREDENTIALS)
    assert r.status_code == 201
    assert db.tables["users"][0]["id"] == r.json()["id"]


def test_login_auth_service_down(client, db):
    client.post("/api/v1/auth/register", json=CREDENTIALS)
    db.auth.fail_with = AuthRetryableError("Connection refused to auth.internal:9999", 0)

    r = client.post("/api/v1/auth/login", json=CREDENTIALS)
    assert r.status_code == 500
    assert r.json()["detail"] == "Login failed"
    assert "auth.internal" not in r.text
