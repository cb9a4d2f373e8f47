import pytest

from services import supabase_auth
from services.supabase_auth import AuthError


class FakeResponse:
    def __init__(self, status_code=200, body=None):
        self.status_code = status_code
        self._body = body
        self.text = ""

    def json(self):
        if self._body is None:
            raise ValueError("no body")
        return self._body


@pytest.fixture
def supabase_env(monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", "https://project.supabase.co/")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "anon-key")


def test_me_returns_current_user(client, auth_headers, user_id):
    resp = client.get("/auth/me", headers=auth_headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["user_id"] == user_id
    assert body["email"] == "user@example.com"


def test_login_returns_session(client, monkeypatch):
    def fake_sign_in(email, password):
        assert (email, password) == ("a@example.com", "pw")
        return {"access_token": "at", "refresh_token": "rt", "user": {"id": "u1", "email": email}}

    monkeypatch.setattr(supabase_auth, "sign_in_with_password", fake_sign_in)

    resp = client.post("/auth/login", json={"email": "a@example.com", "password": "pw"})
    assert resp.status_code == 200
    assert resp.json() == {"access_token": "at", "refresh_token": "rt", "user_id": "u1", "email": "a@example.com"}


def test_login_failure_passes_message_through(client, monkeypatch):
    def fake_sign_in(email, password):
        raise AuthError("Invalid login credentials", status_code=400)

    monkeypatch.setattr(supabase_auth, "sign_in_with_password", fake_sign_in)

    resp = client.post("/auth/login", json={"email": "a@example.com", "password": "bad"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Invalid login credentials"


def test_register_uses_default_redirect(client, monkeypatch):
    calls = []
    monkeypatch.setenv("SITE_URL", "https://app.example.com")
    monkeypatch.setattr(supabase_auth, "sign_up", lambda email, password, email_redirect_to=None: calls.append(email_redirect_to) or {})

    resp = client.post("/auth/register", json={"email": "a@example.com", "password": "pw"})
    assert resp.status_code == 200
    assert calls == ["https://app.example.com/login"]


def test_logout_forwards_token(client, auth_headers, token, monkeypatch):
    seen = []
    monkeypatch.setattr(supabase_auth, "sign_out", seen.append)

    resp = client.post("/auth/logout", headers=auth_headers)
    assert resp.status_code == 200
    assert seen == [token]


def test_sign_in_posts_password_grant(supabase_env, monkeypatch):
    captured = {}

    def fake_post(url, params=None, json=None, headers=None):
        captured.update(url=url, params=params, json=json, headers=headers)
        return FakeResponse(200, {"access_token": "at"})

    monkeypatch.setattr(supabase_auth.requests, "post", fake_post)

    assert supabase_auth.sign_in_with_password("a@example.com", "pw") == {"access_token": "at"}
    assert captured["url"] == "https://project.supabase.co/auth/v1/token"
    assert captured["params"] == {"grant_type": "password"}
    assert captured["headers"]["apikey"] == "anon-key"


def test_sign_up_sends_redirect(supabase_env, monkeypatch):
    captured = {}

    def fake_post(url, params=None, json=None, headers=None):
        captured.update(url=url, params=params)
        return FakeResponse(200, {"id": "u1"})

    monkeypatch.setattr(supabase_auth.requests, "post", fake_post)

    supabase_auth.sign_up("a@example.com", "pw", email_redirect_to="https://app/login")
    assert captured["url"].endswith("/auth/v1/signup")
    assert captured["params"] == {"redirect_to": "https://app/login"}


def test_gotrue_error_is_raised_with_message(supabase_env, monkeypatch):
    monkeypatch.setattr(
        supabase_auth.requests, "post",
        lambda *a, **kw: FakeResponse(400, {"error_description": "Invalid login credentials"}),
    )

    with pytest.raises(AuthError) as exc:
        supabase_auth.sign_in_with_password("a@example.com", "bad")
    assert exc.value.message == "Invalid login credentials"
    assert exc.value.status_code == 400


def test_missing_supabase_config_is_server_error(monkeypatch):
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.delenv("SUPABASE_ANON_KEY", raising=False)

    with pytest.raises(AuthError) as exc:
        supabase_auth.sign_out("token")
    assert exc.value.status_code == 500
