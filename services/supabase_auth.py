"""
Supabase Auth (GoTrue) の REST API を叩く薄いクライアント

supabase-js の signInWithPassword / signUp / signOut に対応する。
getUser 相当はローカルの JWT 検証 (auth/deps.py) で行う。
"""
import os
from typing import Optional

import requests


class AuthError(Exception):
    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _config() -> tuple[str, str]:
    url = os.getenv("SUPABASE_URL")
    anon_key = os.getenv("SUPABASE_ANON_KEY")
    if not url or not anon_key:
        print("❌ [supabase_auth] SUPABASE_URL / SUPABASE_ANON_KEY is not set")
        raise AuthError("SUPABASE_URL / SUPABASE_ANON_KEY is not set", status_code=500)
    return url.rstrip("/"), anon_key


def _headers(anon_key: str, access_token: Optional[str] = None) -> dict:
    headers = {"apikey": anon_key, "Content-Type": "application/json"}
    headers["Authorization"] = f"Bearer {access_token or anon_key}"
    return headers


def _error_message(resp) -> str:
    """GoTrue はバージョンによってエラーのキーが違う"""
    try:
        body = resp.json()
    except ValueError:
        return resp.text or f"HTTP {resp.status_code}"
    if isinstance(body, dict):
        for key in ("error_description", "msg", "message", "error"):
            if body.get(key):
                return str(body[key])
    return f"HTTP {resp.status_code}"


def _raise_for_error(resp) -> None:
    if resp.status_code >= 400:
        message = _error_message(resp)
        print(f"❌ [supabase_auth] {resp.status_code}: {message}")
        raise AuthError(message, status_code=resp.status_code)


def sign_in_with_password(email: str, password: str) -> dict:
    url, anon_key = _config()
    resp = requests.post(
        f"{url}/auth/v1/token",
        params={"grant_type": "password"},
        json={"email": email, "password": password},
        headers=_headers(anon_key),
    )
    _raise_for_error(resp)
    return resp.json()


def sign_up(email: str, password: str, email_redirect_to: Optional[str] = None) -> dict:
    url, anon_key = _config()
    params = {"redirect_to": email_redirect_to} if email_redirect_to else None
    resp = requests.post(
        f"{url}/auth/v1/signup",
        params=params,
        json={"email": email, "password": password},
        headers=_headers(anon_key),
    )
    _raise_for_error(resp)
    return resp.json()


def sign_out(access_token: str) -> None:
    url, anon_key = _config()
    resp = requests.post(
        f"{url}/auth/v1/logout",
        headers=_headers(anon_key, access_token),
    )
    _raise_for_error(resp)

