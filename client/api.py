"""
バックエンド API のクライアント

UI 側はこれ経由でだけ認証・タスクの読み書きをする。
session は requests.Session 互換のものなら何でもよい（テストでは TestClient を渡す）。
"""
import os
from typing import Optional

import requests

DEFAULT_API_URL = "http://localhost:8000"


class ApiError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_message(resp) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or f"HTTP {resp.status_code}"
    if isinstance(body, dict):
        # HTTPException は detail、/api/process-tasks は message (+ error)
        if body.get("error"):
            return f"{body.get('message', '')}: {body['error']}".lstrip(": ")
        detail = body.get("detail") or body.get("message")
        if isinstance(detail, list):
            # 422 のバリデーションエラー
            return "; ".join(str(d.get("msg", d)) for d in detail)
        if detail:
            return str(detail)
    return f"HTTP {resp.status_code}"


class ScheduleClient:
    def __init__(self, base_url: Optional[str] = None, session=None, access_token: Optional[str] = None):
        if base_url is None:
            base_url = os.getenv("API_URL", DEFAULT_API_URL)
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.access_token = access_token

    # -------------------------
    # utility
    # -------------------------
    def _request(self, method: str, path: str, **kwargs):
        headers = kwargs.pop("headers", {})
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        try:
            resp = self.session.request(method, f"{self.base_url}{path}", headers=headers, **kwargs)
        except requests.RequestException as e:
            raise ApiError(str(e))

        if resp.status_code >= 400:
            raise ApiError(_error_message(resp), status_code=resp.status_code)
        return resp

    # -------------------------
    # auth
    # -------------------------
    def sign_in_with_password(self, email: str, password: str) -> dict:
        data = self._request("POST", "/auth/login", json={"email": email, "password": password}).json()
        self.access_token = data["access_token"]
        return data

    def sign_up(self, email: str, password: str, email_redirect_to: Optional[str] = None) -> dict:
        payload = {"email": email, "password": password, "email_redirect_to": email_redirect_to}
        return self._request("POST", "/auth/register", json=payload).json()

    def sign_out(self) -> None:
        """サーバー側で失敗してもローカルのトークンは必ず捨てる"""
        if not self.access_token:
            return
        try:
            self._request("POST", "/auth/logout")
        finally:
            self.access_token = None

    def get_user(self) -> Optional[dict]:
        """ログインしていなければ None"""
        if not self.access_token:
            return None
        try:
            return self._request("GET", "/auth/me").json()
        except ApiError as e:
            if e.status_code in (401, 403):
                return None
            raise

    # -------------------------
    # tasks
    # -------------------------
    def select_tasks(self, task_date: str) -> list[dict]:
        return self._request("GET", "/tasks/", params={"task_date": task_date}).json()

    def insert_task(self, task: dict) -> dict:
        return self._request("POST", "/tasks/", json=task).json()

    def update_task(self, task_id: str, completed: bool) -> dict:
        return self._request("PUT", f"/tasks/{task_id}", json={"completed": completed}).json()

    # -------------------------
    # completion proxy
    # -------------------------
    def process_tasks(self, text: str) -> list[dict]:
        return self._request("POST", "/api/process-tasks", json={"input": text}).json()["tasks"]
