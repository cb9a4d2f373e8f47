import os
import uuid

# db.database は import 時に DATABASE_URL を読むので先に設定する
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SUPABASE_JWT_SECRET"] = "test-jwt-secret"

import pytest
from fastapi.testclient import TestClient

from client.api import ApiError
from db.database import Base, engine
from gen_jwt import create_token
from main import app


@pytest.fixture(autouse=True)
def _tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def user_id():
    return str(uuid.uuid4())


@pytest.fixture
def token(user_id):
    return create_token(user_id, "user@example.com")


@pytest.fixture
def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


class FakeApi:
    """ScheduleClient の代わり。fail に操作名を入れるとその操作が失敗する"""

    def __init__(self, user=None, rows=None):
        self.user = user
        self.rows = rows if rows is not None else {}
        self.fail = set()
        self.calls = []
        self._next_id = 1

    def _maybe_fail(self, name):
        self.calls.append(name)
        if name in self.fail:
            raise ApiError(f"{name} failed", status_code=500)

    def get_user(self):
        return self.user

    def select_tasks(self, task_date):
        self._maybe_fail("select")
        return [dict(r) for r in self.rows.get(task_date, [])]

    def insert_task(self, task):
        self._maybe_fail("insert")
        row = {**task, "id": f"t{self._next_id}", "user_id": self.user["user_id"]}
        self._next_id += 1
        self.rows.setdefault(task["task_date"], []).append(row)
        return row

    def update_task(self, task_id, completed):
        self._maybe_fail("update")
        return {"id": task_id, "completed": completed}

    def sign_out(self):
        self._maybe_fail("sign_out")


@pytest.fixture
def make_api():
    return FakeApi
