"""Streamlit のタスク画面を AppTest で動かす（API は FakeApi）"""
from datetime import date
from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

from client.session import LOGIN, TASKS
from client.task_manager import TaskManager

APP_PATH = str(Path(__file__).resolve().parents[1] / "frontend" / "streamlit_app" / "app.py")


@pytest.fixture
def api(make_api):
    return make_api(user={"user_id": "u1"}, rows={
        "2024-05-01": [
            {"id": "a", "start_time": "08:00", "end_time": "09:00", "description": "gym", "completed": False},
        ],
    })


@pytest.fixture
def notes():
    return []


@pytest.fixture
def app(api, notes):
    at = AppTest.from_file(APP_PATH, default_timeout=30)
    at.session_state["api"] = api
    at.session_state["page"] = TASKS
    at.session_state["manager"] = TaskManager(
        api, notify=lambda level, msg: notes.append((level, msg)), today=date(2024, 5, 1),
    )
    at.run()
    assert not at.exception
    return at


def test_renders_tasks_for_selected_date(app):
    assert app.session_state["page"] == TASKS
    assert any(md.value == "gym" for md in app.markdown)
    assert app.button(key="toggle-a").label == "⬜"


def test_toggle_success_flips_task(app, api):
    app.button(key="toggle-a").click().run()

    assert not app.exception
    assert api.calls.count("update") == 1
    assert app.session_state["manager"].tasks[0]["completed"] is True
    assert app.button(key="toggle-a").label == "✅"


def test_toggle_failure_calls_update_once(app, api, notes):
    api.fail.add("update")

    app.button(key="toggle-a").click().run()
    app.run()

    assert not app.exception
    assert api.calls.count("update") == 1
    assert notes == [("error", "タスクの更新に失敗しました: update failed")]
    assert app.session_state["manager"].tasks[0]["completed"] is False


def test_add_failure_keeps_list(app, api, notes):
    api.fail.add("insert")
    app.text_input[0].input("write").run()
    app.selectbox[0].select("09:00").run()
    app.selectbox[1].select("10:00").run()
    manager = app.session_state["manager"]
    assert (manager.new_task, manager.start_time, manager.end_time) == ("write", "09:00", "10:00")

    app.button(key="add").click().run()

    assert not app.exception
    assert api.calls.count("insert") == 1
    assert notes == [("error", "タスクの追加に失敗しました: insert failed")]
    assert [t["id"] for t in manager.tasks] == ["a"]


def test_each_run_checks_session_once(make_api, notes):
    api = make_api(user={"user_id": "u1"})
    lookups = []
    get_user = api.get_user
    api.get_user = lambda: lookups.append(1) or get_user()

    at = AppTest.from_file(APP_PATH, default_timeout=30)
    at.session_state["api"] = api
    at.session_state["manager"] = TaskManager(api, notify=lambda *a: notes.append(a), today=date(2024, 5, 1))
    at.run()

    assert not at.exception
    assert len(lookups) == 1


def test_guard_redirects_to_login_without_session(make_api):
    api = make_api(user=None)

    at = AppTest.from_file(APP_PATH, default_timeout=30)
    at.session_state["api"] = api
    at.session_state["manager"] = TaskManager(api, notify=lambda *a: None)
    at.run()

    assert not at.exception
    assert at.session_state["page"] == LOGIN
    assert at.header[0].value == "ログイン"
