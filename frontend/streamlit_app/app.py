import os
from datetime import date

import streamlit as st

from client.api import ScheduleClient
from client.session import LOGIN, REGISTER, TASKS, guard, login, register
from client.task_manager import TaskManager

SITE_URL = os.getenv("SITE_URL", "http://localhost:8501")

st.set_page_config(page_title="タスク管理", layout="centered")


def notify(level: str, message: str) -> None:
    st.toast(message, icon="✅" if level == "success" else "⚠️")


if "api" not in st.session_state:
    st.session_state.api = ScheduleClient()
if "page" not in st.session_state:
    st.session_state.page = TASKS
if "manager" not in st.session_state:
    st.session_state.manager = TaskManager(st.session_state.api, notify=notify)

api: ScheduleClient = st.session_state.api
manager: TaskManager = st.session_state.manager


def go(page: str) -> None:
    st.session_state.page = page
    st.rerun()


def login_page() -> None:
    st.header("ログイン")
    with st.form("login"):
        email = st.text_input("メールアドレス")
        password = st.text_input("パスワード", type="password")
        if st.form_submit_button("ログイン", use_container_width=True):
            go(login(api, email, password, notify))
    if st.button("アカウントをお持ちでない方はこちら"):
        go(REGISTER)


def register_page() -> None:
    st.header("新規登録")
    with st.form("register"):
        email = st.text_input("メールアドレス")
        password = st.text_input("パスワード", type="password")
        if st.form_submit_button("登録", use_container_width=True):
            go(register(api, email, password, notify, email_redirect_to=f"{SITE_URL}/login"))
    if st.button("すでにアカウントをお持ちの方はこちら"):
        go(LOGIN)


def task_page() -> None:
    head, picker, out = st.columns([3, 2, 1])
    head.header("タスク管理")
    picked = picker.date_input("日付", value=date.fromisoformat(manager.selected_date))
    manager.select_date(picked.isoformat())
    if out.button("ログアウト"):
        go(manager.logout())

    desc, start, end, add = st.columns([4, 2, 2, 1])
    manager.new_task = desc.text_input("新しいタスク", value=manager.new_task)

    start_options = [""] + list(manager.start_time_options())
    manager.set_start_time(start.selectbox(
        "開始時間", start_options, index=start_options.index(manager.start_time),
    ))

    end_options = [""] + list(manager.end_time_options())
    manager.set_end_time(end.selectbox(
        "終了時間", end_options,
        index=end_options.index(manager.end_time) if manager.end_time in end_options else 0,
        disabled=not manager.start_time,
    ))

    if add.button("追加", key="add"):
        if manager.add_task():
            st.rerun()

    for task in manager.tasks:
        check, label, span = st.columns([1, 6, 2])
        # 完了の切り替えはクリック時の1回だけ（失敗しても再実行で繰り返さない）
        check.button(
            "✅" if task["completed"] else "⬜",
            key=f"toggle-{task['id']}",
            on_click=manager.toggle_task_completion,
            args=(task["id"], task["completed"]),
        )
        label.markdown(f"~~{task['description']}~~" if task["completed"] else task["description"])
        span.caption(f"{task['start_time']} - {task['end_time']}")


page = st.session_state.page
if page == TASKS:
    # セッション確認が終わるまではローディング表示
    with st.spinner("Loading..."):
        page = guard(manager.load_user, TASKS)
    st.session_state.page = page

if page == LOGIN:
    login_page()
elif page == REGISTER:
    register_page()
else:
    task_page()
