"""
ログイン / 新規登録 / 認証ガード

どれも次に表示する画面名 ("login" / "register" / "tasks") を返す。
"""
from typing import Callable, Optional

from client.api import ApiError

LOGIN = "login"
REGISTER = "register"
TASKS = "tasks"


def login(api, email: str, password: str, notify: Callable[[str, str], None]) -> str:
    try:
        api.sign_in_with_password(email, password)
    except ApiError as e:
        # Supabase のメッセージをそのまま出す
        notify("error", e.message)
        return LOGIN

    notify("success", "ログインしました")
    return TASKS


def register(api, email: str, password: str, notify: Callable[[str, str], None],
             email_redirect_to: Optional[str] = None) -> str:
    try:
        api.sign_up(email, password, email_redirect_to=email_redirect_to)
    except ApiError as e:
        print(f"❌ [session] Registration error: {e.message}")
        notify("error", f"登録エラー: {e.message}")
        return REGISTER

    notify("success", "登録確認メールを送信しました。メールをご確認ください。")
    return LOGIN


def guard(has_session: Callable[[], object], page: str = TASKS) -> str:
    """ログインしていなければログイン画面へ飛ばす（has_session は api.get_user など）"""
    return page if has_session() else LOGIN
