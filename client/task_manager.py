"""
タスク管理画面の状態とロジック

画面（Streamlit）からは描画だけを行い、状態の変更は全部ここを通す。
通知は notify(level, message) で外に出す（level は "success" / "error"）。
"""
from datetime import date
from typing import Callable, Iterator, Optional

from client.api import ApiError

SLOT_MINUTES = 15
SLOTS_PER_DAY = 24 * 60 // SLOT_MINUTES  # 96


def _print_notify(level: str, message: str) -> None:
    print(f"[{level}] {message}")


class TimeSlots:
    """
    start より後（start 自身は含まない）の15分刻みの時刻を "24:00" まで返す

    list を作らずに1つずつ生成する。何度 iterate してもよい。
    """

    def __init__(self, start: str = "00:00"):
        hour, minute = (start or "00:00").split(":")
        self.start = start or "00:00"
        self._start_index = int(hour) * 4 + int(minute) // SLOT_MINUTES

    def __iter__(self) -> Iterator[str]:
        for index in range(self._start_index + 1, SLOTS_PER_DAY + 1):
            total_minutes = index * SLOT_MINUTES
            yield f"{total_minutes // 60:02d}:{total_minutes % 60:02d}"

    def __len__(self) -> int:
        return max(SLOTS_PER_DAY - self._start_index, 0)

    def __repr__(self) -> str:
        return f"TimeSlots(start={self.start!r})"


def generate_time_options(start: str = "00:00") -> TimeSlots:
    return TimeSlots(start)


class TaskManager:
    def __init__(self, api, notify: Optional[Callable[[str, str], None]] = None, today: Optional[date] = None):
        self.api = api
        self.notify = notify or _print_notify
        self.selected_date = (today or date.today()).isoformat()
        self.tasks: list[dict] = []
        self.new_task = ""
        self.start_time = ""
        self.end_time = ""
        self.user_id: Optional[str] = None

    # -------------------------
    # user / date
    # -------------------------
    def load_user(self) -> bool:
        """ログイン中のユーザーを取り直す。いなければ False（ログイン画面へ）"""
        user = self.api.get_user()
        if not user:
            self.user_id = None
            return False

        user_id = str(user["user_id"])
        if user_id != self.user_id:
            self.user_id = user_id
            self.fetch_tasks()
        return True

    def select_date(self, task_date: str) -> None:
        if task_date == self.selected_date:
            return
        self.selected_date = task_date
        self.fetch_tasks()

    # -------------------------
    # tasks
    # -------------------------
    def fetch_tasks(self) -> None:
        if not self.user_id:
            return

        try:
            rows = self.api.select_tasks(self.selected_date)
        except ApiError as e:
            # 取得に失敗したら今のリストはそのまま
            self.notify("error", f"タスクの取得に失敗しました: {e.message}")
            return

        self.tasks = list(rows or [])

    def add_task(self) -> bool:
        if not self.user_id or not self.new_task or not self.start_time or not self.end_time:
            self.notify("error", "タスク、開始時間、終了時間を入力してください")
            return False

        try:
            row = self.api.insert_task({
                "description": self.new_task,
                "start_time": self.start_time,
                "end_time": self.end_time,
                "completed": False,
                "task_date": self.selected_date,
            })
        except ApiError as e:
            self.notify("error", f"タスクの追加に失敗しました: {e.message}")
            return False

        # 並び替えはせず末尾に足すだけ（次の fetch で開始時刻順に戻る）
        self.tasks = [*self.tasks, row]
        self.new_task = ""
        self.start_time = ""
        self.end_time = ""
        self.notify("success", "タスクが追加されました")
        return True

    def toggle_task_completion(self, task_id: str, completed: bool) -> bool:
        try:
            self.api.update_task(task_id, not completed)
        except ApiError as e:
            self.notify("error", f"タスクの更新に失敗しました: {e.message}")
            return False

        self.tasks = [
            {**task, "completed": not completed} if str(task["id"]) == str(task_id) else task
            for task in self.tasks
        ]
        return True

    # -------------------------
    # time pickers
    # -------------------------
    def set_start_time(self, value: str) -> None:
        self.start_time = value
        # 終了時間が開始時間以前になったら選び直してもらう
        if self.end_time and self.end_time <= value:
            self.end_time = ""

    def set_end_time(self, value: str) -> None:
        self.end_time = value

    def start_time_options(self) -> TimeSlots:
        return generate_time_options()

    def end_time_options(self) -> TimeSlots:
        # 開始時間を選ぶまでは終了時間は選べない（"24:00" 以降は空）
        if not self.start_time:
            return TimeSlots("24:00")
        return generate_time_options(self.start_time)

    # -------------------------
    # session
    # -------------------------
    def logout(self) -> str:
        try:
            self.api.sign_out()
        except ApiError as e:
            self.notify("error", f"ログアウトに失敗しました: {e.message}")
        self.user_id = None
        self.tasks = []
        return "login"
