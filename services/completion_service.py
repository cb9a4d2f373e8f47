from openai import OpenAI
from pydantic import TypeAdapter
import os
import re
import json
from typing import List

from schemas.process_tasks import GeneratedTask

DEFAULT_MODEL = "gpt-4"

SYSTEM_PROMPT = (
    "You are a helpful assistant that organizes tasks. "
    "Given a list of tasks, you should return a JSON array of tasks with "
    "'startTime', 'endTime', and 'description' fields. "
    "Times should be in 24-hour format (HH:MM)."
)

_FENCE = re.compile(r"^```(?:json)?\s*\n|\n?```\s*$")
_TASK_LIST = TypeAdapter(List[GeneratedTask])


def _strip_fence(text: str) -> str:
    # モデルが ```json ... ``` で包んで返すことがある
    return _FENCE.sub("", text.strip())


def build_messages(user_input: str) -> list[dict]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": user_input},
    ]


def generate_tasks(user_input: str, api_key: str) -> List[GeneratedTask]:
    """
    自由入力のテキストを {startTime, endTime, description} の配列に変換する
    - API エラー / JSON パース失敗 / 形式不一致 はそのまま例外で上に投げる
    - リトライ・タイムアウトはしない
    """
    client = OpenAI(api_key=api_key)

    resp = client.chat.completions.create(
        model=os.getenv("OPENAI_MODEL", DEFAULT_MODEL),
        messages=build_messages(user_input),
    )

    text = resp.choices[0].message.content or ""
    parsed = json.loads(_strip_fence(text))

    return _TASK_LIST.validate_python(parsed)
