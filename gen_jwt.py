"""
開発用: Supabase 互換のアクセストークンを発行する

    python gen_jwt.py <user_id> [email]
"""
import os
import sys
import time
import uuid

from dotenv import load_dotenv
from jose import jwt


def create_token(user_id: str, email: str | None = None, secret: str | None = None, expires_in: int = 60 * 60 * 24) -> str:
    payload = {
        "sub": str(user_id),       # 認証ユーザーID
        "role": "authenticated",   # Supabase の標準ロール
        "aud": "authenticated",
        "exp": int(time.time()) + expires_in,  # デフォルト24時間有効
    }
    if email:
        payload["email"] = email
    return jwt.encode(payload, secret or os.getenv("SUPABASE_JWT_SECRET"), algorithm="HS256")


if __name__ == "__main__":
    load_dotenv()
    user_id = sys.argv[1] if len(sys.argv) > 1 else str(uuid.uuid4())
    email = sys.argv[2] if len(sys.argv) > 2 else None
    print(create_token(user_id, email))
