import os
import uuid
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from sqlalchemy.orm import Session

from db.database import get_db
from models.user import User

security = HTTPBearer()

JWT_ALGORITHM = "HS256"  # Supabase Auth は HS256 固定


def decode_token(token: str) -> dict:
    # .env の SUPABASE_JWT_SECRET はリクエスト時に読む（テストで差し替えられるように）
    secret = os.getenv("SUPABASE_JWT_SECRET")
    if not secret:
        print("❌ [DEBUG] SUPABASE_JWT_SECRET が設定されていません")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="SUPABASE_JWT_SECRET is not set",
        )

    try:
        # Supabase の JWT には 'aud': 'authenticated' が入っているので aud 検証はしない
        payload = jwt.decode(
            token,
            secret,
            algorithms=[JWT_ALGORITHM],
            options={"verify_aud": False}
        )
        user_id = payload.get("sub")
        if not user_id:
            raise JWTError("Missing subject claim")
        payload["sub"] = uuid.UUID(user_id)
    except (JWTError, ValueError) as e:
        print(f"❌ [DEBUG] JWT検証エラー: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid or expired JWT token: {str(e)}",
        )

    return payload


def get_access_token(credentials: HTTPAuthorizationCredentials = Depends(security)) -> str:
    return credentials.credentials


def get_current_user(
    token: str = Depends(get_access_token),
    db: Session = Depends(get_db)
):
    payload = decode_token(token)
    user_id = payload["sub"]

    user = db.query(User).filter(User.user_id == user_id).first()

    # 初回アクセス時は自動作成
    if user is None:
        print(f"🆕 [DEBUG] 新規ユーザー登録: {user_id}")
        try:
            user = User(user_id=user_id, email=payload.get("email"))
            db.add(user)
            db.commit()
            db.refresh(user)
        except Exception as e:
            db.rollback()
            print(f"❌ [DEBUG] ユーザー作成失敗: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Could not create user in database."
            )

    return user
