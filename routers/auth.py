import os
from fastapi import APIRouter, Depends, HTTPException
from auth.deps import get_access_token, get_current_user
from models.user import User
from schemas.auth import Credentials, RegisterRequest, SessionResponse, MessageResponse, MeResponse
from services import supabase_auth
from services.supabase_auth import AuthError

# ここで /auth プレフィックスを付ける
router = APIRouter(
    prefix="/auth",
    tags=["Auth"],
)


def _http_error(e: AuthError) -> HTTPException:
    # Supabase のエラーメッセージはそのまま返す（画面にそのまま出す）
    return HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/login", response_model=SessionResponse)
def login(body: Credentials):
    try:
        session = supabase_auth.sign_in_with_password(body.email, body.password)
    except AuthError as e:
        raise _http_error(e)

    user = session.get("user") or {}
    return {
        "access_token": session["access_token"],
        "refresh_token": session.get("refresh_token"),
        "user_id": user.get("id", ""),
        "email": user.get("email"),
    }


@router.post("/register", response_model=MessageResponse)
def register(body: RegisterRequest):
    """確認メールを送る。メール内リンクの戻り先はデフォルトでログイン画面"""
    redirect = body.email_redirect_to or f"{os.getenv('SITE_URL', 'http://localhost:8501')}/login"
    try:
        supabase_auth.sign_up(body.email, body.password, email_redirect_to=redirect)
    except AuthError as e:
        raise _http_error(e)

    return {"message": "Confirmation email sent"}


@router.post("/logout", response_model=MessageResponse)
def logout(token: str = Depends(get_access_token)):
    try:
        supabase_auth.sign_out(token)
    except AuthError as e:
        raise _http_error(e)

    return {"message": "Signed out"}


@router.get("/me", response_model=MeResponse)
def get_me(user: User = Depends(get_current_user)):
    """
    現在ログイン中のユーザー情報を返すAPI
    （JWTが正しく検証されないと動かない）
    """
    return user
