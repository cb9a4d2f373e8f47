# schemas/auth.py
from pydantic import BaseModel
from datetime import datetime
from typing import Optional
from uuid import UUID

class Credentials(BaseModel):
    email: str
    password: str

class RegisterRequest(Credentials):
    email_redirect_to: Optional[str] = None

class SessionResponse(BaseModel):
    access_token: str
    refresh_token: Optional[str] = None
    user_id: str
    email: Optional[str] = None

class MessageResponse(BaseModel):
    message: str

class MeResponse(BaseModel):
    user_id: UUID
    email: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True
