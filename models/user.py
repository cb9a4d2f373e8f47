from sqlalchemy import Column, String, DateTime, Uuid
from db.database import Base
import uuid
from datetime import datetime

class User(Base):
    __tablename__ = "users"

    # Supabase Auth のユーザーID (JWT の sub) をそのまま使う
    user_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String)
    created_at = Column(DateTime, default=datetime.utcnow)
