from sqlalchemy import Column, String, Boolean, Date, ForeignKey, Uuid
from db.database import Base
import uuid

class Task(Base):
    __tablename__ = "tasks"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.user_id"), nullable=False, index=True)
    task_date = Column(Date, nullable=False, index=True)
    start_time = Column(String(5), nullable=False)  # "HH:MM"（24時間, 15分刻み）
    end_time = Column(String(5), nullable=False)
    description = Column(String, nullable=False)
    completed = Column(Boolean, nullable=False, default=False)
