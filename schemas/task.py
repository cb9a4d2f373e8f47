# schemas/task.py
from pydantic import BaseModel, Field
from datetime import date
from uuid import UUID

# "00:00"〜"24:00"
HHMM_PATTERN = r"^(([01]\d|2[0-3]):[0-5]\d|24:00)$"

class TaskBase(BaseModel):
    task_date: date
    start_time: str = Field(pattern=HHMM_PATTERN)
    end_time: str = Field(pattern=HHMM_PATTERN)
    description: str = Field(min_length=1)

class TaskCreate(TaskBase):
    completed: bool = False

class TaskUpdate(BaseModel):
    # 更新できるのは完了フラグだけ
    completed: bool

class TaskResponse(TaskBase):
    id: UUID
    user_id: UUID
    completed: bool

    class Config:
        from_attributes = True  # pydantic v2
