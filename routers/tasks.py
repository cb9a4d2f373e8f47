# routers/tasks.py
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from db.database import get_db

from models.task import Task
from schemas.task import TaskCreate, TaskUpdate, TaskResponse
from auth.deps import get_current_user

from datetime import date
from uuid import UUID
from typing import List

router = APIRouter(prefix="/tasks", tags=["Tasks"])


@router.get("/", response_model=List[TaskResponse])
def get_tasks(
    task_date: date = Query(...),
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    """指定日のタスクを開始時刻順で返す（0件なら空リスト）"""
    return (
        db.query(Task)
        .filter(Task.user_id == user.user_id, Task.task_date == task_date)
        .order_by(Task.start_time.asc())
        .all()
    )


@router.post("/", response_model=TaskResponse)
def create_task(task: TaskCreate, db: Session = Depends(get_db), user=Depends(get_current_user)):
    # end_time > start_time のチェックは UI 側（時刻の選択肢）でのみ行う
    new_task = Task(
        user_id=user.user_id,
        task_date=task.task_date,
        start_time=task.start_time,
        end_time=task.end_time,
        description=task.description,
        completed=task.completed,
    )
    db.add(new_task)
    db.commit()
    db.refresh(new_task)
    return new_task


@router.put("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: UUID,
    task_update: TaskUpdate,
    db: Session = Depends(get_db),
    user=Depends(get_current_user)
):
    task = db.query(Task).filter(
        Task.user_id == user.user_id,
        Task.id == task_id
    ).first()

    if not task:
        raise HTTPException(status_code=404, detail="Task not found")

    task.completed = task_update.completed
    db.commit()
    db.refresh(task)
    return task
