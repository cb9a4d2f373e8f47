from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from datetime import datetime, timezone
import time

from db.database import engine, Base

# models を import しておく（create_all がテーブルを認識するため）
from models.user import User
from models.task import Task

from routers import auth, tasks, process_tasks


app = FastAPI(title="Daily Task Scheduler")

STARTED_AT = time.time()

# --- CORS設定（開発用：本番は allow_origins を絞るの推奨）---
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- ルーター ---
app.include_router(auth.router)
app.include_router(tasks.router)
app.include_router(process_tasks.router)


@app.on_event("startup")
def _startup():
    # DBテーブル作成（import時ではなく起動時に回す）
    Base.metadata.create_all(bind=engine)


# --- コールドスタート対策：超軽量エンドポイント（DBに触らない） ---
@app.get("/ping", include_in_schema=False)
def ping():
    return {
        "ok": True,
        "service": "daily-task-scheduler",
        "ts": datetime.now(timezone.utc).isoformat(),
        "uptime_sec": round(time.time() - STARTED_AT, 2),
    }
