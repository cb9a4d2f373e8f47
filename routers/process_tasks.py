# routers/process_tasks.py
import os
from fastapi import APIRouter
from fastapi.responses import JSONResponse

from schemas.process_tasks import ProcessTasksRequest, ProcessTasksResponse
from services import completion_service

router = APIRouter(prefix="/api", tags=["AI"])


@router.post("/process-tasks", response_model=ProcessTasksResponse)
def process_tasks(body: ProcessTasksRequest):
    """
    テキストのタスク一覧を OpenAI で {startTime, endTime, description} の配列に変換する
    （UI からはまだ呼んでいない）
    """
    api_key = os.getenv("OPENAI_API_KEY")

    if not api_key:
        print("❌ [process_tasks] OpenAI API key is not set")
        return JSONResponse(status_code=500, content={"message": "OpenAI API key is not set"})

    try:
        tasks = completion_service.generate_tasks(body.input, api_key)
    except Exception as e:
        print(f"❌ [process_tasks] Error processing tasks: {e}")
        return JSONResponse(
            status_code=500,
            content={"message": "Error processing tasks", "error": str(e)},
        )

    return {"tasks": tasks}


# POST 以外は 405（FastAPI デフォルトの {"detail": ...} ではなく message で返す）
@router.api_route("/process-tasks", methods=["GET", "HEAD", "PUT", "PATCH", "DELETE", "OPTIONS"], include_in_schema=False)
def process_tasks_method_not_allowed():
    return JSONResponse(status_code=405, content={"message": "Method not allowed"})
