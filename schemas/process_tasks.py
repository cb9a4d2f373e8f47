# schemas/process_tasks.py
from pydantic import BaseModel, ConfigDict, Field
from typing import List

from schemas.task import HHMM_PATTERN

class ProcessTasksRequest(BaseModel):
    input: str

class GeneratedTask(BaseModel):
    """モデルが返すタスク1件。キーは camelCase のまま返す"""
    model_config = ConfigDict(populate_by_name=True)

    start_time: str = Field(alias="startTime", pattern=HHMM_PATTERN)
    end_time: str = Field(alias="endTime", pattern=HHMM_PATTERN)
    description: str

class ProcessTasksResponse(BaseModel):
    tasks: List[GeneratedTask]
