from typing import List

from fastapi import APIRouter, Depends

from ..deps import get_storage
from ..schemas import TaskOut, TaskCreateIn, TaskStatusIn
from ..services.tasks import create_task, set_task_status
from ..storage import Storage

router = APIRouter(prefix="/api/tasks", tags=["tasks"])

@router.get("/today/{hotel_id}", response_model=List[TaskOut])
def api_today_tasks(hotel_id: int, storage: Storage = Depends(get_storage)):
    return storage.get_today_tasks(hotel_id)

@router.get("/hotel/{hotel_id}", response_model=List[TaskOut])
def api_hotel_tasks(hotel_id: int, storage: Storage = Depends(get_storage)):
    return storage.get_tasks_by_hotel(hotel_id)

@router.post("", response_model=TaskOut, status_code=201)
def api_create_task(payload: TaskCreateIn, storage: Storage = Depends(get_storage)):
    return create_task(
        storage,
        hotel_id=payload.hotel_id,
        title=payload.title.strip(),
        description=payload.description,
        assigned_to=payload.assigned_to,
        status=payload.status.value,
        priority=payload.priority.value,
        due_date=payload.due_date,
    )

@router.patch("/{task_id}/status", response_model=TaskOut)
def api_task_status(task_id: int, payload: TaskStatusIn, storage: Storage = Depends(get_storage)):
    return set_task_status(storage, task_id, payload.status)
