from datetime import datetime

from ..errors import NotFound
from ..models import Task, TaskStatus
from ..storage import Storage


def create_task(storage: Storage, **fields) -> Task:
    """Add a task; one created as completed is stamped straight away."""
    if fields.get("status") == TaskStatus.COMPLETED.value:
        fields["completed_at"] = datetime.utcnow()
    return storage.create_task(**fields)


def set_task_status(storage: Storage, task_id: int, status) -> Task:
    """Update a task's status; completing it stamps completed_at once."""
    status = getattr(status, "value", status)
    task = storage.get_task(task_id)
    if task is None:
        raise NotFound("Task not found")
    completed_at = None
    if status == TaskStatus.COMPLETED.value and task.completed_at is None:
        completed_at = datetime.utcnow()
    return storage.save_task_status(task_id, status, completed_at)
