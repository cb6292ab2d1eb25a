from fastapi import APIRouter, Depends, status

from tasktracker.dependencies import get_task_repository
from tasktracker.exceptions import NotFoundError
from tasktracker.repositories.tasks import SqlTaskRepository
from tasktracker.schemas.task import Task as TaskSchema, TaskCreate, TaskUpdate

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("", response_model=list[TaskSchema])
async def list_tasks(repo: SqlTaskRepository = Depends(get_task_repository)):
    return await repo.list()


@router.get("/{task_id}", response_model=TaskSchema)
async def get_task(task_id: int, repo: SqlTaskRepository = Depends(get_task_repository)):
    task = await repo.get(task_id)
    if task is None:
        raise NotFoundError("Task not found.")
    return task


@router.post("", response_model=TaskSchema, status_code=status.HTTP_201_CREATED)
async def create_task(task_data: TaskCreate, repo: SqlTaskRepository = Depends(get_task_repository)):
    return await repo.create(task_data.title, task_data.description, task_data.assignee_id)


@router.put("/{task_id}", response_model=TaskSchema)
async def update_task(task_id: int, update_data: TaskUpdate, repo: SqlTaskRepository = Depends(get_task_repository)):
    return await repo.update(
        task_id,
        title=update_data.title,
        description=update_data.description,
        status=update_data.status.value if update_data.status else None,
        assignee_id=update_data.assignee_id,
    )


@router.delete("/{task_id}")
async def delete_task(task_id: int, repo: SqlTaskRepository = Depends(get_task_repository)):
    if not await repo.delete(task_id):
        raise NotFoundError("Task not found.")
    return {"status": "removida"}
