from tasktracker.exceptions import NotFoundError
from tasktracker.repositories.base import TaskRepository, UserRepository
from tasktracker.schemas.task import Task, TaskCreate, TaskUpdate
from tasktracker.schemas.user import User, UserCreate
from tasktracker.services.transport import ApiClient
from tasktracker.utils.validation import validate


class RemoteTaskRepository(TaskRepository):
    """Tasks kept by the REST server. Input is checked locally before sending."""

    def __init__(self, client: ApiClient):
        self._client = client

    async def list(self) -> list[Task]:
        return [Task.model_validate(item) for item in await self._client.get("/tasks")]

    async def get(self, task_id: int) -> Task | None:
        try:
            return Task.model_validate(await self._client.get(f"/tasks/{task_id}"))
        except NotFoundError:
            return None

    async def create(self, title: str, description: str, assignee_id: int | None) -> Task:
        data = validate(TaskCreate, title=title, description=description, assignee_id=assignee_id)
        body = await self._client.post("/tasks", json=data.model_dump(mode="json", by_alias=True))
        return Task.model_validate(body)

    async def update(
        self,
        task_id: int,
        title: str | None = None,
        description: str | None = None,
        status: str | None = None,
        assignee_id: int | None = None,
    ) -> Task:
        changes = validate(TaskUpdate, title=title, description=description, status=status, assignee_id=assignee_id)
        payload = changes.model_dump(mode="json", by_alias=True, exclude_none=True)
        return Task.model_validate(await self._client.put(f"/tasks/{task_id}", json=payload))

    async def delete(self, task_id: int) -> bool:
        # The server answers 404 when nothing was removed; that surfaces as NotFoundError
        await self._client.delete(f"/tasks/{task_id}")
        return True


class RemoteUserRepository(UserRepository):

    def __init__(self, client: ApiClient):
        self._client = client

    async def list(self) -> list[User]:
        return [User.model_validate(item) for item in await self._client.get("/users")]

    async def get(self, user_id: int) -> User | None:
        # The API has no single-user endpoint
        for user in await self.list():
            if user.id == user_id:
                return user
        return None

    async def create(self, name: str, phone: str) -> User:
        data = validate(UserCreate, name=name, phone=phone)
        return User.model_validate(await self._client.post("/users", json=data.model_dump(mode="json", by_alias=True)))
