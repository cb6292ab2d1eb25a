import logging
from dataclasses import dataclass, field
from enum import Enum

from tasktracker.exceptions import TaskTrackerError, ValidationError
from tasktracker.models.tasks import DEFAULT_STATUS
from tasktracker.schemas.task import Task
from tasktracker.schemas.user import User
from tasktracker.services.backend import Backend, BackendSelector, Repositories

logger = logging.getLogger(__name__)


class Screen(str, Enum):
    LIST = "list"
    FORM = "form"
    DETAIL = "detail"
    USERS = "users"


@dataclass
class TaskForm:
    id: int | None = None
    title: str = ""
    description: str = ""
    status: str = DEFAULT_STATUS.value
    assignee_id: int | None = None


@dataclass
class AppState:
    """Everything the client keeps in memory for the active backend."""

    backend: Backend | None = None
    screen: Screen = Screen.LIST
    tasks: list[Task] = field(default_factory=list)
    users: list[User] = field(default_factory=list)
    selected: Task | None = None
    form: TaskForm = field(default_factory=TaskForm)
    loading: bool = False


class TaskTrackerSession:
    """
    Headless client controller.

    One backend is active at a time. Choosing or leaving a backend replaces the
    whole AppState, so no task or user loaded from one backend is ever shown
    while the other one is active.
    """

    def __init__(self, selector: BackendSelector):
        self.selector = selector
        self.state = AppState()
        self._repos: Repositories | None = None

    @property
    def repos(self) -> Repositories:
        if self._repos is None:
            raise RuntimeError("No backend selected.")
        return self._repos

    async def choose_backend(self, backend: Backend | str):
        repos = await self.selector.bind(backend)
        self._repos = repos
        self.state = AppState(backend=repos.backend)
        logger.info("Using %s backend", repos.backend.label)
        await self.refresh()

    def leave_backend(self):
        self._repos = None
        self.state = AppState()

    async def refresh(self):
        self.state.loading = True
        try:
            self.state.users = await self.repos.users.list()
            self.state.tasks = await self.repos.tasks.list()
        except TaskTrackerError:
            logger.exception("Could not load data from the %s backend", self.repos.backend.value)
            raise
        finally:
            self.state.loading = False

    def new_task_form(self) -> TaskForm:
        if not self.state.users:
            raise ValidationError("Register a user before creating tasks.")
        self.state.form = TaskForm(assignee_id=self.state.users[0].id)
        self.state.selected = None
        self.state.screen = Screen.FORM
        return self.state.form

    def edit_task_form(self, task: Task) -> TaskForm:
        self.state.form = TaskForm(
            id=task.id,
            title=task.title,
            description=task.description,
            status=task.status or DEFAULT_STATUS.value,
            assignee_id=task.assignee_id,
        )
        self.state.screen = Screen.FORM
        return self.state.form

    def open_detail(self, task: Task):
        self.state.selected = task
        self.state.screen = Screen.DETAIL

    async def save_task(self) -> Task:
        form = self.state.form
        if form.id:
            task = await self.repos.tasks.update(
                form.id,
                title=form.title,
                description=form.description,
                status=form.status,
                assignee_id=form.assignee_id,
            )
            if self.state.selected and self.state.selected.id == task.id:
                self.state.selected = task
        else:
            task = await self.repos.tasks.create(form.title, form.description, form.assignee_id)
        await self.refresh()
        self.state.form = TaskForm(assignee_id=self.state.users[0].id if self.state.users else None)
        self.state.screen = Screen.LIST
        return task

    async def complete_task(self, task: Task) -> Task:
        done = await self.repos.tasks.mark_done(task.id)
        await self.refresh()
        if self.state.selected and self.state.selected.id == task.id:
            self.state.selected = done
        return done

    async def delete_task(self, task_id: int):
        await self.repos.tasks.delete(task_id)
        await self.refresh()

    async def save_user(self, name: str, phone: str) -> User:
        user = await self.repos.users.create(name, phone)
        self.state.users = await self.repos.users.list()
        return user
