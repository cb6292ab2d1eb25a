import pytest
import pytest_asyncio

from tasktracker.exceptions import ValidationError
from tasktracker.services.app_state import AppState, Screen, TaskTrackerSession
from tasktracker.services.backend import Backend, BackendSelector
from tasktracker.services.local_db import LocalDatabase


@pytest_asyncio.fixture
async def session(tmp_path, api_client):
    # The remote side runs on its own SQLite file through the in-process API
    selector = BackendSelector(LocalDatabase(str(tmp_path / "local.db")), api_client)
    yield TaskTrackerSession(selector)
    await selector.local_db.close()


async def add_ana_and_task(session):
    ana = await session.save_user("Ana Silva", "11999998888")
    form = session.new_task_form()
    form.title = "Buy milk"
    form.description = "Whole milk, 2 units"
    await session.save_task()
    return ana


async def test_starts_without_backend(session):
    assert session.state == AppState()
    with pytest.raises(RuntimeError):
        session.repos


@pytest.mark.parametrize("backend", [Backend.LOCAL, Backend.REMOTE])
async def test_task_flow(session, backend):
    await session.choose_backend(backend)
    ana = await add_ana_and_task(session)

    assert session.state.backend is backend
    assert session.state.screen is Screen.LIST
    [task] = session.state.tasks
    assert task.assignee_id == ana.id
    assert task.status == "pending"

    session.open_detail(task)
    done = await session.complete_task(task)

    assert done.status == "done"
    assert session.state.selected.status == "done"
    assert session.state.tasks[0].status == "done"

    await session.delete_task(task.id)
    assert session.state.tasks == []


async def test_new_task_form_requires_a_user(session):
    await session.choose_backend(Backend.LOCAL)

    with pytest.raises(ValidationError):
        session.new_task_form()


async def test_new_task_form_preselects_first_user(session):
    await session.choose_backend(Backend.LOCAL)
    await session.save_user("Bruno Costa", "21988887777")
    ana = await session.save_user("Ana Silva", "11999998888")

    form = session.new_task_form()

    assert form.assignee_id == ana.id
    assert form.id is None
    assert session.state.screen is Screen.FORM


async def test_edit_form_updates_existing_task(session):
    await session.choose_backend(Backend.LOCAL)
    await add_ana_and_task(session)

    form = session.edit_task_form(session.state.tasks[0])
    form.title = "Buy oat milk"
    await session.save_task()

    assert [t.title for t in session.state.tasks] == ["Buy oat milk"]


@pytest.mark.parametrize("backend", [Backend.LOCAL, Backend.REMOTE])
async def test_editing_selected_task_refreshes_detail(session, backend):
    await session.choose_backend(backend)
    await add_ana_and_task(session)
    task = session.state.tasks[0]
    session.open_detail(task)

    form = session.edit_task_form(task)
    form.title = "Buy oat milk"
    await session.save_task()

    assert session.state.selected.id == task.id
    assert session.state.selected.title == "Buy oat milk"
    assert session.state.selected.description == "Whole milk, 2 units"


async def test_switching_backend_clears_state(session):
    await session.choose_backend(Backend.LOCAL)
    await add_ana_and_task(session)
    assert session.state.tasks

    await session.choose_backend(Backend.REMOTE)

    assert session.state.backend is Backend.REMOTE
    assert session.state.tasks == []
    assert session.state.users == []
    assert session.state.selected is None

    await session.choose_backend(Backend.LOCAL)
    assert [t.title for t in session.state.tasks] == ["Buy milk"]


async def test_leave_backend_resets_everything(session):
    await session.choose_backend(Backend.LOCAL)
    await add_ana_and_task(session)

    session.leave_backend()

    assert session.state == AppState()
    with pytest.raises(RuntimeError):
        session.repos
