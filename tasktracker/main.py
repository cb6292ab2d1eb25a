import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from tasktracker.database import get_engine
from tasktracker.exceptions import TaskTrackerError
from tasktracker.logging_setup import setup_logging
from tasktracker.routers.tasks import router as tasks_router
from tasktracker.routers.users import router as users_router
from tasktracker.services.schema import ensure_schema
from tasktracker.utils.validation import first_error_message

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    engine = get_engine()
    # A database that cannot be prepared stops the server from starting
    async with engine.begin() as conn:
        app.state.capabilities = await ensure_schema(conn)
    logger.info("Tasks table ready.")

    yield

    await engine.dispose()


app = FastAPI(
    lifespan=lifespan,
    title="Task Tracker API",
    description="Tasks assigned to users, stored in PostgreSQL",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept"],
)


@app.exception_handler(TaskTrackerError)
async def task_tracker_error_handler(request: Request, exc: TaskTrackerError):
    return JSONResponse(status_code=exc.status_code, content={"erro": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"erro": first_error_message(exc.errors())})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"erro": "Internal server error.", "detalhe": str(exc)},
    )


app.include_router(tasks_router)
app.include_router(users_router)


@app.get("/health")
def health():
    return {"status": "ok"}
