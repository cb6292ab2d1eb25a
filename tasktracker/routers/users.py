from fastapi import APIRouter, Depends, status

from tasktracker.dependencies import get_user_repository
from tasktracker.repositories.users import SqlUserRepository
from tasktracker.schemas.user import User as UserSchema, UserCreate

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[UserSchema])
async def list_users(repo: SqlUserRepository = Depends(get_user_repository)):
    return await repo.list()


@router.post("", response_model=UserSchema, status_code=status.HTTP_201_CREATED)
async def create_user(user: UserCreate, repo: SqlUserRepository = Depends(get_user_repository)):
    return await repo.create(user.name, user.phone)
