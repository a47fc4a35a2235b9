"""FastAPI dependency wiring.

Repositories, the password hasher and every use case are built here per
request. Tests override the repository and hasher providers with fakes.
"""

import os

from fastapi import Depends, HTTPException

from adapter.bcrypt.password_hasher import BCRYPT_ROUNDS, BcryptPasswordHasher
from adapter.mongodb.connection import get_mongodb_client, DATABASE_NAME
from adapter.mongodb.task_repository import MongoTaskRepository
from adapter.mongodb.user_repository import MongoUserRepository
from port.password_hasher import PasswordHasher
from port.task_repository import TaskRepository
from port.user_repository import UserRepository
from services.task_service import (
    CreateTaskService,
    DeleteTaskService,
    GetTaskForUserService,
    ListTasksForUserService,
    UpdateTaskService,
    UpdateTaskStatusService,
)
from services.user_service import (
    AuthenticateUserService,
    ChangePasswordService,
    GetCurrentUserProfileService,
    RegisterUserService,
    UpdateProfileService,
)

PASSWORD_HASH_ROUNDS = int(os.getenv('BCRYPT_ROUNDS', BCRYPT_ROUNDS))


def _get_db():
    """Get MongoDB database, raising 503 if unavailable."""
    client = get_mongodb_client()
    if client is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return client[DATABASE_NAME]


# ── capabilities ────────────────────────────────────────────


def get_user_repo() -> UserRepository:
    return MongoUserRepository(_get_db())


def get_task_repo() -> TaskRepository:
    return MongoTaskRepository(_get_db())


def get_password_hasher() -> PasswordHasher:
    return BcryptPasswordHasher(rounds=PASSWORD_HASH_ROUNDS)


# ── user use cases ──────────────────────────────────────────


def get_register_user_service(
    users: UserRepository = Depends(get_user_repo),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> RegisterUserService:
    return RegisterUserService(users, hasher)


def get_authenticate_user_service(
    users: UserRepository = Depends(get_user_repo),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> AuthenticateUserService:
    return AuthenticateUserService(users, hasher)


def get_profile_service(
    users: UserRepository = Depends(get_user_repo),
) -> GetCurrentUserProfileService:
    return GetCurrentUserProfileService(users)


def get_update_profile_service(
    users: UserRepository = Depends(get_user_repo),
) -> UpdateProfileService:
    return UpdateProfileService(users)


def get_change_password_service(
    users: UserRepository = Depends(get_user_repo),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> ChangePasswordService:
    return ChangePasswordService(users, hasher)


# ── task use cases ──────────────────────────────────────────


def get_create_task_service(
    tasks: TaskRepository = Depends(get_task_repo),
    users: UserRepository = Depends(get_user_repo),
) -> CreateTaskService:
    return CreateTaskService(tasks, users)


def get_task_service(
    tasks: TaskRepository = Depends(get_task_repo),
    users: UserRepository = Depends(get_user_repo),
) -> GetTaskForUserService:
    return GetTaskForUserService(tasks, users)


def get_update_task_service(
    tasks: TaskRepository = Depends(get_task_repo),
    users: UserRepository = Depends(get_user_repo),
) -> UpdateTaskService:
    return UpdateTaskService(tasks, users)


def get_update_task_status_service(
    tasks: TaskRepository = Depends(get_task_repo),
    users: UserRepository = Depends(get_user_repo),
) -> UpdateTaskStatusService:
    return UpdateTaskStatusService(tasks, users)


def get_list_tasks_service(
    tasks: TaskRepository = Depends(get_task_repo),
    users: UserRepository = Depends(get_user_repo),
) -> ListTasksForUserService:
    return ListTasksForUserService(tasks, users)


def get_delete_task_service(
    tasks: TaskRepository = Depends(get_task_repo),
    users: UserRepository = Depends(get_user_repo),
) -> DeleteTaskService:
    return DeleteTaskService(tasks, users)
