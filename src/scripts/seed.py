"""Seed MongoDB with a demo user and a few tasks.

Usage:
    cd src && python -m scripts.seed
    cd src && python -m scripts.seed --email demo@example.com --password demo-pass-123
"""

import argparse
import logging
import sys

from dotenv import load_dotenv

from domain.model.task import TaskStatus
from port.password_hasher import PasswordHasher
from port.task_repository import TaskRepository
from port.user_repository import UserRepository
from services.task_service import CreateTaskInput, CreateTaskService
from services.user_service import RegisterUserInput, RegisterUserService, normalize_email

logger = logging.getLogger(__name__)

DEFAULT_EMAIL = 'admin@admin.com'
DEFAULT_PASSWORD = 'admin123'
DEFAULT_NAME = 'Admin'

DEMO_TASKS = [
    ('Set up repo', 'Initialize the repository and CI', TaskStatus.TODO),
    ('Design domain', 'Define entities and use cases', TaskStatus.IN_PROGRESS),
    ('Ship MVP', 'Deploy to production', TaskStatus.DONE),
]


def seed(
    users: UserRepository,
    tasks: TaskRepository,
    hasher: PasswordHasher,
    email: str = DEFAULT_EMAIL,
    password: str = DEFAULT_PASSWORD,
) -> tuple[str, int]:
    """Create the demo user and its tasks.

    An existing user is left untouched and gets no new tasks, so running the
    seed twice is harmless.

    Returns:
        (user_id, number of tasks created)
    """
    existing = users.get_by_email(normalize_email(email))
    if existing:
        logger.info("Seed user already exists, skipping", extra={"userId": existing.id})
        return existing.id, 0

    user = RegisterUserService(users, hasher).execute(
        RegisterUserInput(email=email, password=password, name=DEFAULT_NAME)
    )

    create_task = CreateTaskService(tasks, users)
    for title, description, status in DEMO_TASKS:
        create_task.execute(CreateTaskInput(
            title=title,
            user_id=user.id,
            description=description,
            status=status,
        ))

    return user.id, len(DEMO_TASKS)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Seed a demo user and tasks into MongoDB")
    parser.add_argument('--email', default=DEFAULT_EMAIL, help=f"Demo user email (default: {DEFAULT_EMAIL})")
    parser.add_argument('--password', default=DEFAULT_PASSWORD, help="Demo user password")
    args = parser.parse_args(argv)

    load_dotenv()

    # Imported after load_dotenv so MONGO_URL from .env is visible
    from adapter.bcrypt.password_hasher import BcryptPasswordHasher
    from adapter.mongodb.connection import get_mongodb_client, DATABASE_NAME
    from adapter.mongodb.indexes import ensure_all_indexes
    from adapter.mongodb.task_repository import MongoTaskRepository
    from adapter.mongodb.user_repository import MongoUserRepository
    from utils.logging import setup_structured_logging

    setup_structured_logging()

    client = get_mongodb_client()
    if client is None:
        logger.error("MongoDB unavailable, nothing seeded")
        return 1

    db = client[DATABASE_NAME]
    ensure_all_indexes(db)

    user_id, created = seed(
        MongoUserRepository(db),
        MongoTaskRepository(db),
        BcryptPasswordHasher(),
        email=args.email,
        password=args.password,
    )
    logger.info("Seed complete", extra={"userId": user_id, "tasksCreated": created})
    return 0


if __name__ == '__main__':
    sys.exit(main())
