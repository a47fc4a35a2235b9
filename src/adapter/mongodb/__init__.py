from adapter.mongodb.connection import (
    DATABASE_NAME,
    TASKS_COLLECTION_NAME,
    USERS_COLLECTION_NAME,
)

__all__ = ['DATABASE_NAME', 'TASKS_COLLECTION_NAME', 'USERS_COLLECTION_NAME']
