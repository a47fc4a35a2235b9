"""MongoDB implementation of TaskRepository."""

import uuid
from logging import getLogger

from pymongo import DESCENDING, ReturnDocument
from pymongo.database import Database
from pymongo.errors import PyMongoError

from adapter.mongodb import TASKS_COLLECTION_NAME
from adapter.mongodb.clock import utcnow
from domain.model.errors import NotFoundError
from domain.model.task import (
    Pagination, Task, TaskChanges, TaskPage, TaskStatus, clamp_page_size,
)

logger = getLogger(__name__)

LIST_SORT = [('created_at', DESCENDING), ('_id', DESCENDING)]


class MongoTaskRepository:
    def __init__(self, db: Database):
        self.collection = db[TASKS_COLLECTION_NAME]

    # ── indexes ──────────────────────────────────────────────

    def ensure_indexes(self) -> bool:
        """Create indexes for tasks collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [
                ('user_id', 1),
                ('created_at', -1),
                ('_id', -1),
            ], 'idx_tasks_user_created')
            create_index_safe(self.collection, [
                ('user_id', 1),
                ('status', 1),
                ('created_at', -1),
            ], 'idx_tasks_user_status_created')
            return True
        except PyMongoError as e:
            logger.error("Failed to create tasks indexes", extra={"error": str(e)})
            return False

    # ── helpers ──────────────────────────────────────────────

    def _to_domain(self, doc: dict) -> Task:
        """Convert MongoDB document to Task domain model."""
        return Task(
            id=doc['_id'],
            title=doc['title'],
            description=doc.get('description', ''),
            status=TaskStatus(doc['status']),
            user_id=doc['user_id'],
            created_at=doc['created_at'],
            updated_at=doc['updated_at'],
        )

    def _update(self, task_id: str, fields: dict) -> Task:
        fields['updated_at'] = utcnow()
        try:
            doc = self.collection.find_one_and_update(
                {'_id': task_id},
                {'$set': fields},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error("Failed to update task", extra={"taskId": task_id, "error": str(e)})
            raise

        if doc is None:
            logger.warning("Task not found for update", extra={"taskId": task_id})
            raise NotFoundError('Task not found')
        return self._to_domain(doc)

    # ── write operations ─────────────────────────────────────

    def create(
        self,
        title: str,
        description: str,
        status: TaskStatus,
        user_id: str,
    ) -> Task:
        now = utcnow()
        doc = {
            '_id': uuid.uuid4().hex,
            'title': title,
            'description': description,
            'status': status.value,
            'user_id': user_id,
            'created_at': now,
            'updated_at': now,
        }
        try:
            self.collection.insert_one(doc)
        except PyMongoError as e:
            logger.error("Failed to create task", extra={"userId": user_id, "error": str(e)})
            raise

        logger.debug("Task inserted", extra={"taskId": doc['_id']})
        return self._to_domain(doc)

    def update(self, task_id: str, changes: TaskChanges) -> Task:
        fields = changes.supplied()
        if 'status' in fields:
            fields['status'] = fields['status'].value
        return self._update(task_id, fields)

    def update_status(self, task_id: str, status: TaskStatus) -> Task:
        return self._update(task_id, {'status': status.value})

    def delete(self, task_id: str) -> None:
        try:
            result = self.collection.delete_one({'_id': task_id})
        except PyMongoError as e:
            logger.error("Failed to delete task", extra={"taskId": task_id, "error": str(e)})
            raise

        if result.deleted_count == 0:
            logger.warning("Task not found for deletion", extra={"taskId": task_id})
            raise NotFoundError('Task not found')

    # ── read operations ──────────────────────────────────────

    def get_by_id(self, task_id: str) -> Task | None:
        try:
            doc = self.collection.find_one({'_id': task_id})
        except PyMongoError as e:
            logger.error("Failed to retrieve task", extra={"taskId": task_id, "error": str(e)})
            raise
        return self._to_domain(doc) if doc else None

    def list_by_user(
        self,
        user_id: str,
        pagination: Pagination | None = None,
        status: TaskStatus | None = None,
    ) -> TaskPage:
        """List a user's tasks newest first using keyset pagination.

        The cursor task's (created_at, _id) is the anchor; the page holds the
        tasks strictly after it. One extra document is fetched to detect
        whether another page exists.
        """
        pagination = pagination or Pagination()
        limit = clamp_page_size(pagination.limit)

        try:
            query: dict = {'user_id': user_id}
            if status:
                query['status'] = status.value
            if pagination.cursor:
                anchor = self.collection.find_one(
                    {'_id': pagination.cursor, 'user_id': user_id},
                    {'created_at': 1},
                )
                if anchor:
                    query['$or'] = [
                        {'created_at': {'$lt': anchor['created_at']}},
                        {'created_at': anchor['created_at'], '_id': {'$lt': anchor['_id']}},
                    ]

            docs = list(self.collection.find(query).sort(LIST_SORT).limit(limit + 1))
        except PyMongoError as e:
            logger.error("Failed to list tasks", extra={"userId": user_id, "error": str(e)})
            raise

        items = [self._to_domain(doc) for doc in docs[:limit]]
        next_cursor = items[-1].id if len(docs) > limit else None
        logger.debug("Listed tasks", extra={"userId": user_id, "count": len(items)})
        return TaskPage(items=items, next_cursor=next_cursor)
