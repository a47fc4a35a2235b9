"""MongoDB implementation of UserRepository."""

import uuid
from logging import getLogger

from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from adapter.mongodb import TASKS_COLLECTION_NAME, USERS_COLLECTION_NAME
from adapter.mongodb.clock import utcnow
from domain.model.errors import DuplicateError, NotFoundError
from domain.model.user import User

logger = getLogger(__name__)


class MongoUserRepository:
    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]
        self.tasks = db[TASKS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('email', 1)], 'idx_users_email', unique=True)
            create_index_safe(self.collection, [('created_at', -1)], 'idx_users_created_at')
            return True
        except PyMongoError as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        return User(
            id=doc['_id'],
            email=doc['email'],
            password_hash=doc['password_hash'],
            created_at=doc['created_at'],
            updated_at=doc['updated_at'],
            name=doc.get('name'),
        )

    # ── write operations ─────────────────────────────────────

    def create(self, email: str, password_hash: str, name: str | None = None) -> User:
        """Insert a user. The unique email index turns races into DuplicateError."""
        now = utcnow()
        user_doc = {
            '_id': uuid.uuid4().hex,
            'email': email,
            'password_hash': password_hash,
            'name': name,
            'created_at': now,
            'updated_at': now,
        }
        try:
            self.collection.insert_one(user_doc)
        except DuplicateKeyError as e:
            logger.warning("User creation failed: email already exists", extra={"email": email})
            raise DuplicateError(email) from e
        except PyMongoError as e:
            logger.error("Failed to create user", extra={"email": email, "error": str(e)})
            raise

        logger.info("User created", extra={"userId": user_doc['_id'], "email": email})
        return self._to_domain(user_doc)

    def update_name(self, user_id: str, name: str | None) -> User:
        try:
            doc = self.collection.find_one_and_update(
                {'_id': user_id},
                {'$set': {'name': name, 'updated_at': utcnow()}},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error("Failed to update user name", extra={"userId": user_id, "error": str(e)})
            raise

        if doc is None:
            raise NotFoundError('User not found')
        return self._to_domain(doc)

    def update_password_hash(self, user_id: str, password_hash: str) -> None:
        try:
            result = self.collection.update_one(
                {'_id': user_id},
                {'$set': {'password_hash': password_hash, 'updated_at': utcnow()}},
            )
        except PyMongoError as e:
            logger.error("Failed to update password hash", extra={"userId": user_id, "error": str(e)})
            raise

        if result.matched_count == 0:
            raise NotFoundError('User not found')
        logger.debug("Password hash updated", extra={"userId": user_id})

    def delete_by_id(self, user_id: str) -> None:
        """Delete the user and every task it owns."""
        try:
            result = self.collection.delete_one({'_id': user_id})
            if result.deleted_count == 0:
                raise NotFoundError('User not found')
            removed = self.tasks.delete_many({'user_id': user_id})
        except PyMongoError as e:
            logger.error("Failed to delete user", extra={"userId": user_id, "error": str(e)})
            raise

        logger.info("User deleted", extra={"userId": user_id, "tasksDeleted": removed.deleted_count})

    # ── read operations ──────────────────────────────────────

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found."""
        try:
            doc = self.collection.find_one({'email': email})
        except PyMongoError as e:
            logger.error("Failed to get user by email", extra={"email": email, "error": str(e)})
            raise
        return self._to_domain(doc) if doc else None

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        try:
            doc = self.collection.find_one({'_id': user_id})
        except PyMongoError as e:
            logger.error("Failed to get user by ID", extra={"userId": user_id, "error": str(e)})
            raise
        return self._to_domain(doc) if doc else None
