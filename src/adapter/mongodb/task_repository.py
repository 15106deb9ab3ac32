"""MongoDB implementation of TaskRepository."""

from datetime import datetime, timezone
from logging import getLogger

from pymongo import DESCENDING
from pymongo.database import Database
from pymongo.errors import PyMongoError

from adapter.mongodb.connection import TASKS_COLLECTION_NAME
from domain.model.errors import StoreError
from domain.model.task import Task

logger = getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    # Clients opened without tz_aware hand back naive UTC datetimes
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


NEWEST_FIRST = [('created_at', DESCENDING), ('_id', DESCENDING)]


class MongoTaskRepository:
    def __init__(self, db: Database):
        self.collection = db[TASKS_COLLECTION_NAME]

    # ── indexes ──────────────────────────────────────────────

    def ensure_indexes(self) -> bool:
        """Create indexes for tasks collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            return all([
                create_index_safe(self.collection, [('completed', 1)], 'idx_tasks_completed'),
                create_index_safe(self.collection, [('created_at', -1)], 'idx_tasks_created_at'),
                create_index_safe(self.collection, [('owner_id', 1)], 'idx_tasks_owner_id'),
            ])
        except PyMongoError as e:
            logger.error("Failed to create tasks indexes", extra={"error": str(e)})
            return False

    # ── helpers ──────────────────────────────────────────────

    @staticmethod
    def _to_domain(doc: dict) -> Task:
        return Task(
            id=doc['_id'],
            title=doc['title'],
            owner_id=doc['owner_id'],
            created_at=_as_utc(doc['created_at']),
            updated_at=_as_utc(doc['updated_at']),
            completed=doc.get('completed', False),
        )

    @staticmethod
    def _to_document(task: Task) -> dict:
        return {
            '_id': task.id,
            'title': task.title,
            'completed': task.completed,
            'owner_id': task.owner_id,
            'created_at': task.created_at,
            'updated_at': task.updated_at,
        }

    # ── write operations ─────────────────────────────────────

    def add(self, task: Task) -> None:
        try:
            self.collection.insert_one(self._to_document(task))
        except PyMongoError as e:
            logger.error("Failed to insert task", extra={"taskId": task.id, "error": str(e)})
            raise StoreError("Failed to save task") from e

        logger.debug("Task inserted", extra={"taskId": task.id})

    def update(self, task: Task) -> bool:
        try:
            result = self.collection.update_one(
                {'_id': task.id},
                {'$set': {
                    'title': task.title,
                    'completed': task.completed,
                    'updated_at': task.updated_at,
                }},
            )
        except PyMongoError as e:
            logger.error("Failed to update task", extra={"taskId": task.id, "error": str(e)})
            raise StoreError("Failed to update task") from e

        if result.matched_count == 0:
            logger.warning("Task not found for update", extra={"taskId": task.id})
            return False
        return True

    def delete(self, task_id: str) -> bool:
        try:
            result = self.collection.delete_one({'_id': task_id})
        except PyMongoError as e:
            logger.error("Failed to delete task", extra={"taskId": task_id, "error": str(e)})
            raise StoreError("Failed to delete task") from e

        return result.deleted_count > 0

    def delete_by_owner(self, owner_id: str) -> int:
        try:
            result = self.collection.delete_many({'owner_id': owner_id})
        except PyMongoError as e:
            logger.error("Failed to delete tasks", extra={"userId": owner_id, "error": str(e)})
            raise StoreError("Failed to delete tasks") from e

        return result.deleted_count

    # ── read operations ──────────────────────────────────────

    def get_by_id(self, task_id: str) -> Task | None:
        try:
            doc = self.collection.find_one({'_id': task_id})
        except PyMongoError as e:
            logger.error("Failed to retrieve task", extra={"taskId": task_id, "error": str(e)})
            raise StoreError("Failed to retrieve task") from e

        return self._to_domain(doc) if doc else None

    def find_by_owner(
        self,
        owner_id: str,
        completed: bool | None = None,
    ) -> list[Task]:
        query: dict = {'owner_id': owner_id}
        if completed is not None:
            query['completed'] = completed

        try:
            docs = self.collection.find(query).sort(NEWEST_FIRST)
            return [self._to_domain(doc) for doc in docs]
        except PyMongoError as e:
            logger.error("Failed to list tasks", extra={"userId": owner_id, "error": str(e)})
            raise StoreError("Failed to list tasks") from e
