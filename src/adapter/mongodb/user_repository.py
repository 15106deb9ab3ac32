"""MongoDB implementation of UserRepository."""

from datetime import datetime, timezone
from logging import getLogger

from bson import ObjectId
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from adapter.mongodb.connection import USERS_COLLECTION_NAME
from domain.model.errors import StoreError
from domain.model.user import User

logger = getLogger(__name__)


class MongoUserRepository:
    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            return create_index_safe(self.collection, [('email', 1)], 'idx_users_email', unique=True)
        except PyMongoError as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    @staticmethod
    def _to_domain(doc: dict) -> User:
        return User(
            id=doc['_id'],
            email=doc['email'],
            created_at=doc['created_at'],
            updated_at=doc['updated_at'],
            last_login=doc.get('last_login'),
            password_hash=doc.get('password_hash'),
        )

    def _find_one(self, query: dict, context: dict) -> User | None:
        try:
            doc = self.collection.find_one(query)
        except PyMongoError as e:
            logger.error("Failed to look up user", extra={**context, "error": str(e)})
            raise StoreError("Failed to look up user") from e
        return self._to_domain(doc) if doc else None

    def create(self, email: str, password_hash: str) -> User | None:
        """Insert a new user. Returns None when the email is already taken."""
        now = datetime.now(timezone.utc)
        doc = {
            '_id': str(ObjectId()),
            'email': email,
            'password_hash': password_hash,
            'created_at': now,
            'updated_at': now,
        }
        try:
            self.collection.insert_one(doc)
        except DuplicateKeyError:
            logger.warning("User creation failed: email already exists", extra={"email": email})
            return None
        except PyMongoError as e:
            logger.error("Failed to create user", extra={"email": email, "error": str(e)})
            raise StoreError("Failed to create user") from e

        logger.info("User created", extra={"userId": doc['_id'], "email": email})
        return self._to_domain(doc)

    def get_by_email(self, email: str) -> User | None:
        return self._find_one({'email': email}, {"email": email})

    def get_by_id(self, user_id: str) -> User | None:
        return self._find_one({'_id': user_id}, {"userId": user_id})

    def update_last_login(self, user_id: str) -> bool:
        now = datetime.now(timezone.utc)
        try:
            result = self.collection.update_one(
                {'_id': user_id},
                {'$set': {'last_login': now, 'updated_at': now}},
            )
        except PyMongoError as e:
            logger.error("Failed to update last login", extra={"userId": user_id, "error": str(e)})
            raise StoreError("Failed to update last login") from e
        return result.matched_count > 0
