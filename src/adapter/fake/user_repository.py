"""In-memory UserRepository, keyed by id with a unique email index."""

from datetime import datetime, timezone

from bson import ObjectId

from domain.model.user import User


class FakeUserRepository:
    def __init__(self):
        self.store: dict[str, User] = {}
        self.ids_by_email: dict[str, str] = {}

    def create(self, email: str, password_hash: str) -> User | None:
        if email in self.ids_by_email:
            return None

        now = datetime.now(timezone.utc)
        user = User(id=str(ObjectId()), email=email, created_at=now,
                    updated_at=now, password_hash=password_hash)
        self.store[user.id] = user
        self.ids_by_email[email] = user.id
        return user

    def update_last_login(self, user_id: str) -> bool:
        user = self.store.get(user_id)
        if user is None:
            return False
        user.last_login = user.updated_at = datetime.now(timezone.utc)
        return True

    def get_by_email(self, email: str) -> User | None:
        user_id = self.ids_by_email.get(email)
        return self.store.get(user_id) if user_id else None

    def get_by_id(self, user_id: str) -> User | None:
        return self.store.get(user_id)
