# domain/model/task.py

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from enum import Enum

from bson import ObjectId

from domain.model.errors import ValidationError


def utc_now() -> datetime:
    """Current UTC time at the millisecond precision BSON stores."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


# Fields a caller may change after creation. Anything else is ignored.
MUTABLE_FIELDS = ('title', 'completed')


class TaskFilter(str, Enum):
    """Filter keyword selecting a subset of a user's tasks."""
    ALL = 'all'
    ACTIVE = 'active'
    COMPLETED = 'completed'

    @classmethod
    def parse(cls, value: str | None) -> 'TaskFilter':
        """Resolve a raw keyword. Absent or unknown values fall back to ALL."""
        try:
            return cls(value)
        except ValueError:
            return cls.ALL

    @property
    def completed(self) -> bool | None:
        """Value the ``completed`` flag must have, or None for no predicate."""
        if self is TaskFilter.ACTIVE:
            return False
        if self is TaskFilter.COMPLETED:
            return True
        return None


class TaskAction(str, Enum):
    """Actions on an existing task that go through the authorization gate."""
    READ = 'read'
    UPDATE = 'update'
    DESTROY = 'destroy'
    TOGGLE = 'toggle'


def validate_title(title: str | None) -> None:
    if not title:
        raise ValidationError("Title can't be blank")


# ── Task Domain Model ────────────────────────────────────


@dataclass
class Task:
    """Domain model representing a to-do item."""
    id: str
    title: str
    owner_id: str
    created_at: datetime
    updated_at: datetime
    completed: bool = False

    # ── factory ───────────────────────────────────────────

    @staticmethod
    def create(owner_id: str, title: str | None, completed: bool = False) -> 'Task':
        """Create a new validated Task owned by ``owner_id``."""
        validate_title(title)
        now = utc_now()
        return Task(
            # ObjectIds grow with creation time, so they order ties
            id=str(ObjectId()),
            title=title,
            owner_id=owner_id,
            created_at=now,
            updated_at=now,
            completed=bool(completed),
        )

    # ── queries ───────────────────────────────────────────

    def is_owned_by(self, user_id: str) -> bool:
        return self.owner_id == user_id

    # ── state transitions ─────────────────────────────────

    def with_changes(self, fields: dict) -> 'Task':
        """Return a validated copy with the permitted ``fields`` applied.

        The original Task is left untouched, so a failed validation never
        leaves a half-updated object behind.
        """
        changes = {}
        for name in MUTABLE_FIELDS:
            if name in fields:
                changes[name] = fields[name]
        if 'completed' in changes:
            changes['completed'] = bool(changes['completed'])

        updated = replace(self, **changes)
        validate_title(updated.title)
        updated.updated_at = utc_now()
        return updated

    def toggle(self) -> None:
        """Flip the completed flag."""
        self.completed = not self.completed
        self.updated_at = utc_now()


# ── Tasks Collection ─────────────────────────────────────


@dataclass
class Tasks:
    """Ordered task list together with the filter that produced it."""
    items: list[Task]
    filter: TaskFilter

    @property
    def total(self) -> int:
        return len(self.items)
