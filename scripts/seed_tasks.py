#!/usr/bin/env python3
"""
Seed the database with a demo user and ten sample tasks.

The user is created if the email is not registered yet. Any tasks that user
already owns are removed first, so the script can be re-run safely.

Usage:
    python scripts/seed_tasks.py --email demo@example.com --password 'demo-pass-1'
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dotenv import load_dotenv

load_dotenv()

from adapter.mongodb.connection import DATABASE_NAME, get_mongodb_client
from adapter.mongodb.task_repository import MongoTaskRepository
from adapter.mongodb.user_repository import MongoUserRepository
from domain.model.errors import DomainError
from port.task_repository import TaskRepository
from port.user_repository import UserRepository
from services import auth_service, task_query_service, task_service

SAMPLE_TASKS: list[tuple[str, bool]] = [
    ("Complete FastAPI tutorial", True),
    ("Set up MongoDB database", True),
    ("Implement user authentication", False),
    ("Add task ownership checks", False),
    ("Write unit tests for models", False),
    ("Design responsive layout", True),
    ("Configure production deployment", False),
    ("Review code and refactor", False),
    ("Update documentation", True),
    ("Set up CI/CD pipeline", False),
]


def seed(users: UserRepository, tasks: TaskRepository, email: str, password: str) -> int:
    """Recreate the sample tasks for ``email``. Returns the number created."""
    user = users.get_by_email(auth_service.normalize_email(email))
    if user:
        print(f"Using existing user {email}")
    else:
        user = auth_service.register(users, email, password)
        print(f"Created user {email}")

    removed = tasks.delete_by_owner(user.id)
    if removed:
        print(f"Removed {removed} existing tasks")

    print("Creating sample tasks...")
    for title, completed in SAMPLE_TASKS:
        task_service.create_task(tasks, user.id, title, completed)
        print(f"  Created: {title} ({'completed' if completed else 'active'})")

    active = task_query_service.list_tasks(tasks, user.id, "active").total
    completed = task_query_service.list_tasks(tasks, user.id, "completed").total
    print(f"\nDone! Created {len(SAMPLE_TASKS)} tasks.")
    print(f"  - Active: {active}")
    print(f"  - Completed: {completed}")
    return len(SAMPLE_TASKS)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("--email", default="demo@example.com", help="owner of the sample tasks")
    parser.add_argument("--password", default="demo-pass-1", help="password used if the user is created")
    args = parser.parse_args(argv)

    client = get_mongodb_client()
    if client is None:
        print("MongoDB unavailable; set MONGO_URL", file=sys.stderr)
        return 1

    db = client[DATABASE_NAME]
    try:
        seed(MongoUserRepository(db), MongoTaskRepository(db), args.email, args.password)
    except DomainError as e:
        print(f"Seeding failed: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
