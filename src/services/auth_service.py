"""Registration and sign-in for task owners.

Emails are matched case-insensitively: they are stripped and lowercased
before every lookup and before they are stored.
"""

import os
import re

import bcrypt

from domain.model.errors import DomainError, DuplicateError, ValidationError
from domain.model.user import User
from port.user_repository import UserRepository

BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))
MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_BYTES = 72  # bcrypt ignores everything past 72 bytes

# (must match, message) pairs checked in order; the first failure is reported
PASSWORD_RULES = [
    (re.compile(r"^.{%d,}$" % MIN_PASSWORD_LENGTH, re.DOTALL),
     f"Password must be at least {MIN_PASSWORD_LENGTH} characters"),
    (re.compile(r"[A-Za-z]"), "Password must contain at least one letter"),
    (re.compile(r"[0-9]"), "Password must contain at least one number"),
]


def normalize_email(email: str) -> str:
    return email.strip().lower()


def password_problem(password: str) -> str | None:
    """Return why ``password`` is too weak, or None if it is acceptable."""
    for pattern, message in PASSWORD_RULES:
        if not pattern.search(password):
            return message
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        return f"Password must be at most {MAX_PASSWORD_BYTES} bytes"
    return None


def register(repo: UserRepository, email: str, password: str) -> User:
    """Create a user with a bcrypt-hashed password.

    Raises:
        DuplicateError: email already registered, in any letter case
        ValidationError: password is too weak
    """
    email = normalize_email(email)
    if repo.get_by_email(email):
        raise DuplicateError("Email already registered")

    problem = password_problem(password)
    if problem:
        raise ValidationError(problem)

    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    hashed = bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")
    user = repo.create(email=email, password_hash=hashed)
    if not user:
        # lost a race with a concurrent registration of the same email
        raise DomainError("Failed to create user")
    return user


def authenticate(repo: UserRepository, email: str, password: str) -> User:
    """Check credentials and record the sign-in.

    Unknown email and wrong password raise the same ValidationError.
    """
    user = repo.get_by_email(normalize_email(email))
    if user is None or not user.password_hash:
        raise ValidationError("Invalid email or password")
    if not bcrypt.checkpw(password.encode("utf-8"), user.password_hash.encode("utf-8")):
        raise ValidationError("Invalid email or password")

    repo.update_last_login(user.id)
    return user
