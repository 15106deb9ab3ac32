"""Pydantic models for API request/response."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field


# ── Tasks ────────────────────────────────────────────────


class TaskCreate(BaseModel):
    """Request model for creating a task."""
    title: Optional[str] = Field(None, description="Task title, must not be empty")
    completed: bool = False


class TaskUpdate(BaseModel):
    """Request model for updating a task. Only fields that are sent are applied."""
    title: Optional[str] = None
    completed: Optional[bool] = None


class TaskResponse(BaseModel):
    """Response model for a single task."""
    id: str = Field(..., description="Task ID")
    title: str
    completed: bool
    owner_id: str = Field(..., description="ID of the owning user")
    created_at: datetime
    updated_at: datetime


class TaskListResponse(BaseModel):
    """Response model for a filtered task list."""
    tasks: list[TaskResponse]
    filter: str = Field(..., description="Filter that was applied: all, active or completed")
    total: int = Field(..., description="Number of tasks returned")


# ── Users / auth ─────────────────────────────────────────


class UserResponse(BaseModel):
    """Public view of a user (never includes the password hash)."""
    id: str
    email: str
    created_at: datetime
    updated_at: datetime
    last_login: Optional[datetime] = None


class RegisterRequest(BaseModel):
    """Request model for user registration."""
    email: EmailStr
    password: str


class LoginRequest(BaseModel):
    """Request model for user login."""
    email: EmailStr
    password: str


class AuthResponse(BaseModel):
    """Response model for authentication."""
    token: str
    user: UserResponse
