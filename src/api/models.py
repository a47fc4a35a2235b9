"""Pydantic models for API request/response."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from domain.model.task import TaskStatus


# ── users ────────────────────────────────────────────────


class RegisterRequest(BaseModel):
    """Request model for user registration. Email rules are enforced by the service."""
    email: str
    password: str
    name: Optional[str] = None


class LoginRequest(BaseModel):
    email: str
    password: str


class UserResponse(BaseModel):
    """Public user profile. Never carries the password hash."""
    id: str
    email: str
    name: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class AuthResponse(BaseModel):
    token: str
    user: UserResponse


class UpdateProfileRequest(BaseModel):
    """Partial update. An absent `name` leaves it unchanged."""
    name: Optional[str] = Field(None, description="Display name; blank or null clears it")


class ChangePasswordRequest(BaseModel):
    current_password: str
    new_password: str


# ── tasks ────────────────────────────────────────────────


class TaskCreateRequest(BaseModel):
    title: str
    description: Optional[str] = None
    status: Optional[TaskStatus] = Field(None, description="Defaults to TODO")


class TaskUpdateRequest(BaseModel):
    """Partial update. Keys absent from the body are left unchanged."""
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TaskStatus] = None


class TaskStatusRequest(BaseModel):
    status: TaskStatus


class TaskResponse(BaseModel):
    id: str
    title: str
    description: str
    status: TaskStatus
    user_id: str
    created_at: datetime
    updated_at: datetime


class TaskListResponse(BaseModel):
    items: list[TaskResponse]
    next_cursor: Optional[str] = Field(None, description="Pass as `cursor` to fetch the next page")
