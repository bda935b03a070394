"""Request and response schemas for task and user endpoints"""

from datetime import datetime
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field

from app.features.relationships.domain import (
    ErrorKind,
    UNASSIGNED_USER_ID,
    UNASSIGNED_USER_NAME,
)
from app.models.task import Task
from app.models.user import User


class TaskWriteRequest(BaseModel):
    """Body for task create/update; values are validated by the coordinator"""
    model_config = ConfigDict(populate_by_name=True)

    name: Any = None
    description: Any = None
    deadline: Any = None
    completed: Any = None
    assigned_user: Any = Field(None, alias="assignedUser")


class UserWriteRequest(BaseModel):
    """Body for user create/update; values are validated by the coordinator"""
    model_config = ConfigDict(populate_by_name=True)

    name: Any = None
    email: Any = None
    pending_tasks: Any = Field(None, alias="pendingTasks")


class TaskOut(BaseModel):
    """Task as exposed over HTTP: unassigned is "" / "unassigned" on the wire"""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    description: str
    deadline: datetime
    completed: bool
    assigned_user: str = Field(alias="assignedUser")
    assigned_user_name: str = Field(alias="assignedUserName")
    date_created: datetime = Field(alias="dateCreated")

    @classmethod
    def from_task(cls, task: Task) -> "TaskOut":
        return cls(
            id=task.id,
            name=task.name,
            description=task.description,
            deadline=task.deadline,
            completed=task.completed,
            assigned_user=task.assigned_user or UNASSIGNED_USER_ID,
            assigned_user_name=(
                task.assigned_user_name
                if task.assigned_user and task.assigned_user_name
                else UNASSIGNED_USER_NAME
            ),
            date_created=task.date_created,
        )


class UserOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    email: str
    pending_tasks: List[str] = Field(alias="pendingTasks")
    date_created: datetime = Field(alias="dateCreated")

    @classmethod
    def from_user(cls, user: User) -> "UserOut":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            pending_tasks=list(user.pending_tasks),
            date_created=user.date_created,
        )


class TaskResponse(BaseModel):
    message: str
    data: TaskOut


class TaskListResponse(BaseModel):
    message: str
    data: List[TaskOut]


class UserResponse(BaseModel):
    message: str
    data: UserOut


class UserListResponse(BaseModel):
    message: str
    data: List[UserOut]


class ErrorResponse(BaseModel):
    """Failure body: a classification and a message, no data payload"""
    message: str
    error: ErrorKind
