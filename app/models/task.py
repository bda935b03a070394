"""Task domain model"""
from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel


class AssignmentState(str, Enum):
    """Relationship state of a task towards its owner"""
    UNASSIGNED = "unassigned"
    PENDING = "pending"
    COMPLETED = "completed"


class TaskBase(BaseModel):
    """Base task fields for creation"""
    name: str
    description: str = ""
    deadline: datetime
    completed: bool = False
    assigned_user: Optional[str] = None   # UUID as string, None when unassigned
    assigned_user_name: Optional[str] = None


class TaskCreate(TaskBase):
    """Task creation model"""
    pass


class TaskUpdate(BaseModel):
    """Task update model - all fields optional"""
    name: Optional[str] = None
    description: Optional[str] = None
    deadline: Optional[datetime] = None
    completed: Optional[bool] = None
    assigned_user: Optional[str] = None
    assigned_user_name: Optional[str] = None


class Task(TaskBase):
    """Complete task model from database"""
    id: str
    date_created: datetime

    class Config:
        from_attributes = True

    @property
    def assignment_state(self) -> AssignmentState:
        if not self.assigned_user:
            return AssignmentState.UNASSIGNED
        if self.completed:
            return AssignmentState.COMPLETED
        return AssignmentState.PENDING
