"""Domain models for the application"""
from .task import AssignmentState, Task, TaskCreate, TaskUpdate
from .user import User, UserCreate, UserUpdate

__all__ = [
    'AssignmentState',
    'Task', 'TaskCreate', 'TaskUpdate',
    'User', 'UserCreate', 'UserUpdate',
]
