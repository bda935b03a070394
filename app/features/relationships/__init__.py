"""Task/user relationship feature module"""

from app.features.relationships.domain import (
    ConflictError,
    ErrorKind,
    NotFoundError,
    PreconditionError,
    RelationshipError,
    ServerError,
    ValidationError,
    UNASSIGNED_USER_ID,
    UNASSIGNED_USER_NAME,
)
from app.features.relationships.schemas import (
    ErrorResponse,
    TaskListResponse,
    TaskOut,
    TaskResponse,
    TaskWriteRequest,
    UserListResponse,
    UserOut,
    UserResponse,
    UserWriteRequest,
)
from app.features.relationships.service import RelationshipCoordinator

__all__ = [
    "RelationshipCoordinator",
    "RelationshipError",
    "ValidationError",
    "PreconditionError",
    "NotFoundError",
    "ConflictError",
    "ServerError",
    "ErrorKind",
    "UNASSIGNED_USER_ID",
    "UNASSIGNED_USER_NAME",
    "TaskWriteRequest",
    "UserWriteRequest",
    "TaskOut",
    "UserOut",
    "TaskResponse",
    "TaskListResponse",
    "UserResponse",
    "UserListResponse",
    "ErrorResponse",
]
