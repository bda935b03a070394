"""Domain errors and wire sentinels for the task/user relationship"""

from enum import Enum

# JSON-boundary sentinels; internally an unassigned task carries None
UNASSIGNED_USER_ID = ""
UNASSIGNED_USER_NAME = "unassigned"


class ErrorKind(str, Enum):
    """Classification a caller uses to decide whether to retry"""
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    PRECONDITION = "precondition"
    CONFLICT = "conflict"
    SERVER = "server"


class RelationshipError(Exception):
    """Base class for every failure surfaced by the coordinator"""

    kind: ErrorKind = ErrorKind.SERVER
    status_code: int = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(RelationshipError):
    """Missing or malformed input, including duplicate email"""
    kind = ErrorKind.VALIDATION
    status_code = 400


class PreconditionError(RelationshipError):
    """Referenced record exists in the wrong state or could not be resolved"""
    kind = ErrorKind.PRECONDITION
    status_code = 400


class NotFoundError(RelationshipError):
    kind = ErrorKind.NOT_FOUND
    status_code = 404


class ConflictError(RelationshipError):
    """A task is already owned by a different user"""
    kind = ErrorKind.CONFLICT
    status_code = 409


class ServerError(RelationshipError):
    kind = ErrorKind.SERVER
    status_code = 500
