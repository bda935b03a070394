import logging
from typing import Optional

from fastapi import APIRouter, Depends

from app.api.dependencies import get_coordinator
from app.features.relationships import (
    ErrorResponse,
    RelationshipCoordinator,
    RelationshipError,
    ServerError,
    UserListResponse,
    UserOut,
    UserResponse,
    UserWriteRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/users",
    tags=["users"],
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)


@router.get("", response_model=UserListResponse)
async def list_users(coordinator: RelationshipCoordinator = Depends(get_coordinator)):
    """List all users"""
    try:
        users = await coordinator.list_users()
    except RelationshipError:
        raise
    except Exception as e:
        logger.error(f"Error listing users: {e}", exc_info=True)
        raise ServerError("Server Error")

    return {"message": "OK", "data": [UserOut.from_user(user) for user in users]}


@router.post(
    "",
    response_model=UserResponse,
    status_code=201,
    responses={409: {"model": ErrorResponse}},
)
async def create_user(
    request: Optional[UserWriteRequest] = None,
    coordinator: RelationshipCoordinator = Depends(get_coordinator),
):
    """
    Create a user

    Every task listed in pendingTasks must exist, be incomplete and be
    unassigned; those tasks are assigned to the new user.
    """
    try:
        user = await coordinator.create_user(request or UserWriteRequest())
    except RelationshipError:
        raise
    except Exception as e:
        logger.error(f"Error creating user: {e}", exc_info=True)
        raise ServerError("Server Error")

    return {"message": "User created", "data": UserOut.from_user(user)}


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: str, coordinator: RelationshipCoordinator = Depends(get_coordinator)):
    """Get a single user by ID"""
    try:
        user = await coordinator.get_user_or_404(user_id)
    except RelationshipError:
        raise
    except Exception as e:
        logger.error(f"Error fetching user {user_id}: {e}", exc_info=True)
        raise ServerError("Server Error")

    return {"message": "OK", "data": UserOut.from_user(user)}


@router.put("/{user_id}", response_model=UserResponse, responses={409: {"model": ErrorResponse}})
async def update_user(
    user_id: str,
    request: Optional[UserWriteRequest] = None,
    coordinator: RelationshipCoordinator = Depends(get_coordinator),
):
    """
    Replace a user

    Tasks dropped from pendingTasks become unassigned; tasks added are
    assigned to this user. A task owned by another user is a 409 conflict.
    """
    try:
        user = await coordinator.update_user(user_id, request or UserWriteRequest())
    except RelationshipError:
        raise
    except Exception as e:
        logger.error(f"Error updating user {user_id}: {e}", exc_info=True)
        raise ServerError("Server Error")

    return {"message": "User updated", "data": UserOut.from_user(user)}


@router.delete("/{user_id}", response_model=UserResponse)
async def delete_user(user_id: str, coordinator: RelationshipCoordinator = Depends(get_coordinator)):
    """Delete a user and unassign every task it held"""
    try:
        user = await coordinator.delete_user(user_id)
    except RelationshipError:
        raise
    except Exception as e:
        logger.error(f"Error deleting user {user_id}: {e}", exc_info=True)
        raise ServerError("Server Error")

    return {"message": "User deleted", "data": UserOut.from_user(user)}
