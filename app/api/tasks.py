import logging
from typing import Optional

from fastapi import APIRouter, Depends

from app.api.dependencies import get_coordinator
from app.features.relationships import (
    ErrorResponse,
    RelationshipCoordinator,
    RelationshipError,
    ServerError,
    TaskListResponse,
    TaskOut,
    TaskResponse,
    TaskWriteRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/tasks",
    tags=["tasks"],
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)


@router.get("", response_model=TaskListResponse)
async def list_tasks(coordinator: RelationshipCoordinator = Depends(get_coordinator)):
    """List all tasks"""
    try:
        tasks = await coordinator.list_tasks()
    except RelationshipError:
        raise
    except Exception as e:
        logger.error(f"Error listing tasks: {e}", exc_info=True)
        raise ServerError("Server Error")

    return {"message": "OK", "data": [TaskOut.from_task(task) for task in tasks]}


@router.post("", response_model=TaskResponse, status_code=201)
async def create_task(
    request: Optional[TaskWriteRequest] = None,
    coordinator: RelationshipCoordinator = Depends(get_coordinator),
):
    """
    Create a task

    When assignedUser is given the user must exist; an uncompleted task is
    added to that user's pendingTasks.
    """
    try:
        task = await coordinator.create_task(request or TaskWriteRequest())
    except RelationshipError:
        raise
    except Exception as e:
        logger.error(f"Error creating task: {e}", exc_info=True)
        raise ServerError("Server Error")

    return {"message": "Task created", "data": TaskOut.from_task(task)}


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(task_id: str, coordinator: RelationshipCoordinator = Depends(get_coordinator)):
    """Get a single task by ID"""
    try:
        task = await coordinator.get_task_or_404(task_id)
    except RelationshipError:
        raise
    except Exception as e:
        logger.error(f"Error fetching task {task_id}: {e}", exc_info=True)
        raise ServerError("Server Error")

    return {"message": "OK", "data": TaskOut.from_task(task)}


@router.put("/{task_id}", response_model=TaskResponse, responses={409: {"model": ErrorResponse}})
async def update_task(
    task_id: str,
    request: Optional[TaskWriteRequest] = None,
    coordinator: RelationshipCoordinator = Depends(get_coordinator),
):
    """
    Replace a task

    Moves the task between pendingTasks lists when the owner changes, and
    drops it from the owner's list once completed.
    """
    try:
        task = await coordinator.update_task(task_id, request or TaskWriteRequest())
    except RelationshipError:
        raise
    except Exception as e:
        logger.error(f"Error updating task {task_id}: {e}", exc_info=True)
        raise ServerError("Server Error")

    return {"message": "Task updated", "data": TaskOut.from_task(task)}


@router.delete("/{task_id}", response_model=TaskResponse)
async def delete_task(task_id: str, coordinator: RelationshipCoordinator = Depends(get_coordinator)):
    """Delete a task and remove it from its owner's pendingTasks"""
    try:
        task = await coordinator.delete_task(task_id)
    except RelationshipError:
        raise
    except Exception as e:
        logger.error(f"Error deleting task {task_id}: {e}", exc_info=True)
        raise ServerError("Server Error")

    return {"message": "Task deleted", "data": TaskOut.from_task(task)}
