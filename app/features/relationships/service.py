"""Relationship coordinator keeping task owners and user pending lists in step

A task's ``assigned_user`` and its owner's ``pending_tasks`` are two stored
projections of one relationship. This service is their only writer. There are
no multi-row transactions: every mutation reads and validates everything it
references first, then issues its writes in a fixed order (old owner cleared
before a new one is set). Concurrent mutations on the same rows can still
interleave; conflict errors are how callers find out and retry.
"""
import logging
from typing import Any, Iterable, List, Optional

from app.features.relationships.domain import (
    ConflictError,
    NotFoundError,
    PreconditionError,
    ValidationError,
)
from app.features.relationships.schemas import TaskWriteRequest, UserWriteRequest
from app.features.relationships.validation import (
    normalize_pending_tasks,
    normalize_text,
    parse_boolean,
    parse_deadline,
    parse_identifier,
    parse_optional_identifier,
    require_scalar,
    require_text,
)
from app.infra.supabase.repositories import DuplicateKeyError, TaskRepository, UserRepository
from app.models.task import Task, TaskCreate, TaskUpdate
from app.models.user import User, UserCreate, UserUpdate

logger = logging.getLogger(__name__)


class RelationshipCoordinator:
    """Service for task and user mutations that preserve the owner relationship"""

    def __init__(self, task_repo: TaskRepository, user_repo: UserRepository):
        self.task_repo = task_repo
        self.user_repo = user_repo

    # ============================================================================
    # LOOKUPS
    # ============================================================================

    async def get_task_or_404(self, task_id: Any) -> Task:
        task_id = parse_identifier(task_id, "Task not found")
        task = await self.task_repo.find_by_id(task_id)
        if not task:
            logger.warning(f"Task not found: {task_id}")
            raise NotFoundError("Task not found")
        return task

    async def get_user_or_404(self, user_id: Any) -> User:
        user_id = parse_identifier(user_id, "User not found")
        user = await self.user_repo.find_by_id(user_id)
        if not user:
            logger.warning(f"User not found: {user_id}")
            raise NotFoundError("User not found")
        return user

    async def list_tasks(self) -> List[Task]:
        return await self.task_repo.find_all()

    async def list_users(self) -> List[User]:
        return await self.user_repo.find_all()

    async def resolve_assigned_user(self, raw_user_id: Any) -> Optional[User]:
        """
        Resolve the owner named by a task write

        Returns:
            The owner, or None when the task is to be unassigned

        Raises:
            NotFoundError: identifier is malformed
            PreconditionError: identifier is well formed but no such user exists
        """
        user_id = parse_optional_identifier(raw_user_id, "Invalid user identifier")
        if user_id is None:
            return None

        user = await self.user_repo.find_by_id(user_id)
        if not user:
            logger.warning(f"Assigned user not found: {user_id}")
            raise PreconditionError("Assigned user not found")
        return user

    async def validate_pending_tasks(
        self,
        task_ids: Iterable[str],
        current_user_id: Optional[str] = None,
    ) -> List[Task]:
        """
        Check that every id can be placed in a user's pending list

        Args:
            task_ids: normalized ids (see normalize_pending_tasks)
            current_user_id: the user being updated; tasks it already owns are
                not conflicts. None when creating a user.

        Returns:
            The referenced tasks, in the order the ids were given

        Raises:
            NotFoundError: an id is malformed, or some ids do not resolve
            ValidationError: a referenced task is completed
            ConflictError: a referenced task is owned by a different user
        """
        canonical_ids = list(dict.fromkeys(
            parse_identifier(task_id, "Invalid task identifier") for task_id in task_ids
        ))
        if not canonical_ids:
            return []

        tasks = await self.task_repo.find_by_ids(canonical_ids)
        tasks_by_id = {task.id: task for task in tasks}

        missing = [task_id for task_id in canonical_ids if task_id not in tasks_by_id]
        if missing:
            logger.warning(f"Pending tasks not found: {missing}")
            raise NotFoundError("One or more pending tasks were not found")

        if any(task.completed for task in tasks):
            raise ValidationError("Pending tasks must be incomplete")

        for task in tasks:
            if task.assigned_user and task.assigned_user != current_user_id:
                logger.warning(
                    f"Task {task.id} is owned by {task.assigned_user}, "
                    f"cannot be claimed by {current_user_id or 'a new user'}"
                )
                raise ConflictError(f"Task {task.id} is already assigned to another user")

        return [tasks_by_id[task_id] for task_id in canonical_ids]

    # ============================================================================
    # TASK-SIDE MUTATIONS
    # ============================================================================

    def _read_task_fields(self, payload: TaskWriteRequest) -> dict:
        deadline = parse_deadline(payload.deadline)
        name = require_text(payload.name, "Name is required")

        return {
            "name": name,
            "description": "" if payload.description is None else str(payload.description),
            "deadline": deadline,
            "completed": parse_boolean(payload.completed, False),
        }

    async def _sync_pending_lists(
        self,
        task_id: str,
        old_owner_id: Optional[str],
        new_owner_id: Optional[str],
        completed: bool,
    ) -> None:
        # Old owner first so the task is never pending for two users at once
        if old_owner_id and old_owner_id != new_owner_id:
            await self.user_repo.remove_pending_task(old_owner_id, task_id)

        if new_owner_id:
            if completed:
                await self.user_repo.remove_pending_task(new_owner_id, task_id)
            else:
                await self.user_repo.add_pending_task(new_owner_id, task_id)

    async def create_task(self, payload: TaskWriteRequest) -> Task:
        fields = self._read_task_fields(payload)
        owner = await self.resolve_assigned_user(payload.assigned_user)

        task = await self.task_repo.create(TaskCreate(
            **fields,
            assigned_user=owner.id if owner else None,
            assigned_user_name=owner.name if owner else None,
        ))

        if owner and not task.completed:
            await self.user_repo.add_pending_task(owner.id, task.id)

        logger.info(f"Created task {task.id} (owner={task.assigned_user}, completed={task.completed})")
        return task

    async def update_task(self, task_id: Any, payload: TaskWriteRequest) -> Task:
        """Replace a task's fields and move it between pending lists as needed"""
        task = await self.get_task_or_404(task_id)
        old_owner_id = task.assigned_user

        fields = self._read_task_fields(payload)
        owner = await self.resolve_assigned_user(payload.assigned_user)
        new_owner_id = owner.id if owner else None

        updated = await self.task_repo.update(task.id, TaskUpdate(
            **fields,
            assigned_user=new_owner_id,
            assigned_user_name=owner.name if owner else None,
        ))
        if updated is None:
            # Deleted between the read and the write
            raise NotFoundError("Task not found")

        await self._sync_pending_lists(updated.id, old_owner_id, new_owner_id, updated.completed)

        logger.info(
            f"Updated task {updated.id}: owner {old_owner_id} -> {new_owner_id}, "
            f"completed={updated.completed}"
        )
        return updated

    async def delete_task(self, task_id: Any) -> Task:
        task = await self.get_task_or_404(task_id)
        owner_id = task.assigned_user

        await self.task_repo.delete(task.id)

        if owner_id:
            await self.user_repo.remove_pending_task(owner_id, task.id)

        logger.info(f"Deleted task {task.id} (owner={owner_id})")
        return task

    # ============================================================================
    # USER-SIDE MUTATIONS
    # ============================================================================

    def _read_user_fields(self, payload: UserWriteRequest) -> tuple[str, str]:
        name = normalize_text(require_scalar(payload.name, "Name must be text"))
        email = normalize_text(require_scalar(payload.email, "Email must be text"))
        if not name or not email:
            raise ValidationError("Name and email are required")
        return name, email

    async def create_user(self, payload: UserWriteRequest) -> User:
        name, email = self._read_user_fields(payload)
        pending = await self.validate_pending_tasks(normalize_pending_tasks(payload.pending_tasks))
        pending_ids = [task.id for task in pending]

        try:
            user = await self.user_repo.create(UserCreate(
                name=name,
                email=email,
                pending_tasks=pending_ids,
            ))
        except DuplicateKeyError:
            logger.warning(f"Rejected duplicate email on user create: {email}")
            raise ValidationError("Email already exists")

        await self.task_repo.assign_owner(pending_ids, user.id, user.name)
        await self.task_repo.restamp_owner_name(user.id, user.name)

        logger.info(f"Created user {user.id} with {len(pending_ids)} pending tasks")
        return user

    async def update_user(self, user_id: Any, payload: UserWriteRequest) -> User:
        """
        Replace a user's fields and pending list, then move task owners to match

        Tasks dropped from the list are unassigned, tasks added are assigned to
        this user, and every task owned by the user gets the current name.
        """
        user = await self.get_user_or_404(user_id)
        name, email = self._read_user_fields(payload)

        if email != user.email:
            existing = await self.user_repo.find_by_email(email, exclude_id=user.id)
            if existing:
                logger.warning(f"Email {email} already used by user {existing.id}")
                raise ValidationError("Email already exists")

        pending = await self.validate_pending_tasks(
            normalize_pending_tasks(payload.pending_tasks),
            current_user_id=user.id,
        )
        pending_ids = [task.id for task in pending]

        kept = set(pending_ids)
        removed_ids = [task_id for task_id in user.pending_tasks if task_id not in kept]
        added_ids = [task.id for task in pending if task.assigned_user != user.id]

        try:
            updated = await self.user_repo.update(user.id, UserUpdate(
                name=name,
                email=email,
                pending_tasks=pending_ids,
            ))
        except DuplicateKeyError:
            logger.warning(f"Rejected duplicate email on user update: {email}")
            raise ValidationError("Email already exists")
        if updated is None:
            raise NotFoundError("User not found")

        await self.task_repo.clear_owner(removed_ids)
        await self.task_repo.assign_owner(added_ids, updated.id, updated.name)
        await self.task_repo.restamp_owner_name(updated.id, updated.name)

        logger.info(
            f"Updated user {updated.id}: {len(added_ids)} tasks assigned, "
            f"{len(removed_ids)} released"
        )
        return updated

    async def delete_user(self, user_id: Any) -> User:
        user = await self.get_user_or_404(user_id)

        await self.task_repo.clear_owner(user.pending_tasks)
        # Sweep by owner as well, in case pending_tasks has drifted
        await self.task_repo.clear_owner_for_user(user.id)

        await self.user_repo.delete(user.id)

        logger.info(f"Deleted user {user.id}")
        return user
