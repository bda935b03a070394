"""Task repository"""
from typing import Iterable, List

from supabase import Client  # type: ignore

from app import config
from app.models.task import Task, TaskCreate, TaskUpdate

from .base import BaseRepository


class TaskRepository(BaseRepository[Task, TaskCreate, TaskUpdate]):
    """Repository for task operations"""

    def __init__(self, client: Client):
        super().__init__(client, config.TASKS_TABLE, Task)

    async def find_by_owner(self, user_id: str) -> List[Task]:
        """Find all tasks whose assigned_user points at the user"""
        return await self.find_by_filters({"assigned_user": user_id})

    async def assign_owner(self, task_ids: Iterable[str], user_id: str, user_name: str) -> int:
        """Point every task in the set at the user"""
        return await self.update_by_ids(
            task_ids,
            TaskUpdate(assigned_user=user_id, assigned_user_name=user_name),
        )

    async def clear_owner(self, task_ids: Iterable[str]) -> int:
        """Unassign every task in the set"""
        return await self.update_by_ids(
            task_ids,
            TaskUpdate(assigned_user=None, assigned_user_name=None),
        )

    async def clear_owner_for_user(self, user_id: str) -> int:
        """Unassign every task currently pointing at the user"""
        return await self.update_by_filters(
            {"assigned_user": user_id},
            TaskUpdate(assigned_user=None, assigned_user_name=None),
        )

    async def restamp_owner_name(self, user_id: str, user_name: str) -> int:
        """Re-copy the owner's name onto every task pointing at the user

        A full sweep over the user's tasks, not a diff.
        """
        return await self.update_by_filters(
            {"assigned_user": user_id},
            TaskUpdate(assigned_user_name=user_name),
        )
