"""User repository"""
from typing import Optional

from supabase import Client  # type: ignore

from app import config
from app.models.user import User, UserCreate, UserUpdate

from .base import BaseRepository


class UserRepository(BaseRepository[User, UserCreate, UserUpdate]):
    """Repository for user operations

    The users table carries a unique constraint on email; violations surface
    as DuplicateKeyError from create/update.
    """

    def __init__(self, client: Client):
        super().__init__(client, config.USERS_TABLE, User)

    async def find_by_email(self, email: str, exclude_id: Optional[str] = None) -> Optional[User]:
        """Find the user holding an email, optionally ignoring one user"""
        query = self._client.table(self._table_name).select("*").eq("email", email)

        if exclude_id:
            query = query.neq("id", exclude_id)

        response = query.limit(1).execute()
        if not response.data:
            return None

        return self._to_model(response.data[0])

    async def add_pending_task(self, user_id: str, task_id: str) -> None:
        """Add a task to the user's pending list (set semantics, atomic per row)"""
        self._client.rpc(
            'add_pending_task',
            {'p_user_id': user_id, 'p_task_id': task_id}
        ).execute()

    async def remove_pending_task(self, user_id: str, task_id: str) -> None:
        """Remove a task from the user's pending list (atomic per row)"""
        self._client.rpc(
            'remove_pending_task',
            {'p_user_id': user_id, 'p_task_id': task_id}
        ).execute()
