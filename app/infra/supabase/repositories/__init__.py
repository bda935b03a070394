"""Repository factory and exports"""
from supabase import Client
from .base import BaseRepository, DuplicateKeyError
from .tasks import TaskRepository
from .users import UserRepository


class RepositoryFactory:
    """Factory for creating repository instances"""

    def __init__(self, client: Client):
        self._client = client
        self._tasks: TaskRepository = None
        self._users: UserRepository = None

    @property
    def tasks(self) -> TaskRepository:
        """Get task repository"""
        if self._tasks is None:
            self._tasks = TaskRepository(self._client)
        return self._tasks

    @property
    def users(self) -> UserRepository:
        """Get user repository"""
        if self._users is None:
            self._users = UserRepository(self._client)
        return self._users


__all__ = [
    'RepositoryFactory',
    'BaseRepository',
    'DuplicateKeyError',
    'TaskRepository',
    'UserRepository',
]
