"""Base repository with common CRUD operations"""
from typing import Generic, TypeVar, Type, Optional, List, Dict, Any, Iterable
from pydantic import BaseModel
from postgrest.exceptions import APIError
from supabase import Client

T = TypeVar('T', bound=BaseModel)
CreateT = TypeVar('CreateT', bound=BaseModel)
UpdateT = TypeVar('UpdateT', bound=BaseModel)

# Postgres SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


class DuplicateKeyError(Exception):
    """A write was rejected by a unique constraint"""

    def __init__(self, table: str, detail: Optional[str] = None):
        self.table = table
        self.detail = detail
        super().__init__(f"Duplicate key in {table}: {detail}")


class BaseRepository(Generic[T, CreateT, UpdateT]):
    """
    Base repository providing common database operations.
    Hides Supabase implementation details from the rest of the application.
    """

    def __init__(self, client: Client, table_name: str, model_class: Type[T]):
        self._client = client
        self._table_name = table_name
        self._model_class = model_class

    def _to_model(self, data: Dict[str, Any]) -> T:
        """Convert database dict to domain model"""
        return self._model_class(**data)

    def _to_models(self, data: List[Dict[str, Any]]) -> List[T]:
        """Convert list of database dicts to domain models"""
        return [self._to_model(item) for item in data]

    def _execute_write(self, query):
        """Run a write, surfacing unique violations as DuplicateKeyError"""
        try:
            return query.execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise DuplicateKeyError(self._table_name, e.details or e.message) from e
            raise

    async def find_by_id(self, id: str) -> Optional[T]:
        """Find a single record by ID"""
        response = self._client.table(self._table_name).select("*").eq("id", id).execute()

        if not response.data:
            return None

        return self._to_model(response.data[0])

    async def find_by_ids(self, ids: Iterable[str]) -> List[T]:
        """Find all records whose ID is in the given set (one round trip)"""
        ids = list(ids)
        if not ids:
            return []

        response = self._client.table(self._table_name).select("*").in_("id", ids).execute()
        return self._to_models(response.data)

    async def find_all(self) -> List[T]:
        """Find all records"""
        response = self._client.table(self._table_name).select("*").execute()
        return self._to_models(response.data)

    async def find_by_filters(self, filters: Dict[str, Any]) -> List[T]:
        """Find records matching filters"""
        query = self._client.table(self._table_name).select("*")

        for key, value in filters.items():
            query = query.eq(key, value)

        response = query.execute()
        return self._to_models(response.data)

    async def create(self, data: CreateT) -> T:
        """Create a new record"""
        data_dict = data.model_dump(exclude_unset=True, mode='json')
        response = self._execute_write(self._client.table(self._table_name).insert(data_dict))

        if not response.data:
            raise ValueError("Failed to create record")

        return self._to_model(response.data[0])

    async def update(self, id: str, data: UpdateT) -> Optional[T]:
        """Update a record by ID"""
        data_dict = data.model_dump(exclude_unset=True, mode='json')

        if not data_dict:
            # No fields to update
            return await self.find_by_id(id)

        response = self._execute_write(
            self._client.table(self._table_name).update(data_dict).eq("id", id)
        )

        if not response.data:
            return None

        return self._to_model(response.data[0])

    async def update_by_ids(self, ids: Iterable[str], data: UpdateT) -> int:
        """Apply the same partial update to every record in the ID set"""
        ids = list(ids)
        data_dict = data.model_dump(exclude_unset=True, mode='json')
        if not ids or not data_dict:
            return 0

        response = self._execute_write(
            self._client.table(self._table_name).update(data_dict).in_("id", ids)
        )
        return len(response.data) if response.data else 0

    async def update_by_filters(self, filters: Dict[str, Any], data: UpdateT) -> int:
        """Apply the same partial update to every record matching filters"""
        data_dict = data.model_dump(exclude_unset=True, mode='json')
        if not data_dict:
            return 0

        query = self._client.table(self._table_name).update(data_dict)
        for key, value in filters.items():
            query = query.eq(key, value)

        response = self._execute_write(query)
        return len(response.data) if response.data else 0

    async def delete(self, id: str) -> bool:
        """Delete a record by ID"""
        response = self._client.table(self._table_name).delete().eq("id", id).execute()
        return len(response.data) > 0
