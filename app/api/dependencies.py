"""FastAPI dependencies shared by the routers"""

from fastapi import Depends
from supabase import Client  # type: ignore

from app.features.relationships.service import RelationshipCoordinator
from app.infra.supabase.client import get_supabase_client
from app.infra.supabase.repositories import RepositoryFactory


def get_coordinator(client: Client = Depends(get_supabase_client)) -> RelationshipCoordinator:
    """
    Build a coordinator over the task and user stores for one request.

    Usage:
        @router.post("/example")
        async def example(coordinator: RelationshipCoordinator = Depends(get_coordinator)):
            ...
    """
    repos = RepositoryFactory(client)
    return RelationshipCoordinator(repos.tasks, repos.users)
