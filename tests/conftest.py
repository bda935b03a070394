# tests/conftest.py

from __future__ import annotations

import pytest

from app.features.relationships import RelationshipCoordinator
from app.infra.supabase.repositories import RepositoryFactory

from .fakes import FakeSupabaseClient


@pytest.fixture()
def supabase() -> FakeSupabaseClient:
    """Fresh in-memory Supabase stand-in per test."""
    return FakeSupabaseClient()


@pytest.fixture()
def repos(supabase: FakeSupabaseClient) -> RepositoryFactory:
    return RepositoryFactory(supabase)


@pytest.fixture()
def coordinator(repos: RepositoryFactory) -> RelationshipCoordinator:
    """
    Coordinator wired to the real repositories over the fake client.

    The repositories stay real because the queries they build are part of
    what these tests check.
    """
    return RelationshipCoordinator(repos.tasks, repos.users)
