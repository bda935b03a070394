# tests/test_user_mutations.py

from __future__ import annotations

import uuid

import pytest

from app.features.relationships import (
    ConflictError,
    NotFoundError,
    RelationshipCoordinator,
    TaskWriteRequest,
    UserWriteRequest,
    ValidationError,
)

from .fakes import FakeSupabaseClient, check_relationship_invariants

DEADLINE = "2030-01-01T00:00:00Z"


async def make_task(coordinator: RelationshipCoordinator, name: str = "Task", **fields):
    return await coordinator.create_task(TaskWriteRequest(name=name, deadline=DEADLINE, **fields))


async def make_user(coordinator: RelationshipCoordinator, name: str, pending_tasks=None, email: str | None = None):
    return await coordinator.create_user(UserWriteRequest(
        name=name,
        email=email or f"{name.lower()}@example.com",
        pending_tasks=pending_tasks,
    ))


def user_request(name: str, pending_tasks=None, email: str | None = None) -> UserWriteRequest:
    return UserWriteRequest(
        name=name,
        email=email or f"{name.lower()}@example.com",
        pending_tasks=pending_tasks,
    )


@pytest.mark.asyncio
async def test_create_user_assigns_pending_tasks(coordinator, supabase: FakeSupabaseClient) -> None:
    task = await make_task(coordinator)

    user = await make_user(coordinator, "Ada", [task.id])

    assert user.pending_tasks == [task.id]
    row = supabase.task_row(task.id)
    assert row["assigned_user"] == user.id
    assert row["assigned_user_name"] == "Ada"
    assert check_relationship_invariants(supabase) == []


@pytest.mark.asyncio
async def test_create_user_collapses_duplicate_pending_ids(coordinator, supabase: FakeSupabaseClient) -> None:
    task = await make_task(coordinator)

    user = await make_user(coordinator, "Ada", [task.id, f" {task.id} ", task.id.upper()])

    assert user.pending_tasks == [task.id]


@pytest.mark.asyncio
async def test_create_user_trims_name_and_email(coordinator) -> None:
    user = await coordinator.create_user(UserWriteRequest(name="  Ada ", email=" ada@example.com "))

    assert user.name == "Ada"
    assert user.email == "ada@example.com"
    assert user.pending_tasks == []


@pytest.mark.asyncio
@pytest.mark.parametrize(("name", "email"), [(None, "a@example.com"), ("Ada", None), ("  ", "a@example.com"), ("Ada", "")])
async def test_create_user_requires_name_and_email(coordinator, supabase: FakeSupabaseClient, name, email) -> None:
    with pytest.raises(ValidationError, match="Name and email are required"):
        await coordinator.create_user(UserWriteRequest(name=name, email=email))

    assert supabase.writes == []


@pytest.mark.asyncio
async def test_create_user_with_already_assigned_task_conflicts(coordinator, supabase: FakeSupabaseClient) -> None:
    owner = await make_user(coordinator, "Owner")
    task = await make_task(coordinator, assigned_user=owner.id)
    supabase.writes.clear()

    with pytest.raises(ConflictError):
        await make_user(coordinator, "Ada", [task.id])

    assert supabase.writes == []
    assert len(supabase.tables["users"].rows) == 1


@pytest.mark.asyncio
async def test_create_user_with_unknown_pending_task(coordinator, supabase: FakeSupabaseClient) -> None:
    task = await make_task(coordinator)

    with pytest.raises(NotFoundError, match="One or more pending tasks were not found"):
        await make_user(coordinator, "Ada", [task.id, str(uuid.uuid4())])

    assert supabase.tables["users"].rows == {}


@pytest.mark.asyncio
async def test_create_user_with_malformed_pending_task(coordinator, supabase: FakeSupabaseClient) -> None:
    with pytest.raises(NotFoundError, match="Invalid task identifier"):
        await make_user(coordinator, "Ada", ["task-1"])

    assert supabase.tables["users"].rows == {}


@pytest.mark.asyncio
async def test_create_user_with_completed_pending_task(coordinator, supabase: FakeSupabaseClient) -> None:
    task = await make_task(coordinator, completed=True)

    with pytest.raises(ValidationError, match="Pending tasks must be incomplete"):
        await make_user(coordinator, "Ada", [task.id])

    assert supabase.tables["users"].rows == {}


@pytest.mark.asyncio
async def test_create_user_rejects_non_list_pending_tasks(coordinator) -> None:
    with pytest.raises(ValidationError):
        await make_user(coordinator, "Ada", "not-a-list")


@pytest.mark.asyncio
async def test_duplicate_email_on_create(coordinator, supabase: FakeSupabaseClient) -> None:
    await make_user(coordinator, "Ada", email="shared@example.com")

    with pytest.raises(ValidationError, match="Email already exists"):
        await make_user(coordinator, "Grace", email="shared@example.com")

    assert len(supabase.tables["users"].rows) == 1
    assert check_relationship_invariants(supabase) == []


@pytest.mark.asyncio
async def test_duplicate_email_on_update(coordinator, supabase: FakeSupabaseClient) -> None:
    await make_user(coordinator, "Ada")
    grace = await make_user(coordinator, "Grace")

    with pytest.raises(ValidationError, match="Email already exists"):
        await coordinator.update_user(grace.id, user_request("Grace", email="ada@example.com"))

    assert supabase.user_row(grace.id)["email"] == "grace@example.com"


@pytest.mark.asyncio
async def test_update_user_keeping_own_email(coordinator) -> None:
    ada = await make_user(coordinator, "Ada")

    updated = await coordinator.update_user(ada.id, user_request("Ada Lovelace", email="ada@example.com"))

    assert updated.name == "Ada Lovelace"
    assert updated.email == "ada@example.com"


@pytest.mark.asyncio
async def test_conflict_rejection_writes_nothing(coordinator, supabase: FakeSupabaseClient) -> None:
    task = await make_task(coordinator)
    alice = await make_user(coordinator, "Alice", [task.id])
    bob = await make_user(coordinator, "Bob")
    writes_before = list(supabase.writes)

    with pytest.raises(ConflictError, match="already assigned to another user"):
        await coordinator.update_user(bob.id, user_request("Bob", [task.id]))

    assert supabase.writes == writes_before
    assert supabase.user_row(alice.id)["pending_tasks"] == [task.id]
    assert supabase.user_row(bob.id)["pending_tasks"] == []
    assert check_relationship_invariants(supabase) == []


@pytest.mark.asyncio
async def test_update_user_keeping_own_task_is_not_a_conflict(coordinator, supabase: FakeSupabaseClient) -> None:
    task = await make_task(coordinator)
    ada = await make_user(coordinator, "Ada", [task.id])

    updated = await coordinator.update_user(ada.id, user_request("Ada", [task.id]))

    assert updated.pending_tasks == [task.id]
    assert check_relationship_invariants(supabase) == []


@pytest.mark.asyncio
async def test_update_user_diff_assigns_and_releases(coordinator, supabase: FakeSupabaseClient) -> None:
    kept = await make_task(coordinator, "Kept")
    dropped = await make_task(coordinator, "Dropped")
    added = await make_task(coordinator, "Added")
    ada = await make_user(coordinator, "Ada", [kept.id, dropped.id])

    updated = await coordinator.update_user(ada.id, user_request("Ada", [kept.id, added.id]))

    assert set(updated.pending_tasks) == {kept.id, added.id}
    assert supabase.task_row(dropped.id)["assigned_user"] is None
    assert supabase.task_row(dropped.id)["assigned_user_name"] is None
    assert supabase.task_row(added.id)["assigned_user"] == ada.id
    assert supabase.task_row(added.id)["assigned_user_name"] == "Ada"
    assert supabase.task_row(kept.id)["assigned_user"] == ada.id
    assert check_relationship_invariants(supabase) == []


@pytest.mark.asyncio
async def test_update_user_without_pending_tasks_releases_everything(coordinator, supabase: FakeSupabaseClient) -> None:
    task = await make_task(coordinator)
    ada = await make_user(coordinator, "Ada", [task.id])

    updated = await coordinator.update_user(ada.id, user_request("Ada"))

    assert updated.pending_tasks == []
    assert supabase.task_row(task.id)["assigned_user"] is None
    assert check_relationship_invariants(supabase) == []


@pytest.mark.asyncio
async def test_rename_restamps_every_owned_task(coordinator, supabase: FakeSupabaseClient) -> None:
    ada = await make_user(coordinator, "Ada")
    pending = await make_task(coordinator, "Pending", assigned_user=ada.id)
    done = await make_task(coordinator, "Done", assigned_user=ada.id, completed=True)

    await coordinator.update_user(ada.id, user_request("Countess", [pending.id], email="ada@example.com"))

    assert supabase.task_row(pending.id)["assigned_user_name"] == "Countess"
    assert supabase.task_row(done.id)["assigned_user_name"] == "Countess"
    assert supabase.task_row(done.id)["assigned_user"] == ada.id
    assert check_relationship_invariants(supabase) == []


@pytest.mark.asyncio
async def test_update_user_repairs_drifted_owner(coordinator, supabase: FakeSupabaseClient) -> None:
    ada = await make_user(coordinator, "Ada")
    # Listed as pending but the task side never got the owner
    row = supabase.seed("tasks", name="Drifted", deadline=DEADLINE)
    supabase.user_row(ada.id)["pending_tasks"] = [row["id"]]

    await coordinator.update_user(ada.id, user_request("Ada", [row["id"]]))

    assert supabase.task_row(row["id"])["assigned_user"] == ada.id
    assert supabase.task_row(row["id"])["assigned_user_name"] == "Ada"
    assert check_relationship_invariants(supabase) == []


@pytest.mark.asyncio
@pytest.mark.parametrize("user_id", [str(uuid.uuid4()), "nope"])
async def test_update_missing_user_is_not_found(coordinator, user_id) -> None:
    with pytest.raises(NotFoundError, match="User not found"):
        await coordinator.update_user(user_id, user_request("Ada"))


@pytest.mark.asyncio
async def test_delete_user_cascades_to_tasks(coordinator, supabase: FakeSupabaseClient) -> None:
    first = await make_task(coordinator, "First")
    second = await make_task(coordinator, "Second")
    ada = await make_user(coordinator, "Ada", [first.id, second.id])
    done = await make_task(coordinator, "Done", assigned_user=ada.id, completed=True)

    deleted = await coordinator.delete_user(ada.id)

    assert deleted.id == ada.id
    assert supabase.tables["users"].rows == {}
    for task_id in (first.id, second.id, done.id):
        assert supabase.task_row(task_id)["assigned_user"] is None
        assert supabase.task_row(task_id)["assigned_user_name"] is None
    assert check_relationship_invariants(supabase) == []


@pytest.mark.asyncio
async def test_delete_missing_user_is_not_found(coordinator) -> None:
    with pytest.raises(NotFoundError, match="User not found"):
        await coordinator.delete_user(str(uuid.uuid4()))


@pytest.mark.asyncio
async def test_create_user_restamps_tasks_already_pointing_at_id(coordinator, supabase: FakeSupabaseClient, monkeypatch) -> None:
    fixed_id = str(uuid.uuid4())
    orphan = supabase.seed(
        "tasks",
        name="Orphan",
        deadline=DEADLINE,
        completed=True,
        assigned_user=fixed_id,
        assigned_user_name="Someone else",
    )
    users = supabase.tables["users"]
    original_defaults = users._defaults
    monkeypatch.setattr(users, "_defaults", lambda: {**original_defaults(), "id": fixed_id})

    user = await make_user(coordinator, "Ada")

    assert user.id == fixed_id
    assert supabase.task_row(orphan["id"])["assigned_user_name"] == "Ada"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("name", "email", "message"),
    [
        ({"a": 1}, "ada@example.com", "Name must be text"),
        ("Ada", ["ada@example.com"], "Email must be text"),
    ],
)
async def test_create_user_rejects_structured_fields(
    coordinator, supabase: FakeSupabaseClient, name, email, message
) -> None:
    with pytest.raises(ValidationError, match=message):
        await coordinator.create_user(UserWriteRequest(name=name, email=email))

    assert supabase.writes == []
