"""Unit tests for the SyncOrchestrator."""

import asyncio

import httpx
import pytest

from user_sync.application.services import SyncOrchestrator
from user_sync.domain.entities import DraftRecord, FormMode, LoadState, SyncSnapshot, ViewState
from user_sync.domain.exceptions import (
    ErrorContext,
    MutationInProgressError,
    RecordNotFoundError,
    UnknownFieldError,
)
from user_sync.infrastructure.http import HttpResourceClient
from tests.fakes import FakeResourceClient, make_user


async def _drain() -> None:
    """Let pending tasks run until they block."""
    for _ in range(10):
        await asyncio.sleep(0)


@pytest.fixture
def primary() -> FakeResourceClient:
    return FakeResourceClient([make_user(1, "Ann", email="a@x.com", website="a.com")])


@pytest.fixture
def read_only() -> FakeResourceClient:
    return FakeResourceClient(
        [make_user(1, "Leanne"), make_user(2, "Ervin")],
        list_context=ErrorContext.LIST_READ_ONLY,
    )


@pytest.fixture
def orchestrator(primary, read_only) -> SyncOrchestrator:
    return SyncOrchestrator(primary=primary, read_only=read_only)


# ── Initial load ──


def test_snapshot_before_initialize_is_loading(orchestrator: SyncOrchestrator):
    snapshot = orchestrator.snapshot
    assert snapshot.is_loading
    assert snapshot.view is ViewState.LOADING
    assert snapshot.form_mode is FormMode.CREATE


@pytest.mark.asyncio
async def test_initialize_loads_both_collections(orchestrator: SyncOrchestrator):
    snapshot = await orchestrator.initialize()

    assert not snapshot.is_loading
    assert snapshot.view is ViewState.READY
    assert [r.name for r in snapshot.primary_records] == ["Ann"]
    assert [r.name for r in snapshot.read_only_records] == ["Leanne", "Ervin"]
    assert snapshot.primary_status.state is LoadState.READY
    assert snapshot.read_only_status.state is LoadState.READY
    assert snapshot.current_error is None


@pytest.mark.asyncio
async def test_slow_source_does_not_hide_other_results(orchestrator, read_only):
    read_only.gates["list"] = asyncio.Event()

    task = asyncio.create_task(orchestrator.initialize())
    await _drain()

    snapshot = orchestrator.snapshot
    assert [r.id for r in snapshot.primary_records] == [1]
    assert snapshot.primary_status.state is LoadState.READY
    assert snapshot.read_only_status.state is LoadState.LOADING
    assert snapshot.is_loading

    read_only.gates["list"].set()
    await task
    assert not orchestrator.snapshot.is_loading


@pytest.mark.asyncio
async def test_one_failed_load_is_reported_independently(orchestrator, read_only):
    read_only.fail.add("list")

    snapshot = await orchestrator.initialize()

    assert not snapshot.is_loading
    assert snapshot.primary_status.state is LoadState.READY
    assert snapshot.read_only_status.state is LoadState.FAILED
    assert [r.id for r in snapshot.primary_records] == [1]
    assert snapshot.current_error.context is ErrorContext.LIST_READ_ONLY
    assert snapshot.view is ViewState.ERROR


@pytest.mark.asyncio
async def test_both_loads_fail_primary_error_wins(orchestrator, primary, read_only):
    primary.fail.add("list")
    read_only.fail.add("list")
    # primary answers last; precedence must not depend on completion order
    primary.gates["list"] = asyncio.Event()

    task = asyncio.create_task(orchestrator.initialize())
    await _drain()
    primary.gates["list"].set()
    snapshot = await task

    assert not snapshot.is_loading
    assert snapshot.primary_status.state is LoadState.FAILED
    assert snapshot.read_only_status.state is LoadState.FAILED
    assert snapshot.current_error.context is ErrorContext.LIST_PRIMARY
    assert snapshot.current_error.message == ErrorContext.LIST_PRIMARY.user_message


@pytest.mark.asyncio
async def test_published_snapshots_never_show_failed_load_without_error(orchestrator, read_only):
    read_only.fail.add("list")
    seen: list[SyncSnapshot] = []
    orchestrator.subscribe(seen.append)

    await orchestrator.initialize()

    settled = [s for s in seen if not s.is_loading]
    assert settled
    for snapshot in settled:
        assert snapshot.read_only_status.state is LoadState.FAILED
        assert snapshot.current_error.context is ErrorContext.LIST_READ_ONLY
        assert snapshot.view is ViewState.ERROR


@pytest.mark.asyncio
async def test_reinitialize_replaces_stale_error_in_same_snapshot(orchestrator, primary):
    primary.fail.add("create")
    await orchestrator.initialize()
    await orchestrator.submit()
    assert orchestrator.snapshot.current_error.context is ErrorContext.CREATE

    seen: list[SyncSnapshot] = []
    orchestrator.subscribe(seen.append)
    await orchestrator.initialize()

    settled = [s for s in seen if not s.is_loading]
    assert settled
    assert all(s.current_error is None for s in settled)
    assert all(s.view is ViewState.READY for s in settled)


# ── Edit / create scenarios ──


@pytest.mark.asyncio
async def test_edit_scenario_ann_becomes_annie(orchestrator: SyncOrchestrator):
    await orchestrator.initialize()
    record = orchestrator.snapshot.primary_records[0]

    orchestrator.start_edit(record)
    orchestrator.update_field("name", "Annie")
    result = await orchestrator.submit()

    snapshot = orchestrator.snapshot
    assert result.name == "Annie"
    assert [(r.id, r.name) for r in snapshot.primary_records] == [(1, "Annie")]
    assert snapshot.form_mode is FormMode.CREATE
    assert snapshot.draft == DraftRecord.empty()


@pytest.mark.asyncio
async def test_edit_without_changes_updates_instead_of_inserting(orchestrator, primary):
    await orchestrator.initialize()

    orchestrator.start_edit(1)
    await orchestrator.submit()

    assert [c[0] for c in primary.calls] == ["list", "update"]
    assert len(orchestrator.snapshot.primary_records) == 1


@pytest.mark.asyncio
async def test_record_stays_addressable_by_id_after_server_echoes_string_id(read_only):
    def handler(request: httpx.Request) -> httpx.Response:
        user = {"id": 1, "name": "Ann", "email": "a@x.com", "phone": "1", "website": "a.com"}
        if request.method == "PUT":
            return httpx.Response(200, json={**user, "id": "1", "name": "Annie"})
        if request.method == "DELETE":
            return httpx.Response(200)
        return httpx.Response(200, json=[user])

    primary = HttpResourceClient(
        base_url="http://test/users",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )
    orchestrator = SyncOrchestrator(primary=primary, read_only=read_only)
    await orchestrator.initialize()

    orchestrator.start_edit(1)
    orchestrator.update_field("name", "Annie")
    await orchestrator.submit()

    assert [(r.id, r.name) for r in orchestrator.snapshot.primary_records] == [(1, "Annie")]
    orchestrator.start_edit(1)
    assert orchestrator.snapshot.form.target_id == 1
    assert await orchestrator.delete_record(1)


def test_start_edit_unknown_id_raises(orchestrator: SyncOrchestrator):
    with pytest.raises(RecordNotFoundError):
        orchestrator.start_edit(404)


def test_update_field_unknown_name_fails_fast(orchestrator: SyncOrchestrator):
    with pytest.raises(UnknownFieldError):
        orchestrator.update_field("username", "Bret")


@pytest.mark.asyncio
async def test_failed_create_surfaces_error_and_keeps_draft(orchestrator, primary):
    await orchestrator.initialize()
    primary.fail.add("create")
    orchestrator.update_field("name", "Cy")
    orchestrator.update_field("email", "c@x.com")
    draft = orchestrator.snapshot.draft

    result = await orchestrator.submit()

    snapshot = orchestrator.snapshot
    assert result is None
    assert snapshot.current_error.context is ErrorContext.CREATE
    assert len(snapshot.primary_records) == 1
    assert snapshot.draft == draft
    assert snapshot.form_mode is FormMode.CREATE
    assert not snapshot.is_busy


@pytest.mark.asyncio
async def test_next_success_clears_current_error(orchestrator, primary):
    await orchestrator.initialize()
    primary.fail.add("create")
    orchestrator.update_field("name", "Cy")
    await orchestrator.submit()
    assert orchestrator.snapshot.view is ViewState.ERROR

    primary.fail.clear()
    await orchestrator.submit()

    snapshot = orchestrator.snapshot
    assert snapshot.current_error is None
    assert snapshot.view is ViewState.READY
    assert [r.name for r in snapshot.primary_records] == ["Ann", "Cy"]


# ── Delete ──


@pytest.mark.asyncio
async def test_delete_removes_after_confirmation(orchestrator: SyncOrchestrator):
    await orchestrator.initialize()

    assert await orchestrator.delete_record(1)
    assert orchestrator.snapshot.primary_records == ()


@pytest.mark.asyncio
async def test_failed_delete_keeps_record(orchestrator, primary):
    await orchestrator.initialize()
    primary.fail.add("delete")

    assert not await orchestrator.delete_record(1)

    snapshot = orchestrator.snapshot
    assert [r.id for r in snapshot.primary_records] == [1]
    assert snapshot.current_error.context is ErrorContext.DELETE


@pytest.mark.asyncio
async def test_deleting_the_edited_record_resets_form(orchestrator: SyncOrchestrator):
    await orchestrator.initialize()
    orchestrator.start_edit(1)

    await orchestrator.delete_record(1)

    assert orchestrator.snapshot.form_mode is FormMode.CREATE


@pytest.mark.asyncio
async def test_create_update_delete_same_id(orchestrator: SyncOrchestrator, read_only):
    await orchestrator.initialize()
    read_only_before = orchestrator.snapshot.read_only_records
    seen: list[SyncSnapshot] = []
    orchestrator.subscribe(seen.append)

    orchestrator.update_field("name", "Cy")
    created = await orchestrator.submit()
    orchestrator.start_edit(created.id)
    orchestrator.update_field("name", "Cyrus")
    await orchestrator.submit()
    await orchestrator.delete_record(created.id)

    for snapshot in seen:
        ids = [r.id for r in snapshot.primary_records]
        assert len(ids) == len(set(ids))
        assert snapshot.read_only_records is read_only_before
    assert created.id not in [r.id for r in orchestrator.snapshot.primary_records]
    assert read_only.calls == [("list",)]


# ── Concurrency guard & listeners ──


@pytest.mark.asyncio
async def test_overlapping_mutation_is_rejected(orchestrator, primary):
    await orchestrator.initialize()
    primary.gates["create"] = asyncio.Event()
    orchestrator.update_field("name", "Cy")

    task = asyncio.create_task(orchestrator.submit())
    await _drain()
    assert orchestrator.snapshot.is_busy

    with pytest.raises(MutationInProgressError):
        await orchestrator.delete_record(1)

    primary.gates["create"].set()
    await task
    assert not orchestrator.snapshot.is_busy
    assert [r.id for r in orchestrator.snapshot.primary_records] == [1, 100]


@pytest.mark.asyncio
async def test_listeners_receive_snapshots_and_can_unsubscribe(orchestrator):
    seen: list[SyncSnapshot] = []
    unsubscribe = orchestrator.subscribe(seen.append)

    await orchestrator.initialize()
    assert not seen[-1].is_loading

    unsubscribe()
    count = len(seen)
    orchestrator.start_create()
    assert len(seen) == count


@pytest.mark.asyncio
async def test_failing_listener_does_not_break_transition(orchestrator):
    def broken(snapshot: SyncSnapshot) -> None:
        raise RuntimeError("render failed")

    orchestrator.subscribe(broken)

    snapshot = await orchestrator.initialize()
    assert snapshot.view is ViewState.READY
