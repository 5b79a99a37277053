"""User sync endpoints — expose the orchestrator's state and operations as JSON."""

from fastapi import APIRouter, Depends, HTTPException, status

from user_sync.application.schemas import DraftFieldUpdate, SyncStateResponse
from user_sync.application.services import SyncOrchestrator
from user_sync.domain.entities import RecordId
from user_sync.domain.exceptions import MutationInProgressError, RecordNotFoundError
from user_sync.infrastructure.dependencies import get_orchestrator

router = APIRouter(prefix="/users", tags=["Users"])


def _state(orchestrator: SyncOrchestrator) -> SyncStateResponse:
    return SyncStateResponse.from_snapshot(orchestrator.snapshot)


def _resolve_id(orchestrator: SyncOrchestrator, raw_id: str) -> RecordId:
    """Map a path parameter back onto the id type the server assigned."""
    for record in orchestrator.snapshot.primary_records:
        if str(record.id) == raw_id:
            return record.id
    return raw_id


@router.get("/state", response_model=SyncStateResponse)
async def get_state(
    orchestrator: SyncOrchestrator = Depends(get_orchestrator),
) -> SyncStateResponse:
    """Current snapshot: both collections, load status, error and form."""
    return _state(orchestrator)


@router.post("/initialize", response_model=SyncStateResponse)
async def initialize(
    orchestrator: SyncOrchestrator = Depends(get_orchestrator),
) -> SyncStateResponse:
    """(Re)load the primary and read-only collections."""
    await orchestrator.initialize()
    return _state(orchestrator)


@router.post("/form/create", response_model=SyncStateResponse)
async def start_create(
    orchestrator: SyncOrchestrator = Depends(get_orchestrator),
) -> SyncStateResponse:
    orchestrator.start_create()
    return _state(orchestrator)


@router.post("/form/edit/{record_id}", response_model=SyncStateResponse)
async def start_edit(
    record_id: str,
    orchestrator: SyncOrchestrator = Depends(get_orchestrator),
) -> SyncStateResponse:
    """Load an existing record into the form."""
    try:
        orchestrator.start_edit(_resolve_id(orchestrator, record_id))
    except RecordNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return _state(orchestrator)


@router.post("/form/cancel", response_model=SyncStateResponse)
async def cancel_edit(
    orchestrator: SyncOrchestrator = Depends(get_orchestrator),
) -> SyncStateResponse:
    orchestrator.cancel_edit()
    return _state(orchestrator)


@router.patch("/form/draft", response_model=SyncStateResponse)
async def update_draft(
    data: DraftFieldUpdate,
    orchestrator: SyncOrchestrator = Depends(get_orchestrator),
) -> SyncStateResponse:
    orchestrator.update_field(data.field, data.value)
    return _state(orchestrator)


@router.post("/form/submit", response_model=SyncStateResponse)
async def submit(
    orchestrator: SyncOrchestrator = Depends(get_orchestrator),
) -> SyncStateResponse:
    """Create or update, depending on the form mode. Failures land in current_error."""
    try:
        await orchestrator.submit()
    except MutationInProgressError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return _state(orchestrator)


@router.delete("/{record_id}", response_model=SyncStateResponse)
async def delete_user(
    record_id: str,
    orchestrator: SyncOrchestrator = Depends(get_orchestrator),
) -> SyncStateResponse:
    """Delete a user from the primary resource. Failures land in current_error."""
    try:
        await orchestrator.delete_record(_resolve_id(orchestrator, record_id))
    except MutationInProgressError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return _state(orchestrator)
