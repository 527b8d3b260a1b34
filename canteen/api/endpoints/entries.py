"""Canteen entry endpoints."""

from fastapi import APIRouter, Depends, Query

from canteen.auth import get_store, require_approved
from canteen.repositories.sql import SqlStore
from canteen.schemas.entry import EntryCreate, EntryRead, EntryUpdate
from canteen.services import registration_service
from canteen.services.session_service import SessionContext

router: APIRouter = APIRouter()


@router.get("", response_model=list[EntryRead])
def get_entries(
    invoiced: bool | None = Query(default=None),
    context: SessionContext = Depends(require_approved),
    store: SqlStore = Depends(get_store),
) -> list[EntryRead]:
    """Return all entries newest first, or one side of the pending/invoiced split."""
    if invoiced is None:
        entries = registration_service.list_entries(store)
    elif invoiced:
        entries = registration_service.list_invoiced(store)
    else:
        entries = registration_service.list_pending(store)
    return [EntryRead.model_validate(entry) for entry in entries]


@router.post("", response_model=EntryRead)
def create_entry(payload: EntryCreate, store: SqlStore = Depends(get_store)) -> EntryRead:
    entry = registration_service.submit_entry(store, payload.model_dump())
    return EntryRead.model_validate(entry)


@router.patch("/{entry_id}", response_model=EntryRead)
def update_entry(
    entry_id: str,
    payload: EntryUpdate,
    context: SessionContext = Depends(require_approved),
    store: SqlStore = Depends(get_store),
) -> EntryRead:
    entry = registration_service.set_invoiced(store, entry_id, payload.invoiced, actor=context)
    return EntryRead.model_validate(entry)
