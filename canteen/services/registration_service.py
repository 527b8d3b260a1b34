"""Registration workflow: pending/invoiced transitions of canteen entries.

An entry is either pending (``invoiced`` false) or invoiced. Moving it in
either direction writes exactly one audit record, inside the same transaction
as the flag update, so the log never misses a committed transition and never
records one that was rolled back.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Sequence

from canteen.core.exceptions import NotFoundError
from canteen.models import MOVED_TO_INVOICED, MOVED_TO_REGISTRATIONS, Entry
from canteen.models.entry import new_id
from canteen.repositories.base import Store
from canteen.services.audit_service import log_action
from canteen.services.session_service import SessionContext
from canteen.services.validation import parse_amount, require_text
from canteen.utils.time import utc_now

logger = logging.getLogger(__name__)

ENTRY_FIELDS: tuple[str, ...] = ("name", "company", "meal", "amount", "representative")


def build_entry(
    payload: Mapping[str, Any],
    *,
    created_at: datetime | None = None,
    allow_zero_amount: bool = False,
) -> Entry:
    """Validate submitted fields and build a pending entry (not yet stored)."""
    return Entry(
        id=new_id(),
        name=require_text(payload.get("name"), "name"),
        company=require_text(payload.get("company"), "company"),
        meal=require_text(payload.get("meal"), "meal"),
        amount=parse_amount(payload.get("amount"), allow_zero=allow_zero_amount),
        representative=require_text(payload.get("representative"), "representative"),
        invoiced=False,
        created_at=created_at or utc_now(),
    )


def submit_entry(store: Store, payload: Mapping[str, Any]) -> Entry:
    """Create a pending entry from a public form submission."""
    entry = build_entry(payload)
    with store.transaction("Failed to create entry"):
        store.entries.add(entry)
    logger.info("[ENTRIES] Entry %s submitted", entry.id)
    return entry


def _get_entry(store: Store, entry_id: str) -> Entry:
    entry = store.entries.get(entry_id)
    if entry is None:
        raise NotFoundError("Entry not found")
    return entry


def _move(store: Store, entry_id: str, *, invoiced: bool, actor: SessionContext) -> Entry:
    action = MOVED_TO_INVOICED if invoiced else MOVED_TO_REGISTRATIONS
    with store.transaction("Failed to update entry"):
        entry = _get_entry(store, entry_id)
        store.entries.set_invoiced(entry, invoiced)
        log_action(store, actor=actor, action=action, entry=entry)
    logger.info("[ENTRIES] Entry %s %s by %s", entry.id, action, actor.username)
    return entry


def mark_invoiced(store: Store, entry_id: str, *, actor: SessionContext) -> Entry:
    return _move(store, entry_id, invoiced=True, actor=actor)


def mark_pending(store: Store, entry_id: str, *, actor: SessionContext) -> Entry:
    return _move(store, entry_id, invoiced=False, actor=actor)


def set_invoiced(store: Store, entry_id: str, invoiced: bool, *, actor: SessionContext) -> Entry:
    """Dispatch a PATCH of the invoiced flag to the matching transition."""
    if invoiced:
        return mark_invoiced(store, entry_id, actor=actor)
    return mark_pending(store, entry_id, actor=actor)


def list_entries(store: Store) -> Sequence[Entry]:
    return store.entries.list()


def list_pending(store: Store) -> Sequence[Entry]:
    return store.entries.list(invoiced=False)


def list_invoiced(store: Store) -> Sequence[Entry]:
    return store.entries.list(invoiced=True)
