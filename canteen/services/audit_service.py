"""Audit log helpers."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Sequence

from canteen.core.exceptions import ValidationError
from canteen.models import AUDIT_ACTIONS, AuditLog, Entry
from canteen.models.entry import new_id
from canteen.repositories.base import Store
from canteen.services.session_service import SessionContext
from canteen.services.validation import parse_amount, require_text
from canteen.utils.time import utc_now


def log_action(
    store: Store,
    *,
    actor: SessionContext | None,
    action: str,
    entry: Entry,
) -> AuditLog:
    """Append one record snapshotting ``entry``; the caller owns the transaction."""
    if action not in AUDIT_ACTIONS:
        raise ValidationError(f"Unknown audit action: {action}")
    return store.audit_logs.add(
        AuditLog(
            id=new_id(),
            action=action,
            entry_id=entry.id,
            actor_username=actor.username if actor is not None else None,
            created_at=utc_now(),
            **entry.snapshot(),
        )
    )


def record_audit_entry(store: Store, payload: Mapping[str, Any], *, actor: SessionContext) -> AuditLog:
    """Append a record built from client-supplied snapshot fields."""
    action = require_text(payload.get("action"), "action")
    if action not in AUDIT_ACTIONS:
        raise ValidationError(
            f"action must be one of: {', '.join(AUDIT_ACTIONS)}",
            details={"field": "action"},
        )
    record = AuditLog(
        id=new_id(),
        action=action,
        entry_id=payload.get("entry_id"),
        person_name=require_text(payload.get("person_name"), "personName"),
        company=require_text(payload.get("company"), "company"),
        meal=require_text(payload.get("meal"), "meal"),
        amount=parse_amount(payload.get("amount")),
        representative=require_text(payload.get("representative"), "representative"),
        actor_username=actor.username,
        created_at=utc_now(),
    )
    with store.transaction("Failed to create log"):
        store.audit_logs.add(record)
    return record


def list_audit_log(store: Store) -> Sequence[AuditLog]:
    return store.audit_logs.list()
