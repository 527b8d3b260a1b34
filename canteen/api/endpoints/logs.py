"""Activity log endpoints."""

from fastapi import APIRouter, Depends

from canteen.auth import get_store, require_approved
from canteen.repositories.sql import SqlStore
from canteen.schemas.audit import AuditLogCreate, AuditLogRead
from canteen.services.audit_service import list_audit_log, record_audit_entry
from canteen.services.session_service import SessionContext

router: APIRouter = APIRouter()


@router.get("", response_model=list[AuditLogRead])
def get_logs(
    context: SessionContext = Depends(require_approved),
    store: SqlStore = Depends(get_store),
) -> list[AuditLogRead]:
    return [AuditLogRead.model_validate(record) for record in list_audit_log(store)]


@router.post("", response_model=AuditLogRead)
def create_log(
    payload: AuditLogCreate,
    context: SessionContext = Depends(require_approved),
    store: SqlStore = Depends(get_store),
) -> AuditLogRead:
    record = record_audit_entry(store, payload.model_dump(), actor=context)
    return AuditLogRead.model_validate(record)
