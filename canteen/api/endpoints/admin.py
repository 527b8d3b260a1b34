"""Admin user-management endpoints."""

from fastapi import APIRouter, Depends

from canteen.auth import get_store, require_admin
from canteen.repositories.sql import SqlStore
from canteen.schemas.auth import SuccessResponse, UserSummary
from canteen.schemas.user import UserFlagsUpdate
from canteen.services.account_service import delete_user, list_users, update_user_flags
from canteen.services.session_service import SessionContext

router: APIRouter = APIRouter()


@router.get("/users", response_model=list[UserSummary])
def get_users(
    context: SessionContext = Depends(require_admin),
    store: SqlStore = Depends(get_store),
) -> list[UserSummary]:
    return [UserSummary.model_validate(user) for user in list_users(store, actor=context)]


@router.patch("/users/{user_id}", response_model=UserSummary)
def patch_user(
    user_id: str,
    payload: UserFlagsUpdate,
    context: SessionContext = Depends(require_admin),
    store: SqlStore = Depends(get_store),
) -> UserSummary:
    user = update_user_flags(
        store,
        user_id,
        actor=context,
        is_approved=payload.is_approved,
        is_admin=payload.is_admin,
    )
    return UserSummary.model_validate(user)


@router.delete("/users/{user_id}", response_model=SuccessResponse)
def remove_user(
    user_id: str,
    context: SessionContext = Depends(require_admin),
    store: SqlStore = Depends(get_store),
) -> SuccessResponse:
    delete_user(store, user_id, actor=context)
    return SuccessResponse()
