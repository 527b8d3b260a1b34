"""Authentication endpoints (cookie sessions)."""

from datetime import timedelta

from fastapi import APIRouter, Depends, Request

from canteen.auth import SESSION_KEY, get_store, require_session, session_id_from
from canteen.core.config import settings
from canteen.repositories.sql import SqlStore
from canteen.schemas.auth import LoginRequest, RegisterRequest, SuccessResponse, UserSummary
from canteen.services.account_service import authenticate_user, current_user, register_user
from canteen.services.session_service import SessionContext, end_session, start_session

router: APIRouter = APIRouter()


@router.post("/register", response_model=UserSummary)
def register(payload: RegisterRequest, store: SqlStore = Depends(get_store)) -> UserSummary:
    user = register_user(store, payload.username, payload.password, payload.confirm_password)
    return UserSummary.model_validate(user)


@router.post("/login", response_model=UserSummary)
def login(payload: LoginRequest, request: Request, store: SqlStore = Depends(get_store)) -> UserSummary:
    user = authenticate_user(store, payload.username, payload.password)
    login_session = start_session(
        store,
        user,
        max_age=timedelta(seconds=settings.session_max_age_seconds),
        previous_session_id=session_id_from(request),
    )
    request.session.clear()
    request.session[SESSION_KEY] = login_session.id
    return UserSummary.model_validate(user)


@router.post("/logout", response_model=SuccessResponse)
def logout(
    request: Request,
    context: SessionContext = Depends(require_session),
    store: SqlStore = Depends(get_store),
) -> SuccessResponse:
    end_session(store, context.session_id)
    request.session.clear()
    return SuccessResponse()


@router.get("/me", response_model=UserSummary)
def me(context: SessionContext = Depends(require_session), store: SqlStore = Depends(get_store)) -> UserSummary:
    return UserSummary.model_validate(current_user(store, context))
