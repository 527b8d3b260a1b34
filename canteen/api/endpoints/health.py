"""Liveness endpoint."""

from fastapi import APIRouter

router: APIRouter = APIRouter()


@router.get("")
def health() -> dict[str, str]:
    return {"status": "ok"}
