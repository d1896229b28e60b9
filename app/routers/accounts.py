import logging

from fastapi import APIRouter, Depends

from app.dependencies import get_account_store
from app.schemas.account import (
    ForgotPasswordRequest,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
    StoreResult,
)
from app.services.account_store import MSG_DUPLICATE, AccountStore
from app.utils.exceptions import AppException
from app.utils.response import result_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

MSG_PASSWORD_MISMATCH = "Las contraseñas no coinciden"


def _respond(result: StoreResult) -> dict:
    if not result.success:
        raise AppException(result.message or "", status_code=400)
    return result_response(result)


@router.post("/register")
async def register(request: RegisterRequest, store: AccountStore = Depends(get_account_store)):
    if request.password != request.password_confirm:
        raise AppException(MSG_PASSWORD_MISMATCH, status_code=400)
    if await store.exists(request.username, request.email):
        # The unique constraints still settle races between concurrent registrations.
        raise AppException(MSG_DUPLICATE, status_code=400)
    result = await store.register(request.username, request.email, request.password)
    if result.success:
        logger.info("Registered user %s", request.username)
    return _respond(result)


@router.post("/login")
async def login(request: LoginRequest, store: AccountStore = Depends(get_account_store)):
    return _respond(await store.verify(request.username, request.password))


@router.post("/forgot-password")
async def forgot_password(request: ForgotPasswordRequest, store: AccountStore = Depends(get_account_store)):
    return _respond(await store.get_by_email(request.email))


@router.post("/reset-password")
async def reset_password(request: ResetPasswordRequest, store: AccountStore = Depends(get_account_store)):
    if request.password != request.password_confirm:
        raise AppException(MSG_PASSWORD_MISMATCH, status_code=400)
    return _respond(await store.update_password(request.email, request.password))
