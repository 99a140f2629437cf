from __future__ import annotations

from fastapi import APIRouter, Depends

from app.config import settings
from app.ratelimit import rate_limit
from app.schemas.auth import AuthData, AuthOut, LoginIn, RegisterIn
from app.schemas.users import user_out
from app.services.accounts import AccountService, get_account_service

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("/register", response_model=AuthOut, status_code=201)
def register(
    payload: RegisterIn,
    accounts: AccountService = Depends(get_account_service),
    _: None = Depends(
        rate_limit(
            "auth:register",
            limit_per_window=settings.rate_limit_auth_register_per_min,
            window_seconds=60,
        )
    ),
) -> AuthOut:
    result = accounts.register(
        first_name=payload.first_name,
        last_name=payload.last_name,
        email=payload.email,
        password=payload.password,
        phone=payload.phone,
    )
    return AuthOut(
        message="Registration successful",
        data=AuthData(access_token=result.access_token, user=user_out(result.user)),
    )

@router.post("/login", response_model=AuthOut)
def login(
    payload: LoginIn,
    accounts: AccountService = Depends(get_account_service),
    _: None = Depends(
        rate_limit(
            "auth:login",
            limit_per_window=settings.rate_limit_auth_login_per_min,
            window_seconds=60,
        )
    ),
) -> AuthOut:
    result = accounts.login(email=payload.email, password=payload.password)
    return AuthOut(
        message="Login successful",
        data=AuthData(access_token=result.access_token, user=user_out(result.user)),
    )
