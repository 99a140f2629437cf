from __future__ import annotations

from dataclasses import dataclass

import structlog
from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.auth.passwords import PasswordHasher, get_password_hasher
from app.auth.tokens import TokenCodec, get_token_codec
from app.db import get_db
from app.errors import (
    AuthenticationError,
    FieldError,
    HashingError,
    InternalError,
    RegistrationError,
    ValidationError,
    required,
)
from app.models.membership import Membership
from app.models.organisation import Organisation
from app.models.user import User

log = structlog.get_logger()

# bcrypt only reads the first 72 bytes
MAX_PASSWORD_BYTES = 72

@dataclass(frozen=True)
class AuthResult:
    access_token: str
    user: User

def default_org_name(first_name: str) -> str:
    return f"{first_name}'s Organisation"

class AccountService:
    """Registration and login.

    Every successful call hands back a fresh access token for the account.
    """

    def __init__(self, db: Session, hasher: PasswordHasher, codec: TokenCodec):
        self.db = db
        self.hasher = hasher
        self.codec = codec

    def register(
        self,
        first_name: str | None,
        last_name: str | None,
        email: str | None,
        password: str | None,
        phone: str | None = None,
    ) -> AuthResult:
        errors = required(firstName=first_name, lastName=last_name, email=email, password=password)
        if password and len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            errors.append(FieldError(field="password", message=f"Password must be at most {MAX_PASSWORD_BYTES} bytes"))
        if errors:
            raise ValidationError(errors)

        try:
            password_hash = self.hasher.hash(password)
        except HashingError:
            log.error("user.password_hash_failed")
            raise InternalError()

        # user, default org and membership commit together or not at all
        try:
            user = User(
                first_name=first_name,
                last_name=last_name,
                email=email,
                password_hash=password_hash,
                phone=phone,
            )
            self.db.add(user)
            self.db.flush()

            org = Organisation(name=default_org_name(first_name))
            self.db.add(org)
            self.db.flush()

            self.db.add(Membership(user_id=user.id, org_id=org.id))
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            log.warning("user.registration_failed", error=exc.__class__.__name__)
            raise RegistrationError()

        log.info("user.registered", user_id=str(user.id), org_id=str(org.id))
        return AuthResult(access_token=self.codec.issue(user.id), user=user)

    def login(self, email: str | None, password: str | None) -> AuthResult:
        # unknown email and wrong password fail the same way
        if not email or not password:
            raise AuthenticationError()

        user = self.db.scalar(select(User).where(User.email == email))
        if user is None:
            log.info("auth.login_failure", reason="unknown_email")
            raise AuthenticationError()

        if not self.hasher.verify(password, user.password_hash):
            log.info("auth.login_failure", user_id=str(user.id), reason="bad_password")
            raise AuthenticationError()

        log.info("auth.login_success", user_id=str(user.id))
        return AuthResult(access_token=self.codec.issue(user.id), user=user)

def get_account_service(
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    codec: TokenCodec = Depends(get_token_codec),
) -> AccountService:
    return AccountService(db, hasher, codec)
