from __future__ import annotations

import uuid

import structlog
from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.db import get_db
from app.errors import InternalError, NotFoundError, ValidationError, required
from app.models.membership import Membership
from app.models.organisation import Organisation
from app.models.user import User

log = structlog.get_logger()

def parse_id(value: str | uuid.UUID | None) -> uuid.UUID | None:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None

class OrganisationService:
    """Users, organisations and memberships as seen by an authenticated caller."""

    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: str | uuid.UUID) -> User:
        uid = parse_id(user_id)
        user = self.db.get(User, uid) if uid else None
        if user is None:
            raise NotFoundError("User not found")
        return user

    def list_organisations(self, requester_id: uuid.UUID) -> list[Organisation]:
        q = (
            select(Organisation)
            .join(Membership, Membership.org_id == Organisation.id)
            .where(Membership.user_id == requester_id)
            .order_by(Organisation.created_at.desc(), Organisation.name)
        )
        return list(self.db.scalars(q).all())

    def get_organisation(self, org_id: str | uuid.UUID) -> Organisation:
        oid = parse_id(org_id)
        org = self.db.get(Organisation, oid) if oid else None
        if org is None:
            raise NotFoundError("Organisation not found")
        return org

    def create_organisation(
        self,
        name: str | None,
        description: str | None,
        requester_id: uuid.UUID,
    ) -> Organisation:
        errors = required(name=name)
        if errors:
            raise ValidationError(errors)

        # a valid token may outlive its account
        self.get_user(requester_id)

        try:
            org = Organisation(name=name, description=description)
            self.db.add(org)
            self.db.flush()

            self.db.add(Membership(user_id=requester_id, org_id=org.id))
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            log.error("org.create_failed", error=exc.__class__.__name__)
            raise InternalError("Organisation creation unsuccessful")

        log.info("org.created", org_id=str(org.id), user_id=str(requester_id))
        return org

    def add_user_to_organisation(
        self,
        org_id: str | uuid.UUID,
        user_id: str | None,
    ) -> Membership:
        errors = required(userId=user_id)
        if errors:
            raise ValidationError(errors)

        org = self.get_organisation(org_id)
        user = self.get_user(user_id)

        existing = self.db.get(Membership, {"user_id": user.id, "org_id": org.id})
        if existing is not None:
            return existing

        m = Membership(user_id=user.id, org_id=org.id)
        try:
            self.db.add(m)
            self.db.commit()
        except IntegrityError:
            # a concurrent add got there first
            self.db.rollback()
            existing = self.db.get(Membership, {"user_id": user.id, "org_id": org.id})
            if existing is not None:
                return existing
            log.error("org.member_add_failed", org_id=str(org.id), error="IntegrityError")
            raise InternalError("Adding user to organisation unsuccessful")
        except SQLAlchemyError as exc:
            self.db.rollback()
            log.error("org.member_add_failed", org_id=str(org.id), error=exc.__class__.__name__)
            raise InternalError("Adding user to organisation unsuccessful")

        log.info("org.member_added", org_id=str(org.id), user_id=str(user.id))
        return m

def get_organisation_service(db: Session = Depends(get_db)) -> OrganisationService:
    return OrganisationService(db)
