from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.auth.passwords import get_password_hasher
from app.auth.tokens import get_token_codec
from app.db import SessionLocal, init_db
from app.models.membership import Membership
from app.models.user import User
from app.services.accounts import AccountService
from app.services.organisations import OrganisationService

DEMO_PASSWORD = "password123"

@dataclass
class SeedResult:
    owner_email: str
    member_email: str
    org_id: str
    owner_token: str

def get_or_register(db: Session, first_name: str, last_name: str, email: str) -> tuple[User, str]:
    accounts = AccountService(db, get_password_hasher(), get_token_codec())
    u = db.scalar(select(User).where(User.email == email))
    if u is None:
        result = accounts.register(first_name, last_name, email, DEMO_PASSWORD)
    else:
        result = accounts.login(email, DEMO_PASSWORD)
    return result.user, result.access_token

def seed(db: Session) -> SeedResult:
    owner, owner_token = get_or_register(db, "Olivia", "Owner", "owner@example.com")
    member, _ = get_or_register(db, "Max", "Member", "member@example.com")

    orgs = OrganisationService(db)
    shared = next((o for o in orgs.list_organisations(owner.id) if o.name == "Seed Org"), None)
    if shared is None:
        shared = orgs.create_organisation("Seed Org", "shared demo organisation", owner.id)

    if db.get(Membership, {"user_id": member.id, "org_id": shared.id}) is None:
        orgs.add_user_to_organisation(shared.id, str(member.id))

    return SeedResult(
        owner_email=owner.email,
        member_email=member.email,
        org_id=str(shared.id),
        owner_token=owner_token,
    )

def main() -> None:
    init_db()
    with SessionLocal() as db:
        r = seed(db)
    print("seeded:")
    print(f"  owner:  {r.owner_email} / {DEMO_PASSWORD}")
    print(f"  member: {r.member_email} / {DEMO_PASSWORD}")
    print(f"  org:    {r.org_id}")
    print(f"  owner token: {r.owner_token}")

if __name__ == "__main__":
    main()
