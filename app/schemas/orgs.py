import uuid

from pydantic import Field

from app.models.organisation import Organisation
from app.schemas.common import CamelModel, MessageOut

class OrgCreateIn(CamelModel):
    name: str | None = Field(default=None, max_length=200)
    description: str | None = None

class AddUserIn(CamelModel):
    user_id: str | None = None

class OrgOut(CamelModel):
    org_id: uuid.UUID
    name: str
    description: str | None = None

class OrgList(CamelModel):
    organisations: list[OrgOut]

class OrgListOut(MessageOut):
    data: OrgList

class OrgRecordOut(MessageOut):
    data: OrgOut

def org_out(o: Organisation) -> OrgOut:
    return OrgOut(org_id=o.id, name=o.name, description=o.description)
