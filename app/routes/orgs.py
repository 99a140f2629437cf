from fastapi import APIRouter, Depends

from app.auth.deps import require_identity
from app.auth.tokens import Valid
from app.schemas.common import MessageOut
from app.schemas.orgs import AddUserIn, OrgCreateIn, OrgList, OrgListOut, OrgRecordOut, org_out
from app.services.organisations import OrganisationService, get_organisation_service

router = APIRouter(prefix="/api/organisations", tags=["organisations"])

@router.get("", response_model=OrgListOut)
def list_orgs(
    identity: Valid = Depends(require_identity),
    service: OrganisationService = Depends(get_organisation_service),
) -> OrgListOut:
    orgs = service.list_organisations(identity.user_id)
    return OrgListOut(
        message="Organisations fetched successfully",
        data=OrgList(organisations=[org_out(o) for o in orgs]),
    )

@router.get("/{org_id}", response_model=OrgRecordOut)
def get_org(
    org_id: str,
    _: Valid = Depends(require_identity),
    service: OrganisationService = Depends(get_organisation_service),
) -> OrgRecordOut:
    org = service.get_organisation(org_id)
    return OrgRecordOut(message="Organisation record fetched successfully", data=org_out(org))

@router.post("", response_model=OrgRecordOut, status_code=201)
def create_org(
    payload: OrgCreateIn,
    identity: Valid = Depends(require_identity),
    service: OrganisationService = Depends(get_organisation_service),
) -> OrgRecordOut:
    org = service.create_organisation(payload.name, payload.description, identity.user_id)
    return OrgRecordOut(message="Organisation created successfully", data=org_out(org))

@router.post("/{org_id}/users", response_model=MessageOut)
def add_user(
    org_id: str,
    payload: AddUserIn,
    _: Valid = Depends(require_identity),
    service: OrganisationService = Depends(get_organisation_service),
) -> MessageOut:
    service.add_user_to_organisation(org_id, payload.user_id)
    return MessageOut(message="User added to organisation successfully")
