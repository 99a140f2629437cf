from fastapi import APIRouter, Depends

from app.auth.deps import require_identity
from app.auth.tokens import Valid
from app.schemas.users import UserRecordOut, user_out
from app.services.organisations import OrganisationService, get_organisation_service

router = APIRouter(prefix="/api/users", tags=["users"])

# any authenticated caller may read any user's public record
@router.get("/{user_id}", response_model=UserRecordOut)
def get_user(
    user_id: str,
    _: Valid = Depends(require_identity),
    service: OrganisationService = Depends(get_organisation_service),
) -> UserRecordOut:
    user = service.get_user(user_id)
    return UserRecordOut(message="User record fetched successfully", data=user_out(user))
