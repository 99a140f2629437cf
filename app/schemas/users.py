import uuid

from app.models.user import User
from app.schemas.common import CamelModel, MessageOut

class UserOut(CamelModel):
    user_id: uuid.UUID
    first_name: str
    last_name: str
    email: str
    phone: str | None = None

class UserRecordOut(MessageOut):
    data: UserOut

def user_out(u: User) -> UserOut:
    return UserOut(
        user_id=u.id,
        first_name=u.first_name,
        last_name=u.last_name,
        email=u.email,
        phone=u.phone,
    )
