from pydantic import Field

from app.schemas.common import CamelModel, MessageOut
from app.schemas.users import UserOut

# fields are optional so missing ones are reported together, not by the parser;
# lengths match the users table
class RegisterIn(CamelModel):
    first_name: str | None = Field(default=None, max_length=120)
    last_name: str | None = Field(default=None, max_length=120)
    email: str | None = Field(default=None, max_length=320)
    password: str | None = None
    phone: str | None = Field(default=None, max_length=40)

class LoginIn(CamelModel):
    email: str | None = None
    password: str | None = None

class AuthData(CamelModel):
    access_token: str
    user: UserOut

class AuthOut(MessageOut):
    data: AuthData
