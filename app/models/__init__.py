from app.models.membership import Membership
from app.models.organisation import Organisation
from app.models.user import User

__all__ = ["User", "Organisation", "Membership"]
