from functools import lru_cache

import bcrypt

from app.config import settings
from app.errors import HashingError

class PasswordHasher:
    """bcrypt hashing with a fixed work factor."""

    def __init__(self, rounds: int = 10):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        try:
            return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")
        except (ValueError, TypeError) as exc:
            raise HashingError(str(exc)) from exc

    def verify(self, password: str, password_hash: str) -> bool:
        # a wrong password is a normal negative result
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except (ValueError, TypeError):
            return False

@lru_cache
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=settings.bcrypt_rounds)
