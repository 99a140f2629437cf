from __future__ import annotations

from dataclasses import dataclass

@dataclass(frozen=True)
class FieldError:
    field: str
    message: str

class ApiError(Exception):
    status_code = 500
    status = "Internal server error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_body(self) -> dict:
        return {"status": self.status, "message": self.message, "statusCode": self.status_code}

class ValidationError(ApiError):
    status_code = 422
    status = "Unprocessable entity"

    def __init__(self, errors: list[FieldError]):
        super().__init__("validation failed")
        self.errors = errors

    def to_body(self) -> dict:
        return {"errors": [{"field": e.field, "message": e.message} for e in self.errors]}

class RegistrationError(ApiError):
    status_code = 400
    status = "Bad request"

    def __init__(self, message: str = "Registration unsuccessful"):
        super().__init__(message)

class AuthenticationError(ApiError):
    # 401 keeps the "Bad request" status label clients already parse
    status_code = 401
    status = "Bad request"

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message)

class AuthorizationError(ApiError):
    status_code = 403
    status = "Forbidden"

class NotFoundError(ApiError):
    status_code = 404
    status = "Not found"

class RateLimitedError(ApiError):
    status_code = 429
    status = "Too many requests"

    def __init__(self, message: str = "rate_limited"):
        super().__init__(message)

class InternalError(ApiError):
    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)

class HashingError(Exception):
    """Raised when a password digest cannot be produced."""

def required(**values: object) -> list[FieldError]:
    # blank strings count as missing
    errors: list[FieldError] = []
    for field, value in values.items():
        if value is None or (isinstance(value, str) and not value.strip()):
            errors.append(FieldError(field=field, message=f"{_label(field)} is required"))
    return errors

def _label(field: str) -> str:
    words: list[str] = []
    current = ""
    for ch in field:
        if ch.isupper() and current:
            words.append(current)
            current = ch.lower()
        else:
            current += ch
    words.append(current)
    label = " ".join(words)
    return label[:1].upper() + label[1:]
