"""
ThemeVote – domain errors.

Services raise these; ``app.main`` turns them into JSON responses of the
form ``{"code": ..., "message": ...}`` with the matching status code.
"""


class AppError(Exception):
    status_code: int = 500
    code: str = "Internal"
    default_message: str = "Something went wrong. Please try again."

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message}


class ValidationError(AppError):
    status_code = 400
    code = "ValidationError"
    default_message = "Invalid request."


class EmailTaken(ValidationError):
    code = "EmailTaken"
    default_message = "User already exists"


class AuthRequired(AppError):
    status_code = 401
    code = "AuthRequired"
    default_message = "Authentication required"


class NotFound(AppError):
    status_code = 404
    code = "NotFound"
    default_message = "Not found"


class CapacityExceeded(AppError):
    status_code = 400
    code = "CapacityExceeded"
    default_message = "This theme has reached its maximum votes"


class AlreadyVoted(AppError):
    status_code = 400
    code = "AlreadyVoted"
    default_message = "You have already voted"


class Internal(AppError):
    pass
