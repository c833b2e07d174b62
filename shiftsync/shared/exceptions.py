# shiftsync/shared/exceptions.py
from fastapi import HTTPException, status


# Authentication & Authorization Exceptions
class NotAuthenticatedError(HTTPException):
    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=message,
            headers={"WWW-Authenticate": "Bearer"},
        )


class InvalidTokenError(NotAuthenticatedError):
    def __init__(self) -> None:
        super().__init__("Invalid or expired token")


class InvalidCredentialsError(NotAuthenticatedError):
    def __init__(self) -> None:
        super().__init__("Invalid username or password")


class ForbiddenError(HTTPException):
    def __init__(
        self, message: str = "You don't have permission to perform this action"
    ) -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=message)


# Resource Not Found Exceptions
class ResourceNotFoundError(HTTPException):
    def __init__(self, resource: str) -> None:
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"{resource} not found"
        )


class UserNotFoundError(ResourceNotFoundError):
    def __init__(self) -> None:
        super().__init__("User")


class EmployeeNotFoundError(ResourceNotFoundError):
    def __init__(self) -> None:
        super().__init__("Employee")


class VenueNotFoundError(ResourceNotFoundError):
    def __init__(self) -> None:
        super().__init__("Venue")


class ShiftNotFoundError(ResourceNotFoundError):
    def __init__(self, associated: bool = False) -> None:
        super().__init__("Associated shift" if associated else "Shift")


class TimeEntryNotFoundError(ResourceNotFoundError):
    def __init__(self) -> None:
        super().__init__("Time entry")


class MessageNotFoundError(ResourceNotFoundError):
    def __init__(self) -> None:
        super().__init__("Message")


class TillVerificationNotFoundError(ResourceNotFoundError):
    def __init__(self) -> None:
        super().__init__("Till verification")


# Validation / Request Exceptions
class InvalidDataError(HTTPException):
    def __init__(self, message: str = "Invalid request data") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=message)
