"""
Domain errors for the project portal.

Services raise these; the handlers registered in app.main turn them into
``{"message": ...}`` JSON bodies with the matching status code.
"""

from fastapi import status


class PortalError(Exception):
    """Base class for every error the API reports to clients"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"message": self.message}


class InvalidInputError(PortalError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class UnauthenticatedError(PortalError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Access denied. No token provided."


class InvalidAccessTokenError(UnauthenticatedError):
    default_message = "Invalid token."


class InvalidCredentialsError(UnauthenticatedError):
    default_message = "Invalid credentials"


class ForbiddenError(PortalError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Access denied. Unauthorized role."


class NotProjectMentorError(ForbiddenError):
    default_message = "You are not the mentor for this project."


class NotFoundError(PortalError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found."


class ConflictError(PortalError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict."


class AlreadyAppliedError(ConflictError):
    default_message = "Already applied for this project."


class InvalidTransitionError(PortalError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid project status transition."
