"""Domain errors raised by the service layer.

Routers map each family onto an HTTP status; services never raise
``HTTPException`` themselves.
"""

from fastapi import HTTPException, status


class Mentor4AllError(Exception):
    """Base class for every domain error."""

    default_message = "Request could not be processed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(Mentor4AllError):
    default_message = "Invalid request"


class InvalidTimeRangeError(ValidationError):
    default_message = "End time must be after start time"


class SlotOverlapError(ValidationError):
    default_message = "This time slot overlaps with another slot you've already added"


class MissingSlotError(ValidationError):
    default_message = "Please select a time slot"


class MissingTitleError(ValidationError):
    default_message = "Please provide a session title"


class SelfBookingError(ValidationError):
    default_message = "Mentors cannot book their own availability"


class InvalidWizardStepError(ValidationError):
    default_message = "Action not allowed at this booking step"


class NotFoundError(Mentor4AllError):
    default_message = "Not found"


class SlotNotFoundError(NotFoundError):
    default_message = "Time slot not found"


class SessionNotFoundError(NotFoundError):
    default_message = "Session not found"


class MentorNotFoundError(NotFoundError):
    default_message = "Mentor not found"


class ConflictError(Mentor4AllError):
    default_message = "Conflict"


class SlotUnavailableError(ConflictError):
    default_message = "This time slot is no longer available"


class BookedSlotRemovalError(ConflictError):
    default_message = "Booked slots can only be removed with cancel_booked=true"


class SessionNotCancellableError(ConflictError):
    default_message = "Only scheduled sessions can be cancelled"


class PermissionDeniedError(Mentor4AllError):
    default_message = "Not enough permissions"


_STATUS_BY_FAMILY: list[tuple[type[Mentor4AllError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN),
]


def to_http_exception(exc: Mentor4AllError) -> HTTPException:
    for family, status_code in _STATUS_BY_FAMILY:
        if isinstance(exc, family):
            return HTTPException(status_code=status_code, detail=exc.message)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message)
