"""Exceptions raised by the queue service layer."""


class QueueError(Exception):
    """Base error for queue operations; carries the HTTP status it maps to."""

    status_code = 500

    def __init__(self, message=None):
        super().__init__(message or self.__class__.__doc__)
        self.message = message or self.__class__.__doc__


class ValidationError(QueueError):
    """Invalid request data"""

    status_code = 400


class InvalidStatusError(ValidationError):
    """Unknown queue or patient status"""


class BookingNotFoundError(QueueError):
    """Booking not found"""

    status_code = 404


class PatientNotFoundError(QueueError):
    """Patient not found"""

    status_code = 404
