"""
Error taxonomy shared by the data-access layer, services and routes.
"""


class JobTrackError(Exception):
    """Base class for all domain errors."""

    status_code = 500

    def __init__(self, message: str = None):
        super().__init__(message or self.__class__.__doc__)
        self.message = message or self.__class__.__doc__


class NotAuthenticatedError(JobTrackError):
    """User not authenticated"""

    status_code = 401


class PersistenceError(JobTrackError):
    """Database operation failed"""

    status_code = 500


class RecordNotFoundError(PersistenceError):
    """Record not found"""

    status_code = 404


class InvalidDateError(JobTrackError, ValueError):
    """Invalid date"""

    status_code = 422


class InvalidRoutineError(JobTrackError, ValueError):
    """Routine key is not valid for this operation"""

    status_code = 422


class InvalidStageError(JobTrackError, ValueError):
    """Application stage and status do not match"""

    status_code = 422
