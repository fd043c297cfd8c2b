"""Error taxonomy shared by the resource services and the HTTP layer."""


class AppError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """A required field is absent or blank, or a value is malformed."""
    status_code = 400


class NotFoundError(AppError):
    """
    The id does not exist *or* belongs to another owner.

    Both cases share one message so existence never leaks across owners.
    """
    status_code = 404


class UnavailableError(AppError):
    """The store could not be reached."""
    status_code = 500


class CascadeError(AppError):
    """
    A folder was removed but one or more dependent-deletion steps failed.

    The folder removal is not rolled back; the repair sweep reconciles the
    leftover dependents.
    """
    status_code = 500

    def __init__(self, message: str, failed_steps=None):
        super().__init__(message)
        self.failed_steps = list(failed_steps or [])


def require_text(value, message: str) -> str:
    """Return ``value`` stripped, or raise ValidationError when blank."""
    if value is None or not str(value).strip():
        raise ValidationError(message)
    return str(value).strip()
