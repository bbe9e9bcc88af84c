class AppError(Exception):
    """Base for errors that map onto an HTTP response."""

    status_code = 500

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self) -> dict:
        return {"error": self.message, "field": self.field}


class ValidationError(AppError):
    status_code = 400


class ConflictError(AppError):
    status_code = 400


class NotFoundError(AppError):
    status_code = 404


class TransientInfraError(AppError):
    status_code = 500
