"""Error hierarchy for the Herdbook API.

Every error carries a human readable ``message`` and the HTTP status it maps
to. The handlers in ``src.routes.error_handlers`` render them as
``{"error": message}``.
"""


class HerdbookError(Exception):
    """Base exception for all Herdbook errors."""

    http_status: int = 500

    def __init__(self, message: str, http_status: int | None = None):
        super().__init__(message)
        self.message = message
        if http_status is not None:
            self.http_status = http_status

    def to_response(self) -> dict:
        return {"error": self.message}


# ─── Authentication (401/403) ───────────────────────────────────


class AuthenticationRequiredError(HerdbookError):
    http_status = 401

    def __init__(self, message: str = "Access token required"):
        super().__init__(message)


class InvalidCredentialError(HerdbookError):
    http_status = 403

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message)


class SubjectNotFoundError(HerdbookError):
    """A valid token whose user no longer exists."""

    http_status = 403

    def __init__(self, message: str = "User not found"):
        super().__init__(message)


# ─── Domain errors (400/404) ────────────────────────────────────


class FieldValidationError(HerdbookError):
    http_status = 400


class ConflictError(HerdbookError):
    """A unique field collided with an existing row."""

    http_status = 400


class NotFoundError(HerdbookError):
    http_status = 404


# ─── Infrastructure errors (500) ────────────────────────────────


class StoreError(HerdbookError):
    def __init__(self, message: str = "Database error"):
        super().__init__(message)


class AssetStorageError(HerdbookError):
    def __init__(self, message: str = "Failed to store image"):
        super().__init__(message)
