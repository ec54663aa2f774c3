"""Domain error taxonomy.

Every error carries a machine-readable ``kind`` and the HTTP status the
application factory renders it with.
"""


class HubitError(Exception):
    """Base class for errors reported to API callers as ``{detail, code}``."""

    kind: str = "error"
    status_code: int = 400

    def __init__(self, message: str, *, kind: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind


class AuthenticationError(HubitError):
    """No credential was presented."""

    kind = "authentication_required"
    status_code = 401


class AuthorizationError(HubitError):
    """A credential was presented but is invalid, expired, or lacks the required role."""

    kind = "credential_invalid"
    status_code = 403


class ValidationError(HubitError):
    """Caller-correctable input problem, e.g. an empty address field."""

    kind = "validation_error"
    status_code = 422


class NotFoundError(HubitError):
    kind = "not_found"
    status_code = 404


class ConflictError(HubitError):
    """A uniqueness constraint rejected a write."""

    kind = "conflict"
    status_code = 409


class CodeInUseError(ConflictError):
    """A community code cannot be deleted while properties still reference it."""

    kind = "code_in_use"


class PersistenceError(HubitError):
    """Wraps a storage failure; the original exception is chained as ``__cause__``."""

    kind = "persistence_error"
    status_code = 500
