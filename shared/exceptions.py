"""
Domain errors raised by services and rendered by the handlers in
``app.core.errors``. Each carries a stable machine-readable ``code``.
"""


class DomainError(Exception):
    code = "DOMAIN_ERROR"
    status_code = 400

    def __init__(self, message: str = "", **details):
        super().__init__(message or self.code.lower())
        self.message = message or self.code.lower()
        self.details = details


class NotFoundError(DomainError):
    code = "NOT_FOUND"
    status_code = 404


class ForbiddenError(DomainError):
    code = "FORBIDDEN"
    status_code = 403


class ConflictError(DomainError):
    code = "CONFLICT"
    status_code = 409


class TooManyFilesError(DomainError):
    code = "TOO_MANY_FILES"
    status_code = 400


class UpstreamFailure(DomainError):
    """The document store or the object storage failed."""
    code = "UPSTREAM_FAILURE"
    status_code = 502


class UpstreamTimeout(UpstreamFailure):
    code = "UPSTREAM_TIMEOUT"
    status_code = 504
