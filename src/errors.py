"""Domain errors surfaced to API callers."""


class DomainError(Exception):
    """Base error carrying a machine-readable code and an HTTP status."""

    code: str = "domain_error"
    status: int = 400

    def __init__(self, message: str = "", *, code: str | None = None, status: int | None = None):
        super().__init__(message or self.__class__.__name__)
        self.message = message or self.__class__.__name__
        if code:
            self.code = code
        if status:
            self.status = status


class ValidationError(DomainError):
    code = "validation_error"
    status = 400


class ForbiddenError(DomainError):
    code = "forbidden"
    status = 403


class NotFoundError(DomainError):
    code = "not_found"
    status = 404


class ConflictError(DomainError):
    code = "conflict"
    status = 409


class UpstreamError(DomainError):
    """A collaborator (TMDB, Supabase) failed or answered with garbage."""

    code = "upstream_error"
    status = 500


class RecommendationError(UpstreamError):
    code = "recommendation_failed"

    def __init__(self, upstream_message: str):
        super().__init__(f"Error retrieving recommendations: {upstream_message}")
