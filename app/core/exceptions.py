"""Custom application exceptions."""


class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, status_code: int = 500):
        """Initialize exception with message and status code."""
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class NotFoundException(AppException):
    """Resource not found, or not in the state the operation requires."""

    def __init__(self, message: str = "Resource not found"):
        """Initialize with 404 status code."""
        super().__init__(message, status_code=404)


class ConflictException(AppException):
    """Conflict exception."""

    def __init__(self, message: str = "Conflict"):
        """Initialize with 409 status code."""
        super().__init__(message, status_code=409)


class ValidationException(AppException):
    """Validation error exception."""

    def __init__(self, message: str = "Validation error"):
        """Initialize with 422 status code."""
        super().__init__(message, status_code=422)


class ExtractionError(AppException):
    """
    The completion service could not turn a prompt into search criteria.

    Raised for unreachable or failing completion calls and for replies that
    are not a JSON object matching the criteria schema. Fatal to the search.
    """

    def __init__(self, message: str = "Search is currently unavailable"):
        """Initialize with 503 status code."""
        super().__init__(message, status_code=503)


class SearchFailedException(AppException):
    """The doctor lookup for a search failed inside the persistence layer."""

    def __init__(self, message: str = "Doctor search failed"):
        """Initialize with 500 status code."""
        super().__init__(message, status_code=500)


class TranslationWarning(UserWarning):
    """Non-fatal translation failure; the prompt passes through untranslated."""
