"""
Error taxonomy for the search service.

Every error raised on the request path derives from GeoSearchError and
carries the HTTP status the handlers in geosearch.main turn it into.
"""


class GeoSearchError(Exception):
    """Base class for errors that end a request with an error envelope."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidParameter(GeoSearchError):
    """A query parameter was missing or could not be parsed. Client error."""

    status_code = 400

    MISSING = "missing"
    NOT_A_NUMBER = "not_a_number"
    OUT_OF_RANGE = "out_of_range"

    def __init__(self, field: str, reason: str, message: str | None = None):
        self.field = field
        self.reason = reason
        super().__init__(message or self._default_message(field, reason))

    @staticmethod
    def _default_message(field: str, reason: str) -> str:
        if reason == InvalidParameter.MISSING:
            return f"Missing required parameter: {field}"
        if reason == InvalidParameter.NOT_A_NUMBER:
            return f"Invalid {field}: not a number"
        return f"Invalid {field}: out of range"


class QueryExecutionError(GeoSearchError):
    """The spatial query failed for any reason other than returning no rows."""

    status_code = 500

    def __init__(self, cause):
        self.cause = cause
        super().__init__(f"Internal server error during query: {cause}")


class QueryTimeout(QueryExecutionError):
    def __init__(self, seconds: float):
        self.seconds = seconds
        super().__init__(f"query did not complete within {seconds:g}s")


class StartupError(GeoSearchError):
    """The database could not be reached while the application was starting."""
