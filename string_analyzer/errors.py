from typing import Optional


class StringAnalyzerError(Exception):
    """Base class for errors raised by the string analyzer core."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(StringAnalyzerError):
    """Input was missing, of the wrong type, or an unusable filter value."""

    MISSING = "missing"
    WRONG_TYPE = "wrong_type"
    INVALID_FILTER = "invalid_filter"
    MISSING_QUERY = "missing_query"
    INVALID_TEXT = "invalid_text"

    def __init__(self, message: str, kind: str = INVALID_FILTER, param: Optional[str] = None):
        super().__init__(message)
        self.kind = kind
        self.param = param

    @property
    def status_code(self) -> int:  # type: ignore[override]
        # Wrong type is "unprocessable", everything else is a bad request
        return 422 if self.kind == self.WRONG_TYPE else 400


class ConflictError(StringAnalyzerError):
    status_code = 409


class NotFoundError(StringAnalyzerError):
    status_code = 404


class ParseFailureError(StringAnalyzerError):
    status_code = 400
