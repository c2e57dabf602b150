from typing import Optional


class EntraLookupError(RuntimeError):
    """Base class for failures that abort a lookup run."""

    stage = "lookup"


class ConfigError(EntraLookupError):
    """Configuration source or required keys are missing."""

    stage = "configuration"


class AuthError(EntraLookupError):
    """The identity authority did not hand back a usable access token."""

    stage = "authentication"

    def __init__(
        self,
        message: str,
        error: Optional[str] = None,
        description: Optional[str] = None,
    ):
        super().__init__(message)
        self.error = error
        self.description = description


class QueryError(EntraLookupError):
    """Graph answered with a non-success status, or could not be reached."""

    stage = "query"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: str = "",
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
