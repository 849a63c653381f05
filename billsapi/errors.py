"""Errors raised by the bill-payment services."""


class ApiError(Exception):
    """Base class for every error the services report."""


class RequestError(ApiError):
    """An upstream HTTP request failed or returned an unreadable body."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"Request error: {cause}")
        self.cause = cause


class EnvVarMissing(ApiError):
    """A required environment variable is not set."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Environment variable missing: {name}")
        self.name = name


class InternalServerError(ApiError):
    """An upstream answer could not be understood or reported a failure."""

    def __init__(self) -> None:
        super().__init__("Internal server error")