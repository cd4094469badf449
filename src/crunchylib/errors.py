from typing import Any


class CrunchyrollError(Exception):
    """Base class of every error raised by crunchylib."""


class RequestError(CrunchyrollError):
    """
    The request could not be completed.

    ``status_code`` is the HTTP status of the response, or None when the
    server was never reached (connection failure, timeout).
    """

    def __init__(
        self, message: str, *, url: str | None = None, status_code: int | None = None
    ):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class AuthenticationError(RequestError):
    """The token endpoint refused the supplied credentials."""


class DecodeError(CrunchyrollError):
    """A response body did not have the expected shape."""

    def __init__(self, message: str, *, value: Any = None):
        super().__init__(message)
        self.value = value


class UnknownResultTypeError(DecodeError):
    """A result group carried a ``type`` tag outside the known set."""

    def __init__(self, result_type: str, *, value: Any = None):
        super().__init__(f"invalid result type found: '{result_type}'", value=value)
        self.result_type = result_type


class ShapeMismatchError(DecodeError):
    """A payload could not be converted to its typed representation."""
