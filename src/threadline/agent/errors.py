"""Exceptions raised by reply clients."""


class ReplyError(Exception):
    """Base exception for reply-generation failures.

    ``status_code`` is the HTTP status of the response, when one was received.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ReplyTransportError(ReplyError):
    """The request could not be delivered or no answer was received."""


class ReplyFormatError(ReplyError):
    """The service answered with a body that could not be parsed."""
