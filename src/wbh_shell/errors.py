"""Exception types raised by webhook backends."""

from typing import Optional


class WbhError(Exception):
    """Base exception for wbh-shell."""


class BackendError(WbhError):
    """
    A webhook request did not succeed.

    `status` is the HTTP status code, or None when no response was received
    (connection failure, timeout).
    """

    def __init__(self, status: Optional[int], body: str):
        self.status = status
        self.body = body
        super().__init__(
            f"status {status}: {body}" if status is not None else body
        )


class ResourceNotFoundError(BackendError):
    """The webhook does not exist (or was deleted)."""


class UnauthorizedError(BackendError):
    """The webhook exists but its token was rejected."""


class UnsupportedActionError(BackendError):
    """The backend does not know how to perform the requested action."""

    def __init__(self, action: str):
        super().__init__(None, f"Unsupported action '{action}'.")
        self.action = action
