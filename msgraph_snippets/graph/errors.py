from __future__ import annotations

import httpx


class GraphError(Exception):
    """Base class for errors raised while talking to Microsoft Graph."""


class RequestFailed(GraphError):
    """A Graph request failed in transport, returned a non-success status,
    or returned a body that does not decode.

    ``cause`` is the underlying ``httpx`` or decoding exception. The error is
    passed through unchanged to snippet callbacks.
    """

    def __init__(self, cause: Exception, *, response: httpx.Response | None = None) -> None:
        self.cause = cause
        self.response = response
        super().__init__(str(cause) or cause.__class__.__name__)

    @property
    def status_code(self) -> int | None:
        if self.response is None:
            return None
        return self.response.status_code

    @classmethod
    def from_status_error(cls, error: httpx.HTTPStatusError) -> "RequestFailed":
        return cls(error, response=error.response)


__all__ = ["GraphError", "RequestFailed"]
