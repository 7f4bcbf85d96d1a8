"""Result callbacks and the tagged result type produced by running a snippet."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Protocol, Union

import httpx

from ..graph.client import GraphClient
from ..graph.errors import RequestFailed
from ..graph.models import GraphResponse
from .model import SnippetDescriptor

logger = logging.getLogger("msgraph_snippets")


class ResultCallback(Protocol):
    def on_success(self, value: Any, raw: httpx.Response | None) -> None: ...

    def on_failure(self, error: Exception) -> None: ...


@dataclass(frozen=True, slots=True)
class Success:
    value: Any
    raw: httpx.Response | None = None

    succeeded = True


@dataclass(frozen=True, slots=True)
class Failure:
    error: Exception

    succeeded = False


SnippetResult = Union[Success, Failure]


class CallbackAlreadyInvokedError(RuntimeError):
    """Raised when a one-shot callback is completed a second time."""


class FutureCallback:
    """ResultCallback that resolves an asyncio future with a SnippetResult."""

    def __init__(self) -> None:
        self._future: asyncio.Future[SnippetResult] = asyncio.get_running_loop().create_future()

    @property
    def done(self) -> bool:
        return self._future.done()

    def on_success(self, value: Any, raw: httpx.Response | None) -> None:
        self._complete(Success(value=value, raw=raw))

    def on_failure(self, error: Exception) -> None:
        self._complete(Failure(error=error))

    def _complete(self, result: SnippetResult) -> None:
        if self._future.done():
            raise CallbackAlreadyInvokedError("Snippet callback invoked more than once")
        self._future.set_result(result)

    def result(self) -> SnippetResult:
        return self._future.result()


async def forward(callback: ResultCallback, call: Awaitable[GraphResponse[Any]]) -> None:
    """Await a single Graph call and hand its outcome to ``callback``."""
    try:
        response = await call
    except RequestFailed as exc:
        callback.on_failure(exc)
        return
    callback.on_success(response.value, response.raw)


async def run_snippet(descriptor: SnippetDescriptor, client: GraphClient) -> SnippetResult:
    """Run ``descriptor`` against ``client`` and return its tagged result.

    Work functions that finish without reporting anything (the catalog
    markers) yield ``Success(None)``.
    """
    callback = FutureCallback()
    logger.debug("Running snippet %s", descriptor.id)
    await descriptor.request(client, callback)
    if not callback.done:
        return Success(value=None, raw=None)
    return callback.result()


__all__ = [
    "CallbackAlreadyInvokedError",
    "Failure",
    "FutureCallback",
    "ResultCallback",
    "SnippetResult",
    "Success",
    "forward",
    "run_snippet",
]
