"""Read-only request/response capabilities shared by handlers and tapes.

Anything exposing the accessors below can travel through a handler chain
and be recorded: the plain dataclasses in this module, the recorded
models in tapedeck.tape.models, and the header-filtering views.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from tapedeck.headers import Body, Headers


@runtime_checkable
class Request(Protocol):
    """An HTTP request as seen by a handler."""

    @property
    def method(self) -> str: ...

    @property
    def url(self) -> object: ...

    @property
    def headers(self) -> Headers: ...

    @property
    def body(self) -> Body: ...


@runtime_checkable
class Response(Protocol):
    """An HTTP response as seen by a handler."""

    @property
    def status(self) -> int: ...

    @property
    def headers(self) -> Headers: ...

    @property
    def body(self) -> Body: ...


@dataclass(frozen=True)
class BasicRequest:
    """Plain request value, typically built by a transport adapter."""

    method: str
    url: str
    headers: Headers = field(default_factory=Headers)
    body: Body = None


@dataclass(frozen=True)
class BasicResponse:
    """Plain response value, typically built by a transport adapter."""

    status: int
    headers: Headers = field(default_factory=Headers)
    body: Body = None
