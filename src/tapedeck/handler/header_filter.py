"""Header filtering step for handler chains.

HeaderFilter wraps the request it receives in a view whose headers pass
through a transform, hands the view down the chain, and wraps the
response that comes back the same way. The wrapped messages are never
modified. Because recording happens downstream, a header removed here is
never captured or written to a tape.

Transforms are plain functions from Headers to Headers and must not keep
mutable state: one HeaderFilter may serve many threads at once.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping

from tapedeck.handler.chain import ChainedHttpHandler
from tapedeck.headers import Body, Headers
from tapedeck.message import Request, Response

HeaderTransform = Callable[[Headers], Headers]

REDACTED_PLACEHOLDER = "[REDACTED]"

# Connection-level headers that must not be forwarded or recorded.
HOP_BY_HOP_HEADERS: tuple[str, ...] = (
    "Content-Length",
    "Host",
    "Proxy-Connection",
    "Connection",
    "Keep-Alive",
    "Proxy-Authenticate",
    "Proxy-Authorization",
    "TE",
    "Trailer",
    "Transfer-Encoding",
    "Upgrade",
)


def identity(headers: Headers) -> Headers:
    return headers


def remove_headers(*names: str) -> HeaderTransform:
    """Build a transform dropping every value of the named headers."""

    def transform(headers: Headers) -> Headers:
        return headers.without(*names)

    return transform


def redact_headers(*names: str, placeholder: str = REDACTED_PLACEHOLDER) -> HeaderTransform:
    """Build a transform replacing the named headers' values with placeholder.

    Headers that are absent stay absent.
    """

    def transform(headers: Headers) -> Headers:
        for name in names:
            if name in headers:
                headers = headers.replacing(name, placeholder)
        return headers

    return transform


def replace_headers(replacements: Mapping[str, str]) -> HeaderTransform:
    """Build a transform that sets each header to a fixed value."""
    fixed = dict(replacements)

    def transform(headers: Headers) -> Headers:
        for name, value in fixed.items():
            headers = headers.replacing(name, value)
        return headers

    return transform


def compose(*transforms: HeaderTransform) -> HeaderTransform:
    """Apply transforms left to right."""

    def transform(headers: Headers) -> Headers:
        for step in transforms:
            headers = step(headers)
        return headers

    return transform


strip_hop_by_hop = remove_headers(*HOP_BY_HOP_HEADERS)


class HeaderFilteringRequest:
    """Request view whose headers are transformed on access."""

    __slots__ = ("_delegate", "_transform")

    def __init__(self, delegate: Request, transform: HeaderTransform) -> None:
        self._delegate = delegate
        self._transform = transform

    @property
    def delegate(self) -> Request:
        return self._delegate

    @property
    def method(self) -> str:
        return self._delegate.method

    @property
    def url(self) -> object:
        return self._delegate.url

    @property
    def headers(self) -> Headers:
        return self._transform(self._delegate.headers)

    @property
    def body(self) -> Body:
        return self._delegate.body

    def __repr__(self) -> str:
        return f"HeaderFilteringRequest({self._delegate!r})"


class HeaderFilteringResponse:
    """Response view whose headers are transformed on access."""

    __slots__ = ("_delegate", "_transform")

    def __init__(self, delegate: Response, transform: HeaderTransform) -> None:
        self._delegate = delegate
        self._transform = transform

    @property
    def delegate(self) -> Response:
        return self._delegate

    @property
    def status(self) -> int:
        return self._delegate.status

    @property
    def headers(self) -> Headers:
        return self._transform(self._delegate.headers)

    @property
    def body(self) -> Body:
        return self._delegate.body

    def __repr__(self) -> str:
        return f"HeaderFilteringResponse({self._delegate!r})"


class HeaderFilter(ChainedHttpHandler):
    """Chain step that filters headers in both directions.

    Args:
        request_transform: Applied to headers of the request passed down.
        response_transform: Applied to headers of the response passed up.
            Defaults to request_transform.

    With no transforms at all, hop-by-hop headers are stripped both ways.
    """

    def __init__(
        self,
        request_transform: HeaderTransform | None = None,
        response_transform: HeaderTransform | None = None,
    ) -> None:
        super().__init__()
        if request_transform is None and response_transform is None:
            request_transform = strip_hop_by_hop
        self.request_transform = request_transform or identity
        self.response_transform = response_transform or self.request_transform

    def handle(self, request: Request) -> Response:
        response = self.chain(HeaderFilteringRequest(request, self.request_transform))
        return HeaderFilteringResponse(response, self.response_transform)
