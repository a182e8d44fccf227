"""Tests for handler chains and the header filtering step."""

from __future__ import annotations

import pytest

from tapedeck.errors import ConfigurationError
from tapedeck.handler.chain import (
    ChainedHttpHandler,
    HttpHandler,
    StaticResponseHandler,
    build_chain,
)
from tapedeck.handler.header_filter import (
    HOP_BY_HOP_HEADERS,
    HeaderFilter,
    HeaderFilteringRequest,
    HeaderFilteringResponse,
    compose,
    redact_headers,
    remove_headers,
    replace_headers,
)
from tapedeck.headers import Headers
from tapedeck.message import BasicRequest, BasicResponse, Request, Response


# -- Test handlers --


class _EchoHandler(HttpHandler):
    """Terminal handler that remembers the request and echoes its headers back."""

    def __init__(self) -> None:
        self.seen: Request | None = None

    def handle(self, request: Request) -> Response:
        self.seen = request
        return BasicResponse(status=200, headers=request.headers, body=request.body)


class _FailingHandler(HttpHandler):
    def __init__(self, error: Exception) -> None:
        self.error = error

    def handle(self, request: Request) -> Response:
        raise self.error


class _PassThrough(ChainedHttpHandler):
    def handle(self, request: Request) -> Response:
        return self.chain(request)


def _make_request(**headers: str) -> BasicRequest:
    pairs = [(name.replace("_", "-"), value) for name, value in headers.items()]
    return BasicRequest(method="POST", url="http://x/login", headers=Headers(pairs), body="user=a")


class TestBuildChain:
    """Chain construction is validated up front."""

    def test_empty_chain_rejected(self):
        with pytest.raises(ConfigurationError, match="at least one handler"):
            build_chain([])

    def test_terminal_must_be_last(self):
        """A handler that cannot delegate may only be last."""
        with pytest.raises(ConfigurationError, match="position 0") as exc_info:
            build_chain([_EchoHandler(), HeaderFilter()])
        assert exc_info.value.offending_type is _EchoHandler

    def test_step_cannot_join_two_chains(self):
        """A step already linked elsewhere is rejected."""
        step = HeaderFilter()
        build_chain([step, _EchoHandler()])
        with pytest.raises(ConfigurationError, match="already linked"):
            build_chain([step, _EchoHandler()])

    def test_single_terminal_chain(self):
        """A lone terminal handler is a valid chain."""
        terminal = StaticResponseHandler(BasicResponse(status=204))
        assert build_chain([terminal]).handle(_make_request()).status == 204

    def test_delegating_from_last_handler_fails(self):
        """A chained step with nothing after it cannot delegate."""
        head = build_chain([_PassThrough()])
        with pytest.raises(ConfigurationError, match="last handler"):
            head.handle(_make_request())


class TestErrorPropagation:
    """Errors reach the caller unchanged."""

    def test_terminal_error_propagates(self):
        """The exact exception raised by the terminal reaches the caller."""
        error = RuntimeError("connection refused")
        head = build_chain([HeaderFilter(), _PassThrough(), _FailingHandler(error)])
        with pytest.raises(RuntimeError) as exc_info:
            head.handle(_make_request())
        assert exc_info.value is error

    def test_transform_error_propagates(self):
        """An exception raised by a header transform is not wrapped."""

        def broken(headers: Headers) -> Headers:
            raise ValueError("bad transform")

        head = build_chain([HeaderFilter(broken), _EchoHandler()])
        with pytest.raises(ValueError, match="bad transform"):
            head.handle(_make_request())


class TestHeaderFilter:
    """Header filtering in both directions."""

    def test_redacted_header_not_visible_downstream(self):
        """The terminal never sees a removed Authorization header."""
        echo = _EchoHandler()
        head = build_chain([HeaderFilter(remove_headers("Authorization")), echo])
        original = _make_request(Authorization="secret", Accept="*/*")

        head.handle(original)

        assert echo.seen is not None
        assert echo.seen.headers.get("Authorization") is None
        assert "Authorization" not in echo.seen.headers
        assert echo.seen.method == original.method
        assert echo.seen.url == original.url
        assert echo.seen.body == original.body

    def test_original_request_untouched(self):
        """Filtering never modifies the wrapped request."""
        original = _make_request(Authorization="secret")
        head = build_chain([HeaderFilter(remove_headers("Authorization")), _EchoHandler()])

        head.handle(original)

        assert original.headers.get("Authorization") == "secret"

    def test_response_filtered_on_the_way_up(self):
        """The caller receives a filtered response view."""
        response = BasicResponse(
            status=200,
            headers=Headers([("Set-Cookie", "session=abc"), ("Content-Type", "text/html")]),
        )
        head = build_chain(
            [
                HeaderFilter(response_transform=remove_headers("Set-Cookie")),
                StaticResponseHandler(response),
            ]
        )

        result = head.handle(_make_request())

        assert isinstance(result, HeaderFilteringResponse)
        assert result.headers.names() == ["Content-Type"]
        assert result.status == 200
        assert response.headers.get("Set-Cookie") == "session=abc"

    def test_response_transform_defaults_to_request_transform(self):
        """One transform given applies in both directions."""
        echo = _EchoHandler()
        head = build_chain([HeaderFilter(remove_headers("X-Secret")), echo])
        result = head.handle(_make_request(X_Secret="1", Accept="*/*"))
        assert "X-Secret" not in result.headers

    def test_default_strips_hop_by_hop_headers(self):
        """With no transform, connection-level headers are removed."""
        echo = _EchoHandler()
        head = build_chain([HeaderFilter(), echo])
        head.handle(_make_request(Host="x", Content_Length="6", Connection="close", Accept="*/*"))
        assert echo.seen.headers.names() == ["Accept"]

    def test_filters_compose_in_chain_order(self):
        """Inner filters act last on the way down and first on the way up."""
        echo = _EchoHandler()
        head = build_chain(
            [
                HeaderFilter(replace_headers({"X-Stage": "outer"})),
                HeaderFilter(replace_headers({"X-Stage": "inner"})),
                echo,
            ]
        )

        result = head.handle(_make_request(X_Stage="client"))

        assert echo.seen.headers.get("X-Stage") == "inner"
        assert result.headers.get("X-Stage") == "outer"

    def test_views_wrap_views(self):
        """Nested filters hand each other views, never copies."""
        echo = _EchoHandler()
        head = build_chain([HeaderFilter(), HeaderFilter(), echo])
        original = _make_request()

        head.handle(original)

        assert isinstance(echo.seen, HeaderFilteringRequest)
        assert isinstance(echo.seen.delegate, HeaderFilteringRequest)
        assert echo.seen.delegate.delegate is original


class TestTransforms:
    """Header transform factories."""

    def test_redact_replaces_value(self):
        transform = redact_headers("Authorization", "Cookie")
        headers = transform(Headers([("Authorization", "secret"), ("Accept", "*/*")]))
        assert list(headers) == [("Authorization", "[REDACTED]"), ("Accept", "*/*")]

    def test_redact_custom_placeholder(self):
        transform = redact_headers("Authorization", placeholder="***")
        assert transform(Headers([("authorization", "x")])).get("Authorization") == "***"

    def test_redact_leaves_absent_headers_absent(self):
        """Redacting a header that is not present adds nothing."""
        assert len(redact_headers("Cookie")(Headers())) == 0

    def test_compose_applies_left_to_right(self):
        transform = compose(replace_headers({"A": "1"}), remove_headers("A"))
        assert len(transform(Headers())) == 0

    def test_hop_by_hop_list(self):
        assert "Transfer-Encoding" in HOP_BY_HOP_HEADERS
        assert "Proxy-Authorization" in HOP_BY_HOP_HEADERS
