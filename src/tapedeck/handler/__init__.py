"""Handler chain subpackage: header filtering and recording steps."""

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
from tapedeck.handler.recorder import TapeRecordingHandler, rerecord

__all__ = [
    "ChainedHttpHandler",
    "HOP_BY_HOP_HEADERS",
    "HeaderFilter",
    "HeaderFilteringRequest",
    "HeaderFilteringResponse",
    "HttpHandler",
    "StaticResponseHandler",
    "TapeRecordingHandler",
    "build_chain",
    "compose",
    "redact_headers",
    "remove_headers",
    "replace_headers",
    "rerecord",
]
