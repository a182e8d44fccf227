"""The closed set of value kinds the tape mapper knows how to encode."""

from __future__ import annotations

from enum import Enum


class Variant(str, Enum):
    """Encoding variant a registered type is treated as."""

    TAPE = "tape"
    INTERACTION = "interaction"
    RECORDED_REQUEST = "recorded_request"
    RECORDED_RESPONSE = "recorded_response"
    REQUEST = "request"  # property-ordered mapping of a live request
    RESPONSE = "response"  # property-ordered mapping of a live response
    HEADERS = "headers"
    URI = "uri"
    FILE = "file"
    MAPPING = "mapping"
    SEQUENCE = "sequence"
    SCALAR = "scalar"
