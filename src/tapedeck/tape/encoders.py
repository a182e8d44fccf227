"""One encoding function per variant, each producing a PyYAML node.

Every encoder has the signature ``(mapper, value) -> yaml.Node`` and
calls back into ``mapper.represent`` for nested values, so the registry
on the mapper decides how children are encoded.
"""

from __future__ import annotations

import base64
import math
from collections.abc import Callable
from datetime import date, datetime
from typing import TYPE_CHECKING, Any

import yaml

from tapedeck.tape.elision import (
    BINARY_TAG,
    LITERAL_STYLE,
    NULL_TAG,
    STR_TAG,
    format_body,
    is_elided,
    null_node,
)
from tapedeck.tape.ordering import ordered_positions, ordered_properties, sorted_items
from tapedeck.tape.variants import Variant

if TYPE_CHECKING:
    from tapedeck.tape.mapper import TapeMapper
    from tapedeck.headers import Headers

REQUEST_TAG = "!request"
RESPONSE_TAG = "!response"
FILE_TAG = "!file"

MAP_TAG = "tag:yaml.org,2002:map"
SEQ_TAG = "tag:yaml.org,2002:seq"
BOOL_TAG = "tag:yaml.org,2002:bool"
INT_TAG = "tag:yaml.org,2002:int"
FLOAT_TAG = "tag:yaml.org,2002:float"
TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"

Encoder = Callable[["TapeMapper", Any], yaml.Node]


def _property_mapping(mapper: TapeMapper, variant: Variant, value: Any) -> yaml.MappingNode:
    """Encode a fixed-shape value as a mapping in its declared order.

    Elided properties are dropped; a `body` property gets body formatting.
    """
    pairs: list[tuple[yaml.Node, yaml.Node]] = []
    for name, prop in ordered_properties(variant, value):
        node = mapper.represent(prop)
        if is_elided(node):
            continue
        if name == "body":
            node = format_body(node)
        pairs.append((yaml.ScalarNode(STR_TAG, name), node))
    return yaml.MappingNode(MAP_TAG, pairs, flow_style=False)


def _positional_sequence(
    mapper: TapeMapper, variant: Variant, tag: str, value: Any
) -> yaml.SequenceNode:
    """Encode a record as a tagged fixed-position sequence.

    The last slot is the body. Elided slots in the middle are kept as
    explicit nulls so later positions keep their meaning; elided slots at
    the end are dropped.
    """
    fields = ordered_positions(variant, value)
    nodes = [mapper.represent(field) for field in fields]
    nodes[-1] = format_body(nodes[-1])
    while nodes and is_elided(nodes[-1]):
        nodes.pop()
    nodes = [null_node() if is_elided(node) else node for node in nodes]
    return yaml.SequenceNode(tag, nodes, flow_style=False)


def encode_tape(mapper: TapeMapper, tape: Any) -> yaml.Node:
    return _property_mapping(mapper, Variant.TAPE, tape)


def encode_interaction(mapper: TapeMapper, interaction: Any) -> yaml.Node:
    return _property_mapping(mapper, Variant.INTERACTION, interaction)


def encode_recorded_request(mapper: TapeMapper, request: Any) -> yaml.Node:
    """RecordedRequest -> !request [method, url, headers, body]."""
    return _positional_sequence(mapper, Variant.RECORDED_REQUEST, REQUEST_TAG, request)


def encode_recorded_response(mapper: TapeMapper, response: Any) -> yaml.Node:
    """RecordedResponse -> !response [status, headers, body]."""
    return _positional_sequence(mapper, Variant.RECORDED_RESPONSE, RESPONSE_TAG, response)


def encode_request(mapper: TapeMapper, request: Any) -> yaml.Node:
    return _property_mapping(mapper, Variant.REQUEST, request)


def encode_response(mapper: TapeMapper, response: Any) -> yaml.Node:
    return _property_mapping(mapper, Variant.RESPONSE, response)


def encode_headers(mapper: TapeMapper, headers: "Headers") -> yaml.Node:
    """Flatten headers to one value per name, sorted by name.

    Only the first captured value of a repeated header is kept. Replay
    cannot reproduce the other values; this is a known limitation.
    """
    flat = {name: values[0] for name, values in headers.to_multimap().items()}
    return encode_mapping(mapper, flat)


def encode_uri(mapper: TapeMapper, uri: Any) -> yaml.Node:
    return yaml.ScalarNode(STR_TAG, str(uri))


def encode_file(mapper: TapeMapper, file: Any) -> yaml.Node:
    return yaml.ScalarNode(FILE_TAG, mapper.file_resolver.to_path(file))


def encode_mapping(mapper: TapeMapper, mapping: Any) -> yaml.Node:
    """Encode a free-form mapping in lexicographic key order."""
    pairs: list[tuple[yaml.Node, yaml.Node]] = []
    for key, value in sorted_items(mapping):
        node = mapper.represent(value)
        if is_elided(node):
            continue
        pairs.append((mapper.represent(key), node))
    return yaml.MappingNode(MAP_TAG, pairs, flow_style=False)


def encode_sequence(mapper: TapeMapper, items: Any) -> yaml.Node:
    """Encode a list, keeping item order and dropping elided items."""
    nodes = [mapper.represent(item) for item in items]
    return yaml.SequenceNode(SEQ_TAG, [node for node in nodes if not is_elided(node)], flow_style=False)


def _float_text(value: float) -> str:
    if math.isnan(value):
        return ".nan"
    if math.isinf(value):
        return ".inf" if value > 0 else "-.inf"
    text = repr(value).lower()
    if "." not in text and "e" not in text:
        text += ".0"
    return text


def encode_scalar(mapper: TapeMapper, value: Any) -> yaml.Node:
    """Encode None, bool, int, float, str, bytes, datetime or date."""
    if value is None:
        return yaml.ScalarNode(NULL_TAG, "null")
    if isinstance(value, bool):
        return yaml.ScalarNode(BOOL_TAG, "true" if value else "false")
    if isinstance(value, int):
        return yaml.ScalarNode(INT_TAG, str(value))
    if isinstance(value, float):
        return yaml.ScalarNode(FLOAT_TAG, _float_text(value))
    if isinstance(value, bytes):
        text = base64.encodebytes(value).decode("ascii")
        return yaml.ScalarNode(BINARY_TAG, text, style=LITERAL_STYLE)
    if isinstance(value, datetime):
        return yaml.ScalarNode(TIMESTAMP_TAG, value.isoformat(" "))
    if isinstance(value, date):
        return yaml.ScalarNode(TIMESTAMP_TAG, value.isoformat())
    return yaml.ScalarNode(STR_TAG, str(value))


ENCODERS: dict[Variant, Encoder] = {
    Variant.TAPE: encode_tape,
    Variant.INTERACTION: encode_interaction,
    Variant.RECORDED_REQUEST: encode_recorded_request,
    Variant.RECORDED_RESPONSE: encode_recorded_response,
    Variant.REQUEST: encode_request,
    Variant.RESPONSE: encode_response,
    Variant.HEADERS: encode_headers,
    Variant.URI: encode_uri,
    Variant.FILE: encode_file,
    Variant.MAPPING: encode_mapping,
    Variant.SEQUENCE: encode_sequence,
    Variant.SCALAR: encode_scalar,
}
