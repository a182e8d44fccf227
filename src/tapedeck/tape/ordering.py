"""Deterministic ordering policy for tape documents.

Three rules keep output stable across runs:

1. Types with a fixed shape list their properties in a declared order.
   The order belongs to the type, not to how an instance iterates.
2. Free-form mappings are emitted in lexicographic key order, whatever
   order they were populated in.
3. Sequences that are data (a tape's interactions) keep their order.

Nothing here holds state; every function is pure.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from operator import attrgetter
from typing import Any

from tapedeck.tape.variants import Variant

Property = tuple[str, Callable[[Any], Any]]

# Declared property order per fixed-shape variant. Request-shaped values
# expose their URL as `url` but it is written under the `uri` key.
PROPERTY_ORDER: dict[Variant, tuple[Property, ...]] = {
    Variant.TAPE: (
        ("name", attrgetter("name")),
        ("interactions", attrgetter("interactions")),
    ),
    Variant.INTERACTION: (
        ("recorded", attrgetter("recorded")),
        ("request", attrgetter("request")),
        ("response", attrgetter("response")),
    ),
    Variant.REQUEST: (
        ("method", attrgetter("method")),
        ("uri", attrgetter("url")),
        ("headers", attrgetter("headers")),
        ("body", attrgetter("body")),
    ),
    Variant.RESPONSE: (
        ("status", attrgetter("status")),
        ("headers", attrgetter("headers")),
        ("body", attrgetter("body")),
    ),
}

# Positional layout of the compact sequence encodings.
POSITIONAL_ORDER: dict[Variant, tuple[Callable[[Any], Any], ...]] = {
    Variant.RECORDED_REQUEST: (
        attrgetter("method"),
        lambda request: str(request.url),
        attrgetter("headers"),
        attrgetter("body"),
    ),
    Variant.RECORDED_RESPONSE: (
        attrgetter("status"),
        attrgetter("headers"),
        attrgetter("body"),
    ),
}


def ordered_properties(variant: Variant, value: Any) -> list[tuple[str, Any]]:
    """Return (name, value) pairs for value in the variant's declared order.

    Raises:
        KeyError: If the variant has no declared property order.
    """
    return [(name, getter(value)) for name, getter in PROPERTY_ORDER[variant]]


def ordered_positions(variant: Variant, value: Any) -> list[Any]:
    """Return the positional field values for a compact sequence encoding."""
    return [getter(value) for getter in POSITIONAL_ORDER[variant]]


def _sort_key(item: tuple[Any, Any]) -> str:
    return str(item[0])


def sorted_items(mapping: Mapping[Any, Any] | Iterable[tuple[Any, Any]]) -> list[tuple[Any, Any]]:
    """Return the mapping's items in lexicographic key order."""
    items = mapping.items() if isinstance(mapping, Mapping) else mapping
    return sorted(items, key=_sort_key)
