"""Canonical node mapper: turns a Tape into a deterministic PyYAML node tree.

The mapper owns a registry from Python classes to encoding variants.
Lookup walks the value's MRO, so subclasses of a registered class are
encoded like their parent. A value whose class was never registered is
a configuration error; nothing falls through to a generic encoder.

The mapper only reads the values it encodes and holds no per-call state,
so one instance can serve concurrent callers as long as nobody registers
types while encoding is under way.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from pathlib import PurePath
from typing import Any

import yaml
from pydantic import AnyUrl

from tapedeck.errors import ConfigurationError
from tapedeck.files import FileResolver
from tapedeck.handler.header_filter import HeaderFilteringRequest, HeaderFilteringResponse
from tapedeck.headers import Headers
from tapedeck.message import BasicRequest, BasicResponse
from tapedeck.tape.encoders import ENCODERS
from tapedeck.tape.models import (
    RecordedInteraction,
    RecordedRequest,
    RecordedResponse,
    Tape,
)
from tapedeck.tape.variants import Variant

logger = logging.getLogger(__name__)

DEFAULT_REGISTRY: dict[type, Variant] = {
    Tape: Variant.TAPE,
    RecordedInteraction: Variant.INTERACTION,
    RecordedRequest: Variant.RECORDED_REQUEST,
    RecordedResponse: Variant.RECORDED_RESPONSE,
    BasicRequest: Variant.REQUEST,
    BasicResponse: Variant.RESPONSE,
    HeaderFilteringRequest: Variant.REQUEST,
    HeaderFilteringResponse: Variant.RESPONSE,
    Headers: Variant.HEADERS,
    AnyUrl: Variant.URI,
    PurePath: Variant.FILE,
    dict: Variant.MAPPING,
    list: Variant.SEQUENCE,
    tuple: Variant.SEQUENCE,
    str: Variant.SCALAR,
    int: Variant.SCALAR,
    float: Variant.SCALAR,
    bool: Variant.SCALAR,
    type(None): Variant.SCALAR,
    bytes: Variant.SCALAR,
    datetime: Variant.SCALAR,
    date: Variant.SCALAR,
}


class TapeMapper:
    """Encode tapes and their contents into PyYAML nodes.

    Args:
        file_resolver: Converts file-reference bodies into tape paths.
            Defaults to a resolver rooted at the current directory.
        registry: Extra class -> variant registrations applied on top of
            the defaults. Validated immediately.

    Raises:
        ConfigurationError: If a registration in ``registry`` is invalid.
    """

    def __init__(
        self,
        file_resolver: FileResolver | None = None,
        registry: dict[type, Variant | str] | None = None,
    ) -> None:
        self.file_resolver = file_resolver or FileResolver()
        self._registry: dict[type, Variant] = dict(DEFAULT_REGISTRY)
        for klass, variant in (registry or {}).items():
            self.register(klass, variant)

    def register(self, klass: type, variant: Variant | str) -> None:
        """Tell the mapper to encode instances of klass as variant.

        Raises:
            ConfigurationError: If klass is not a class or variant is not
                one of the known variants.
        """
        if not isinstance(klass, type):
            raise ConfigurationError(
                f"Cannot register {klass!r}: expected a class, got {type(klass).__name__}.",
                offending_type=type(klass),
            )
        try:
            resolved = Variant(variant)
        except ValueError:
            available = ", ".join(v.value for v in Variant)
            raise ConfigurationError(
                f"Cannot register {klass.__qualname__} as unknown variant {variant!r}. "
                f"Known variants: {available}.",
                offending_type=klass,
            ) from None
        self._registry[klass] = resolved
        logger.debug("Registered %s as %s", klass.__qualname__, resolved.value)

    def variant_for(self, klass: type) -> Variant:
        """Return the variant used for instances of klass.

        Raises:
            ConfigurationError: If neither klass nor any base is registered.
        """
        for base in klass.__mro__:
            variant = self._registry.get(base)
            if variant is not None:
                return variant
        raise ConfigurationError(
            f"No tape encoding registered for {klass.__module__}.{klass.__qualname__}. "
            f"Register it with TapeMapper.register().",
            offending_type=klass,
        )

    def represent(self, value: Any) -> yaml.Node:
        """Encode any registered value into a node."""
        variant = self.variant_for(type(value))
        return ENCODERS[variant](self, value)

    def encode(self, tape: Tape) -> yaml.Node:
        """Encode a whole tape. The tape is read, never modified."""
        node = self.represent(tape)
        logger.debug("Encoded tape %r with %d interactions", tape.name, len(tape.interactions))
        return node
