"""Tape subpackage: models and the canonical YAML encoding of tapes.

Provides the passive tape models, the deterministic node mapper that
encodes them, and a writer that emits the resulting documents.
"""

from tapedeck.tape.mapper import TapeMapper
from tapedeck.tape.models import (
    Headers,
    RecordedInteraction,
    RecordedRequest,
    RecordedResponse,
    Tape,
)
from tapedeck.tape.variants import Variant
from tapedeck.tape.writer import TapeWriter

__all__ = [
    "Headers",
    "RecordedInteraction",
    "RecordedRequest",
    "RecordedResponse",
    "Tape",
    "TapeMapper",
    "TapeWriter",
    "Variant",
]
