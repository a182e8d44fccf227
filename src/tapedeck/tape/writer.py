"""Emit encoded tapes as YAML text and write them to disk.

The writer encodes a snapshot of the tape, so recording may continue on
the live tape while a previous state is being written. Files are written
atomically (temp file, then rename) to avoid half-written tapes.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from tapedeck.tape.mapper import TapeMapper
from tapedeck.tape.models import Tape

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 120


class TapeWriter:
    """Serialize tapes through a TapeMapper and PyYAML's serializer."""

    def __init__(self, mapper: TapeMapper | None = None, width: int = DEFAULT_WIDTH) -> None:
        self.mapper = mapper or TapeMapper()
        self.width = width

    def dumps(self, tape: Tape) -> str:
        """Return the canonical YAML document for tape."""
        node = self.mapper.encode(tape.snapshot())
        return yaml.serialize(
            node,
            Dumper=yaml.SafeDumper,
            allow_unicode=True,
            width=self.width,
        )

    def write(self, tape: Tape, path: Path) -> Path:
        """Write tape to path atomically, creating parent directories.

        Args:
            tape: The tape to persist.
            path: Destination file.

        Returns:
            The path written.
        """
        content = self.dumps(tape)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_name(path.name + ".tmp")
        tmp_path.write_text(content, encoding="utf-8")
        tmp_path.replace(path)
        logger.info("Wrote tape %r (%d interactions) to %s", tape.name, len(tape), path)
        return path
