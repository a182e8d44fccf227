"""Resolution of file-reference bodies to tape-relative paths."""

from __future__ import annotations

from pathlib import Path, PurePath


class FileResolver:
    """Turn file references into the path strings written to tapes.

    Files under base_dir are written relative to it so tapes stay
    portable between checkouts. Anything else keeps its absolute path.
    Paths always use forward slashes.
    """

    def __init__(self, base_dir: Path | None = None) -> None:
        self.base_dir = (base_dir or Path.cwd()).resolve()

    def to_path(self, file: PurePath) -> str:
        """Return the tape representation of file."""
        path = Path(file)
        if not path.is_absolute():
            return path.as_posix()
        try:
            return path.resolve().relative_to(self.base_dir).as_posix()
        except ValueError:
            return path.as_posix()

    def to_file(self, path: str) -> Path:
        """Inverse of to_path: locate the file a tape path refers to."""
        candidate = Path(path)
        if candidate.is_absolute():
            return candidate
        return self.base_dir / candidate
