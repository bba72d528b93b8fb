from pathlib import Path

from .exceptions import LoadError


def read_mpeg_file(path) -> bytes:
    """Read a whole file into memory, raising ``LoadError`` on any failure."""
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise LoadError(f"failed to open {path}: {e}") from e
