# erpsync Path Utilities
# Path expansion and atomic writes for config and history files

import os
import tempfile
from pathlib import Path


def expand_path(path: str | Path) -> Path:
    """
    Expand ~ and environment variables in path.

    Args:
        path: Path string or Path object.

    Returns:
        Expanded Path object.
    """
    path_str = os.path.expandvars(os.path.expanduser(str(path)))
    return Path(path_str)


def ensure_dir(path: Path) -> Path:
    """Create a directory (and parents) if needed and return it."""
    path.mkdir(parents=True, exist_ok=True)
    return path


def atomic_write(path: Path, content: str, *, encoding: str = "utf-8") -> None:
    """
    Atomically write text to a file.

    Writes to a temporary file in the target directory, then renames it
    over the target so readers never see a half-written file.

    Args:
        path: Target file path.
        content: Text to write.
        encoding: Encoding for the content (default utf-8).
    """
    ensure_dir(path.parent)

    fd, temp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding=encoding) as f:
            f.write(content)
        os.replace(temp_path, path)
    except Exception:
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        raise
