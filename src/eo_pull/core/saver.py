"""Atomic persistence of object bytes to disk."""
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Protocol

from eo_pull.core.errors import ObjectIOError

logger = logging.getLogger(__name__)


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


# mkstemp creates 0600 files; saved objects get the usual umask-based mode
FILE_MODE = 0o666 & ~_current_umask()


class Saver(Protocol):
    """Persists bytes at a destination path."""

    def save(self, data: bytes, path: Path) -> None:
        ...


class FileSaver:
    """Writes files so that readers never observe a partial file.

    Content goes to a temporary file in the destination directory first
    and is then moved over the destination in one rename.
    """

    def save(self, data: bytes, path: Path) -> None:
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
            )
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(data)
                os.chmod(tmp_name, FILE_MODE)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise ObjectIOError(f"Cannot save {path}: {e}") from e
        logger.debug(f"Saved {len(data)} bytes to {path}")


def relative(path: Path, base: Optional[Path] = None) -> str:
    """Render ``path`` relative to ``base`` (cwd by default) when possible."""
    path = Path(path)
    base = Path(base) if base is not None else Path.cwd()
    try:
        return str(path.absolute().relative_to(base.absolute()))
    except ValueError:
        return str(path)
