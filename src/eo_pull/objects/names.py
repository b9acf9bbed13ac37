"""Object names and their deterministic on-disk placement."""
from pathlib import Path, PurePosixPath
from typing import List

from eo_pull.core.errors import InvalidObjectNameError

# Extension of EO source files
EO_EXTENSION = "eo"


def split_name(name: str) -> List[str]:
    """Split a dot-delimited object name into its segments.

    Examples:
        org.eolang.io.stdout -> ["org", "eolang", "io", "stdout"]

    Raises:
        InvalidObjectNameError: If the name or any segment is empty
    """
    if not name or not name.strip():
        raise InvalidObjectNameError("Object name must not be empty")
    segments = name.split(".")
    if any(not segment for segment in segments):
        raise InvalidObjectNameError(
            f"Object name '{name}' has an empty segment"
        )
    if any("/" in segment or "\\" in segment for segment in segments):
        raise InvalidObjectNameError(
            f"Object name '{name}' must not contain path separators"
        )
    return segments


def relative_path(name: str, extension: str = EO_EXTENSION) -> PurePosixPath:
    """Map an object name to a relative POSIX path.

    Segments become directories and the last segment becomes the file stem:
    ``foo.bar`` -> ``foo/bar.eo``.
    """
    segments = split_name(name)
    return PurePosixPath(*segments[:-1], f"{segments[-1]}.{extension}")


def place(name: str, root: Path, extension: str = EO_EXTENSION) -> Path:
    """Return the path of an object under ``root``."""
    return Path(root).joinpath(*relative_path(name, extension).parts)
