"""Object sources backed by the local cache directory."""
import logging
from pathlib import Path
from typing import Optional

from eo_pull.core.errors import ObjectIOError, ObjectNotFoundError
from eo_pull.objects.names import place
from eo_pull.objects.source import ObjectSource
from eo_pull.core.saver import FileSaver, Saver

logger = logging.getLogger(__name__)


class LocalCacheSource(ObjectSource):
    """Reads objects from ``<cache_dir>/<cache_key>/``.

    Args:
        cache_key: Short hash prefix identifying the cache generation
        cache_dir: Root of the local cache
    """

    def __init__(self, cache_key: str, cache_dir: Path):
        self.cache_key = cache_key
        self.cache_dir = Path(cache_dir)

    def path_of(self, name: str) -> Path:
        return place(name, self.cache_dir / self.cache_key)

    def get(self, name: str) -> bytes:
        path = self.path_of(name)
        try:
            data = path.read_bytes()
        except (FileNotFoundError, NotADirectoryError):
            raise ObjectNotFoundError(name, [self])
        except OSError as e:
            raise ObjectIOError(f"Cannot read {path}: {e}") from e
        logger.debug(f"Found '{name}' in local cache at {path}")
        return data

    def describe(self) -> str:
        return f"local cache {self.cache_dir / self.cache_key}"


class CachingSource(ObjectSource):
    """Stores every object fetched from ``origin`` into the local cache.

    The layout matches LocalCacheSource, so the next lookup of the same
    name under the same cache key is served locally.
    """

    def __init__(
        self,
        cache_key: str,
        cache_dir: Path,
        origin: ObjectSource,
        saver: Optional[Saver] = None,
    ):
        self.cache = LocalCacheSource(cache_key, cache_dir)
        self.origin = origin
        self.saver = saver or FileSaver()

    def get(self, name: str) -> bytes:
        data = self.origin.get(name)
        path = self.cache.path_of(name)
        self.saver.save(data, path)
        logger.debug(f"Cached '{name}' at {path}")
        return data

    def describe(self) -> str:
        return f"{self.origin.describe()} (cached in {self.cache.describe()})"
