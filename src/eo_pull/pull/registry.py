"""Registry of objects to pull and the paths they were pulled to."""
import json
import logging
import threading
from pathlib import Path
from typing import Callable, Dict, List, Optional, Protocol

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from eo_pull.core.errors import ConfigError, ObjectIOError
from eo_pull.core.saver import FileSaver

logger = logging.getLogger(__name__)

# Record attributes
ATTR_ID = "id"
ATTR_EO = "eo"
ATTR_XMIR = "xmir"


class ObjectRecord(BaseModel):
    """One object known to the build and where its sources live."""

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., min_length=1, description="Object name, e.g. org.eolang.io.stdout")
    eo: Optional[str] = Field(default=None, description="Absolute path of the pulled .eo file")
    xmir: Optional[str] = Field(default=None, description="Absolute path of the parsed XMIR file")


class Entry(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def exists(self, key: str) -> bool:
        ...


class Registry(Protocol):
    def select(self, predicate: Callable[[Entry], bool]) -> List[Entry]:
        ...


def is_pending(entry: Entry) -> bool:
    """An object is pending until it has either sources or XMIR."""
    return not entry.exists(ATTR_EO) and not entry.exists(ATTR_XMIR)


class RegistryEntry:
    """Live view of one record; every ``set`` is written through."""

    def __init__(self, registry: "MemoryRegistry", name: str):
        self._registry = registry
        self.name = name

    def get(self, key: str) -> Optional[str]:
        return self._registry._read(self.name, key)

    def set(self, key: str, value: str) -> None:
        self._registry._write(self.name, key, value)

    def exists(self, key: str) -> bool:
        return self.get(key) is not None

    def __repr__(self) -> str:
        return f"RegistryEntry({self.name!r})"


class MemoryRegistry:
    """In-memory registry; updates are atomic per record."""

    def __init__(self, records: Optional[List[ObjectRecord]] = None):
        self._lock = threading.RLock()
        self._records: Dict[str, ObjectRecord] = {}
        for record in records or []:
            self._records[record.id] = record

    def add(self, name: str) -> RegistryEntry:
        """Register ``name`` as a pending object (no-op if already known)."""
        with self._lock:
            if name not in self._records:
                self._records[name] = ObjectRecord(id=name)
                self._persist()
        return RegistryEntry(self, name)

    def select(self, predicate: Callable[[Entry], bool]) -> List[RegistryEntry]:
        with self._lock:
            entries = [RegistryEntry(self, name) for name in self._records]
        return [entry for entry in entries if predicate(entry)]

    def records(self) -> List[ObjectRecord]:
        with self._lock:
            return [record.model_copy() for record in self._records.values()]

    def _read(self, name: str, key: str) -> Optional[str]:
        with self._lock:
            value = getattr(self._records[name], key, None)
        return None if value is None else str(value)

    def _write(self, name: str, key: str, value: str) -> None:
        if key == ATTR_ID:
            raise ValueError("The id of a record cannot be changed")
        with self._lock:
            setattr(self._records[name], key, value)
            self._persist()

    def _persist(self) -> None:
        pass


class JsonRegistry(MemoryRegistry):
    """Registry persisted as a JSON list of records.

    The file is rewritten atomically after every change, so the pulled
    paths survive even if a later object in the batch fails.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        super().__init__(self._load(self.path))

    @staticmethod
    def _load(path: Path) -> List[ObjectRecord]:
        if not path.exists():
            return []
        try:
            rows = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(rows, list):
                raise ConfigError(f"Registry {path} must contain a JSON list")
            return [ObjectRecord.model_validate(row) for row in rows]
        except (json.JSONDecodeError, ValidationError) as e:
            raise ConfigError(f"Invalid registry file {path}: {e}") from e
        except OSError as e:
            raise ObjectIOError(f"Cannot read registry {path}: {e}") from e

    def _persist(self) -> None:
        rows = [
            record.model_dump(exclude_none=True)
            for record in self._records.values()
        ]
        FileSaver().save(
            json.dumps(rows, indent=2).encode("utf-8"),
            self.path,
        )
