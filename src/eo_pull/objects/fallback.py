"""Fallback composition of two sources and the one-time swap decision."""
import enum
import logging
import threading
from typing import Optional

from eo_pull.core.errors import ObjectNotFoundError
from eo_pull.objects.source import ObjectSource

logger = logging.getLogger(__name__)


class FallbackSource(ObjectSource):
    """Tries ``primary`` first and ``secondary`` only when primary misses.

    Only ObjectNotFoundError triggers the fallback; any other failure of
    the primary source propagates without touching the secondary one.
    """

    def __init__(self, primary: ObjectSource, secondary: ObjectSource):
        self.primary = primary
        self.secondary = secondary

    def get(self, name: str) -> bytes:
        try:
            return self.primary.get(name)
        except ObjectNotFoundError:
            logger.debug(
                f"'{name}' not found in {self.primary}, falling back to {self.secondary}"
            )
        try:
            return self.secondary.get(name)
        except ObjectNotFoundError as e:
            raise ObjectNotFoundError(name, [self.primary, self.secondary]) from e

    def describe(self) -> str:
        return f"{self.primary.describe()} with fallback to {self.secondary.describe()}"


class Ordering(enum.Enum):
    """Which of two sources is tried first."""

    AS_GIVEN = "as_given"
    REVERSED = "reversed"


def ordering(swap: bool) -> Ordering:
    """Map the swap flag to an ordering."""
    return Ordering.REVERSED if swap else Ordering.AS_GIVEN


class SwapResolver(ObjectSource):
    """Fallback that decides once which source is primary.

    With ``swap=False`` objects are looked up in ``first`` and then in
    ``second``; with ``swap=True`` the order is reversed. Used to read the
    remote Objectionary before the local cache when a forced update is
    requested.

    The composed FallbackSource is built lazily on first use, exactly once,
    and shared by every caller including concurrent ones.
    """

    def __init__(self, first: ObjectSource, second: ObjectSource, swap: bool):
        self._first = first
        self._second = second
        self._ordering = ordering(swap)
        self._lock = threading.Lock()
        self._composed: Optional[FallbackSource] = None

    def _compose(self) -> FallbackSource:
        if self._ordering is Ordering.REVERSED:
            return FallbackSource(self._second, self._first)
        return FallbackSource(self._first, self._second)

    @property
    def composed(self) -> FallbackSource:
        composed = self._composed
        if composed is None:
            with self._lock:
                if self._composed is None:
                    self._composed = self._compose()
                    logger.debug(f"Composed object source: {self._composed}")
                composed = self._composed
        return composed

    def get(self, name: str) -> bytes:
        return self.composed.get(name)

    def describe(self) -> str:
        return self.composed.describe()
