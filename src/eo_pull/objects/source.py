"""Object source abstraction: a place objects can be fetched from."""
from abc import ABC, abstractmethod


class ObjectSource(ABC):
    """Fetches the bytes of an object by its name.

    Implementations raise ObjectNotFoundError when the name is absent and
    ObjectIOError when the backing storage or transport fails.
    """

    @abstractmethod
    def get(self, name: str) -> bytes:
        """Return the content of the object ``name``."""

    @abstractmethod
    def describe(self) -> str:
        """Return a short human-readable description for diagnostics."""

    def __str__(self) -> str:
        return self.describe()
