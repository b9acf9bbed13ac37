"""Core exception types for eo-pull."""


class EoPullError(Exception):
    """Base exception for all eo-pull errors."""
    pass


class InvalidObjectNameError(EoPullError):
    """Raised when an object name is empty or has empty segments."""
    pass


class ObjectNotFoundError(EoPullError):
    """Raised when an object is absent from a source (or from all of them)."""

    def __init__(self, name: str, sources=()):
        self.name = name
        self.sources = tuple(str(s) for s in sources)
        where = ", ".join(self.sources) if self.sources else "any source"
        super().__init__(f"Object '{name}' not found in {where}")


class ObjectIOError(EoPullError):
    """Raised when reading, fetching or saving an object fails."""
    pass


class HashResolutionError(EoPullError):
    """Raised when a hash tag cannot be resolved to a full hash."""
    pass


class PullError(EoPullError):
    """Raised when a pull batch is aborted by a failing object."""

    def __init__(self, name: str, source: str, reason: str):
        self.name = name
        self.source = source
        super().__init__(f"Failed to pull '{name}' from {source}: {reason}")


class ConfigError(EoPullError):
    """Raised when the settings file is missing or invalid."""
    pass
