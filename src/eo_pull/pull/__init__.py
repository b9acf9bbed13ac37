"""Pulling objects: registry, orchestration and settings."""
from eo_pull.pull.orchestrator import PullOrchestrator
from eo_pull.pull.pipeline import build_source, pull_objects
from eo_pull.pull.registry import JsonRegistry, MemoryRegistry, ObjectRecord, is_pending
from eo_pull.pull.settings import PullSettings
from eo_pull.core.errors import PullError

__all__ = [
    "JsonRegistry",
    "MemoryRegistry",
    "ObjectRecord",
    "PullError",
    "PullOrchestrator",
    "PullSettings",
    "build_source",
    "is_pending",
    "pull_objects",
]
