"""Object sources: local cache, remote Objectionary, fallback and swap."""
from eo_pull.objects.fallback import FallbackSource, Ordering, SwapResolver, ordering
from eo_pull.objects.hashes import (
    GitHashResolver,
    HashResolver,
    TagsFileHashResolver,
    cache_key,
)
from eo_pull.objects.local import CachingSource, LocalCacheSource
from eo_pull.objects.names import place, relative_path
from eo_pull.objects.remote import RemoteSource
from eo_pull.objects.source import ObjectSource

__all__ = [
    "CachingSource",
    "FallbackSource",
    "GitHashResolver",
    "HashResolver",
    "LocalCacheSource",
    "ObjectSource",
    "Ordering",
    "RemoteSource",
    "SwapResolver",
    "TagsFileHashResolver",
    "cache_key",
    "ordering",
    "place",
    "relative_path",
]
