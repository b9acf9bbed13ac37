"""Wire settings, hash resolution and sources into a pull run."""
import logging
from pathlib import Path
from typing import List, Optional, Tuple

import httpx

from eo_pull.core.saver import FileSaver, Saver
from eo_pull.objects.fallback import SwapResolver
from eo_pull.objects.hashes import (
    GitHashResolver,
    HashResolver,
    TagsFileHashResolver,
    cache_key,
)
from eo_pull.objects.local import CachingSource, LocalCacheSource
from eo_pull.objects.remote import RemoteSource
from eo_pull.pull.orchestrator import PullOrchestrator
from eo_pull.pull.registry import Registry
from eo_pull.pull.settings import PullSettings

logger = logging.getLogger(__name__)


def default_hash_resolver(
    settings: PullSettings,
    client: Optional[httpx.Client] = None,
) -> HashResolver:
    """Pick the tags listing when configured, git otherwise."""
    if settings.tags_url:
        return TagsFileHashResolver(settings.tags_url, client=client, timeout=settings.timeout)
    return GitHashResolver(settings.hash_repo_url)


def build_source(
    settings: PullSettings,
    hash_resolver: Optional[HashResolver] = None,
    client: Optional[httpx.Client] = None,
    saver: Optional[Saver] = None,
) -> Tuple[SwapResolver, str]:
    """Build the object source for ``settings`` and return it with its cache key.

    The hash tag is resolved first, so an unknown tag aborts before any
    object is fetched.

    Raises:
        HashResolutionError: If the hash tag cannot be resolved
    """
    resolver = hash_resolver or default_hash_resolver(settings, client)
    full = resolver.resolve(settings.hash_tag)
    small = cache_key(full, settings.cache_key_length)
    logger.info(f"Using objectionary {settings.hash_tag} ({small})")
    source = SwapResolver(
        LocalCacheSource(small, settings.cache_dir),
        CachingSource(
            small,
            settings.cache_dir,
            RemoteSource(
                full,
                client=client,
                url_template=settings.remote_url,
                timeout=settings.timeout,
            ),
            saver=saver,
        ),
        settings.force_update,
    )
    return source, small


def pull_objects(
    settings: PullSettings,
    registry: Registry,
    hash_resolver: Optional[HashResolver] = None,
    client: Optional[httpx.Client] = None,
    saver: Optional[Saver] = None,
) -> List[Path]:
    """Pull every pending object of ``registry`` according to ``settings``.

    Without a ``client`` one is opened for this run and closed afterwards.

    Returns:
        Paths of the objects processed in this run, in registry order

    Raises:
        HashResolutionError: If the hash tag cannot be resolved
        PullError: If an object cannot be pulled (earlier ones stay recorded)
    """
    if client is None:
        with httpx.Client(timeout=settings.timeout, follow_redirects=True) as owned:
            return pull_objects(settings, registry, hash_resolver, owned, saver)

    saver = saver or FileSaver()
    source, small = build_source(settings, hash_resolver, client, saver)
    orchestrator = PullOrchestrator(
        registry=registry,
        source=source,
        saver=saver,
        output_dir=settings.output_dir,
        cache_key=small,
        overwrite=settings.overwrite,
    )
    return orchestrator.run()
