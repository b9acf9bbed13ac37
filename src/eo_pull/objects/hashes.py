"""Hash tags: resolve symbolic tags to full hashes and derive cache keys."""
import logging
import re
import subprocess
from typing import Optional, Protocol

import httpx

from eo_pull.core.errors import HashResolutionError

logger = logging.getLogger(__name__)

# Length of the hash prefix namespacing cached objects
CACHE_KEY_LENGTH = 7

DEFAULT_HASH_REPO = "https://github.com/objectionary/home.git"
DEFAULT_TAGS_URL = "https://home.objectionary.com/tags.txt"

FULL_HASH_PATTERN = re.compile(r"^[0-9a-f]{40}$")


def cache_key(full_hash: str, length: int = CACHE_KEY_LENGTH) -> str:
    """Derive the cache key (hash prefix) from a full hash.

    Examples:
        abcdef1234567890 -> abcdef1

    Raises:
        ValueError: If the hash is shorter than the requested prefix
    """
    if length < 1:
        raise ValueError(f"Cache key length must be positive, got {length}")
    if len(full_hash) < length:
        raise ValueError(
            f"Hash '{full_hash}' is shorter than the cache key length {length}"
        )
    return full_hash[:length]


class HashResolver(Protocol):
    """Resolves a symbolic tag (e.g. "master", "0.28.5") to a full hash."""

    def resolve(self, tag: str) -> str:
        ...


class GitHashResolver:
    """Resolves tags and branches of a git repository with ``git ls-remote``.

    A tag that already is a full commit hash is returned unchanged.
    """

    def __init__(self, repo_url: str = DEFAULT_HASH_REPO, timeout: int = 30):
        self.repo_url = repo_url
        self.timeout = timeout

    def resolve(self, tag: str) -> str:
        """Resolve ``tag`` to its commit SHA.

        Raises:
            HashResolutionError: If the tag is unknown or git fails
        """
        if FULL_HASH_PATTERN.match(tag):
            return tag
        try:
            result = subprocess.run(
                ["git", "ls-remote", "--heads", "--tags", self.repo_url, tag, f"{tag}^{{}}"],
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise HashResolutionError(
                f"Git ls-remote timed out for {self.repo_url}"
            ) from e
        except OSError as e:
            raise HashResolutionError(
                f"Failed to resolve tag {tag}: {e}"
            ) from e

        if result.returncode != 0:
            raise HashResolutionError(
                f"Cannot resolve tag '{tag}' in {self.repo_url}: {result.stderr.strip()}"
            )

        # Parse output: each line is "<sha>\t<ref>"
        refs = [line.split() for line in result.stdout.strip().split("\n") if line.strip()]
        if not refs:
            raise HashResolutionError(
                f"Tag '{tag}' not found in {self.repo_url}"
            )

        # Annotated tags point to a tag object; the peeled "^{}" line has the commit
        peeled = [sha for sha, ref in refs if ref.endswith("^{}")]
        full_hash = peeled[0] if peeled else refs[0][0]
        logger.info(f"Resolved {tag} → {full_hash[:12]}")
        return full_hash


class TagsFileHashResolver:
    """Resolves tags from a published ``tags.txt`` listing.

    Each line of the listing is ``<hash> <tag>``; blank lines are ignored.
    """

    def __init__(
        self,
        url: str = DEFAULT_TAGS_URL,
        client: Optional[httpx.Client] = None,
        timeout: float = 30.0,
    ):
        self.url = url
        self.client = client or httpx.Client(timeout=timeout, follow_redirects=True)

    def resolve(self, tag: str) -> str:
        try:
            response = self.client.get(self.url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise HashResolutionError(
                f"HTTP {e.response.status_code} while reading {self.url}"
            ) from e
        except httpx.RequestError as e:
            raise HashResolutionError(
                f"Cannot read tags from {self.url}: {e}"
            ) from e

        for line in response.text.splitlines():
            parts = line.split()
            if len(parts) >= 2 and parts[1] == tag:
                logger.info(f"Resolved {tag} → {parts[0][:12]}")
                return parts[0]

        raise HashResolutionError(f"Tag '{tag}' not found in {self.url}")
