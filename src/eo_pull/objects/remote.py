"""Object source backed by the remote Objectionary repository."""
import logging
from typing import Optional

import httpx

from eo_pull.core.errors import ObjectIOError, ObjectNotFoundError
from eo_pull.objects.hashes import CACHE_KEY_LENGTH
from eo_pull.objects.names import relative_path
from eo_pull.objects.source import ObjectSource

logger = logging.getLogger(__name__)

DEFAULT_REMOTE_URL = (
    "https://raw.githubusercontent.com/objectionary/home/{hash}/objects/{path}"
)


class RemoteSource(ObjectSource):
    """Downloads objects from the Objectionary at a fixed full hash.

    Args:
        full_hash: Commit hash of the Objectionary to read from
        client: HTTP client used for downloads (a private one if omitted)
        url_template: URL with ``{hash}`` and ``{path}`` placeholders
        timeout: Request timeout in seconds for the private client
    """

    def __init__(
        self,
        full_hash: str,
        client: Optional[httpx.Client] = None,
        url_template: str = DEFAULT_REMOTE_URL,
        timeout: float = 30.0,
    ):
        self.full_hash = full_hash
        self.url_template = url_template
        self.client = client or httpx.Client(timeout=timeout, follow_redirects=True)

    def url_of(self, name: str) -> str:
        path = relative_path(name).as_posix()
        try:
            return self.url_template.format(hash=self.full_hash, path=path)
        except (KeyError, IndexError, ValueError) as e:
            raise ObjectIOError(
                f"Invalid remote URL template '{self.url_template}': {e!r}"
            ) from e

    def get(self, name: str) -> bytes:
        url = self.url_of(name)
        try:
            response = self.client.get(url)
        except httpx.TimeoutException as e:
            raise ObjectIOError(f"Timeout while downloading {url}") from e
        except httpx.RequestError as e:
            raise ObjectIOError(f"Connection error for {url}: {e}") from e

        if response.status_code == 404:
            raise ObjectNotFoundError(name, [self])
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ObjectIOError(
                f"HTTP {response.status_code} while downloading {url}"
            ) from e

        logger.debug(f"Downloaded '{name}' from {url}")
        return response.content

    def describe(self) -> str:
        return f"objectionary {self.full_hash[:CACHE_KEY_LENGTH]}"
