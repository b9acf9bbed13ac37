"""Pull orchestrator: materialize pending objects at deterministic paths."""
import logging
from pathlib import Path
from typing import List, Optional

from eo_pull.core.errors import EoPullError, PullError
from eo_pull.core.saver import Saver, relative
from eo_pull.objects.names import place
from eo_pull.objects.source import ObjectSource
from eo_pull.pull.registry import ATTR_EO, ATTR_ID, Registry, is_pending

logger = logging.getLogger(__name__)


class PullOrchestrator:
    """Pulls every pending object of a registry into ``output_dir``.

    Objects land at ``<output_dir>/<cache_key>/<path>.eo``. A file that is
    already there is reused unless ``overwrite`` is set, so repeated runs
    never fetch the same object twice.

    Args:
        registry: Store of objects; pending ones get their ``eo`` path set
        source: Where object bytes come from (usually a SwapResolver)
        saver: Persists fetched bytes
        output_dir: Root directory for pulled objects
        cache_key: Hash prefix namespacing this generation of objects
        overwrite: Pull again even if the file is already present
    """

    def __init__(
        self,
        registry: Registry,
        source: ObjectSource,
        saver: Saver,
        output_dir: Path,
        cache_key: str,
        overwrite: bool = False,
    ):
        self.registry = registry
        self.source = source
        self.saver = saver
        self.output_dir = Path(output_dir)
        self.cache_key = cache_key
        self.overwrite = overwrite

    def destination(self, name: str) -> Path:
        return place(name, self.output_dir / self.cache_key)

    def pull(self, name: str, overwrite: Optional[bool] = None) -> Path:
        """Make sure the sources of ``name`` exist locally and return their path."""
        if overwrite is None:
            overwrite = self.overwrite
        path = self.destination(name)
        if path.exists() and not overwrite:
            logger.debug(
                f"The object '{name}' already pulled to {relative(path)} "
                f"(and 'overwrite' is false)"
            )
            return path
        self.saver.save(self.source.get(name), path)
        logger.debug(f"The sources of the object '{name}' pulled to {relative(path)}")
        return path

    def run(self) -> List[Path]:
        """Pull all pending objects, stopping at the first failure.

        Objects pulled before the failure keep their recorded path.

        Raises:
            PullError: Naming the object that failed and the sources tried
        """
        entries = self.registry.select(is_pending)
        pulled = []
        for entry in entries:
            name = entry.get(ATTR_ID)
            try:
                path = self.pull(name)
            except EoPullError as e:
                raise PullError(name, str(self.source), str(e)) from e
            entry.set(ATTR_EO, str(path.absolute()))
            pulled.append(path)
        if pulled:
            logger.info(f"{len(pulled)} program(s) pulled from {self.source}")
        return pulled
