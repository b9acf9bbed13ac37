"""eo-pull CLI - Command line interface for eo-pull."""
import logging
import sys
from pathlib import Path
from typing import Optional, Tuple

import click
import httpx

from eo_pull.core.errors import ConfigError, HashResolutionError, ObjectNotFoundError, PullError
from eo_pull.objects.hashes import DEFAULT_HASH_REPO, GitHashResolver, TagsFileHashResolver, cache_key
from eo_pull.pull import JsonRegistry, PullSettings, pull_objects

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(name)s: %(message)s",
)
logger = logging.getLogger("eo_pull")

# User-scoped home of pulled objects and the local cache
EO_HOME = Path.home() / ".eo"


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log every object pulled")
def main(verbose: bool):
    """eo-pull - Pull EO objects from the Objectionary."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


@main.command()
@click.option(
    "--registry",
    "registry_path",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="JSON file listing the objects to pull",
)
@click.option(
    "--object",
    "objects",
    multiple=True,
    help="Object to add to the registry before pulling (repeatable)",
)
@click.option("--hash", "hash_tag", default=None, help="Tag, branch or hash of the Objectionary (default: master)")
@click.option("--overwrite", is_flag=True, help="Pull again even if already present")
@click.option("--force-update", is_flag=True, help="Prefer remote over the local cache")
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for pulled objects (default: ~/.eo)",
)
@click.option(
    "--cache-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Local object cache (default: ~/.eo/pulled)",
)
@click.option("--tags-url", default=None, help="Resolve hashes from this tags.txt instead of git")
@click.option(
    "--config",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="JSON settings file; command line options take precedence",
)
def pull(
    registry_path: Path,
    objects: Tuple[str, ...],
    hash_tag: Optional[str],
    overwrite: bool,
    force_update: bool,
    output_dir: Optional[Path],
    cache_dir: Optional[Path],
    tags_url: Optional[str],
    config: Optional[Path],
):
    """Pull all pending objects of a registry.

    Examples:
        eo-pull pull --registry objects.json --object org.eolang.io.stdout
        eo-pull pull --registry objects.json --hash 0.28.5 --force-update

    Exit codes:
        0: Success
        1: Generic runtime failure
        2: Invalid CLI usage
        3: Hash tag not found
        4: Object not found
        7: Configuration file error
    """
    try:
        defaults = {"output_dir": EO_HOME, "cache_dir": EO_HOME / "pulled"}
        if config:
            settings = PullSettings.load(config, **defaults)
        else:
            settings = PullSettings(**defaults)
        settings = settings.with_overrides(
            hash_tag=hash_tag,
            overwrite=overwrite or None,
            force_update=force_update or None,
            output_dir=output_dir,
            cache_dir=cache_dir,
            tags_url=tags_url,
        )
    except ConfigError as e:
        logger.error(str(e))
        sys.exit(7)

    try:
        registry = JsonRegistry(registry_path)
        for name in objects:
            registry.add(name)
        paths = pull_objects(settings, registry)

        click.echo(f"[OK] {len(paths)} object(s) pulled")
        for path in paths:
            click.echo(f"  {path}")
        sys.exit(0)

    except ConfigError as e:
        logger.error(str(e))
        sys.exit(7)

    except HashResolutionError as e:
        logger.error(f"Invalid hash: {str(e)}")
        sys.exit(3)

    except PullError as e:
        logger.error(f"Pull failed: {str(e)}")
        if isinstance(e.__cause__, ObjectNotFoundError):
            sys.exit(4)
        sys.exit(1)

    except Exception as e:
        logger.error(f"Pull failed: {str(e)}")
        sys.exit(1)


@main.command()
@click.option("--hash", "hash_tag", default="master", help="Tag, branch or hash to resolve")
@click.option("--repo-url", default=None, help="Git repository to resolve against")
@click.option("--tags-url", default=None, help="Resolve from this tags.txt instead of git")
def resolve(hash_tag: str, repo_url: Optional[str], tags_url: Optional[str]):
    """Print the full hash and cache key of a hash tag.

    Exit codes:
        0: Success
        3: Hash tag not found
    """
    try:
        if tags_url:
            with httpx.Client(follow_redirects=True) as client:
                full = TagsFileHashResolver(tags_url, client=client).resolve(hash_tag)
        else:
            full = GitHashResolver(repo_url or DEFAULT_HASH_REPO).resolve(hash_tag)
    except HashResolutionError as e:
        logger.error(f"Invalid hash: {str(e)}")
        sys.exit(3)
    click.echo(f"{hash_tag}: {full}")
    click.echo(f"  Cache key: {cache_key(full)}")


if __name__ == "__main__":
    main()
