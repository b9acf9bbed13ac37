"""Settings model for pulling objects."""
import json
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from eo_pull.core.errors import ConfigError
from eo_pull.objects.hashes import CACHE_KEY_LENGTH, DEFAULT_HASH_REPO
from eo_pull.objects.remote import DEFAULT_REMOTE_URL


class PullSettings(BaseModel):
    """Everything a pull needs, passed explicitly.

    - Which Objectionary version to read (hash_tag)
    - Where pulled objects go (output_dir) and where the cache lives (cache_dir)
    - Whether existing files are pulled again (overwrite)
    - Whether the remote is preferred over the local cache (force_update)
    """

    model_config = ConfigDict(extra="forbid")

    hash_tag: str = Field(default="master", min_length=1, description="Tag, branch or hash of the Objectionary")
    overwrite: bool = Field(default=False, description="Pull again even if the .eo file is already present")
    force_update: bool = Field(default=False, description="Prefer remote, fall back to local cache on miss")
    output_dir: Path = Field(..., description="Directory where pulled objects are written")
    cache_dir: Path = Field(..., description="Local cache of objects, keyed by hash prefix")
    remote_url: str = Field(default=DEFAULT_REMOTE_URL, description="URL template with {hash} and {path}")
    hash_repo_url: str = Field(default=DEFAULT_HASH_REPO, description="Git repository used to resolve tags")
    tags_url: Optional[str] = Field(default=None, description="tags.txt listing used instead of git, if set")
    cache_key_length: int = Field(default=CACHE_KEY_LENGTH, ge=1, le=40)
    timeout: float = Field(default=30.0, gt=0, description="HTTP timeout in seconds")

    @field_validator("remote_url")
    @classmethod
    def validate_remote_url(cls, v: str) -> str:
        """Ensure the URL template has both placeholders and no others."""
        if "{hash}" not in v or "{path}" not in v:
            raise ValueError(
                f"remote_url must contain {{hash}} and {{path}} placeholders; got '{v}'"
            )
        try:
            v.format(hash="0" * 40, path="foo/bar.eo")
        except (KeyError, IndexError, ValueError) as e:
            raise ValueError(
                f"remote_url may only use {{hash}} and {{path}} placeholders; got '{v}' ({e!r})"
            ) from e
        return v

    @classmethod
    def load(cls, path: Path, **defaults) -> "PullSettings":
        """Load settings from a JSON file; ``defaults`` fill missing keys.

        Raises:
            ConfigError: If the file is missing or invalid
        """
        path = Path(path)
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")
        try:
            values = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Invalid config file {path}: {e}") from e
        if not isinstance(values, dict):
            raise ConfigError(f"Config file {path} must contain a JSON object")
        try:
            return cls.model_validate({**defaults, **values})
        except ValidationError as e:
            raise ConfigError(f"Invalid config file {path}: {e}") from e

    def with_overrides(self, **values) -> "PullSettings":
        """Return a copy with every non-None value applied."""
        updates = {k: v for k, v in values.items() if v is not None}
        try:
            return self.model_validate({**self.model_dump(), **updates})
        except ValidationError as e:
            raise ConfigError(f"Invalid settings: {e}") from e
