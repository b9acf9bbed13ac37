"""Pytest fixtures for eo-pull tests."""
import subprocess
import threading
from pathlib import Path
from typing import Dict, List

import httpx
import pytest

from eo_pull.core.errors import ObjectIOError, ObjectNotFoundError
from eo_pull.objects.source import ObjectSource


class RecordingSource(ObjectSource):
    """In-memory source that records every lookup in a shared call log."""

    def __init__(self, label: str, objects: Dict[str, bytes], calls: List[str] = None, broken=False):
        self.label = label
        self.objects = dict(objects)
        self.calls = calls if calls is not None else []
        self.broken = broken
        self._lock = threading.Lock()

    def get(self, name: str) -> bytes:
        with self._lock:
            self.calls.append(f"{self.label}:{name}")
        if self.broken:
            raise ObjectIOError(f"{self.label} is broken")
        if name not in self.objects:
            raise ObjectNotFoundError(name, [self])
        return self.objects[name]

    def describe(self) -> str:
        return self.label


@pytest.fixture
def call_log() -> List[str]:
    return []


@pytest.fixture
def objectionary() -> Dict[str, any]:
    """Fake Objectionary served through httpx.MockTransport.

    Returns dict with:
        - client: httpx.Client bound to the fake
        - transport: the MockTransport serving the fake
        - objects: {"<hash>/<path>": bytes} served with 200
        - requests: list of requested URL paths
        - tags: tags.txt body
    """
    objects = {
        "abcdef1234567890/objects/foo/bar.eo": b"[] > bar\n",
        "abcdef1234567890/objects/org/eolang/io/stdout.eo": b"[text] > stdout\n",
    }
    requests: List[str] = []
    state = {"fail": False}
    tags = "abcdef1234567890\tmaster\n0123456789abcdef\t0.28.5\n"

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request.url.path)
        if state["fail"]:
            return httpx.Response(503)
        if request.url.path == "/tags.txt":
            return httpx.Response(200, text=tags)
        key = request.url.path.split("/home/", 1)[-1]
        if key in objects:
            return httpx.Response(200, content=objects[key])
        return httpx.Response(404)

    transport = httpx.MockTransport(handler)
    client = httpx.Client(transport=transport)
    yield {
        "client": client,
        "transport": transport,
        "objects": objects,
        "requests": requests,
        "state": state,
        "tags": tags,
    }
    client.close()


@pytest.fixture
def git_repo_fixture(tmp_path: Path) -> Dict[str, any]:
    """Create a minimal git repository with tag and branch.

    Returns dict with:
        - path: Path to repo
        - tag_sha: SHA of the commit tagged v0.1 (lightweight) and v0.2 (annotated)
        - dev_sha: SHA of dev branch
    """
    repo_path = tmp_path / "test_repo"
    repo_path.mkdir()

    def git(*args):
        return subprocess.run(
            ["git", *args],
            cwd=repo_path,
            capture_output=True,
            text=True,
            check=True,
        )

    git("init")
    git("config", "user.email", "test@example.com")
    git("config", "user.name", "Test User")

    objects_dir = repo_path / "objects" / "foo"
    objects_dir.mkdir(parents=True)
    (objects_dir / "bar.eo").write_text("[] > bar\n")
    git("add", "objects")
    git("commit", "-m", "Initial commit")
    tag_sha = git("rev-parse", "HEAD").stdout.strip()
    git("tag", "v0.1")
    git("tag", "-a", "v0.2", "-m", "Release 0.2")

    git("checkout", "-b", "dev")
    (objects_dir / "baz.eo").write_text("[] > baz\n")
    git("add", "objects")
    git("commit", "-m", "Add baz on dev")
    dev_sha = git("rev-parse", "HEAD").stdout.strip()

    return {
        "path": repo_path,
        "tag_sha": tag_sha,
        "dev_sha": dev_sha,
    }
