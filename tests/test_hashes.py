"""Tests for hash tag resolution and cache keys."""
import pytest

from eo_pull.core.errors import HashResolutionError
from eo_pull.objects.hashes import GitHashResolver, TagsFileHashResolver, cache_key


class TestCacheKey:
    """Tests for deriving cache keys from full hashes."""

    def test_cache_key_is_prefix(self):
        assert cache_key("abcdef1234567890") == "abcdef1"

    def test_cache_key_is_deterministic(self):
        assert cache_key("abcdef1234567890") == cache_key("abcdef1234567890")

    def test_custom_length(self):
        assert cache_key("abcdef1234567890", 4) == "abcd"

    def test_short_hash_rejected(self):
        with pytest.raises(ValueError):
            cache_key("abc")


class TestGitHashResolver:
    """Tests for resolving tags with git ls-remote."""

    def test_resolve_tag(self, git_repo_fixture):
        resolver = GitHashResolver(str(git_repo_fixture["path"]))

        assert resolver.resolve("v0.1") == git_repo_fixture["tag_sha"]

    def test_resolve_annotated_tag_to_commit(self, git_repo_fixture):
        """Test: an annotated tag resolves to the commit, not the tag object.

        Given: repo fixture with annotated tag v0.2 on the v0.1 commit
        When: v0.2 is resolved
        Then: the commit SHA is returned, so both tags share a cache key
        """
        resolver = GitHashResolver(str(git_repo_fixture["path"]))

        full = resolver.resolve("v0.2")

        assert full == git_repo_fixture["tag_sha"]
        assert cache_key(full) == cache_key(resolver.resolve("v0.1"))

    def test_resolve_branch(self, git_repo_fixture):
        resolver = GitHashResolver(str(git_repo_fixture["path"]))

        assert resolver.resolve("dev") == git_repo_fixture["dev_sha"]

    def test_full_hash_returned_unchanged(self):
        full = "0123456789abcdef0123456789abcdef01234567"

        assert GitHashResolver("/does/not/exist").resolve(full) == full

    def test_unknown_tag_raises(self, git_repo_fixture):
        resolver = GitHashResolver(str(git_repo_fixture["path"]))

        with pytest.raises(HashResolutionError):
            resolver.resolve("DOES_NOT_EXIST")

    def test_unknown_repository_raises(self, tmp_path):
        with pytest.raises(HashResolutionError):
            GitHashResolver(str(tmp_path / "missing")).resolve("master")


class TestTagsFileHashResolver:
    """Tests for resolving tags from a tags.txt listing."""

    def test_resolve_tag(self, objectionary):
        resolver = TagsFileHashResolver(client=objectionary["client"])

        assert resolver.resolve("master") == "abcdef1234567890"
        assert resolver.resolve("0.28.5") == "0123456789abcdef"

    def test_unknown_tag_raises(self, objectionary):
        resolver = TagsFileHashResolver(client=objectionary["client"])

        with pytest.raises(HashResolutionError):
            resolver.resolve("9.9.9")

    def test_http_failure_raises(self, objectionary):
        objectionary["state"]["fail"] = True
        resolver = TagsFileHashResolver(client=objectionary["client"])

        with pytest.raises(HashResolutionError):
            resolver.resolve("master")
