"""Tests for the file providers and their caches."""

import os

import pytest

from glslprep.files import (
    CachedFileProvider,
    CacheKey,
    SmartCachedFileProvider,
    UncachedFileProvider,
    read_string,
)


def rewrite_keeping_stat(path, text: str) -> None:
    """Replace file contents while keeping its size and modification time."""
    stat = path.stat()
    path.write_bytes(text.encode("utf-8"))
    os.utime(path, ns=(stat.st_atime_ns, stat.st_mtime_ns))


def touch_later(path) -> None:
    stat = path.stat()
    os.utime(path, ns=(stat.st_atime_ns, stat.st_mtime_ns + 1_000_000_000))


def test_read_string_keeps_line_endings(tmp_path):
    path = tmp_path / "a.glsl"
    path.write_bytes(b"a\r\nb\n")

    assert read_string(path) == "a\r\nb\n"


def test_read_string_missing_file(tmp_path):
    assert read_string(tmp_path / "missing.glsl") is None


def test_read_string_directory(tmp_path):
    assert read_string(tmp_path) is None


def test_read_string_invalid_utf8(tmp_path):
    path = tmp_path / "a.glsl"
    path.write_bytes(b"\xff\xfe\xfa")

    assert read_string(path) is None


def test_uncached_reads_every_time(tmp_path):
    path = tmp_path / "a.glsl"
    path.write_text("one")
    provider = UncachedFileProvider()

    assert provider.get_string(path) == "one"
    path.write_text("two")
    assert provider.get_string(path) == "two"


def test_cached_returns_first_read_forever(tmp_path):
    path = tmp_path / "a.glsl"
    path.write_text("one")
    provider = CachedFileProvider()

    assert provider.get_string(path) == "one"
    path.write_text("changed")
    assert provider.get_string(path) == "one"
    path.unlink()
    assert provider.get_string(path) == "one"
    assert len(provider) == 1


def test_cached_does_not_store_failures(tmp_path):
    path = tmp_path / "a.glsl"
    provider = CachedFileProvider()

    assert provider.get_string(path) is None
    assert len(provider) == 0
    path.write_text("late")
    assert provider.get_string(path) == "late"


def test_cached_clear(tmp_path):
    path = tmp_path / "a.glsl"
    path.write_text("one")
    provider = CachedFileProvider()
    provider.get_string(path)

    path.write_text("two")
    provider.clear()

    assert provider.get_string(path) == "two"


def test_cache_key_from_path(tmp_path):
    path = tmp_path / "a.glsl"
    path.write_text("abc")

    key = CacheKey.from_path(path)

    assert key.filepath == str(path)
    assert key.file_size == 3
    assert key.last_write == path.stat().st_mtime_ns
    assert key == CacheKey.from_path(path)


def test_cache_key_missing_file(tmp_path):
    with pytest.raises(OSError):
        CacheKey.from_path(tmp_path / "missing.glsl")


def test_smart_cache_hits_unchanged_file(tmp_path):
    path = tmp_path / "a.glsl"
    path.write_text("one")
    provider = SmartCachedFileProvider()

    assert provider.get_string(path) == "one"
    # Same size and mtime: the cached text is served
    rewrite_keeping_stat(path, "two")
    assert provider.get_string(path) == "one"
    assert len(provider) == 1


def test_smart_cache_refetches_on_size_change(tmp_path):
    path = tmp_path / "a.glsl"
    path.write_text("one")
    provider = SmartCachedFileProvider()
    provider.get_string(path)

    rewrite_keeping_stat(path, "three")

    assert provider.get_string(path) == "three"


def test_smart_cache_refetches_on_mtime_change(tmp_path):
    path = tmp_path / "a.glsl"
    path.write_text("one")
    provider = SmartCachedFileProvider()
    provider.get_string(path)

    rewrite_keeping_stat(path, "two")
    touch_later(path)

    assert provider.get_string(path) == "two"
    assert len(provider) == 2


def test_smart_cache_deleted_file_returns_none(tmp_path):
    path = tmp_path / "a.glsl"
    path.write_text("one")
    provider = SmartCachedFileProvider()
    provider.get_string(path)

    path.unlink()

    assert provider.get_string(path) is None


def test_smart_cache_clear(tmp_path):
    path = tmp_path / "a.glsl"
    path.write_text("one")
    provider = SmartCachedFileProvider()
    provider.get_string(path)

    provider.clear()

    assert len(provider) == 0
