import pytest

from seqrepo_lite import deps
from seqrepo_lite.deps import get_seqrepo
from seqrepo_lite.lib.cache import CacheReadingSeqRepo, CacheWritingSeqRepo
from seqrepo_lite.lib.repository import SeqRepo
from seqrepo_lite.view_models.alias import Alias

from tests.helpers.constants import TEST_ALIAS, TEST_SEQREPO_INSTANCE


def test_default_mode_opens_repository(seqrepo_root):
    sr = get_seqrepo(str(seqrepo_root), TEST_SEQREPO_INSTANCE, cache_mode="none")
    try:
        assert isinstance(sr, SeqRepo)
        assert sr.fetch(Alias(value=TEST_ALIAS), None, 4) == "ACTG"
    finally:
        sr.close()


def test_settings_are_read_from_module(monkeypatch, seqrepo_root):
    monkeypatch.setattr(deps, "SEQREPO_ROOT_DIR", str(seqrepo_root))
    monkeypatch.setattr(deps, "SEQREPO_INSTANCE", TEST_SEQREPO_INSTANCE)
    monkeypatch.setattr(deps, "SEQREPO_CACHE_MODE", "none")

    sr = get_seqrepo()
    try:
        assert sr.root_dir == str(seqrepo_root)
        assert sr.instance == TEST_SEQREPO_INSTANCE
    finally:
        sr.close()


def test_write_then_read_modes(tmp_path, seqrepo_root):
    cache_path = str(tmp_path / "cache.fa")

    writer = get_seqrepo(str(seqrepo_root), TEST_SEQREPO_INSTANCE, cache_mode="write", cache_path=cache_path)
    try:
        assert isinstance(writer, CacheWritingSeqRepo)
        assert writer.fetch(Alias(value=TEST_ALIAS), None, 4) == "ACTG"
    finally:
        writer.close()
        writer.repo.close()

    # Reading needs no repository at all.
    reader = get_seqrepo(str(tmp_path / "missing"), "missing", cache_mode="READ", cache_path=cache_path)
    assert isinstance(reader, CacheReadingSeqRepo)
    assert reader.fetch(Alias(value=TEST_ALIAS), None, 4) == "ACTG"


def test_unknown_cache_mode():
    with pytest.raises(ValueError, match="Unknown SeqRepo cache mode"):
        get_seqrepo(cache_mode="sometimes")


@pytest.mark.parametrize("cache_mode", ["write", "read"])
def test_cache_mode_requires_path(monkeypatch, cache_mode):
    monkeypatch.setattr(deps, "SEQREPO_CACHE_PATH", None)

    with pytest.raises(ValueError, match="requires SEQREPO_CACHE_PATH"):
        get_seqrepo(cache_mode=cache_mode)
