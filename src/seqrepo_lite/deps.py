import os
from typing import Optional

from seqrepo_lite.lib.cache import CacheReadingSeqRepo, CacheWritingSeqRepo
from seqrepo_lite.lib.interface import SeqRepoInterface
from seqrepo_lite.lib.repository import DEFAULT_INSTANCE, SeqRepo

SEQREPO_ROOT_DIR = os.getenv("SEQREPO_ROOT_DIR") or os.path.expanduser("~/seqrepo-data")
SEQREPO_INSTANCE = os.getenv("SEQREPO_INSTANCE") or DEFAULT_INSTANCE

# One of "none", "write" or "read". See seqrepo_lite.lib.cache.
SEQREPO_CACHE_MODE = os.getenv("SEQREPO_CACHE_MODE") or "none"
SEQREPO_CACHE_PATH = os.getenv("SEQREPO_CACHE_PATH")

CACHE_MODES = ("none", "write", "read")


def get_seqrepo(
    root_dir: Optional[str] = None,
    instance: Optional[str] = None,
    cache_mode: Optional[str] = None,
    cache_path: Optional[str] = None,
) -> SeqRepoInterface:
    """
    Build the sequence repository configured through the environment.

    Arguments override the corresponding ``SEQREPO_*`` environment variables. With cache mode
    ``read`` no repository is opened at all, so this also works where only the cache file exists.

    Raises:
        ValueError: If the cache mode is unknown, or a cache is requested without a cache path.
    """
    root_dir = root_dir or SEQREPO_ROOT_DIR
    instance = instance or SEQREPO_INSTANCE
    cache_mode = (cache_mode or SEQREPO_CACHE_MODE).lower()
    cache_path = cache_path or SEQREPO_CACHE_PATH

    if cache_mode not in CACHE_MODES:
        raise ValueError(f"Unknown SeqRepo cache mode {cache_mode!r}. Expected one of {', '.join(CACHE_MODES)}.")
    if cache_mode != "none" and not cache_path:
        raise ValueError(f"SeqRepo cache mode {cache_mode!r} requires SEQREPO_CACHE_PATH to be set.")

    if cache_mode == "read":
        return CacheReadingSeqRepo(cache_path)  # type: ignore[arg-type]

    sr = SeqRepo(root_dir, instance)
    if cache_mode == "write":
        return CacheWritingSeqRepo(sr, cache_path)  # type: ignore[arg-type]

    return sr
