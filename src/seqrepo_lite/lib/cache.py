"""
Sequence repositories that operate on caches.

This is useful in CI situations. Locally, tests can put a :py:class:`CacheWritingSeqRepo` in front
of a full repository to capture every sequence they read into a small FASTA file. In CI, a
:py:class:`CacheReadingSeqRepo` then replays that file without needing the repository at all.

Each FASTA record in the cache file is named after the key built by :py:func:`build_key` from the
request and holds the response as its sequence. The whole header line is the key, so keys may
contain spaces. Cache files are UTF-8.
"""

import logging
import os
import threading
from typing import Optional

from fqfa.fasta.fasta import parse_fasta_records

from seqrepo_lite.lib.exceptions import (
    CacheKeyError,
    CacheOpenReadError,
    CacheOpenWriteError,
    CacheReadError,
    CacheWriteError,
)
from seqrepo_lite.lib.interface import SeqRepoInterface
from seqrepo_lite.view_models.alias import Alias, AliasOrSeqId

logger = logging.getLogger(__name__)

FASTA_LINE_LENGTH = 80
CACHE_ENCODING = "utf-8"


def build_key(alias_or_seq_id: AliasOrSeqId, begin: Optional[int] = None, end: Optional[int] = None) -> str:
    """
    Build the cache key for a request.

    The key is the sequence id, ``<namespace>:<alias>`` or the bare alias if the namespace is missing or
    empty. Unless both bounds are missing, ``:<begin>-<end>`` follows with ``?`` for a missing bound, e.g.
    ``A:X``, ``X:?-4`` or ``S1:0-4``.
    """
    if isinstance(alias_or_seq_id, Alias) and alias_or_seq_id.namespace:
        name = f"{alias_or_seq_id.namespace}:{alias_or_seq_id.value}"
    else:
        name = alias_or_seq_id.value

    if begin is None and end is None:
        return name

    begin_str = "?" if begin is None else str(begin)
    end_str = "?" if end is None else str(end)
    return f"{name}:{begin_str}-{end_str}"


def format_record(key: str, value: str) -> str:
    lines = [f">{key}"]
    lines.extend(value[i : i + FASTA_LINE_LENGTH] for i in range(0, len(value), FASTA_LINE_LENGTH))
    return "\n".join(lines) + "\n"


def load_cache(path: str) -> dict[str, str]:
    """
    Read a cache file into a dictionary of key to sequence.

    Raises:
        CacheOpenReadError: If the file cannot be opened.
        CacheReadError: If the file is not valid FASTA.
    """
    try:
        handle = open(path, "r", encoding=CACHE_ENCODING)
    except OSError as exc:
        raise CacheOpenReadError(f"Error opening cache file {path} for reading: {exc}") from exc

    cache: dict[str, str] = {}
    with handle:
        try:
            # A cache that has not recorded anything yet is empty rather than malformed.
            if not handle.read(1):
                return cache
            handle.seek(0)

            for header, sequence in parse_fasta_records(handle):
                cache[header.rstrip("\r\n")] = sequence
        except (ValueError, IndexError, UnicodeDecodeError) as exc:
            raise CacheReadError(f"Error reading from cache file {path}: {exc}") from exc

    logger.debug(msg=f"Loaded {len(cache)} records from cache file {path}")
    return cache


class CacheWritingSeqRepo:
    """
    Sequence repository reading from an actual repository and writing every response to a cache.

    Responses already present in the cache file are loaded first, so reopening a cache adds to it.
    A request is computed and appended at most once per key, also when the instance is shared
    between threads. Appends from several processes to one file are not coordinated.
    """

    def __init__(self, repo: SeqRepoInterface, cache_path: str):
        self.repo = repo
        self.cache_path = str(cache_path)
        self._lock = threading.Lock()

        self._cache: dict[str, str] = {}
        if os.path.isfile(self.cache_path):
            self._cache = load_cache(self.cache_path)

        try:
            # Unbuffered, so a failed append leaves nothing behind to be written later.
            self._writer = open(self.cache_path, "ab", buffering=0)
        except OSError as exc:
            raise CacheOpenWriteError(f"Error opening cache file {self.cache_path} for writing: {exc}") from exc

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def __len__(self) -> int:
        return len(self._cache)

    def close(self) -> None:
        with self._lock:
            self._writer.close()

    def _append(self, record: str) -> None:
        data = memoryview(record.encode(CACHE_ENCODING))
        offset = os.fstat(self._writer.fileno()).st_size

        try:
            while data:
                written = self._writer.write(data)
                data = data[written:]
        except OSError:
            # Drop any part of the record that reached the file, so the retry appends it whole.
            self._writer.truncate(offset)
            raise

    def fetch(self, alias_or_seq_id: AliasOrSeqId, begin: Optional[int] = None, end: Optional[int] = None) -> str:
        key = build_key(alias_or_seq_id, begin, end)

        with self._lock:
            if key in self._cache:
                return self._cache[key]

            value = self.repo.fetch(alias_or_seq_id, begin, end)

            # The key is only remembered once it is on disk, so a failed append is retried next time.
            try:
                self._append(format_record(key, value))
            except (OSError, ValueError) as exc:
                raise CacheWriteError(f"Error writing {key} to cache file {self.cache_path}: {exc}") from exc

            self._cache[key] = value
            logger.debug(msg=f"Cached {key} ({len(value)} bp)")
            return value

    def fetch_full(self, alias_or_seq_id: AliasOrSeqId) -> str:
        return self.fetch(alias_or_seq_id)


class CacheReadingSeqRepo:
    """Sequence repository serving exclusively from a cache file written by :py:class:`CacheWritingSeqRepo`."""

    def __init__(self, cache_path: str):
        self.cache_path = str(cache_path)
        self._cache = load_cache(self.cache_path)

    def __len__(self) -> int:
        return len(self._cache)

    def fetch(self, alias_or_seq_id: AliasOrSeqId, begin: Optional[int] = None, end: Optional[int] = None) -> str:
        key = build_key(alias_or_seq_id, begin, end)
        try:
            return self._cache[key]
        except KeyError:
            raise CacheKeyError(key) from None

    def fetch_full(self, alias_or_seq_id: AliasOrSeqId) -> str:
        return self.fetch(alias_or_seq_id)
