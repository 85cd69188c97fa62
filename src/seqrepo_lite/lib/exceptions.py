from typing import Sequence


class SeqRepoError(Exception):
    """Base class for all errors raised while reading a sequence repository."""

    pass


####################################################################################################
# Alias database
####################################################################################################


class AliasDbConnectError(SeqRepoError):
    """Raised when the alias database cannot be opened."""

    pass


class AliasDbQueryError(SeqRepoError):
    """Raised when a query against the alias database fails."""

    pass


class AliasDbRowError(SeqRepoError):
    """Raised for a single alias row that cannot be converted into a record."""

    def __init__(self, message: str, seqalias_id=None):
        super().__init__(message)
        self.seqalias_id = seqalias_id


####################################################################################################
# Sequence database
####################################################################################################


class SequenceDbConnectError(SeqRepoError):
    """Raised when the sequence database cannot be opened or carries no usable schema version."""

    pass


class SequenceDbQueryError(SeqRepoError):
    """Raised when a query against the sequence database fails."""

    pass


class SequenceDbRowError(SeqRepoError):
    """Raised when a sequence info row cannot be converted into a record."""

    pass


class SchemaVersionError(SeqRepoError):
    """Raised when the sequence database schema does not match the version this package reads."""

    def __init__(self, found: int, expected: int):
        super().__init__(
            f"Upgrade required: database schema version is {found} and the code expects {expected}"
        )
        self.found = found
        self.expected = expected


class SequenceNotFoundError(SeqRepoError):
    """Raised when no sequence info exists for a sequence id."""

    def __init__(self, seq_id: str):
        super().__init__(f"Sequence {seq_id} not found")
        self.seq_id = seq_id


class InvalidCoordinatesError(SeqRepoError, ValueError):
    """Raised when a requested range cannot be converted into sequence positions."""

    pass


####################################################################################################
# Indexed FASTA reader
####################################################################################################


class IndexedReaderError(SeqRepoError):
    """Base class for failures while reading a block compressed FASTA container."""

    pass


class FaiOpenError(IndexedReaderError):
    """Raised when the record offset (.fai) index cannot be opened."""

    pass


class GziOpenError(IndexedReaderError):
    """Raised when the block offset (.gzi) index cannot be opened."""

    pass


class BgzfOpenError(IndexedReaderError):
    """Raised when the block compressed container itself cannot be opened."""

    pass


class FastaOpenError(IndexedReaderError):
    """Raised when the container and its indices exist but cannot be opened together."""

    pass


class FaiQueryError(IndexedReaderError):
    """Raised when a region cannot be read from an opened container."""

    pass


class FastaDecodeError(IndexedReaderError):
    """Raised when bytes read from a container cannot be decoded as text."""

    pass


####################################################################################################
# Alias resolution
####################################################################################################


class AliasResolutionError(SeqRepoError):
    """Base class for failures to map an alias to exactly one sequence id."""

    def __init__(self, message: str, alias: str):
        super().__init__(message)
        self.alias = alias


class AliasNotFoundError(AliasResolutionError):
    """Raised when an alias does not resolve to any sequence id."""

    def __init__(self, alias: str):
        super().__init__(f"Could not resolve alias {alias} to seqid", alias)


class AmbiguousAliasError(AliasResolutionError):
    """Raised when an alias resolves to more than one sequence id."""

    def __init__(self, alias: str, seq_ids: Sequence[str]):
        super().__init__(f"Alias {alias} resolved to multiple seqids: {', '.join(seq_ids)}", alias)
        self.seq_ids = list(seq_ids)


####################################################################################################
# Cache
####################################################################################################


class CacheError(SeqRepoError):
    pass


class CacheOpenWriteError(CacheError):
    """Raised when the cache file cannot be opened for appending."""

    pass


class CacheWriteError(CacheError):
    """Raised when a record cannot be appended to the cache file."""

    pass


class CacheOpenReadError(CacheError):
    """Raised when the cache file cannot be opened for reading."""

    pass


class CacheReadError(CacheError):
    """Raised when the contents of the cache file cannot be parsed."""

    pass


class CacheKeyError(CacheError, KeyError):
    """Raised by read-only caches when a request was never captured."""

    def __init__(self, key: str):
        super().__init__(key)
        self.key = key

    def __str__(self):
        return f"Key {self.key} not found in cache"
