"""
Utilities for working with SeqRepo identifiers and sequences.

See: https://github.com/biocommons/seqrepo-rest-service/blob/main/src/seqrepo_rest_service/utils.py
"""

import logging
import os
import re
from base64 import urlsafe_b64decode, urlsafe_b64encode
from binascii import hexlify, unhexlify
from typing import Generator, Optional

from bioutils.accessions import infer_namespaces

from seqrepo_lite import __version__ as seqrepo_lite_version
from seqrepo_lite.lib.aliases import AliasDb
from seqrepo_lite.lib.exceptions import AliasNotFoundError, AmbiguousAliasError
from seqrepo_lite.lib.interface import SeqRepoInterface
from seqrepo_lite.lib.logging.context import logging_context, save_to_logging_context
from seqrepo_lite.lib.repository import SeqRepo
from seqrepo_lite.view_models.alias import AliasOrSeqId
from seqrepo_lite.view_models.seqrepo import SeqRepoMetadata, SeqRepoVersions

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 8192

# Namespaces as spelled by bioutils and on the command line, mapped to how SeqRepo stores them.
STORED_NAMESPACES = {
    "refseq": "NCBI",
    "ensembl": "Ensembl",
    "lrg": "Lrg",
}


def base64url_to_hex(s: str) -> str:
    return hexlify(urlsafe_b64decode(s)).decode("ascii")


def hex_to_base64url(s: str) -> str:
    return urlsafe_b64encode(unhexlify(s)).decode("ascii")


def get_sequence_ids(alias_db: AliasDb, query: str) -> list[str]:
    """determine sequence_ids after guessing form of query

    The query may be:
      * A fully-qualified sequence alias (e.g., VMC:0123 or refseq:NM_01234.5)
      * A digest or digest prefix from VMC, TRUNC512, or MD5
      * A sequence accession (without namespace)

    The sequence ids of the first option with any current alias are returned, sorted.
    """
    aliases = []
    for ns, a in generate_nsa_options(query):
        aliases = list(alias_db.find_aliases(namespace=ns, alias=a))
        if aliases:
            break

    return sorted(set(a.seq_id for a in aliases))


def stored_namespace(namespace: str) -> str:
    return STORED_NAMESPACES.get(namespace.lower(), namespace)


def generate_nsa_options(query: str) -> list[tuple[Optional[str], str]]:
    """
    >>> generate_nsa_options("NM_000551.3")
    [('NCBI', 'NM_000551.3')]

    >>> generate_nsa_options("gi:123456789")
    [('gi', '123456789')]

    >>> generate_nsa_options("01234abcde")
    [('MD5', '01234abcde%'), ('VMC', 'GS_ASNKvN4=%')]

    """
    if ":" in query:
        # interpret as fully-qualified identifier
        namespace, alias = query.split(sep=":", maxsplit=1)
        return [(stored_namespace(namespace), alias)]

    namespaces = infer_namespaces(query)
    if namespaces:
        return [(stored_namespace(ns), query) for ns in namespaces]

    # if hex, try MD5
    if re.match(r"^(?:[0-9A-Fa-f]{8,})$", query):
        nsa_options = [("MD5", query + "%")]
        # TRUNC512 isn't in seqrepo; synthesize equivalent VMC
        id_b64u = hex_to_base64url(query)
        nsa_options += [("VMC", "GS_" + id_b64u + "%")]
        return nsa_options

    return [(None, query)]


def sequence_generator(
    sr: SeqRepoInterface,
    alias_or_seq_id: AliasOrSeqId,
    length: int,
    start: Optional[int] = None,
    end: Optional[int] = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> Generator[str, None, None]:
    """
    Generates sequence chunks from any SeqRepo implementation.

    Args:
        sr (SeqRepoInterface): The repository or cache to fetch sequences from.
        alias_or_seq_id (AliasOrSeqId): The sequence to retrieve.
        length (int): The length of the sequence, e.g. from ``FastaDir.fetch_seqinfo``.
        start (Optional[int]): The starting position (0-based, inclusive). If None, starts from 0.
        end (Optional[int]): The ending position (0-based, exclusive). If None, goes to the end of the sequence.
        chunk_size (int, optional): The size of each chunk to yield. Defaults to DEFAULT_CHUNK_SIZE.

    Yields:
        str: A chunk of the sequence as a string.

    Raises:
        ValueError: If chunk_size is not positive.
        Any exceptions raised by the repository when fetching sequence data.

    Example:
        for chunk in sequence_generator(sr, SeqId(value="seq1"), 1000, 0, 1000, 100):
            process(chunk)
    """
    if chunk_size < 1:
        raise ValueError("chunk_size must be positive")

    seq_start = start if start is not None else 0
    seq_end = min(end, length) if end is not None else length

    for pos in range(seq_start, seq_end, chunk_size):
        chunk = sr.fetch(alias_or_seq_id, pos, min(pos + chunk_size, seq_end))
        if not chunk:
            break
        yield chunk


def seqrepo_versions(instance: Optional[str] = None) -> SeqRepoVersions:
    """Report the package version and the data version, which is the name of the repository instance."""
    seqrepo_instance = instance if instance is not None else os.getenv("SEQREPO_INSTANCE")
    if not seqrepo_instance:
        seqrepo_data_version = "unknown"
    else:
        seqrepo_data_version = seqrepo_instance.rstrip(os.sep).split(os.sep)[-1]  # instances may be given as paths

    return SeqRepoVersions(
        seqrepo_dependency_version=seqrepo_lite_version,
        seqrepo_data_version=seqrepo_data_version,
    )


def sequence_metadata(sr: SeqRepo, query: str) -> SeqRepoMetadata:
    """
    Describe the single sequence identified by *query*, interpreted as by :py:func:`get_sequence_ids`.

    Raises:
        AliasNotFoundError: If no sequence matches *query*.
        AmbiguousAliasError: If more than one sequence matches *query*. Use an explicit namespace.
    """
    save_to_logging_context({"requested_seqrepo_alias": query, "requested_resource": "metadata"})

    seq_ids = get_sequence_ids(sr.alias_db, query)
    save_to_logging_context({"seqrepo_sequence_ids": len(seq_ids)})
    if not seq_ids:
        logger.error(msg="Sequence not found", extra=logging_context())
        raise AliasNotFoundError(query)
    if len(seq_ids) > 1:
        logger.error(msg="Multiple sequences found for alias", extra=logging_context())
        raise AmbiguousAliasError(query, seq_ids)

    seq_id = seq_ids[0]
    seq_info = sr.fasta_dir.fetch_seqinfo(seq_id)
    aliases = sr.alias_db.find_aliases(seq_id=seq_id)

    return SeqRepoMetadata(
        seq_id=seq_id,
        added=seq_info.added,
        aliases=[f"{alias.namespace}:{alias.alias}" for alias in aliases],
        alphabet=seq_info.alphabet,
        length=seq_info.length,
    )
