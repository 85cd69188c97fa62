"""
Random access to block gzipped FASTA containers.

Decompression and index lookups are done by htslib through :py:class:`pysam.FastaFile`. This module
only locates the sidecar indices, converts coordinates and maps failures onto the error hierarchy
in :py:mod:`seqrepo_lite.lib.exceptions`.
"""

import logging
import os

import pysam

from seqrepo_lite.lib.exceptions import (
    BgzfOpenError,
    FaiOpenError,
    FaiQueryError,
    FastaDecodeError,
    FastaOpenError,
    GziOpenError,
)

logger = logging.getLogger(__name__)

FAI_SUFFIX = ".fai"
GZI_SUFFIX = ".gzi"


class IndexedFastaReader:
    """
    Reader over a single BGZF FASTA container with its ``.fai`` and ``.gzi`` indices.

    The indices are expected next to the container, named after it with the suffixes above.
    Readers hold an open file handle and are not safe to share between threads.
    """

    def __init__(self, path: str):
        self.path = path
        self.fai_path = f"{path}{FAI_SUFFIX}"
        self.gzi_path = f"{path}{GZI_SUFFIX}"

        if not os.path.isfile(self.fai_path):
            raise FaiOpenError(f"Error opening FAI index: {self.fai_path} does not exist")
        if not os.path.isfile(self.gzi_path):
            raise GziOpenError(f"Error opening GZI index: {self.gzi_path} does not exist")
        if not os.path.isfile(self.path):
            raise BgzfOpenError(f"Error opening BGZF reader: {self.path} does not exist")

        try:
            self._fasta = pysam.FastaFile(
                self.path, filepath_index=self.fai_path, filepath_index_compressed=self.gzi_path
            )
        except (OSError, ValueError) as exc:
            raise FastaOpenError(f"Error opening FASTA reader for {self.path}: {exc}") from exc

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self) -> None:
        self._fasta.close()

    def query(self, name: str, start: int, end: int) -> str:
        """
        Read the region ``name:start-end`` of the container.

        Args:
            name (str): The record name, i.e. the sequence id.
            start (int): 1-based first position to read.
            end (int): 1-based last position to read, inclusive.

        Raises:
            FaiQueryError: If the record is not indexed or the region cannot be read.
            FastaDecodeError: If the bytes read are not valid text.
        """
        logger.debug(msg=f"Querying {self.path} for {name}:{start}-{end}")

        try:
            # pysam takes 0-based, half-open coordinates.
            sequence = self._fasta.fetch(reference=name, start=start - 1, end=end)
        except UnicodeDecodeError as exc:
            raise FastaDecodeError(f"Error decoding {name}:{start}-{end} from {self.path}: {exc}") from exc
        except (KeyError, ValueError, IndexError, OSError) as exc:
            raise FaiQueryError(f"Error querying FAI reader for {name}:{start}-{end}: {exc}") from exc

        if isinstance(sequence, bytes):
            try:
                sequence = sequence.decode("ascii")
            except UnicodeDecodeError as exc:
                raise FastaDecodeError(f"Error decoding {name}:{start}-{end} from {self.path}: {exc}") from exc

        return sequence
