"""
Key-value access to a directory of block gzipped FASTA files.

Sequences are stored in dated FASTA files which are compressed with block gzip, enabling fast random
access to arbitrary regions of even chromosome sized sequences. A SQLite database in the same
directory records, for every sequence id, its length, alphabet and the path of the file holding it.
"""

import logging
import os
from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from seqrepo_lite.db.session import readonly_engine, session_factory
from seqrepo_lite.lib.exceptions import (
    InvalidCoordinatesError,
    SchemaVersionError,
    SequenceDbConnectError,
    SequenceDbQueryError,
    SequenceDbRowError,
    SequenceNotFoundError,
)
from seqrepo_lite.lib.indexed_reader import IndexedFastaReader
from seqrepo_lite.models.meta import Meta
from seqrepo_lite.models.seqinfo import SeqInfo
from seqrepo_lite.view_models.seqinfo import SeqInfoRecord

logger = logging.getLogger(__name__)

# Version of the sequence database schema this package can read.
EXPECTED_SCHEMA_VERSION = 1

SEQUENCE_DB_FILENAME = "db.sqlite3"
SCHEMA_VERSION_KEY = "schema version"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class FastaDir:
    """
    Read-only sequence store of a SeqRepo instance, usually ``<root>/<instance>/sequences``.

    Opening the store checks the schema version of its database, so a store that is newer or older
    than this package fails immediately rather than on some later query.
    """

    def __init__(self, root_dir: str):
        self.root_dir = str(root_dir)
        self.db_path = os.path.join(self.root_dir, SEQUENCE_DB_FILENAME)

        try:
            self._engine = readonly_engine(self.db_path)
        except SQLAlchemyError as exc:
            raise SequenceDbConnectError(f"Error on connecting to database {self.db_path}: {exc}") from exc

        self._session_factory = session_factory(self._engine)

        try:
            self._schema_version = self._fetch_schema_version()
        except SequenceDbConnectError:
            self._engine.dispose()
            raise

        if self._schema_version != EXPECTED_SCHEMA_VERSION:
            self._engine.dispose()
            raise SchemaVersionError(self._schema_version, EXPECTED_SCHEMA_VERSION)

    def __repr__(self) -> str:
        return f"FastaDir(root_dir={self.root_dir!r})"

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def __contains__(self, seq_id: str) -> bool:
        try:
            self.fetch_seqinfo(seq_id)
        except SequenceNotFoundError:
            return False
        return True

    @property
    def schema_version(self) -> int:
        return self._schema_version

    def clone(self) -> "FastaDir":
        """Open a new, independent connection to the same store."""
        return FastaDir(self.root_dir)

    def close(self) -> None:
        self._engine.dispose()

    def _fetch_schema_version(self) -> int:
        stmt = select(Meta.value).where(Meta.key == SCHEMA_VERSION_KEY)

        try:
            with self._session_factory() as session:
                value = session.scalars(stmt).first()
        except SQLAlchemyError as exc:
            raise SequenceDbConnectError(f"Error reading schema version from {self.db_path}: {exc}") from exc

        if value is None:
            raise SequenceDbConnectError(f"No schema version recorded in {self.db_path}")

        try:
            return int(value)
        except ValueError as exc:
            raise SequenceDbConnectError(f"Invalid schema version {value!r} in {self.db_path}") from exc

    def fetch_seqinfo(self, seq_id: str) -> SeqInfoRecord:
        """
        Load the sequence information for *seq_id*. If the sequence was imported more than once, the
        most recently added row is returned.

        Raises:
            SequenceNotFoundError: If the store has no record of *seq_id*.
            SequenceDbQueryError: If the query fails.
            SequenceDbRowError: If the stored timestamp cannot be parsed.
        """
        stmt = (
            select(SeqInfo.seq_id, SeqInfo.len, SeqInfo.alpha, SeqInfo.added, SeqInfo.relpath)
            .where(SeqInfo.seq_id == seq_id)
            .order_by(SeqInfo.added.desc())
            .limit(1)
        )

        try:
            with self._session_factory() as session:
                row = session.execute(stmt).first()
        except SQLAlchemyError as exc:
            raise SequenceDbQueryError(f"Error executing query: {exc}") from exc

        if row is None:
            raise SequenceNotFoundError(seq_id)

        try:
            added = datetime.strptime(row.added, TIMESTAMP_FORMAT)
        except (TypeError, ValueError) as exc:
            raise SequenceDbRowError(f"Error on row for {seq_id}: could not convert timestamp {row.added!r}") from exc

        return SeqInfoRecord(seq_id=row.seq_id, length=row.len, alphabet=row.alpha, added=added, relpath=row.relpath)

    def fetch(self, seq_id: str, begin: Optional[int] = None, end: Optional[int] = None) -> str:
        """
        Fetch the sequence *seq_id*, or the part of it in ``[begin, end)``.

        Args:
            seq_id (str): The sequence id.
            begin (Optional[int]): 0-based start of the range, inclusive. Defaults to the start of the sequence.
            end (Optional[int]): 0-based end of the range, exclusive. Defaults to the length of the sequence and
                is clamped to it.

        Returns:
            str: The requested sequence. Empty if the range is empty once ``end`` has been clamped.

        Raises:
            InvalidCoordinatesError: If *begin* or *end* is negative.
            SequenceNotFoundError: If the store has no record of *seq_id*.
            IndexedReaderError: If the FASTA container or one of its indices cannot be read.
        """
        if (begin is not None and begin < 0) or (end is not None and end < 0):
            raise InvalidCoordinatesError(f"Error converting position: negative range {begin}-{end}")

        seqinfo = self.fetch_seqinfo(seq_id)

        start = begin if begin is not None else 0
        stop = min(end, seqinfo.length) if end is not None else seqinfo.length
        if start >= stop:
            return ""

        path = os.path.join(self.root_dir, seqinfo.relpath)
        with IndexedFastaReader(path) as reader:
            return reader.query(seq_id, start + 1, stop)

    def fetch_full(self, seq_id: str) -> str:
        return self.fetch(seq_id)
