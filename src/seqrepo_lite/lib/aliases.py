"""
Read-only access to the alias database of a SeqRepo instance.

The alias database maps ``(namespace, alias)`` pairs onto sequence ids. A pair may have been
assigned to several sequences over time; only the newest assignment is flagged as current.
"""

import logging
import os
from datetime import datetime
from typing import Any, Callable, Iterator, Optional

from sqlalchemy import Select, select
from sqlalchemy.exc import SQLAlchemyError

from seqrepo_lite.db.session import readonly_engine, session_factory
from seqrepo_lite.lib.exceptions import AliasDbConnectError, AliasDbQueryError, AliasDbRowError
from seqrepo_lite.models.seqalias import SeqAlias
from seqrepo_lite.view_models.alias import AliasRecord, Query

logger = logging.getLogger(__name__)

ALIAS_DB_FILENAME = "aliases.sqlite3"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
WILDCARD = "%"

RowErrorHandler = Callable[[AliasDbRowError], Any]


def _eq_or_like(column, value: str):
    if WILDCARD in value:
        return column.like(value)
    return column == value


def build_find_statement(query: Query) -> Select:
    """
    Build the statement run by :py:meth:`AliasDb.find`.

    Values are always bound as parameters. Results are ordered by ``(seq_id, namespace, alias)``
    regardless of the filters given.
    """
    stmt = select(
        SeqAlias.seqalias_id,
        SeqAlias.seq_id,
        SeqAlias.alias,
        SeqAlias.added,
        SeqAlias.is_current,
        SeqAlias.namespace,
    )

    if query.namespace is not None:
        stmt = stmt.where(_eq_or_like(SeqAlias.namespace, query.namespace))
    if query.alias is not None:
        stmt = stmt.where(_eq_or_like(SeqAlias.alias, query.alias))
    if query.seq_id is not None:
        stmt = stmt.where(_eq_or_like(SeqAlias.seq_id, query.seq_id))
    if query.current_only:
        stmt = stmt.where(SeqAlias.is_current.is_(True))

    return stmt.order_by(SeqAlias.seq_id, SeqAlias.namespace, SeqAlias.alias)


def parse_alias_row(row) -> AliasRecord:
    """
    Convert a result row into an :py:class:`AliasRecord`.

    Raises:
        AliasDbRowError: If the ``added`` timestamp is not in ``YYYY-MM-DD HH:MM:SS`` format.
    """
    try:
        added = datetime.strptime(row.added, TIMESTAMP_FORMAT)
    except (TypeError, ValueError) as exc:
        raise AliasDbRowError(
            f"Error on row {row.seqalias_id}: could not convert timestamp {row.added!r}", row.seqalias_id
        ) from exc

    return AliasRecord(
        seqalias_id=row.seqalias_id,
        seq_id=row.seq_id,
        alias=row.alias,
        added=added,
        is_current=bool(row.is_current),
        namespace=row.namespace,
    )


class AliasDb:
    """
    Provides access to the aliases database of a SeqRepo instance.

    Instances own their database engine. Use :py:meth:`clone` to give another thread its own
    handle instead of sharing one.
    """

    def __init__(self, sr_root_dir: str, sr_instance: str):
        self.sr_root_dir = str(sr_root_dir)
        self.sr_instance = sr_instance
        self.db_path = os.path.join(self.sr_root_dir, self.sr_instance, ALIAS_DB_FILENAME)

        try:
            self._engine = readonly_engine(self.db_path)
        except SQLAlchemyError as exc:
            raise AliasDbConnectError(f"Error on connecting to database {self.db_path}: {exc}") from exc

        self._session_factory = session_factory(self._engine)

    def __repr__(self) -> str:
        return f"AliasDb(sr_root_dir={self.sr_root_dir!r}, sr_instance={self.sr_instance!r})"

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def clone(self) -> "AliasDb":
        """Open a new, independent connection to the same database."""
        return AliasDb(self.sr_root_dir, self.sr_instance)

    def close(self) -> None:
        self._engine.dispose()

    def find(self, query: Query, on_error: Optional[RowErrorHandler] = None) -> Iterator[AliasRecord]:
        """
        Lazily yield alias records matching *query*.

        Args:
            query (Query): The filters to apply.
            on_error (Optional[Callable[[AliasDbRowError], Any]]): Called with the error for every row
                that cannot be converted into a record. Iteration continues with the next row once it
                returns. If omitted, the first such error is raised.

        Yields:
            AliasRecord: Matching records ordered by ``(seq_id, namespace, alias)``.

        Raises:
            AliasDbQueryError: If the query cannot be executed.
            AliasDbRowError: For an unparsable row when no *on_error* callback was given.
        """
        stmt = build_find_statement(query)
        logger.debug(msg=f"Executing: {stmt} with params {stmt.compile().params}")

        with self._session_factory() as session:
            try:
                result = session.execute(stmt)
            except SQLAlchemyError as exc:
                raise AliasDbQueryError(f"Error executing query: {exc}") from exc

            for row in result:
                try:
                    record = parse_alias_row(row)
                except AliasDbRowError as exc:
                    logger.warning(msg=str(exc))
                    if on_error is None:
                        raise
                    on_error(exc)
                    continue

                yield record

    def find_aliases(
        self,
        namespace: Optional[str] = None,
        alias: Optional[str] = None,
        seq_id: Optional[str] = None,
        current_only: bool = True,
        on_error: Optional[RowErrorHandler] = None,
    ) -> Iterator[AliasRecord]:
        return self.find(
            Query(namespace=namespace, alias=alias, seq_id=seq_id, current_only=current_only), on_error=on_error
        )
