import logging
import os
from typing import Optional

from seqrepo_lite.lib.aliases import AliasDb
from seqrepo_lite.lib.exceptions import AliasNotFoundError, AmbiguousAliasError
from seqrepo_lite.lib.fastadir import FastaDir
from seqrepo_lite.lib.logging.context import logging_context, save_to_logging_context
from seqrepo_lite.view_models.alias import Alias, AliasOrSeqId, Query, SeqId

logger = logging.getLogger(__name__)

DEFAULT_INSTANCE = "latest"
SEQUENCES_DIRNAME = "sequences"


class SeqRepo:
    """
    Provide read-only access to a SeqRepo sequence repository.

    The repository lives in ``<root_dir>/<instance>``, holding the alias database and a ``sequences``
    directory with the sequence store. Aliases are resolved to exactly one sequence id before the
    sequence is read.
    """

    def __init__(self, root_dir: str, instance: str = DEFAULT_INSTANCE):
        self.root_dir = str(root_dir)
        self.instance = instance

        self.alias_db = AliasDb(self.root_dir, self.instance)
        try:
            self.fasta_dir = FastaDir(os.path.join(self.root_dir, self.instance, SEQUENCES_DIRNAME))
        except Exception:
            self.alias_db.close()
            raise

    def __repr__(self) -> str:
        return f"SeqRepo(root_dir={self.root_dir!r}, instance={self.instance!r})"

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def clone(self) -> "SeqRepo":
        """Open an independent repository on the same directory, e.g. for use from another thread."""
        return SeqRepo(self.root_dir, self.instance)

    def close(self) -> None:
        self.alias_db.close()
        self.fasta_dir.close()

    def resolve(self, alias_or_seq_id: AliasOrSeqId) -> str:
        """
        Resolve *alias_or_seq_id* to a sequence id.

        Only current aliases are considered. A :py:class:`SeqId` is returned as is.

        Raises:
            AliasNotFoundError: If the alias matches no sequence.
            AmbiguousAliasError: If the alias matches more than one sequence.
        """
        if isinstance(alias_or_seq_id, SeqId):
            return alias_or_seq_id.value

        alias: Alias = alias_or_seq_id
        save_to_logging_context({"requested_alias": alias.value, "requested_namespace": alias.namespace})

        seq_ids: list[str] = []
        for record in self.alias_db.find(Query(namespace=alias.namespace, alias=alias.value, current_only=True)):
            if record.seq_id not in seq_ids:
                seq_ids.append(record.seq_id)

        save_to_logging_context({"resolved_seq_ids": len(seq_ids)})
        if not seq_ids:
            logger.error(msg=f"Could not resolve alias {alias.value}", extra=logging_context())
            raise AliasNotFoundError(alias.value)
        if len(seq_ids) > 1:
            logger.error(msg=f"Alias {alias.value} resolved to multiple sequences", extra=logging_context())
            raise AmbiguousAliasError(alias.value, seq_ids)

        return seq_ids[0]

    def fetch(self, alias_or_seq_id: AliasOrSeqId, begin: Optional[int] = None, end: Optional[int] = None) -> str:
        return self.fasta_dir.fetch(self.resolve(alias_or_seq_id), begin, end)

    def fetch_full(self, alias_or_seq_id: AliasOrSeqId) -> str:
        return self.fetch(alias_or_seq_id)
