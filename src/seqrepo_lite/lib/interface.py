from typing import Optional, Protocol

from seqrepo_lite.view_models.alias import AliasOrSeqId


class SeqRepoInterface(Protocol):
    """
    Retrieval contract shared by the repository and its caches.

    Code that only needs sequences should accept a ``SeqRepoInterface`` so that a live repository,
    a cache in front of one or a cache replaying captured responses can be passed in.
    """

    def fetch(self, alias_or_seq_id: AliasOrSeqId, begin: Optional[int] = None, end: Optional[int] = None) -> str:
        """Fetch the part ``[begin, end)`` of a sequence."""
        ...

    def fetch_full(self, alias_or_seq_id: AliasOrSeqId) -> str:
        """Fetch a complete sequence."""
        ...
