from datetime import datetime

from seqrepo_lite.view_models.base.base import BaseModel


class SeqInfoRecord(BaseModel):
    """Sequence information as stored in the sequence database of a repository instance."""

    seq_id: str
    length: int
    alphabet: str
    added: datetime
    relpath: str
