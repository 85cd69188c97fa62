from datetime import datetime
from typing import Optional, Union

from pydantic import Field

from seqrepo_lite.view_models.base.base import BaseModel


class AliasRecord(BaseModel):
    """A row of the alias database."""

    seqalias_id: int
    seq_id: str
    alias: str
    added: datetime
    is_current: bool
    namespace: str


class Query(BaseModel):
    """
    Filter over the alias database.

    A value containing ``%`` is matched with ``LIKE``, any other value must match exactly. A value of
    ``None`` leaves that column unconstrained.
    """

    namespace: Optional[str] = None
    alias: Optional[str] = None
    seq_id: Optional[str] = None
    current_only: bool = True


class NamespacedAlias(BaseModel):
    namespace: str
    alias: str

    def __str__(self) -> str:
        return f"{self.namespace}:{self.alias}"


class Alias(BaseModel):
    """An alias to resolve, optionally restricted to a single namespace."""

    value: str
    namespace: Optional[str] = None


class SeqId(BaseModel):
    """A sequence id that is used as is."""

    value: str = Field(..., description="Sequence id, e.g. a truncated SHA-512 digest")


AliasOrSeqId = Union[Alias, SeqId]
