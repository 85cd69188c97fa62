from datetime import datetime
from typing import List

from pydantic import Field

from seqrepo_lite.view_models.base.base import BaseModel


class SeqRepoMetadata(BaseModel):
    """Description of one stored sequence, as returned by ``seqrepo_lite.lib.seqrepo.sequence_metadata``."""

    seq_id: str = Field(..., description="Sequence id the query resolved to")
    added: datetime = Field(..., description="Date the sequence was most recently added to the repository")
    aliases: List[str] = Field(..., description="Current aliases of the sequence, formatted as 'namespace:alias'")
    alphabet: str = Field(..., description="Alphabet of the sequence (e.g., 'ACGT')")
    length: int = Field(..., description="Length of the sequence")


class SeqRepoVersions(BaseModel):
    seqrepo_dependency_version: str = Field(..., description="Version of the seqrepo-lite package")
    seqrepo_data_version: str = Field(..., description="Name of the repository instance, e.g. '2024-12-20'")
