from sqlalchemy import Boolean, Column, Integer, String

from seqrepo_lite.db.base import Base


class SeqAlias(Base):
    __tablename__ = "seqalias"

    seqalias_id = Column(Integer, primary_key=True)
    seq_id = Column(String, index=True, nullable=False)
    namespace = Column(String, index=True, nullable=False)
    alias = Column(String, index=True, nullable=False)
    # Stored as "YYYY-MM-DD HH:MM:SS" text and parsed per row, see lib.aliases.
    added = Column(String, nullable=False)
    is_current = Column(Boolean, nullable=False, default=True)
