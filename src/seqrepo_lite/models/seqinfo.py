from sqlalchemy import Column, Integer, String

from seqrepo_lite.db.base import Base


class SeqInfo(Base):
    __tablename__ = "seqinfo"

    # A sequence may have been imported more than once; the newest row wins.
    seq_id = Column(String, primary_key=True)
    added = Column(String, primary_key=True)

    len = Column(Integer, nullable=False)
    alpha = Column(String, nullable=False)
    relpath = Column(String, nullable=False)
