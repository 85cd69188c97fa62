from sqlalchemy import Column, String

from seqrepo_lite.db.base import Base


class Meta(Base):
    """Key/value pairs describing a SeqRepo database, most importantly its schema version."""

    __tablename__ = "meta"

    key = Column(String, primary_key=True)
    value = Column(String, nullable=False)
