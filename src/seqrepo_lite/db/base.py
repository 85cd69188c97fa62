from typing import Dict

from sqlalchemy import inspect
from sqlalchemy.orm import as_declarative

class_registry: Dict = {}


@as_declarative(class_registry=class_registry)
class Base:
    """
    Declarative base for the tables of a SeqRepo instance.

    Models name their tables explicitly, since the schema is fixed by the repositories being read.
    """

    __name__: str

    def __repr__(self) -> str:
        columns = inspect(self).mapper.primary_key
        primary_key = ", ".join(f"{column.key}={getattr(self, column.key)!r}" for column in columns)
        return f"{self.__class__.__name__}({primary_key})"
