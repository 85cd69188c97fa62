from pydantic import BaseModel as PydanticBaseModel
from pydantic import ConfigDict


class BaseModel(PydanticBaseModel):
    """
    Immutable base for every record handed out by this package.

    Records are read from read-only stores and are never mutated, so instances are frozen and
    therefore hashable. Empty strings are kept as they are: the empty namespace is a namespace of
    its own.
    """

    model_config = ConfigDict(frozen=True)
