__all__ = [
    "meta",
    "seqalias",
    "seqinfo",
]
