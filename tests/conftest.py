import pytest

from seqrepo_lite.lib.aliases import AliasDb
from seqrepo_lite.lib.fastadir import FastaDir
from seqrepo_lite.lib.repository import SeqRepo

from tests.helpers.constants import (
    TEST_AMBIGUOUS_ALIASES,
    TEST_AMBIGUOUS_INSTANCE,
    TEST_AMBIGUOUS_SEQINFO,
    TEST_OUTDATED_INSTANCE,
    TEST_OUTDATED_SCHEMA_VERSION,
    TEST_SEQ_ID,
    TEST_SEQ_RELPATH,
    TEST_SEQINFO,
    TEST_SEQREPO_ALIASES,
    TEST_SEQREPO_INSTANCE,
    TEST_SEQUENCE,
    TEST_SHARED_RELPATH,
    TEST_SHORT_SEQ_ID,
    TEST_SHORT_SEQUENCE,
)
from tests.helpers.util.repository import create_seqrepo


@pytest.fixture(scope="session")
def seqrepo_root(tmp_path_factory):
    """
    A SeqRepo root directory holding three instances:

    * ``latest``: one transcript with its usual aliases.
    * ``ambiguous``: an alias assigned to two sequences, a row with a bad timestamp and a sequence imported twice.
    * ``outdated``: a sequence store with an unsupported schema version.
    """
    root = tmp_path_factory.mktemp("seqrepo")

    create_seqrepo(
        str(root),
        TEST_SEQREPO_INSTANCE,
        aliases=TEST_SEQREPO_ALIASES,
        seqinfos=[TEST_SEQINFO],
        files={TEST_SEQ_RELPATH: {TEST_SEQ_ID: TEST_SEQUENCE}},
    )
    create_seqrepo(
        str(root),
        TEST_AMBIGUOUS_INSTANCE,
        aliases=TEST_AMBIGUOUS_ALIASES,
        seqinfos=TEST_AMBIGUOUS_SEQINFO,
        files={TEST_SHARED_RELPATH: {TEST_SEQ_ID: TEST_SEQUENCE, TEST_SHORT_SEQ_ID: TEST_SHORT_SEQUENCE}},
    )
    create_seqrepo(
        str(root),
        TEST_OUTDATED_INSTANCE,
        aliases=[],
        seqinfos=[TEST_SEQINFO],
        files={},
        schema_version=TEST_OUTDATED_SCHEMA_VERSION,
    )

    return root


@pytest.fixture
def seqrepo(seqrepo_root):
    sr = SeqRepo(str(seqrepo_root), TEST_SEQREPO_INSTANCE)
    try:
        yield sr
    finally:
        sr.close()


@pytest.fixture
def ambiguous_seqrepo(seqrepo_root):
    sr = SeqRepo(str(seqrepo_root), TEST_AMBIGUOUS_INSTANCE)
    try:
        yield sr
    finally:
        sr.close()


@pytest.fixture
def alias_db(seqrepo_root):
    with AliasDb(str(seqrepo_root), TEST_SEQREPO_INSTANCE) as db:
        yield db


@pytest.fixture
def fasta_dir(seqrepo_root):
    with FastaDir(str(seqrepo_root / TEST_SEQREPO_INSTANCE / "sequences")) as fd:
        yield fd
