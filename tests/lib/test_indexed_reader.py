import os

import pytest

from seqrepo_lite.lib.exceptions import (
    BgzfOpenError,
    FaiOpenError,
    FaiQueryError,
    GziOpenError,
    IndexedReaderError,
)
from seqrepo_lite.lib.indexed_reader import IndexedFastaReader

from tests.helpers.constants import TEST_SEQ_ID, TEST_SEQUENCE, TEST_SHORT_SEQ_ID, TEST_SHORT_SEQUENCE
from tests.helpers.util.repository import write_bgzf_fasta


@pytest.fixture
def container(tmp_path):
    path = str(tmp_path / "sequences.fa.bgz")
    write_bgzf_fasta(path, {TEST_SEQ_ID: TEST_SEQUENCE, TEST_SHORT_SEQ_ID: TEST_SHORT_SEQUENCE})
    return path


def test_indices_are_written(container):
    assert os.path.isfile(f"{container}.fai")
    assert os.path.isfile(f"{container}.gzi")


def test_query_uses_inclusive_one_based_coordinates(container):
    with IndexedFastaReader(container) as reader:
        assert reader.query(TEST_SEQ_ID, 1, 10) == TEST_SEQUENCE[0:10]
        assert reader.query(TEST_SEQ_ID, 101, 110) == TEST_SEQUENCE[100:110]
        assert reader.query(TEST_SEQ_ID, 1, len(TEST_SEQUENCE)) == TEST_SEQUENCE


def test_query_second_record(container):
    with IndexedFastaReader(container) as reader:
        assert reader.query(TEST_SHORT_SEQ_ID, 1, len(TEST_SHORT_SEQUENCE)) == TEST_SHORT_SEQUENCE


def test_query_unknown_record(container):
    with IndexedFastaReader(container) as reader:
        with pytest.raises(FaiQueryError):
            reader.query("unknown", 1, 10)


@pytest.mark.parametrize(
    "suffix,error",
    [(".fai", FaiOpenError), (".gzi", GziOpenError), ("", BgzfOpenError)],
)
def test_missing_files(container, suffix, error):
    os.remove(f"{container}{suffix}")

    with pytest.raises(error):
        IndexedFastaReader(container)


def test_missing_index_reported_before_missing_container(container):
    os.remove(container)
    os.remove(f"{container}.fai")

    with pytest.raises(FaiOpenError):
        IndexedFastaReader(container)


def test_open_errors_share_a_base_class():
    for error in (FaiOpenError, GziOpenError, BgzfOpenError, FaiQueryError):
        assert issubclass(error, IndexedReaderError)
