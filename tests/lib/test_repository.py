import pytest

from seqrepo_lite.lib.exceptions import (
    AliasDbConnectError,
    AliasNotFoundError,
    AliasResolutionError,
    AmbiguousAliasError,
    SchemaVersionError,
    SequenceNotFoundError,
)
from seqrepo_lite.lib.logging.context import logging_scope
from seqrepo_lite.lib.repository import SeqRepo
from seqrepo_lite.view_models.alias import Alias, SeqId

from tests.helpers.constants import (
    TEST_ALIAS,
    TEST_AMBIGUOUS_ALIAS,
    TEST_DIGEST_ALIAS,
    TEST_HISTORICAL_ALIAS,
    TEST_NAMESPACE,
    TEST_OUTDATED_INSTANCE,
    TEST_SEQ_ID,
    TEST_SEQUENCE,
    TEST_SHORT_ALIAS,
    TEST_SHORT_SEQ_ID,
    TEST_SHORT_SEQUENCE,
)


def test_fetch_full_by_alias(seqrepo):
    assert seqrepo.fetch_full(Alias(value=TEST_ALIAS)) == TEST_SEQUENCE
    assert seqrepo.fetch(Alias(value=TEST_ALIAS)) == TEST_SEQUENCE


def test_fetch_prefix(seqrepo):
    assert seqrepo.fetch(Alias(value=TEST_ALIAS), None, 4) == "ACTG"


def test_fetch_suffix(seqrepo):
    assert seqrepo.fetch(Alias(value=TEST_ALIAS), 1869, None) == "TATA"


def test_fetch_by_namespaced_alias(seqrepo):
    assert seqrepo.fetch(Alias(value=TEST_ALIAS, namespace=TEST_NAMESPACE), 0, 10) == TEST_SEQUENCE[0:10]


def test_fetch_by_seq_id(seqrepo):
    assert seqrepo.fetch(SeqId(value=TEST_SEQ_ID), 100, 110) == "ATGTAGGTAA"


def test_alias_and_seq_id_agree(seqrepo):
    assert seqrepo.fetch(Alias(value=TEST_ALIAS), 500, 600) == seqrepo.fetch(SeqId(value=TEST_SEQ_ID), 500, 600)


def test_resolve(seqrepo):
    assert seqrepo.resolve(Alias(value=TEST_ALIAS)) == TEST_SEQ_ID
    assert seqrepo.resolve(Alias(value=TEST_DIGEST_ALIAS["alias"], namespace="")) == TEST_SEQ_ID


def test_resolve_seq_id_is_not_looked_up(seqrepo):
    assert seqrepo.resolve(SeqId(value="not-in-the-alias-db")) == "not-in-the-alias-db"


def test_fetch_unknown_seq_id(seqrepo):
    with pytest.raises(SequenceNotFoundError):
        seqrepo.fetch(SeqId(value="not-in-the-alias-db"))


def test_alias_not_found(seqrepo):
    with pytest.raises(AliasNotFoundError) as exc_info:
        seqrepo.fetch(Alias(value="NM_999999.9"))

    assert exc_info.value.alias == "NM_999999.9"
    assert str(exc_info.value) == "Could not resolve alias NM_999999.9 to seqid"


def test_alias_in_other_namespace_is_not_found(seqrepo):
    with pytest.raises(AliasNotFoundError):
        seqrepo.fetch(Alias(value=TEST_ALIAS, namespace="Ensembl"))


def test_historical_alias_is_not_resolved(seqrepo):
    with pytest.raises(AliasNotFoundError):
        seqrepo.fetch(Alias(value=TEST_HISTORICAL_ALIAS["alias"]))


def test_ambiguous_alias(ambiguous_seqrepo):
    with pytest.raises(AmbiguousAliasError) as exc_info:
        ambiguous_seqrepo.fetch(Alias(value=TEST_AMBIGUOUS_ALIAS))

    assert exc_info.value.alias == TEST_AMBIGUOUS_ALIAS
    assert exc_info.value.seq_ids == [TEST_SEQ_ID, TEST_SHORT_SEQ_ID]
    assert TEST_SEQ_ID in str(exc_info.value)
    assert TEST_SHORT_SEQ_ID in str(exc_info.value)
    assert isinstance(exc_info.value, AliasResolutionError)


def test_alias_in_several_namespaces_of_one_sequence_is_not_ambiguous(ambiguous_seqrepo):
    assert ambiguous_seqrepo.fetch(Alias(value=TEST_SHORT_ALIAS)) == TEST_SHORT_SEQUENCE


@pytest.mark.parametrize("namespace", ["NCBI", "Ensembl"])
def test_namespace_scoping(ambiguous_seqrepo, namespace):
    assert ambiguous_seqrepo.resolve(Alias(value=TEST_SHORT_ALIAS, namespace=namespace)) == TEST_SHORT_SEQ_ID


def test_ambiguous_sequence_by_seq_id(ambiguous_seqrepo):
    assert ambiguous_seqrepo.fetch(SeqId(value=TEST_SHORT_SEQ_ID), 0, 4) == TEST_SHORT_SEQUENCE[0:4]


def test_resolution_is_recorded_in_logging_context(seqrepo):
    with logging_scope() as ctx:
        seqrepo.resolve(Alias(value=TEST_ALIAS, namespace=TEST_NAMESPACE))

    assert ctx["requested_alias"] == TEST_ALIAS
    assert ctx["requested_namespace"] == TEST_NAMESPACE
    assert ctx["resolved_seq_ids"] == 1


def test_missing_instance(seqrepo_root):
    with pytest.raises(AliasDbConnectError):
        SeqRepo(str(seqrepo_root), "does-not-exist")


def test_outdated_instance(seqrepo_root):
    with pytest.raises(SchemaVersionError):
        SeqRepo(str(seqrepo_root), TEST_OUTDATED_INSTANCE)


def test_clone(seqrepo):
    with seqrepo.clone() as second:
        assert second is not seqrepo
        assert second.alias_db is not seqrepo.alias_db
        assert second.fetch(Alias(value=TEST_ALIAS), None, 4) == "ACTG"

    assert seqrepo.fetch(Alias(value=TEST_ALIAS), None, 4) == "ACTG"
