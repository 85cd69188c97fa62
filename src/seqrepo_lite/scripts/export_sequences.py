import logging
from typing import Optional, TextIO

import click

from seqrepo_lite import logging as application_logging
from seqrepo_lite.lib.repository import SeqRepo
from seqrepo_lite.lib.seqrepo import stored_namespace
from seqrepo_lite.scripts.environment import with_seqrepo
from seqrepo_lite.view_models.alias import AliasRecord, NamespacedAlias, Query, SeqId

logger = logging.getLogger(__name__)

LINE_LENGTH = 100

# Digest namespaces live in the empty namespace, with the digest prefixed by "GS_".
DIGEST_NAMESPACES = ("sha512t24u", "ga4gh")
NAMESPACE_CHOICES = ("refseq", "ensembl", "lrg", *DIGEST_NAMESPACES)


def namespaced_alias(namespace: str, alias: str) -> NamespacedAlias:
    """
    Translate a namespace and alias as given on the command line into their stored form.

    >>> str(namespaced_alias("refseq", "NM_001304430.2"))
    'NCBI:NM_001304430.2'
    >>> str(namespaced_alias("ga4gh", "SQ.5q5HZTCRudL17NTiv5Bn6th__0FrZH04"))
    ':GS_5q5HZTCRudL17NTiv5Bn6th__0FrZH04'
    """
    if namespace == "sha512t24u":
        return NamespacedAlias(namespace="", alias=f"GS_{alias}")
    if namespace == "ga4gh":
        return NamespacedAlias(namespace="", alias=f"GS_{alias[3:]}")
    return NamespacedAlias(namespace=stored_namespace(namespace), alias=alias)


def write_group(sr: SeqRepo, group: list[AliasRecord], output: TextIO) -> None:
    """Write one FASTA record for a group of alias records sharing a sequence id."""
    seq = sr.fetch_full(SeqId(value=group[0].seq_id))
    names = [f"{record.namespace}:{record.alias}" for record in sorted(group, key=lambda r: r.namespace)]

    output.write(f">{' '.join(names)}\n")
    for i in range(0, len(seq), LINE_LENGTH):
        output.write(f"{seq[i : i + LINE_LENGTH]}\n")


def export(sr: SeqRepo, namespace: Optional[str], aliases: tuple[str, ...], output: TextIO) -> int:
    """
    Export the sequences of *aliases*, or of every current alias in *namespace*, as FASTA.

    Returns the number of sequences written.
    """
    if aliases:
        if namespace:
            stored = [namespaced_alias(namespace, alias) for alias in aliases]
            queries = [Query(namespace=nsa.namespace, alias=nsa.alias) for nsa in stored]
        else:
            queries = [Query(alias=alias) for alias in aliases]
    else:
        queries = [Query(namespace=namespaced_alias(namespace, "").namespace if namespace else None)]

    written = 0
    group: list[AliasRecord] = []
    for query in queries:
        for record in sr.alias_db.find(query):
            if group and group[0].seq_id != record.seq_id:
                write_group(sr, group, output)
                written += 1
                group = []
            group.append(record)

    if group:
        write_group(sr, group, output)
        written += 1

    return written


@click.command()
@with_seqrepo
@click.option(
    "--namespace", "-n", type=click.Choice(NAMESPACE_CHOICES, case_sensitive=False), help="Namespace of the aliases."
)
@click.option("--output", "-o", type=click.File("w"), default="-", help="File to write FASTA to. Defaults to stdout.")
@click.argument("aliases", nargs=-1)
def export_sequences(sr: SeqRepo, namespace: Optional[str], output: TextIO, aliases: tuple[str, ...]) -> None:
    """
    Export sequences with their matching current aliases as FASTA.

    Without ALIASES, every sequence with an alias in the selected namespace is exported.
    """
    written = export(sr, namespace.lower() if namespace else None, aliases, output)
    logger.info(f"Exported {written} sequences.")


def main():
    application_logging.configure()
    export_sequences()


if __name__ == "__main__":
    main()
