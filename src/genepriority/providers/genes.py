"""Known gene identifiers.

Maps gene ids to symbols for the whole gene universe. Built once at startup
and only read afterwards.
"""

import csv
import logging
from collections.abc import Iterator, Mapping
from pathlib import Path

from genepriority.constants import UNKNOWN_ENTREZ_ID, UNKNOWN_GENE_PREFIX
from genepriority.models.gene import Gene

logger = logging.getLogger(__name__)


class GeneIdentifiers(Mapping[str, str]):
    """Gene id (string) to gene symbol.

    Some annotation sources have no numeric id for a gene and repeat the
    symbol as its id; those genes get entrez id -1.
    """

    def __init__(self, identifiers: Mapping[str, str] | None = None) -> None:
        self._identifiers: dict[str, str] = dict(identifiers or {})

    @classmethod
    def from_tsv(cls, path: str | Path) -> "GeneIdentifiers":
        """Load a two-column (gene id, symbol) TSV file. Lines starting with '#' are skipped.

        Raises:
            FileNotFoundError: If file does not exist
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Gene identifier file not found: {path}")

        identifiers: dict[str, str] = {}
        with open(path, "r", newline="", encoding="utf-8") as f:
            for row in csv.reader((line for line in f if not line.startswith("#")), delimiter="\t"):
                if len(row) < 2 or not row[0].strip() or not row[1].strip():
                    continue
                identifiers[row[0].strip()] = row[1].strip()

        logger.info(f"Created GeneIdentifier cache with {len(identifiers)} entries from {path}")
        return cls(identifiers)

    @classmethod
    def from_provider(cls, provider) -> "GeneIdentifiers":
        """Use the genes known to a disease provider (anything with a known_genes() method)."""
        identifiers = cls(provider.known_genes())
        logger.info(f"Created GeneIdentifier cache with {len(identifiers)} entries")
        return identifiers

    def __getitem__(self, gene_id: str) -> str:
        return self._identifiers[gene_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._identifiers)

    def __len__(self) -> int:
        return len(self._identifiers)

    def symbol_for(self, gene_id: int) -> str:
        """Symbol of a gene id, or a placeholder built from the id when it is unknown."""
        return self._identifiers.get(str(gene_id), f"{UNKNOWN_GENE_PREFIX}{gene_id}")

    def create_genes(self, gene_ids: list[int] | None = None) -> list[Gene]:
        """New Gene objects for the given ids, or for every known gene when no ids are given.

        Genes are mutable, so fresh objects are created for every call.
        """
        if not gene_ids:
            return [self._known_gene(gene_id, symbol) for gene_id, symbol in self._identifiers.items()]
        return [Gene(symbol=self.symbol_for(gene_id), entrez_id=gene_id) for gene_id in gene_ids]

    @staticmethod
    def _known_gene(gene_id: str, symbol: str) -> Gene:
        if gene_id == symbol:
            return Gene(symbol=symbol, entrez_id=UNKNOWN_ENTREZ_ID)
        try:
            return Gene(symbol=symbol, entrez_id=int(gene_id))
        except ValueError:
            return Gene(symbol=symbol, entrez_id=UNKNOWN_ENTREZ_ID)
