"""Disease and phenotype annotations for prioritisers.

ARCHITECTURE:
    phenotype.hpoa + genes_to_disease.txt → HpoAnnotationProvider → Disease records per gene

Supplies the phenotype terms of each disease and the diseases associated with
each gene. Prioritisers only read from it.

Key Design:
- Annotation files are parsed once, on first use, behind a lock
- Lookup failures never reach the caller: they are logged and surface as empty results
- Only disease types D, C, S and ? are returned for genes
- Term information content is computed from annotation frequency across diseases
"""

import csv
import logging
import math
import threading
from collections.abc import Iterable
from pathlib import Path
from typing import Protocol

from genepriority.api.hpo import HpoAnnotationClient, HpoAnnotationError
from genepriority.constants import (
    ACCEPTED_DISEASE_TYPES,
    ASSOCIATION_TYPE_CODES,
    HPO_INHERITANCE_TERMS,
    UNKNOWN_INHERITANCE_CODE,
)
from genepriority.models.disease import Disease

logger = logging.getLogger(__name__)


class ProviderUnavailableError(Exception):
    """Exception raised when disease annotations cannot be loaded."""

    pass


class DiseaseProvider(Protocol):
    """Read-only source of disease-phenotype and gene-disease associations."""

    def hpo_terms_for_disease(self, disease_id: str) -> frozenset[str]: ...

    def diseases_for_gene(self, gene_id: int) -> list[Disease]: ...


class _AnnotationIndex:
    """Parsed annotations, immutable once built."""

    def __init__(self, diseases: Iterable[Disease]):
        self.disease_terms: dict[str, frozenset[str]] = {}
        self.gene_diseases: dict[int, list[Disease]] = {}
        self.gene_symbols: dict[int, str] = {}

        for disease in diseases:
            terms = self.disease_terms.get(disease.disease_id, frozenset())
            self.disease_terms[disease.disease_id] = terms | frozenset(disease.phenotype_ids)
            if disease.associated_gene_id >= 0:
                self.gene_diseases.setdefault(disease.associated_gene_id, []).append(disease)
                if disease.associated_gene_symbol:
                    self.gene_symbols.setdefault(disease.associated_gene_id, disease.associated_gene_symbol)

        term_counts: dict[str, int] = {}
        for terms in self.disease_terms.values():
            for term in terms:
                term_counts[term] = term_counts.get(term, 0) + 1

        total = max(len(self.disease_terms), 1)
        self.information_content: dict[str, float] = {
            term: -math.log(count / total) for term, count in term_counts.items()
        }
        # Unseen terms are treated as if annotated to a single disease
        self.max_information_content = -math.log(1 / total) if total > 1 else 1.0


def _parse_gene_id(ncbi_gene_id: str) -> int | None:
    """'NCBIGene:2200' → 2200"""
    try:
        return int(ncbi_gene_id.split(":")[-1])
    except (ValueError, AttributeError):
        return None


def _merge_inheritance_codes(codes: list[str]) -> str:
    if not codes:
        return UNKNOWN_INHERITANCE_CODE
    if "D" in codes and "R" in codes:
        return "B"
    return codes[0]


def read_phenotype_annotations(path: Path) -> tuple[dict[str, str], dict[str, list[str]], dict[str, list[str]]]:
    """Parse phenotype.hpoa.

    Returns:
        (disease names, phenotype terms per disease, inheritance codes per disease)
    """
    names: dict[str, str] = {}
    phenotypes: dict[str, list[str]] = {}
    inheritance: dict[str, list[str]] = {}

    with open(path, "r", newline="", encoding="utf-8") as f:
        reader = csv.DictReader((line for line in f if not line.startswith("#")), delimiter="\t")
        for row in reader:
            disease_id = (row.get("database_id") or "").strip()
            hpo_id = (row.get("hpo_id") or "").strip()
            if not disease_id or not hpo_id:
                continue
            if (row.get("qualifier") or "").strip().upper() == "NOT":
                continue

            names.setdefault(disease_id, (row.get("disease_name") or "").strip())
            aspect = (row.get("aspect") or "").strip().upper()

            if aspect == "P":
                terms = phenotypes.setdefault(disease_id, [])
                if hpo_id not in terms:
                    terms.append(hpo_id)
            elif aspect == "I" and hpo_id in HPO_INHERITANCE_TERMS:
                codes = inheritance.setdefault(disease_id, [])
                code = HPO_INHERITANCE_TERMS[hpo_id]
                if code not in codes:
                    codes.append(code)

    return names, phenotypes, inheritance


def read_gene_disease_associations(
    path: Path,
    names: dict[str, str],
    phenotypes: dict[str, list[str]],
    inheritance: dict[str, list[str]],
) -> list[Disease]:
    """Parse genes_to_disease.txt into one Disease record per gene-disease pair."""
    diseases: list[Disease] = []
    seen: set[tuple[int, str]] = set()

    with open(path, "r", newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f, delimiter="\t")
        for row in reader:
            gene_id = _parse_gene_id(row.get("ncbi_gene_id") or "")
            disease_id = (row.get("disease_id") or "").strip()
            if gene_id is None or not disease_id:
                logger.debug(f"Skipping gene-disease row without ids: {row}")
                continue
            if (gene_id, disease_id) in seen:
                continue
            seen.add((gene_id, disease_id))

            association_type = (row.get("association_type") or "").strip().upper()
            diseases.append(
                Disease(
                    disease_id=disease_id,
                    disease_name=names.get(disease_id, ""),
                    associated_gene_id=gene_id,
                    associated_gene_symbol=(row.get("gene_symbol") or "").strip(),
                    inheritance_mode_code=_merge_inheritance_codes(inheritance.get(disease_id, [])),
                    disease_type_code=ASSOCIATION_TYPE_CODES.get(association_type, "?"),
                    phenotype_ids=tuple(phenotypes.get(disease_id, [])),
                )
            )

    # Diseases without a known gene still contribute phenotype terms and term frequencies
    associated = {disease_id for _, disease_id in seen}
    for disease_id, terms in phenotypes.items():
        if disease_id not in associated:
            diseases.append(
                Disease(
                    disease_id=disease_id,
                    disease_name=names.get(disease_id, ""),
                    inheritance_mode_code=_merge_inheritance_codes(inheritance.get(disease_id, [])),
                    phenotype_ids=tuple(terms),
                )
            )

    return diseases


class HpoAnnotationProvider:
    """Disease provider backed by the HPO annotation files.

    Can be built from local files, from an HpoAnnotationClient that fetches
    them, or directly from Disease records.
    """

    def __init__(
        self,
        hpoa_path: str | Path | None = None,
        genes_to_disease_path: str | Path | None = None,
        client: HpoAnnotationClient | None = None,
        diseases: Iterable[Disease] | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            hpoa_path: Local phenotype.hpoa file
            genes_to_disease_path: Local genes_to_disease.txt file
            client: Client used to fetch whichever files are not given locally
            diseases: Pre-built disease records; files are ignored when given
        """
        self.hpoa_path = Path(hpoa_path) if hpoa_path else None
        self.genes_to_disease_path = Path(genes_to_disease_path) if genes_to_disease_path else None
        self.client = client
        self._lock = threading.Lock()
        self._index: _AnnotationIndex | None = _AnnotationIndex(diseases) if diseases is not None else None
        self._load_error: ProviderUnavailableError | None = None

    def _resolve_paths(self) -> tuple[Path, Path]:
        hpoa_path, genes_to_disease_path = self.hpoa_path, self.genes_to_disease_path
        if hpoa_path is None or genes_to_disease_path is None:
            if self.client is None:
                raise ProviderUnavailableError("No annotation files configured and no client to fetch them")
            fetched_hpoa, fetched_genes = self.client.fetch_annotation_files()
            hpoa_path = hpoa_path or fetched_hpoa
            genes_to_disease_path = genes_to_disease_path or fetched_genes
        return hpoa_path, genes_to_disease_path

    def _load_index(self) -> _AnnotationIndex:
        try:
            hpoa_path, genes_to_disease_path = self._resolve_paths()
            names, phenotypes, inheritance = read_phenotype_annotations(hpoa_path)
            diseases = read_gene_disease_associations(genes_to_disease_path, names, phenotypes, inheritance)
        except (OSError, csv.Error, ValueError, HpoAnnotationError) as e:
            raise ProviderUnavailableError(f"Unable to load disease annotations: {e}") from e

        index = _AnnotationIndex(diseases)
        logger.info(
            f"Loaded {len(index.disease_terms)} diseases and {len(index.gene_diseases)} genes from {hpoa_path.name}"
        )
        return index

    def _get_index(self) -> _AnnotationIndex:
        """Get the annotation index, loading it on first use.

        A failed load is attempted once; later calls re-raise the same error.
        """
        if self._index is None:
            with self._lock:
                if self._index is None:
                    if self._load_error is not None:
                        raise self._load_error
                    try:
                        self._index = self._load_index()
                    except ProviderUnavailableError as e:
                        self._load_error = e
                        raise
        return self._index

    def load(self) -> "HpoAnnotationProvider":
        """Load annotations eagerly.

        Raises:
            ProviderUnavailableError: If the annotations cannot be loaded
        """
        self._get_index()
        return self

    def hpo_terms_for_disease(self, disease_id: str) -> frozenset[str]:
        """Phenotype terms annotated to a disease, empty if unknown or unavailable."""
        try:
            terms = self._get_index().disease_terms.get(disease_id, frozenset())
        except ProviderUnavailableError as e:
            logger.error(f"Unable to retrieve HPO terms for disease {disease_id}: {e}")
            return frozenset()
        logger.debug(f"{len(terms)} HPO ids retrieved for disease {disease_id}")
        return terms

    def diseases_for_gene(self, gene_id: int) -> list[Disease]:
        """Diseases associated with a gene, in annotation order."""
        try:
            diseases = self._get_index().gene_diseases.get(gene_id, [])
        except ProviderUnavailableError as e:
            logger.error(f"Unable to retrieve diseases for geneId: '{gene_id}': {e}")
            return []
        return [disease for disease in diseases if disease.disease_type_code in ACCEPTED_DISEASE_TYPES]

    def term_information_content(self, term: str) -> float:
        """-log(fraction of diseases annotated with the term); 0.0 if annotations are unavailable."""
        try:
            index = self._get_index()
        except ProviderUnavailableError as e:
            logger.error(f"Unable to compute information content for {term}: {e}")
            return 0.0
        return index.information_content.get(term, index.max_information_content)

    def known_genes(self) -> dict[str, str]:
        """Gene id (as string) to symbol for every gene with a disease association."""
        try:
            index = self._get_index()
        except ProviderUnavailableError as e:
            logger.error(f"Unable to list known genes: {e}")
            return {}
        return {str(gene_id): symbol for gene_id, symbol in index.gene_symbols.items()}
