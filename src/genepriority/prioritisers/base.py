"""Prioritiser interface and settings."""

import logging
from abc import ABC, abstractmethod

from pydantic import BaseModel, ConfigDict, Field

from genepriority.models.disease import Disease
from genepriority.models.gene import Gene, PriorityResult, PriorityType
from genepriority.providers.disease import HpoAnnotationProvider

logger = logging.getLogger(__name__)


class PrioritiserSettings(BaseModel):
    """Query phenotypes and raw parameters for one prioritiser run.

    The parameter string is free text; each prioritiser parses its own.
    """

    model_config = ConfigDict(frozen=True)

    hpo_ids: tuple[str, ...] = Field(default_factory=tuple)
    prioritiser_params: str = ""


class Prioritiser(ABC):
    """Scores genes by how well their diseases match the query phenotypes.

    score_gene() reads shared annotations only and returns a new result, so
    genes can be scored from several threads at once.
    """

    priority_type: PriorityType

    def __init__(self, provider: HpoAnnotationProvider, settings: PrioritiserSettings) -> None:
        self.provider = provider
        self.settings = settings
        self.query_terms: tuple[str, ...] = settings.hpo_ids
        self._query_set = frozenset(self.query_terms)

    @abstractmethod
    def similarity(self, disease_terms: frozenset[str]) -> float:
        """Similarity in [0, 1] between the query and one disease's phenotypes."""

    def score_gene(self, gene: Gene) -> PriorityResult:
        best_score = 0.0
        best_disease: Disease | None = None
        best_terms: frozenset[str] = frozenset()

        if self._query_set:
            for disease in self.provider.diseases_for_gene(gene.entrez_id):
                terms = self.provider.hpo_terms_for_disease(disease.disease_id) or frozenset(disease.phenotype_ids)
                if not terms:
                    continue
                score = self.similarity(terms)
                if score > best_score:
                    best_score, best_disease, best_terms = score, disease, terms

        if best_disease is None:
            return PriorityResult(
                gene_id=gene.entrez_id,
                gene_symbol=gene.symbol,
                score=0.0,
                priority_type=self.priority_type,
            )

        return PriorityResult(
            gene_id=gene.entrez_id,
            gene_symbol=gene.symbol,
            score=min(best_score, 1.0),
            priority_type=self.priority_type,
            disease_id=best_disease.disease_id,
            disease_name=best_disease.disease_name,
            matched_phenotypes=tuple(term for term in self.query_terms if term in best_terms),
        )

    def prioritize_genes(self, genes: list[Gene]) -> None:
        """Score genes one after another and attach the results to them."""
        for gene in genes:
            gene.add_priority_result(self.score_gene(gene))

    def _information_content(self, terms) -> float:
        return sum(self.provider.term_information_content(term) for term in terms)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(terms={len(self.query_terms)}, params={self.settings.prioritiser_params!r})"
