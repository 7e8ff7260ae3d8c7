"""Phenotype overlap prioritisers.

Three ways of comparing the query phenotypes with a disease's annotated
phenotypes; a gene scores as its best-matching disease.

- Phenix:  information-content weighted coverage of the query
- Phive:   Jaccard overlap of the two term sets
- HiPhive: symmetric information-content weighted coverage (query and disease)
"""

import logging

from genepriority.constants import HIPHIVE_AVAILABLE_SOURCES, HIPHIVE_DATA_SOURCES
from genepriority.models.gene import PriorityType
from genepriority.prioritisers.base import Prioritiser, PrioritiserSettings
from genepriority.providers.disease import HpoAnnotationProvider

logger = logging.getLogger(__name__)


class PhenixPrioritiser(Prioritiser):
    """Σ IC(shared terms) / Σ IC(query terms)."""

    priority_type = PriorityType.PHENIX_PRIORITY

    def __init__(self, provider: HpoAnnotationProvider, settings: PrioritiserSettings) -> None:
        super().__init__(provider, settings)
        self._query_ic = self._information_content(self._query_set)

    def similarity(self, disease_terms: frozenset[str]) -> float:
        shared = self._query_set & disease_terms
        if not self._query_ic:
            return len(shared) / len(self._query_set)
        return self._information_content(shared) / self._query_ic


class PhivePrioritiser(Prioritiser):
    """|query ∩ disease| / |query ∪ disease|."""

    priority_type = PriorityType.PHIVE_PRIORITY

    def similarity(self, disease_terms: frozenset[str]) -> float:
        union = self._query_set | disease_terms
        return len(self._query_set & disease_terms) / len(union)


def parse_data_sources(prioritiser_params: str) -> set[str]:
    """HiPhive data sources from a comma-separated list, e.g. 'human,mouse,fish,ppi'.

    Unrecognised and unavailable sources are dropped with a warning. When
    nothing usable remains, the human disease annotations are used.
    """
    requested = {part.strip().lower() for part in prioritiser_params.split(",") if part.strip()}

    unknown = requested - HIPHIVE_DATA_SOURCES
    if unknown:
        logger.warning(f"Ignoring unrecognised HiPhive data sources: {', '.join(sorted(unknown))}")

    unavailable = (requested & HIPHIVE_DATA_SOURCES) - HIPHIVE_AVAILABLE_SOURCES
    if unavailable:
        logger.warning(f"No annotations loaded for HiPhive data sources: {', '.join(sorted(unavailable))}")

    sources = requested & HIPHIVE_AVAILABLE_SOURCES
    return sources or set(HIPHIVE_AVAILABLE_SOURCES)


class HiPhivePrioritiser(Prioritiser):
    """Mean of query coverage and disease coverage, both IC weighted."""

    priority_type = PriorityType.HIPHIVE_PRIORITY

    def __init__(self, provider: HpoAnnotationProvider, settings: PrioritiserSettings) -> None:
        super().__init__(provider, settings)
        self.data_sources = parse_data_sources(settings.prioritiser_params)
        self._query_ic = self._information_content(self._query_set)

    def similarity(self, disease_terms: frozenset[str]) -> float:
        shared = self._query_set & disease_terms
        if not shared:
            return 0.0

        shared_ic = self._information_content(shared)
        disease_ic = self._information_content(disease_terms)
        if not self._query_ic or not disease_ic:
            return (len(shared) / len(self._query_set) + len(shared) / len(disease_terms)) / 2

        return (shared_ic / self._query_ic + shared_ic / disease_ic) / 2
