"""Disease, phenotype and gene identifier providers."""

from genepriority.providers.disease import (
    DiseaseProvider,
    HpoAnnotationProvider,
    ProviderUnavailableError,
)
from genepriority.providers.genes import GeneIdentifiers

__all__ = [
    "DiseaseProvider",
    "HpoAnnotationProvider",
    "ProviderUnavailableError",
    "GeneIdentifiers",
]
