"""Pathogenicity evidence models."""

from genepriority.models.pathogenicity.clinvar import ClinSig, ClinVarData
from genepriority.models.pathogenicity.data import NON_PATHOGENIC_SCORE, PathogenicityData
from genepriority.models.pathogenicity.score import (
    PathogenicityScore,
    PathogenicitySource,
    most_pathogenic,
    pathogenicity_sort_key,
)

__all__ = [
    "ClinSig",
    "ClinVarData",
    "NON_PATHOGENIC_SCORE",
    "PathogenicityData",
    "PathogenicityScore",
    "PathogenicitySource",
    "most_pathogenic",
    "pathogenicity_sort_key",
]
