"""Data models for genepriority."""

from genepriority.models.acmg import (
    AcmgClassification,
    AcmgCriterion,
    AcmgEvidence,
    AcmgImpact,
    ModeratedAcmgCriterion,
    UnknownCriterionError,
)
from genepriority.models.disease import Disease, InheritanceMode
from genepriority.models.gene import Gene, PriorityResult, PriorityType
from genepriority.models.pathogenicity import (
    ClinSig,
    ClinVarData,
    PathogenicityData,
    PathogenicityScore,
    PathogenicitySource,
)
from genepriority.models.ranking import RankingRequest, RankingResultSet
from genepriority.models.validation import BenchmarkCase, BenchmarkMetrics, BenchmarkResult

__all__ = [
    "AcmgClassification",
    "AcmgCriterion",
    "AcmgEvidence",
    "AcmgImpact",
    "ModeratedAcmgCriterion",
    "UnknownCriterionError",
    "Disease",
    "InheritanceMode",
    "Gene",
    "PriorityResult",
    "PriorityType",
    "ClinSig",
    "ClinVarData",
    "PathogenicityData",
    "PathogenicityScore",
    "PathogenicitySource",
    "RankingRequest",
    "RankingResultSet",
    "BenchmarkCase",
    "BenchmarkMetrics",
    "BenchmarkResult",
]
