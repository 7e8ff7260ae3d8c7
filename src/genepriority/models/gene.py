"""Gene and priority result models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from genepriority.constants import UNKNOWN_ENTREZ_ID


class PriorityType(str, Enum):
    """Phenotype-driven gene scoring strategies."""

    HIPHIVE_PRIORITY = "HIPHIVE_PRIORITY"
    PHIVE_PRIORITY = "PHIVE_PRIORITY"
    PHENIX_PRIORITY = "PHENIX_PRIORITY"


class PriorityResult(BaseModel):
    """Score assigned to one gene by one prioritiser.

    Results sort highest score first. The supporting detail names the
    best-matching disease and the query phenotypes it shares.
    """

    model_config = ConfigDict(frozen=True)

    gene_id: int
    gene_symbol: str
    score: float = Field(..., ge=0.0, le=1.0)
    priority_type: PriorityType
    disease_id: str | None = None
    disease_name: str | None = None
    matched_phenotypes: tuple[str, ...] = ()

    def sort_key(self) -> float:
        return -self.score


class Gene(BaseModel):
    """A gene being ranked.

    Priority results are attached per ranking call; genes are rebuilt for
    every request rather than cached.
    """

    symbol: str
    entrez_id: int = UNKNOWN_ENTREZ_ID
    priority_results: dict[PriorityType, PriorityResult] = Field(default_factory=dict)

    def add_priority_result(self, result: PriorityResult) -> None:
        self.priority_results[result.priority_type] = result

    def get_priority_result(self, priority_type: PriorityType) -> PriorityResult | None:
        return self.priority_results.get(priority_type)

    def get_priority_score(self) -> float:
        """Product of all attached priority scores, 1.0 when none are attached."""
        score = 1.0
        for result in self.priority_results.values():
            score *= result.score
        return score

    def __str__(self) -> str:
        return f"{self.symbol} ({self.entrez_id})"
