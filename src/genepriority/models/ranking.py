"""Ranking request and response models."""

from pydantic import BaseModel, ConfigDict, Field

from genepriority.models.gene import PriorityResult


class RankingRequest(BaseModel):
    """Input for a gene ranking.

    Only phenotypes and prioritiser are required. An empty phenotype list is
    accepted and matches nothing.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "phenotypes": ["HP:0001156", "HP:0001363"],
                "genes": [2263, 4920],
                "prioritiser": "hiphive",
                "prioritiser-params": "human",
                "limit": 10,
            }
        },
    )

    phenotypes: list[str] = Field(..., description="HPO term ids (e.g., HP:0001156)")
    genes: list[int] = Field(default_factory=list, description="Entrez gene ids, empty for all known genes")
    prioritiser: str = Field(..., description="Prioritiser name (phenix, phive, hiphive)")
    prioritiser_params: str = Field("", alias="prioritiser-params", description="Prioritiser-specific parameters")
    limit: int = Field(0, ge=0, description="Maximum number of results, 0 for all")

    def echo_params(self) -> dict[str, str]:
        """Request parameters as strings, in request order."""
        return {
            "phenotypes": f"[{', '.join(self.phenotypes)}]",
            "genes": f"[{', '.join(str(gene_id) for gene_id in self.genes)}]",
            "prioritiser": self.prioritiser,
            "prioritiser-params": self.prioritiser_params,
            "limit": str(self.limit),
        }


class RankingResultSet(BaseModel):
    """Ranked results with the echoed request and elapsed time."""

    params: dict[str, str] = Field(default_factory=dict)
    duration_millis: int = Field(0, ge=0)
    results: list[PriorityResult] = Field(default_factory=list)

    def rank_of(self, gene_symbol: str) -> int | None:
        """1-based position of a gene in the results, or None if absent."""
        for position, result in enumerate(self.results, start=1):
            if result.gene_symbol == gene_symbol:
                return position
        return None

    def to_report(self) -> str:
        """Simple report output."""
        report = f"\nPrioritiser: {self.params.get('prioritiser', '?')} | Phenotypes: {self.params.get('phenotypes', '[]')}\n"
        report += f"Results: {len(self.results)} | Duration: {self.duration_millis} ms\n\n"
        for position, result in enumerate(self.results, start=1):
            line = f"{position:>4}. {result.gene_symbol:<12} {result.gene_id:>9}  {result.score:.4f}"
            if result.disease_id:
                line += f"  {result.disease_id} {result.disease_name or ''}".rstrip()
            report += line + "\n"
        return report
