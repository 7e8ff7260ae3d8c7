"""Benchmarking models.

CONCEPTUAL OVERVIEW:
===================

A prioritiser is only useful if known disease genes come out near the top
when it is given the phenotypes of a solved case.

1. SOLVED CASES
   - Each case pairs a set of patient phenotypes with the causative gene
   - Cases can restrict the gene universe to mimic a candidate list

2. RANK-BASED EVALUATION
   - Top-1/top-5/top-10: was the causative gene ranked within the first N?
   - Mean reciprocal rank rewards near misses more than a hit rate does
   - A gene missing from the results entirely counts as rank infinity
"""

from pydantic import BaseModel, ConfigDict, Field


class BenchmarkCase(BaseModel):
    """A solved case: phenotypes plus the gene known to explain them."""

    model_config = ConfigDict(populate_by_name=True)

    phenotypes: list[str]
    expected_gene: str
    genes: list[int] = Field(default_factory=list)
    prioritiser: str = "hiphive"
    prioritiser_params: str = Field("", alias="prioritiser-params")
    notes: str | None = None


class BenchmarkResult(BaseModel):
    """Where one case's causative gene was ranked."""

    expected_gene: str
    prioritiser: str
    rank: int | None = None  # 1-based, None when the gene was not ranked at all
    score: float | None = None
    total_genes: int = 0

    @property
    def reciprocal_rank(self) -> float:
        return 1.0 / self.rank if self.rank else 0.0

    def in_top(self, n: int) -> bool:
        return self.rank is not None and self.rank <= n


class BenchmarkMetrics(BaseModel):
    """Overall benchmark metrics."""

    total_cases: int = 0
    top_1: float = 0.0
    top_5: float = 0.0
    top_10: float = 0.0
    mean_reciprocal_rank: float = 0.0
    missing_genes: int = 0
    results: list[BenchmarkResult] = Field(default_factory=list)

    def calculate(self, results: list[BenchmarkResult]) -> None:
        """Calculate metrics from benchmark results."""
        self.results = results
        self.total_cases = len(results)
        if not results:
            return

        self.top_1 = sum(r.in_top(1) for r in results) / self.total_cases
        self.top_5 = sum(r.in_top(5) for r in results) / self.total_cases
        self.top_10 = sum(r.in_top(10) for r in results) / self.total_cases
        self.mean_reciprocal_rank = sum(r.reciprocal_rank for r in results) / self.total_cases
        self.missing_genes = sum(1 for r in results if r.rank is None)

    def to_report(self) -> str:
        """Generate a human-readable report."""
        report = [
            "=" * 60,
            "BENCHMARK REPORT",
            "=" * 60,
            f"Cases: {self.total_cases}",
            f"Top 1:  {self.top_1:.1%}",
            f"Top 5:  {self.top_5:.1%}",
            f"Top 10: {self.top_10:.1%}",
            f"Mean reciprocal rank: {self.mean_reciprocal_rank:.3f}",
            f"Expected gene not ranked: {self.missing_genes}",
            "=" * 60,
        ]
        return "\n".join(report)
