"""Validator for benchmarking prioritisers against solved cases.

ARCHITECTURE:
    Solved cases (JSON) → Validator → PrioritiserEngine rankings → BenchmarkMetrics

Key Design:
- Semaphore for concurrency control
- Flexible input: list or dict-wrapped JSON
- Failed cases are recorded, not raised
"""

import asyncio
import json
import logging
from pathlib import Path

from genepriority.engine import PrioritiserEngine
from genepriority.models.ranking import RankingRequest
from genepriority.models.validation import BenchmarkCase, BenchmarkMetrics, BenchmarkResult

logger = logging.getLogger(__name__)


class Validator:
    """Benchmarks an engine's rankings against solved cases."""

    def __init__(self, engine: PrioritiserEngine) -> None:
        """Initialize the validator.

        Args:
            engine: Ranking engine to benchmark
        """
        self.engine = engine
        self.failed_cases: list[tuple[int, str, str]] = []

    def load_cases(self, path: str | Path) -> list[BenchmarkCase]:
        """Load solved cases from a JSON file.

        Args:
            path: JSON file holding a list of cases or {"cases": [...]}

        Returns:
            List of benchmark cases

        Raises:
            FileNotFoundError: If file does not exist
            ValueError: If JSON is invalid
        """
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"Benchmark file not found: {path}")

        logger.info(f"Loading benchmark cases from {path}")

        try:
            with open(path, "r") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in benchmark file: {str(e)}") from e

        if isinstance(data, dict) and "cases" in data:
            cases_data = data["cases"]
        elif isinstance(data, list):
            cases_data = data
        else:
            raise ValueError("Invalid benchmark format")

        cases = []
        for idx, case_data in enumerate(cases_data):
            try:
                cases.append(BenchmarkCase.model_validate(case_data))
            except Exception as e:
                logger.warning(f"Skipping case {idx} ({case_data.get('expected_gene', '?')}): {e}")

        logger.info(f"Loaded {len(cases)} valid benchmark cases")
        return cases

    async def validate_single(self, case: BenchmarkCase) -> BenchmarkResult:
        """Rank one case and find its expected gene."""
        request = RankingRequest(
            phenotypes=case.phenotypes,
            genes=case.genes,
            prioritiser=case.prioritiser,
            prioritiser_params=case.prioritiser_params,
        )
        result_set = await self.engine.rank(request)

        rank = result_set.rank_of(case.expected_gene)
        score = result_set.results[rank - 1].score if rank else None

        return BenchmarkResult(
            expected_gene=case.expected_gene,
            prioritiser=case.prioritiser,
            rank=rank,
            score=score,
            total_genes=len(result_set.results),
        )

    async def validate_dataset(
        self,
        cases: list[BenchmarkCase],
        max_concurrent: int = 3,
    ) -> BenchmarkMetrics:
        """Benchmark all cases.

        Args:
            cases: Solved cases
            max_concurrent: Maximum concurrent rankings

        Returns:
            Overall benchmark metrics
        """
        logger.info(f"Starting benchmark of {len(cases)} cases")

        semaphore = asyncio.Semaphore(max_concurrent)

        async def validate_with_semaphore(case: BenchmarkCase) -> BenchmarkResult:
            async with semaphore:
                return await self.validate_single(case)

        outcomes = await asyncio.gather(*(validate_with_semaphore(case) for case in cases), return_exceptions=True)

        results = []
        self.failed_cases = []
        for idx, outcome in enumerate(outcomes):
            if isinstance(outcome, Exception):
                self.failed_cases.append((idx, cases[idx].expected_gene, str(outcome).split('\n')[0]))
                logger.error(f"Benchmark failed for case {idx}: {outcome}")
            else:
                results.append(outcome)

        metrics = BenchmarkMetrics()
        metrics.calculate(results)

        logger.info(
            f"Benchmark complete: top-1 {metrics.top_1:.1%}, top-10 {metrics.top_10:.1%} "
            f"over {metrics.total_cases} cases"
        )
        return metrics

    async def validate_from_file(self, path: str | Path, max_concurrent: int = 3) -> BenchmarkMetrics:
        """Load cases from file and benchmark them."""
        return await self.validate_dataset(self.load_cases(path), max_concurrent=max_concurrent)

    def save_results(self, metrics: BenchmarkMetrics, output_path: str | Path) -> None:
        """Save benchmark metrics and per-case results to a JSON file."""
        output_path = Path(output_path)
        with open(output_path, "w") as f:
            json.dump(metrics.model_dump(mode="json"), f, indent=2)
        logger.info(f"Saved benchmark results to {output_path}")
