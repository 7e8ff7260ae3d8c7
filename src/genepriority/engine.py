"""Core ranking engine combining gene identifiers, annotations and prioritisers.

ARCHITECTURE:
    RankingRequest → dedupe phenotypes → resolve prioritiser → resolve genes → score (parallel) → sort/limit → RankingResultSet

Orchestrates one ranking per request, scoring genes concurrently.

Key Design:
- Unknown prioritiser names fall back to HiPhive, unknown gene ids get placeholder symbols
- An empty gene selection means every known gene
- Fan-out/fan-in: batches of genes are scored in worker threads (asyncio.to_thread),
  each batch returns its own results, nothing shared is written while scoring
- A single stable sort after scoring keeps ties in input order
- Batch requests capture exceptions, not raised
"""

import asyncio
import logging
import time
from pathlib import Path

from genepriority.models.gene import Gene, PriorityResult, PriorityType
from genepriority.models.ranking import RankingRequest, RankingResultSet
from genepriority.prioritisers.base import Prioritiser, PrioritiserSettings
from genepriority.prioritisers.factory import PriorityFactory, parse_prioritiser_type
from genepriority.providers.disease import HpoAnnotationProvider
from genepriority.providers.genes import GeneIdentifiers
from genepriority.utils.logging_config import get_logger

logger = logging.getLogger(__name__)


class PrioritiserEngine:
    """
    Engine for phenotype-driven gene ranking.

    The gene identifiers and disease annotations are loaded once and only
    read afterwards, so concurrent rankings need no locking.
    """

    DEFAULT_BATCH_SIZE = 500

    def __init__(
        self,
        priority_factory: PriorityFactory,
        gene_identifiers: GeneIdentifiers,
        batch_size: int = DEFAULT_BATCH_SIZE,
        enable_logging: bool = False,
        log_dir: Path | None = None,
        enable_file_logging: bool = True,
    ):
        self.priority_factory = priority_factory
        self.gene_identifiers = gene_identifiers
        self.batch_size = max(1, batch_size)
        self.enable_logging = enable_logging
        self.ranking_logger = get_logger(log_dir=log_dir, enable_file_logging=enable_file_logging) if enable_logging else None

    @classmethod
    def from_provider(
        cls,
        provider: HpoAnnotationProvider,
        gene_identifiers: GeneIdentifiers | None = None,
        **kwargs,
    ) -> "PrioritiserEngine":
        """Build an engine whose gene universe defaults to the provider's known genes."""
        if gene_identifiers is None:
            gene_identifiers = GeneIdentifiers.from_provider(provider)
        return cls(PriorityFactory(provider), gene_identifiers, **kwargs)

    def setup_prioritiser(
        self, phenotypes: list[str], prioritiser_params: str, priority_type: PriorityType
    ) -> Prioritiser:
        """Make a prioritiser for the distinct phenotypes, in first-seen order."""
        unique_phenotypes = tuple(dict.fromkeys(phenotypes))
        settings = PrioritiserSettings(hpo_ids=unique_phenotypes, prioritiser_params=prioritiser_params)
        return self.priority_factory.make_prioritiser(priority_type, settings)

    def resolve_genes(self, gene_ids: list[int]) -> list[Gene]:
        """Genes to rank: the requested ids, or the whole known gene universe if none are requested."""
        if not gene_ids:
            logger.info("Gene identifiers not specified - will compare against all known genes.")
        return self.gene_identifiers.create_genes(gene_ids)

    async def score_genes(self, prioritiser: Prioritiser, genes: list[Gene]) -> list[PriorityResult]:
        """Score every gene, one worker thread per batch.

        Results come back in gene order regardless of which batch finishes first.
        """

        def score_batch(batch: list[Gene]) -> list[PriorityResult]:
            return [prioritiser.score_gene(gene) for gene in batch]

        batches = [genes[i:i + self.batch_size] for i in range(0, len(genes), self.batch_size)]
        batch_results = await asyncio.gather(
            *(asyncio.to_thread(score_batch, batch) for batch in batches)
        )
        return [result for batch in batch_results for result in batch]

    @staticmethod
    def sort_results(results: list[PriorityResult], limit: int) -> list[PriorityResult]:
        """Highest score first, ties in input order; limit 0 keeps everything."""
        ranked = sorted(results, key=PriorityResult.sort_key)
        if limit == 0:
            return ranked
        return ranked[:limit]

    async def rank(self, request: RankingRequest) -> RankingResultSet:
        """Rank genes for one request.

        Never fails on unrecognised prioritiser names or unknown gene ids;
        see parse_prioritiser_type() and GeneIdentifiers.symbol_for().
        """
        start = time.perf_counter()
        logger.info(
            f"phenotypes: {request.phenotypes}({len(request.phenotypes)}) genes: {request.genes} "
            f"prioritiser: {request.prioritiser} prioritiser-params: {request.prioritiser_params}"
        )

        priority_type = parse_prioritiser_type(request.prioritiser)

        request_id = None
        if self.ranking_logger:
            request_id = self.ranking_logger.log_ranking_request(
                phenotypes=list(dict.fromkeys(request.phenotypes)),
                gene_count=len(request.genes),
                prioritiser=request.prioritiser,
                priority_type=priority_type.value,
                prioritiser_params=request.prioritiser_params,
                limit=request.limit,
            )

        try:
            prioritiser = self.setup_prioritiser(request.phenotypes, request.prioritiser_params, priority_type)
            genes = self.resolve_genes(request.genes)
            scored = await self.score_genes(prioritiser, genes)
        except Exception as e:
            if self.ranking_logger and request_id:
                self.ranking_logger.log_ranking_error(request_id, e)
            raise

        for gene, result in zip(genes, scored):
            gene.add_priority_result(result)

        results = self.sort_results(
            [gene.get_priority_result(priority_type) for gene in genes], request.limit
        )
        duration_millis = int((time.perf_counter() - start) * 1000)

        if self.ranking_logger and request_id:
            self.ranking_logger.log_ranking_response(
                request_id=request_id,
                duration_millis=duration_millis,
                result_count=len(results),
                top_results=[result.model_dump(mode="json") for result in results[:10]],
            )

        return RankingResultSet(params=request.echo_params(), duration_millis=duration_millis, results=results)

    async def batch_rank(self, requests: list[RankingRequest]) -> list[RankingResultSet]:
        """
        Rank several requests concurrently.

        Failed requests are logged and left out of the returned list.
        """
        results = await asyncio.gather(*(self.rank(request) for request in requests), return_exceptions=True)

        result_sets = []
        for idx, result in enumerate(results):
            if isinstance(result, Exception):
                logger.error(f"Ranking failed for request {idx}: {result}")
            else:
                result_sets.append(result)
        return result_sets
