"""Tests for the ranking engine."""

import json
from unittest.mock import MagicMock, Mock, patch

import pytest
from pydantic import ValidationError

from genepriority.api.hpo import HpoAnnotationError
from genepriority.engine import PrioritiserEngine
from genepriority.models.gene import PriorityResult, PriorityType
from genepriority.models.ranking import RankingRequest, RankingResultSet
from genepriority.providers.disease import HpoAnnotationProvider
from genepriority.providers.genes import GeneIdentifiers


class TestRankingRequest:
    """Tests for RankingRequest model."""

    def test_required_fields(self):
        """Test phenotypes and prioritiser are required."""
        with pytest.raises(ValidationError):
            RankingRequest(prioritiser="hiphive")
        with pytest.raises(ValidationError):
            RankingRequest(phenotypes=["HP:0001156"])

    def test_defaults(self):
        """Test optional field defaults."""
        request = RankingRequest(phenotypes=["HP:0001156"], prioritiser="phive")
        assert request.genes == []
        assert request.prioritiser_params == ""
        assert request.limit == 0

    def test_negative_limit(self):
        """Test negative limits are rejected."""
        with pytest.raises(ValidationError):
            RankingRequest(phenotypes=[], prioritiser="phive", limit=-1)

    def test_hyphenated_alias(self):
        """Test prioritiser-params is accepted by its wire name."""
        request = RankingRequest.model_validate(
            {"phenotypes": ["HP:0001156"], "prioritiser": "hiphive", "prioritiser-params": "human"}
        )
        assert request.prioritiser_params == "human"

    def test_echo_params(self):
        """Test request parameters are echoed as strings."""
        request = RankingRequest(
            phenotypes=["HP:0001156", "HP:0001156", "HP:0001363"],
            genes=[2263, 4920],
            prioritiser="Phenix",
            prioritiser_params="human",
            limit=5,
        )
        assert request.echo_params() == {
            "phenotypes": "[HP:0001156, HP:0001156, HP:0001363]",
            "genes": "[2263, 4920]",
            "prioritiser": "Phenix",
            "prioritiser-params": "human",
            "limit": "5",
        }


class TestPrioritiserEngine:
    """Tests for PrioritiserEngine."""

    def test_setup_prioritiser_dedupes(self):
        """Test duplicate phenotypes reach the prioritiser once, in first-seen order."""
        factory = MagicMock()
        engine = PrioritiserEngine(factory, GeneIdentifiers())

        engine.setup_prioritiser(["HP:2", "HP:1", "HP:2", "HP:1"], "", PriorityType.PHIVE_PRIORITY)

        priority_type, settings = factory.make_prioritiser.call_args.args
        assert priority_type == PriorityType.PHIVE_PRIORITY
        assert settings.hpo_ids == ("HP:2", "HP:1")

    @pytest.mark.asyncio
    async def test_rank_all_genes(self, sample_engine, pfeiffer_phenotypes):
        """Test ranking the whole gene universe, highest score first."""
        request = RankingRequest(phenotypes=pfeiffer_phenotypes, prioritiser="phenix")

        result_set = await sample_engine.rank(request)

        symbols = [result.gene_symbol for result in result_set.results]
        assert symbols == ["FGFR2", "FGFR1", "ROR2", "NODIS"]
        assert result_set.results[0].score == pytest.approx(1.0)
        assert all(r.priority_type == PriorityType.PHENIX_PRIORITY for r in result_set.results)
        scores = [result.score for result in result_set.results]
        assert scores == sorted(scores, reverse=True)

    @pytest.mark.asyncio
    async def test_rank_requested_genes(self, sample_engine, pfeiffer_phenotypes):
        """Test only requested genes are ranked and unknown ids get placeholders."""
        request = RankingRequest(phenotypes=pfeiffer_phenotypes, genes=[4920, 99999999, 2263], prioritiser="phive")

        result_set = await sample_engine.rank(request)

        assert [r.gene_symbol for r in result_set.results] == ["FGFR2", "ROR2", "GENE:99999999"]
        placeholder = result_set.results[2]
        assert placeholder.gene_id == 99999999
        assert placeholder.score == 0.0

    @pytest.mark.asyncio
    async def test_rank_unknown_prioritiser(self, sample_engine, pfeiffer_phenotypes):
        """Test an unknown prioritiser name falls back to HiPhive."""
        request = RankingRequest(phenotypes=pfeiffer_phenotypes, prioritiser="foo")

        result_set = await sample_engine.rank(request)

        assert result_set.results
        assert all(r.priority_type == PriorityType.HIPHIVE_PRIORITY for r in result_set.results)
        assert result_set.params["prioritiser"] == "foo"

    @pytest.mark.asyncio
    async def test_rank_limit(self, sample_engine, pfeiffer_phenotypes):
        """Test limit keeps the top results."""
        request = RankingRequest(phenotypes=pfeiffer_phenotypes, prioritiser="hiphive", limit=2)

        result_set = await sample_engine.rank(request)

        assert [r.gene_symbol for r in result_set.results] == ["FGFR2", "FGFR1"]
        assert result_set.params["limit"] == "2"

    @pytest.mark.asyncio
    async def test_rank_echo_and_duration(self, sample_engine):
        """Test the response echoes the request and reports a duration."""
        request = RankingRequest(phenotypes=["HP:0001156", "HP:0001156"], prioritiser="phenix")

        result_set = await sample_engine.rank(request)

        assert result_set.params == request.echo_params()
        assert result_set.params["phenotypes"] == "[HP:0001156, HP:0001156]"
        assert result_set.duration_millis >= 0

    @pytest.mark.asyncio
    async def test_rank_empty_phenotypes(self, sample_engine):
        """Test an empty phenotype list ranks every gene at zero."""
        result_set = await sample_engine.rank(RankingRequest(phenotypes=[], prioritiser="phive"))

        assert len(result_set.results) == 4
        assert all(r.score == 0.0 for r in result_set.results)

    @pytest.mark.asyncio
    async def test_rank_empty_universe(self, sample_provider):
        """Test an empty gene universe gives no results."""
        engine = PrioritiserEngine.from_provider(sample_provider, GeneIdentifiers())

        result_set = await engine.rank(RankingRequest(phenotypes=["HP:0001156"], prioritiser="phenix"))

        assert result_set.results == []

    @pytest.mark.asyncio
    async def test_rank_default_universe_from_provider(self, sample_provider, pfeiffer_phenotypes):
        """Test the gene universe defaults to the provider's known genes."""
        engine = PrioritiserEngine.from_provider(sample_provider)

        result_set = await engine.rank(RankingRequest(phenotypes=pfeiffer_phenotypes, prioritiser="phenix"))

        assert sorted(r.gene_symbol for r in result_set.results) == ["FGFR1", "FGFR2", "ROR2"]

    def test_sort_results_ties_and_limit(self):
        """Test ties keep input order and limit truncates after sorting."""
        scores = [0.5, 0.9, 0.5, 0.1, 0.9, 0.3, 0.5, 0.0, 0.7, 0.5]
        results = [
            PriorityResult(gene_id=i, gene_symbol=f"G{i}", score=s, priority_type=PriorityType.PHIVE_PRIORITY)
            for i, s in enumerate(scores)
        ]

        top = PrioritiserEngine.sort_results(results, 3)
        assert [r.gene_id for r in top] == [1, 4, 8]

        everything = PrioritiserEngine.sort_results(results, 0)
        assert [r.gene_id for r in everything] == [1, 4, 8, 0, 2, 6, 9, 5, 3, 7]

    def test_sort_results_limit_beyond_size(self):
        """Test a limit larger than the results keeps everything."""
        results = [
            PriorityResult(gene_id=1, gene_symbol="A", score=0.2, priority_type=PriorityType.PHIVE_PRIORITY),
            PriorityResult(gene_id=2, gene_symbol="B", score=0.4, priority_type=PriorityType.PHIVE_PRIORITY),
        ]
        assert [r.gene_id for r in PrioritiserEngine.sort_results(results, 10)] == [2, 1]

    @pytest.mark.asyncio
    async def test_batch_size_does_not_change_order(self, sample_provider, sample_gene_identifiers, pfeiffer_phenotypes):
        """Test batching across threads returns the same ranking."""
        request = RankingRequest(phenotypes=pfeiffer_phenotypes, prioritiser="hiphive")

        single = await PrioritiserEngine.from_provider(sample_provider, sample_gene_identifiers, batch_size=1).rank(request)
        bulk = await PrioritiserEngine.from_provider(sample_provider, sample_gene_identifiers, batch_size=100).rank(request)

        assert single.results == bulk.results

    @pytest.mark.asyncio
    async def test_batch_rank_skips_failures(self, sample_engine, pfeiffer_phenotypes):
        """Test failed requests are left out of batch results."""
        good = RankingRequest(phenotypes=pfeiffer_phenotypes, prioritiser="phenix")
        bad = RankingRequest(phenotypes=["HP:0000001"], prioritiser="phive")
        original_rank = sample_engine.rank

        async def flaky_rank(request):
            if request is bad:
                raise RuntimeError("scoring failed")
            return await original_rank(request)

        with patch.object(sample_engine, "rank", side_effect=flaky_rank):
            result_sets = await sample_engine.batch_rank([good, bad])

        assert len(result_sets) == 1
        assert isinstance(result_sets[0], RankingResultSet)

    @pytest.mark.asyncio
    async def test_rank_unavailable_annotations_fetched_once(self, pfeiffer_phenotypes):
        """Test an offline provider is tried once per engine, not once per lookup."""
        client = Mock()
        client.fetch_annotation_files.side_effect = HpoAnnotationError("offline")
        provider = HpoAnnotationProvider(client=client)
        identifiers = GeneIdentifiers({str(gene_id): f"G{gene_id}" for gene_id in range(1, 51)})
        engine = PrioritiserEngine.from_provider(provider, identifiers, batch_size=10)

        result_set = await engine.rank(RankingRequest(phenotypes=pfeiffer_phenotypes, prioritiser="phenix"))

        assert len(result_set.results) == 50
        assert all(r.score == 0.0 for r in result_set.results)
        assert client.fetch_annotation_files.call_count == 1

    @pytest.mark.asyncio
    async def test_rank_logs_error_before_scoring(self, sample_engine, pfeiffer_phenotypes, tmp_path):
        """Test failures while resolving genes are written to the decision log."""
        engine = PrioritiserEngine(
            sample_engine.priority_factory,
            sample_engine.gene_identifiers,
            enable_logging=True,
            log_dir=tmp_path,
        )

        with patch.object(engine, "resolve_genes", side_effect=RuntimeError("identifiers unavailable")):
            with pytest.raises(RuntimeError):
                await engine.rank(RankingRequest(phenotypes=pfeiffer_phenotypes, prioritiser="phive"))

        log_file = next(tmp_path.glob("ranking_decisions_*.jsonl"))
        entries = [json.loads(line) for line in log_file.read_text().splitlines()]
        assert [e["event_type"] for e in entries] == ["ranking_request", "ranking_error"]
        assert entries[0]["request_id"] == entries[1]["request_id"]
        assert entries[1]["error"]["message"] == "identifiers unavailable"

    @pytest.mark.asyncio
    async def test_rank_with_logging(self, sample_provider, sample_gene_identifiers, pfeiffer_phenotypes, tmp_path):
        """Test ranking decisions are written to the JSONL log."""
        engine = PrioritiserEngine.from_provider(
            sample_provider, sample_gene_identifiers, enable_logging=True, log_dir=tmp_path
        )

        await engine.rank(RankingRequest(phenotypes=pfeiffer_phenotypes, prioritiser="phenix", limit=1))

        log_files = list(tmp_path.glob("ranking_decisions_*.jsonl"))
        assert len(log_files) == 1
        entries = [json.loads(line) for line in log_files[0].read_text().splitlines()]
        assert [e["event_type"] for e in entries] == ["ranking_request", "ranking_response"]
        assert entries[0]["input"]["priority_type"] == "PHENIX_PRIORITY"
        assert entries[1]["output"]["top_results"][0]["gene_symbol"] == "FGFR2"


class TestRankingResultSet:
    """Tests for RankingResultSet."""

    def test_rank_of(self):
        """Test 1-based rank lookup."""
        results = [
            PriorityResult(gene_id=1, gene_symbol="A", score=0.9, priority_type=PriorityType.PHENIX_PRIORITY),
            PriorityResult(gene_id=2, gene_symbol="B", score=0.5, priority_type=PriorityType.PHENIX_PRIORITY),
        ]
        result_set = RankingResultSet(params={}, duration_millis=3, results=results)

        assert result_set.rank_of("B") == 2
        assert result_set.rank_of("Z") is None

    def test_to_report(self):
        """Test report generation."""
        results = [
            PriorityResult(
                gene_id=2263,
                gene_symbol="FGFR2",
                score=1.0,
                priority_type=PriorityType.PHENIX_PRIORITY,
                disease_id="OMIM:101600",
                disease_name="Pfeiffer syndrome",
            ),
        ]
        result_set = RankingResultSet(params={"prioritiser": "phenix"}, duration_millis=12, results=results)

        report = result_set.to_report()
        assert "FGFR2" in report
        assert "OMIM:101600 Pfeiffer syndrome" in report
        assert "12 ms" in report
