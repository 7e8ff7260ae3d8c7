"""Tests for ranking decision logging."""

import json

from genepriority.utils.logging_config import RankingLogger, get_logger, reset_logger


class TestRankingLogger:
    """Tests for RankingLogger."""

    def read_entries(self, ranking_logger):
        return [json.loads(line) for line in ranking_logger.log_file.read_text().splitlines()]

    def test_request_and_response(self, tmp_path):
        """Test request and response entries share a request id."""
        ranking_logger = RankingLogger(log_dir=tmp_path)

        request_id = ranking_logger.log_ranking_request(
            phenotypes=["HP:0001156"],
            gene_count=20,
            prioritiser="phenix",
            priority_type="PHENIX_PRIORITY",
            prioritiser_params="",
            limit=5,
        )
        ranking_logger.log_ranking_response(
            request_id=request_id,
            duration_millis=7,
            result_count=1,
            top_results=[{"gene_symbol": "FGFR2", "score": 0.9}],
        )

        entries = self.read_entries(ranking_logger)
        assert request_id.startswith("PHENIX_PRIORITY_")
        assert [e["request_id"] for e in entries] == [request_id, request_id]
        assert entries[0]["input"]["gene_count"] == 20
        assert entries[1]["output"]["duration_millis"] == 7

    def test_error_entry(self, tmp_path):
        """Test failures are logged with their type."""
        ranking_logger = RankingLogger(log_dir=tmp_path)

        ranking_logger.log_ranking_error("req-1", RuntimeError("boom"))

        entry = self.read_entries(ranking_logger)[0]
        assert entry["event_type"] == "ranking_error"
        assert entry["error"] == {"type": "RuntimeError", "message": "boom"}

    def test_empty_response(self, tmp_path):
        """Test a response with no results is logged."""
        ranking_logger = RankingLogger(log_dir=tmp_path)
        ranking_logger.log_ranking_response("req-2", 1, 0, [])
        assert self.read_entries(ranking_logger)[0]["output"]["result_count"] == 0

    def test_file_logging_disabled(self):
        """Test no log file without file logging."""
        ranking_logger = RankingLogger(enable_file_logging=False)
        assert ranking_logger.log_file is None
        ranking_logger.log_ranking_error("req-3", ValueError("ignored"))

    def test_global_logger(self, tmp_path):
        """Test the global logger is shared until reset."""
        first = get_logger(log_dir=tmp_path)
        assert get_logger() is first

        reset_logger()
        assert get_logger(enable_file_logging=False) is not first
