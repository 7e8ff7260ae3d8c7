"""Logging configuration for genepriority ranking decisions.

Provides structured logging for ranking requests, their results and failures.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any


class RankingLogger:
    """Logger for ranking decisions with structured output."""

    def __init__(self, log_dir: Path | None = None, enable_file_logging: bool = True):
        """Initialize the ranking decision logger.

        Args:
            log_dir: Directory for log files. Defaults to ./logs
            enable_file_logging: Whether to write logs to files
        """
        self.logger = logging.getLogger("genepriority.ranking")
        self.logger.setLevel(logging.INFO)

        # Remove existing handlers to avoid duplicates
        self.logger.handlers.clear()

        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)
        console_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        console_handler.setFormatter(console_formatter)
        self.logger.addHandler(console_handler)

        # JSONL decisions go straight to the file stream, not through the console
        self.file_handler = None
        if enable_file_logging:
            if log_dir is None:
                log_dir = Path("./logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            timestamp = datetime.now().strftime("%Y%m%d")
            log_file = log_dir / f"ranking_decisions_{timestamp}.jsonl"

            self.file_handler = logging.FileHandler(log_file)
            self.file_handler.setLevel(logging.DEBUG)
            self.file_handler.setFormatter(logging.Formatter('%(message)s'))
            self.file_handler.addFilter(lambda record: record.levelno == logging.DEBUG)
            self.logger.addHandler(self.file_handler)

            self.log_file = log_file
            self.logger.info(f"Ranking decision logging enabled: {log_file}")
        else:
            self.log_file = None

    def _write(self, log_entry: dict[str, Any]) -> None:
        if self.file_handler:
            self.file_handler.stream.write(json.dumps(log_entry) + '\n')
            self.file_handler.flush()

    def log_ranking_request(
        self,
        phenotypes: list[str],
        gene_count: int,
        prioritiser: str,
        priority_type: str,
        prioritiser_params: str,
        limit: int,
    ) -> str:
        """Log a ranking request.

        Args:
            gene_count: Number of requested genes, 0 when every known gene is ranked

        Returns:
            Request ID for tracking
        """
        request_id = f"{priority_type}_{datetime.now().strftime('%Y%m%d_%H%M%S_%f')}"

        log_entry = {
            "timestamp": datetime.now().isoformat(),
            "event_type": "ranking_request",
            "request_id": request_id,
            "input": {
                "phenotypes": phenotypes,
                "gene_count": gene_count,
                "prioritiser": prioritiser,
                "priority_type": priority_type,
                "prioritiser_params": prioritiser_params,
                "limit": limit,
            }
        }

        genes_display = f"{gene_count} genes" if gene_count else "all known genes"
        self.logger.info(
            f"Ranking Request: {len(phenotypes)} phenotypes against {genes_display} "
            f"using {priority_type} (requested '{prioritiser}')"
        )
        self._write(log_entry)

        return request_id

    def log_ranking_response(
        self,
        request_id: str,
        duration_millis: int,
        result_count: int,
        top_results: list[dict[str, Any]],
    ) -> None:
        """Log a ranking response."""

        log_entry = {
            "timestamp": datetime.now().isoformat(),
            "event_type": "ranking_response",
            "request_id": request_id,
            "output": {
                "duration_millis": duration_millis,
                "result_count": result_count,
                "top_results": top_results,
            }
        }

        top = top_results[0] if top_results else None
        top_display = f"{top['gene_symbol']} ({top['score']:.3f})" if top else "none"
        self.logger.info(
            f"Ranking Result: {result_count} genes in {duration_millis} ms, top: {top_display}"
        )
        self._write(log_entry)

    def log_ranking_error(self, request_id: str, error: Exception) -> None:
        """Log a ranking failure."""

        log_entry = {
            "timestamp": datetime.now().isoformat(),
            "event_type": "ranking_error",
            "request_id": request_id,
            "error": {
                "type": type(error).__name__,
                "message": str(error),
            }
        }

        self.logger.error(f"Ranking Error: {request_id} - {error}")
        self._write(log_entry)


# Global logger instance
_global_logger: RankingLogger | None = None


def get_logger(log_dir: Path | None = None, enable_file_logging: bool = True) -> RankingLogger:
    """Get or create the global ranking decision logger."""
    global _global_logger

    if _global_logger is None:
        _global_logger = RankingLogger(log_dir=log_dir, enable_file_logging=enable_file_logging)

    return _global_logger


def reset_logger() -> None:
    """Reset the global logger (mainly for testing)."""
    global _global_logger
    _global_logger = None
