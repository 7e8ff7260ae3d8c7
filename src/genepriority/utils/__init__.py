"""Utility functions."""

from genepriority.utils.logging_config import RankingLogger, get_logger, reset_logger

__all__ = [
    'RankingLogger',
    'get_logger',
    'reset_logger',
]
