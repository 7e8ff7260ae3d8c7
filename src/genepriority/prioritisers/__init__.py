"""Phenotype-driven gene prioritisers."""

from genepriority.prioritisers.base import Prioritiser, PrioritiserSettings
from genepriority.prioritisers.factory import PriorityFactory, parse_prioritiser_type
from genepriority.prioritisers.phenotype import (
    HiPhivePrioritiser,
    PhenixPrioritiser,
    PhivePrioritiser,
    parse_data_sources,
)

__all__ = [
    "Prioritiser",
    "PrioritiserSettings",
    "PriorityFactory",
    "parse_prioritiser_type",
    "HiPhivePrioritiser",
    "PhenixPrioritiser",
    "PhivePrioritiser",
    "parse_data_sources",
]
