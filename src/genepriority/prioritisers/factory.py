"""Prioritiser resolution and construction."""

import logging

from genepriority.constants import DEFAULT_PRIORITISER, PRIORITISER_NAMES
from genepriority.models.gene import PriorityType
from genepriority.prioritisers.base import Prioritiser, PrioritiserSettings
from genepriority.prioritisers.phenotype import (
    HiPhivePrioritiser,
    PhenixPrioritiser,
    PhivePrioritiser,
)
from genepriority.providers.disease import HpoAnnotationProvider

logger = logging.getLogger(__name__)

_PRIORITISERS: dict[PriorityType, type[Prioritiser]] = {
    PriorityType.PHENIX_PRIORITY: PhenixPrioritiser,
    PriorityType.PHIVE_PRIORITY: PhivePrioritiser,
    PriorityType.HIPHIVE_PRIORITY: HiPhivePrioritiser,
}


def parse_prioritiser_type(prioritiser_name: str) -> PriorityType:
    """Resolve a client-supplied prioritiser name.

    Unrecognised names resolve to HiPhive instead of failing. Existing
    clients send free-form names and rely on this.
    """
    name = (prioritiser_name or "").strip().lower()
    member = PRIORITISER_NAMES.get(name)
    if member is None:
        logger.warning(f"Unrecognised prioritiser '{prioritiser_name}', using {DEFAULT_PRIORITISER}")
        member = DEFAULT_PRIORITISER
    return PriorityType[member]


class PriorityFactory:
    """Builds prioritisers that share one disease provider."""

    def __init__(self, provider: HpoAnnotationProvider) -> None:
        self.provider = provider

    def make_prioritiser(self, priority_type: PriorityType, settings: PrioritiserSettings) -> Prioritiser:
        prioritiser = _PRIORITISERS[priority_type](self.provider, settings)
        logger.debug(f"Made {prioritiser!r}")
        return prioritiser
