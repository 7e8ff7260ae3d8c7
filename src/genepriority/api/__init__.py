"""API clients for external data sources."""

from genepriority.api.hpo import HpoAnnotationClient, HpoAnnotationError

__all__ = ["HpoAnnotationClient", "HpoAnnotationError"]
