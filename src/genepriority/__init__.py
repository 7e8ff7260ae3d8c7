"""genepriority: phenotype-driven gene ranking and variant pathogenicity evidence."""

__version__ = "0.3.0"
