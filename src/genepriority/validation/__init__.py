"""Benchmarking of prioritisers against solved cases."""

from genepriority.validation.validator import Validator

__all__ = ["Validator"]
