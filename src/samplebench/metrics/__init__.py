"""
Metrics aggregation for the benchmark pipeline.
"""

from .aggregator import aggregate, combine

__all__ = ["aggregate", "combine"]
