"""
Sample discovery for the benchmark pipeline.
"""

from .registry import SampleRegistry

__all__ = ["SampleRegistry"]
