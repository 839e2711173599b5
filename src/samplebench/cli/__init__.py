"""
Command-line interface for the samplebench package.
"""

from .main import main_cli

__all__ = [
    "main_cli",
]
