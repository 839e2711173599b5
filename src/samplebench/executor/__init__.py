"""
Sample execution module.

Runs each sample in an isolated child process and measures it.
"""

from .process_runner import ProcessRunner, PythonSampleLauncher, SampleLauncher

__all__ = [
    "ProcessRunner",
    "PythonSampleLauncher",
    "SampleLauncher",
]
