"""Presenters for CLI output formatting.

This module contains presenter classes that format and display information
to the user via the CLI. Presenters are responsible for formatting data
structures into human-readable output.
"""

from .progress import ProgressPresenter
from .summary import SummaryPresenter, SummaryRequest
from .vlm import VLMPresenter, VLMViewRequest

__all__ = [
    "ProgressPresenter",
    "SummaryPresenter",
    "SummaryRequest",
    "VLMPresenter",
    "VLMViewRequest",
]
