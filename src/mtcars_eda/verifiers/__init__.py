"""
Verification checkpoints for the mtcars analysis pipeline.

V2: Summary Check (after Stage 2)
V4: Metrics Check (after Stage 4)
"""

from .summary_check import SummaryChecker
from .metrics_check import MetricsChecker

__all__ = ['SummaryChecker', 'MetricsChecker']
