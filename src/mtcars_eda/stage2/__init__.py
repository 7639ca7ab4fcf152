"""
Stage 2: Aggregator and Correlator

Grouped descriptive statistics and the pairwise correlation matrix.
"""

from .aggregator import Aggregator
from .correlator import Correlator, upper_triangle

__all__ = ['Aggregator', 'Correlator', 'upper_triangle']
