"""
Stage 4: Modelling, Hypothesis Tests and Export

- Ordinary least squares model with predictions appended to the table
- Welch two-sample t-test and Pearson correlation test
- CSV export of the augmented table
"""

from .models import Modeler, LinearModel, fit_linear_model
from .hypothesis import HypothesisTester, HypothesisTestResult, welch_t_test, correlation_test
from .exporter import Exporter

__all__ = [
    'Modeler',
    'LinearModel',
    'fit_linear_model',
    'HypothesisTester',
    'HypothesisTestResult',
    'welch_t_test',
    'correlation_test',
    'Exporter',
]
