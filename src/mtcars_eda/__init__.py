"""
mtcars exploratory analysis pipeline.

Stage 1 loads and recodes the dataset, Stage 2 computes grouped statistics
and correlations, Stage 3 renders charts, Stage 4 fits the regression, runs
the hypothesis tests and exports the augmented table.
"""

__version__ = "0.1.0"
