"""
Stage 1: Loader and Recoder

Supplies the mtcars table, summarizes it, and recodes numeric code
columns into labelled categorical columns.
"""

from .loader import Loader, load_dataset
from .recoder import Recoder, RecodeRule, DEFAULT_RULES

__all__ = ['Loader', 'load_dataset', 'Recoder', 'RecodeRule', 'DEFAULT_RULES']
