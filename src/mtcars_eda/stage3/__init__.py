"""
Stage 3: Visualizer

Renders the analysis charts to image files.
"""

from .visualizer import Visualizer, ChartSpec, DEFAULT_CHARTS

__all__ = ['Visualizer', 'ChartSpec', 'DEFAULT_CHARTS']
