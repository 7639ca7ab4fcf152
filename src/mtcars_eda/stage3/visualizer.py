"""
Visualization Module - Stage 3

Renders static charts to PNG files:
- Bar chart of a summary value per group
- Box plot of a numeric column by category
- Scatter plot with a least-squares fit line
- Scatter plot with a fixed y = x reference line
- Correlation heatmap (upper triangle)
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any, List, Optional

import matplotlib

# Non-interactive backend so charts render without a display
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns
from tqdm import tqdm

from ..utils.logging_utils import get_logger
from ..utils.stats_utils import require_columns

logger = get_logger(__name__)

sns.set_style("whitegrid")
plt.rcParams['font.size'] = 10

CHART_KINDS = ('bar', 'box', 'scatter_fit', 'scatter_reference')


@dataclass
class ChartSpec:
    """
    Description of one chart.

    ``source`` names the table the chart is drawn from (``table`` for the
    row-level data, ``summary`` for the grouped summary). The image size in
    pixels is ``width * dpi`` by ``height * dpi``.
    """
    kind: str
    x: str
    y: str
    filename: str
    title: str = ''
    xlabel: Optional[str] = None
    ylabel: Optional[str] = None
    color: str = 'steelblue'
    line_color: str = 'darkblue'
    fill: Optional[str] = None
    source: str = 'table'
    width: float = 6.0
    height: float = 4.0

    def __post_init__(self):
        if self.kind not in CHART_KINDS:
            raise ValueError(f"Unknown chart kind '{self.kind}', expected one of {CHART_KINDS}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ChartSpec':
        return cls(**data)


DEFAULT_CHARTS = [
    ChartSpec(
        kind='bar', x='cyl', y='avg_mpg', source='summary',
        filename='avg_mpg_by_cylinders.png',
        title='Average MPG by Cylinder Count',
        xlabel='Number of Cylinders', ylabel='Average MPG',
        color='steelblue'
    ),
    ChartSpec(
        kind='box', x='am', y='mpg', fill='am',
        filename='mpg_by_transmission.png',
        title='MPG Distribution by Transmission Type',
        xlabel='Transmission', ylabel='Miles Per Gallon (MPG)'
    ),
    ChartSpec(
        kind='scatter_fit', x='hp', y='mpg',
        filename='hp_vs_mpg.png',
        title='Scatter Plot of Horsepower vs MPG',
        xlabel='Horsepower (HP)', ylabel='Miles Per Gallon (MPG)',
        color='tomato', line_color='darkblue'
    ),
    ChartSpec(
        kind='scatter_reference', x='mpg', y='predicted_mpg',
        filename='actual_vs_predicted_mpg.png',
        title='Actual vs. Predicted MPG',
        xlabel='Actual MPG', ylabel='Predicted MPG',
        color='darkgreen', line_color='gray'
    ),
]


class Visualizer:
    """
    Renders chart specifications to image files.

    Example:
        >>> viz = Visualizer(output_dir="outputs")
        >>> viz.plot(DEFAULT_CHARTS[1], df)
        PosixPath('outputs/mpg_by_transmission.png')
    """

    def __init__(
        self,
        output_dir: str = "outputs",
        config: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize the Visualizer.

        Args:
            output_dir: Directory to save plots
            config: Configuration dictionary
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

        self.config = {
            'dpi': 300,
            'point_size': 30,
            'progress': True,
            'heatmap': {
                'enabled': False,
                'filename': 'correlation_matrix.png',
                'width': 7.0,
                'height': 6.0
            }
        }

        if config:
            for key, value in config.items():
                if isinstance(value, dict) and key in self.config:
                    self.config[key].update(value)
                else:
                    self.config[key] = value

        logger.info(f"Initialized Visualizer (output: {self.output_dir})")

    def plot(self, spec: ChartSpec, data: pd.DataFrame) -> Path:
        """
        Render ``spec`` from ``data`` and save it.

        Returns:
            Path to the saved image

        Raises:
            ValueError: If a bound column is missing from ``data``
            OSError: If the image cannot be written
        """
        require_columns(data, [c for c in (spec.x, spec.y, spec.fill) if c])

        fig, ax = plt.subplots(figsize=(spec.width, spec.height))
        try:
            if spec.kind == 'bar':
                self._draw_bar(ax, spec, data)
            elif spec.kind == 'box':
                self._draw_box(ax, spec, data)
            elif spec.kind == 'scatter_fit':
                self._draw_scatter_fit(ax, spec, data)
            else:
                self._draw_scatter_reference(ax, spec, data)

            ax.set_title(spec.title, fontsize=12, fontweight='bold')
            ax.set_xlabel(spec.xlabel or spec.x)
            ax.set_ylabel(spec.ylabel or spec.y)

            return self._save(fig, spec.filename)
        finally:
            plt.close(fig)

    def _draw_bar(self, ax, spec: ChartSpec, data: pd.DataFrame) -> None:
        order = data[spec.x].astype(str).tolist()
        ax.bar(order, data[spec.y].to_numpy(), color=spec.color)
        ax.grid(True, alpha=0.3, axis='y')

    def _draw_box(self, ax, spec: ChartSpec, data: pd.DataFrame) -> None:
        sns.boxplot(data=data, x=spec.x, y=spec.y, hue=spec.fill, dodge=False, ax=ax)

    def _draw_scatter_fit(self, ax, spec: ChartSpec, data: pd.DataFrame) -> None:
        x = data[spec.x].to_numpy(dtype=float)
        y = data[spec.y].to_numpy(dtype=float)

        ax.scatter(x, y, color=spec.color, s=self.config['point_size'])

        slope, intercept = np.polyfit(x, y, 1)
        xs = np.linspace(x.min(), x.max(), 100)
        ax.plot(xs, intercept + slope * xs, color=spec.line_color, lw=2)

        logger.debug(f"  Fit line {spec.y} = {intercept:.4f} + {slope:.4f} * {spec.x}")

    def _draw_scatter_reference(self, ax, spec: ChartSpec, data: pd.DataFrame) -> None:
        ax.scatter(data[spec.x], data[spec.y], color=spec.color, s=self.config['point_size'])
        ax.axline((0, 0), slope=1, linestyle='--', color=spec.line_color)

    def plot_correlation_heatmap(self, matrix: pd.DataFrame) -> Path:
        """
        Plot the upper triangle of a correlation matrix with the
        coefficients printed in each cell.
        """
        heatmap_config = self.config['heatmap']
        fig, ax = plt.subplots(figsize=(heatmap_config['width'], heatmap_config['height']))
        try:
            mask = np.tril(np.ones(matrix.shape, dtype=bool), k=-1)
            sns.heatmap(
                matrix, mask=mask, annot=True, fmt='.2f',
                cmap='coolwarm', vmin=-1, vmax=1, square=True, ax=ax
            )
            ax.set_title('Correlation Matrix', fontsize=12, fontweight='bold')

            return self._save(fig, heatmap_config['filename'])
        finally:
            plt.close(fig)

    def render_all(
        self,
        specs: List[ChartSpec],
        tables: Dict[str, pd.DataFrame]
    ) -> List[Path]:
        """
        Render every spec from the table its ``source`` names.

        Raises:
            ValueError: If a spec names a source not present in ``tables``
        """
        paths = []
        for spec in tqdm(specs, desc="Rendering charts", disable=not self.config['progress']):
            if spec.source not in tables:
                raise ValueError(
                    f"Chart '{spec.filename}' reads unknown source '{spec.source}'"
                )
            paths.append(self.plot(spec, tables[spec.source]))

        return paths

    def _save(self, fig, filename: str) -> Path:
        file_path = self.output_dir / filename
        fig.tight_layout()
        # No bbox_inches='tight': the saved size must stay figsize * dpi
        fig.savefig(file_path, dpi=self.config['dpi'])
        logger.info(f"Saved plot: {file_path.name}")
        return file_path
