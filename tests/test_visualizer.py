"""
Tests for Stage 3 chart rendering.
"""

import matplotlib.image as mpimg
import pytest

from mtcars_eda.stage2 import Aggregator, Correlator
from mtcars_eda.stage3 import Visualizer, ChartSpec, DEFAULT_CHARTS


@pytest.fixture
def visualizer(tmp_path):
    return Visualizer(output_dir=tmp_path / 'plots', config={'dpi': 50, 'progress': False})


def test_render_default_charts(visualizer, fitted):
    _, augmented = fitted
    summary = Aggregator().summarize(augmented)

    paths = visualizer.render_all(DEFAULT_CHARTS, {'table': augmented, 'summary': summary})

    assert [p.name for p in paths] == [
        'avg_mpg_by_cylinders.png',
        'mpg_by_transmission.png',
        'hp_vs_mpg.png',
        'actual_vs_predicted_mpg.png',
    ]
    for path in paths:
        assert path.exists()
        # 6 x 4 inches at 50 dpi
        assert mpimg.imread(path).shape[:2] == (200, 300)


def test_each_kind(visualizer, recoded_df):
    for kind in ('box', 'scatter_fit', 'scatter_reference'):
        spec = ChartSpec(kind=kind, x='hp' if kind != 'box' else 'cyl', y='mpg',
                         filename=f'{kind}.png', title=kind)
        assert visualizer.plot(spec, recoded_df).exists()


def test_unknown_kind():
    with pytest.raises(ValueError, match="Unknown chart kind"):
        ChartSpec(kind='pie', x='cyl', y='mpg', filename='pie.png')


def test_missing_column(visualizer, recoded_df):
    spec = ChartSpec(kind='scatter_fit', x='torque', y='mpg', filename='torque.png')

    with pytest.raises(ValueError, match="not found"):
        visualizer.plot(spec, recoded_df)


def test_unknown_source(visualizer, recoded_df):
    with pytest.raises(ValueError, match="unknown source"):
        visualizer.render_all([DEFAULT_CHARTS[0]], {'table': recoded_df})


def test_unwritable_output(visualizer, recoded_df, tmp_path):
    blocker = tmp_path / 'blocker'
    blocker.write_text('not a directory')
    visualizer.output_dir = blocker

    with pytest.raises(OSError):
        visualizer.plot(DEFAULT_CHARTS[1], recoded_df)


def test_correlation_heatmap(visualizer, recoded_df):
    matrix = Correlator().correlate(recoded_df)
    path = visualizer.plot_correlation_heatmap(matrix)

    assert path.name == 'correlation_matrix.png'
    assert path.exists()


def test_spec_from_dict():
    spec = ChartSpec.from_dict({
        'kind': 'bar', 'x': 'cyl', 'y': 'avg_mpg',
        'filename': 'bar.png', 'source': 'summary'
    })

    assert spec.source == 'summary'
    assert spec.width == 6.0
