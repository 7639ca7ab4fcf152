"""
Tests for Stage 4 CSV export.
"""

import pandas as pd
import pytest

from mtcars_eda.stage4 import Exporter


def test_round_trip(tmp_path, fitted):
    _, augmented = fitted
    path = Exporter(output_dir=tmp_path).export(augmented)

    assert path == tmp_path / 'mtcars_enhanced.csv'

    exported = pd.read_csv(path)
    assert exported.shape == (32, 12)
    assert exported.columns.tolist() == augmented.columns.tolist()
    assert exported['am'].tolist() == augmented['am'].astype(str).tolist()
    assert exported['vs'].iloc[0] == 'V-shaped'
    assert set(exported['am']) == {'Automatic', 'Manual'}


def test_index_not_written(tmp_path, fitted):
    _, augmented = fitted
    path = Exporter(output_dir=tmp_path).export(augmented)

    header = path.read_text().splitlines()[0]
    assert header.startswith('mpg,cyl,disp')
    assert 'Mazda RX4' not in path.read_text()


def test_rerun_overwrites(tmp_path, recoded_df):
    exporter = Exporter(output_dir=tmp_path)
    exporter.export(recoded_df)
    path = exporter.export(recoded_df.head(4))

    assert len(pd.read_csv(path)) == 4


def test_custom_path_and_delimiter(tmp_path, recoded_df):
    target = tmp_path / 'nested' / 'cars.tsv'
    path = Exporter(config={'delimiter': '\t'}).export(recoded_df, target)

    assert path == target
    assert pd.read_csv(path, sep='\t').shape == recoded_df.shape


def test_unwritable_path(tmp_path, recoded_df):
    blocker = tmp_path / 'blocker'
    blocker.write_text('not a directory')

    with pytest.raises(OSError):
        Exporter(output_dir=blocker).export(recoded_df)
