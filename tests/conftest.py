"""
Shared fixtures for the mtcars analysis tests.
"""

import pytest
import yaml

from mtcars_eda.config import Config
from mtcars_eda.stage1 import Recoder, load_dataset
from mtcars_eda.stage4 import Modeler


@pytest.fixture
def raw_df():
    """The canonical 32-row table before recoding."""
    return load_dataset()


@pytest.fixture
def recoded_df(raw_df):
    """The canonical table with the default categorical recoding."""
    return Recoder().apply(raw_df)


@pytest.fixture
def fitted(recoded_df):
    """Fitted mpg ~ wt + hp model and the table with its predictions."""
    modeler = Modeler()
    model = modeler.fit(recoded_df)
    return model, modeler.add_predictions(recoded_df, model)


@pytest.fixture
def make_config(tmp_path):
    """Build a Config from a dict written to a temporary YAML file."""
    def _make(data=None):
        data = dict(data or {})
        data.setdefault('output', {}).setdefault('dir', str(tmp_path / 'outputs'))
        data.setdefault('visualizer', {}).setdefault('progress', False)
        data['visualizer'].setdefault('dpi', 50)
        config_file = tmp_path / 'pipeline_config.yaml'
        config_file.write_text(yaml.safe_dump(data))
        return Config(config_file)
    return _make
