"""
Tests for Stage 1 categorical recoding.
"""

import pandas as pd
import pytest

from mtcars_eda.stage1 import Recoder, RecodeRule


def test_default_recoding(raw_df, recoded_df):
    assert recoded_df['am'].cat.categories.tolist() == ['Automatic', 'Manual']
    assert recoded_df['vs'].cat.categories.tolist() == ['V-shaped', 'Straight']
    assert recoded_df['cyl'].cat.categories.tolist() == ['4', '6', '8']
    assert recoded_df['carb'].cat.categories.tolist() == ['1', '2', '3', '4', '6', '8']

    assert recoded_df['am'].value_counts()['Automatic'] == 19
    assert recoded_df['am'].value_counts()['Manual'] == 13
    assert recoded_df.loc['Mazda RX4', 'vs'] == 'V-shaped'
    assert recoded_df.loc['Datsun 710', 'cyl'] == '4'


def test_recoding_is_pure(raw_df, recoded_df):
    """The input table keeps its numeric codes; untouched columns are equal."""
    assert raw_df['am'].dtype == 'int64'
    assert raw_df['cyl'].tolist()[:3] == [6, 6, 4]
    pd.testing.assert_series_equal(raw_df['mpg'], recoded_df['mpg'])
    assert recoded_df.index.tolist() == raw_df.index.tolist()
    assert recoded_df.columns.tolist() == raw_df.columns.tolist()


def test_positional_one_based_codes():
    df = pd.DataFrame({'grade': [1, 2, 3, 1]})
    recoded = Recoder([RecodeRule('grade', ['low', 'mid', 'high'], base=1)]).apply(df)

    assert recoded['grade'].tolist() == ['low', 'mid', 'high', 'low']


def test_code_out_of_range():
    df = pd.DataFrame({'am': [0, 1, 2]})

    with pytest.raises(ValueError, match=r"code\(s\) \[2\]"):
        Recoder([RecodeRule('am', ['Automatic', 'Manual'])]).apply(df)


def test_code_not_configured(raw_df):
    rules = [RecodeRule('cyl', ['4', '6'], codes=[4, 6])]

    with pytest.raises(ValueError, match="outside configured labels"):
        Recoder(rules).apply(raw_df)


def test_invalid_rules():
    with pytest.raises(ValueError):
        RecodeRule('cyl', ['4', '6'], codes=[4, 6, 8])
    with pytest.raises(ValueError):
        RecodeRule('am', ['a', 'a'])
    with pytest.raises(ValueError):
        RecodeRule('am', ['a', 'b'], base=2)


def test_missing_column(raw_df):
    with pytest.raises(ValueError, match="not found"):
        Recoder([RecodeRule('doors', ['2', '4'], codes=[2, 4])]).apply(raw_df)


def test_from_config(raw_df):
    recoder = Recoder.from_config({
        'rules': [{'column': 'am', 'labels': ['auto', 'manual']}]
    })
    recoded = recoder.apply(raw_df)

    assert recoded['am'].cat.categories.tolist() == ['auto', 'manual']
    assert recoded['vs'].dtype == 'int64'


def test_from_config_without_rules_uses_defaults():
    assert len(Recoder.from_config({}).rules) == 5
