"""
Tests for Stage 2 grouped statistics.
"""

import pytest

from mtcars_eda.stage2 import Aggregator


def test_default_summary(recoded_df):
    summary = Aggregator().summarize(recoded_df)

    assert summary.columns.tolist() == ['cyl', 'count', 'avg_mpg', 'sd_mpg', 'avg_hp', 'sd_hp']
    assert len(summary) == recoded_df['cyl'].nunique()
    assert summary['count'].sum() == len(recoded_df)


def test_first_seen_order(recoded_df):
    summary = Aggregator().summarize(recoded_df)

    assert summary['cyl'].tolist() == ['6', '4', '8']
    assert summary['count'].tolist() == [7, 11, 14]


def test_sorted_order(recoded_df):
    summary = Aggregator(config={'group_order': 'sorted'}).summarize(recoded_df)

    assert summary['cyl'].tolist() == ['4', '6', '8']

    by_cyl = summary.set_index('cyl')
    assert by_cyl.loc['4', 'avg_mpg'] == pytest.approx(26.66)
    assert by_cyl.loc['6', 'avg_mpg'] == pytest.approx(19.74)
    assert by_cyl.loc['8', 'avg_mpg'] == pytest.approx(15.1)
    assert by_cyl.loc['4', 'sd_mpg'] == pytest.approx(4.51)
    assert by_cyl.loc['6', 'sd_mpg'] == pytest.approx(1.45)
    assert by_cyl.loc['8', 'sd_mpg'] == pytest.approx(2.56)


def test_group_by_override(recoded_df):
    summary = Aggregator(config={'columns': {'mpg': ['mean']}}).summarize(recoded_df, group_by='am')

    assert summary.columns.tolist() == ['am', 'count', 'avg_mpg']
    assert summary.set_index('am').loc['Manual', 'avg_mpg'] == pytest.approx(24.39)


def test_numeric_group_column(raw_df):
    summary = Aggregator(config={'group_order': 'sorted'}).summarize(raw_df)

    assert summary['cyl'].tolist() == [4, 6, 8]


def test_input_not_mutated(recoded_df):
    before = recoded_df.copy()
    Aggregator().summarize(recoded_df)

    assert recoded_df.equals(before)


def test_unknown_op():
    with pytest.raises(ValueError, match="Unknown aggregation op"):
        Aggregator(config={'columns': {'mpg': ['median']}})


def test_unknown_group_order():
    with pytest.raises(ValueError, match="Unknown group order"):
        Aggregator(config={'group_order': 'random'})


def test_missing_column(recoded_df):
    with pytest.raises(ValueError, match="not found"):
        Aggregator(config={'columns': {'torque': ['mean']}}).summarize(recoded_df)
