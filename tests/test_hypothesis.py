"""
Tests for Stage 4 hypothesis tests.
"""

import numpy as np
import pandas as pd
import pytest

from mtcars_eda.stage4 import HypothesisTester, welch_t_test, correlation_test


def test_welch_reference_values(recoded_df):
    result = welch_t_test(recoded_df, 'mpg', 'am')

    assert result.statistic == pytest.approx(-3.7671, abs=1e-4)
    assert result.df == pytest.approx(18.332, abs=1e-3)
    assert result.p_value == pytest.approx(0.001374, abs=1e-6)
    assert result.conf_int[0] == pytest.approx(-11.28019, abs=1e-4)
    assert result.conf_int[1] == pytest.approx(-3.20968, abs=1e-4)
    assert result.estimates['mean in group Automatic'] == pytest.approx(17.147368, abs=1e-6)
    assert result.estimates['mean in group Manual'] == pytest.approx(24.392308, abs=1e-6)


def test_correlation_reference_values(recoded_df):
    result = correlation_test(recoded_df, 'wt', 'mpg')

    assert result.estimates['cor'] == pytest.approx(-0.8676594, abs=1e-6)
    assert result.statistic == pytest.approx(-9.559044, abs=1e-5)
    assert result.df == 30
    assert result.p_value == pytest.approx(1.293959e-10, rel=1e-3)
    assert result.conf_int[0] == pytest.approx(-0.9338264, abs=1e-5)
    assert result.conf_int[1] == pytest.approx(-0.7440872, abs=1e-5)


def test_t_statistic_formula(recoded_df):
    result = correlation_test(recoded_df, 'hp', 'qsec')
    r = result.estimates['cor']

    assert result.statistic == pytest.approx(r * np.sqrt(30 / (1 - r ** 2)))


def test_p_values_in_unit_interval():
    rng = np.random.default_rng(0)
    for _ in range(20):
        df = pd.DataFrame({
            'x': rng.normal(size=12),
            'y': rng.normal(size=12),
            'g': ['a', 'b'] * 6,
        })
        assert 0.0 <= welch_t_test(df, 'x', 'g').p_value <= 1.0
        assert 0.0 <= correlation_test(df, 'x', 'y').p_value <= 1.0


def test_two_levels_required(recoded_df):
    with pytest.raises(ValueError, match="exactly 2 levels"):
        welch_t_test(recoded_df, 'mpg', 'cyl')


def test_group_size(recoded_df):
    df = recoded_df.head(3)  # am = Manual, Manual, Manual

    with pytest.raises(ValueError):
        welch_t_test(df, 'mpg', 'am')

    df = pd.DataFrame({'v': [1.0, 2.0, 3.0], 'g': ['a', 'a', 'b']})
    with pytest.raises(ValueError, match="need 2"):
        welch_t_test(df, 'v', 'g')


def test_constant_column():
    df = pd.DataFrame({'x': [1.0, 1.0, 1.0, 1.0], 'y': [1.0, 2.0, 3.0, 4.0]})

    with pytest.raises(ValueError, match="distinct values"):
        correlation_test(df, 'x', 'y')


def test_tester_runs_configured_tests(recoded_df):
    results = HypothesisTester(config={'correlation_test': {'x': 'hp'}}).run(recoded_df)

    assert set(results) == {'t_test', 'correlation_test'}
    assert results['correlation_test'].data == 'hp and mpg'
    assert "Welch Two Sample t-test" in results['t_test'].summary()
