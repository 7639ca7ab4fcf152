"""
Tests for the verification checkpoints.
"""

import pandas as pd

from mtcars_eda.stage2 import Aggregator, Correlator
from mtcars_eda.stage4 import Exporter, HypothesisTester
from mtcars_eda.stage4.hypothesis import HypothesisTestResult
from mtcars_eda.verifiers import SummaryChecker, MetricsChecker


def test_group_summary_passes(recoded_df):
    summary = Aggregator().summarize(recoded_df)
    report = SummaryChecker().verify_group_summary(summary, recoded_df, 'cyl')

    assert report['status'] == 'pass'
    assert report['checks']['group_summary']['count_total'] == 32


def test_group_summary_missing_group(recoded_df):
    summary = Aggregator().summarize(recoded_df).iloc[1:]
    report = SummaryChecker().verify_group_summary(summary, recoded_df, 'cyl')

    assert report['status'] == 'fail'
    assert {e['type'] for e in report['errors']} == {'group_count_mismatch', 'row_count_mismatch'}


def test_correlation_passes(recoded_df):
    report = SummaryChecker().verify_correlation(Correlator().correlate(recoded_df))

    assert report['status'] == 'pass'


def test_correlation_asymmetric(recoded_df):
    matrix = Correlator().correlate(recoded_df)
    matrix.loc['wt', 'mpg'] = 0.5
    report = SummaryChecker().verify_correlation(matrix)

    assert report['status'] == 'fail'
    assert report['errors'][0]['type'] == 'asymmetric'


def test_correlation_not_square():
    matrix = pd.DataFrame([[1.0, 0.2]], index=['a'], columns=['a', 'b'])
    report = SummaryChecker().verify_correlation(matrix)

    assert report['status'] == 'fail'
    assert report['errors'][0]['type'] == 'not_square'


def test_model_beats_baseline(fitted):
    model, augmented = fitted
    report = MetricsChecker().verify_model(model, augmented)

    assert report['status'] in ('pass', 'pass_with_warnings')
    assert report['checks']['model']['mse'] <= report['checks']['model']['baseline_mse']


def test_tests_valid(recoded_df):
    results = HypothesisTester().run(recoded_df)
    report = MetricsChecker().verify_tests(results)

    assert report['status'] == 'pass'


def test_tests_invalid_p_value():
    bad = HypothesisTestResult(test='fake', data='x', statistic=1.0, df=None, p_value=1.5)
    report = MetricsChecker().verify_tests({'fake': bad})

    assert report['status'] == 'fail'
    assert report['errors'][0]['type'] == 'invalid_p_value'


def test_export_round_trip(tmp_path, fitted):
    _, augmented = fitted
    path = Exporter(output_dir=tmp_path).export(augmented)
    report = MetricsChecker().verify_export(path, augmented)

    assert report['status'] == 'pass'
    assert set(report['checks']['export']['categorical_columns']) == {'cyl', 'vs', 'am', 'gear', 'carb'}


def test_export_shape_mismatch(tmp_path, fitted):
    _, augmented = fitted
    path = Exporter(output_dir=tmp_path).export(augmented.head(10))
    report = MetricsChecker().verify_export(path, augmented)

    assert report['status'] == 'fail'
    assert report['errors'][0]['type'] == 'shape_mismatch'
