"""
Verification V4: Metrics Check

Validates outputs from Stage 4:
- Fitted model beats the intercept-only baseline on the fitted table
- Residual diagnostics
- Test p-values are valid probabilities
- Exported file reads back with the same shape and labels
"""

import numpy as np
import pandas as pd
from pathlib import Path
from typing import Dict, Any, Optional, Union

from ..utils.logging_utils import get_logger
from ..utils.file_utils import load_csv
from ..stage4.models import LinearModel
from .report import new_report, finalize_report

logger = get_logger(__name__)


class MetricsChecker:
    """
    Verification V4: model, test and export validation.

    Example:
        >>> checker = MetricsChecker()
        >>> report = checker.verify_model(model, df)
        >>> report['checks']['model']['mse'] <= report['checks']['model']['baseline_mse']
        True
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = {
            'min_r2': 0.0,
            'residual_mean_threshold': 0.1,  # |mean / std| of residuals
            'max_skewness': 2.0
        }

        if config:
            self.config.update(config)

        logger.info("Initialized Metrics Checker (V4)")

    def verify_model(self, model: LinearModel, df: pd.DataFrame) -> Dict[str, Any]:
        """
        Compare the model's mean squared residual with that of predicting
        the target mean for every row, and inspect the residuals.
        """
        report = new_report(model.formula())

        y = df[model.target].astype(float)
        residuals = y - model.predict(df)

        mse = float(np.mean(residuals ** 2))
        baseline_mse = float(np.mean((y - y.mean()) ** 2))

        report['checks']['model'] = {
            'mse': mse,
            'baseline_mse': baseline_mse,
            'r2': model.r_squared
        }

        if mse > baseline_mse * (1 + 1e-12):
            report['errors'].append({
                'check': 'model',
                'type': 'worse_than_baseline',
                'message': f'Model MSE ({mse:.4f}) exceeds intercept-only MSE ({baseline_mse:.4f})'
            })

        if model.r_squared < self.config['min_r2']:
            report['warnings'].append({
                'check': 'model',
                'type': 'low_r2',
                'message': f'R² ({model.r_squared:.3f}) below threshold ({self.config["min_r2"]})'
            })

        self._check_residuals(residuals, report)

        finalize_report(report)
        logger.info(f"  Model check: {report['status']}")

        return report

    def _check_residuals(self, residuals: pd.Series, report: Dict[str, Any]) -> None:
        residual_mean = float(residuals.mean())
        residual_std = float(residuals.std())
        residual_skew = float(residuals.skew())

        report['checks']['residuals'] = {
            'mean': residual_mean,
            'std': residual_std,
            'skewness': residual_skew
        }

        if residual_std > 0 and abs(residual_mean / residual_std) > self.config['residual_mean_threshold']:
            report['warnings'].append({
                'check': 'residuals',
                'type': 'non_zero_mean',
                'message': f'Residual mean ({residual_mean:.4f}) not close to zero - possible bias'
            })

        if abs(residual_skew) > self.config['max_skewness']:
            report['warnings'].append({
                'check': 'residuals',
                'type': 'high_skewness',
                'message': f'Residuals are highly skewed ({residual_skew:.2f}) - check for outliers'
            })

    def verify_tests(self, results: Dict[str, Any]) -> Dict[str, Any]:
        """Check that every test result carries a p-value in [0, 1]."""
        report = new_report("hypothesis tests")

        for name, result in results.items():
            p_value = result.p_value
            valid = p_value is not None and not np.isnan(p_value) and 0.0 <= p_value <= 1.0
            report['checks'][name] = {'p_value': p_value, 'valid': valid}

            if not valid:
                report['errors'].append({
                    'check': name,
                    'type': 'invalid_p_value',
                    'message': f'{name} p-value {p_value} outside [0, 1]'
                })

        finalize_report(report)
        logger.info(f"  Test check: {report['status']}")

        return report

    def verify_export(self, path: Union[str, Path], df: pd.DataFrame) -> Dict[str, Any]:
        """
        Read the exported file back and compare its shape and the label text
        of every categorical column with ``df``.
        """
        report = new_report(str(path))

        exported = load_csv(path)

        report['checks']['export'] = {
            'rows': len(exported),
            'columns': len(exported.columns),
            'expected_rows': len(df),
            'expected_columns': len(df.columns)
        }

        if exported.shape != df.shape:
            report['errors'].append({
                'check': 'export',
                'type': 'shape_mismatch',
                'message': f'Exported shape {exported.shape} differs from table shape {df.shape}'
            })

        if list(exported.columns) != [str(c) for c in df.columns]:
            report['errors'].append({
                'check': 'export',
                'type': 'header_mismatch',
                'message': f'Exported header {list(exported.columns)} differs from {list(df.columns)}'
            })

        categorical = [
            col for col in df.columns
            if isinstance(df[col].dtype, pd.CategoricalDtype) and col in exported.columns
        ]
        for col in categorical:
            written = exported[col].astype(str).tolist()
            expected = df[col].astype(str).tolist()
            if written != expected:
                report['errors'].append({
                    'check': 'export',
                    'type': 'label_mismatch',
                    'column': col,
                    'message': f'Labels of column {col} differ after export'
                })

        report['checks']['export']['categorical_columns'] = categorical

        finalize_report(report)
        logger.info(f"  Export check: {report['status']}")

        return report
