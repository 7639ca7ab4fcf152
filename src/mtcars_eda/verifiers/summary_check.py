"""
Verification V2: Summary Check

Validates outputs from Stage 2:
- Grouped summary covers every group and every row exactly once
- Correlation matrix is square, symmetric and has a unit diagonal
"""

import numpy as np
import pandas as pd
from typing import Dict, Any, Optional

from ..utils.logging_utils import get_logger
from .report import new_report, finalize_report

logger = get_logger(__name__)


class SummaryChecker:
    """
    Verification V2: grouped summary and correlation matrix consistency.

    Example:
        >>> checker = SummaryChecker()
        >>> report = checker.verify_group_summary(summary, df, 'cyl')
        >>> report['status']
        'pass'
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = {
            'tolerance': 1e-9
        }

        if config:
            self.config.update(config)

        logger.info("Initialized Summary Checker (V2)")

    def verify_group_summary(
        self,
        summary: pd.DataFrame,
        df: pd.DataFrame,
        group: str
    ) -> Dict[str, Any]:
        """
        Check that ``summary`` has one row per distinct value of
        ``df[group]`` and that its counts add up to the table's row count.
        """
        report = new_report(f"group summary by {group}")

        expected_groups = int(df[group].nunique(dropna=True))
        total_count = int(summary['count'].sum())
        expected_rows = int(df[group].notna().sum())

        report['checks']['group_summary'] = {
            'groups': len(summary),
            'expected_groups': expected_groups,
            'count_total': total_count,
            'expected_total': expected_rows
        }

        if len(summary) != expected_groups:
            report['errors'].append({
                'check': 'group_summary',
                'type': 'group_count_mismatch',
                'message': f'{len(summary)} summary rows for {expected_groups} distinct groups'
            })

        if total_count != expected_rows:
            report['errors'].append({
                'check': 'group_summary',
                'type': 'row_count_mismatch',
                'message': f'Group counts sum to {total_count}, table has {expected_rows} rows'
            })

        if summary[group].duplicated().any():
            report['errors'].append({
                'check': 'group_summary',
                'type': 'duplicate_groups',
                'message': f'Duplicate group keys in summary: {summary[group][summary[group].duplicated()].tolist()}'
            })

        finalize_report(report)
        logger.info(f"  Group summary check: {report['status']}")

        return report

    def verify_correlation(self, matrix: pd.DataFrame) -> Dict[str, Any]:
        """Check that ``matrix`` is square, symmetric and has a unit diagonal."""
        report = new_report("correlation matrix")
        tol = self.config['tolerance']

        values = matrix.to_numpy(dtype=float)
        square = values.shape[0] == values.shape[1] and list(matrix.index) == list(matrix.columns)

        report['checks']['correlation'] = {
            'shape': list(values.shape),
            'square': square
        }

        if not square:
            report['errors'].append({
                'check': 'correlation',
                'type': 'not_square',
                'message': f'Matrix shape {values.shape} or axis labels differ'
            })
            finalize_report(report)
            return report

        asymmetry = float(np.max(np.abs(values - values.T))) if values.size else 0.0
        diagonal_error = float(np.max(np.abs(np.diag(values) - 1.0))) if values.size else 0.0

        report['checks']['correlation'].update({
            'max_asymmetry': asymmetry,
            'max_diagonal_error': diagonal_error
        })

        if asymmetry > tol:
            report['errors'].append({
                'check': 'correlation',
                'type': 'asymmetric',
                'message': f'Matrix is not symmetric (max difference {asymmetry:.3g})'
            })

        if diagonal_error > tol:
            report['errors'].append({
                'check': 'correlation',
                'type': 'diagonal',
                'message': f'Diagonal differs from 1.0 by up to {diagonal_error:.3g}'
            })

        if np.any(np.abs(values) > 1 + tol):
            report['errors'].append({
                'check': 'correlation',
                'type': 'out_of_range',
                'message': 'Correlation outside [-1, 1]'
            })

        finalize_report(report)
        logger.info(f"  Correlation check: {report['status']}")

        return report
