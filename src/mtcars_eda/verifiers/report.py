"""
Verification report helpers shared by the checkers.
"""

from datetime import datetime
from typing import Dict, Any


def new_report(subject: str) -> Dict[str, Any]:
    return {
        'subject': subject,
        'timestamp': datetime.now().isoformat(),
        'status': 'pass',
        'errors': [],
        'warnings': [],
        'checks': {}
    }


def finalize_report(report: Dict[str, Any]) -> Dict[str, Any]:
    """Derive the overall status from the collected errors and warnings."""
    if report['errors']:
        report['status'] = 'fail'
    elif report['warnings']:
        report['status'] = 'pass_with_warnings'
    else:
        report['status'] = 'pass'
    return report
