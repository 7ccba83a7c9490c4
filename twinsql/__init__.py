"""
twinsql runs the same SQL statements against two data sources and reports
where they behave differently.
Let us say a legacy PostgreSQL database is being migrated to a new one:
every statement is executed on both, concurrently, and the outcomes
(rows, affected-row counts, failures) are compared.
A minimal usage example:

    from twinsql import ConnectionProvider, Mode, run_batch_by_url

    with ConnectionProvider() as provider:
        run_batch_by_url(statements, url_a, url_b, Mode.UNORDERED, report, provider)
"""

from .batch import run_batch, run_batch_by_url
from .classifier import KeywordClassifier, ParsedClassifier, StatementKind
from .comparator import Comparator, FailurePolicy, Verdict
from .outcome import Mode, Outcome, ReadOutcome, WriteOutcome
from .provider import ConnectionProvider
from .runner import DualRunner

__version__ = '0.1.0'

__all__ = [
    '__version__',
    'Comparator',
    'ConnectionProvider',
    'DualRunner',
    'FailurePolicy',
    'KeywordClassifier',
    'Mode',
    'Outcome',
    'ParsedClassifier',
    'ReadOutcome',
    'StatementKind',
    'Verdict',
    'WriteOutcome',
    'run_batch',
    'run_batch_by_url',
]
