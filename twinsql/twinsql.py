import logging
import os
import sys

from rich import print as rprint

from .batch import run_batch
from .command_line import parse_command_line
from .comparator import Comparator, FailurePolicy
from .configuration import Configuration
from .outcome import Mode
from .provider import ConnectionProvider
from .relational import RelationalExecutor
from .report import ConsoleReporter
from .runner import DualRunner
from .statements import read_statements
from .warehouse import WarehouseExecutor

LOGGER = logging.getLogger(__name__)


def compare(settings, base_dir=".", reporter=None, provider=None) -> int:
    """Run every statement of the settings; returns the inconsistency count."""
    statements_file = os.path.join(base_dir, settings.statements)
    statements = read_statements(statements_file)
    reporter = reporter or ConsoleReporter()
    mode = Mode(settings.mode)
    comparator = Comparator(settings.failure_policy)
    runner = DualRunner(
        relational=RelationalExecutor(settings.max_rows),
        warehouse_executor=WarehouseExecutor(settings.max_rows),
    )
    own_provider = provider is None
    provider = provider or ConnectionProvider()
    try:
        handle_a = provider.get(settings.source.url())
        handle_b = provider.get(settings.target.url()) if settings.target else None
        warehouse = provider.warehouse(settings.warehouse) if settings.warehouse else None
        rprint(f"Comparing {len([s for s in statements if s])} statements in {mode.value} mode")
        errors = run_batch(
            statements,
            handle_a,
            handle_b,
            mode,
            reporter,
            runner=runner,
            comparator=comparator,
            warehouse=warehouse,
            timeout=settings.timeout,
        )
    finally:
        runner.close()
        if own_provider:
            provider.close()
    reporter.summary(len([s for s in statements if s]))
    return errors


def main(argv=None):
    args = parse_command_line(sys.argv[1:] if argv is None else argv)
    config = Configuration(args.loglevel or "INFO")
    settings = config.settings(args.filename)
    if args.loglevel is None:
        Configuration(settings.loglevel)
    if args.unordered:
        settings.mode = Mode.UNORDERED
    if args.strict_failures:
        settings.failure_policy = FailurePolicy.STRICT
    errors = compare(settings, os.path.dirname(os.path.abspath(args.filename)))
    if errors:
        sys.exit(1)


if __name__ == "__main__":
    main()
