import logging
from typing import Callable, Iterable, Optional

from .comparator import Comparator
from .outcome import Mode, Outcome
from .runner import DualRunner

LOGGER = logging.getLogger(__name__)

Callback = Callable[[str, Outcome, Outcome], None]


def run_batch(
    statements: Iterable[str],
    handle_a,
    handle_b,
    mode: Mode,
    callback: Callback,
    runner: Optional[DualRunner] = None,
    comparator: Optional[Comparator] = None,
    warehouse=None,
    timeout: Optional[float] = None,
) -> int:
    """
    Compare every statement in order and report each inconsistency.

    An exception raised by the callback stops the batch and is propagated
    as is. Returns the number of inconsistencies reported.
    """
    comparator = comparator or Comparator()
    own_runner = runner is None
    runner = runner or DualRunner()
    inconsistencies = 0
    try:
        for statement in statements:
            if not statement or not statement.strip():
                continue
            source, target, _ = runner.run(statement, handle_a, handle_b, warehouse, timeout)
            verdict = comparator.check(statement, source, target, mode)
            if verdict.consistent:
                LOGGER.debug("consistent: %s", statement)
                continue
            inconsistencies += 1
            callback(verdict.statement, verdict.source, verdict.target)
    finally:
        if own_runner:
            runner.close()
    return inconsistencies


def run_batch_by_url(statements, url_a: str, url_b: str, mode: Mode, callback: Callback, provider, **kwargs) -> int:
    """Resolve both engines through the provider, then run the batch."""
    handle_a = provider.get(url_a)
    handle_b = provider.get(url_b)
    return run_batch(statements, handle_a, handle_b, mode, callback, **kwargs)
