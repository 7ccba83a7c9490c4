import logging
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Optional, Tuple

from .classifier import KeywordClassifier, StatementKind
from .errors import ComparisonTimeout, ConnectionFailure
from .outcome import Outcome
from .relational import RelationalExecutor
from .warehouse import WarehouseExecutor

LOGGER = logging.getLogger(__name__)


class DualRunner:
    """
    Run one statement on two sources at the same time and wait for both.

    The two executions are futures of a two-worker pool joined before
    anything is returned. Without a timeout the runner waits forever; with
    one, the pool holding the hung side is abandoned without waiting, a
    fresh pool takes its place and ComparisonTimeout is raised.
    """

    def __init__(self, classifier=None, relational=None, warehouse_executor=None):
        self.classifier = classifier or KeywordClassifier()
        self.relational = relational or RelationalExecutor()
        self.warehouse_executor = warehouse_executor or WarehouseExecutor()
        self._pool = self._new_pool()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def close(self):
        self._pool.shutdown(wait=True)

    def _new_pool(self):
        return ThreadPoolExecutor(max_workers=2, thread_name_prefix="twinsql")

    def _abandon_pool(self):
        # the hung thread keeps running until its backend returns
        self._pool.shutdown(wait=False, cancel_futures=True)
        self._pool = self._new_pool()

    def run(
        self,
        statement: str,
        handle_a,
        handle_b=None,
        warehouse=None,
        timeout: Optional[float] = None,
    ) -> Tuple[Outcome, Outcome, StatementKind]:
        kind = self.classifier.classify(statement)
        if kind is StatementKind.WRITE or warehouse is None:
            if handle_b is None:
                raise ValueError(f"{kind.value} statements need two relational handles")
            executor_b, target = self.relational, handle_b
        else:
            executor_b, target = self.warehouse_executor, warehouse

        future_a = self._pool.submit(self.relational.execute, handle_a, statement, kind)
        future_b = self._pool.submit(executor_b.execute, target, statement, kind)
        _, pending = wait([future_a, future_b], timeout=timeout)
        if pending:
            for future in pending:
                future.cancel()
            self._abandon_pool()
            raise ComparisonTimeout(f"statement did not finish on both sides within {timeout}s")

        source, other = future_a.result(), future_b.result()
        for side, outcome in (("source", source), ("target", other)):
            if isinstance(outcome.failure, ConnectionFailure):
                LOGGER.error("Error: connection to %s error, %s", side, outcome.failure)
        return source, other, kind
