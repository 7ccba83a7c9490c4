import logging
from typing import Optional

from .classifier import StatementKind
from .errors import ResultTooLarge
from .outcome import Outcome, ReadOutcome, WriteOutcome

LOGGER = logging.getLogger(__name__)


class Executor:
    """Run one statement on one handle and capture what happened."""

    name = "executor"

    def __init__(self, max_rows: Optional[int] = None):
        self.max_rows = max_rows

    def execute(self, handle, statement: str, kind: StatementKind) -> Outcome:
        LOGGER.info("[sql] %s: %s", self.name, statement)
        if kind is StatementKind.WRITE:
            return self.write(handle, statement)
        return self.read(handle, statement)

    def read(self, handle, statement: str) -> ReadOutcome:
        """
        see in herited classes for details
        """
        raise NotImplementedError

    def write(self, handle, statement: str) -> WriteOutcome:
        """
        see in herited classes for details
        """
        raise NotImplementedError

    def check_capacity(self, count: int):
        if self.max_rows is not None and count > self.max_rows:
            raise ResultTooLarge(f"result has more than {self.max_rows} rows")
