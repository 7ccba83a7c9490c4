import logging
from enum import Enum
from typing import NamedTuple

from .outcome import Mode, Outcome, ReadOutcome, WriteOutcome

LOGGER = logging.getLogger(__name__)


class FailurePolicy(str, Enum):
    """What two failed sides mean.

    lenient: a shared inability to execute counts as agreement.
    strict: the failures must have the same class and message.
    """

    LENIENT = "lenient"
    STRICT = "strict"


class Verdict(NamedTuple):
    statement: str
    consistent: bool
    source: Outcome
    target: Outcome


class Comparator:
    """Decide whether two outcomes of the same statement agree."""

    def __init__(self, failure_policy: FailurePolicy = FailurePolicy.LENIENT):
        self.failure_policy = FailurePolicy(failure_policy)

    def check(self, statement: str, source: Outcome, target: Outcome, mode: Mode) -> Verdict:
        return Verdict(statement, self.compare(source, target, mode), source, target)

    def compare(self, source: Outcome, target: Outcome, mode: Mode) -> bool:
        if source.ok != target.ok:
            return False
        if not source.ok:
            return self.failures_agree(source.failure, target.failure)
        if isinstance(source, WriteOutcome) and isinstance(target, WriteOutcome):
            return source.affected_rows == target.affected_rows
        if isinstance(source, ReadOutcome) and isinstance(target, ReadOutcome):
            if Mode(mode) is Mode.UNORDERED:
                return source.signatures == target.signatures
            return source.rows == target.rows
        LOGGER.warning(
            "outcomes of different kinds: %s and %s",
            type(source).__name__,
            type(target).__name__,
        )
        return False

    def failures_agree(self, first: BaseException, second: BaseException) -> bool:
        if self.failure_policy is FailurePolicy.LENIENT:
            return True
        return type(first) is type(second) and str(first) == str(second)
