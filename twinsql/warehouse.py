"""
Read path for a warehouse client that is not a SQLAlchemy driver.

The handle is a DB-API connection (``pyhive.hive.Connection`` in practice)
whose cursor description carries HiveServer2 type tags such as
``TIMESTAMP_TYPE``. Timestamps lose their fractional seconds before
rendering: the warehouse prints them with a precision the relational side
does not.
"""

import logging

from .errors import ExecutionFailure
from .executor import Executor
from .outcome import ReadOutcome, WriteOutcome, render_cell, row_signature

LOGGER = logging.getLogger(__name__)

TIMESTAMP_TYPES = frozenset(["TIMESTAMP_TYPE"])


class WarehouseExecutor(Executor):
    """Executor for a cursor-based warehouse client, reads only."""

    name = "warehouse"

    def __init__(self, max_rows=None, timestamp_types=TIMESTAMP_TYPES):
        super().__init__(max_rows)
        self.timestamp_types = frozenset(timestamp_types)

    def read(self, handle, statement: str) -> ReadOutcome:
        try:
            cursor = handle.cursor()
        except Exception as err:
            LOGGER.error("[output] %s", err)
            return ReadOutcome.failed(_failure(err))
        try:
            cursor.execute(statement)
            columns = [(desc[0], desc[1]) for desc in cursor.description or ()]
            header = [name for name, _ in columns]
            rows = []
            LOGGER.debug("[output]")
            for record in self._records(cursor, header):
                self.check_capacity(len(rows) + 1)
                row = [
                    render_cell(record.get(name), type_tag in self.timestamp_types)
                    for name, type_tag in columns
                ]
                LOGGER.debug(row_signature(row))
                rows.append(row)
        except ExecutionFailure as err:
            return ReadOutcome.failed(err)
        except Exception as err:
            LOGGER.error("[output] %s", err)
            return ReadOutcome.failed(_failure(err))
        finally:
            cursor.close()
        return ReadOutcome.from_rows(header, rows)

    def _records(self, cursor, header):
        """Yield each fetched row as a mapping from column name to value."""
        while True:
            row = cursor.fetchone()
            if row is None:
                return
            yield dict(zip(header, row))

    def write(self, handle, statement: str) -> WriteOutcome:
        return WriteOutcome.failed(ExecutionFailure("writes are not supported on the warehouse side"))


def _failure(err: Exception) -> ExecutionFailure:
    failure = ExecutionFailure(str(err))
    failure.__cause__ = err
    return failure
