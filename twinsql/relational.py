import logging

from sqlalchemy.engine import Engine
from sqlalchemy.exc import DBAPIError

from .errors import ConnectionFailure, ExecutionFailure
from .executor import Executor
from .outcome import ReadOutcome, WriteOutcome, render_cell

LOGGER = logging.getLogger(__name__)


def _wrap(err: Exception) -> Exception:
    if isinstance(err, DBAPIError) and err.connection_invalidated:
        failure = ConnectionFailure(str(err))
    else:
        failure = ExecutionFailure(str(err))
    failure.__cause__ = err
    return failure


def _connection_failure(err: Exception) -> ConnectionFailure:
    failure = ConnectionFailure(str(err))
    failure.__cause__ = err
    return failure


class RelationalExecutor(Executor):
    """Executor for any SQLAlchemy engine."""

    name = "relational"

    def read(self, handle: Engine, statement: str) -> ReadOutcome:
        try:
            conn = handle.connect()
        except Exception as err:
            return ReadOutcome.failed(_connection_failure(err))
        with conn:
            try:
                result = conn.exec_driver_sql(statement)
                header = list(result.keys())
                rows = []
                for row in result:
                    self.check_capacity(len(rows) + 1)
                    rows.append([render_cell(value) for value in row])
            except ExecutionFailure as err:
                return ReadOutcome.failed(err)
            except Exception as err:
                return ReadOutcome.failed(_wrap(err))
        return ReadOutcome.from_rows(header, rows)

    def write(self, handle: Engine, statement: str) -> WriteOutcome:
        try:
            conn = handle.connect()
        except Exception as err:
            return WriteOutcome.failed(_connection_failure(err))
        with conn:
            try:
                with conn.begin():
                    result = conn.exec_driver_sql(statement)
                    affected = result.rowcount
            except Exception as err:
                return WriteOutcome.failed(_wrap(err))
        return WriteOutcome(affected_rows=affected)
