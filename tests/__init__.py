"""
Tests for twinsql. Relational sources are real SQLite files driven through
SQLAlchemy; the warehouse side is a fake DB-API connection.
"""

from sqlalchemy import create_engine

from twinsql.outcome import WriteOutcome
from twinsql.relational import RelationalExecutor


def sqlite_engine(path):
    return create_engine(f"sqlite:///{path}", connect_args={"check_same_thread": False})


def load(engine, *statements):
    with engine.begin() as conn:
        for statement in statements:
            conn.exec_driver_sql(statement)


class FakeCursor:
    """DB-API cursor returning canned rows with HiveServer2 type tags."""

    def __init__(self, description, rows, error=None):
        self.description = None
        self._description = description
        self._rows = list(rows)
        self.error = error
        self.executed = []
        self.closed = False

    def execute(self, statement):
        self.executed.append(statement)
        if self.error is not None:
            raise self.error
        self.description = self._description

    def fetchone(self):
        if not self._rows:
            return None
        return self._rows.pop(0)

    def close(self):
        self.closed = True


class FakeWarehouse:
    def __init__(self, cursor):
        self._cursor = cursor

    def cursor(self):
        return self._cursor


class BlockingExecutor(RelationalExecutor):
    """Executor that answers at once, except on the "slow" handle."""

    def __init__(self, release, wait=10):
        super().__init__()
        self.release = release
        self.wait = wait

    def execute(self, handle, statement, kind):
        if handle == "slow":
            self.release.wait(self.wait)
        return WriteOutcome(affected_rows=1)
