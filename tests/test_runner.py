import os
import tempfile
import threading
import time
from unittest import TestCase

from tests import BlockingExecutor, FakeCursor, FakeWarehouse, load, sqlite_engine
from twinsql.classifier import StatementKind
from twinsql.comparator import Comparator
from twinsql.errors import ComparisonTimeout, ConnectionFailure
from twinsql.outcome import Mode, WriteOutcome
from twinsql.relational import RelationalExecutor
from twinsql.runner import DualRunner


class WriteOnlyExecutor(RelationalExecutor):
    def read(self, handle, statement):
        raise AssertionError("read path used for a write")


class TestDualRunner(TestCase):
    """Provide unit tests for the DualRunner."""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.engine_a = sqlite_engine(os.path.join(self.tmp.name, "a.db"))
        self.engine_b = sqlite_engine(os.path.join(self.tmp.name, "b.db"))
        load(self.engine_a, "CREATE TABLE t (id integer, v text)", "INSERT INTO t VALUES (1, 'a'), (2, 'b'), (3, 'c')")
        load(self.engine_b, "CREATE TABLE t (id integer, v text)", "INSERT INTO t VALUES (3, 'c'), (1, 'a'), (2, 'b')")
        self.runner = DualRunner()
        self.comparator = Comparator()

    def tearDown(self):
        self.runner.close()
        self.engine_a.dispose()
        self.engine_b.dispose()
        self.tmp.cleanup()

    def test_same_source_is_consistent_ordered(self):
        same = sqlite_engine(os.path.join(self.tmp.name, "a.db"))
        for statement in (
            "SELECT id, v FROM t ORDER BY id",
            "SELECT id FROM t WHERE id > 100",
            "SELECT id FROM t WHERE id = 2",
        ):
            source, target, kind = self.runner.run(statement, self.engine_a, same)
            self.assertIs(kind, StatementKind.READ)
            self.assertTrue(self.comparator.compare(source, target, Mode.ORDERED), statement)
        same.dispose()

    def test_permutation(self):
        source, target, _ = self.runner.run("SELECT id, v FROM t", self.engine_a, self.engine_b)
        self.assertFalse(self.comparator.compare(source, target, Mode.ORDERED))
        self.assertTrue(self.comparator.compare(source, target, Mode.UNORDERED))

    def test_write_never_reads(self):
        runner = DualRunner(relational=WriteOnlyExecutor())
        with runner:
            source, target, kind = runner.run("UPDATE t SET v = 'z' WHERE id < 3", self.engine_a, self.engine_b)
        self.assertIs(kind, StatementKind.WRITE)
        self.assertIsInstance(source, WriteOutcome)
        self.assertEqual((source.affected_rows, target.affected_rows), (2, 2))
        self.assertTrue(self.comparator.compare(source, target, Mode.ORDERED))

    def test_connection_failure_does_not_stop_other_side(self):
        broken = sqlite_engine(os.path.join(self.tmp.name, "missing", "x.db"))
        with self.assertLogs("twinsql.runner", level="ERROR"):
            source, target, _ = self.runner.run("SELECT id FROM t", broken, self.engine_b)
        self.assertIsInstance(source.failure, ConnectionFailure)
        self.assertTrue(target.ok)
        self.assertEqual(len(target.rows), 3)
        self.assertFalse(self.comparator.compare(source, target, Mode.UNORDERED))
        broken.dispose()

    def test_warehouse_side_truncates_timestamps(self):
        load(self.engine_a, "CREATE TABLE e (ts text)", "INSERT INTO e VALUES ('2024-01-01 00:00:00')")
        cursor = FakeCursor(
            [("e.ts", "TIMESTAMP_TYPE", None, None, None, None, True)],
            [("2024-01-01 00:00:00.123",)],
        )
        source, target, kind = self.runner.run("SELECT ts FROM e", self.engine_a, warehouse=FakeWarehouse(cursor))
        self.assertIs(kind, StatementKind.READ)
        self.assertEqual(cursor.executed, ["SELECT ts FROM e"])
        self.assertTrue(self.comparator.compare(source, target, Mode.ORDERED))
        self.assertTrue(self.comparator.compare(source, target, Mode.UNORDERED))

    def test_warehouse_writes_use_relational_handles(self):
        cursor = FakeCursor([], [])
        source, target, kind = self.runner.run(
            "DELETE FROM t WHERE id = 1", self.engine_a, self.engine_b, warehouse=FakeWarehouse(cursor)
        )
        self.assertIs(kind, StatementKind.WRITE)
        self.assertEqual(cursor.executed, [])
        self.assertEqual(target.affected_rows, 1)

    def test_warehouse_write_without_second_handle(self):
        with self.assertRaises(ValueError):
            self.runner.run("DELETE FROM t", self.engine_a, warehouse=FakeWarehouse(FakeCursor([], [])))

    def test_timeout_raises_instead_of_returning_one_side(self):
        release = threading.Event()
        runner = DualRunner(relational=BlockingExecutor(release))
        try:
            with self.assertRaises(ComparisonTimeout):
                runner.run("UPDATE t SET v = 1", "fast", "slow", timeout=0.05)
        finally:
            release.set()
            runner.close()

    def test_without_timeout_waits_for_both(self):
        release = threading.Event()
        runner = DualRunner(relational=BlockingExecutor(release))
        threading.Timer(0.05, release.set).start()
        with runner:
            source, target, _ = runner.run("UPDATE t SET v = 1", "fast", "slow")
        self.assertEqual((source.affected_rows, target.affected_rows), (1, 1))

    def test_close_after_timeout_does_not_wait_for_hung_side(self):
        release = threading.Event()
        runner = DualRunner(relational=BlockingExecutor(release, wait=5))
        try:
            start = time.monotonic()
            with self.assertRaises(ComparisonTimeout):
                runner.run("UPDATE t SET v = 1", "fast", "slow", timeout=0.05)
            runner.close()
            self.assertLess(time.monotonic() - start, 2)
        finally:
            release.set()

    def test_runner_is_usable_after_timeout(self):
        release = threading.Event()
        runner = DualRunner(relational=BlockingExecutor(release, wait=5))
        try:
            with self.assertRaises(ComparisonTimeout):
                runner.run("UPDATE t SET v = 1", "fast", "slow", timeout=0.05)
            source, target, _ = runner.run("UPDATE t SET v = 1", "fast", "also fast", timeout=2)
            self.assertEqual((source.affected_rows, target.affected_rows), (1, 1))
        finally:
            release.set()
            runner.close()
