import logging
import threading
from typing import Dict, List

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from .errors import ConnectionFailure

LOGGER = logging.getLogger(__name__)


class ConnectionProvider:
    """
    Engines cached per connection string for the lifetime of one run.

    Build it once, hand it to whatever needs handles, close it at the end.
    SQLAlchemy engines pool their own connections and can be shared by the
    two executions of one statement.
    """

    def __init__(self, **engine_options):
        self.engine_options = engine_options
        self._engines: Dict[str, Engine] = {}
        self._warehouses: List = []
        self._lock = threading.Lock()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def get(self, url) -> Engine:
        key = str(url)
        with self._lock:
            engine = self._engines.get(key)
            if engine is None:
                try:
                    engine = create_engine(url, **self.engine_options)
                except Exception as err:
                    LOGGER.error("create engine failed: %s", err)
                    raise ConnectionFailure(f"cannot create engine: {err}") from err
                self._engines[key] = engine
        return engine

    def warehouse(self, source):
        """Open a warehouse connection described by a Hive source."""
        try:
            conn = source.connect()
        except ImportError:
            raise
        except Exception as err:
            LOGGER.error("connect warehouse failed: %s", err)
            raise ConnectionFailure(f"cannot connect to {source.host}:{source.port}: {err}") from err
        with self._lock:
            self._warehouses.append(conn)
        return conn

    def close(self):
        with self._lock:
            for engine in self._engines.values():
                engine.dispose()
            for conn in self._warehouses:
                conn.close()
            self._engines.clear()
            self._warehouses.clear()
