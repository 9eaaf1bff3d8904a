from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Optional

import mysql.connector
from mysql.connector import pooling

from ..core.constants import DEFAULT_POOL_NAME, DEFAULT_POOL_SIZE

logger = logging.getLogger(__name__)


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    pool_size: int = DEFAULT_POOL_SIZE
    pool_name: str = DEFAULT_POOL_NAME

    @classmethod
    def from_mapping(cls, db_config: dict, *, pool_size: Optional[int] = None) -> "DBConfig":
        return cls(
            host=str(db_config["host"]),
            port=int(db_config.get("port", 3306)),
            user=str(db_config["user"]),
            password=str(db_config["password"]),
            database=str(db_config["database"]),
            pool_size=int(pool_size or db_config.get("pool_size", DEFAULT_POOL_SIZE)),
        )


class DatabaseConnection:
    """Connection factory backed by one process-wide connection pool.

    The owner constructs it once (see `build_container`) and calls `close()`
    on shutdown. The pool itself is created on the first `connect()`.
    """

    def __init__(self, config: DBConfig):
        self._config = config
        self._pool: Optional[pooling.MySQLConnectionPool] = None
        self._closed = False
        self._lock = threading.Lock()

    @property
    def closed(self) -> bool:
        return self._closed

    def _get_pool(self) -> pooling.MySQLConnectionPool:
        with self._lock:
            if self._closed:
                raise RuntimeError("Connection pool has been closed")
            if self._pool is None:
                logger.info(
                    "Opening MySQL pool %s (size=%s) -> %s@%s:%s/%s",
                    self._config.pool_name,
                    self._config.pool_size,
                    self._config.user,
                    self._config.host,
                    self._config.port,
                    self._config.database,
                )
                self._pool = pooling.MySQLConnectionPool(
                    pool_name=self._config.pool_name,
                    pool_size=int(self._config.pool_size),
                    pool_reset_session=True,
                    host=self._config.host,
                    port=int(self._config.port),
                    user=self._config.user,
                    password=self._config.password,
                    database=self._config.database,
                )
            return self._pool

    def connect(self):
        """Borrow a pooled connection; `close()` on it returns it to the pool."""
        try:
            return self._get_pool().get_connection()
        except mysql.connector.Error:
            logger.exception("Could not obtain a database connection")
            raise

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            pool, self._pool = self._pool, None
        if pool is not None:
            logger.info("Closing MySQL pool %s", self._config.pool_name)
            # No public shutdown on MySQLConnectionPool.
            try:
                pool._remove_connections()
            except (AttributeError, mysql.connector.Error):
                logger.warning("Could not drain MySQL pool %s", self._config.pool_name, exc_info=True)
