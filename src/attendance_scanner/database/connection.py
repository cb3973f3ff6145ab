from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional

from mysql.connector import pooling


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    connection_timeout: int = 5
    pool_size: int = 5

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "scanner_db")),
            connection_timeout=int(db_config.get("connection_timeout", 5)),
            pool_size=int(db_config.get("pool_size", 5)),
        )


class DatabaseConnection:
    """Connection factory backed by a lazily created connector pool.

    ``connect()`` hands out a pooled connection; closing it returns it to the
    pool. The pool is built on first use so the app can start while MySQL is
    still down (the first query then fails as unavailable).
    """

    _instances: dict[DBConfig, "DatabaseConnection"] = {}
    _instances_lock = threading.Lock()

    def __init__(self, config: DBConfig):
        self._config = config
        self._pool: Optional[pooling.MySQLConnectionPool] = None
        self._pool_lock = threading.Lock()

    @property
    def config(self) -> DBConfig:
        return self._config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        with cls._instances_lock:
            instance = cls._instances.get(config)
            if instance is None:
                instance = cls(config)
                cls._instances[config] = instance
            return instance

    @classmethod
    def from_dict(cls, db_config: dict) -> "DatabaseConnection":
        return cls.get_instance(DBConfig.from_dict(db_config))

    def _get_pool(self) -> pooling.MySQLConnectionPool:
        with self._pool_lock:
            if self._pool is None:
                cfg = self._config
                self._pool = pooling.MySQLConnectionPool(
                    pool_name=f"scanner-{cfg.host}-{cfg.port}-{cfg.database}"[:64],
                    pool_size=cfg.pool_size,
                    host=cfg.host,
                    port=cfg.port,
                    user=cfg.user,
                    password=cfg.password,
                    database=cfg.database,
                    connection_timeout=cfg.connection_timeout,
                )
            return self._pool

    def connect(self) -> pooling.PooledMySQLConnection:
        return self._get_pool().get_connection()
