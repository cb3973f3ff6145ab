"""Schema and demo-seed helpers for the MySQL backend.

Used by ``scripts/init_db.py``, ``scripts/seed_db.py`` and by the app factory
when ``AUTO_INIT_DB`` / ``AUTO_SEED_DB`` are set.
"""

from __future__ import annotations

import logging
import re
from contextlib import closing
from pathlib import Path
from typing import Iterator

import mysql.connector

from .connection import DBConfig

logger = logging.getLogger(__name__)

REQUIRED_TABLES = ("persons", "attendance_records")

# A quoted literal (with backslash escapes) or a run of anything else.
_SQL_TOKEN = re.compile(r"""'(?:\\.|[^'\\])*'|"(?:\\.|[^"\\])*"|[^'";]+|;""", re.S)
_DB_LEVEL_STATEMENT = re.compile(r"^\s*(CREATE\s+DATABASE|USE)\b", re.I)


def _server_connection(cfg: DBConfig, *, select_db: bool = True):
    params = {
        "host": cfg.host,
        "port": cfg.port,
        "user": cfg.user,
        "password": cfg.password,
        "connection_timeout": cfg.connection_timeout,
    }
    if select_db:
        params["database"] = cfg.database
    return mysql.connector.connect(**params)


def iter_sql_statements(sql: str) -> Iterator[str]:
    """Split a script on ``;`` outside of quoted literals.

    ``--`` line comments are dropped. CREATE DATABASE / USE statements are
    skipped so a script can target whatever database the settings name.
    """
    sql = re.sub(r"(?m)^\s*--.*$", "", sql)
    parts: list[str] = []
    for match in _SQL_TOKEN.finditer(sql):
        token = match.group(0)
        if token != ";":
            parts.append(token)
            continue
        stmt = "".join(parts).strip()
        parts = []
        if stmt and not _DB_LEVEL_STATEMENT.match(stmt):
            yield stmt

    stmt = "".join(parts).strip()
    if stmt and not _DB_LEVEL_STATEMENT.match(stmt):
        yield stmt


def run_sql_file(db_config: dict, path: str | Path) -> int:
    cfg = DBConfig.from_dict(db_config)
    script = Path(path).read_text(encoding="utf-8")

    with closing(_server_connection(cfg)) as conn:
        with closing(conn.cursor()) as cur:
            executed = 0
            for stmt in iter_sql_statements(script):
                cur.execute(stmt)
                executed += 1
        conn.commit()
    return executed


def ensure_database_exists(db_config: dict) -> None:
    cfg = DBConfig.from_dict(db_config)
    with closing(_server_connection(cfg, select_db=False)) as conn:
        with closing(conn.cursor()) as cur:
            cur.execute(
                f"CREATE DATABASE IF NOT EXISTS `{cfg.database}` "
                "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
            )
        conn.commit()


def list_tables(db_config: dict) -> list[str]:
    with closing(_server_connection(DBConfig.from_dict(db_config))) as conn:
        with closing(conn.cursor()) as cur:
            cur.execute("SHOW TABLES")
            return sorted(row[0] for row in cur.fetchall())


def missing_tables(db_config: dict) -> list[str]:
    present = set(list_tables(db_config))
    return [t for t in REQUIRED_TABLES if t not in present]


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    executed = run_sql_file(db_config, schema_path)
    logger.info("Applied %s schema statements from %s", executed, schema_path)

    missing = missing_tables(db_config)
    if missing:
        raise RuntimeError(f"Schema incomplete after {schema_path}: missing {', '.join(missing)}")


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    executed = run_sql_file(db_config, seed_path)
    logger.info("Applied %s seed statements from %s", executed, seed_path)
