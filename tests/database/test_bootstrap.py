from pathlib import Path

from attendance_scanner.database.bootstrap import iter_sql_statements
from attendance_scanner.database.connection import DBConfig, DatabaseConnection


def test_splits_on_semicolons_outside_quotes():
    sql = """
    -- persons
    CREATE DATABASE IF NOT EXISTS scanner_db;
    USE scanner_db;
    CREATE TABLE t (id INT);
    INSERT INTO t VALUES ('a;b'), ("c;d");
    INSERT INTO t VALUES ('it\\'s; fine')
    """

    statements = list(iter_sql_statements(sql))

    assert statements == [
        "CREATE TABLE t (id INT)",
        "INSERT INTO t VALUES ('a;b'), (\"c;d\")",
        "INSERT INTO t VALUES ('it\\'s; fine')",
    ]


def test_schema_file_has_unique_person_day_key():
    schema = (Path(__file__).resolve().parents[2] / "database" / "schema.sql").read_text(encoding="utf-8")
    statements = list(iter_sql_statements(schema))

    assert any("UNIQUE" in s and "person_id" in s and "work_date" in s for s in statements)


def test_db_config_from_dict_defaults():
    cfg = DBConfig.from_dict({"host": "db", "database": "x"})

    assert (cfg.host, cfg.port, cfg.user, cfg.database) == ("db", 3306, "root", "x")
    assert cfg.pool_size == 5


def test_connection_factory_is_shared_per_config():
    a = DatabaseConnection.from_dict({"host": "db1", "database": "x"})

    assert DatabaseConnection.from_dict({"host": "db1", "database": "x"}) is a
    assert DatabaseConnection.from_dict({"host": "db2", "database": "x"}) is not a
