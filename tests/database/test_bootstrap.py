from pathlib import Path

from src.attendease.attendease.database.bootstrap import _strip_create_db_and_use, iter_sql_statements

SCHEMA = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


def test_splitter_ignores_semicolons_inside_quotes():
    sql = "INSERT INTO t VALUES('a;b'); INSERT INTO t VALUES(\"c;d\");\nSELECT 1"

    assert list(iter_sql_statements(sql)) == [
        "INSERT INTO t VALUES('a;b')",
        'INSERT INTO t VALUES("c;d")',
        "SELECT 1",
    ]


def test_database_and_use_lines_are_stripped():
    sql = "CREATE DATABASE foo;\nUSE foo;\n-- comment; with semicolon\nCREATE TABLE x (id INT);"

    assert list(iter_sql_statements(_strip_create_db_and_use(sql))) == ["CREATE TABLE x (id INT)"]


def test_schema_file_declares_engine_tables():
    statements = list(iter_sql_statements(_strip_create_db_and_use(SCHEMA.read_text(encoding="utf-8"))))
    text = "\n".join(statements)

    for table in (
        "users",
        "shifts",
        "geofences",
        "app_config",
        "attendance_sessions",
        "daily_summaries",
        "notifications",
        "movement_alert_cooldowns",
    ):
        assert f"CREATE TABLE IF NOT EXISTS {table}" in text
