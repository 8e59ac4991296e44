"""Unit tests for schema statement splitting."""

from src.infrastructure.adapters.persistence.schema import (
    SCHEMA_PATH,
    split_sql_statements,
)


def test_splits_on_semicolons() -> None:
    assert split_sql_statements("SELECT 1; SELECT 2;") == ["SELECT 1", "SELECT 2"]


def test_keeps_dollar_quoted_bodies_whole() -> None:
    sql = """
    CREATE FUNCTION f() RETURNS trigger AS $$
    BEGIN
        RAISE EXCEPTION 'no';
        RETURN NULL;
    END;
    $$ LANGUAGE plpgsql;
    SELECT 1;
    """
    statements = split_sql_statements(sql)
    assert len(statements) == 2
    assert "RETURN NULL;" in statements[0]
    assert statements[1] == "SELECT 1"


def test_tagged_dollar_quotes() -> None:
    sql = "DO $body$ BEGIN PERFORM 1; END $body$; SELECT 2;"
    assert split_sql_statements(sql) == [
        "DO $body$ BEGIN PERFORM 1; END $body$",
        "SELECT 2",
    ]


def test_drops_comment_only_chunks() -> None:
    assert split_sql_statements("-- header\n;SELECT 1;\n-- trailer\n") == ["SELECT 1"]


def test_bundled_schema_defines_all_tables() -> None:
    statements = split_sql_statements(SCHEMA_PATH.read_text())
    joined = "\n".join(statements)
    assert "recognition_ledger" in joined
    assert "uq_recognition_ledger_triple" in joined
    assert "audit_logs" in joined
    assert "CREATE TABLE IF NOT EXISTS profiles" in joined
    assert all(statement.strip() for statement in statements)
