from src.ops_dashboards.ops_dashboards.database.bootstrap import iter_sql_statements, strip_database_statements


def test_splits_on_semicolons_outside_quotes():
    sql = "CREATE TABLE a (x INT);\nINSERT INTO a VALUES ('x;y');\nSELECT 1"
    assert list(iter_sql_statements(sql)) == [
        "CREATE TABLE a (x INT)",
        "INSERT INTO a VALUES ('x;y')",
        "SELECT 1",
    ]


def test_handles_escaped_quotes_and_comments():
    sql = "-- header; with a semicolon\nINSERT INTO a VALUES ('it\\'s; fine'); -- trailing\n"
    assert list(iter_sql_statements(sql)) == ["INSERT INTO a VALUES ('it\\'s; fine')"]


def test_strips_create_database_and_use_lines():
    sql = "CREATE DATABASE IF NOT EXISTS foo;\nUSE foo;\nCREATE TABLE t (id INT);\n"
    assert list(iter_sql_statements(strip_database_statements(sql))) == ["CREATE TABLE t (id INT)"]
