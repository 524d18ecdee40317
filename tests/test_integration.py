"""Integration tests for end-to-end workflows."""

from datetime import date

from moneylog.cli.main import cli


def _run(cli_runner, db_path, *args):
    return cli_runner.invoke(cli, ["--db-path", db_path, *args])


def test_full_workflow(cli_runner, temp_db):
    """init -> add income and expenses -> stats -> dashboard -> delete."""
    db_path = temp_db.database_path
    today = date.today().isoformat()

    result = _run(cli_runner, db_path, "init")
    assert result.exit_code == 0
    assert "Created 12 default categories" in result.output
    assert "Created default account 'Main Account'" in result.output

    result = _run(cli_runner, db_path, "init")
    assert result.exit_code == 0
    assert "Categories already exist" in result.output
    assert "Accounts already exist" in result.output

    result = _run(cli_runner, db_path, "add", "income", "--amount", "1000", "--category", "Salary", "--date", today)
    assert result.exit_code == 0

    for amount, category in (("300", "Food & Dining"), ("200", "Transportation")):
        result = _run(
            cli_runner, db_path, "add", "expense", "--amount", amount, "--category", category, "--date", today
        )
        assert result.exit_code == 0

    result = _run(cli_runner, db_path, "account", "balance")
    assert "Total balance: $500.00" in result.output

    result = _run(cli_runner, db_path, "stats")
    assert result.exit_code == 0
    assert "This Month" in result.output
    assert "$1,000.00" in result.output
    assert "+$500.00" in result.output
    assert "Savings rate" in result.output
    assert "Food & Dining" in result.output
    assert "60.0%" in result.output
    assert "40.0%" in result.output

    result = _run(cli_runner, db_path, "dashboard")
    assert result.exit_code == 0
    assert "Total balance: $500.00" in result.output
    assert "Food & Dining" in result.output

    result = _run(cli_runner, db_path, "transaction", "list", "--type", "expense")
    assert result.exit_code == 0
    txn_prefix = next(
        line.split("|")[1].strip() for line in result.output.splitlines() if "Transportation" in line
    )

    result = _run(cli_runner, db_path, "transaction", "delete", txn_prefix, "--yes")
    assert result.exit_code == 0

    result = _run(cli_runner, db_path, "account", "balance")
    assert "Total balance: $700.00" in result.output


def test_stats_without_transactions(cli_runner, temp_db):
    result = _run(cli_runner, temp_db.database_path, "stats", "--week")

    assert result.exit_code == 0
    assert "No transactions found." in result.output


def test_stats_for_explicit_range(cli_runner, temp_db):
    db_path = temp_db.database_path
    _run(cli_runner, db_path, "init")
    _run(cli_runner, db_path, "add", "expense", "--amount", "40", "--category", "Health", "--date", "2024-03-05")

    result = _run(cli_runner, db_path, "stats", "--start-date", "2024-03-01", "--end-date", "2024-03-10")

    assert result.exit_code == 0
    assert "2024-03-01 to 2024-03-10" in result.output
    assert "Daily averages over 10 day(s)" in result.output
    assert "$4.00" in result.output
    assert "-100.0%" in result.output


def test_currency_from_environment(cli_runner, temp_db, monkeypatch):
    monkeypatch.setenv("MONEYLOG_CURRENCY", "EUR")

    result = _run(cli_runner, temp_db.database_path, "account", "balance")

    assert result.exit_code == 0
    assert "Total balance: €0.00" in result.output


def test_help_does_not_need_database(cli_runner):
    result = cli_runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "dashboard" in result.output
    assert "stats" in result.output
