"""Tests for the scripted client / meeting sequence and its entry point.

Tests cover:
- Sample data shape and run-date relative meeting dates
- Statement order of the scripted sequence (execute_sql patched)
- main(): completion banner, single catch-all, unconditional dispose
- Full run against a live MySQL (opt-in, MYSQL_INTEGRATION=1)
"""

import os
from datetime import date
from unittest.mock import MagicMock, patch

import pytest

import client_meeting_demo as demo
from settings import DatabaseSettings, create_demo_engine, load_settings

TODAY = date(2026, 10, 18)


# ── Sample data ────────────────────────────────────────────────────────────


class TestSampleData:

    def test_four_clients_five_columns_each(self):
        values = demo.sample_clients()
        assert len(values) == 20
        assert values[0] == "John Smith"
        assert values[1] == "john.smith@techcorp.com"
        assert values[15] == "Emily Davis"
        assert demo.CLIENT_INSERT_SQL.count("%s") == len(values)

    def test_three_meetings_relative_to_run_date(self):
        values = demo.sample_meetings(TODAY)
        assert len(values) == 27
        assert demo.MEETING_INSERT_SQL.count("%s") == len(values)

        rows = [values[i:i + 9] for i in range(0, 27, 9)]
        assert [r[0] for r in rows] == [1, 2, 3]
        assert [r[2] for r in rows] == ["2026-10-17", "2026-10-18", "2026-10-25"]
        assert [r[8] for r in rows] == ["completed", "scheduled", "scheduled"]
        assert rows[0][7] == "Scope defined, timeline approved"
        assert rows[1][7] is None

    def test_month_boundary(self):
        values = demo.sample_meetings(date(2026, 12, 31))
        assert values[2] == "2026-12-30"
        assert values[20] == "2027-01-07"


# ── Scripted sequence ──────────────────────────────────────────────────────


class _Recorder:
    """Stands in for execute_sql and records (query, params, label)."""

    def __init__(self):
        self.calls = []

    def __call__(self, conn, query, params=(), description=""):
        self.calls.append((query, list(params), description))
        if description == "GET TEMPORARY CLIENT ID":
            return [{"client_id": 5}]
        if description.startswith("SUMMARY"):
            return [{"metric": "Total Clients", "count": 4}]
        return 1


@pytest.fixture
def recorder():
    rec = _Recorder()
    with patch.object(demo, "execute_sql", rec):
        yield rec


class TestRunDemo:

    def test_statement_sequence(self, recorder):
        summary = demo.run_demo(MagicMock(), "clientDB", today=TODAY)

        labels = [label for _, _, label in recorder.calls]
        assert labels == [
            "CREATE DATABASE",
            "SELECT DATABASE",
            "DROP MEETINGS TABLE",
            "DROP CLIENTS TABLE",
            "CREATE CLIENTS TABLE",
            "CREATE MEETINGS TABLE WITH FOREIGN KEY",
            "INSERT ALL CLIENTS (Multi-row INSERT)",
            "INSERT ALL MEETINGS (Multi-row INSERT)",
            "READ - GET ALL CLIENTS",
            "INNER JOIN - MEETINGS WITH CLIENT INFO",
            "LEFT JOIN - ALL CLIENTS WITH MEETING COUNTS",
            "AVAILABILITY CHECK - FIND OPEN MEETING SLOTS",
            "CREATE - SCHEDULE NEW MEETING",
            "UPDATE - ADD MEETING MINUTES",
            "SEARCH - FIND CLIENTS BY COMPANY (LIKE operator)",
            "UPDATE - CANCEL MEETING (SOFT DELETE)",
            "HARD DELETE - PERMANENTLY REMOVE CANCELLED MEETING",
            "VERIFY DELETE - SHOW REMAINING MEETINGS",
            "INSERT TEMPORARY CLIENT FOR CASCADE DEMO",
            "GET TEMPORARY CLIENT ID",
            "INSERT TEMPORARY MEETING FOR CASCADE DEMO",
            "SHOW MEETINGS BEFORE CASCADE DELETE",
            "HARD DELETE WITH CASCADE - DELETE CLIENT (WILL DELETE ASSOCIATED MEETINGS)",
            "VERIFY CASCADE DELETE - COUNT REMAINING TEMP MEETINGS (SHOULD BE 0)",
            "SUMMARY - DATABASE STATISTICS",
        ]
        assert summary == [{"metric": "Total Clients", "count": 4}]

    def test_database_name_is_used(self, recorder):
        demo.run_demo(MagicMock(), "clientDB_test", today=TODAY)
        assert recorder.calls[0][0] == "CREATE DATABASE IF NOT EXISTS `clientDB_test`"
        assert recorder.calls[1][0] == "USE `clientDB_test`"

    def test_follow_up_is_two_days_out(self, recorder):
        demo.run_demo(MagicMock(), today=TODAY)
        params = dict((label, p) for _, p, label in recorder.calls)["CREATE - SCHEDULE NEW MEETING"]
        assert params[0] == 1
        assert params[2] == "2026-10-20"
        assert params[3] == "11:00:00"
        assert params[8] == "scheduled"

    def test_hard_delete_is_restricted_to_cancelled(self, recorder):
        demo.run_demo(MagicMock(), today=TODAY)
        query, params, _ = next(
            c for c in recorder.calls if c[2] == "HARD DELETE - PERMANENTLY REMOVE CANCELLED MEETING"
        )
        assert "status = %s" in query
        assert params == [3, "cancelled"]

    def test_cascade_uses_fetched_client_id(self, recorder):
        demo.run_demo(MagicMock(), today=TODAY)
        by_label = dict((label, p) for _, p, label in recorder.calls)
        assert by_label["INSERT TEMPORARY MEETING FOR CASCADE DEMO"][0] == 5
        assert by_label["VERIFY CASCADE DELETE - COUNT REMAINING TEMP MEETINGS (SHOULD BE 0)"] == [5]

    def test_failure_aborts_remaining_steps(self):
        calls = []

        def failing(conn, query, params=(), description=""):
            calls.append(description)
            if description == "CREATE CLIENTS TABLE":
                raise RuntimeError("boom")
            return 0

        with patch.object(demo, "execute_sql", failing):
            with pytest.raises(RuntimeError):
                demo.run_demo(MagicMock(), today=TODAY)
        assert calls[-1] == "CREATE CLIENTS TABLE"
        assert len(calls) == 5


# ── Entry point ────────────────────────────────────────────────────────────


@pytest.fixture
def fake_engine():
    engine = MagicMock()
    engine.connect.return_value.__exit__.return_value = False
    with patch.object(demo, "load_settings", return_value=DatabaseSettings()), \
            patch.object(demo, "create_demo_engine", return_value=engine):
        yield engine


class TestMain:

    def test_success(self, fake_engine, capsys):
        with patch.object(demo, "run_demo") as run_demo:
            assert demo.main() == 0

        conn = fake_engine.connect.return_value.__enter__.return_value
        run_demo.assert_called_once_with(conn, "clientDB")
        fake_engine.dispose.assert_called_once_with()

        out = capsys.readouterr().out
        assert "Connected to MySQL server" in out
        assert "SQL DEMONSTRATION COMPLETED SUCCESSFULLY!" in out
        assert "RELATIONSHIPS: Foreign Keys, Cascading operations" in out
        assert out.rstrip().endswith("Disconnected from MySQL")

    def test_failure_is_reported_and_connection_released(self, fake_engine, capsys):
        with patch.object(demo, "run_demo", side_effect=RuntimeError("Access denied")):
            assert demo.main() == 1

        fake_engine.connect.return_value.__exit__.assert_called_once()
        fake_engine.dispose.assert_called_once_with()

        captured = capsys.readouterr()
        assert "Error: Access denied" in captured.err
        assert "COMPLETED SUCCESSFULLY" not in captured.out
        assert "Disconnected from MySQL" in captured.out

    def test_bad_configuration_skips_cleanup(self, capsys):
        with patch.object(demo, "load_settings", side_effect=ValueError("MYSQL_PORT must be an integer")):
            assert demo.main() == 1
        captured = capsys.readouterr()
        assert "MYSQL_PORT" in captured.err
        assert "Disconnected" not in captured.out


# ── Live MySQL ─────────────────────────────────────────────────────────────


@pytest.mark.skipif(
    os.getenv("MYSQL_INTEGRATION") != "1",
    reason="set MYSQL_INTEGRATION=1 with a reachable MySQL to run",
)
class TestAgainstMySQL:

    def test_end_to_end_summary(self):
        settings = load_settings()
        engine = create_demo_engine(settings)
        try:
            with engine.connect() as conn:
                summary = demo.run_demo(conn, settings.database)
        finally:
            engine.dispose()

        counts = {row["metric"]: row["count"] for row in summary}
        assert counts == {
            "Total Clients": 4,
            "Total Meetings": 3,
            "Scheduled Meetings": 2,
            "Completed Meetings": 1,
        }
