"""
Unit tests for the API server CLI.
"""

import sys

import pytest

from suburbpulse.cli import api_server
from suburbpulse.core.database import get_connection, table_exists
from suburbpulse.core.store import SaleStore


class TestCheckDatabase:
    """Tests for check_database function."""

    def test_creates_schema_on_new_database(self, tmp_path):
        db_path = str(tmp_path / "data" / "fresh.db")

        assert api_server.check_database(db_path) == 0
        with get_connection(db_path) as conn:
            assert table_exists(conn, "sales")
            assert table_exists(conn, "suburb_stats")

    def test_counts_loaded_sales(self, temp_db, suburb_sales):
        SaleStore(temp_db).insert_sales(suburb_sales([900000, 950000]))
        assert api_server.check_database(temp_db) == 2


class TestMain:
    """Tests for the api_server entry point."""

    @pytest.fixture
    def served(self, monkeypatch):
        calls = {}

        def fake_run_server(**kwargs):
            calls.update(kwargs)

        monkeypatch.setattr("suburbpulse.api.server.run_server", fake_run_server)
        return calls

    def test_passes_database_and_port(self, test_config, tmp_path, monkeypatch, served):
        db_path = str(tmp_path / "served.db")
        monkeypatch.setattr(sys, "argv", ["suburbpulse-api", "--db", db_path, "--port", "8080"])

        api_server.main()

        assert served["db_path"] == db_path
        assert served["port"] == 8080
        assert served["host"] == test_config.api.host

    def test_defaults_to_configured_database(self, test_config, temp_db, monkeypatch, served):
        monkeypatch.setattr(sys, "argv", ["suburbpulse-api"])

        api_server.main()

        assert served["db_path"] == temp_db
