"""
Tests for the catalogos CLI commands that change data.
"""

import logging
from contextlib import contextmanager

import pytest
from typer.testing import CliRunner

import cli
from shared.infrastructure import db as db_module


runner = CliRunner()


@pytest.fixture
def cli_db(db_session, monkeypatch):
    """Point the CLI at the test session."""

    @contextmanager
    def test_db_context():
        yield db_session

    monkeypatch.setattr(db_module, "get_db_context", test_db_context)
    return db_session


class TestPurgeLocality:

    def test_purge_logs_removed_areas(self, cli_db, seed_area, caplog):
        locality_id = seed_area.locality_id

        with caplog.at_level(logging.INFO, logger="cli"):
            result = runner.invoke(cli.app, ["purge-locality", str(locality_id), "--yes"])

        assert result.exit_code == 0
        assert "1 areas removed" in result.output
        record = next(r for r in caplog.records if r.name == "cli")
        assert record.getMessage() == "Locality purged"
        assert record.extra_data == {"locality_id": locality_id, "removed_areas": 1}

    def test_purge_unknown_locality_exits_with_error(self, cli_db, caplog):
        with caplog.at_level(logging.INFO, logger="cli"):
            result = runner.invoke(cli.app, ["purge-locality", "999", "--yes"])

        assert result.exit_code == 1
        assert not [r for r in caplog.records if r.name == "cli"]


class TestSeed:

    def test_seed_logs_counts(self, cli_db, caplog):
        with caplog.at_level(logging.INFO, logger="cli"):
            result = runner.invoke(cli.app, ["db-seed"])

        assert result.exit_code == 0
        record = next(r for r in caplog.records if r.name == "cli")
        assert record.getMessage() == "Database seeded"
        assert set(record.extra_data) == {"localities", "catalog_rows"}
