"""
Unit tests for the command line entry point
"""

import pytest
from unittest.mock import AsyncMock, patch
from core.exceptions import DatabaseConnectionError
from ingestion import cli


class TestParser:
    def test_run_named_sources(self):
        args = cli.create_parser().parse_args(["run", "coins", "price"])
        assert args.command == "run"
        assert args.sources == ["coins", "price"]
        assert args.all is False

    def test_run_all(self):
        args = cli.create_parser().parse_args(["run", "--all"])
        assert args.all is True

    def test_schedule_options(self):
        args = cli.create_parser().parse_args(["schedule", "--interval", "5", "--run-now"])
        assert args.interval == 5
        assert args.run_now is True

    def test_run_requires_sources(self):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["run"])
        assert exc_info.value.code == 2

    def test_unknown_source(self):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["run", "coins", "tickers"])
        assert exc_info.value.code == 2


class TestMain:
    def test_exit_zero_when_all_sources_complete(self):
        results = [{"source": "coins", "status": "success"}, {"source": "price", "status": "partial_success"}]

        with patch.object(cli, "verify_connection", AsyncMock()), \
                patch.object(cli, "run_sources", AsyncMock(return_value=results)) as run_sources:
            assert cli.main(["run", "coins", "price"]) == 0

        assert run_sources.call_args.args[0] == ["coins", "price"]

    def test_exit_one_when_a_source_fails(self):
        results = [{"source": "coins", "status": "failed"}]

        with patch.object(cli, "verify_connection", AsyncMock()), \
                patch.object(cli, "run_sources", AsyncMock(return_value=results)):
            assert cli.main(["run", "coins"]) == 1

    def test_exit_one_when_store_unreachable(self):
        unreachable = AsyncMock(side_effect=DatabaseConnectionError("Failed to connect to database"))

        with patch.object(cli, "verify_connection", unreachable), \
                patch.object(cli, "run_sources", AsyncMock()) as run_sources:
            assert cli.main(["run", "--all"]) == 1

        run_sources.assert_not_called()

    def test_run_all_uses_every_source(self):
        with patch.object(cli, "verify_connection", AsyncMock()), \
                patch.object(cli, "run_sources", AsyncMock(return_value=[])) as run_sources:
            assert cli.main(["run", "--all"]) == 0

        assert run_sources.call_args.args[0] == sorted(cli.SOURCES)

    def test_init_db(self, tmp_path):
        url = f"sqlite+aiosqlite:///{tmp_path / 'init.db'}"

        with patch.object(cli, "init_database", AsyncMock()) as init_database:
            assert cli.main(["--database-url", url, "init-db"]) == 0

        init_database.assert_called_once()
