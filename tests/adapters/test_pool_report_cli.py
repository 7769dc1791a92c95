"""Tests for the pool_report_cli adapter."""

from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from src.adapters import pool_report_cli
from src.application.use_cases.get_pool_ledger import PoolLedgerView
from src.infrastructure.settings import PoolSettings


def _patch_logger(monkeypatch) -> MagicMock:
    fake_logger = MagicMock()
    monkeypatch.setattr(pool_report_cli, "get_app_logger", lambda: fake_logger)
    return fake_logger


def test_main_requires_trip_id(monkeypatch, capsys):
    fake_logger = _patch_logger(monkeypatch)
    monkeypatch.delenv("POOL_TRIP_ID", raising=False)

    pool_report_cli.main()

    fake_logger.warning.assert_called_once()
    assert capsys.readouterr().out == ""


def test_main_prints_summary_and_exports(monkeypatch, capsys, tmp_path):
    """The CLI should print the share text and write the CSV export."""
    _patch_logger(monkeypatch)
    monkeypatch.setenv("POOL_TRIP_ID", "trip-9")
    settings = PoolSettings(
        backend="memory",
        currency_symbol="$",
        export_dir=tmp_path,
    )
    monkeypatch.setattr(
        pool_report_cli.PoolSettings,
        "from_env",
        classmethod(lambda cls: settings),
    )
    expected_repository = object()

    def _fake_build(settings):
        assert settings.backend == "memory"
        return expected_repository

    fake_use_case = MagicMock()
    fake_use_case.execute.return_value = PoolLedgerView(
        trip_id="trip-9",
        total_contributed_cents=1250,
    )

    def _fake_use_case(repository, logger):
        assert repository is expected_repository
        return fake_use_case

    monkeypatch.setattr(pool_report_cli, "build_pool_repository", _fake_build)
    monkeypatch.setattr(
        pool_report_cli,
        "GetPoolLedgerUseCase",
        _fake_use_case,
    )

    pool_report_cli.main()

    fake_use_case.execute.assert_called_once_with("trip-9")
    output = capsys.readouterr().out
    assert "Total contributed: $12.50" in output
    assert "travelpool_settleup_trip-9.csv" in output
    assert (tmp_path / "travelpool_settleup_trip-9.csv").exists()


def test_main_logs_configuration_errors(monkeypatch, capsys):
    fake_logger = _patch_logger(monkeypatch)
    monkeypatch.setenv("POOL_TRIP_ID", "trip-9")
    monkeypatch.setattr(
        pool_report_cli.PoolSettings,
        "from_env",
        classmethod(lambda cls: PoolSettings()),
    )

    def _raise(settings):
        raise RuntimeError("Missing environment variable: POOL_DB_URL")

    monkeypatch.setattr(pool_report_cli, "build_pool_repository", _raise)

    pool_report_cli.main()

    fake_logger.error.assert_called_once_with(
        "Missing environment variable: POOL_DB_URL"
    )
    assert capsys.readouterr().out == ""


def test_main_logs_database_errors(monkeypatch, capsys):
    """A missing schema should be logged instead of escaping."""
    fake_logger = _patch_logger(monkeypatch)
    monkeypatch.setenv("POOL_TRIP_ID", "trip-9")
    monkeypatch.setattr(
        pool_report_cli.PoolSettings,
        "from_env",
        classmethod(lambda cls: PoolSettings()),
    )
    monkeypatch.setattr(
        pool_report_cli,
        "build_pool_repository",
        lambda settings: MagicMock(),
    )
    failing_use_case = MagicMock()
    failing_use_case.execute.side_effect = OperationalError(
        "SELECT",
        {},
        Exception("no such table: trip_members"),
    )
    monkeypatch.setattr(
        pool_report_cli,
        "GetPoolLedgerUseCase",
        lambda repository, logger: failing_use_case,
    )

    pool_report_cli.main()

    fake_logger.error.assert_called_once()
    assert "no such table" in fake_logger.error.call_args.args[0]
    assert capsys.readouterr().out == ""
