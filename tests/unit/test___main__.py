"""Unit tests for the notecal command line."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import Mock

import pytest

from notecal.__main__ import _create_parser, main, run

pytestmark = pytest.mark.unit


@pytest.fixture
def vault(tmp_path: Path) -> Path:
    notes = tmp_path / "vault"
    notes.mkdir()
    (notes / "Dentist.md").write_text("---\ndate: 2025-01-15\ntime: 2:00 PM\n---\n#calendar\n", encoding="utf-8")
    (notes / "Standup.md").write_text(
        "---\ndate: 2025-01-06\nrecurrence: weekly\ntime: 9:00\ntags: [calendar]\n---\n", encoding="utf-8"
    )
    (notes / "Groceries.md").write_text("---\ndate: 2025-01-15\n---\n#errands\n", encoding="utf-8")
    return notes


def _args(vault: Path, *extra: str):
    return _create_parser().parse_args(["--vault", str(vault), "--config", str(vault / "none.yaml"), *extra])


class TestCreateParser:
    def test_create_parser_when_called_then_prog_and_defaults(self) -> None:
        parser = _create_parser()

        args = parser.parse_args(["--vault", "notes"])

        assert parser.prog == "notecal"
        assert args.vault == "notes"
        assert args.view is None
        assert args.log_level == "WARNING"

    def test_create_parser_when_vault_missing_then_exits(self) -> None:
        with pytest.raises(SystemExit):
            _create_parser().parse_args([])

    def test_create_parser_when_unknown_view_then_exits(self) -> None:
        with pytest.raises(SystemExit):
            _create_parser().parse_args(["--vault", "x", "--view", "year"])


class TestRun:
    def test_run_when_day_view_then_sorted_occurrences(self, vault: Path, settings) -> None:
        result = run(_args(vault, "--view", "day", "--date", "2025-01-15"))

        assert result["view"] == "day"
        assert result["title"] == "2025-01-15"
        assert [o["title"] for o in result["occurrences"]] == ["Dentist"]

    def test_run_when_month_view_then_six_weeks(self, vault: Path, settings) -> None:
        result = run(_args(vault, "--date", "2025-01-15"))

        assert result["view"] == "month"
        assert len(result["weeks"]) == 6
        assert all(len(week["days"]) == 7 for week in result["weeks"])

    def test_run_when_search_then_only_matching_titles(self, vault: Path, settings) -> None:
        result = run(_args(vault, "--view", "week", "--date", "2025-01-15", "--search", "dent"))

        titles = [o["title"] for day in result["days"] for o in day["occurrences"]]
        assert titles == ["Dentist"]


class TestMain:
    @pytest.fixture(autouse=True)
    def logging_setup(self, monkeypatch) -> Mock:
        """Keep main() from reconfiguring the test session's root logger."""
        configure = Mock(return_value=20)
        monkeypatch.setattr("notecal.__main__.configure_logging", configure)
        return configure

    def test_main_when_log_level_given_then_logging_configured_with_it(self, vault: Path, settings, logging_setup) -> None:
        with pytest.raises(SystemExit):
            main(["--vault", str(vault), "--config", str(vault / "none.yaml"), "--log-level", "DEBUG"])

        logging_setup.assert_called_once_with("DEBUG")

    def test_main_when_success_then_json_and_exit_zero(self, vault: Path, settings, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--vault", str(vault), "--config", str(vault / "none.yaml"), "--view", "day", "--date", "2025-01-15"])

        assert exc_info.value.code == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["occurrences"][0]["time"] == "2:00 PM"

    def test_main_when_bad_date_then_usage_error(self, vault: Path, settings) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--vault", str(vault), "--date", "2025-02-30"])

        assert exc_info.value.code == 2

    def test_main_when_vault_missing_then_exit_one(self, tmp_path: Path, settings, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--vault", str(tmp_path / "nowhere"), "--config", str(tmp_path / "none.yaml")])

        assert exc_info.value.code == 1
        assert "Vault is not a directory" in capsys.readouterr().err
