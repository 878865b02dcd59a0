"""Tests for the command-line entry point."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from hubsearch.cli import build_parser, main


class TestParser:
    def test_overrides(self) -> None:
        args = build_parser().parse_args(["--port", "9000", "--store", "http", "--log-level", "debug"])
        assert args.port == 9000
        assert args.store == "http"
        assert args.log_level == "debug"

    def test_rejects_unknown_store(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--store", "sqlite"])


class TestMain:
    def test_runs_app_with_overrides(self) -> None:
        with patch("uvicorn.run") as run:
            main(["--host", "127.0.0.1", "--port", "9001"])
        run.assert_called_once()
        kwargs = run.call_args.kwargs
        assert kwargs["host"] == "127.0.0.1"
        assert kwargs["port"] == 9001

    def test_reload_uses_factory_string(self) -> None:
        with patch("uvicorn.run") as run:
            main(["--reload"])
        assert run.call_args.args[0] == "hubsearch.api.app:create_app"
        assert run.call_args.kwargs["factory"] is True

    def test_missing_config(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit):
            main(["--config", str(tmp_path / "absent.yaml")])

    def test_missing_seed(self, tmp_path: Path) -> None:
        with patch("uvicorn.run") as run, pytest.raises(SystemExit):
            main(["--seed", str(tmp_path / "absent.yaml")])
        run.assert_not_called()
