"""
tests/unit/test_main.py — Entry Point + Logging Tests

Covers:
  - parse_args defaults and choices
  - bootstrap exits 1 on invalid values and on cross-field config problems
  - main --mode demo runs the configured workload and returns 0
  - main --mode interactive drives the interpreter until EOF
  - setup_logging writes JSON lines carrying the bound run id
"""

from __future__ import annotations

import json
import logging
import textwrap
from pathlib import Path

import pytest
import structlog

from deadline_executor.main import main, parse_args
from deadline_executor.observability.logger import bind_run, clear_run, get_logger, setup_logging


# ── Helpers ───────────────────────────────────────────────────────────────────

def _write_config(tmp_path: Path, body: str) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(textwrap.dedent(body), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    clear_run()
    structlog.reset_defaults()
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()


# ─────────────────────────────────────────────────────────────────────────────
# Argument parsing
# ─────────────────────────────────────────────────────────────────────────────

class TestParseArgs:

    def test_defaults(self):
        args = parse_args([])
        assert args.mode == "interactive"
        assert args.config is None
        assert args.log_level is None

    def test_all_flags(self):
        args = parse_args(["--mode", "presentation", "--config", "x.yaml", "--log-level", "DEBUG"])
        assert args.mode == "presentation"
        assert args.config == "x.yaml"
        assert args.log_level == "DEBUG"

    def test_unknown_mode_rejected(self):
        with pytest.raises(SystemExit):
            parse_args(["--mode", "batch"])


# ─────────────────────────────────────────────────────────────────────────────
# main()
# ─────────────────────────────────────────────────────────────────────────────

class TestMain:

    def test_demo_mode(self, tmp_path, capsys):
        cfg = _write_config(tmp_path, f"""
            logging:
              log_dir: "{(tmp_path / 'logs').as_posix()}"
        """)
        assert main(["--mode", "demo", "--config", str(cfg)]) == 0
        out = capsys.readouterr().out
        assert "Final Report" in out
        assert "230" in out
        assert (tmp_path / "logs" / "deadline_executor.log").exists()

    def test_interactive_mode_until_eof(self, tmp_path, monkeypatch, capsys):
        from rich.console import Console

        lines = iter(["ADD_TASK A 1 5 10", "RUN_ALL"])

        def _input(self, prompt: str = "", **kwargs) -> str:
            try:
                return next(lines)
            except StopIteration:
                raise EOFError from None

        monkeypatch.setattr(Console, "input", _input)
        assert main(["--config", str(tmp_path / "missing.yaml")]) == 0
        out = capsys.readouterr().out
        assert "ADDED: Task A" in out
        assert "All tasks processed." in out

    def test_invalid_value_exits_1(self, tmp_path, capsys):
        cfg = _write_config(tmp_path, """
            logging:
              level: LOUD
        """)
        with pytest.raises(SystemExit) as exc_info:
            main(["--mode", "demo", "--config", str(cfg)])
        assert exc_info.value.code == 1
        assert "Invalid configuration" in capsys.readouterr().err

    def test_cross_field_problem_exits_1(self, tmp_path, capsys):
        cfg = _write_config(tmp_path, """
            demo:
              tasks:
                - {id: A, duration: 1, deadline: 5}
                - {id: A, duration: 2, deadline: 6}
        """)
        with pytest.raises(SystemExit) as exc_info:
            main(["--mode", "demo", "--config", str(cfg)])
        assert exc_info.value.code == 1
        assert "more than once" in capsys.readouterr().err


# ─────────────────────────────────────────────────────────────────────────────
# Logging
# ─────────────────────────────────────────────────────────────────────────────

class TestLogging:

    def test_json_file_output_with_run_context(self, tmp_path):
        setup_logging(level="INFO", log_dir=tmp_path, json_format=True)
        run_id = bind_run("demo", run_id="abc123")
        get_logger("deadline_executor.test").info("test.event", id="T1", at=3)

        lines = (tmp_path / "deadline_executor.log").read_text(encoding="utf-8").splitlines()
        record = json.loads(lines[-1])
        assert run_id == "abc123"
        assert record["event"] == "test.event"
        assert record["id"] == "T1"
        assert record["at"] == 3
        assert record["run_id"] == "abc123"
        assert record["mode"] == "demo"
        assert record["level"] == "info"

    def test_level_filters_file(self, tmp_path):
        setup_logging(level="WARNING", log_dir=tmp_path, json_format=True)
        log = get_logger("deadline_executor.test")
        log.info("quiet.event")
        log.warning("loud.event")

        text = (tmp_path / "deadline_executor.log").read_text(encoding="utf-8")
        assert "quiet.event" not in text
        assert "loud.event" in text

    def test_bind_run_generates_id(self):
        run_id = bind_run("interactive")
        assert len(run_id) == 8
