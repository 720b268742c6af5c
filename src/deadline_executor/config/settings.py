"""
config/settings.py — Deadline Executor Runtime Settings

Settings come from config.yaml, then DEADLINE_EXECUTOR_* environment variables
and .env for any section the YAML leaves out, then field defaults.

  - Field validators reject out-of-range values at parse time
  - validate_all() performs cross-field startup validation and raises
    ConfigError with a human-readable, numbered list of every problem found
  - load_settings() respects DEADLINE_EXECUTOR_CONFIG as a fallback when no
    explicit config_path argument is given
"""

from __future__ import annotations

import os
import threading as _threading
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# ─────────────────────────────────────────────────────────────────────────────
# Errors
# ─────────────────────────────────────────────────────────────────────────────

class ConfigError(Exception):
    """Raised by validate_all() when one or more config problems are found."""


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


# ─────────────────────────────────────────────────────────────────────────────
# Sub-models
# ─────────────────────────────────────────────────────────────────────────────

class ExecutorConfig(BaseModel):
    start_time: int = 0

    @field_validator("start_time")
    @classmethod
    def _non_negative_start(cls, v: int) -> int:
        if v < 0:
            raise ValueError("executor.start_time must be >= 0")
        return v


class CLIConfig(BaseModel):
    prompt: str = "> "
    show_state_after_tick: bool = True


class DemoTask(BaseModel):
    """One task of the built-in demo workload."""
    id: str
    duration: int
    deadline: int
    value: int = 0

    @field_validator("duration")
    @classmethod
    def _positive_duration(cls, v: int) -> int:
        if v < 1:
            raise ValueError("demo task duration must be >= 1")
        return v

    @field_validator("deadline", "value")
    @classmethod
    def _non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("demo task deadline and value must be >= 0")
        return v


def _default_demo_tasks() -> list[DemoTask]:
    return [
        DemoTask(id="T1", duration=3, deadline=5, value=100),
        DemoTask(id="T2", duration=2, deadline=4, value=80),
        DemoTask(id="T3", duration=1, deadline=10, value=50),
    ]


class DemoConfig(BaseModel):
    tasks: list[DemoTask] = Field(default_factory=_default_demo_tasks)
    presentation_ticks: int = 10

    @field_validator("presentation_ticks")
    @classmethod
    def _positive_ticks(cls, v: int) -> int:
        if v < 1:
            raise ValueError("demo.presentation_ticks must be >= 1")
        return v


class LoggingConfig(BaseModel):
    level: str = "INFO"
    log_dir: str = "./data/logs"
    max_file_size_mb: int = 10
    backup_count: int = 5
    console_output: bool = False
    json_format: bool = True

    @field_validator("level")
    @classmethod
    def _valid_log_level(cls, v: str) -> str:
        upper = v.upper()
        if upper not in _VALID_LOG_LEVELS:
            raise ValueError(
                f"logging.level '{v}' is not valid. "
                f"Must be one of: {sorted(_VALID_LOG_LEVELS)}"
            )
        return upper

    @field_validator("max_file_size_mb", "backup_count")
    @classmethod
    def _positive_sizes(cls, v: int) -> int:
        if v < 1:
            raise ValueError("logging.max_file_size_mb and logging.backup_count must be >= 1")
        return v


# ─────────────────────────────────────────────────────────────────────────────
# Root Settings
# ─────────────────────────────────────────────────────────────────────────────

class Settings(BaseSettings):
    """
    Deadline executor runtime settings.

    Priority (highest to lowest):
      1. Sections present in config.yaml (passed as init kwargs)
      2. Environment variables (DEADLINE_EXECUTOR_LOGGING__LEVEL=DEBUG, ...)
      3. .env file
      4. Field defaults
    """

    model_config = SettingsConfigDict(
        env_prefix="DEADLINE_EXECUTOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    executor: ExecutorConfig = Field(default_factory=ExecutorConfig)
    cli: CLIConfig = Field(default_factory=CLIConfig)
    demo: DemoConfig = Field(default_factory=DemoConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("executor", mode="before")
    @classmethod
    def _coerce_executor(cls, v: Any) -> Any:
        return ExecutorConfig(**v) if isinstance(v, dict) else v

    @field_validator("cli", mode="before")
    @classmethod
    def _coerce_cli(cls, v: Any) -> Any:
        return CLIConfig(**v) if isinstance(v, dict) else v

    @field_validator("demo", mode="before")
    @classmethod
    def _coerce_demo(cls, v: Any) -> Any:
        return DemoConfig(**v) if isinstance(v, dict) else v

    @field_validator("logging", mode="before")
    @classmethod
    def _coerce_logging(cls, v: Any) -> Any:
        return LoggingConfig(**v) if isinstance(v, dict) else v

    # -- Convenience properties ----------------------------------------------

    @property
    def log_level(self) -> str:
        return self.logging.level.upper()

    @property
    def log_dir(self) -> Path:
        return Path(self.logging.log_dir)

    @property
    def log_max_bytes(self) -> int:
        return self.logging.max_file_size_mb * 1024 * 1024

    def validate_all(self) -> None:
        """
        Full startup validation. Raises ConfigError listing every problem found.

        Pydantic field validators catch type/value errors at parse time; this
        method catches cross-field problems they can't see.
        """
        errors: list[str] = []

        # ── Demo task ids must be unique (add_task would reject the repeat) ──
        seen: set[str] = set()
        for task in self.demo.tasks:
            if not task.id.strip():
                errors.append("demo.tasks contains a task with an empty id.")
            elif task.id in seen:
                errors.append(
                    f"demo.tasks contains '{task.id}' more than once. "
                    f"Task ids must be unique."
                )
            seen.add(task.id)

        # ── Prompt must be visible ───────────────────────────────────────────
        if not self.cli.prompt.strip():
            errors.append("cli.prompt must not be blank. Use '> ' or similar.")

        if errors:
            listing = "\n".join(f"  {n}. {msg}" for n, msg in enumerate(errors, start=1))
            raise ConfigError(
                f"\n\n{len(errors)} configuration problem(s) stop the deadline "
                f"executor from starting:\n\n{listing}\n\n"
                f"Edit config/config.yaml (or the DEADLINE_EXECUTOR_* variables) "
                f"and try again.\n"
            )


# ─────────────────────────────────────────────────────────────────────────────
# Loading
# ─────────────────────────────────────────────────────────────────────────────

CONFIG_ENV_VAR = "DEADLINE_EXECUTOR_CONFIG"
DEFAULT_CONFIG_PATH = Path("config") / "config.yaml"

# Top-level YAML keys handed to Settings; anything else in the file is ignored.
_SECTIONS = ("executor", "cli", "demo", "logging")

_current: Optional[Settings] = None
_current_lock = _threading.Lock()


def _config_path(explicit: str | Path | None) -> Path:
    """--config argument first, then $DEADLINE_EXECUTOR_CONFIG, then config/config.yaml."""
    if explicit is not None:
        return Path(explicit)
    from_env = os.environ.get(CONFIG_ENV_VAR)
    return Path(from_env) if from_env else DEFAULT_CONFIG_PATH


def _read_sections(path: Path) -> dict[str, Any]:
    if not path.is_file():
        return {}
    raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return {name: raw[name] for name in _SECTIONS if name in raw}


def load_settings(config_path: str | Path | None = None) -> Settings:
    """
    Build Settings from the resolved config file and the environment, and
    make it the process-wide instance returned by get_settings().

    A missing config file is not an error: env vars and field defaults apply.
    Raises pydantic.ValidationError on out-of-range values.
    """
    global _current
    settings = Settings(**_read_sections(_config_path(config_path)))
    with _current_lock:
        _current = settings
    return settings


def get_settings() -> Settings:
    """Return the process-wide Settings, loading from the default path on first use."""
    global _current
    with _current_lock:
        if _current is None:
            _current = Settings(**_read_sections(_config_path(None)))
        return _current


def reset_settings() -> None:
    """Forget the process-wide Settings (tests)."""
    global _current
    with _current_lock:
        _current = None
