"""
Test conftest — isolate configuration from the developer's environment so
that Settings() behaves as if only field defaults are present unless a test
explicitly provides values.
"""
import os

import pytest

from deadline_executor.config import settings as settings_module


@pytest.fixture(autouse=True)
def _isolate_config_env(monkeypatch, tmp_path):
    """Strip DEADLINE_EXECUTOR_* env vars, disable .env loading and run in a
    temp CWD so config/config.yaml from the repo is never picked up by
    accident."""
    for var in list(os.environ):
        if var.upper().startswith("DEADLINE_EXECUTOR_"):
            monkeypatch.delenv(var, raising=False)

    from pydantic_settings import SettingsConfigDict
    patched_config = SettingsConfigDict(
        env_prefix="DEADLINE_EXECUTOR_",
        env_file=None,
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )
    monkeypatch.setattr(settings_module.Settings, "model_config", patched_config)
    monkeypatch.chdir(tmp_path)

    settings_module.reset_settings()
    yield
    settings_module.reset_settings()
