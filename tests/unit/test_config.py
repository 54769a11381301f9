"""Tests for engine settings."""

import pytest
from pydantic import ValidationError

from uiresolve.config import EngineSettings


class TestEngineSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for var in ("UIRESOLVE_TIMEOUT_S", "UIRESOLVE_ACTION_ATTEMPTS"):
            monkeypatch.delenv(var, raising=False)
        s = EngineSettings()
        assert s.timeout_s == 10.0
        assert s.poll_interval_s == 0.5
        assert s.resolve_budget_s is None
        assert s.action_attempts == 3
        assert s.action_retry_delay_s == 1.0
        assert s.js_click_fallback is True

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("UIRESOLVE_TIMEOUT_S", "2.5")
        monkeypatch.setenv("UIRESOLVE_JS_CLICK_FALLBACK", "false")
        s = EngineSettings()
        assert s.timeout_s == 2.5
        assert s.js_click_fallback is False

    def test_kwargs_beat_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("UIRESOLVE_TIMEOUT_S", "2.5")
        assert EngineSettings(timeout_s=1).timeout_s == 1

    def test_rejects_zero_poll_interval(self) -> None:
        with pytest.raises(ValidationError):
            EngineSettings(poll_interval_s=0)

    def test_rejects_zero_attempts(self) -> None:
        with pytest.raises(ValidationError):
            EngineSettings(action_attempts=0)

    def test_rejects_unknown_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("UIRESOLVE_LOG_LEVEL", "verbose")
        with pytest.raises(ValidationError):
            EngineSettings()

    def test_accepts_known_log_level(self) -> None:
        assert EngineSettings(log_level="DEBUG").log_level == "DEBUG"
