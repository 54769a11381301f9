"""Engine settings loaded from keyword arguments and ``UIRESOLVE_*`` env vars."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    """Timing and behaviour knobs for one resolution engine.

    Attributes:
        timeout_s: How long each single query is polled before it counts as a miss.
        poll_interval_s: Fixed delay between polls of the same query.
        resolve_budget_s: Optional cap on the time one resolve spends across
            all candidates. None keeps the per-query timeout for every candidate,
            so the worst case grows with the number of candidates.
        action_attempts: How many times an action re-resolves and retries.
        action_retry_delay_s: Fixed pause between action attempts.
        js_click_fallback: Try one JavaScript click when a native click is intercepted.
        action_timeout_ms: Driver timeout for a single native action.
        log_level: Minimum level for structlog output.
        log_json: Render logs as JSON lines instead of console text.
    """

    model_config = SettingsConfigDict(env_prefix="UIRESOLVE_", extra="ignore")

    timeout_s: float = Field(default=10.0, ge=0)
    poll_interval_s: float = Field(default=0.5, gt=0)
    resolve_budget_s: float | None = Field(default=None, ge=0)
    action_attempts: int = Field(default=3, ge=1)
    action_retry_delay_s: float = Field(default=1.0, ge=0)
    js_click_fallback: bool = True
    action_timeout_ms: int = Field(default=5000, ge=0)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_json: bool = False
