from __future__ import annotations

import os
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

ENV_PREFIX = "LATENCY_PROBE_"


class ProbeConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    url: str = Field(min_length=1)
    sleep_ms: int = Field(default=500, ge=0)
    count: int = Field(default=0, ge=0)
    timeout_seconds: float = Field(default=10.0, gt=0)

    @property
    def sleep_seconds(self) -> float:
        return self.sleep_ms / 1000

    @property
    def unbounded(self) -> bool:
        return self.count == 0


def _env_value(name: str, cast: type) -> Any:
    raw = os.getenv(f"{ENV_PREFIX}{name}")
    if raw is None or not raw.strip():
        return None
    try:
        return cast(raw.strip())
    except ValueError as exc:
        raise ValueError(f"invalid {ENV_PREFIX}{name} value: {raw}") from exc


def env_defaults() -> dict[str, Any]:
    values = {
        "url": _env_value("URL", str),
        "sleep_ms": _env_value("SLEEP_MS", int),
        "count": _env_value("COUNT", int),
        "timeout_seconds": _env_value("TIMEOUT_SECONDS", float),
    }
    return {key: value for key, value in values.items() if value is not None}


def load_probe_config(**overrides: Any) -> ProbeConfig:
    payload = env_defaults()
    payload.update({key: value for key, value in overrides.items() if value is not None})
    return ProbeConfig.model_validate(payload)
