"""Engine tuning knobs loaded from the environment."""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Any, Dict

from pydantic import BaseModel, Field


class EngineConfig(BaseModel):
    """Retry budgets used by the random placement generator."""

    max_placement_attempts: int = Field(default=500, ge=500)
    max_board_attempts: int = Field(default=25, ge=1)

    @classmethod
    def from_env(cls, **overrides: Any) -> "EngineConfig":
        """Construct config from `SALVO_*` env vars."""

        data: Dict[str, Any] = {}
        env_fields = {
            "max_placement_attempts": "SALVO_MAX_PLACEMENT_ATTEMPTS",
            "max_board_attempts": "SALVO_MAX_BOARD_ATTEMPTS",
        }
        for field, env_name in env_fields.items():
            value = os.getenv(env_name)
            if value is not None and value.strip():
                data[field] = int(value.strip())
        data.update(overrides)
        return cls(**data)


@lru_cache(maxsize=1)
def load_engine_config() -> EngineConfig:
    """Load and cache engine config from the environment."""

    return EngineConfig.from_env()
