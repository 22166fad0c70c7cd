"""
Temporal Graph Settings

Read from the environment, the same way the service reads its community
settings. Nothing here is required: the defaults describe an unbounded
timeline and quiet logging.

TEMPORAL_GRAPH_EPOCH      earliest date trend discovery looks at (ISO date)
TEMPORAL_GRAPH_HORIZON    date trend discovery stops before (ISO date)
TEMPORAL_GRAPH_LOG_LEVEL  DEBUG / INFO / WARNING / ERROR / CRITICAL
"""

import logging
import os
from datetime import date
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


ENV_PREFIX = "TEMPORAL_GRAPH_"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class NetworkSettings(BaseModel):
    """Tunable behaviour of a social network."""
    model_config = ConfigDict(frozen=True)

    epoch: date = date.min
    horizon: date = date.max
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        value = value.upper()
        if value not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return value

    @model_validator(mode="after")
    def _ordered_window(self) -> 'NetworkSettings':
        if self.epoch >= self.horizon:
            raise ValueError("epoch must come before horizon")
        return self

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'NetworkSettings':
        """Build settings from TEMPORAL_GRAPH_* variables. Unset ones keep defaults."""
        getenv = environ.get if environ is not None else os.getenv
        values = {}
        for name in ("epoch", "horizon", "log_level"):
            raw = getenv(ENV_PREFIX + name.upper())
            if raw:
                values[name] = raw
        return cls(**values)


def configure_logging(settings: Optional[NetworkSettings] = None) -> None:
    """Point the root logger at stderr using the configured level."""
    settings = settings or NetworkSettings.from_env()
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
    logging.getLogger("temporal_graph").setLevel(settings.log_level)
