from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from . import canon, exceptions, utils

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineConfig:
    # Currency per kWh, restored from the user's saved preference
    cost_rate: float = canon.DEFAULT_COST_RATE

    # Raw row schema
    date_field: str = canon.DATE_FIELD
    min_field: str = canon.MIN_FIELD
    max_field: str = canon.MAX_FIELD
    total_field: str = canon.TOTAL_FIELD

    # Lowercase substrings marking disclaimer rows
    notice_markers: tuple[str, ...] = canon.NOTICE_MARKERS

    def __post_init__(self):
        exceptions.require(
            self.cost_rate >= 0,
            f"cost_rate must be non-negative, got {self.cost_rate}",
            exceptions.ConfigError,
        )


def default_config() -> EngineConfig:
    return EngineConfig()


def config_from_settings(
    settings: Optional[Mapping[str, Any]],
    *,
    key: str = canon.RATE_SETTING_KEY,
) -> EngineConfig:
    """
    Build a config from a stored preferences mapping.

    The cost rate is read from ``settings[key]``; a missing, unparsable or
    negative value keeps the default rate and is logged.
    """
    if not settings or key not in settings:
        return default_config()
    raw = settings[key]
    rate, ok = utils.coerce_number(raw)
    if not ok or rate < 0:
        logger.warning("Ignoring invalid stored cost rate %r", raw)
        return default_config()
    return EngineConfig(cost_rate=rate)
