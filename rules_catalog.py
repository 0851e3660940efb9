from __future__ import annotations

import json
import math
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Tuple

from config import (
    CLUSTER_COUNT_RANGE,
    CLUSTER_SIZE_RANGE,
    REPLENISH_RESOURCES,
    RESOURCE_COUNT_RANGE,
    RULES_FILE,
    TICK_INTERVAL,
)


@dataclass(frozen=True)
class Rules:
    """Tunable simulation rules, optionally overridden by ``data/rules.json``."""

    cluster_count: Tuple[int, int] = CLUSTER_COUNT_RANGE
    cluster_size: Tuple[int, int] = CLUSTER_SIZE_RANGE
    resource_count: Tuple[int, int] = RESOURCE_COUNT_RANGE
    tick_interval: float = TICK_INTERVAL
    replenish_resources: bool = REPLENISH_RESOURCES

    def to_runtime_dict(self) -> Dict[str, Any]:
        return {
            "cluster_count": list(self.cluster_count),
            "cluster_size": list(self.cluster_size),
            "resource_count": list(self.resource_count),
            "tick_interval": self.tick_interval,
            "replenish_resources": self.replenish_resources,
        }


DEFAULT_RULES = Rules()

RANGE_KEYS = ("cluster_count", "cluster_size", "resource_count")


def _coerce_range(value: Any, *, minimum: int) -> Tuple[int, int] | None:
    if not isinstance(value, list) or len(value) != 2:
        return None
    lo, hi = value
    if any(isinstance(v, bool) or not isinstance(v, int) for v in (lo, hi)):
        return None
    if lo < minimum or hi < lo:
        return None
    return lo, hi


def _is_positive_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, (int, float)) and math.isfinite(value) and value > 0


def _parse_rules(raw: Dict[str, Any]) -> Rules:
    overrides: Dict[str, Any] = {}
    for key in RANGE_KEYS:
        if key not in raw:
            continue
        # a cluster may legitimately be empty, but every deposit holds at least one unit
        minimum = 1 if key == "resource_count" else 0
        parsed = _coerce_range(raw[key], minimum=minimum)
        if parsed is not None:
            overrides[key] = parsed

    tick_interval = raw.get("tick_interval")
    if _is_positive_number(tick_interval):
        overrides["tick_interval"] = float(tick_interval)

    replenish = raw.get("replenish_resources")
    if isinstance(replenish, bool):
        overrides["replenish_resources"] = replenish

    return replace(DEFAULT_RULES, **overrides)


def load_rules_catalog(path: Path = RULES_FILE) -> Rules:
    if not path.exists():
        return DEFAULT_RULES

    try:
        raw = json.loads(path.read_text())
    except (json.JSONDecodeError, OSError):
        return DEFAULT_RULES

    if not isinstance(raw, dict):
        return DEFAULT_RULES

    return _parse_rules(raw)
