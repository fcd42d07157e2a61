from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from transitroute.domain.algorithms.astar import MODE_PREFERENCE_WEIGHT
from transitroute.domain.algorithms.transit_graph import (
    MAX_WALK_DISTANCE_M,
    WALK_SPEED_MPS,
)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def _env_paths(name: str, default: str) -> tuple[Path, ...]:
    raw = os.getenv(name) or default
    return tuple(Path(p.strip()) for p in raw.split(os.pathsep) if p.strip())


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Runtime settings for loading the network and answering queries.

    Env vars:
      - NETWORK_DATA_PATHS: data source directories, separated by os.pathsep
      - MAX_WALK_DISTANCE_M: walking radius between stops (default 1000)
      - WALK_SPEED_MPS: walking speed (default 1.4)
      - MODE_PREFERENCE_WEIGHT: ranking bias of -MODE / -NMODE options (default 400)
      - LOG_LEVEL: logging level for the CLI (default INFO)
    """

    data_paths: tuple[Path, ...] = (Path("data/network"),)
    max_walk_distance_m: float = MAX_WALK_DISTANCE_M
    walk_speed_mps: float = WALK_SPEED_MPS
    mode_preference_weight: float = MODE_PREFERENCE_WEIGHT
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.walk_speed_mps <= 0:
            raise ValueError(f"Walking speed must be positive: {self.walk_speed_mps}")
        if self.max_walk_distance_m < 0:
            raise ValueError(
                f"Walking radius must not be negative: {self.max_walk_distance_m}"
            )

    @staticmethod
    def from_env() -> "RouterConfig":
        return RouterConfig(
            data_paths=_env_paths("NETWORK_DATA_PATHS", "data/network"),
            max_walk_distance_m=_env_float("MAX_WALK_DISTANCE_M", MAX_WALK_DISTANCE_M),
            walk_speed_mps=_env_float("WALK_SPEED_MPS", WALK_SPEED_MPS),
            mode_preference_weight=_env_float(
                "MODE_PREFERENCE_WEIGHT", MODE_PREFERENCE_WEIGHT
            ),
            log_level=(os.getenv("LOG_LEVEL") or "INFO").strip().upper(),
        )
