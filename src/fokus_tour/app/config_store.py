"""Persisted first-run tour state.

The engine never persists anything; the host records whether the user has
seen the tour (and how it ended) so the tour is only offered on first launch.

Design principles:
- Pure logic (no Qt) so it can be unit-tested headless.
- Explicit schema with a version field.
- Graceful fallback: a corrupt or incompatible file yields defaults.
- Atomic write via a temporary file + replace.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional

__all__ = [
    "TourStateConfig",
    "load_config",
    "save_config",
    "mark_tour_seen",
    "CONFIG_VERSION",
    "OUTCOME_COMPLETED",
    "OUTCOME_SKIPPED",
]

log = logging.getLogger(__name__)

CONFIG_VERSION = 1

DEFAULT_FILENAME = "tour_state.json"

OUTCOME_COMPLETED = "completed"
OUTCOME_SKIPPED = "skipped"
_OUTCOMES = {OUTCOME_COMPLETED, OUTCOME_SKIPPED}


@dataclass(slots=True)
class TourStateConfig:
    """Serializable tour state.

    Attributes
    ----------
    version: Schema version.
    tour_seen: True once the tour was completed or skipped.
    last_outcome: "completed", "skipped" or None if never finished.
    """

    version: int = CONFIG_VERSION
    tour_seen: bool = False
    last_outcome: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TourStateConfig":
        outcome = data.get("last_outcome")
        return cls(
            version=int(data.get("version", CONFIG_VERSION)),
            tour_seen=bool(data.get("tour_seen", False)),
            last_outcome=outcome if outcome in _OUTCOMES else None,
        )


def _resolve_path(base_dir: str | Path | None) -> Path:
    base = Path(base_dir) if base_dir else Path.cwd()
    return base / DEFAULT_FILENAME


def load_config(base_dir: str | Path | None = None) -> TourStateConfig:
    path = _resolve_path(base_dir)
    if not path.exists():
        return TourStateConfig()
    try:
        cfg = TourStateConfig.from_dict(json.loads(path.read_text(encoding="utf-8")))
    except Exception:  # noqa: BLE001 - unreadable state means "not seen"
        log.warning("ignoring unreadable tour state at %s", path, exc_info=True)
        return TourStateConfig()
    if cfg.version != CONFIG_VERSION:
        # Unknown schema: keep only the seen flag
        return TourStateConfig(tour_seen=cfg.tour_seen)
    return cfg


def save_config(cfg: TourStateConfig, base_dir: str | Path | None = None) -> Path:
    path = _resolve_path(base_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(json.dumps(cfg.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")
    tmp.replace(path)
    return path


def mark_tour_seen(outcome: str, base_dir: str | Path | None = None) -> TourStateConfig:
    """Record a finished tour and persist it. Returns the saved state."""
    if outcome not in _OUTCOMES:
        raise ValueError(f"Unknown tour outcome: {outcome!r}")
    cfg = TourStateConfig(tour_seen=True, last_outcome=outcome)
    save_config(cfg, base_dir)
    log.info("tour marked as seen (%s)", outcome)
    return cfg
