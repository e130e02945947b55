"""Environment-variable-based configuration for the practice CLI."""

from __future__ import annotations

import os
from pathlib import Path

POSE_STORE_PATH: Path = Path(os.environ.get("POSE_STORE_PATH", "~/.pose_store.json")).expanduser()
COMPOSITION_POLICY: str = os.environ.get("COMPOSITION_POLICY", "anchored")
TICK_INTERVAL_S: float = float(os.environ.get("TICK_INTERVAL_S", "1.0"))
LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()
