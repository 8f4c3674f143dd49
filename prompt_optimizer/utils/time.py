from __future__ import annotations

from datetime import datetime, timezone


def utc_run_id() -> str:
    # Microseconds keep back-to-back runs in separate directories.
    return datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S-%f")
