"""Lifecycle event log for the time rotating resource.

Every state transition is written as one JSON line so it can be grepped and
parsed without a log schema. Only identifiers and timestamps are logged;
trigger values are opaque caller data and are reduced to their keys.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from rotating.core.model import TimestampModel

logger = logging.getLogger("rotating.lifecycle")


def log_lifecycle_event(event: str, state: Optional[TimestampModel] = None, **extra: Any) -> None:
    payload: dict[str, Any] = {"event": event}
    if state is not None:
        payload["id"] = state.id
        payload["rotation_rfc3339"] = state.rotation_rfc3339
        payload["trigger_keys"] = sorted(state.triggers or {})
    payload.update(extra)
    logger.info(json.dumps(payload, sort_keys=True))
