"""JSON formatting utilities for fix data."""

import json
import math
from typing import Any

from gnssfix.gnss import GnssMonitor

__all__ = ["fix_payload", "format_fix_message"]


def _finite(value: float) -> float | None:
    # NaN is not valid JSON
    if math.isnan(value):
        return None
    return value


def fix_payload(monitor: GnssMonitor) -> dict[str, Any]:
    """Snapshot the monitor's current fix as a JSON-ready dictionary."""
    state = monitor.state
    quality = monitor.fix_quality
    return {
        "valid": state.is_valid,
        "lat": _finite(state.latitude),
        "lon": _finite(state.longitude),
        "alt": _finite(state.altitude),
        "geoid_height": _finite(state.geoid_height),
        "horizontal_error": _finite(state.horizontal_error),
        "vertical_error": _finite(state.vertical_error),
        "fix_time": state.fix_time.isoformat() if state.fix_time is not None else None,
        "fix_quality": int(quality),
        "fix_quality_name": quality.name,
        "speed_ms": _finite(monitor.speed_meters_per_second),
        "course_degrees": _finite(monitor.course),
        "hdop": _finite(monitor.hdop),
        "pdop": _finite(monitor.pdop),
        "vdop": _finite(monitor.vdop),
        "datum": monitor.datum,
        "satellites_in_view": monitor.satellites_in_view,
    }


def format_fix_message(monitor: GnssMonitor, event: str) -> str:
    """Serialize the current fix into a JSON string for WebSocket transmission."""
    return json.dumps({"type": "fix", "event": event, **fix_payload(monitor)})
