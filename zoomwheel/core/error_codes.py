"""
Structured error codes for configuration failures.
Use these keys on ZoomConfigError; map to user-facing messages in the host.
"""

from __future__ import annotations

# Known error keys
EMPTY_PRESETS = "empty_presets"
NON_POSITIVE_ZOOM = "non_positive_zoom"
INVALID_ARC = "invalid_arc"

# User-facing messages (short, actionable)
USER_MESSAGES: dict[str, str] = {
    EMPTY_PRESETS: "No zoom presets configured. Supply at least one zoom level.",
    NON_POSITIVE_ZOOM: "Zoom levels must be positive numbers.",
    INVALID_ARC: "Wheel arc span must be a positive angle.",
}


class ZoomConfigError(ValueError):
    """Caller configuration bug (empty presets, zoom <= 0, bad arc). Raised at construction."""

    def __init__(self, code: str, detail: str | None = None) -> None:
        self.code = code
        msg = user_message(code)
        super().__init__(f"{msg} ({detail})" if detail else msg)


def user_message(error_key: str | None, fallback: str = "Invalid zoom configuration.") -> str:
    """Return a user-facing message for the given error key."""
    if not error_key:
        return fallback
    return USER_MESSAGES.get(error_key, fallback)
