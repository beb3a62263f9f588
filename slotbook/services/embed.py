"""
Link building for the embeddable booking widget.

The widget's base URL is passed in explicitly through ``EmbedConfig``.
"""

from typing import Dict, Optional

from ..config import EmbedConfig

EMBED_MODES = ("popup", "inline")


class EmbedLinks:
    """Builds booking page URLs for the popup, inline and badge embeds."""

    def __init__(self, config: EmbedConfig):
        self.config = config

    def booking_url(self, username: str, event_slug: str) -> str:
        if not username or not event_slug:
            raise ValueError("username and event_slug are required")
        return f"{self.config.base_url}/{username}/{event_slug}"

    def embed_url(self, username: str, event_slug: str, mode: str) -> str:
        """URL loaded by the widget iframe for the given embed mode."""
        if mode not in EMBED_MODES:
            raise ValueError(f"Embed mode must be one of {EMBED_MODES}, got {mode!r}")
        return f"{self.booking_url(username, event_slug)}?embed={mode}"

    def badge_options(
        self,
        text: Optional[str] = None,
        color: Optional[str] = None,
    ) -> Dict[str, str]:
        """Badge label and colour, falling back to the configured defaults."""
        return {
            "text": text or self.config.badge_text,
            "color": color or self.config.badge_color,
        }
