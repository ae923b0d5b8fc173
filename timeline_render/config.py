"""
Render Pass Configuration
"""

from __future__ import annotations
from dataclasses import dataclass

from timeline_core.contracts.viewport import ViewportWindow
from timeline_core.viewport import SAFE_WINDOW


FALLBACK_NOTICE = "Timeline could not be rendered due to data issues. Check console for details."
FAILURE_NOTICE = "Timeline rendering failed. Please check your timeline data and try again."


@dataclass(frozen=True)
class RenderConfig:
    """
    Configuration for one render pass.

    WHY FROZEN:
    The fallback path must not depend on state the failing pass touched.
    """
    probe_delay_seconds: float = 0.5
    fallback_window: ViewportWindow = SAFE_WINDOW
    fallback_min_height: int = 200
    fallback_notice: str = FALLBACK_NOTICE
    failure_notice: str = FAILURE_NOTICE

    def __post_init__(self):
        if self.probe_delay_seconds < 0:
            raise ValueError("probe_delay_seconds must be non-negative")
        if self.fallback_min_height <= 0:
            raise ValueError("fallback_min_height must be positive")


DEFAULT_RENDER_CONFIG = RenderConfig()
