"""
Timeline Render Layer

RESPONSIBILITY: Drive one render pass across the render boundary
ALLOWED INPUTS: Raw events, timeline arguments, a RenderSurface
OUTPUTS: RenderPassResult; a safe fallback render on failure

WHAT THIS LAYER MUST NOT DO:
============================
- Hand the surface an unsanitized window
- Let a surface failure reach the host
- Keep state between passes
"""

from .config import RenderConfig, DEFAULT_RENDER_CONFIG, FALLBACK_NOTICE, FAILURE_NOTICE
from .pipeline import build_horizontal_timeline, RenderPassResult
from .probe import RenderProbe, ProbeReport
from .surface import RenderSurface, RecordingSurface, RenderedTimeline, RenderBoundaryError

__all__ = [
    'RenderConfig',
    'DEFAULT_RENDER_CONFIG',
    'FALLBACK_NOTICE',
    'FAILURE_NOTICE',
    'build_horizontal_timeline',
    'RenderPassResult',
    'RenderProbe',
    'ProbeReport',
    'RenderSurface',
    'RecordingSurface',
    'RenderedTimeline',
    'RenderBoundaryError',
]
