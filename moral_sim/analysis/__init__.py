"""Analysis module - Moral spectrum, colour mapping and metrics."""

from .spectrum import (
    SpectrumStop,
    build_community_spectrum,
    community_gradient_css,
    moral_score_to_color,
)
from .metrics import MetricsCollector, CommunityMetrics, StoryMetrics

__all__ = [
    "SpectrumStop",
    "build_community_spectrum",
    "community_gradient_css",
    "moral_score_to_color",
    "MetricsCollector",
    "CommunityMetrics",
    "StoryMetrics",
]
