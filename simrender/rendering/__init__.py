"""
Rendering orchestration.

Selects a rendering strategy for a scenario, validates the render setup
and hands screen-space primitives to the drawing layer.
"""

from simrender.rendering.manager import (
    RenderingManager,
    RenderSetup,
    RenderValidationResult,
    QualityStandards,
)
from simrender.rendering.scene import (
    SceneParameters,
    SceneResults,
    SceneAnalysis,
    Environment,
    Physics2DSettings,
    RenderRecommendation,
    analyze_scene,
    recommend_render_setup,
)
from simrender.rendering.strategy import (
    RenderStrategy,
    RenderStrategyType,
    Canvas2DStrategy,
    WebGL3DStrategy,
    BodyPlacement,
    LinePrimitive,
    CirclePrimitive,
    create_strategy,
)

__all__ = [
    # Manager
    "RenderingManager",
    "RenderSetup",
    "RenderValidationResult",
    "QualityStandards",
    # Scene
    "SceneParameters",
    "SceneResults",
    "SceneAnalysis",
    "Environment",
    "Physics2DSettings",
    "RenderRecommendation",
    "analyze_scene",
    "recommend_render_setup",
    # Strategies
    "RenderStrategy",
    "RenderStrategyType",
    "Canvas2DStrategy",
    "WebGL3DStrategy",
    "BodyPlacement",
    "LinePrimitive",
    "CirclePrimitive",
    "create_strategy",
]
