"""Closed style types for bodies, surfaces, themes and motion phases."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Theme(str, Enum):
    """Visual themes for the canvas background and helpers."""

    LIGHT = "light"
    DARK = "dark"
    PHYSICS = "physics"


class BodyKind(str, Enum):
    """Kinds of bodies a scene can contain."""

    BALL = "ball"
    CART = "cart"
    BLOCK = "block"
    BOARD = "board"
    POINT = "point"
    COMPOUND = "compound"


class BodyShape(str, Enum):
    CIRCLE = "circle"
    BOX = "box"
    POINT = "point"


class SurfaceKind(str, Enum):
    GROUND = "ground"
    WALL = "wall"
    INCLINE = "incline"
    PLANE = "plane"


class MotionPhase(str, Enum):
    """Physical phases of the standard drop-bounce-slide scenario."""

    FREE_FALL = "free_fall"
    ELASTIC_COLLISION = "elastic_collision"
    INCLINE_SLIDE = "incline_slide"
    REST = "rest"

    @property
    def on_incline(self) -> bool:
        """Whether a body in this phase is in contact with the incline."""
        return self in (MotionPhase.INCLINE_SLIDE, MotionPhase.REST)


PHASE_COLORS: dict[MotionPhase, str] = {
    MotionPhase.FREE_FALL: "#FFD93D",
    MotionPhase.ELASTIC_COLLISION: "#FF0000",
    MotionPhase.INCLINE_SLIDE: "#4ECDC4",
    MotionPhase.REST: "#808080",
}

BODY_PALETTE: tuple[str, ...] = ("#FF6B6B", "#4ECDC4", "#45B7D1", "#96CEB4", "#FFEAA7")

SURFACE_COLORS: dict[SurfaceKind, str] = {
    SurfaceKind.GROUND: "#8B4513",
    SurfaceKind.WALL: "#696969",
    SurfaceKind.INCLINE: "#696969",
    SurfaceKind.PLANE: "#696969",
}


@dataclass(frozen=True)
class ThemeStyle:
    background_color: str
    grid: bool
    axes: bool
    shadows: bool


THEMES: dict[Theme, ThemeStyle] = {
    Theme.LIGHT: ThemeStyle("#F0F8FF", grid=True, axes=True, shadows=False),
    Theme.DARK: ThemeStyle("#1a1a1a", grid=True, axes=True, shadows=True),
    Theme.PHYSICS: ThemeStyle("#F5F5F5", grid=False, axes=False, shadows=True),
}


@dataclass(frozen=True)
class ObjectStyle:
    """Visual configuration for one body."""

    fill_color: str = BODY_PALETTE[0]
    stroke_color: str = "#000000"
    opacity: float = 1.0
    line_width: float = 2.0
    wireframe: bool = False
    show_velocity: bool = True
    show_forces: bool = True


@dataclass(frozen=True)
class SurfaceStyle:
    """Visual configuration for one surface."""

    fill_color: str = SURFACE_COLORS[SurfaceKind.PLANE]
    stroke_color: str = SURFACE_COLORS[SurfaceKind.PLANE]
    opacity: float = 1.0
    line_width: float = 8.0
    texture: str | None = None
    show_normals: bool = False


def phase_color(phase: MotionPhase) -> str:
    return PHASE_COLORS[phase]


def surface_style(kind: SurfaceKind) -> SurfaceStyle:
    color = SURFACE_COLORS[kind]
    return SurfaceStyle(fill_color=color, stroke_color=color)
