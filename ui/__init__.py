#!/usr/bin/env python3

from .types import Camera, ColorRGB, ColorRGBA, TrolleyRenderState
from .constants import ViewConstants
from .helpers import ViewHelpers
from .draw_track import TrackRenderer
from .draw_vehicles import VehicleRenderer
from .hud import HudRenderer
from .pygame_view import PygameTrolleyView, run_pygame_view

__all__ = [
    "Camera",
    "ColorRGB",
    "ColorRGBA",
    "TrolleyRenderState",
    "ViewConstants",
    "ViewHelpers",
    "TrackRenderer",
    "VehicleRenderer",
    "HudRenderer",
    "PygameTrolleyView",
    "run_pygame_view",
]
