"""
Gesture Conductor

Turns per-frame hand landmarks from MediaPipe into debounced gesture events:
held poses (raised hand, fist) that ask a text-generation service about the
current slide, and horizontal swipes that move between slides.
"""

__version__ = "0.1.0"

from .types import (
    PoseKind,
    PoseLabel,
    SwipeDirection,
    HoldState,
    GestureTriggered,
    SwipeDetected,
    FrameResult,
    AIResponse,
    TextGenerator,
)
from .config import load_config, default_config, Cfg
from .poses import PoseClassifier, classify_pose, fingers_extended
from .gestures import HoldTracker, SwipeTracker, GestureProcessor
from .presentation import SlideDeck, PresentationController
from .generator_mock import MockTextGenerator

__all__ = [
    "PoseKind",
    "PoseLabel",
    "SwipeDirection",
    "HoldState",
    "GestureTriggered",
    "SwipeDetected",
    "FrameResult",
    "AIResponse",
    "TextGenerator",
    "load_config",
    "default_config",
    "Cfg",
    "PoseClassifier",
    "classify_pose",
    "fingers_extended",
    "HoldTracker",
    "SwipeTracker",
    "GestureProcessor",
    "SlideDeck",
    "PresentationController",
    "MockTextGenerator",
]
