"""
Configuration management for the gesture conductor.
"""
import yaml
from pathlib import Path
from typing import Optional, Dict, Any, List
from dataclasses import dataclass, field


DEFAULT_SLIDES = [
    "Sample slide 1: This presentation discusses the implementation of an AI-powered "
    "gesture recognition system. The system uses MediaPipe for hand tracking and "
    "Google's Gemini API for intelligent text analysis.",
    "Sample slide 2: Key features include real-time gesture detection, natural language "
    "processing, and a frame loop that never waits on the network.",
    "Sample slide 3: Hand gestures enable intuitive control - raise your hand to get "
    "AI-suggested questions, make a fist to summarize key points, and swipe left or "
    "right to navigate between slides.",
]


@dataclass
class CameraConfig:
    """Camera configuration settings."""
    index: int = 0
    width: int = 1280
    height: int = 720
    fps: int = 30


@dataclass
class MediaPipeConfig:
    """MediaPipe Hands configuration settings."""
    max_num_hands: int = 2
    min_detection_confidence: float = 0.5
    min_tracking_confidence: float = 0.5
    model_complexity: int = 1


@dataclass
class HoldConfig:
    """Pose hold configuration."""
    hold_duration_ms: int = 1000


@dataclass
class SwipeConfig:
    """
    Swipe gesture configuration.

    Tuning ranges that worked in practice: threshold 0.08-0.15 of the frame
    width, window 400-600 ms, cooldown 500-1000 ms, 4-5 samples.
    """
    window_ms: int = 500
    threshold: float = 0.15
    min_samples: int = 5
    cooldown_ms: int = 1000


@dataclass
class GesturesConfig:
    """Gesture recognition configuration."""
    hold: HoldConfig = field(default_factory=HoldConfig)
    swipe: SwipeConfig = field(default_factory=SwipeConfig)


@dataclass
class AIConfig:
    """Text-generation service configuration."""
    model: str = "gemini-2.5-flash"
    api_key_env: str = "GOOGLE_API_KEY"
    fallback_message: str = "Error processing request. Is the text-generation service reachable?"


@dataclass
class PresentationConfig:
    """Slide deck configuration."""
    slides: List[str] = field(default_factory=lambda: list(DEFAULT_SLIDES))


@dataclass
class DisplayConfig:
    """Display configuration settings."""
    show_landmarks: bool = True
    mirror: bool = True
    window_name: str = "Gesture Conductor"
    swipe_notice_ms: int = 2000
    response_timeout_ms: int = 10000


@dataclass
class Cfg:
    """Main configuration class."""
    camera: CameraConfig = field(default_factory=CameraConfig)
    mediapipe: MediaPipeConfig = field(default_factory=MediaPipeConfig)
    gestures: GesturesConfig = field(default_factory=GesturesConfig)
    ai: AIConfig = field(default_factory=AIConfig)
    presentation: PresentationConfig = field(default_factory=PresentationConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)


def default_config() -> Cfg:
    """Configuration built from documented defaults only."""
    return Cfg()


def load_config(path: Optional[str] = None) -> Cfg:
    """
    Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses config.default.yaml

    Returns:
        Configuration object with all settings

    Raises:
        FileNotFoundError: if the file does not exist
        ValueError: if gesture thresholds are out of range
    """
    if path is None:
        # Use default config file in project root
        project_root = Path(__file__).parent.parent
        path = project_root / "config.default.yaml"

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f) or {}

    cfg = _dict_to_config(data)
    validate_config(cfg)
    return cfg


def validate_config(cfg: Cfg) -> None:
    """Reject gesture settings the trackers cannot work with."""
    hold = cfg.gestures.hold
    swipe = cfg.gestures.swipe
    if hold.hold_duration_ms < 0:
        raise ValueError(f"hold_duration_ms must be >= 0, got {hold.hold_duration_ms}")
    if not 0.0 < swipe.threshold < 1.0:
        raise ValueError(f"swipe threshold must be in (0, 1), got {swipe.threshold}")
    if swipe.window_ms <= 0:
        raise ValueError(f"swipe window_ms must be > 0, got {swipe.window_ms}")
    if swipe.cooldown_ms < 0:
        raise ValueError(f"swipe cooldown_ms must be >= 0, got {swipe.cooldown_ms}")
    if swipe.min_samples < 2:
        raise ValueError(f"swipe min_samples must be >= 2, got {swipe.min_samples}")
    if not cfg.presentation.slides:
        raise ValueError("presentation needs at least one slide")


def _dict_to_config(data: Dict[str, Any]) -> Cfg:
    """Convert dictionary to configuration object."""
    camera_data = data.get('camera') or {}
    camera = CameraConfig(**camera_data)

    mp_data = data.get('mediapipe') or {}
    mediapipe = MediaPipeConfig(**mp_data)

    gestures_data = data.get('gestures') or {}
    hold_data = gestures_data.get('hold') or {}
    hold = HoldConfig(
        hold_duration_ms=int(hold_data.get('hold_duration_ms', HoldConfig.hold_duration_ms))
    )
    swipe_data = gestures_data.get('swipe') or {}
    swipe = SwipeConfig(
        window_ms=int(swipe_data.get('window_ms', SwipeConfig.window_ms)),
        threshold=float(swipe_data.get('threshold', SwipeConfig.threshold)),
        min_samples=int(swipe_data.get('min_samples', SwipeConfig.min_samples)),
        cooldown_ms=int(swipe_data.get('cooldown_ms', SwipeConfig.cooldown_ms))
    )
    gestures = GesturesConfig(hold=hold, swipe=swipe)

    ai = AIConfig(**(data.get('ai') or {}))

    presentation_data = data.get('presentation') or {}
    slides = presentation_data.get('slides')
    presentation = PresentationConfig(slides=[str(s) for s in slides]) if slides is not None else PresentationConfig()

    display = DisplayConfig(**(data.get('display') or {}))

    return Cfg(
        camera=camera,
        mediapipe=mediapipe,
        gestures=gestures,
        ai=ai,
        presentation=presentation,
        display=display
    )
