"""
Type definitions for the gesture conductor.
"""
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, List, Literal, Optional, Protocol, Sequence, Tuple, runtime_checkable


# One hand: 21 normalized (x, y[, z]) points, wrist first
Landmark = Tuple[float, ...]
LandmarkSet = Sequence[Landmark]

Command = Literal["summarize", "ask-question"]


class PoseKind(str, Enum):
    """Static hand pose recognized from a single frame."""
    RAISED_HAND = "raised-hand"
    FIST = "fist"
    NONE = "none"


class SwipeDirection(str, Enum):
    """Direction of a horizontal wrist swipe."""
    LEFT = "swipe-left"
    RIGHT = "swipe-right"


class HoldState(Enum):
    """Debounce state of a pose hold."""
    IDLE = auto()       # no qualifying pose
    HOLDING = auto()    # qualifying pose, not fired yet
    TRIGGERED = auto()  # already fired for this continuous hold


@dataclass(frozen=True)
class PoseLabel:
    """Memoryless classification of one landmark set."""
    kind: PoseKind
    confidence: float
    description: str


@dataclass(frozen=True)
class HoldResult:
    """Outcome of feeding one pose to a hold tracker."""
    fired: bool
    pose: PoseLabel


@dataclass(frozen=True)
class PositionSample:
    """Horizontal wrist position at a point in time."""
    x: float
    timestamp: float


@dataclass
class GestureTriggered:
    """A qualifying pose was held long enough to count as a command."""
    kind: Literal["raised-hand", "fist"]
    hand: str = "default"


@dataclass
class SwipeDetected:
    """A swipe gesture moved the wrist far enough, fast enough."""
    direction: Literal["left", "right"]
    hand: str = "default"


@dataclass
class FrameResult:
    """Everything the gesture engine produced for one frame."""
    poses: Dict[str, PoseLabel] = field(default_factory=dict)
    triggers: List[GestureTriggered] = field(default_factory=list)
    swipes: List[SwipeDetected] = field(default_factory=list)


@dataclass
class AIResponse:
    """Result of a text-generation request, delivered out of band."""
    command: str  # "summarize", "ask-question" or "error"
    text: str
    ok: bool = True


@runtime_checkable
class TextGenerator(Protocol):
    """Abstract protocol for services that answer slide commands."""

    async def generate(self, command: Command, slide_text: str) -> str:
        """Return generated text for the command applied to the slide."""
        ...


def command_for(kind: str) -> Optional[Command]:
    """Map a triggered pose to the command it stands for."""
    if kind == PoseKind.RAISED_HAND.value:
        return "ask-question"
    if kind == PoseKind.FIST.value:
        return "summarize"
    return None
