"""
Gesture trackers that turn per-frame hand signals into debounced events.
"""
import logging
from collections import deque
from typing import Deque, Dict, Mapping, Optional, Tuple

from .config import Cfg, HoldConfig, SwipeConfig
from .poses import WRIST, classify_pose, has_hand
from .types import (
    FrameResult,
    GestureTriggered,
    HoldResult,
    HoldState,
    LandmarkSet,
    PoseKind,
    PoseLabel,
    PositionSample,
    SwipeDetected,
    SwipeDirection,
)

logger = logging.getLogger(__name__)


class HoldTracker:
    """
    Fires once when a qualifying pose is held continuously long enough.

    Features:
    - Any change of pose restarts the hold timer
    - Fires exactly once per continuous hold
    - "none" never fires
    - Explicit reset() so a fresh hold is required after the action completes
    """

    def __init__(self, cfg: Optional[HoldConfig] = None):
        """Initialize hold tracker with configuration."""
        self.cfg = cfg or HoldConfig()
        self.hold_duration_s = self.cfg.hold_duration_ms / 1000.0
        self.state = HoldState.IDLE
        self.last_kind = PoseKind.NONE
        self.started_at = 0.0

    def observe(self, pose: PoseLabel, t_now: float) -> HoldResult:
        """
        Feed the pose seen this frame.

        Args:
            pose: Pose classified for this frame
            t_now: Current monotonic timestamp in seconds

        Returns:
            HoldResult with fired=True on the frame the hold completes
        """
        if pose.kind != self.last_kind:
            self.last_kind = pose.kind
            self.started_at = t_now
            self.state = HoldState.IDLE if pose.kind == PoseKind.NONE else HoldState.HOLDING
            return HoldResult(fired=False, pose=pose)

        if self.state == HoldState.HOLDING and t_now - self.started_at >= self.hold_duration_s:
            self.state = HoldState.TRIGGERED
            logger.info("Hold completed: %s", pose.kind.value)
            return HoldResult(fired=True, pose=pose)

        return HoldResult(fired=False, pose=pose)

    def held_for(self, t_now: float) -> float:
        """Seconds the current qualifying pose has been held, 0 when idle."""
        if self.state == HoldState.IDLE:
            return 0.0
        return max(0.0, t_now - self.started_at)

    def reset(self) -> None:
        """Return to idle; a new hold is needed to fire again."""
        self.state = HoldState.IDLE
        self.last_kind = PoseKind.NONE
        self.started_at = 0.0


class SwipeTracker:
    """
    Detects horizontal swipes from the wrist position.

    Features:
    - Time-windowed history, so sensitivity does not depend on frame rate
    - Net displacement threshold as a fraction of the frame width
    - Minimum sample count before judging direction
    - Cooldown between swipes, with history discarded while cooling down
    """

    def __init__(self, cfg: Optional[SwipeConfig] = None):
        """Initialize swipe tracker with configuration."""
        self.cfg = cfg or SwipeConfig()
        self.window_s = self.cfg.window_ms / 1000.0
        self.cooldown_s = self.cfg.cooldown_ms / 1000.0
        self._history: Deque[PositionSample] = deque()
        self.last_swipe_time = float("-inf")

    @property
    def history(self) -> Tuple[PositionSample, ...]:
        return tuple(self._history)

    def observe(self, x: Optional[float], t_now: float) -> Optional[SwipeDirection]:
        """
        Feed the wrist position seen this frame.

        Args:
            x: Normalized horizontal wrist position, or None if no hand
            t_now: Current monotonic timestamp in seconds

        Returns:
            SwipeDirection if a swipe completed on this frame, None otherwise
        """
        if x is None:
            # Stale history must not survive a lost hand
            self._history.clear()
            return None

        self._history.append(PositionSample(x=x, timestamp=t_now))

        while self._history and t_now - self._history[0].timestamp >= self.window_s:
            self._history.popleft()

        if len(self._history) < self.cfg.min_samples:
            return None

        if t_now - self.last_swipe_time < self.cooldown_s:
            self._history.clear()
            return None

        delta_x = self._history[-1].x - self._history[0].x
        logger.debug(
            "Swipe check: samples=%d delta_x=%.3f threshold=%.3f",
            len(self._history), delta_x, self.cfg.threshold
        )

        if delta_x > self.cfg.threshold:
            return self._fire(SwipeDirection.RIGHT, t_now, delta_x)

        if delta_x < -self.cfg.threshold:
            return self._fire(SwipeDirection.LEFT, t_now, delta_x)

        return None

    def reset(self) -> None:
        """Forget history and cooldown."""
        self._history.clear()
        self.last_swipe_time = float("-inf")

    def _fire(self, direction: SwipeDirection, t_now: float, delta_x: float) -> SwipeDirection:
        logger.info("Swipe detected: %s (delta_x=%.3f)", direction.value, delta_x)
        self.last_swipe_time = t_now
        self._history.clear()
        return direction


class HandGestureState:
    """Hold and swipe trackers owned by a single hand."""

    def __init__(self, cfg: Cfg):
        self.hold = HoldTracker(cfg.gestures.hold)
        self.swipe = SwipeTracker(cfg.gestures.swipe)

    def observe(self, landmarks: Optional[LandmarkSet],
                t_now: float) -> Tuple[PoseLabel, HoldResult, Optional[SwipeDirection]]:
        """
        Run both trackers on this hand's landmarks (None if the hand is gone).

        A lost hand clears swipe history and returns the hold to idle, but the
        swipe cooldown is kept; use reset() to zero everything.
        """
        pose = classify_pose(landmarks)
        hold_result = self.hold.observe(pose, t_now)
        wrist_x = landmarks[WRIST][0] if has_hand(landmarks) else None
        swipe = self.swipe.observe(wrist_x, t_now)
        return pose, hold_result, swipe

    def reset(self) -> None:
        self.hold.reset()
        self.swipe.reset()


class GestureProcessor:
    """
    Main gesture processor that runs an independent tracker pair per hand.
    """

    def __init__(self, cfg: Cfg):
        """Initialize gesture processor with configuration."""
        self.cfg = cfg
        self.hands: Dict[str, HandGestureState] = {}

    def process_frame(self, hands: Mapping[str, LandmarkSet], t_now: float) -> FrameResult:
        """
        Process a frame and return the events it produced.

        Args:
            hands: Landmarks keyed by stable hand id (empty if no hand detected)
            t_now: Current monotonic timestamp in seconds

        Returns:
            FrameResult with per-hand poses, triggered holds and swipes
        """
        result = FrameResult()

        for hand_id, landmarks in hands.items():
            if hand_id not in self.hands:
                self.hands[hand_id] = HandGestureState(self.cfg)
            self._observe_hand(hand_id, landmarks, t_now, result)

        # Hands that left the frame get an absent observation
        for hand_id in list(self.hands):
            if hand_id not in hands:
                self._observe_hand(hand_id, None, t_now, result)

        return result

    def reset_holds(self) -> None:
        """Require a fresh hold on every hand before the next trigger."""
        for state in self.hands.values():
            state.hold.reset()

    def reset(self) -> None:
        """Discard all per-hand state."""
        for state in self.hands.values():
            state.reset()
        self.hands.clear()

    def _observe_hand(self, hand_id: str, landmarks: Optional[LandmarkSet],
                      t_now: float, result: FrameResult) -> None:
        pose, hold_result, swipe = self.hands[hand_id].observe(landmarks, t_now)

        if landmarks is not None:
            result.poses[hand_id] = pose

        if hold_result.fired and pose.kind in (PoseKind.RAISED_HAND, PoseKind.FIST):
            result.triggers.append(GestureTriggered(kind=pose.kind.value, hand=hand_id))

        if swipe is not None:
            direction = "right" if swipe == SwipeDirection.RIGHT else "left"
            result.swipes.append(SwipeDetected(direction=direction, hand=hand_id))
