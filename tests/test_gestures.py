"""
Test cases for hold and swipe tracking with synthetic timestamps.
"""
import unittest
import sys
from pathlib import Path

import numpy as np

# Add project root and tests dir to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent))

from conductor.config import Cfg, GesturesConfig, HoldConfig, SwipeConfig, default_config
from conductor.gestures import GestureProcessor, HoldTracker, SwipeTracker
from conductor.poses import classify_pose
from conductor.types import HoldState, PoseKind, PoseLabel, SwipeDirection
from helpers import fist, make_hand, open_hand

RAISED = PoseLabel(PoseKind.RAISED_HAND, 0.9, "raised")
FIST = PoseLabel(PoseKind.FIST, 0.9, "fist")
NONE = PoseLabel(PoseKind.NONE, 0.5, "none")

T0 = 100.0


class TestHoldTracker(unittest.TestCase):
    """Test one-shot hold detection."""

    def setUp(self):
        self.tracker = HoldTracker(HoldConfig(hold_duration_ms=1000))

    def feed(self, pose, start, end, step=0.05):
        """Feed pose every step seconds from start to end inclusive; return fire times."""
        fired = []
        n = int(round((end - start) / step))
        for i in range(n + 1):
            t = start + i * step
            if self.tracker.observe(pose, t).fired:
                fired.append(t)
        return fired

    def test_short_hold_never_fires(self):
        self.assertEqual(self.feed(FIST, T0, T0 + 0.95), [])
        self.assertFalse(self.tracker.observe(FIST, T0 + 0.999).fired)
        self.assertEqual(self.tracker.state, HoldState.HOLDING)

    def test_hold_fires_exactly_once(self):
        self.assertFalse(self.tracker.observe(RAISED, T0).fired)
        self.assertTrue(self.tracker.observe(RAISED, T0 + 1.0).fired)
        self.assertEqual(self.tracker.state, HoldState.TRIGGERED)

        # Keeps holding, never fires again
        self.assertEqual(self.feed(RAISED, T0 + 1.05, T0 + 5.0), [])

    def test_refires_after_change_and_fresh_hold(self):
        self.tracker.observe(FIST, T0)
        self.assertTrue(self.tracker.observe(FIST, T0 + 1.0).fired)

        self.tracker.observe(NONE, T0 + 1.25)
        self.assertEqual(self.tracker.state, HoldState.IDLE)

        self.tracker.observe(FIST, T0 + 1.5)
        self.assertFalse(self.tracker.observe(FIST, T0 + 2.25).fired)
        self.assertTrue(self.tracker.observe(FIST, T0 + 2.5).fired)

    def test_switch_between_qualifying_poses_restarts_timer(self):
        self.tracker.observe(FIST, T0)
        self.tracker.observe(RAISED, T0 + 0.75)
        self.assertFalse(self.tracker.observe(RAISED, T0 + 1.5).fired)
        self.assertTrue(self.tracker.observe(RAISED, T0 + 1.75).fired)

    def test_alternating_poses_never_fire(self):
        poses = [FIST, RAISED, NONE]
        for i in range(26):  # every 200ms for 5 seconds
            self.assertFalse(self.tracker.observe(poses[i % 3], T0 + i * 0.2).fired)

    def test_none_never_fires(self):
        self.assertEqual(self.feed(NONE, T0, T0 + 3.0), [])
        self.assertEqual(self.tracker.state, HoldState.IDLE)

    def test_reset_requires_fresh_hold(self):
        self.tracker.observe(FIST, T0)
        self.assertTrue(self.tracker.observe(FIST, T0 + 1.0).fired)

        self.tracker.reset()
        self.tracker.reset()  # idempotent
        self.assertEqual(self.tracker.state, HoldState.IDLE)
        self.assertEqual(self.tracker.last_kind, PoseKind.NONE)

        # Same pose keeps coming, but the timer starts over
        self.assertFalse(self.tracker.observe(FIST, T0 + 1.5).fired)
        self.assertFalse(self.tracker.observe(FIST, T0 + 2.25).fired)
        self.assertTrue(self.tracker.observe(FIST, T0 + 2.5).fired)

    def test_held_for(self):
        self.assertEqual(self.tracker.held_for(T0), 0.0)
        self.tracker.observe(FIST, T0)
        self.assertAlmostEqual(self.tracker.held_for(T0 + 0.4), 0.4)
        self.tracker.observe(NONE, T0 + 0.5)
        self.assertEqual(self.tracker.held_for(T0 + 0.6), 0.0)


class TestSwipeTracker(unittest.TestCase):
    """Test windowed swipe detection."""

    def setUp(self):
        self.cfg = SwipeConfig(window_ms=400, threshold=0.08, min_samples=4, cooldown_ms=1000)
        self.tracker = SwipeTracker(self.cfg)

    def test_fires_at_fourth_sample(self):
        samples = [(0.10, 0.0), (0.12, 0.05), (0.20, 0.10), (0.28, 0.15), (0.40, 0.20)]
        results = [self.tracker.observe(x, T0 + t) for x, t in samples]
        self.assertEqual(results, [None, None, None, SwipeDirection.RIGHT, None])

    def test_swipe_left(self):
        samples = [(0.60, 0.0), (0.55, 0.05), (0.50, 0.10), (0.45, 0.15)]
        results = [self.tracker.observe(x, T0 + t) for x, t in samples]
        self.assertEqual(results[-1], SwipeDirection.LEFT)
        self.assertEqual(self.tracker.history, ())

    def test_cooldown_blocks_next_swipe(self):
        for i, x in enumerate([0.1, 0.2, 0.3, 0.4]):
            result = self.tracker.observe(x, T0 + i * 0.05)
        self.assertEqual(result, SwipeDirection.RIGHT)
        # Large motion keeps coming during the next second
        for start in (T0 + 0.5, T0 + 0.9):
            for i, x in enumerate([0.1, 0.3, 0.5, 0.7]):
                self.assertIsNone(self.tracker.observe(x, start + i * 0.05))

        # After cooldown a fresh swipe works again
        results = [self.tracker.observe(x, T0 + 1.5 + i * 0.05) for i, x in enumerate([0.9, 0.8, 0.7, 0.6])]
        self.assertEqual(results, [None, None, None, SwipeDirection.LEFT])

    def test_cooldown_clears_history(self):
        for i, x in enumerate([0.1, 0.2, 0.3, 0.4]):
            self.tracker.observe(x, T0 + i * 0.05)
        for i in range(4):
            self.tracker.observe(0.4, T0 + 0.2 + i * 0.05)
        self.assertEqual(self.tracker.history, ())

    def test_hand_lost_clears_history(self):
        for i, x in enumerate([0.10, 0.12, 0.14]):
            self.assertIsNone(self.tracker.observe(x, T0 + i * 0.05))
        self.assertIsNone(self.tracker.observe(None, T0 + 0.15))
        self.assertEqual(self.tracker.history, ())

        # A single far-away sample is not enough on its own
        self.assertIsNone(self.tracker.observe(0.90, T0 + 0.20))
        self.assertEqual(len(self.tracker.history), 1)

    def test_small_motion_never_fires(self):
        x = 0.5
        for i in range(200):
            x = 0.5 + (0.07 if i % 10 < 5 else 0.0)
            self.assertIsNone(self.tracker.observe(x, T0 + i * 0.033))

    def test_slow_drift_outside_window_never_fires(self):
        # 0.3 total travel, but only ~0.03 inside any 400ms window
        for i in range(100):
            self.assertIsNone(self.tracker.observe(0.3 + i * 0.003, T0 + i * 0.04))

    def test_history_pruned_by_time(self):
        for i in range(20):
            self.tracker.observe(0.5, T0 + i * 0.125)
        now = T0 + 19 * 0.125
        for sample in self.tracker.history:
            self.assertLess(now - sample.timestamp, 0.4)
        self.assertEqual(len(self.tracker.history), 4)

    def test_reset_is_idempotent(self):
        for i, x in enumerate([0.1, 0.2, 0.3, 0.4]):
            self.tracker.observe(x, T0 + i * 0.05)
        self.tracker.reset()
        self.tracker.reset()
        self.assertEqual(self.tracker.history, ())

        # Cooldown is forgotten too
        results = [self.tracker.observe(x, T0 + 0.2 + i * 0.05) for i, x in enumerate([0.1, 0.2, 0.3, 0.4])]
        self.assertEqual(results[-1], SwipeDirection.RIGHT)

    def test_default_config(self):
        tracker = SwipeTracker()
        results = [tracker.observe(0.2 + i * 0.05, T0 + i * 0.05) for i in range(5)]
        self.assertEqual(results, [None, None, None, None, SwipeDirection.RIGHT])


class TestGestureProcessor(unittest.TestCase):
    """Test the per-hand gesture processor."""

    def setUp(self):
        self.cfg = Cfg(gestures=GesturesConfig(
            hold=HoldConfig(hold_duration_ms=1000),
            swipe=SwipeConfig(window_ms=400, threshold=0.08, min_samples=4, cooldown_ms=1000)
        ))
        self.processor = GestureProcessor(self.cfg)

    def test_no_hand_detected(self):
        result = self.processor.process_frame({}, T0)
        self.assertEqual(result.poses, {})
        self.assertEqual(result.triggers, [])
        self.assertEqual(result.swipes, [])

    def test_pose_reported_per_hand(self):
        result = self.processor.process_frame({"Left": fist(), "Right": open_hand()}, T0)
        self.assertEqual(result.poses["Left"].kind, PoseKind.FIST)
        self.assertEqual(result.poses["Right"].kind, PoseKind.RAISED_HAND)

    def test_held_fist_triggers_once(self):
        triggers = []
        for i in range(41):
            result = self.processor.process_frame({"Right": fist()}, T0 + i * 0.05)
            triggers.extend(result.triggers)
        self.assertEqual(len(triggers), 1)
        self.assertEqual(triggers[0].kind, "fist")
        self.assertEqual(triggers[0].hand, "Right")

    def test_partially_open_hand_never_triggers(self):
        for i in range(41):
            result = self.processor.process_frame({"Right": make_hand(["index", "middle"])}, T0 + i * 0.05)
            self.assertEqual(result.triggers, [])

    def test_losing_hand_restarts_hold(self):
        for i in range(12):
            self.assertEqual(self.processor.process_frame({"Right": fist()}, T0 + i * 0.05).triggers, [])
        self.processor.process_frame({}, T0 + 0.6)
        for i in range(12):
            result = self.processor.process_frame({"Right": fist()}, T0 + 0.65 + i * 0.05)
            self.assertEqual(result.triggers, [])

    def test_reset_holds_requires_fresh_hold(self):
        self.processor.process_frame({"Right": open_hand()}, T0)
        self.assertEqual(len(self.processor.process_frame({"Right": open_hand()}, T0 + 1.0).triggers), 1)

        self.processor.reset_holds()
        self.assertEqual(self.processor.process_frame({"Right": open_hand()}, T0 + 1.25).triggers, [])
        self.assertEqual(self.processor.process_frame({"Right": open_hand()}, T0 + 2.0).triggers, [])
        self.assertEqual(len(self.processor.process_frame({"Right": open_hand()}, T0 + 2.25).triggers), 1)

    def test_swipe_event(self):
        swipes = []
        for i, x in enumerate([0.30, 0.35, 0.40, 0.45]):
            swipes.extend(self.processor.process_frame({"Right": open_hand(wrist_x=x)}, T0 + i * 0.05).swipes)
        self.assertEqual(len(swipes), 1)
        self.assertEqual(swipes[0].direction, "right")
        self.assertEqual(swipes[0].hand, "Right")

    def test_hands_tracked_independently(self):
        swipes = []
        for i, x in enumerate([0.60, 0.55, 0.50, 0.45]):
            result = self.processor.process_frame(
                {"Left": open_hand(wrist_x=x), "Right": open_hand(wrist_x=0.2 + 0.01 * i)},
                T0 + i * 0.05
            )
            swipes.extend(result.swipes)
        self.assertEqual([(s.direction, s.hand) for s in swipes], [("left", "Left")])

    def test_hands_do_not_mix_positions(self):
        # Interleaved in one history these would look like a big swipe
        for i in range(8):
            result = self.processor.process_frame(
                {"Left": open_hand(wrist_x=0.2), "Right": open_hand(wrist_x=0.8)},
                T0 + i * 0.05
            )
            self.assertEqual(result.swipes, [])

    def test_missing_hand_clears_its_swipe_history(self):
        for i, x in enumerate([0.30, 0.35, 0.40]):
            self.processor.process_frame({"Right": open_hand(wrist_x=x)}, T0 + i * 0.05)
        self.processor.process_frame({"Left": fist()}, T0 + 0.15)
        self.assertEqual(self.processor.hands["Right"].swipe.history, ())

    def test_cooldown_survives_hand_dropout(self):
        swipes = []
        for i, x in enumerate([0.30, 0.35, 0.40, 0.45]):
            swipes.extend(self.processor.process_frame({"Right": open_hand(wrist_x=x)}, T0 + i * 0.05).swipes)
        self.assertEqual(len(swipes), 1)

        self.processor.process_frame({}, T0 + 0.25)
        for i, x in enumerate([0.70, 0.60, 0.50, 0.40]):
            result = self.processor.process_frame({"Right": open_hand(wrist_x=x)}, T0 + 0.5 + i * 0.05)
            self.assertEqual(result.swipes, [])

    def test_numpy_landmarks(self):
        swipes = []
        for i, x in enumerate([0.30, 0.35, 0.40, 0.45]):
            hands = {"Right": np.array(open_hand(wrist_x=x))}
            result = self.processor.process_frame(hands, T0 + i * 0.05)
            self.assertEqual(result.poses["Right"].kind, PoseKind.RAISED_HAND)
            swipes.extend(result.swipes)
        self.assertEqual([s.direction for s in swipes], ["right"])

        self.processor.process_frame({"Right": np.zeros((0, 3))}, T0 + 0.25)
        self.assertEqual(self.processor.hands["Right"].swipe.history, ())

    def test_reset(self):
        self.processor.process_frame({"Right": fist()}, T0)
        self.processor.reset()
        self.processor.reset()
        self.assertEqual(self.processor.hands, {})

    def test_default_config_processor(self):
        processor = GestureProcessor(default_config())
        result = processor.process_frame({"Right": open_hand()}, T0)
        self.assertEqual(result.poses["Right"], classify_pose(open_hand()))


if __name__ == '__main__':
    unittest.main()
