"""
Hand landmark detection using MediaPipe.
"""
import cv2
import mediapipe as mp
import numpy as np
from typing import Dict, List, Tuple


class HandsTracker:
    """Hand landmark tracker using MediaPipe Hands."""

    def __init__(self, max_num_hands: int = 2, min_detection_conf: float = 0.5,
                 min_tracking_conf: float = 0.5, model_complexity: int = 1):
        """
        Initialize the hands tracker.

        Args:
            max_num_hands: Maximum number of hands to detect
            min_detection_conf: Minimum confidence for hand detection
            min_tracking_conf: Minimum confidence for hand tracking
            model_complexity: MediaPipe model complexity (0 or 1)
        """
        self.mp_hands = mp.solutions.hands
        self.hands = self.mp_hands.Hands(
            static_image_mode=False,
            max_num_hands=max_num_hands,
            model_complexity=model_complexity,
            min_detection_confidence=min_detection_conf,
            min_tracking_confidence=min_tracking_conf
        )

    def process(self, frame_bgr: np.ndarray) -> Dict[str, List[Tuple[float, float, float]]]:
        """
        Process a frame and return landmarks for every detected hand.

        Args:
            frame_bgr: Input frame in BGR format

        Returns:
            21 (x, y, z) points per hand keyed by handedness ("Left", "Right"),
            or an empty dict if no hand is detected
        """
        # Convert BGR to RGB for MediaPipe
        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        results = self.hands.process(frame_rgb)

        hands: Dict[str, List[Tuple[float, float, float]]] = {}
        if not results.multi_hand_landmarks:
            return hands

        handedness = results.multi_handedness or []
        for i, hand_landmarks in enumerate(results.multi_hand_landmarks):
            label = handedness[i].classification[0].label if i < len(handedness) else f"hand{i}"
            # Two hands can be given the same label
            if label in hands:
                label = f"{label}{i}"
            hands[label] = [(lm.x, lm.y, lm.z) for lm in hand_landmarks.landmark]

        return hands

    def draw_landmarks(self, frame: np.ndarray, landmarks: List[Tuple[float, float, float]]) -> np.ndarray:
        """
        Draw the hand skeleton on the frame.

        Args:
            frame: Input frame
            landmarks: 21 (x, y, z) points in [0..1] range

        Returns:
            Frame with landmarks drawn
        """
        height, width = frame.shape[:2]
        points = [(int(x * width), int(y * height)) for x, y, *_ in landmarks]

        for start, end in self.mp_hands.HAND_CONNECTIONS:
            cv2.line(frame, points[start], points[end], (0, 255, 0), 3)
        for px, py in points:
            cv2.circle(frame, (px, py), 5, (0, 0, 255), -1)

        return frame

    def close(self) -> None:
        """Release the MediaPipe graph."""
        self.hands.close()
