"""
Static pose recognition from a single set of hand landmarks.
"""
from typing import Dict, Optional

from .types import LandmarkSet, PoseKind, PoseLabel


NUM_LANDMARKS = 21
WRIST = 0

# Thumb joints: tip=4, ip=3, mcp=2
THUMB_TIP, THUMB_IP, THUMB_MCP = 4, 3, 2

# Long fingers: (tip, pip, mcp)
FINGER_JOINTS = {
    "index": (8, 6, 5),
    "middle": (12, 10, 9),
    "ring": (16, 14, 13),
    "pinky": (20, 18, 17),
}

POSE_CONFIDENCE = 0.9
UNKNOWN_POSE_CONFIDENCE = 0.5


def has_hand(landmarks: Optional[LandmarkSet]) -> bool:
    """True if the landmark set describes a whole detected hand."""
    return landmarks is not None and len(landmarks) >= NUM_LANDMARKS


def is_finger_extended(landmarks: LandmarkSet, tip: int, pip: int, mcp: int) -> bool:
    """
    Check whether a long finger is extended.

    The tip must be above the PIP joint and the PIP above the MCP joint
    (smaller y is higher in image coordinates).
    """
    return landmarks[tip][1] < landmarks[pip][1] < landmarks[mcp][1]


def is_thumb_extended(landmarks: LandmarkSet) -> bool:
    """
    Check whether the thumb is splayed away from the palm.

    The thumb bends sideways, so only horizontal distances from the MCP
    joint are compared.
    """
    mcp_x = landmarks[THUMB_MCP][0]
    tip_distance = abs(landmarks[THUMB_TIP][0] - mcp_x)
    ip_distance = abs(landmarks[THUMB_IP][0] - mcp_x)
    return tip_distance > ip_distance


def extended_fingers(landmarks: LandmarkSet) -> Dict[str, bool]:
    """Per-finger extension flags, thumb first."""
    flags = {"thumb": is_thumb_extended(landmarks)}
    for name, (tip, pip, mcp) in FINGER_JOINTS.items():
        flags[name] = is_finger_extended(landmarks, tip, pip, mcp)
    return flags


def fingers_extended(landmarks: LandmarkSet) -> int:
    """
    Count the number of extended fingers.

    Args:
        landmarks: List of 21 hand landmarks

    Returns:
        Number of extended fingers (0-5)
    """
    return sum(extended_fingers(landmarks).values())


def classify_pose(landmarks: Optional[LandmarkSet]) -> PoseLabel:
    """
    Classify one landmark set as raised hand, fist or no pose.

    Four or more extended fingers is a raised hand, one or none is a fist.
    Two or three fingers is deliberately left unrecognized.

    Args:
        landmarks: 21 hand landmarks, or None/empty if no hand is visible

    Returns:
        The pose label; never raises
    """
    if not has_hand(landmarks):
        return PoseLabel(PoseKind.NONE, 0.0, "No hand detected")

    count = fingers_extended(landmarks)

    if count >= 4:
        return PoseLabel(
            PoseKind.RAISED_HAND,
            POSE_CONFIDENCE,
            f"Raised Hand ({count} fingers extended) - Ask Question",
        )

    if count <= 1:
        return PoseLabel(
            PoseKind.FIST,
            POSE_CONFIDENCE,
            f"Fist ({count} fingers extended) - Summarize",
        )

    return PoseLabel(PoseKind.NONE, UNKNOWN_POSE_CONFIDENCE, f"{count} fingers extended")


class PoseClassifier:
    """Stateless callable wrapper around classify_pose."""

    def classify(self, landmarks: Optional[LandmarkSet]) -> PoseLabel:
        return classify_pose(landmarks)

    __call__ = classify
