"""
Synthetic hand landmarks for tests.
"""
from typing import Iterable, List, Tuple

LONG_FINGERS = ("index", "middle", "ring", "pinky")
ALL_FINGERS = ("thumb",) + LONG_FINGERS

# (tip, pip, mcp) per long finger
_JOINTS = {"index": (8, 6, 5), "middle": (12, 10, 9), "ring": (16, 14, 13), "pinky": (20, 18, 17)}


def make_hand(extended: Iterable[str] = (), wrist_x: float = 0.5) -> List[Tuple[float, float, float]]:
    """
    Build 21 landmarks with exactly the named fingers extended.

    Args:
        extended: Finger names from ALL_FINGERS
        wrist_x: Horizontal wrist position; the whole hand is shifted with it

    Returns:
        List of 21 (x, y, z) tuples
    """
    extended = set(extended)
    dx = wrist_x - 0.5
    points = [(0.5, 0.6, 0.0)] * 21
    points[0] = (0.5, 0.8, 0.0)

    # Thumb: mcp=2, ip=3, tip=4, splayed horizontally when extended
    points[2] = (0.40, 0.60, 0.0)
    points[3] = (0.35, 0.55, 0.0)
    points[4] = (0.25, 0.50, 0.0) if "thumb" in extended else (0.38, 0.58, 0.0)

    for name, (tip, pip, mcp) in _JOINTS.items():
        x = 0.45 + 0.05 * LONG_FINGERS.index(name)
        points[mcp] = (x, 0.50, 0.0)
        if name in extended:
            points[pip] = (x, 0.40, 0.0)
            points[tip] = (x, 0.30, 0.0)
        else:
            # Curled: tip folds back below the PIP joint
            points[pip] = (x, 0.45, 0.0)
            points[tip] = (x, 0.52, 0.0)

    return [(x + dx, y, z) for x, y, z in points]


def open_hand(wrist_x: float = 0.5):
    return make_hand(ALL_FINGERS, wrist_x=wrist_x)


def fist(wrist_x: float = 0.5):
    return make_hand((), wrist_x=wrist_x)
