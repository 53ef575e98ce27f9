"""
Gesture feature extraction from a single hand's landmarks.
"""
import logging
from typing import List, Optional, Tuple

import numpy as np

from .errors import MalformedLandmarkSet
from .types import GestureFeatures, HandIndex, LandmarkSet, Point2D

logger = logging.getLogger(__name__)


REQUIRED_LANDMARKS: Tuple[HandIndex, ...] = (
    HandIndex.WRIST,
    HandIndex.THUMB_TIP,
    HandIndex.INDEX_PIP,
    HandIndex.INDEX_TIP,
    HandIndex.MIDDLE_MCP,
    HandIndex.MIDDLE_PIP,
    HandIndex.MIDDLE_TIP,
)


def missing_landmarks(landmarks: LandmarkSet) -> List[int]:
    """Return the required indices absent from the set."""
    return [int(idx) for idx in REQUIRED_LANDMARKS if idx not in landmarks]


def hand_centroid(landmarks: LandmarkSet) -> Point2D:
    """
    Calculate the hand centroid used for rotation.

    Args:
        landmarks: Complete landmark set

    Returns:
        Midpoint of the wrist and the middle-finger base
    """
    wrist = landmarks[HandIndex.WRIST]
    middle_base = landmarks[HandIndex.MIDDLE_MCP]
    return ((wrist.x + middle_base.x) / 2, (wrist.y + middle_base.y) / 2)


def pinch_distance(landmarks: LandmarkSet) -> float:
    """Euclidean distance between thumb tip and index tip."""
    thumb = landmarks[HandIndex.THUMB_TIP]
    index = landmarks[HandIndex.INDEX_TIP]
    return float(np.hypot(thumb.x - index.x, thumb.y - index.y))


def is_index_extended(landmarks: LandmarkSet) -> bool:
    """Index tip sits above its PIP joint (screen y grows downward)."""
    return landmarks[HandIndex.INDEX_TIP].y < landmarks[HandIndex.INDEX_PIP].y


def is_middle_closed(landmarks: LandmarkSet) -> bool:
    """Middle tip sits below its PIP joint."""
    return landmarks[HandIndex.MIDDLE_TIP].y > landmarks[HandIndex.MIDDLE_PIP].y


def extract_features(landmarks: LandmarkSet) -> GestureFeatures:
    """
    Derive gesture features from a landmark set.

    Raises:
        MalformedLandmarkSet: if a required landmark is missing
    """
    missing = missing_landmarks(landmarks)
    if missing:
        raise MalformedLandmarkSet(missing)

    return GestureFeatures(
        centroid=hand_centroid(landmarks),
        pinch_distance=pinch_distance(landmarks),
        index_extended=is_index_extended(landmarks),
        middle_closed=is_middle_closed(landmarks),
    )


class GestureClassifier:
    """
    Turns one tick's landmarks into gesture features.

    Stateless: the result depends only on the landmarks passed in. An
    incomplete set breaks the detector's contract and is logged and
    treated as "no hand" instead of propagating.
    """

    def __init__(self):
        self.malformed_count = 0

    def classify(self, landmarks: Optional[LandmarkSet]) -> Optional[GestureFeatures]:
        if landmarks is None:
            return None
        try:
            return extract_features(landmarks)
        except MalformedLandmarkSet as e:
            self.malformed_count += 1
            logger.warning(f"Ignoring malformed landmark set: {e}")
            return None
