"""
Hand landmark detection using MediaPipe.
"""
import logging
from typing import Dict, Iterable, Optional, Tuple

import cv2
import numpy as np

from .config import MediaPipeConfig
from .errors import ModelLoadFailed
from .types import HandIndex, Landmark, LandmarkSet

logger = logging.getLogger(__name__)


HAND_CONNECTIONS: Tuple[Tuple[int, int], ...] = (
    (0, 1), (1, 2), (2, 3), (3, 4),          # thumb
    (0, 5), (5, 6), (6, 7), (7, 8),          # index
    (5, 9), (9, 10), (10, 11), (11, 12),     # middle
    (9, 13), (13, 14), (14, 15), (15, 16),   # ring
    (13, 17), (17, 18), (18, 19), (19, 20),  # pinky
    (0, 17),                                 # palm base
)


def landmark_set_from_points(points: Iterable[Tuple[float, ...]]) -> LandmarkSet:
    """Build a landmark set from (x, y) or (x, y, z) tuples in index order."""
    result: Dict[int, Landmark] = {}
    for idx, point in enumerate(points):
        x, y = point[0], point[1]
        z = point[2] if len(point) > 2 else 0.0
        result[idx] = Landmark(idx=idx, x=float(x), y=float(y), z=float(z))
    return result


def landmark_set_from_normalized(hand_landmarks, width: int, height: int) -> LandmarkSet:
    """
    Convert MediaPipe normalized landmarks to pixel space.

    Args:
        hand_landmarks: Sequence of objects with x, y (and optionally z) in [0..1]
        width: Frame width in pixels
        height: Frame height in pixels

    Returns:
        Landmark set in pixel coordinates
    """
    return landmark_set_from_points(
        (float(lm.x) * width, float(lm.y) * height, float(getattr(lm, "z", 0.0)))
        for lm in hand_landmarks
    )


def _create_hands(cfg: MediaPipeConfig):
    import mediapipe as mp  # type: ignore

    if not hasattr(mp, "solutions"):
        raise RuntimeError("Installed mediapipe build does not provide mp.solutions.hands")

    return mp.solutions.hands.Hands(
        static_image_mode=False,
        max_num_hands=cfg.max_num_hands,
        model_complexity=cfg.model_complexity,
        min_detection_confidence=cfg.min_detection_confidence,
        min_tracking_confidence=cfg.min_tracking_confidence
    )


class HandsTracker:
    """Hand landmark tracker using MediaPipe Hands."""

    def __init__(self, cfg: MediaPipeConfig):
        """
        Initialize the hands tracker.

        Args:
            cfg: MediaPipe settings

        Raises:
            ModelLoadFailed: if MediaPipe cannot be imported or initialized
        """
        try:
            self.hands = _create_hands(cfg)
        except Exception as e:
            raise ModelLoadFailed(f"Hand landmark model failed to load: {e}") from e
        logger.info("Hand landmark model loaded")

    def estimate(self, frame_bgr: np.ndarray) -> Optional[LandmarkSet]:
        """
        Process a frame and return hand landmarks.

        Args:
            frame_bgr: Input frame in BGR format

        Returns:
            Landmarks of the first detected hand in pixel coordinates, or None if no hand detected
        """
        height, width = frame_bgr.shape[:2]

        # Convert BGR to RGB for MediaPipe
        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        results = self.hands.process(frame_rgb)

        if not results.multi_hand_landmarks:
            return None

        return landmark_set_from_normalized(results.multi_hand_landmarks[0].landmark, width, height)

    def close(self) -> None:
        self.hands.close()

    def __enter__(self) -> "HandsTracker":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def draw_landmarks(frame: np.ndarray, landmarks: LandmarkSet) -> np.ndarray:
    """
    Draw hand landmarks on the frame.

    Args:
        frame: Input frame
        landmarks: Landmark set in pixel coordinates

    Returns:
        Frame with landmarks drawn
    """
    for a, b in HAND_CONNECTIONS:
        if a in landmarks and b in landmarks:
            p0 = (int(landmarks[a].x), int(landmarks[a].y))
            p1 = (int(landmarks[b].x), int(landmarks[b].y))
            cv2.line(frame, p0, p1, (0, 255, 255), 1, cv2.LINE_AA)

    for idx, lm in landmarks.items():
        color = (0, 0, 255) if idx in (HandIndex.THUMB_TIP, HandIndex.INDEX_TIP) else (0, 255, 0)
        cv2.circle(frame, (int(lm.x), int(lm.y)), 3, color, -1)

    return frame
