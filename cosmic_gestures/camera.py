"""
Webcam stream acquisition with OpenCV.
"""
import logging
import os
import platform
from pathlib import Path
from typing import Optional

import cv2

from .config import CameraConfig
from .errors import StreamFailure, StreamUnavailable

logger = logging.getLogger(__name__)


def diagnose_camera_failure(index: int, system: Optional[str] = None, dev_root: Path = Path("/dev")) -> StreamFailure:
    """
    Guess why a camera index could not be opened.

    OpenCV only reports failure, so on Linux the video device node is
    inspected; macOS fails silently when the terminal lacks camera permission.
    """
    system = system or platform.system()
    if system == "Linux":
        device = dev_root / f"video{index}"
        if not device.exists():
            return StreamFailure.NO_DEVICE
        if not os.access(device, os.R_OK | os.W_OK):
            return StreamFailure.PERMISSION_DENIED
        return StreamFailure.DEVICE_BUSY
    if system == "Darwin":
        return StreamFailure.PERMISSION_DENIED
    return StreamFailure.NO_DEVICE


def open_camera(cfg: CameraConfig) -> cv2.VideoCapture:
    """
    Open the configured webcam.

    Raises:
        StreamUnavailable: if the camera cannot be opened
    """
    logger.info(f"Opening camera {cfg.index}...")

    if platform.system() == "Darwin":
        cap = cv2.VideoCapture(cfg.index, cv2.CAP_AVFOUNDATION)
    else:
        cap = cv2.VideoCapture(cfg.index)

    if not cap.isOpened():
        cap.release()
        reason = diagnose_camera_failure(cfg.index)
        raise StreamUnavailable(reason, f"camera index {cfg.index}")

    cap.set(cv2.CAP_PROP_FRAME_WIDTH, cfg.width)
    cap.set(cv2.CAP_PROP_FRAME_HEIGHT, cfg.height)
    cap.set(cv2.CAP_PROP_FPS, cfg.fps)

    logger.info(
        f"Camera opened: {int(cap.get(cv2.CAP_PROP_FRAME_WIDTH))}x"
        f"{int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT))}"
    )
    return cap


class MirroredStream:
    """Wraps a stream and flips every frame horizontally (selfie view)."""

    def __init__(self, stream):
        self.stream = stream

    def isOpened(self) -> bool:
        return self.stream.isOpened()

    def read(self):
        ok, frame = self.stream.read()
        if ok:
            frame = cv2.flip(frame, 1)
        return ok, frame

    def release(self) -> None:
        self.stream.release()
