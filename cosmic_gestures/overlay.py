"""
OpenCV heads-up display implementing the UI affordance interface.
"""
from typing import Dict, Optional

import cv2
import numpy as np

from .scene import Camera, Model
from .types import INDICATOR_NAMES, IndicatorName, STATUS_HAND_DETECTED

_INDICATOR_LABELS = {"rotate": "ROTATE", "zoom": "ZOOM", "select": "SELECT"}
_ACTIVE = (0, 220, 0)
_INACTIVE = (90, 90, 90)
_WHITE = (255, 255, 255)


def rotation_matrix(rx: float, ry: float) -> np.ndarray:
    """Rotation about x then y."""
    cx, sx = np.cos(rx), np.sin(rx)
    cy, sy = np.cos(ry), np.sin(ry)
    rot_x = np.array([[1, 0, 0], [0, cx, -sx], [0, sx, cx]])
    rot_y = np.array([[cy, 0, sy], [0, 1, 0], [-sy, 0, cy]])
    return rot_y @ rot_x


class OverlayUI:
    """Keeps indicator/status state and paints it onto each rendered frame."""

    def __init__(self):
        self.indicators: Dict[str, bool] = {name: False for name in INDICATOR_NAMES}
        self.status_text = ""
        self.message: Optional[str] = None

    def set_indicator_active(self, name: IndicatorName, active: bool) -> None:
        self.indicators[name] = active

    def set_status_text(self, text: str) -> None:
        self.status_text = text

    def show_message(self, message: Optional[str]) -> None:
        """Show (or clear with None) a one-line notice, e.g. why the camera is off."""
        self.message = message

    def draw(self, frame: np.ndarray, camera: Camera, model: Model, show_gizmo: bool = True) -> np.ndarray:
        height, width = frame.shape[:2]

        status_color = _ACTIVE if self.status_text == STATUS_HAND_DETECTED else _WHITE
        cv2.putText(frame, f"Hand: {self.status_text}", (10, 30), cv2.FONT_HERSHEY_SIMPLEX, 0.7, status_color, 2)
        cv2.putText(frame, f"{model.title} | zoom z={camera.position.z:.2f}", (10, 60),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.6, _WHITE, 1)

        x = 10
        for name in INDICATOR_NAMES:
            label = _INDICATOR_LABELS[name]
            color = _ACTIVE if self.indicators.get(name) else _INACTIVE
            (tw, th), _ = cv2.getTextSize(label, cv2.FONT_HERSHEY_SIMPLEX, 0.5, 1)
            cv2.rectangle(frame, (x, 75), (x + tw + 12, 75 + th + 12), color, -1 if self.indicators.get(name) else 1)
            cv2.putText(frame, label, (x + 6, 75 + th + 6), cv2.FONT_HERSHEY_SIMPLEX, 0.5, _WHITE, 1)
            x += tw + 22

        if show_gizmo:
            self._draw_gizmo(frame, camera, model, (width - 90, 90))

        if self.message:
            cv2.putText(frame, self.message, (10, height - 110), cv2.FONT_HERSHEY_SIMPLEX, 0.5, (0, 0, 255), 1)

        cv2.putText(frame, "Drag = Rotate | Wheel = Zoom | 1-5 = Model", (10, height - 80),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.5, _WHITE, 1)
        cv2.putText(frame, "Move hand = Rotate | Pinch = Zoom | Point = Select", (10, height - 60),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.5, _WHITE, 1)
        cv2.putText(frame, "c = Camera | r = Reset | a = Auto-rotate | q = Quit", (10, height - 20),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.5, _WHITE, 1)
        return frame

    def _draw_gizmo(self, frame: np.ndarray, camera: Camera, model: Model, origin) -> None:
        # Axis length shrinks as the camera backs away
        length = 60.0 * 5.0 / max(camera.position.z, 1e-6)
        axes = rotation_matrix(model.rotation.x, model.rotation.y) @ np.eye(3)
        colors = ((0, 0, 255), (0, 255, 0), (255, 0, 0))  # x red, y green, z blue
        ox, oy = origin
        for axis, color in zip(axes.T, colors):
            end = (int(ox + axis[0] * length), int(oy - axis[1] * length))
            cv2.line(frame, (ox, oy), end, color, 2, cv2.LINE_AA)
