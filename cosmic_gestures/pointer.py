"""
Mouse control of the scene, available whether or not hand tracking runs.
"""
from typing import Optional, Tuple

import cv2

from .config import ControlConfig, PointerConfig
from .control import zoom_camera
from .scene import Camera, ModelRegistry


class PointerControls:
    """
    Drag to rotate the active model, scroll to zoom the camera.

    Zoom shares the gesture zoom limits so both inputs clamp identically.
    """

    def __init__(self, cfg: PointerConfig, limits: ControlConfig, camera: Camera, registry: ModelRegistry):
        self.cfg = cfg
        self.limits = limits
        self.camera = camera
        self.registry = registry
        self.rotate_speed = cfg.rotate_speed
        self.zoom_speed = cfg.zoom_speed
        self._drag_origin: Optional[Tuple[int, int]] = None

    @property
    def dragging(self) -> bool:
        return self._drag_origin is not None

    def press(self, x: int, y: int) -> None:
        self._drag_origin = (x, y)

    def move(self, x: int, y: int) -> None:
        if self._drag_origin is None:
            return
        dx = x - self._drag_origin[0]
        dy = y - self._drag_origin[1]
        self._drag_origin = (x, y)
        self.drag(dx, dy)

    def release(self) -> None:
        self._drag_origin = None

    def drag(self, dx: float, dy: float) -> None:
        """Rotate the active model by a pointer movement in screen pixels."""
        gain = self.cfg.drag_gain * self.rotate_speed
        model = self.registry.active
        model.rotation.y += dx * gain
        model.rotation.x += dy * gain

    def wheel(self, notches: float) -> float:
        """
        Zoom by wheel notches; positive scrolls toward the model.

        Returns:
            New camera z
        """
        delta = -notches * self.cfg.wheel_step * self.zoom_speed
        return zoom_camera(self.camera, delta, self.limits.zoom_min, self.limits.zoom_max)

    def set_speeds(self, rotate_speed: Optional[float] = None, zoom_speed: Optional[float] = None) -> None:
        if rotate_speed is not None:
            self.rotate_speed = max(0.1, rotate_speed)
        if zoom_speed is not None:
            self.zoom_speed = max(0.1, zoom_speed)

    def on_mouse(self, event: int, x: int, y: int, flags: int, param=None) -> None:
        """cv2.setMouseCallback handler."""
        if event == cv2.EVENT_LBUTTONDOWN:
            self.press(x, y)
        elif event == cv2.EVENT_MOUSEMOVE:
            self.move(x, y)
        elif event == cv2.EVENT_LBUTTONUP:
            self.release()
        elif event == cv2.EVENT_MOUSEWHEEL:
            self.wheel(1 if cv2.getMouseWheelDelta(flags) > 0 else -1)
