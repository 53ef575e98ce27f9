"""
Applies gesture events to the camera/model transforms and the UI indicators.
"""
import logging
import time
from typing import Callable, Dict, List, Optional, Sequence

from .config import ControlConfig
from .types import (
    INDICATOR_NAMES,
    STATUS_HAND_DETECTED,
    STATUS_MOVE_HAND,
    CameraHandle,
    GestureEvent,
    HandLost,
    IndicatorName,
    ModelHandle,
    PointSelectOff,
    PointSelectOn,
    Rotate,
    UIAffordanceProto,
    ZoomDelta,
    ZoomPinchEnd,
    ZoomPinchStart,
)

logger = logging.getLogger(__name__)


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def zoom_camera(camera: CameraHandle, delta: float, lo: float, hi: float) -> float:
    """Move the camera along z and clamp it into [lo, hi]. Returns the new z."""
    camera.position.z = clamp(camera.position.z + delta, lo, hi)
    return camera.position.z


# Rotate before zoom before select when events share a tick
_APPLY_ORDER = {
    HandLost: 0,
    Rotate: 1,
    ZoomPinchStart: 2,
    ZoomDelta: 2,
    ZoomPinchEnd: 2,
    PointSelectOn: 3,
    PointSelectOff: 3,
}


class ControlMapper:
    """
    Maps gesture events onto the rendering transforms and the UI.

    Rotate and zoom light their indicator for a short pulse that expires on
    its own; select stays lit while the pointing pose is held.
    """

    def __init__(self, cfg: ControlConfig, ui: UIAffordanceProto,
                 clock: Callable[[], float] = time.monotonic):
        """
        Initialize the mapper.

        Args:
            cfg: Gains and zoom limits
            ui: Host UI receiving indicator and status updates
            clock: Monotonic time source in seconds
        """
        self.cfg = cfg
        self.ui = ui
        self.clock = clock
        self._pulse_deadlines: Dict[IndicatorName, float] = {}
        self._latched: Dict[IndicatorName, bool] = {}
        self._status: Optional[str] = None

    def apply(self, events: Sequence[GestureEvent], camera: CameraHandle,
              model: Optional[ModelHandle]) -> None:
        """
        Apply one tick's events.

        Args:
            events: Events from GestureStateMachine.update
            camera: Camera whose position.z is zoomed
            model: Active model to rotate (None if nothing is displayed)
        """
        self.expire_pulses()

        for event in sorted(events, key=lambda e: _APPLY_ORDER.get(type(e), 4)):
            if isinstance(event, HandLost):
                self._on_hand_lost()
                continue

            if isinstance(event, Rotate):
                if model is not None:
                    model.rotation.y += event.dx * self.cfg.rotation_gain
                    model.rotation.x += event.dy * self.cfg.rotation_gain
                self._pulse("rotate")
            elif isinstance(event, ZoomDelta):
                zoom_camera(camera, event.amount * self.cfg.zoom_gain,
                            self.cfg.zoom_min, self.cfg.zoom_max)
                self._pulse("zoom")
            elif isinstance(event, ZoomPinchStart):
                self._pulse("zoom")
            elif isinstance(event, PointSelectOn):
                self._set_latched("select", True)
            elif isinstance(event, PointSelectOff):
                self._set_latched("select", False)

        if events and not any(isinstance(e, HandLost) for e in events):
            self._set_status(STATUS_HAND_DETECTED)

    def expire_pulses(self) -> None:
        """Clear pulsed indicators whose time is up."""
        now = self.clock()
        for name, deadline in list(self._pulse_deadlines.items()):
            if now >= deadline:
                del self._pulse_deadlines[name]
                if not self._latched.get(name, False):
                    self.ui.set_indicator_active(name, False)

    def clear(self) -> None:
        """Drop every indicator, e.g. when tracking stops."""
        self._pulse_deadlines.clear()
        self._latched.clear()
        for name in INDICATOR_NAMES:
            self.ui.set_indicator_active(name, False)
        self._status = None

    @property
    def active_indicators(self) -> List[IndicatorName]:
        return [name for name in INDICATOR_NAMES
                if name in self._pulse_deadlines or self._latched.get(name, False)]

    def _on_hand_lost(self) -> None:
        self._pulse_deadlines.clear()
        self._latched.clear()
        for name in INDICATOR_NAMES:
            self.ui.set_indicator_active(name, False)
        self._set_status(STATUS_MOVE_HAND)

    def _pulse(self, name: IndicatorName) -> None:
        # An active pulse keeps its original deadline
        if name not in self._pulse_deadlines:
            self._pulse_deadlines[name] = self.clock() + self.cfg.indicator_pulse_ms / 1000.0
        self.ui.set_indicator_active(name, True)

    def _set_latched(self, name: IndicatorName, active: bool) -> None:
        self._latched[name] = active
        if active or name not in self._pulse_deadlines:
            self.ui.set_indicator_active(name, active)
        logger.debug(f"Indicator '{name}' {'on' if active else 'off'}")

    def _set_status(self, text: str) -> None:
        if text != self._status:
            self._status = text
            self.ui.set_status_text(text)
