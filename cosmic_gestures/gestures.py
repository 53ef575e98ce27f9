"""
Gesture state machine that turns per-tick features into rotate/zoom/select events.
"""
import logging
from typing import List, Optional

from .config import GesturesConfig
from .types import (
    GestureEvent,
    GestureFeatures,
    HandLost,
    Idle,
    PointSelectOff,
    PointSelectOn,
    Rotate,
    TrackingState,
    ZoomDelta,
    ZoomPinchEnd,
    ZoomPinchStart,
)

logger = logging.getLogger(__name__)


class GestureStateMachine:
    """
    Converts successive gesture features into continuous deltas and discrete events.

    Features:
    - Centroid rotation with a jitter deadzone
    - Pinch zoom latched by a threshold (hysteresis through the is_pinching flag)
    - Edge-triggered point-select
    - Hand-lost reset of all cross-tick memory

    The TrackingState passed to update() is only ever mutated here.
    """

    def __init__(self, cfg: GesturesConfig):
        """Initialize the state machine with gesture thresholds."""
        self.cfg = cfg

    def update(self, features: Optional[GestureFeatures], state: TrackingState) -> List[GestureEvent]:
        """
        Advance the state by one tick.

        Args:
            features: This tick's features (None if no hand detected)
            state: Tracking state carried across ticks

        Returns:
            Events in emission order: rotate, zoom, select; [Idle] if none fired
        """
        if features is None:
            if state.is_pinching or state.is_pointing or state.last_centroid is not None:
                logger.debug("Hand lost, resetting tracking state")
            state.reset()
            return [HandLost()]

        events: List[GestureEvent] = []

        rotate = self._update_rotation(features, state)
        if rotate is not None:
            events.append(rotate)

        zoom = self._update_pinch(features, state)
        if zoom is not None:
            events.append(zoom)

        select = self._update_pointing(features, state)
        if select is not None:
            events.append(select)

        if not events:
            events.append(Idle())
        return events

    def _update_rotation(self, features: GestureFeatures, state: TrackingState) -> Optional[Rotate]:
        event = None
        if state.last_centroid is not None:
            dx = features.centroid[0] - state.last_centroid[0]
            dy = features.centroid[1] - state.last_centroid[1]
            deadzone = self.cfg.rotate_deadzone_px
            if abs(dx) > deadzone or abs(dy) > deadzone:
                event = Rotate(dx=dx, dy=dy)

        # Follow the hand every tick so sub-deadzone moves never accumulate
        state.last_centroid = features.centroid
        return event

    def _update_pinch(self, features: GestureFeatures, state: TrackingState) -> Optional[GestureEvent]:
        distance = features.pinch_distance

        if not state.is_pinching:
            if distance < self.cfg.pinch_threshold_px:
                # Baseline only; deltas start on the next tick
                state.is_pinching = True
                state.last_pinch_distance = distance
                logger.debug(f"Pinch started at {distance:.1f}px")
                return ZoomPinchStart()
            return None

        if distance >= self.cfg.pinch_exit_px:
            state.is_pinching = False
            logger.debug(f"Pinch released at {distance:.1f}px")
            return ZoomPinchEnd()

        amount = state.last_pinch_distance - distance
        state.last_pinch_distance = distance
        return ZoomDelta(amount=amount)

    def _update_pointing(self, features: GestureFeatures, state: TrackingState) -> Optional[GestureEvent]:
        pointing = features.index_extended and features.middle_closed

        if pointing and not state.is_pointing:
            state.is_pointing = True
            return PointSelectOn()
        if not pointing and state.is_pointing:
            state.is_pointing = False
            return PointSelectOff()
        return None
