"""
Cosmic Gestures

Gesture control for an interactive 3D visualizer: reads hand landmarks from
a webcam with MediaPipe, recognizes rotate, pinch-zoom and point-select
gestures, and maps them onto the camera and model transforms. Mouse control
stays available whenever hand tracking is off.
"""

__version__ = "0.1.0"

from .types import (
    GestureEvent,
    GestureFeatures,
    HandIndex,
    HandLost,
    Idle,
    Landmark,
    LandmarkSet,
    PointSelectOff,
    PointSelectOn,
    Rotate,
    TrackingState,
    UIAffordanceProto,
    ZoomDelta,
    ZoomPinchEnd,
    ZoomPinchStart,
)
from .errors import TrackingError, StreamUnavailable, StreamFailure, ModelLoadFailed, MalformedLandmarkSet
from .config import load_config, Cfg
from .classifier import GestureClassifier
from .gestures import GestureStateMachine
from .control import ControlMapper
from .scene import Camera, Model, ModelRegistry
from .session import TrackingSession
from .ui_mock import MockUI

__all__ = [
    "GestureEvent",
    "GestureFeatures",
    "HandIndex",
    "HandLost",
    "Idle",
    "Landmark",
    "LandmarkSet",
    "PointSelectOff",
    "PointSelectOn",
    "Rotate",
    "TrackingState",
    "UIAffordanceProto",
    "ZoomDelta",
    "ZoomPinchEnd",
    "ZoomPinchStart",
    "TrackingError",
    "StreamUnavailable",
    "StreamFailure",
    "ModelLoadFailed",
    "MalformedLandmarkSet",
    "load_config",
    "Cfg",
    "GestureClassifier",
    "GestureStateMachine",
    "ControlMapper",
    "Camera",
    "Model",
    "ModelRegistry",
    "TrackingSession",
    "MockUI",
]
