"""
Tracking session: owns the stream, the tick loop and the start/stop lifecycle.
"""
import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, List, Optional, Union

from .classifier import GestureClassifier
from .control import ControlMapper
from .errors import ModelLoadFailed, StreamFailure, StreamUnavailable
from .gestures import GestureStateMachine
from .scene import Camera, ModelRegistry
from .types import (
    STATUS_CAMERA_OFF,
    STATUS_MOVE_HAND,
    FrameStreamProto,
    GestureEvent,
    LandmarkSet,
    LandmarkSourceProto,
    TrackingState,
    UIAffordanceProto,
)

logger = logging.getLogger(__name__)

FrameHook = Callable[[Any, List[GestureEvent]], Union[None, Awaitable[None]]]


class TrackingSession:
    """
    Drives the gesture pipeline once per frame while the camera is on.

    Each tick: read frame -> estimate landmarks -> classify -> update state
    -> apply to camera/model/UI. Ticks never overlap, and a tick whose
    session was stopped while inference was pending is discarded.
    Failures leave tracking off and pointer control untouched.
    """

    def __init__(
        self,
        source_factory: Callable[[], LandmarkSourceProto],
        classifier: GestureClassifier,
        state_machine: GestureStateMachine,
        mapper: ControlMapper,
        camera: Camera,
        registry: ModelRegistry,
        ui: UIAffordanceProto,
        fps: float = 30.0,
    ):
        """
        Initialize the session.

        Args:
            source_factory: Creates the landmark detector on start
            classifier: Landmark-to-feature classifier
            state_machine: Gesture state machine
            mapper: Event-to-transform mapper
            camera: Camera driven by zoom
            registry: Supplies the active model for rotation
            ui: Receives tracking status text
            fps: Tick rate of run()
        """
        self.source_factory = source_factory
        self.classifier = classifier
        self.state_machine = state_machine
        self.mapper = mapper
        self.camera = camera
        self.registry = registry
        self.ui = ui
        self.frame_interval = 1.0 / fps if fps > 0 else 0.0

        self.stream: Optional[FrameStreamProto] = None
        self.source: Optional[LandmarkSourceProto] = None
        self.state: Optional[TrackingState] = None
        self.last_frame: Any = None
        self.last_landmarks: Optional[LandmarkSet] = None

        self._running = False
        self._generation = 0
        self._tick_in_progress = False

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self, stream: Optional[FrameStreamProto]) -> None:
        """
        Start tracking on an opened stream.

        Raises:
            StreamUnavailable: if the stream is missing or not open
            ModelLoadFailed: if the landmark detector fails to initialize
        """
        if self._running or self.stream is not None:
            logger.info("Restarting tracking session with a new stream")
            self.stop()

        if stream is None or not stream.isOpened():
            if stream is not None:
                stream.release()
            self.ui.set_status_text(STATUS_CAMERA_OFF)
            error = StreamUnavailable(StreamFailure.NO_DEVICE, "stream is not open")
            logger.error(f"Tracking not started: {error}")
            raise error

        try:
            source = self.source_factory()
        except Exception as e:
            stream.release()
            self.ui.set_status_text(STATUS_CAMERA_OFF)
            logger.error(f"Tracking not started, landmark model failed: {e}")
            if isinstance(e, ModelLoadFailed):
                raise
            raise ModelLoadFailed(str(e)) from e

        self.stream = stream
        self.source = source
        self.state = TrackingState()
        self._generation += 1
        self._running = True
        self.ui.set_status_text(STATUS_MOVE_HAND)
        logger.info("Hand tracking started")

    def stop(self) -> None:
        """Stop tracking and release the stream. Safe to call repeatedly."""
        if not self._running and self.stream is None:
            return

        self._running = False
        self._generation += 1

        if self.stream is not None:
            self.stream.release()
            self.stream = None

        close = getattr(self.source, "close", None)
        if callable(close):
            try:
                close()
            except Exception:
                logger.exception("Error closing landmark source")
        self.source = None

        self.state = None
        self.last_frame = None
        self.last_landmarks = None
        self.mapper.clear()
        self.ui.set_status_text(STATUS_CAMERA_OFF)
        logger.info("Hand tracking stopped")

    async def tick(self) -> List[GestureEvent]:
        """
        Run one pass of the pipeline.

        Returns:
            The events applied this tick ([] if nothing ran)
        """
        if not self._running or self._tick_in_progress:
            return []

        self._tick_in_progress = True
        try:
            return await self._tick()
        finally:
            self._tick_in_progress = False

    async def _tick(self) -> List[GestureEvent]:
        generation = self._generation

        ok, frame = self.stream.read()
        if not ok:
            logger.warning("Camera stream stopped delivering frames")
            self.stop()
            return []
        self.last_frame = frame

        landmarks = await self._estimate(frame)
        if generation != self._generation:
            logger.debug("Discarding landmarks from a stopped session")
            return []
        self.last_landmarks = landmarks

        features = self.classifier.classify(landmarks)
        events = self.state_machine.update(features, self.state)
        self.mapper.apply(events, self.camera, self.registry.active)
        return events

    async def _estimate(self, frame) -> Optional[LandmarkSet]:
        try:
            result = self.source.estimate(frame)
            if inspect.isawaitable(result):
                result = await result
            return result
        except Exception:
            logger.exception("Landmark detection failed, treating frame as no hand")
            return None

    async def run(self, on_frame: Optional[FrameHook] = None) -> None:
        """
        Tick once per frame interval until stop() is called.

        Args:
            on_frame: Optional host hook called after each tick with the frame and events
        """
        while self._running:
            events = await self.tick()
            if on_frame is not None and self._running:
                result = on_frame(self.last_frame, events)
                if inspect.isawaitable(result):
                    await result
            await asyncio.sleep(self.frame_interval)
