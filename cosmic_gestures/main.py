"""
Main application: gesture- and mouse-controlled cosmic visualizer.
"""
import argparse
import asyncio
import logging
import time
from typing import Optional

import cv2
import numpy as np
from dotenv import load_dotenv

from .camera import MirroredStream, open_camera
from .classifier import GestureClassifier
from .config import Cfg, load_config
from .control import ControlMapper
from .errors import TrackingError
from .gestures import GestureStateMachine
from .landmarks import HandsTracker, draw_landmarks
from .logger import setup_logging
from .overlay import OverlayUI
from .pointer import PointerControls
from .scene import Camera, ModelRegistry
from .session import TrackingSession
from .types import STATUS_CAMERA_OFF

logger = logging.getLogger(__name__)

MODEL_KEYS = {ord(str(i + 1)): i for i in range(9)}


class VisualizerApp:
    """Main application class wiring scene, pointer, gestures and the window."""

    def __init__(self, config: Cfg):
        """Initialize the application with configuration."""
        self.config = config

        self.camera = Camera()
        self.registry = ModelRegistry(config.scene)
        self.registry.reset_view(self.camera)

        self.ui = OverlayUI()
        self.ui.set_status_text(STATUS_CAMERA_OFF)
        self.pointer = PointerControls(config.pointer, config.control, self.camera, self.registry)
        self.mapper = ControlMapper(config.control, self.ui)
        self.session = TrackingSession(
            source_factory=lambda: HandsTracker(config.mediapipe),
            classifier=GestureClassifier(),
            state_machine=GestureStateMachine(config.gestures),
            mapper=self.mapper,
            camera=self.camera,
            registry=self.registry,
            ui=self.ui,
            fps=config.camera.fps,
        )

    def start_camera(self) -> bool:
        """Try to start hand tracking; on failure keep running with mouse control."""
        try:
            stream = open_camera(self.config.camera)
        except TrackingError as e:
            logger.warning(f"Camera unavailable: {e}")
            self.ui.show_message(getattr(e, "user_message", str(e)))
            self.ui.set_status_text(STATUS_CAMERA_OFF)
            return False

        if self.config.camera.mirror:
            stream = MirroredStream(stream)

        try:
            self.session.start(stream)
        except TrackingError as e:
            self.ui.show_message(getattr(e, "user_message", "Hand tracking failed to load. Using mouse controls instead."))
            return False

        self.ui.show_message(None)
        return True

    def toggle_camera(self) -> None:
        if self.session.is_running:
            self.session.stop()
        else:
            self.start_camera()

    def handle_key(self, key: int) -> bool:
        """
        React to a key press.

        Returns:
            False when the app should quit
        """
        if key in (ord('q'), 27):
            return False
        if key == ord('c'):
            self.toggle_camera()
        elif key == ord('r'):
            self.registry.reset_view(self.camera)
        elif key == ord('a'):
            enabled = self.registry.toggle_auto_rotate()
            logger.info(f"Auto-rotate {'on' if enabled else 'off'}")
        elif key in (ord('+'), ord('=')):
            self.pointer.set_speeds(self.pointer.rotate_speed + 0.1, self.pointer.zoom_speed + 0.1)
        elif key == ord('-'):
            self.pointer.set_speeds(self.pointer.rotate_speed - 0.1, self.pointer.zoom_speed - 0.1)
        elif key in MODEL_KEYS and MODEL_KEYS[key] < len(self.registry.names):
            self.registry.switch_model(self.registry.names[MODEL_KEYS[key]], self.camera)
        return True

    def render(self) -> np.ndarray:
        frame = self.session.last_frame
        if frame is None:
            frame = np.zeros((self.config.camera.height, self.config.camera.width, 3), dtype=np.uint8)
        else:
            frame = frame.copy()

        if self.config.display.show_landmarks and self.session.last_landmarks:
            frame = draw_landmarks(frame, self.session.last_landmarks)

        return self.ui.draw(frame, self.camera, self.registry.active, self.config.display.show_gizmo)

    async def run(self, use_camera: bool = True):
        """Run the main application loop."""
        window = self.config.display.window_name
        logger.info(f"Starting {window}")
        cv2.namedWindow(window)
        cv2.setMouseCallback(window, self.pointer.on_mouse)

        if use_camera:
            self.start_camera()

        frame_interval = 1.0 / self.config.camera.fps
        try:
            while True:
                t_start = time.monotonic()

                # One gesture tick per rendered frame
                await self.session.tick()
                self.mapper.expire_pulses()
                self.registry.advance_frame()

                cv2.imshow(window, self.render())
                if not self.handle_key(cv2.waitKey(1) & 0xFF):
                    break

                elapsed = time.monotonic() - t_start
                await asyncio.sleep(max(0.0, frame_interval - elapsed))
        finally:
            self.session.stop()
            cv2.destroyAllWindows()


def parse_args(argv: Optional[list] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Gesture-controlled cosmic visualizer.")
    ap.add_argument("--config", default=None, help="Path to a YAML config (default: bundled config.default.yaml)")
    ap.add_argument("--camera", type=int, default=None, help="Camera index override")
    ap.add_argument("--no-camera", action="store_true", help="Start with mouse control only")
    ap.add_argument("--debug", action="store_true", help="Enable debug logging")
    return ap.parse_args(argv)


async def main(argv: Optional[list] = None):
    """Entry point for the application."""
    load_dotenv()
    args = parse_args(argv)

    config = load_config(args.config)
    if args.camera is not None:
        config.camera.index = args.camera
    setup_logging(config.logging, debug=args.debug)

    app = VisualizerApp(config)
    try:
        await app.run(use_camera=not args.no_camera)
    except KeyboardInterrupt:
        logger.info("Application interrupted by user")


def run() -> None:
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
