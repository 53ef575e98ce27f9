"""
Test cases for configuration loading, camera diagnostics and the HUD.
"""
import logging
import os
import tempfile
import unittest
from dataclasses import replace
from pathlib import Path
from unittest import mock

import numpy as np
import yaml

from cosmic_gestures.camera import MirroredStream, diagnose_camera_failure, open_camera
from cosmic_gestures.config import CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH, load_config
from cosmic_gestures.errors import StreamFailure, StreamUnavailable
from cosmic_gestures.logger import LOG_DIR_ENV_VAR, setup_logging
from cosmic_gestures.overlay import OverlayUI
from cosmic_gestures.scene import Camera, Model


class TestConfig(unittest.TestCase):
    """Test YAML configuration."""

    def test_defaults(self):
        cfg = load_config()
        self.assertEqual(cfg.gestures.rotate_deadzone_px, 5)
        self.assertEqual(cfg.gestures.pinch_threshold_px, 50)
        self.assertIsNone(cfg.gestures.pinch_exit_threshold_px)
        self.assertEqual(cfg.gestures.pinch_exit_px, 50)
        self.assertEqual(cfg.control.rotation_gain, 0.01)
        self.assertEqual(cfg.control.zoom_gain, 0.01)
        self.assertEqual((cfg.control.zoom_min, cfg.control.zoom_max), (1, 20))
        self.assertTrue(100 <= cfg.control.indicator_pulse_ms <= 200)
        self.assertEqual(cfg.mediapipe.max_num_hands, 1)

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_config("/nonexistent/config.yaml")

    def _write_variant(self, tmp: str, **gestures) -> str:
        with open(DEFAULT_CONFIG_PATH) as f:
            data = yaml.safe_load(f)
        data["gestures"].update(gestures)
        path = os.path.join(tmp, "custom.yaml")
        with open(path, "w") as f:
            yaml.safe_dump(data, f)
        return path

    def test_env_var_override(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = self._write_variant(tmp, pinch_exit_threshold_px=65)
            with mock.patch.dict(os.environ, {CONFIG_ENV_VAR: path}):
                cfg = load_config()
        self.assertEqual(cfg.gestures.pinch_exit_px, 65)

    def test_exit_threshold_below_entry_is_rejected(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = self._write_variant(tmp, pinch_exit_threshold_px=30)
            with self.assertRaises(ValueError):
                load_config(path)


class TestLogging(unittest.TestCase):
    """Test console and rotating file logging."""

    def test_setup_logging_writes_file(self):
        cfg = load_config().logging
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch.dict(os.environ, {LOG_DIR_ENV_VAR: tmp}):
                logger = setup_logging(cfg, debug=True)
            try:
                logging.getLogger("cosmic_gestures.session").info("tracking started")
                for handler in logger.handlers:
                    handler.flush()
                self.assertEqual(logger.level, logging.DEBUG)
                self.assertIn("tracking started", (Path(tmp) / cfg.filename).read_text(encoding="utf-8"))
            finally:
                for handler in list(logger.handlers):
                    handler.close()
                    logger.removeHandler(handler)
                logger.setLevel(logging.NOTSET)

    def test_setup_logging_console_only(self):
        cfg = replace(load_config().logging, log_to_file=False, level="warning")
        logger = setup_logging(cfg)
        try:
            self.assertEqual(logger.level, logging.WARNING)
            self.assertEqual(len(logger.handlers), 1)
        finally:
            logger.handlers.clear()
            logger.setLevel(logging.NOTSET)


class TestCameraDiagnostics(unittest.TestCase):
    """Test StreamUnavailable reasons."""

    def test_missing_device_node(self):
        with tempfile.TemporaryDirectory() as tmp:
            reason = diagnose_camera_failure(0, system="Linux", dev_root=Path(tmp))
        self.assertEqual(reason, StreamFailure.NO_DEVICE)

    def test_unreadable_device_node(self):
        with tempfile.TemporaryDirectory() as tmp:
            (Path(tmp) / "video2").touch()
            with mock.patch("cosmic_gestures.camera.os.access", return_value=False):
                reason = diagnose_camera_failure(2, system="Linux", dev_root=Path(tmp))
        self.assertEqual(reason, StreamFailure.PERMISSION_DENIED)

    def test_accessible_device_is_busy(self):
        with tempfile.TemporaryDirectory() as tmp:
            (Path(tmp) / "video0").touch()
            with mock.patch("cosmic_gestures.camera.os.access", return_value=True):
                reason = diagnose_camera_failure(0, system="Linux", dev_root=Path(tmp))
        self.assertEqual(reason, StreamFailure.DEVICE_BUSY)

    def test_macos_means_permission(self):
        self.assertEqual(diagnose_camera_failure(0, system="Darwin"), StreamFailure.PERMISSION_DENIED)

    def test_open_camera_failure(self):
        cap = mock.MagicMock()
        cap.isOpened.return_value = False
        with mock.patch("cosmic_gestures.camera.cv2.VideoCapture", return_value=cap), \
                mock.patch("cosmic_gestures.camera.diagnose_camera_failure", return_value=StreamFailure.DEVICE_BUSY):
            with self.assertRaises(StreamUnavailable) as ctx:
                open_camera(load_config().camera)
        self.assertEqual(ctx.exception.reason, StreamFailure.DEVICE_BUSY)
        self.assertIn("in use", ctx.exception.user_message)
        cap.release.assert_called_once()

    def test_user_messages_differ(self):
        messages = {StreamUnavailable(reason).user_message for reason in StreamFailure}
        self.assertEqual(len(messages), 3)

    def test_mirrored_stream_flips(self):
        frame = np.zeros((2, 3, 3), dtype=np.uint8)
        frame[:, 0] = 255
        inner = mock.MagicMock()
        inner.read.return_value = (True, frame)
        ok, flipped = MirroredStream(inner).read()
        self.assertTrue(ok)
        self.assertTrue((flipped[:, 2] == 255).all())
        self.assertTrue((flipped[:, 0] == 0).all())


class TestOverlay(unittest.TestCase):
    """Test the HUD implementation of the UI affordance interface."""

    def test_records_state_and_draws(self):
        ui = OverlayUI()
        ui.set_indicator_active("zoom", True)
        ui.set_status_text("Hand detected")
        ui.show_message("Camera off")
        self.assertTrue(ui.indicators["zoom"])
        self.assertFalse(ui.indicators["rotate"])

        frame = np.zeros((480, 640, 3), dtype=np.uint8)
        out = ui.draw(frame, Camera(), Model("earth", "Earth", ""))
        self.assertEqual(out.shape, (480, 640, 3))
        self.assertGreater(int(out.sum()), 0)


if __name__ == '__main__':
    unittest.main()
