"""
Test cases for scene state and mouse control.
"""
import unittest
from dataclasses import replace

import cv2

from cosmic_gestures.config import load_config
from cosmic_gestures.pointer import PointerControls
from cosmic_gestures.scene import Camera, ModelRegistry


class TestModelRegistry(unittest.TestCase):
    """Model catalogue, switching and auto-rotate."""

    def setUp(self):
        """Set up test configuration."""
        self.cfg = load_config()
        self.camera = Camera()
        self.registry = ModelRegistry(self.cfg.scene)

    def test_catalogue(self):
        self.assertEqual(self.registry.names, ["earth", "blackhole", "human-body", "supernova", "galaxy"])
        self.assertEqual(self.registry.active.name, "earth")
        visible = [m.name for m in self.registry.models.values() if m.visible]
        self.assertEqual(visible, ["earth"])

    def test_switch_model_shows_only_new_model_and_resets_view(self):
        self.camera.position.z = 17.0
        self.assertTrue(self.registry.switch_model("supernova", self.camera))
        visible = [m.name for m in self.registry.models.values() if m.visible]
        self.assertEqual(visible, ["supernova"])
        self.assertEqual(self.camera.position.z, self.cfg.scene.camera_z)

    def test_switch_to_current_is_noop(self):
        self.camera.position.z = 12.0
        self.assertFalse(self.registry.switch_model("earth", self.camera))
        self.assertEqual(self.camera.position.z, 12.0)

    def test_unknown_model(self):
        with self.assertRaises(KeyError):
            self.registry.switch_model("pluto")
        self.assertEqual(self.registry.active.name, "earth")

    def test_unknown_default_model(self):
        with self.assertRaises(KeyError):
            ModelRegistry(replace(self.cfg.scene, default_model="pluto"))

    def test_auto_rotate(self):
        self.registry.advance_frame()
        self.assertEqual(self.registry.active.rotation.y, 0.0)

        self.assertTrue(self.registry.toggle_auto_rotate())
        for _ in range(10):
            self.registry.advance_frame()
        self.assertAlmostEqual(self.registry.active.rotation.y, 0.05)

        self.assertFalse(self.registry.toggle_auto_rotate())
        self.registry.advance_frame()
        self.assertAlmostEqual(self.registry.active.rotation.y, 0.05)


class TestPointerControls(unittest.TestCase):
    """Mouse drag and wheel."""

    def setUp(self):
        self.cfg = load_config()
        self.camera = Camera()
        self.registry = ModelRegistry(self.cfg.scene)
        self.pointer = PointerControls(self.cfg.pointer, self.cfg.control, self.camera, self.registry)

    def test_drag_rotates_active_model(self):
        self.pointer.press(100, 100)
        self.pointer.move(130, 90)
        self.pointer.move(140, 90)
        self.pointer.release()
        self.pointer.move(500, 500)
        model = self.registry.active
        self.assertAlmostEqual(model.rotation.y, 0.4)
        self.assertAlmostEqual(model.rotation.x, -0.1)
        self.assertFalse(self.pointer.dragging)

    def test_move_without_press_is_ignored(self):
        self.pointer.move(10, 10)
        self.assertEqual(self.registry.active.rotation.y, 0.0)

    def test_rotate_speed(self):
        self.pointer.set_speeds(rotate_speed=2.0)
        self.pointer.drag(10, 0)
        self.assertAlmostEqual(self.registry.active.rotation.y, 0.2)

    def test_speeds_have_a_floor(self):
        self.pointer.set_speeds(rotate_speed=-3, zoom_speed=0)
        self.assertEqual(self.pointer.rotate_speed, 0.1)
        self.assertEqual(self.pointer.zoom_speed, 0.1)

    def test_wheel_zoom_is_clamped(self):
        for _ in range(100):
            self.pointer.wheel(1)
        self.assertEqual(self.camera.position.z, self.cfg.control.zoom_min)
        for _ in range(100):
            self.pointer.wheel(-1)
        self.assertEqual(self.camera.position.z, self.cfg.control.zoom_max)

    def test_opencv_mouse_callback(self):
        self.pointer.on_mouse(cv2.EVENT_LBUTTONDOWN, 0, 0, 0)
        self.pointer.on_mouse(cv2.EVENT_MOUSEMOVE, 50, 0, 0)
        self.pointer.on_mouse(cv2.EVENT_LBUTTONUP, 50, 0, 0)
        self.assertAlmostEqual(self.registry.active.rotation.y, 0.5)


if __name__ == '__main__':
    unittest.main()
