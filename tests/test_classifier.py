"""
Test cases for landmark feature extraction.
"""
import unittest
from types import SimpleNamespace
from typing import Dict, Tuple

from cosmic_gestures.classifier import GestureClassifier, extract_features, hand_centroid, pinch_distance
from cosmic_gestures.errors import MalformedLandmarkSet
from cosmic_gestures.landmarks import landmark_set_from_normalized, landmark_set_from_points
from cosmic_gestures.types import HandIndex


def make_hand(overrides: Dict[int, Tuple[float, float]] = None):
    """21 landmarks at (200, 200) with selected points moved."""
    points = [(200.0, 200.0)] * 21
    for idx, point in (overrides or {}).items():
        points[idx] = point
    return landmark_set_from_points(points)


SCENARIO_HAND = {
    HandIndex.WRIST: (0, 0),
    HandIndex.MIDDLE_MCP: (0, 10),
    HandIndex.THUMB_TIP: (100, 100),
    HandIndex.INDEX_TIP: (100, 140),
}


class TestFeatureExtraction(unittest.TestCase):
    """Test geometric features."""

    def test_centroid_is_wrist_middle_base_midpoint(self):
        hand = make_hand(SCENARIO_HAND)
        self.assertEqual(hand_centroid(hand), (0, 5))

    def test_pinch_distance(self):
        hand = make_hand(SCENARIO_HAND)
        self.assertAlmostEqual(pinch_distance(hand), 40.0)

        diagonal = make_hand({HandIndex.THUMB_TIP: (0, 0), HandIndex.INDEX_TIP: (30, 40)})
        self.assertAlmostEqual(pinch_distance(diagonal), 50.0)

    def test_pointing_pose_flags(self):
        """Index tip above its PIP, middle tip below its PIP (y grows downward)."""
        hand = make_hand({
            HandIndex.INDEX_PIP: (120, 150),
            HandIndex.INDEX_TIP: (120, 100),
            HandIndex.MIDDLE_PIP: (140, 150),
            HandIndex.MIDDLE_TIP: (140, 170),
        })
        f = extract_features(hand)
        self.assertTrue(f.index_extended)
        self.assertTrue(f.middle_closed)

    def test_open_hand_flags(self):
        hand = make_hand({
            HandIndex.INDEX_PIP: (120, 150),
            HandIndex.INDEX_TIP: (120, 100),
            HandIndex.MIDDLE_PIP: (140, 150),
            HandIndex.MIDDLE_TIP: (140, 95),
        })
        f = extract_features(hand)
        self.assertTrue(f.index_extended)
        self.assertFalse(f.middle_closed)

    def test_equal_heights_are_neither_extended_nor_closed(self):
        f = extract_features(make_hand())
        self.assertFalse(f.index_extended)
        self.assertFalse(f.middle_closed)

    def test_missing_landmark_raises(self):
        hand = dict(make_hand())
        del hand[HandIndex.MIDDLE_TIP]
        with self.assertRaises(MalformedLandmarkSet) as ctx:
            extract_features(hand)
        self.assertEqual(ctx.exception.missing, (12,))


class TestGestureClassifier(unittest.TestCase):
    """Test the per-tick classifier contract."""

    def setUp(self):
        self.classifier = GestureClassifier()

    def test_no_hand(self):
        self.assertIsNone(self.classifier.classify(None))

    def test_scenario_hand(self):
        f = self.classifier.classify(make_hand(SCENARIO_HAND))
        self.assertEqual(f.centroid, (0, 5))
        self.assertAlmostEqual(f.pinch_distance, 40.0)

    def test_malformed_set_is_no_hand_and_logged(self):
        """Only the first five landmarks: logged, treated as no hand, never raised."""
        partial = landmark_set_from_points([(10.0, 10.0)] * 5)
        with self.assertLogs("cosmic_gestures.classifier", level="WARNING") as logs:
            result = self.classifier.classify(partial)
        self.assertIsNone(result)
        self.assertEqual(self.classifier.malformed_count, 1)
        self.assertIn("malformed", logs.output[0])

    def test_classify_is_pure(self):
        hand = make_hand(SCENARIO_HAND)
        self.assertEqual(self.classifier.classify(hand), self.classifier.classify(hand))

    def test_landmarks_beyond_required_are_optional(self):
        """Ring and pinky points are not needed."""
        hand = dict(make_hand(SCENARIO_HAND))
        for idx in (HandIndex.RING_TIP, HandIndex.PINKY_TIP, HandIndex.PINKY_MCP):
            del hand[idx]
        self.assertIsNotNone(self.classifier.classify(hand))


class TestLandmarkConversion(unittest.TestCase):
    """Test MediaPipe normalized-to-pixel conversion."""

    def test_normalized_to_pixels(self):
        raw = [SimpleNamespace(x=0.5, y=0.25, z=-0.1)] * 21
        hand = landmark_set_from_normalized(raw, 640, 480)
        self.assertEqual(len(hand), 21)
        self.assertEqual(hand[HandIndex.INDEX_TIP].x, 320.0)
        self.assertEqual(hand[HandIndex.INDEX_TIP].y, 120.0)
        self.assertAlmostEqual(hand[HandIndex.INDEX_TIP].z, -0.1)
        self.assertEqual(hand[HandIndex.INDEX_TIP].idx, 8)


if __name__ == '__main__':
    unittest.main()
