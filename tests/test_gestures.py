"""
Test cases for rule-based gesture classification with synthetic landmark sets.
"""
import unittest
from types import SimpleNamespace

import hand_fixtures as hf
from handsign.exceptions import InvalidLandmarksError
from handsign.gestures import (
    GESTURE_RULES,
    classify,
    classify_hands,
    is_fist,
    is_ok_sign,
    is_open_hand,
    is_pointing,
    is_three_fingers_up,
    is_thumbs_up,
)
from handsign.types import Gesture, HandPosition


class TestScenarios(unittest.TestCase):
    """One synthetic hand per gesture."""

    def test_fist(self):
        self.assertEqual(classify(hf.FIST), Gesture.FIST)

    def test_open_hand(self):
        self.assertEqual(classify(hf.OPEN_HAND), Gesture.OPEN_HAND)

    def test_thumbs_up(self):
        self.assertEqual(classify(hf.THUMBS_UP), Gesture.THUMBS_UP)

    def test_ok_sign(self):
        self.assertEqual(classify(hf.OK_SIGN), Gesture.OK_SIGN)

    def test_pointing(self):
        self.assertEqual(classify(hf.POINTING), Gesture.POINTING)

    def test_three_fingers_up(self):
        self.assertEqual(classify(hf.THREE_FINGERS_UP), Gesture.THREE_FINGERS_UP)

    def test_unknown(self):
        self.assertEqual(classify(hf.UNKNOWN), Gesture.UNKNOWN)

    def test_no_hand(self):
        self.assertEqual(classify(None), Gesture.NO_HANDS_DETECTED)

    def test_raw_landmark_objects(self):
        """Objects with bare x/y attributes work like HandLandmark."""
        raw = [SimpleNamespace(x=lm.x, y=lm.y) for lm in hf.FIST]
        self.assertEqual(classify(raw), Gesture.FIST)


class TestPrecedence(unittest.TestCase):
    """First matching rule wins."""

    def test_rule_order(self):
        order = [gesture for gesture, _ in GESTURE_RULES]
        self.assertEqual(
            order,
            [
                Gesture.OK_SIGN,
                Gesture.FIST,
                Gesture.OPEN_HAND,
                Gesture.POINTING,
                Gesture.THUMBS_UP,
                Gesture.THREE_FINGERS_UP,
            ],
        )

    def test_ok_sign_beats_fist(self):
        self.assertTrue(is_ok_sign(hf.OK_AND_FIST))
        self.assertTrue(is_fist(hf.OK_AND_FIST))
        self.assertEqual(classify(hf.OK_AND_FIST), Gesture.OK_SIGN)

    def test_open_hand_beats_thumbs_up(self):
        # An open hand also has its thumb tip above both bases.
        self.assertTrue(is_thumbs_up(hf.OPEN_HAND))
        self.assertEqual(classify(hf.OPEN_HAND), Gesture.OPEN_HAND)

    def test_custom_rules(self):
        self.assertEqual(classify(hf.FIST, rules=()), Gesture.UNKNOWN)
        rules = ((Gesture.THUMBS_UP, is_thumbs_up), (Gesture.OPEN_HAND, is_open_hand))
        self.assertEqual(classify(hf.OPEN_HAND, rules=rules), Gesture.THUMBS_UP)

    def test_deterministic(self):
        results = {classify(hf.POINTING) for _ in range(20)}
        self.assertEqual(results, {Gesture.POINTING})


class TestPredicates(unittest.TestCase):
    """Threshold edges of individual predicates."""

    def test_fist_threshold(self):
        hand = hf.make_hand({8: (0.5, 0.35), 5: (0.5, 0.50)})
        self.assertFalse(is_fist(hand))
        hand = hf.make_hand({8: (0.5, 0.45), 5: (0.5, 0.50)})
        self.assertTrue(is_fist(hand))

    def test_fist_threshold_edges(self):
        # 0.09 apart is level enough, 0.11 is not.
        self.assertTrue(is_fist(hf.make_hand({8: (0.5, 0.41)})))
        self.assertFalse(is_fist(hf.make_hand({8: (0.5, 0.39)})))
        self.assertTrue(is_fist(hf.make_hand({20: (0.5, 0.59)})))
        self.assertFalse(is_fist(hf.make_hand({20: (0.5, 0.61)})))

    def test_ok_sign_pinch_edges(self):
        # Thumb tip sits at (0.50, 0.50); pinch limit is 0.1 on each axis.
        for index_tip, expected in (
            ((0.59, 0.51), True),
            ((0.61, 0.51), False),
            ((0.41, 0.51), True),
            ((0.39, 0.51), False),
            ((0.52, 0.59), True),
            ((0.52, 0.61), False),
        ):
            hand = list(hf.OK_SIGN)
            hand[8] = hf.make_hand({8: index_tip})[8]
            self.assertEqual(is_ok_sign(hand), expected, index_tip)

    def test_three_fingers_thumb_pinky_edges(self):
        # Pinky tip x is 0.70; thumb must be within 0.05.
        for thumb_x, expected in ((0.66, True), (0.74, True), (0.64, False), (0.76, False)):
            hand = list(hf.THREE_FINGERS_UP)
            hand[4] = hf.make_hand({4: (thumb_x, 0.60)})[4]
            self.assertEqual(is_three_fingers_up(hand), expected, thumb_x)

    def test_open_hand_needs_every_finger(self):
        hand = list(hf.OPEN_HAND)
        hand[20] = hf.make_hand({20: (0.66, 0.70)})[20]  # pinky below its base
        self.assertFalse(is_open_hand(hand))

    def test_pointing_needs_thumb_out(self):
        hand = list(hf.POINTING)
        hand[4] = hf.make_hand({4: (0.45, 0.50)})[4]  # thumb tip right of joint 3
        self.assertFalse(is_pointing(hand))
        self.assertEqual(classify(hand), Gesture.UNKNOWN)

    def test_ok_sign_needs_pinch(self):
        hand = list(hf.OK_SIGN)
        hand[8] = hf.make_hand({8: (0.65, 0.51)})[8]
        self.assertFalse(is_ok_sign(hand))

    def test_ok_sign_needs_other_fingers_above_pinch(self):
        hand = list(hf.OK_SIGN)
        hand[16] = hf.make_hand({16: (0.60, 0.60)})[16]
        self.assertFalse(is_ok_sign(hand))

    def test_three_fingers_thumb_pinky_threshold(self):
        hand = list(hf.THREE_FINGERS_UP)
        hand[4] = hf.make_hand({4: (0.60, 0.60)})[4]
        self.assertFalse(is_three_fingers_up(hand))

    def test_thumbs_up_needs_thumb_above_index_base(self):
        hand = list(hf.THUMBS_UP)
        hand[5] = hf.make_hand({5: (0.50, 0.20)})[5]
        self.assertFalse(is_thumbs_up(hand))


class TestValidation(unittest.TestCase):
    """Malformed landmark sets are rejected."""

    def test_too_few_points(self):
        with self.assertRaises(InvalidLandmarksError):
            classify(hf.FIST[:20])

    def test_empty_sequence(self):
        with self.assertRaises(InvalidLandmarksError):
            classify([])

    def test_not_a_sequence(self):
        with self.assertRaises(InvalidLandmarksError):
            classify(42)

    def test_missing_coordinate(self):
        hand = list(hf.FIST)
        hand[3] = SimpleNamespace(x=0.5)
        with self.assertRaises(InvalidLandmarksError):
            classify(hand)

    def test_non_numeric_coordinate(self):
        hand = list(hf.FIST)
        hand[7] = SimpleNamespace(x="0.5", y=0.5)
        with self.assertRaises(InvalidLandmarksError):
            classify(hand)

    def test_bool_coordinate(self):
        hand = list(hf.FIST)
        hand[7] = SimpleNamespace(x=True, y=0.5)
        with self.assertRaises(InvalidLandmarksError):
            classify(hand)

    def test_nan_coordinate(self):
        hand = list(hf.FIST)
        hand[12] = SimpleNamespace(x=0.5, y=float("nan"))
        with self.assertRaises(InvalidLandmarksError):
            classify(hand)

    def test_is_value_error(self):
        with self.assertRaises(ValueError):
            classify(hf.FIST[:5])


class TestClassifyHands(unittest.TestCase):
    """First-hand selection."""

    def _position(self, landmarks):
        return HandPosition(
            handedness_label="Right",
            handedness_score=0.9,
            landmarks=landmarks,
            bbox_px=(0, 0, 0, 0),
            center_px=(0, 0),
            fingertips_px={},
        )

    def test_no_hands(self):
        self.assertEqual(classify_hands([]), Gesture.NO_HANDS_DETECTED)

    def test_hand_position(self):
        self.assertEqual(classify_hands([self._position(hf.OK_SIGN)]), Gesture.OK_SIGN)

    def test_only_first_hand_counts(self):
        hands = [self._position(hf.UNKNOWN), self._position(hf.FIST)]
        self.assertEqual(classify_hands(hands), Gesture.UNKNOWN)

    def test_bare_landmark_sets(self):
        self.assertEqual(classify_hands([hf.OPEN_HAND, hf.FIST]), Gesture.OPEN_HAND)


class TestGestureLabels(unittest.TestCase):

    def test_labels(self):
        self.assertEqual(Gesture.FIST.label, "Fist")
        self.assertEqual(str(Gesture.NO_HANDS_DETECTED), "No Hands Detected")
        self.assertEqual(Gesture.UNKNOWN.label, "Unknown Gesture")

    def test_emoji_labels(self):
        self.assertEqual(Gesture.THUMBS_UP.emoji_label, "\U0001F44D Thumbs Up")
        self.assertEqual(Gesture.THREE_FINGERS_UP.emoji_label, "||| Three Fingers Up")
        self.assertEqual(Gesture.UNKNOWN.emoji_label, "Unknown Gesture")


if __name__ == "__main__":
    unittest.main()
