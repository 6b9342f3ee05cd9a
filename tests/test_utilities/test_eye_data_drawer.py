import unittest

import numpy as np

from eye_finder.config_service.config import Config
from eye_finder.eye_detection.detection_types import BoundingBox, EyeCandidate, PupilCandidate
from eye_finder.utilities import eye_data_drawer


def pupils(*radii):
    return [PupilCandidate(center=(10.0, 5.0), radius=r, eye_index=i) for i, r in enumerate(radii)]


class TestNormalizeRadius(unittest.TestCase):

    def test_small_maximum_is_scaled(self):
        self.assertEqual(eye_data_drawer.normalize_radius(pupils(2, 3, 4)), 12)

    def test_maximum_wins(self):
        self.assertEqual(eye_data_drawer.normalize_radius(pupils(6, 8)), 8)

    def test_truncates_before_compensation(self):
        self.assertEqual(eye_data_drawer.normalize_radius(pupils(4.9)), 12)
        self.assertEqual(eye_data_drawer.normalize_radius(pupils(5.7)), 5)

    def test_no_pupils(self):
        self.assertIsNone(eye_data_drawer.normalize_radius([]))

    def test_custom_limits(self):
        self.assertEqual(eye_data_drawer.normalize_radius(pupils(6), min_radius=8, scale=2), 12)


class TestDraw(unittest.TestCase):

    def setUp(self):
        self.config = Config()
        self.image = np.full((100, 100, 3), 128, dtype=np.uint8)
        self.face = BoundingBox(10, 10, 80, 80)
        self.eyes = [EyeCandidate(box=BoundingBox(20, 30, 30, 12))]

    def test_face_and_eye_rectangles(self):
        out = eye_data_drawer.draw(self.image, self.face, self.eyes, [], None, self.config)

        self.assertIs(out, self.image)
        self.assertEqual(out[10, 10].tolist(), [255, 255, 255])
        self.assertEqual(out[89, 89].tolist(), [255, 255, 255])
        self.assertEqual(out[90, 90].tolist(), [128, 128, 128])
        self.assertEqual(out[30, 20].tolist(), [0, 0, 0])

    def test_pupil_circle_at_absolute_center(self):
        out = eye_data_drawer.draw(self.image, self.face, self.eyes, pupils(3), 9, self.config)

        # pupil center (10, 5) inside the eye box at (20, 30)
        self.assertEqual(out[35, 30 + 9].tolist(), [255, 255, 255])
        self.assertEqual(out[35, 30].tolist(), [128, 128, 128])

    def test_pupil_circle_clipped_to_eye_box(self):
        eyes = [EyeCandidate(box=BoundingBox(40, 40, 20, 10))]
        out = eye_data_drawer.draw(self.image, self.face, eyes, pupils(3), 12, self.config)

        # circle reaches x=62 at the pupil's row, two pixels right of the box
        self.assertEqual(out[45, 62].tolist(), [128, 128, 128])
        self.assertEqual(out[45, 38].tolist(), [128, 128, 128])
        self.assertEqual(out[45, 50].tolist(), [128, 128, 128])
        # the part inside the box is still drawn
        self.assertTrue((out[40:50, 40:60] == 255).any())

    def test_no_radius_draws_no_circles(self):
        out = eye_data_drawer.draw(self.image, self.face, self.eyes, pupils(3), None, self.config)
        self.assertEqual(out[35, 39].tolist(), [128, 128, 128])

    def test_draw_contours_converts_gray(self):
        region = np.full((40, 40), 100, dtype=np.uint8)
        contour = np.array([[[5, 5]], [[30, 5]], [[30, 20]], [[5, 20]]], dtype=np.int32)
        eyes = [EyeCandidate(box=BoundingBox(5, 5, 26, 16), contour=contour),
                EyeCandidate(box=BoundingBox(5, 5, 26, 16), mirrored=True)]

        canvas = eye_data_drawer.draw_contours(region, eyes)

        self.assertEqual(canvas.shape, (40, 40, 3))
        self.assertEqual(canvas[5, 15].tolist(), [0, 255, 0])
        self.assertEqual(region[5, 15], 100)


if __name__ == "__main__":
    unittest.main()
