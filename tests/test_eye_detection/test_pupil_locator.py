import unittest

import cv2
import numpy as np

from eye_finder.config_service.config import Config
from eye_finder.eye_detection.detection_types import BoundingBox, EyeCandidate
from eye_finder.eye_detection.pupil_locator import PupilLocator
from eye_finder.ports.interfaces import IDebugViewer


class RecordingViewer(IDebugViewer):
    def __init__(self):
        self.names = []
        self.waits = 0

    def show(self, name, image):
        self.names.append(name)

    def wait(self):
        self.waits += 1


def eye_image(shape=(60, 100, 3), value=150, disk=None):
    image = np.full(shape, value, dtype=np.uint8)
    if disk is not None:
        center, radius = disk
        color = 0 if len(shape) == 2 else (0, 0, 0)
        cv2.circle(image, center, radius, color, -1)
    return image


class TestPupilLocator(unittest.TestCase):

    def setUp(self):
        self.config = Config()
        self.locator = PupilLocator(self.config)

    def test_dark_disk_found(self):
        image = eye_image(disk=((50, 30), 5))
        eye = EyeCandidate(box=BoundingBox(20, 15, 60, 30))

        pupil = self.locator.locate(image, eye, 0)

        self.assertIsNotNone(pupil)
        self.assertEqual(pupil.eye_index, 0)
        self.assertAlmostEqual(pupil.center[0], 30, delta=1)
        self.assertAlmostEqual(pupil.center[1], 15, delta=1)
        self.assertTrue(4 <= pupil.radius <= 6.5)
        self.assertEqual(pupil.absolute_center([eye]),
                         (20 + pupil.center[0], 15 + pupil.center[1]))

    def test_grayscale_input(self):
        image = eye_image(shape=(60, 100), disk=((50, 30), 5))
        pupil = self.locator.locate(image, EyeCandidate(box=BoundingBox(20, 15, 60, 30)), 1)

        self.assertIsNotNone(pupil)
        self.assertEqual(pupil.eye_index, 1)

    def test_box_filling_contour_rejected(self):
        # Everything is dark, so the only contour traces the whole eye box
        image = np.zeros((60, 80, 3), dtype=np.uint8)
        eye = EyeCandidate(box=BoundingBox(10, 10, 40, 20))

        self.assertIsNone(self.locator.locate(image, eye, 0))

    def test_no_dark_pixels_gives_none(self):
        image = eye_image()
        self.assertIsNone(self.locator.locate(image, EyeCandidate(box=BoundingBox(20, 15, 60, 30)), 0))

    def test_large_bright_area_is_eroded(self):
        image = eye_image(shape=(120, 200, 3), disk=((100, 60), 22))
        eye = EyeCandidate(box=BoundingBox(0, 0, 200, 120))

        eroded = self.locator.locate(image, eye, 0)

        self.config.set("pupil.erosion_trigger", 100000)
        plain = PupilLocator(self.config).locate(image, eye, 0)

        self.assertLess(eroded.radius, plain.radius - 2)

    def test_select_contour_skips_box_sized_contours(self):
        mask = np.zeros((50, 100), dtype=np.uint8)
        cv2.rectangle(mask, (0, 0), (99, 49), 255, 2)
        cv2.circle(mask, (50, 25), 5, 255, -1)

        contour = self.locator.select_contour(mask, mask.size)

        self.assertIsNotNone(contour)
        x, y, w, h = cv2.boundingRect(contour)
        self.assertLessEqual(w, 12)
        self.assertLessEqual(h, 12)

    def test_select_contour_area_ratio_boundary(self):
        mask = np.zeros((60, 80), dtype=np.uint8)
        cv2.rectangle(mask, (10, 10), (50, 30), 255, -1)  # contour area 40 * 20 = 800

        self.assertIsNone(self.locator.select_contour(mask, 1000))
        self.assertIsNotNone(self.locator.select_contour(mask, 1001))

    def test_locate_all_keeps_eye_order(self):
        image = eye_image(shape=(60, 200, 3), disk=((150, 30), 5))
        eyes = [
            EyeCandidate(box=BoundingBox(10, 15, 60, 30)),   # no pupil
            EyeCandidate(box=BoundingBox(120, 15, 60, 30)),
        ]

        pupils = self.locator.locate_all(image, eyes)

        self.assertEqual(len(pupils), 1)
        self.assertEqual(pupils[0].eye_index, 1)

    def test_viewer_receives_intermediate_images(self):
        viewer = RecordingViewer()
        locator = PupilLocator(self.config, viewer=viewer)
        locator.locate(eye_image(disk=((50, 30), 5)), EyeCandidate(box=BoundingBox(20, 15, 60, 30)), 0)

        self.assertEqual(viewer.names, ["0_inverted", "0"])


if __name__ == "__main__":
    unittest.main()
