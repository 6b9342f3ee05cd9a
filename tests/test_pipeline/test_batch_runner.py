import tempfile
import unittest
from pathlib import Path

import cv2

from eye_finder.config_service.config import Config
from eye_finder.errors import FaceModelUnavailable, ImageUnreadable
from eye_finder.eye_detection.face_locator import FaceLocator
from eye_finder.mock_modules.mock_face_locator import MockFaceLocator
from eye_finder.pipeline.batch_runner import BatchRunner, read_image
from tests.synthetic import FACE_BOX, make_face_image


class TestBatchRunner(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        root = Path(self._tmp.name)
        self.input_dir = root / "input"
        self.output_dir = root / "output"
        self.input_dir.mkdir()

        # 0 and 1 are valid, 2 is missing, 3 is not an image
        for index in (0, 1):
            cv2.imwrite(str(self.input_dir / f"{index}.png"), make_face_image())
        (self.input_dir / "3.png").write_bytes(b"not an image")

        self.config = Config()
        self.config.set("batch.input_dir", str(self.input_dir))
        self.config.set("batch.output_dir", str(self.output_dir))
        self.config.set("batch.extension", ".png")
        self.config.set("batch.image_count", 4)

    def tearDown(self):
        self._tmp.cleanup()

    def runner(self, faceless=()):
        return BatchRunner(self.config, MockFaceLocator(faces=[FACE_BOX], faceless=set(faceless)))

    def test_paths_and_indices(self):
        self.config.set("batch.start_index", 5)
        runner = self.runner()

        self.assertEqual(list(runner.indices()), [5, 6, 7, 8])
        self.assertEqual(runner.input_path(5), self.input_dir / "5.png")
        self.assertEqual(runner.output_path(5), self.output_dir / "5.png")

    def test_unreadable_images_skipped(self):
        report = self.runner().run()

        self.assertEqual(report.attempted, 4)
        self.assertEqual(report.processed, [0, 1])
        self.assertEqual(report.unreadable, [2, 3])
        self.assertFalse(report.aborted)
        self.assertTrue((self.output_dir / "0.png").exists())
        self.assertTrue((self.output_dir / "1.png").exists())
        self.assertFalse((self.output_dir / "2.png").exists())
        self.assertFalse((self.output_dir / "3.png").exists())

    def test_written_image_is_annotated(self):
        self.config.set("batch.image_count", 1)
        self.runner().run()

        written = cv2.imread(str(self.output_dir / "0.png"))
        self.assertEqual(written[FACE_BOX.y, FACE_BOX.x].tolist(), [255, 255, 255])

    def test_missing_face_aborts_by_default(self):
        report = self.runner(faceless={0}).run()

        self.assertTrue(report.aborted)
        self.assertEqual(report.attempted, 1)
        self.assertEqual(report.faceless, [0])
        self.assertEqual(report.processed, [])
        self.assertFalse((self.output_dir / "1.png").exists())

    def test_missing_face_skipped_when_configured(self):
        self.config.set("batch.abort_on_missing_face", False)
        report = self.runner(faceless={0}).run()

        self.assertFalse(report.aborted)
        self.assertEqual(report.faceless, [0])
        self.assertEqual(report.processed, [1])
        self.assertFalse((self.output_dir / "0.png").exists())
        self.assertTrue((self.output_dir / "1.png").exists())

    def test_timing_totals(self):
        report = self.runner().run()

        self.assertGreater(report.total_time_s, 0.0)
        self.assertAlmostEqual(report.average_time_s, report.total_time_s / 4)

    def test_missing_model_propagates(self):
        runner = BatchRunner(self.config, FaceLocator("no_such_cascade_model.xml"))
        with self.assertRaises(FaceModelUnavailable):
            runner.run()

    def test_empty_batch(self):
        self.config.set("batch.image_count", 0)
        report = self.runner().run()

        self.assertEqual(report.attempted, 0)
        self.assertEqual(report.average_time_s, 0.0)
        self.assertTrue(self.output_dir.is_dir())


class TestReadImage(unittest.TestCase):

    def test_missing_file(self):
        with self.assertRaises(ImageUnreadable) as ctx:
            read_image(Path("does/not/exist.png"))
        self.assertIn("exist.png", ctx.exception.path)


if __name__ == "__main__":
    unittest.main()
