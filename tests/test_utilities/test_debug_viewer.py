import unittest
from unittest.mock import patch

import numpy as np

from eye_finder.utilities.debug_viewer import CvDebugViewer


class TestCvDebugViewer(unittest.TestCase):

    @patch("eye_finder.utilities.debug_viewer.cv2")
    def test_show_then_wait_closes_windows(self, mock_cv2):
        viewer = CvDebugViewer()
        image = np.zeros((10, 10), dtype=np.uint8)

        viewer.show("face_threshold", image)
        viewer.show("result", image)
        self.assertEqual(viewer.shown, ["face_threshold", "result"])
        self.assertEqual(mock_cv2.imshow.call_count, 2)

        viewer.wait()
        mock_cv2.waitKey.assert_called_once_with(0)
        mock_cv2.destroyAllWindows.assert_called_once()
        self.assertEqual(viewer.shown, [])

    @patch("eye_finder.utilities.debug_viewer.cv2")
    def test_wait_without_windows_does_not_block(self, mock_cv2):
        CvDebugViewer().wait()
        mock_cv2.waitKey.assert_not_called()


if __name__ == "__main__":
    unittest.main()
