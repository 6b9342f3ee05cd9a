"""Step-by-step debug display for the pipeline."""

import cv2
import numpy as np
from numpy.typing import NDArray

from eye_finder.ports.interfaces import IDebugViewer
from eye_finder.utilities.logger_setup import setup_logger


class CvDebugViewer(IDebugViewer):
    """Shows intermediate images in OpenCV windows, one key press per image."""

    def __init__(self) -> None:
        self.logger = setup_logger("DebugViewer")
        self.shown: list[str] = []


    def show(self, name: str, image: NDArray[np.uint8]) -> None:
        cv2.imshow(name, image)
        self.shown.append(name)


    def wait(self) -> None:
        """Wait for any key, then close this image's windows."""
        if not self.shown:
            return
        self.logger.debug("Showing %d debug window(s), press any key", len(self.shown))
        cv2.waitKey(0)
        cv2.destroyAllWindows()
        self.shown.clear()
