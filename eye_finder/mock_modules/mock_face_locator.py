"""Mock face locator for testing purposes."""

import numpy as np
from numpy.typing import NDArray

from eye_finder.eye_detection.detection_types import BoundingBox
from eye_finder.errors import FaceNotFound
from eye_finder.ports.interfaces import IFaceLocator
from eye_finder.utilities.logger_setup import setup_logger


class MockFaceLocator(IFaceLocator):
    """Returns preset face boxes instead of running a cascade."""

    def __init__(
        self,
        faces: list[BoundingBox] | None = None,
        faceless: set[int] | None = None,
    ) -> None:
        self.logger = setup_logger("MockFaceLocator")

        self.faces = list(faces or [])
        # image indices for which no face is reported
        self.faceless = set(faceless or ())
        self.calls = 0


    def locate(self, image: NDArray[np.uint8]) -> list[BoundingBox]:
        """Preset boxes, dropping any that do not fit inside the image."""
        self.calls += 1
        height, width = image.shape[:2]
        return [f for f in self.faces if f.right <= width and f.bottom <= height]


    def primary_face(
        self,
        image: NDArray[np.uint8],
        index: int | None = None,
    ) -> BoundingBox:
        if index is not None and index in self.faceless:
            self.calls += 1
            raise FaceNotFound(index)
        faces = self.locate(image)
        if not faces:
            raise FaceNotFound(index)
        return faces[0]
