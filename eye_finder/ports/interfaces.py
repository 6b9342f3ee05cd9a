"""Global interfaces definition."""

from abc import ABC, abstractmethod

import numpy as np
from numpy.typing import NDArray

from eye_finder.eye_detection.detection_types import BoundingBox


class IFaceLocator(ABC):
    """Face locator interface."""

    @abstractmethod
    def locate(self, image: NDArray[np.uint8]) -> list[BoundingBox]:
        """Return every face box found in the image."""

    @abstractmethod
    def primary_face(
        self,
        image: NDArray[np.uint8],
        index: int | None = None,
    ) -> BoundingBox:
        """Return the face to analyse; raise FaceNotFound if there is none."""


class IDebugViewer(ABC):
    """Step-by-step debug display interface."""

    @abstractmethod
    def show(self, name: str, image: NDArray[np.uint8]) -> None:
        """Display an intermediate image under a window name."""

    @abstractmethod
    def wait(self) -> None:
        """Block until the user moves on to the next image."""
