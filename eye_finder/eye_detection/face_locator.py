"""Haar cascade face locator and face-region preparation."""

import os

import cv2
import numpy as np
from numpy.typing import NDArray

from eye_finder.config_service.config import Config
from eye_finder.eye_detection.detection_types import BoundingBox
from eye_finder.errors import FaceModelUnavailable, FaceNotFound
from eye_finder.ports.interfaces import IFaceLocator
from eye_finder.utilities.logger_setup import setup_logger


def resolve_model_path(model_path: str) -> str:
    """Fall back to the cascade bundled with OpenCV when the path does not exist."""
    if os.path.exists(model_path):
        return model_path
    bundled_dir = getattr(getattr(cv2, "data", None), "haarcascades", None)
    if bundled_dir:
        bundled = os.path.join(bundled_dir, os.path.basename(model_path))
        if os.path.exists(bundled):
            return bundled
    return model_path


class FaceLocator(IFaceLocator):
    """Wraps cv2.CascadeClassifier; the model is loaded once at construction."""

    def __init__(self, model_path: str) -> None:
        self.logger = setup_logger("FaceLocator")

        self.model_path = resolve_model_path(model_path)
        self._cascade = cv2.CascadeClassifier()

        # A missing model is only fatal once a detection needs it
        loaded = False
        try:
            loaded = self._cascade.load(self.model_path)
        except cv2.error as e:
            self.logger.warning("Cascade load raised: %s", e)

        self.loaded = bool(loaded) and not self._cascade.empty()
        if self.loaded:
            self.logger.info("Face model loaded from %s", self.model_path)
        else:
            self.logger.warning("Face model could not be loaded from %s", self.model_path)


    def locate(self, image: NDArray[np.uint8]) -> list[BoundingBox]:
        """Run the cascade on the color image."""
        if not self.loaded:
            raise FaceModelUnavailable(self.model_path)

        faces = self._cascade.detectMultiScale(image)
        return [BoundingBox.from_rect(rect) for rect in faces]


    def primary_face(
        self,
        image: NDArray[np.uint8],
        index: int | None = None,
    ) -> BoundingBox:
        """First detected face; one face per image is assumed."""
        faces = self.locate(image)
        if not faces:
            raise FaceNotFound(index)
        if len(faces) > 1:
            self.logger.debug("%d faces found, using the first", len(faces))
        return faces[0]


def prepare_face_region(
    image: NDArray[np.uint8],
    face: BoundingBox,
    config: Config,
) -> tuple[NDArray[np.uint8], NDArray[np.uint8]]:
    """
    Grayscale, blur and binarize the face crop.

    Returns (gray_blurred, mask) where dark features are foreground (255).
    """
    cfg = config.face
    region = face.crop(image)
    if region.ndim == 3:
        gray = cv2.cvtColor(region, cv2.COLOR_BGR2GRAY)
    else:
        gray = region.copy()

    k = cfg.blur_kernel
    gray = cv2.GaussianBlur(gray, (k, k), cfg.blur_sigma, sigmaY=cfg.blur_sigma)
    _, mask = cv2.threshold(gray, cfg.binary_threshold, 255, cv2.THRESH_BINARY_INV)
    return gray, mask
