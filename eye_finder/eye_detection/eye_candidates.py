"""Eye candidate detection by iterative contour-area relaxation."""

import cv2
import numpy as np
from numpy.typing import NDArray

from eye_finder.config_service.config import Config
from eye_finder.eye_detection.detection_types import BoundingBox, EyeCandidate
from eye_finder.utilities.logger_setup import setup_logger


class EyeCandidateDetector:
    """
    Finds eye-shaped dark blobs in a binarized face region.

    The minimum contour area starts high and is relaxed pass by pass, so the
    same rules work across image resolutions and subject distances. Only the
    candidates of the first pass that yields any are returned.
    """

    def __init__(self, config: Config) -> None:
        self.logger = setup_logger("EyeCandidates")
        self.cfg = config.eye_detection


    def detect(
        self,
        gray: NDArray[np.uint8],
        mask: NDArray[np.uint8],
        face: BoundingBox,
    ) -> list[EyeCandidate]:
        """
        Arguments:
            gray: grayscale blurred face crop, used for the brightness check.
            mask: binarized face crop, dark features as foreground.
            face: the face box in full-image coordinates.
        """
        contours, _ = cv2.findContours(mask, cv2.RETR_LIST, cv2.CHAIN_APPROX_SIMPLE)

        threshold = self.cfg.start_area
        while True:
            eyes = [
                eye for eye in (self._accept(c, threshold, gray, face) for c in contours)
                if eye is not None
            ]
            threshold -= self.cfg.area_step
            if eyes or threshold <= 0:
                break

        if eyes:
            self.logger.debug(
                "%d eye candidate(s) at area threshold %.0f",
                len(eyes), threshold + self.cfg.area_step,
            )
        else:
            self.logger.debug("No eye candidates among %d contours", len(contours))
        return eyes


    def _accept(
        self,
        contour: NDArray[np.int32],
        threshold: float,
        gray: NDArray[np.uint8],
        face: BoundingBox,
    ) -> EyeCandidate | None:
        """Return a candidate if the contour passes every rule, else None."""
        area = cv2.contourArea(contour)
        x, y, width, height = cv2.boundingRect(contour)

        if area < threshold:
            return None

        box = BoundingBox(x, y, width, height).offset(face.x, face.y)
        eye = EyeCandidate(box=box, contour=contour, area=area)

        # eyes are wider than tall
        if eye.aspect_ratio < self.cfg.min_aspect_ratio:
            return None
        # lenient, eyebrow shadow distorts the area
        if abs(1 - eye.ellipse_ratio) > self.cfg.max_ellipse_deviation:
            return None
        if width > face.width // self.cfg.face_width_divisor:
            return None
        if not self._has_highlight(gray[y:y + height, x:x + width]):
            return None
        return eye


    def _has_highlight(self, region: NDArray[np.uint8]) -> bool:
        """Sclera/iris highlight: some pixels above the bright intensity."""
        if region.size == 0:
            return False
        bright = np.count_nonzero(region > self.cfg.bright_intensity)
        return bright / region.size > self.cfg.min_bright_fraction
