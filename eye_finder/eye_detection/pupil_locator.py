"""Pupil location inside resolved eye regions."""

from typing import Optional

import cv2
import numpy as np
from numpy.typing import NDArray

from eye_finder.config_service.config import Config
from eye_finder.eye_detection.detection_types import EyeCandidate, PupilCandidate
from eye_finder.ports.interfaces import IDebugViewer
from eye_finder.utilities.logger_setup import setup_logger


class PupilLocator:
    """
    Picks the pupil as the largest bright blob of the inverted eye crop that
    does not merely trace the whole eye box.
    """

    def __init__(
        self,
        config: Config,
        viewer: Optional[IDebugViewer] = None,
    ) -> None:
        self.logger = setup_logger("PupilLocator")
        self.cfg = config.pupil
        self.viewer = viewer

        k = self.cfg.erosion_kernel
        self.kernel = cv2.getStructuringElement(cv2.MORPH_RECT, (k, k))


    def bright_mask(
        self,
        eye_zone: NDArray[np.uint8],
        name: str = "eye",
    ) -> NDArray[np.uint8]:
        """Threshold the inverted crop, eroding it when too much is bright."""
        inverted = cv2.bitwise_not(eye_zone)
        if inverted.ndim == 3:
            gray = cv2.cvtColor(inverted, cv2.COLOR_BGR2GRAY)
        else:
            gray = inverted
        _, mask = cv2.threshold(gray, self.cfg.bright_threshold, 255, cv2.THRESH_BINARY)

        set_pixels = cv2.countNonZero(mask)
        if set_pixels > self.cfg.erosion_trigger:
            # glare or skin, shrink toward the bright core
            mask = cv2.erode(mask, self.kernel, iterations=self.cfg.erosion_iterations)
            self.logger.debug("Eroded pupil mask (%d bright pixels)", set_pixels)

        if self.viewer is not None:
            self.viewer.show(f"{name}_inverted", inverted)
        return mask


    def select_contour(
        self,
        mask: NDArray[np.uint8],
        eye_area: int,
    ) -> Optional[NDArray[np.int32]]:
        """Largest contour whose area stays below max_area_ratio of the eye box."""
        contours, _ = cv2.findContours(mask, cv2.RETR_TREE, cv2.CHAIN_APPROX_SIMPLE)
        for contour in sorted(contours, key=cv2.contourArea, reverse=True):
            if cv2.contourArea(contour) / eye_area < self.cfg.max_area_ratio:
                return contour
        return None


    def locate(
        self,
        image: NDArray[np.uint8],
        eye: EyeCandidate,
        eye_index: int,
    ) -> Optional[PupilCandidate]:
        """Find the pupil of one eye; None when no contour qualifies."""
        eye_zone = eye.box.crop(image)
        if eye_zone.size == 0:
            return None

        mask = self.bright_mask(eye_zone, name=str(eye_index))
        if self.viewer is not None:
            self.viewer.show(f"{eye_index}", mask)

        contour = self.select_contour(mask, eye.box.area)
        if contour is None:
            self.logger.debug("No pupil contour in eye %d", eye_index)
            return None

        (cx, cy), radius = cv2.minEnclosingCircle(contour)
        return PupilCandidate(center=(float(cx), float(cy)), radius=float(radius), eye_index=eye_index)


    def locate_all(
        self,
        image: NDArray[np.uint8],
        eyes: list[EyeCandidate],
    ) -> list[PupilCandidate]:
        """Pupils over all eyes, in eye order."""
        pupils = []
        for i, eye in enumerate(eyes):
            pupil = self.locate(image, eye, i)
            if pupil is not None:
                pupils.append(pupil)
        return pupils
